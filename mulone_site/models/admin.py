"""
Admin Models

Admin users, the audit trail of admin actions, and key/value settings.
"""

from flask_login import UserMixin

from mulone_site.extensions import db


class AdminUser(UserMixin, db.Model):
    """Panel user; emails are stored lower-cased"""
    __tablename__ = 'admin_users'

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(db.String(50), nullable=False, default='admin')
    is_active = db.Column(db.Boolean, nullable=False, default=True)
    created_at = db.Column(db.DateTime, default=db.func.current_timestamp())
    updated_at = db.Column(db.DateTime, default=db.func.current_timestamp(),
                           onupdate=db.func.current_timestamp())
    last_login_at = db.Column(db.DateTime)

    def __repr__(self):
        return f'<AdminUser {self.email}>'


class AdminAuditLog(db.Model):
    """Record of a mutation performed from the admin panel"""
    __tablename__ = 'admin_audit_logs'

    id = db.Column(db.Integer, primary_key=True)
    actor_email = db.Column(db.String(255), nullable=False)
    action = db.Column(db.String(50), nullable=False)
    entity = db.Column(db.String(100), nullable=False)
    entity_id = db.Column(db.String(255))
    details = db.Column(db.JSON, nullable=False, default=dict)
    created_at = db.Column(db.DateTime, default=db.func.current_timestamp(), index=True)

    def __repr__(self):
        return f'<AdminAuditLog {self.action} {self.entity}:{self.entity_id}>'


class AppSetting(db.Model):
    """Application-wide JSON settings keyed by name (branding, system)"""
    __tablename__ = 'app_settings'

    key = db.Column(db.String(100), primary_key=True)
    value = db.Column(db.JSON, nullable=False, default=dict)
    updated_at = db.Column(db.DateTime, default=db.func.current_timestamp(),
                           onupdate=db.func.current_timestamp())

    def __repr__(self):
        return f'<AppSetting {self.key}>'
