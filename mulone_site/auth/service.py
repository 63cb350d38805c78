"""
Admin credential checks and user provisioning
"""

import logging

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError

from mulone_site.auth.passwords import hash_password, verify_password
from mulone_site.auth.session import get_session_secret
from mulone_site.queries import is_database_configured
from mulone_site.extensions import db
from mulone_site.models import AdminUser

logger = logging.getLogger(__name__)


def find_admin_user(email):
    """Case-insensitive lookup of an admin user."""
    return AdminUser.query.filter(
        func.lower(AdminUser.email) == email.strip().lower()
    ).first()


def is_admin_auth_configured():
    """Store and secret are set, and at least one active admin exists."""
    if not is_database_configured() or not get_session_secret():
        return False
    try:
        return AdminUser.query.filter_by(is_active=True).first() is not None
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.warning('Could not check admin users: %s', exc)
        return False


def validate_credentials(email, password):
    """Return True only for an active user with a matching password.

    The result never tells which factor failed. A successful check records
    the login time.
    """
    if not is_database_configured() or not email or not password:
        return False

    try:
        user = find_admin_user(email)
        if user is None or not user.is_active:
            return False
        if not verify_password(password, user.password_hash):
            return False

        user.last_login_at = func.current_timestamp()
        db.session.commit()
        return True
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.warning('Credential check failed against the store: %s', exc)
        return False


def sync_admin_user(email, password, role='admin'):
    """Create or update an admin by email, activating it with a new password.

    Returns:
        The AdminUser row (committed)
    """
    email = email.strip().lower()
    user = find_admin_user(email)
    if user is None:
        user = AdminUser(email=email)
        db.session.add(user)
    user.password_hash = hash_password(password)
    user.role = role or 'admin'
    user.is_active = True
    user.updated_at = func.current_timestamp()
    db.session.commit()
    return user
