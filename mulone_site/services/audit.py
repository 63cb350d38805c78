"""
Audit Log Service

Audit records are best effort: a failed write is logged and the calling
action carries on.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError

from mulone_site.extensions import db
from mulone_site.models import AdminAuditLog

logger = logging.getLogger(__name__)


def write_audit_log(actor_email, action, entity, entity_id=None, details=None):
    try:
        db.session.add(AdminAuditLog(
            actor_email=actor_email,
            action=action,
            entity=entity,
            entity_id=str(entity_id) if entity_id is not None else None,
            details=details or {},
        ))
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.warning('Could not write audit log %s %s: %s', action, entity, exc)


def recent_audit_logs(limit=8):
    return AdminAuditLog.query.order_by(
        AdminAuditLog.created_at.desc(), AdminAuditLog.id.desc()
    ).limit(limit).all()
