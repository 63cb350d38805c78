"""
Admin authentication: signed session cookie and credential checks.
"""

from mulone_site.auth.passwords import hash_password, verify_password
from mulone_site.auth.session import (
    ADMIN_COOKIE_NAME, AdminSession, clear_session, create_session,
    get_admin_session, verify_session,
)
from mulone_site.auth.service import (
    is_admin_auth_configured, sync_admin_user, validate_credentials,
)

__all__ = [
    'ADMIN_COOKIE_NAME', 'AdminSession', 'clear_session', 'create_session',
    'get_admin_session', 'verify_session', 'hash_password', 'verify_password',
    'is_admin_auth_configured', 'sync_admin_user', 'validate_credentials',
]
