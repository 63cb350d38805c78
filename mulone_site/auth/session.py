"""
Admin session cookie

The cookie carries ``{"email", "exp"}`` serialized as URL-safe base64 JSON
and signed with HMAC-SHA256 over ADMIN_SESSION_SECRET. A token is accepted
only while its signature verifies against the current secret and ``exp`` is
in the future. When a store is configured the referenced admin must also
still exist and be active.

Verification never raises: every failure is "no session".
"""

import hashlib
import logging
import time

from flask import after_this_request, current_app, g, has_request_context, request
from flask_login import UserMixin
from itsdangerous import BadData, URLSafeSerializer
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError

from mulone_site.queries import is_database_configured
from mulone_site.exceptions import AdminAuthNotConfigured
from mulone_site.extensions import db

logger = logging.getLogger(__name__)

ADMIN_COOKIE_NAME = 'mulone_admin_session'
SESSION_TTL_SECONDS = 60 * 60 * 12
MIN_SECRET_LENGTH = 16


class AdminSession(UserMixin):
    """Authenticated admin identity exposed as Flask-Login's current_user."""

    def __init__(self, email):
        self.email = email

    def get_id(self):
        return self.email

    def __repr__(self):
        return f'<AdminSession {self.email}>'


def get_session_secret():
    """Return the signing secret, or None when it is missing or too short."""
    secret = current_app.config.get('ADMIN_SESSION_SECRET') or ''
    if len(secret) < MIN_SECRET_LENGTH:
        return None
    return secret


def _serializer(secret):
    return URLSafeSerializer(secret, salt='admin-session',
                             signer_kwargs={'digest_method': hashlib.sha256})


def encode_token(payload, secret):
    return _serializer(secret).dumps(payload)


def decode_token(token, secret, now=None):
    """Return the payload of a valid, unexpired token or None."""
    try:
        payload = _serializer(secret).loads(token)
    except BadData:
        return None

    if not isinstance(payload, dict):
        return None
    email = payload.get('email')
    exp = payload.get('exp')
    if not email or not isinstance(email, str):
        return None
    if isinstance(exp, bool) or not isinstance(exp, int):
        return None
    if exp < int(now if now is not None else time.time()):
        return None
    return payload


def create_session(email):
    """Issue a session for `email` and set the cookie on the response.

    Raises:
        AdminAuthNotConfigured: if no usable signing secret is configured
    """
    secret = get_session_secret()
    if not secret:
        raise AdminAuthNotConfigured()

    payload = {'email': email, 'exp': int(time.time()) + SESSION_TTL_SECONDS}
    token = encode_token(payload, secret)
    secure = current_app.config.get('ADMIN_COOKIE_SECURE', False)

    @after_this_request
    def set_cookie(response):
        response.set_cookie(
            ADMIN_COOKIE_NAME, token,
            max_age=SESSION_TTL_SECONDS,
            httponly=True,
            secure=secure,
            samesite='Lax',
            path='/',
        )
        return response

    g.admin_session = AdminSession(email)
    return token


def clear_session():
    """Delete the session cookie on the current response."""
    if not has_request_context():
        return
    g.admin_session = None

    @after_this_request
    def delete_cookie(response):
        response.delete_cookie(ADMIN_COOKIE_NAME, path='/')
        return response


def verify_session(token):
    """Return an AdminSession for a valid token, otherwise None."""
    secret = get_session_secret()
    if not secret or not token:
        return None

    payload = decode_token(token, secret)
    if payload is None:
        return None

    if is_database_configured():
        from mulone_site.models import AdminUser

        try:
            user = AdminUser.query.filter(
                func.lower(AdminUser.email) == payload['email'].lower()
            ).first()
        except SQLAlchemyError as exc:
            db.session.rollback()
            logger.warning('Could not check admin session user: %s', exc)
            return None

        if user is None or not user.is_active:
            clear_session()
            return None

    return AdminSession(payload['email'])


def get_admin_session():
    """Verify the request's session cookie once per request."""
    if 'admin_session' not in g:
        g.admin_session = verify_session(request.cookies.get(ADMIN_COOKIE_NAME))
    return g.admin_session
