import time

import pytest

from mulone_site.auth import create_session, verify_session
from mulone_site.auth.session import (
    ADMIN_COOKIE_NAME, SESSION_TTL_SECONDS, decode_token, encode_token,
)
from mulone_site.exceptions import AdminAuthNotConfigured
from mulone_site.extensions import db
from mulone_site.models import AdminUser

SECRET = 'test-session-secret-0123456789'


def _payload(email='admin@mulone.tech', ttl=60):
    return {'email': email, 'exp': int(time.time()) + ttl}


def test_valid_token_round_trip():
    token = encode_token(_payload(), SECRET)
    assert decode_token(token, SECRET)['email'] == 'admin@mulone.tech'


def test_tampered_signature_rejected():
    token = encode_token(_payload(), SECRET)
    body, signature = token.rsplit('.', 1)
    flipped = ('A' if signature[0] != 'A' else 'B') + signature[1:]
    assert decode_token(f'{body}.{flipped}', SECRET) is None


def test_tampered_payload_rejected():
    token = encode_token(_payload(), SECRET)
    other = encode_token(_payload(email='intruder@example.com'), SECRET)
    forged = other.rsplit('.', 1)[0] + '.' + token.rsplit('.', 1)[1]
    assert decode_token(forged, SECRET) is None


def test_other_secret_rejected():
    token = encode_token(_payload(), SECRET)
    assert decode_token(token, 'another-secret-0123456789') is None


def test_expired_token_rejected():
    token = encode_token({'email': 'admin@mulone.tech', 'exp': 1000}, SECRET)
    assert decode_token(token, SECRET, now=999) is not None
    assert decode_token(token, SECRET, now=1001) is None


@pytest.mark.parametrize('payload', [
    {'email': 'admin@mulone.tech'},
    {'email': '', 'exp': 10 ** 12},
    {'email': 'admin@mulone.tech', 'exp': '9999999999'},
    ['admin@mulone.tech'],
])
def test_malformed_payload_rejected(payload):
    assert decode_token(encode_token(payload, SECRET), SECRET) is None


def test_garbage_token_rejected():
    assert decode_token('not-a-token', SECRET) is None


def test_create_session_sets_cookie(app):
    with app.test_request_context('/admin/login', method='POST'):
        token = create_session('admin@mulone.tech')
        response = app.process_response(app.response_class())

    cookie = response.headers['Set-Cookie']
    assert cookie.startswith(f'{ADMIN_COOKIE_NAME}={token}')
    assert 'HttpOnly' in cookie
    assert 'SameSite=Lax' in cookie
    assert f'Max-Age={SESSION_TTL_SECONDS}' in cookie
    assert 'Path=/' in cookie


def test_no_secret_no_session(app):
    with app.test_request_context('/admin/login', method='POST'):
        token = create_session('admin@mulone.tech')

    app.config['ADMIN_SESSION_SECRET'] = ''
    with app.test_request_context('/admin/login', method='POST'):
        with pytest.raises(AdminAuthNotConfigured):
            create_session('admin@mulone.tech')
        assert verify_session(token) is None


def test_short_secret_treated_as_missing(app):
    app.config['ADMIN_SESSION_SECRET'] = 'short'
    with app.test_request_context('/'):
        with pytest.raises(AdminAuthNotConfigured):
            create_session('admin@mulone.tech')


def test_verify_session_requires_active_user(app, admin_user):
    with app.test_request_context('/admin/'):
        token = create_session(admin_user)
        assert verify_session(token).email == admin_user

        user = AdminUser.query.filter_by(email=admin_user).first()
        user.is_active = False
        db.session.commit()
        assert verify_session(token) is None


def test_verify_session_unknown_user(app, admin_user):
    with app.test_request_context('/admin/'):
        token = create_session('ghost@mulone.tech')
        assert verify_session(token) is None
