import hashlib

from mulone_site.auth import hash_password, sync_admin_user, validate_credentials, verify_password
from mulone_site.auth.passwords import to_werkzeug_hash
from mulone_site.auth.service import is_admin_auth_configured
from mulone_site.extensions import db
from mulone_site.models import AdminUser

from conftest import ADMIN_EMAIL, ADMIN_PASSWORD


def test_hash_password_verifies():
    stored = hash_password('s3cret')
    assert stored != 's3cret'
    assert verify_password('s3cret', stored)
    assert not verify_password('wrong', stored)


def test_colon_scrypt_hash_accepted():
    digest = hashlib.scrypt(b's3cret', salt=b'pepper', n=16384, r=8, p=1, dklen=64).hex()
    stored = f'scrypt:pepper:{digest}'
    assert verify_password('s3cret', stored)
    assert not verify_password('s3cre', stored)


def test_colon_scrypt_hash_rewritten_for_werkzeug():
    assert to_werkzeug_hash('scrypt:pepper:abc123') == 'scrypt:16384:8:1$pepper$abc123'
    assert to_werkzeug_hash('scrypt:pepper:') is None
    assert to_werkzeug_hash('scrypt:a:b:c') is None


def test_malformed_hashes_rejected():
    assert not verify_password('s3cret', '')
    assert not verify_password('s3cret', None)
    assert not verify_password('s3cret', 'scrypt:only-salt')
    assert not verify_password('s3cret', 'plain-text')


def test_validate_credentials(app, admin_user):
    with app.app_context():
        assert validate_credentials(ADMIN_EMAIL, ADMIN_PASSWORD)
        assert validate_credentials(ADMIN_EMAIL.upper(), ADMIN_PASSWORD)
        assert AdminUser.query.filter_by(email=ADMIN_EMAIL).first().last_login_at is not None


def test_wrong_password_rejected(app, admin_user):
    with app.app_context():
        assert not validate_credentials(ADMIN_EMAIL, 'wrong-password')
        assert not validate_credentials(ADMIN_EMAIL, '')


def test_wrong_email_rejected(app, admin_user):
    with app.app_context():
        assert not validate_credentials('someone@mulone.tech', ADMIN_PASSWORD)


def test_inactive_user_rejected(app, admin_user):
    with app.app_context():
        user = AdminUser.query.filter_by(email=ADMIN_EMAIL).first()
        user.is_active = False
        db.session.commit()
        assert not validate_credentials(ADMIN_EMAIL, ADMIN_PASSWORD)


def test_sync_admin_user_reactivates(app, admin_user):
    with app.app_context():
        user = AdminUser.query.filter_by(email=ADMIN_EMAIL).first()
        user.is_active = False
        db.session.commit()

        sync_admin_user(' Admin@Mulone.Tech ', 'new-password', 'editor')
        assert AdminUser.query.count() == 1
        user = AdminUser.query.filter_by(email=ADMIN_EMAIL).first()
        assert user.is_active
        assert user.role == 'editor'
        assert validate_credentials(ADMIN_EMAIL, 'new-password')
        assert not validate_credentials(ADMIN_EMAIL, ADMIN_PASSWORD)


def test_auth_configured_needs_active_admin(app):
    with app.app_context():
        assert not is_admin_auth_configured()
        sync_admin_user(ADMIN_EMAIL, ADMIN_PASSWORD)
        assert is_admin_auth_configured()
        app.config['ADMIN_SESSION_SECRET'] = ''
        assert not is_admin_auth_configured()
