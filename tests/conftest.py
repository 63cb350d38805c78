import pytest

from mulone_site import create_app
from mulone_site.auth import sync_admin_user
from mulone_site.config import TestConfig
from mulone_site.extensions import db

ADMIN_EMAIL = 'admin@mulone.tech'
ADMIN_PASSWORD = 'correct-horse'


@pytest.fixture()
def app(tmp_path):
    app = create_app(TestConfig)
    app.config['UPLOAD_FOLDER'] = str(tmp_path / 'uploads')
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def admin_user(app):
    with app.app_context():
        sync_admin_user(ADMIN_EMAIL, ADMIN_PASSWORD)
    return ADMIN_EMAIL


@pytest.fixture()
def admin_client(client, admin_user):
    r = client.post('/admin/login', data={'email': ADMIN_EMAIL, 'password': ADMIN_PASSWORD})
    assert r.status_code == 303
    return client
