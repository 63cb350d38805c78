"""
Configuration settings for the Mulone Tech website and admin panel
"""
import os


def _env_flag(name, default=False):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def _database_url():
    url = os.environ.get('DATABASE_URL', '').strip()
    # SQLAlchemy only accepts the postgresql:// scheme
    if url.startswith('postgres://'):
        url = 'postgresql://' + url[len('postgres://'):]
    return url


class Config:
    """Flask application configuration"""

    # Flask secret key (flash/session support, not the admin cookie)
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production-12345'

    # Database configuration
    basedir = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))
    DATABASE_URL = _database_url()
    DATABASE_SSL = _env_flag('DATABASE_SSL')
    # Flask-SQLAlchemy needs a URI even when no store is configured;
    # is_database_configured() looks at DATABASE_URL, not at this value.
    SQLALCHEMY_DATABASE_URI = DATABASE_URL or 'sqlite://'
    SQLALCHEMY_ENGINE_OPTIONS = {'pool_pre_ping': True}
    if DATABASE_SSL:
        SQLALCHEMY_ENGINE_OPTIONS['connect_args'] = {'sslmode': 'require'}
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    AUTO_CREATE_TABLES = _env_flag('AUTO_CREATE_TABLES', True)

    # Admin session cookie (signed, 12h lifetime)
    ADMIN_SESSION_SECRET = os.environ.get('ADMIN_SESSION_SECRET', '')
    ADMIN_COOKIE_SECURE = _env_flag('ADMIN_COOKIE_SECURE',
                                    os.environ.get('APP_ENV') == 'production')

    # Seed admin for scripts/db_setup.py
    ADMIN_EMAIL = os.environ.get('ADMIN_EMAIL', '')
    ADMIN_PASSWORD = os.environ.get('ADMIN_PASSWORD', '')

    # Contact notifications (optional)
    EMAIL_USER = os.environ.get('EMAIL_USER', '')
    EMAIL_PASS = os.environ.get('EMAIL_PASS', '')
    SMTP_HOST = os.environ.get('SMTP_HOST') or 'smtp.gmail.com'
    SMTP_PORT = int(os.environ.get('SMTP_PORT') or 465)

    # Uploads: Supabase Storage when configured, local folder otherwise
    SUPABASE_URL = os.environ.get('SUPABASE_URL', '')
    SUPABASE_SERVICE_ROLE_KEY = os.environ.get('SUPABASE_SERVICE_ROLE_KEY', '')
    SUPABASE_UPLOADS_BUCKET = (os.environ.get('SUPABASE_UPLOADS_BUCKET') or 'uploads').strip()
    UPLOAD_FOLDER = os.environ.get('UPLOAD_FOLDER') or os.path.join(basedir, 'instance', 'uploads')
    # Disable on read-only or ephemeral filesystems
    LOCAL_UPLOADS_ENABLED = _env_flag('LOCAL_UPLOADS_ENABLED', True)
    MAX_CONTENT_LENGTH = 16 * 1024 * 1024

    LOG_LEVEL = os.environ.get('LOG_LEVEL') or 'INFO'


class TestConfig(Config):
    """Testing configuration"""
    TESTING = True
    DATABASE_URL = 'sqlite://'
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_ENGINE_OPTIONS = {}
    AUTO_CREATE_TABLES = True
    ADMIN_SESSION_SECRET = 'test-session-secret-0123456789'
    ADMIN_COOKIE_SECURE = False
    EMAIL_USER = ''
    EMAIL_PASS = ''
    SUPABASE_URL = ''
    SUPABASE_SERVICE_ROLE_KEY = ''
    LOCAL_UPLOADS_ENABLED = True
