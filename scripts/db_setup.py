"""
Create the schema, provision the admin user and record the system setting.

Usage:
    DATABASE_URL=... ADMIN_EMAIL=... ADMIN_PASSWORD=... python scripts/db_setup.py
"""

import os
import sys

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from mulone_site import create_app  # noqa: E402
from mulone_site.auth import sync_admin_user  # noqa: E402
from mulone_site.extensions import db  # noqa: E402
from mulone_site.models import AppSetting  # noqa: E402

SCHEMA_VERSION = 1


def setup_database(app):
    """Create every table, sync the admin user and upsert the system setting."""
    with app.app_context():
        db.create_all()
        print('Tables created')

        email = app.config.get('ADMIN_EMAIL', '').strip()
        password = app.config.get('ADMIN_PASSWORD', '').strip()
        if email and password:
            sync_admin_user(email, password)
            print(f'Admin user {email.lower()} synced')
        else:
            print('ADMIN_EMAIL/ADMIN_PASSWORD not set, skipping admin user')

        setting = db.session.get(AppSetting, 'system')
        if setting is None:
            setting = AppSetting(key='system')
            db.session.add(setting)
        setting.value = {'provider': db.engine.dialect.name, 'version': SCHEMA_VERSION}
        db.session.commit()
        print('System setting saved')


def main():
    app = create_app()
    if not app.config.get('DATABASE_URL'):
        print('DATABASE_URL is not set', file=sys.stderr)
        return 1
    setup_database(app)
    return 0


if __name__ == '__main__':
    sys.exit(main())
