"""
Query/connection layer

The engine and its pool are created lazily by Flask-SQLAlchemy on first use
and kept for the life of the process.
"""

from flask import current_app
from sqlalchemy import text

from mulone_site.exceptions import DatabaseNotConfigured
from mulone_site.extensions import db


def is_database_configured():
    """Return True when a connection string is configured."""
    return bool(current_app.config.get('DATABASE_URL'))


def db_query(statement, params=None):
    """Run a parameterized SQL statement and return the result.

    Args:
        statement: SQL text using ``:name`` placeholders
        params: Mapping of placeholder values

    Raises:
        DatabaseNotConfigured: if DATABASE_URL is not set
    """
    if not is_database_configured():
        raise DatabaseNotConfigured()
    return db.session.execute(text(statement), params or {})


# Tables that may be counted through count_rows()
COUNTABLE_TABLES = frozenset({
    'admin_users', 'services', 'projects', 'messages', 'testimonials',
    'app_settings', 'admin_audit_logs',
})


def count_rows(table, where=None, params=None):
    """Count rows in one of the known tables."""
    if table not in COUNTABLE_TABLES:
        raise ValueError(f'Unknown table: {table}')
    statement = f'select count(*) from {table}'
    if where:
        statement += f' where {where}'
    return int(db_query(statement, params).scalar() or 0)
