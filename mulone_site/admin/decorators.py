"""
Admin Decorators
"""

from functools import wraps

from mulone_site.queries import is_database_configured
from mulone_site.services.toast import redirect_with_toast

DATABASE_MISSING_MESSAGE = 'Database is not configured.'


def database_required(endpoint):
    """Redirect back to `endpoint` with an error toast when no store is configured.

    Mutation handlers are useless without DATABASE_URL; stack this under
    login_required so unauthenticated requests still go to the login page.
    """
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            if not is_database_configured():
                return redirect_with_toast(endpoint, DATABASE_MISSING_MESSAGE, 'error')
            return f(*args, **kwargs)
        return wrapper
    return decorator
