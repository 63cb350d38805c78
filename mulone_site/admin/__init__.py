"""
Admin Blueprint

Every admin path except the login page requires the session cookie;
views additionally verify it through Flask-Login's login_required.
"""

from flask import Blueprint, redirect, request, url_for

from mulone_site.auth import ADMIN_COOKIE_NAME, clear_session

admin_bp = Blueprint('admin', __name__)

LOGIN_ENDPOINT = 'admin.login'


@admin_bp.before_request
def guard_admin_routes():
    """Send cookie-less requests to the login page.

    Opening the login page with a cookie drops that cookie, so the login
    page always starts a fresh session.
    """
    has_cookie = bool(request.cookies.get(ADMIN_COOKIE_NAME))
    if request.endpoint == LOGIN_ENDPOINT:
        if has_cookie:
            clear_session()
        return None
    if not has_cookie:
        return redirect(url_for(LOGIN_ENDPOINT))
    return None


@admin_bp.after_request
def disable_caching(response):
    # Admin pages are always rendered from the store
    response.headers['Cache-Control'] = 'no-store'
    return response


from mulone_site.admin import routes, content  # noqa: E402, F401
