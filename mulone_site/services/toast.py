"""
Toast redirects

A toast is a one-off notice carried in the redirect URL as
``?toast=<message>&toastType=<success|error|info>``.
"""

from flask import redirect, url_for

TOAST_TYPES = ('success', 'error', 'info')


def build_toast_url(endpoint, message, toast_type='success', **values):
    if toast_type not in TOAST_TYPES:
        toast_type = 'success'
    return url_for(endpoint, toast=message, toastType=toast_type, **values)


def redirect_with_toast(endpoint, message, toast_type='success', **values):
    # 303 so browsers follow a POST with a GET
    return redirect(build_toast_url(endpoint, message, toast_type, **values), code=303)


def toast_from_args(args):
    """Read the toast back from request args for templates."""
    message = args.get('toast')
    if not message:
        return None
    toast_type = args.get('toastType')
    if toast_type not in TOAST_TYPES:
        toast_type = 'success'
    return {'message': message, 'type': toast_type}
