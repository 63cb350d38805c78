"""
Site Blueprint

Public landing page, contact endpoint and locally stored uploads.
"""

from flask import Blueprint

site_bp = Blueprint('site', __name__)

from mulone_site.site import routes  # noqa: E402, F401
