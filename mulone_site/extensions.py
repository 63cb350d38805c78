"""
Flask Extensions

Admin identity comes from the signed session cookie; Flask-Login only
exposes it as `current_user` through a request loader.
"""

from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager

# Database instance
db = SQLAlchemy()

# Login manager wired to the admin session cookie
login_manager = LoginManager()
