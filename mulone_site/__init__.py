"""
Mulone Tech Website - Application Factory

This module provides the Flask application factory pattern for creating
and configuring the application instance.
"""

import logging

from flask import Flask, request
from sqlalchemy.exc import SQLAlchemyError

from mulone_site.config import Config
from mulone_site.extensions import db, login_manager

logger = logging.getLogger(__name__)


def create_app(config_class=Config):
    """Create and configure the Flask application.

    Args:
        config_class: Configuration class to use (default: Config)

    Returns:
        Configured Flask application instance
    """
    app = Flask(__name__)
    app.config.from_object(config_class)
    app.logger.setLevel(app.config.get('LOG_LEVEL', 'INFO'))
    logging.getLogger('mulone_site').setLevel(app.config.get('LOG_LEVEL', 'INFO'))

    # Initialize extensions
    db.init_app(app)
    login_manager.init_app(app)
    login_manager.login_view = 'admin.login'
    login_manager.login_message = None

    # Register blueprints
    from mulone_site.site import site_bp
    from mulone_site.admin import admin_bp

    app.register_blueprint(site_bp)
    app.register_blueprint(admin_bp, url_prefix='/admin')

    # The signed cookie is the whole session; there is no user_loader
    @login_manager.request_loader
    def load_admin_from_request(req):
        from mulone_site.auth import get_admin_session
        return get_admin_session()

    @app.context_processor
    def inject_layout_context():
        """Inject the toast and branding into every template."""
        from mulone_site.content import load_branding
        from mulone_site.services.toast import toast_from_args
        return dict(toast=toast_from_args(request.args), branding=load_branding())

    if app.config.get('AUTO_CREATE_TABLES') and app.config.get('DATABASE_URL'):
        with app.app_context():
            from mulone_site import models  # noqa: F401
            try:
                db.create_all()
            except SQLAlchemyError as exc:
                logger.warning('Could not create tables: %s', exc)

    return app
