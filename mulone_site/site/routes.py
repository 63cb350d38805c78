"""
Site Routes

Landing page, contact endpoint and local uploads.
"""

import logging

from flask import current_app, jsonify, render_template, request, send_from_directory
from sqlalchemy.exc import SQLAlchemyError

from mulone_site.content import load_home_content
from mulone_site.content.defaults import CONTACT_NEEDS
from mulone_site.queries import is_database_configured
from mulone_site.extensions import db
from mulone_site.services import send_contact_notification
from mulone_site.site import site_bp
from mulone_site.site.services import (
    ContactValidationError, clean_contact_payload, store_contact_message,
)

logger = logging.getLogger(__name__)


@site_bp.route('/')
def index():
    """Landing page"""
    content = load_home_content()
    return render_template('site/index.html', contact_needs=CONTACT_NEEDS, **content)


@site_bp.route('/uploads/<path:filename>')
def uploaded_file(filename):
    """Serve images stored in the local upload folder"""
    return send_from_directory(current_app.config['UPLOAD_FOLDER'], filename)


@site_bp.route('/api/contact', methods=['POST'])
def api_contact():
    """Store a contact message and notify the agency inbox"""
    try:
        data = clean_contact_payload(request.get_json(silent=True))
    except ContactValidationError as exc:
        return jsonify({'error': str(exc)}), 400

    if not is_database_configured():
        return jsonify({'error': 'Database is not configured on the server.'}), 500

    try:
        store_contact_message(data)
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.error('Could not store contact message: %s', exc)
        return jsonify({'error': 'Error sending message'}), 500

    send_contact_notification(data['name'], data['email'], data['subject'],
                              data['message'], data['need'])
    return jsonify({'success': True})
