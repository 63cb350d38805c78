"""
Admin Routes

Login/logout, dashboard, admin users, contact messages and settings.
Content editing lives in admin/content.py.
"""

import logging

from flask import redirect, render_template, request, url_for
from flask_login import current_user, login_required
from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError

from mulone_site.admin import admin_bp
from mulone_site.admin.decorators import database_required
from mulone_site.admin.forms import to_int
from mulone_site.auth import (
    clear_session, create_session, is_admin_auth_configured, sync_admin_user,
    validate_credentials,
)
from mulone_site.content import load_branding
from mulone_site.content.defaults import DEFAULT_BRANDING
from mulone_site.extensions import db
from mulone_site.queries import count_rows, is_database_configured
from mulone_site.models import AdminUser, AppSetting, Message
from mulone_site.models.message import STATUS_REPLIED
from mulone_site.services import (
    delete_uploaded_asset, recent_audit_logs, redirect_with_toast, upload_image,
    write_audit_log,
)

logger = logging.getLogger(__name__)

# Tables the settings page reports as the content schema
CONTENT_TABLES = (
    'hero_content', 'hero_stats', 'services_section', 'projects_section',
    'testimonials_section', 'testimonials', 'contact_section', 'admin_profile',
)


# -----------------------------------------------------------------------------
# Authentication
# -----------------------------------------------------------------------------

@admin_bp.route('/login', methods=['GET', 'POST'])
def login():
    """Admin login with email and password."""
    if request.method == 'POST':
        email = request.form.get('email', '').strip().lower()
        password = request.form.get('password', '').strip()

        if not is_admin_auth_configured():
            error = 'Admin authentication is not configured.'
        elif not validate_credentials(email, password):
            error = 'Invalid email or password.'
        else:
            create_session(email)
            logger.info('Admin %s signed in', email)
            return redirect(url_for('admin.dashboard'), code=303)

        return render_template('admin/login.html', error=error, email=email)

    return render_template('admin/login.html')


@admin_bp.route('/logout', methods=['GET'])
@login_required
def logout():
    """Logout confirmation page."""
    return render_template('admin/logout.html')


@admin_bp.route('/logout', methods=['POST'])
def logout_submit():
    clear_session()
    return redirect(url_for('admin.login'), code=303)


# -----------------------------------------------------------------------------
# Dashboard
# -----------------------------------------------------------------------------

@admin_bp.route('/')
@login_required
def dashboard():
    """Counters and the latest audit entries."""
    has_database = is_database_configured()
    counters = {'messages': 0, 'pending': 0, 'projects': 0, 'services': 0}
    recent_logs = []

    if has_database:
        try:
            counters = {
                'messages': count_rows('messages'),
                'pending': count_rows('messages', 'status is null or status <> :replied',
                                      {'replied': STATUS_REPLIED}),
                'projects': count_rows('projects'),
                'services': count_rows('services'),
            }
        except SQLAlchemyError as exc:
            db.session.rollback()
            logger.warning('Dashboard counters unavailable: %s', exc)

        try:
            recent_logs = recent_audit_logs(8)
        except SQLAlchemyError as exc:
            db.session.rollback()
            logger.warning('Audit log unavailable: %s', exc)

    return render_template('admin/dashboard.html',
                           has_database=has_database,
                           counters=counters,
                           recent_logs=recent_logs)


# -----------------------------------------------------------------------------
# Admin users
# -----------------------------------------------------------------------------

@admin_bp.route('/users', methods=['GET'])
@login_required
def users():
    has_database = is_database_configured()
    user_list = []
    if has_database:
        try:
            user_list = AdminUser.query.order_by(AdminUser.id.asc()).all()
        except SQLAlchemyError as exc:
            db.session.rollback()
            logger.warning('Admin users unavailable: %s', exc)

    return render_template('admin/users.html', has_database=has_database, users=user_list)


@admin_bp.route('/users', methods=['POST'])
@login_required
@database_required('admin.users')
def save_user():
    """Create an admin user, or reset and re-activate an existing one."""
    email = request.form.get('email', '').strip().lower()
    password = request.form.get('password', '').strip()
    role = request.form.get('role', '').strip() or 'admin'

    if not email or not password:
        return redirect_with_toast('admin.users', 'Please fill in email and password.', 'error')

    try:
        sync_admin_user(email, password, role)
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.error('Could not save admin user %s: %s', email, exc)
        return redirect_with_toast('admin.users', 'Could not save user.', 'error')

    write_audit_log(current_user.email, 'upsert', 'admin_user', email,
                    {'role': role, 'activated': True})
    return redirect_with_toast('admin.users', 'User saved successfully.')


@admin_bp.route('/users/toggle', methods=['POST'])
@login_required
@database_required('admin.users')
def toggle_user():
    """Activate or deactivate an admin user."""
    user_id = to_int(request.form.get('user_id'))
    if user_id is None or user_id <= 0:
        return redirect_with_toast('admin.users', 'Invalid user.', 'error')

    try:
        user = db.session.get(AdminUser, user_id)
        if user is None:
            return redirect_with_toast('admin.users', 'User not found.', 'error')
        user.is_active = not user.is_active
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.error('Could not toggle admin user %s: %s', user_id, exc)
        return redirect_with_toast('admin.users', 'Could not update user.', 'error')

    write_audit_log(current_user.email, 'toggle_status', 'admin_user', user_id,
                    {'email': user.email, 'isActive': user.is_active})
    return redirect_with_toast('admin.users',
                               'User activated.' if user.is_active else 'User deactivated.')


# -----------------------------------------------------------------------------
# Contact messages
# -----------------------------------------------------------------------------

@admin_bp.route('/messages', methods=['GET'])
@login_required
def messages():
    has_database = is_database_configured()
    message_list = []
    if has_database:
        try:
            message_list = Message.query.order_by(Message.created_at.desc(), Message.id.desc()).all()
        except SQLAlchemyError as exc:
            db.session.rollback()
            logger.warning('Messages unavailable: %s', exc)

    return render_template('admin/messages.html', has_database=has_database,
                           messages=message_list)


@admin_bp.route('/messages/reply', methods=['POST'])
@login_required
@database_required('admin.messages')
def reply_message():
    """Store a reply and mark the message as replied."""
    message_id = to_int(request.form.get('message_id'))
    reply = request.form.get('reply', '')
    if message_id is None or message_id <= 0:
        return redirect_with_toast('admin.messages', 'Invalid message.', 'error')

    try:
        message = db.session.get(Message, message_id)
        if message is None:
            return redirect_with_toast('admin.messages', 'Message not found.', 'error')
        message.reply = reply
        message.status = STATUS_REPLIED
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.error('Could not save reply for message %s: %s', message_id, exc)
        return redirect_with_toast('admin.messages', 'Could not save reply.', 'error')

    write_audit_log(current_user.email, 'reply', 'message', message_id,
                    {'status': STATUS_REPLIED})
    return redirect_with_toast('admin.messages', 'Reply saved successfully.')


# -----------------------------------------------------------------------------
# Settings
# -----------------------------------------------------------------------------

@admin_bp.route('/settings', methods=['GET'])
@login_required
def settings():
    """System status and branding."""
    db_configured = is_database_configured()
    status = {
        'users': 0, 'services': 0, 'projects': 0, 'messages': 0,
        'settings': 0, 'content_tables_ready': False,
    }

    if db_configured:
        try:
            table_names = set(inspect(db.engine).get_table_names())
            status.update({
                'users': count_rows('admin_users'),
                'services': count_rows('services'),
                'projects': count_rows('projects'),
                'messages': count_rows('messages'),
                'settings': count_rows('app_settings'),
                'content_tables_ready': all(t in table_names for t in CONTENT_TABLES),
            })
        except SQLAlchemyError as exc:
            db.session.rollback()
            logger.warning('System status unavailable: %s', exc)

    return render_template('admin/settings.html',
                           auth_configured=is_admin_auth_configured(),
                           db_configured=db_configured,
                           status=status,
                           branding=load_branding())


@admin_bp.route('/settings/branding', methods=['POST'])
@login_required
@database_required('admin.settings')
def update_branding():
    brand_name = request.form.get('brand_name', '').strip() or DEFAULT_BRANDING['brandName']
    brand_tagline = request.form.get('brand_tagline', '').strip() or DEFAULT_BRANDING['brandTagline']
    logo_url_input = request.form.get('brand_logo_url', '').strip()
    uploaded_logo_url = upload_image(request.files.get('brand_logo_file'), 'branding', 'logo')

    value = {
        'brandName': brand_name,
        'brandTagline': brand_tagline,
        'brandLogoUrl': uploaded_logo_url or logo_url_input,
    }
    try:
        setting = db.session.get(AppSetting, 'branding')
        if setting is None:
            setting = AppSetting(key='branding')
            db.session.add(setting)
        setting.value = value
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.error('Could not save branding: %s', exc)
        delete_uploaded_asset(uploaded_logo_url)
        return redirect_with_toast('admin.settings', 'Could not update branding.', 'error')

    write_audit_log(current_user.email, 'update', 'branding', 'app_settings:branding',
                    {'brandName': brand_name, 'uploadedLogo': bool(uploaded_logo_url)})
    return redirect_with_toast('admin.settings', 'Branding updated successfully.')
