"""
Admin Content Routes

Landing page editing: profile, hero, statistics, services, projects,
testimonials and the contact block. Item tables start out showing the
default content; the first add or delete writes those defaults to the
store so ids stay stable.
"""

import logging

from flask import redirect, render_template, request, url_for
from flask_login import current_user, login_required
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError

from mulone_site.admin import admin_bp
from mulone_site.admin.decorators import database_required
from mulone_site.admin.forms import read_rows
from mulone_site.content import (
    load_contact, load_hero, load_hero_stats, load_or_default, load_profile,
    load_projects, load_section, load_services, load_testimonials,
)
from mulone_site.content.defaults import DEFAULT_CONTACT, DEFAULT_HERO, SERVICE_ICONS
from mulone_site.content.loaders import SINGLETON_ID, service_icon
from mulone_site.extensions import db
from mulone_site.queries import count_rows, is_database_configured
from mulone_site.models import (
    AdminProfile, ContactSection, HeroContent, HeroStat, Project, ProjectImage,
    ProjectsSection, Service, ServicesSection, Testimonial, TestimonialsSection,
)
from mulone_site.services import (
    delete_uploaded_asset, redirect_with_toast, upload_image, write_audit_log,
)

logger = logging.getLogger(__name__)

MAX_CONTACT_BADGES = 3


# -----------------------------------------------------------------------------
# Store helpers
# -----------------------------------------------------------------------------

def _upsert(model, row_id, values):
    row = db.session.get(model, row_id)
    if row is None:
        row = model(id=row_id)
        db.session.add(row)
    for key, value in values.items():
        setattr(row, key, value)
    return row


def _seed_defaults(model, loader):
    """Write the default items to an empty item table."""
    if model.query.count():
        return
    columns = {column.key for column in model.__table__.columns}
    for item in loader(use_store=False):
        db.session.add(model(**{k: v for k, v in item.items() if k in columns}))
    db.session.flush()


def _next_id(model):
    return (db.session.query(func.max(model.id)).scalar() or 0) + 1


def _text(name):
    return request.form.get(name, '').strip()


def _save_section(model, prefix, endpoint, entity, message):
    values = {field: _text(f'{prefix}_{field}') for field in ('eyebrow', 'title', 'description')}
    try:
        _upsert(model, SINGLETON_ID, values)
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.error('Could not save %s: %s', entity, exc)
        return redirect_with_toast(endpoint, 'Could not save changes.', 'error')

    write_audit_log(current_user.email, 'update', entity, SINGLETON_ID,
                    {'title': values['title']})
    return redirect_with_toast(endpoint, message)


def _delete_item(model, loader, item_id, endpoint, label, name_attr):
    """Delete one row of an item table, refusing to remove the last one.

    Returns:
        (name, response) where name is the row's `name_attr` and response
        is an error redirect or None
    """
    try:
        _seed_defaults(model, loader)
        if count_rows(model.__tablename__) <= 1:
            db.session.rollback()
            return None, redirect_with_toast(
                endpoint, f'At least one {label} must remain.', 'error')
        row = db.session.get(model, item_id)
        if row is None:
            db.session.rollback()
            return None, redirect_with_toast(endpoint, f'{label.capitalize()} not found.', 'error')
        name = getattr(row, name_attr)
        db.session.delete(row)
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.error('Could not delete %s %s: %s', label, item_id, exc)
        return None, redirect_with_toast(endpoint, f'Could not remove {label}.', 'error')
    return name, None


# -----------------------------------------------------------------------------
# Content page: profile, hero, statistics, testimonials, contact
# -----------------------------------------------------------------------------

@admin_bp.route('/content', methods=['GET'])
@login_required
def content():
    return render_template(
        'admin/content.html',
        has_database=is_database_configured(),
        profile=load_or_default(load_profile),
        hero=load_or_default(load_hero),
        hero_stats=load_or_default(load_hero_stats),
        testimonials_section=load_or_default(load_section, TestimonialsSection),
        testimonials=load_or_default(load_testimonials),
        contact=load_or_default(load_contact),
    )


@admin_bp.route('/content/profile', methods=['POST'])
@login_required
@database_required('admin.content')
def update_profile():
    """Profile card with an optional avatar upload."""
    uploaded_avatar = upload_image(request.files.get('profile_avatar_file'), 'profile', 'avatar')
    values = {
        'display_name': _text('profile_display_name'),
        'role': _text('profile_role'),
        'bio': _text('profile_bio'),
        'avatar_url': uploaded_avatar or _text('profile_avatar_url'),
    }
    try:
        _upsert(AdminProfile, SINGLETON_ID, values)
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.error('Could not save profile: %s', exc)
        delete_uploaded_asset(uploaded_avatar)
        return redirect_with_toast('admin.content', 'Could not update profile.', 'error')

    write_audit_log(current_user.email, 'update', 'admin_profile', SINGLETON_ID,
                    {'updatedFields': sorted(values), 'uploadedAvatar': bool(uploaded_avatar)})
    return redirect_with_toast('admin.content', 'Profile updated successfully.')


@admin_bp.route('/content/hero', methods=['POST'])
@login_required
@database_required('admin.content')
def update_hero():
    values = {field: _text(f'hero_{field}') for field in DEFAULT_HERO}
    try:
        _upsert(HeroContent, SINGLETON_ID, values)
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.error('Could not save hero: %s', exc)
        return redirect_with_toast('admin.content', 'Could not update hero.', 'error')

    write_audit_log(current_user.email, 'update', 'hero_content', SINGLETON_ID,
                    {'title': values['title']})
    return redirect_with_toast('admin.content', 'Hero updated successfully.')


@admin_bp.route('/content/hero-stats', methods=['POST'])
@login_required
@database_required('admin.content')
def update_hero_stats():
    rows = read_rows(request.form, 'hero_stats', ('value', 'label'))
    try:
        for row in rows:
            _upsert(HeroStat, row['id'], {
                'value': row['value'].strip(),
                'label': row['label'].strip(),
                'sort_order': row['sort_order'],
            })
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.error('Could not save hero stats: %s', exc)
        return redirect_with_toast('admin.content', 'Could not update statistics.', 'error')

    write_audit_log(current_user.email, 'bulk_update', 'hero_stats', None, {'total': len(rows)})
    return redirect_with_toast('admin.content', 'Statistics updated successfully.')


@admin_bp.route('/content/testimonials-section', methods=['POST'])
@login_required
@database_required('admin.content')
def update_testimonials_section():
    return _save_section(TestimonialsSection, 'testimonials', 'admin.content',
                         'testimonials_section', 'Testimonials section updated.')


@admin_bp.route('/content/testimonials', methods=['POST'])
@login_required
@database_required('admin.content')
def update_testimonials():
    rows = read_rows(request.form, 'testimonials', ('name', 'role', 'quote'))
    try:
        for row in rows:
            _upsert(Testimonial, row['id'], {
                'name': row['name'].strip(),
                'role': row['role'].strip(),
                'quote': row['quote'].strip(),
                'sort_order': row['sort_order'],
            })
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.error('Could not save testimonials: %s', exc)
        return redirect_with_toast('admin.content', 'Could not save testimonials.', 'error')

    write_audit_log(current_user.email, 'bulk_update', 'testimonials', None, {'total': len(rows)})
    return redirect_with_toast('admin.content', 'Testimonials saved successfully.')


@admin_bp.route('/content/testimonials/new', methods=['POST'])
@login_required
@database_required('admin.content')
def add_testimonial():
    try:
        _seed_defaults(Testimonial, load_testimonials)
        new_id = _next_id(Testimonial)
        db.session.add(Testimonial(id=new_id, name=f'Partner {new_id}', role='Role',
                                   quote='New testimonial.', sort_order=new_id))
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.error('Could not add testimonial: %s', exc)
        return redirect_with_toast('admin.content', 'Could not add testimonial.', 'error')

    write_audit_log(current_user.email, 'create', 'testimonial', new_id)
    return redirect_with_toast('admin.content', 'Testimonial added successfully.')


@admin_bp.route('/content/testimonials/<int:testimonial_id>/delete', methods=['POST'])
@login_required
@database_required('admin.content')
def delete_testimonial(testimonial_id):
    name, error = _delete_item(Testimonial, load_testimonials, testimonial_id,
                              'admin.content', 'testimonial', 'name')
    if error is not None:
        return error

    write_audit_log(current_user.email, 'delete', 'testimonial', testimonial_id,
                    {'name': name})
    return redirect_with_toast('admin.content', 'Testimonial removed successfully.')


@admin_bp.route('/content/contact', methods=['POST'])
@login_required
@database_required('admin.content')
def update_contact():
    """Contact block copy and up to three badges."""
    badges = [_text(f'contact_badge_{i}') for i in range(MAX_CONTACT_BADGES)]
    badges = [badge for badge in badges if badge] or list(DEFAULT_CONTACT['badges'])
    values = {
        'eyebrow': _text('contact_eyebrow'),
        'title': _text('contact_title'),
        'description': _text('contact_description'),
        'badges': badges,
    }
    try:
        _upsert(ContactSection, SINGLETON_ID, values)
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.error('Could not save contact section: %s', exc)
        return redirect_with_toast('admin.content', 'Could not update contact.', 'error')

    write_audit_log(current_user.email, 'update', 'contact_section', SINGLETON_ID,
                    {'badges': len(badges)})
    return redirect_with_toast('admin.content', 'Contact updated successfully.')


# -----------------------------------------------------------------------------
# Services
# -----------------------------------------------------------------------------

@admin_bp.route('/services', methods=['GET'])
@login_required
def services():
    return render_template(
        'admin/services.html',
        has_database=is_database_configured(),
        section=load_or_default(load_section, ServicesSection),
        services=load_or_default(load_services),
        service_icons=SERVICE_ICONS,
    )


@admin_bp.route('/services/new', methods=['GET'])
@admin_bp.route('/services/<int:service_id>', methods=['GET'])
@login_required
def legacy_service_page(service_id=None):
    return redirect(url_for('admin.services'))


@admin_bp.route('/services/section', methods=['POST'])
@login_required
@database_required('admin.services')
def update_services_section():
    return _save_section(ServicesSection, 'services', 'admin.services',
                         'services_section', 'Services section updated.')


@admin_bp.route('/services', methods=['POST'])
@login_required
@database_required('admin.services')
def update_services():
    """Bulk save of the service cards, with one optional image per card."""
    rows = read_rows(request.form, 'services', ('icon', 'title', 'image_url', 'description'))
    uploaded_urls = []
    try:
        for row in rows:
            uploaded = upload_image(request.files.get(f"services_image_file_{row['index']}"),
                                    f"services/{row['id']}", 'image')
            if uploaded:
                uploaded_urls.append(uploaded)
            _upsert(Service, row['id'], {
                'icon': service_icon(row['icon'].strip()),
                'title': row['title'].strip(),
                'image_url': uploaded or row['image_url'].strip(),
                'description': row['description'].strip(),
                'sort_order': row['sort_order'],
            })
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.error('Could not save services: %s', exc)
        for url in uploaded_urls:
            delete_uploaded_asset(url)
        return redirect_with_toast('admin.services', 'Could not save services.', 'error')

    write_audit_log(current_user.email, 'bulk_update', 'services', None,
                    {'total': len(rows), 'uploads': len(uploaded_urls)})
    return redirect_with_toast('admin.services', 'Services saved successfully.')


@admin_bp.route('/services/new', methods=['POST'])
@login_required
@database_required('admin.services')
def add_service():
    try:
        _seed_defaults(Service, load_services)
        new_id = _next_id(Service)
        db.session.add(Service(id=new_id, icon='globe', title=f'New service {new_id}',
                               image_url='', description='Describe this service.',
                               sort_order=new_id))
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.error('Could not add service: %s', exc)
        return redirect_with_toast('admin.services', 'Could not add service.', 'error')

    write_audit_log(current_user.email, 'create', 'service', new_id)
    return redirect_with_toast('admin.services', 'Service added successfully.')


@admin_bp.route('/services/<int:service_id>/delete', methods=['POST'])
@login_required
@database_required('admin.services')
def delete_service(service_id):
    name, error = _delete_item(Service, load_services, service_id,
                              'admin.services', 'service', 'title')
    if error is not None:
        return error

    write_audit_log(current_user.email, 'delete', 'service', service_id, {'title': name})
    return redirect_with_toast('admin.services', 'Service removed successfully.')


# -----------------------------------------------------------------------------
# Projects
# -----------------------------------------------------------------------------

@admin_bp.route('/projects', methods=['GET'])
@login_required
def projects():
    return render_template(
        'admin/projects.html',
        has_database=is_database_configured(),
        section=load_or_default(load_section, ProjectsSection),
        projects=load_or_default(load_projects),
    )


@admin_bp.route('/projects/section', methods=['POST'])
@login_required
@database_required('admin.projects')
def update_projects_section():
    return _save_section(ProjectsSection, 'projects', 'admin.projects',
                         'projects_section', 'Projects section updated.')


@admin_bp.route('/projects', methods=['POST'])
@login_required
@database_required('admin.projects')
def update_projects():
    """Bulk save of the projects.

    Each project may receive a new main image and any number of gallery
    images; without a main image the first new gallery image takes its place.
    """
    rows = read_rows(request.form, 'projects', ('title', 'tag', 'image_url', 'description'))
    uploaded_urls = []
    try:
        for row in rows:
            project_id = row['id']
            folder = f'projects/{project_id}'
            main_image = upload_image(request.files.get(f"projects_image_file_{row['index']}"),
                                      folder, 'image')
            gallery = [url for url in (
                upload_image(file, folder, 'gallery')
                for file in request.files.getlist(f"projects_images_files_{row['index']}")
            ) if url]
            uploaded_urls.extend(gallery)
            if main_image:
                uploaded_urls.append(main_image)

            _upsert(Project, project_id, {
                'title': row['title'].strip(),
                'tag': row['tag'].strip(),
                'image_url': main_image or row['image_url'].strip() or (gallery[0] if gallery else ''),
                'description': row['description'].strip(),
                'sort_order': row['sort_order'],
            })
            db.session.flush()

            if gallery:
                last_order = db.session.query(func.max(ProjectImage.sort_order)).filter(
                    ProjectImage.project_id == project_id).scalar()
                next_order = (last_order + 1) if last_order is not None else 0
                for offset, url in enumerate(gallery):
                    db.session.add(ProjectImage(project_id=project_id, image_url=url,
                                                sort_order=next_order + offset))
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.error('Could not save projects: %s', exc)
        for url in uploaded_urls:
            delete_uploaded_asset(url)
        return redirect_with_toast('admin.projects', 'Could not save projects.', 'error')

    write_audit_log(current_user.email, 'bulk_update', 'projects', None,
                    {'total': len(rows), 'uploads': len(uploaded_urls)})
    return redirect_with_toast('admin.projects', 'Projects saved successfully.')


@admin_bp.route('/projects/new', methods=['POST'])
@login_required
@database_required('admin.projects')
def add_project():
    try:
        _seed_defaults(Project, load_projects)
        new_id = _next_id(Project)
        db.session.add(Project(id=new_id, title=f'New project {new_id}', tag='Category',
                               image_url='', description='Describe this project.',
                               sort_order=new_id))
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.error('Could not add project: %s', exc)
        return redirect_with_toast('admin.projects', 'Could not add project.', 'error')

    write_audit_log(current_user.email, 'create', 'project', new_id)
    return redirect_with_toast('admin.projects', 'Project added successfully.')


@admin_bp.route('/projects/<int:project_id>/delete', methods=['POST'])
@login_required
@database_required('admin.projects')
def delete_project(project_id):
    """Delete a project with its gallery rows and their stored files."""
    asset_urls = []
    try:
        project = db.session.get(Project, project_id)
        if project is not None:
            asset_urls = [image.image_url for image in project.images]
            if project.image_url and project.image_url not in asset_urls:
                asset_urls.append(project.image_url)
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.warning('Could not list images of project %s: %s', project_id, exc)

    name, error = _delete_item(Project, load_projects, project_id,
                              'admin.projects', 'project', 'title')
    if error is not None:
        return error

    for url in asset_urls:
        delete_uploaded_asset(url)

    write_audit_log(current_user.email, 'delete', 'project', project_id,
                    {'title': name, 'removedImages': len(asset_urls)})
    return redirect_with_toast('admin.projects', 'Project removed successfully.')


@admin_bp.route('/projects/<int:project_id>/images/<int:image_id>/delete', methods=['POST'])
@login_required
@database_required('admin.projects')
def delete_project_image(project_id, image_id):
    """Remove one gallery image; a main image pointing at it moves to the next one."""
    try:
        image = ProjectImage.query.filter_by(id=image_id, project_id=project_id).first()
        if image is None:
            return redirect_with_toast('admin.projects', 'Photo not found.', 'error')

        removed_url = image.image_url
        db.session.delete(image)
        db.session.flush()

        project = db.session.get(Project, project_id)
        replaced = False
        if project is not None and project.image_url == removed_url:
            replacement = ProjectImage.query.filter_by(project_id=project_id).order_by(
                ProjectImage.sort_order.asc(), ProjectImage.id.asc()).first()
            project.image_url = replacement.image_url if replacement else ''
            replaced = True
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.error('Could not delete image %s of project %s: %s', image_id, project_id, exc)
        return redirect_with_toast('admin.projects', 'Internal error removing photo.', 'error')

    delete_uploaded_asset(removed_url)
    write_audit_log(current_user.email, 'delete', 'project_image', image_id,
                    {'projectId': project_id, 'replacedMainImage': replaced})
    return redirect_with_toast('admin.projects', 'Photo removed successfully.')
