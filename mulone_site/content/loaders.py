"""
Content Loaders

Read landing page sections from the store, falling back to the defaults.
A missing row or a NULL column takes the default value; an empty item table
(services, projects, testimonials, hero stats) takes the default list, with
ids 1..n so the admin forms can save them as-is.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError

from mulone_site.content.defaults import (
    DEFAULT_BRANDING, DEFAULT_CONTACT, DEFAULT_HERO, DEFAULT_HERO_STATS,
    DEFAULT_PROFILE, DEFAULT_PROJECTS, DEFAULT_PROJECTS_SECTION,
    DEFAULT_SERVICES, DEFAULT_SERVICES_SECTION, DEFAULT_TESTIMONIALS,
    DEFAULT_TESTIMONIALS_SECTION, SERVICE_ICONS,
)
from mulone_site.queries import is_database_configured
from mulone_site.extensions import db
from mulone_site.models import (
    AdminProfile, AppSetting, ContactSection, HeroContent, HeroStat, Project,
    ProjectImage, ProjectsSection, Service, ServicesSection, Testimonial,
    TestimonialsSection,
)

logger = logging.getLogger(__name__)

SINGLETON_ID = 1

SECTION_DEFAULTS = {
    ServicesSection: DEFAULT_SERVICES_SECTION,
    ProjectsSection: DEFAULT_PROJECTS_SECTION,
    TestimonialsSection: DEFAULT_TESTIMONIALS_SECTION,
}


def merge_row(row, defaults):
    """Copy `defaults`, replacing each key with the row's non-NULL column."""
    merged = dict(defaults)
    if row is None:
        return merged
    for key in defaults:
        value = getattr(row, key, None)
        if value is not None:
            merged[key] = value
    return merged


def default_items(defaults, **extra):
    return [dict(item, id=index + 1, sort_order=index, **extra)
            for index, item in enumerate(defaults)]


def service_icon(icon):
    return icon if icon in SERVICE_ICONS else 'globe'


def _get(model):
    return db.session.get(model, SINGLETON_ID)


def _ordered(model):
    return model.query.order_by(model.sort_order.asc(), model.id.asc()).all()


def load_hero(use_store=True):
    row = _get(HeroContent) if use_store else None
    return merge_row(row, DEFAULT_HERO)


def load_hero_stats(use_store=True):
    rows = _ordered(HeroStat) if use_store else []
    if not rows:
        return default_items(DEFAULT_HERO_STATS)
    return [{'id': r.id, 'value': r.value or '', 'label': r.label or '',
             'sort_order': r.sort_order} for r in rows]


def load_section(model, use_store=True):
    row = _get(model) if use_store else None
    return merge_row(row, SECTION_DEFAULTS[model])


def load_services(use_store=True):
    rows = _ordered(Service) if use_store else []
    if not rows:
        return default_items(DEFAULT_SERVICES, image_url='')
    return [{'id': r.id, 'icon': service_icon(r.icon), 'title': r.title or '',
             'image_url': r.image_url or '', 'description': r.description or '',
             'sort_order': r.sort_order} for r in rows]


def load_projects(use_store=True):
    """Projects with their gallery images, in display order."""
    rows = _ordered(Project) if use_store else []
    if not rows:
        return default_items(DEFAULT_PROJECTS, image_url='', gallery=[])

    images = ProjectImage.query.order_by(
        ProjectImage.sort_order.asc(), ProjectImage.id.asc()
    ).all()
    gallery = {}
    for image in images:
        if image.image_url:
            gallery.setdefault(image.project_id, []).append(
                {'id': image.id, 'image_url': image.image_url})

    return [{'id': r.id, 'title': r.title or '', 'tag': r.tag or '',
             'image_url': r.image_url or '', 'description': r.description or '',
             'sort_order': r.sort_order, 'gallery': gallery.get(r.id, [])}
            for r in rows]


def load_testimonials(use_store=True):
    rows = _ordered(Testimonial) if use_store else []
    if not rows:
        return default_items(DEFAULT_TESTIMONIALS)
    return [{'id': r.id, 'name': r.name or '', 'role': r.role or '',
             'quote': r.quote or '', 'sort_order': r.sort_order} for r in rows]


def load_contact(use_store=True):
    row = _get(ContactSection) if use_store else None
    contact = merge_row(row, DEFAULT_CONTACT)
    if not isinstance(contact['badges'], list):
        contact['badges'] = list(DEFAULT_CONTACT['badges'])
    return contact


def load_profile(use_store=True):
    row = _get(AdminProfile) if use_store else None
    return merge_row(row, DEFAULT_PROFILE)


def load_branding():
    """Brand name, tagline and logo; empty values keep the defaults."""
    branding = dict(DEFAULT_BRANDING)
    if not is_database_configured():
        return branding
    try:
        setting = db.session.get(AppSetting, 'branding')
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.warning('Branding unavailable, using defaults: %s', exc)
        return branding

    value = setting.value if setting is not None else None
    if isinstance(value, dict):
        branding['brandName'] = value.get('brandName') or branding['brandName']
        branding['brandTagline'] = value.get('brandTagline') or branding['brandTagline']
        branding['brandLogoUrl'] = value.get('brandLogoUrl') or ''
    return branding


def _home_content(use_store):
    return {
        'hero': load_hero(use_store),
        'hero_stats': load_hero_stats(use_store),
        'services_section': load_section(ServicesSection, use_store),
        'services': load_services(use_store),
        'projects_section': load_section(ProjectsSection, use_store),
        'projects': load_projects(use_store),
        'testimonials_section': load_section(TestimonialsSection, use_store),
        'testimonials': load_testimonials(use_store),
        'contact': load_contact(use_store),
        'profile': load_profile(use_store),
    }


def load_home_content():
    """All landing page sections; any store failure yields the defaults."""
    if not is_database_configured():
        return _home_content(use_store=False)
    try:
        return _home_content(use_store=True)
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.warning('Landing page content unavailable, using defaults: %s', exc)
        return _home_content(use_store=False)


def load_or_default(loader, *args):
    """Run one loader against the store, or against the defaults on failure."""
    if not is_database_configured():
        return loader(*args, use_store=False)
    try:
        return loader(*args)
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.warning('%s unavailable, using defaults: %s', loader.__name__, exc)
        return loader(*args, use_store=False)
