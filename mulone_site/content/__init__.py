"""
Landing page content: hard-coded defaults and store-backed loaders.
"""

from mulone_site.content.loaders import (
    load_branding, load_contact, load_hero, load_hero_stats, load_home_content,
    load_or_default, load_profile, load_projects, load_section, load_services,
    load_testimonials,
)

__all__ = [
    'load_branding', 'load_contact', 'load_hero', 'load_hero_stats',
    'load_home_content', 'load_or_default', 'load_profile', 'load_projects',
    'load_section', 'load_services', 'load_testimonials',
]
