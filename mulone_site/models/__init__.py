"""
Models Package

Exports all models for easy importing.
"""

from mulone_site.models.content import (
    HeroContent, HeroStat, ServicesSection, Service, ProjectsSection, Project,
    ProjectImage, TestimonialsSection, Testimonial, ContactSection, AdminProfile,
)
from mulone_site.models.admin import AdminUser, AdminAuditLog, AppSetting
from mulone_site.models.message import Message

__all__ = [
    'HeroContent', 'HeroStat', 'ServicesSection', 'Service', 'ProjectsSection',
    'Project', 'ProjectImage', 'TestimonialsSection', 'Testimonial',
    'ContactSection', 'AdminProfile', 'AdminUser', 'AdminAuditLog',
    'AppSetting', 'Message',
]
