"""
Services Package

Exports all services for easy importing.
"""

from mulone_site.services.audit import write_audit_log, recent_audit_logs
from mulone_site.services.mailer import send_contact_notification
from mulone_site.services.toast import build_toast_url, redirect_with_toast
from mulone_site.services.uploads import upload_image, delete_uploaded_asset

__all__ = [
    'write_audit_log',
    'recent_audit_logs',
    'send_contact_notification',
    'build_toast_url',
    'redirect_with_toast',
    'upload_image',
    'delete_uploaded_asset',
]
