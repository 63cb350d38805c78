"""
Contact Services

Validation and persistence for contact form submissions.
"""

import logging
import re

from mulone_site.content.defaults import CONTACT_NEEDS
from mulone_site.extensions import db
from mulone_site.models import Message
from mulone_site.models.message import STATUS_PENDING

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')

CONTACT_FIELDS = ('name', 'email', 'subject', 'message', 'need')


class ContactValidationError(ValueError):
    """Contact payload rejected; the message is safe to show to visitors."""


def clean_contact_payload(payload):
    """Trim and validate a contact payload.

    Args:
        payload: Parsed JSON body (anything non-dict is treated as empty)

    Returns:
        Dict with the cleaned CONTACT_FIELDS

    Raises:
        ContactValidationError: on a missing field, bad email or unknown need
    """
    if not isinstance(payload, dict):
        payload = {}
    data = {}
    for field in CONTACT_FIELDS:
        value = payload.get(field)
        data[field] = str(value).strip() if value is not None else ''

    if not (data['name'] and data['email'] and data['message'] and data['need']):
        raise ContactValidationError('Please fill in all required fields.')
    if not EMAIL_PATTERN.match(data['email']):
        raise ContactValidationError('Invalid email.')
    if data['need'] not in CONTACT_NEEDS:
        raise ContactValidationError('Invalid need.')
    return data


def store_contact_message(data):
    """Save a validated submission as a pending message."""
    message = Message(
        name=data['name'],
        email=data['email'],
        subject=data['subject'] or data['need'],
        message=data['message'],
        status=STATUS_PENDING,
    )
    db.session.add(message)
    db.session.commit()
    logger.info('Stored contact message %s from %s', message.id, data['email'])
    return message
