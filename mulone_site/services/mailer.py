"""
Contact Notification Mailer

Sends the agency inbox a copy of each contact message over SMTP when
EMAIL_USER and EMAIL_PASS are configured.
"""

import logging
import smtplib
from email.message import EmailMessage

from flask import current_app, render_template
from markupsafe import Markup, escape

logger = logging.getLogger(__name__)


def is_mail_configured():
    return bool(current_app.config.get('EMAIL_USER') and current_app.config.get('EMAIL_PASS'))


def build_contact_email(name, email, subject, message, need):
    """Build the notification message for a contact submission."""
    sender = current_app.config['EMAIL_USER']
    msg = EmailMessage()
    msg['From'] = f'"Mulone Tech Website" <{sender}>'
    msg['To'] = sender
    msg['Reply-To'] = email
    msg['Subject'] = f'New website message - {need}'
    msg.set_content(
        f'Name: {name}\nEmail: {email}\nNeed: {need}\n'
        f'Subject: {subject or "No subject"}\n\n{message}\n'
    )
    msg.add_alternative(render_template(
        'email/contact_notification.html',
        name=name, email=email, subject=subject, need=need,
        message_html=Markup('<br />').join(escape(message).split('\n')),
    ), subtype='html')
    return msg


def send_contact_notification(name, email, subject, message, need):
    """Send the notification; returns False when skipped or on failure."""
    if not is_mail_configured():
        return False

    config = current_app.config
    try:
        msg = build_contact_email(name, email, subject, message, need)
        with smtplib.SMTP_SSL(config['SMTP_HOST'], config['SMTP_PORT'], timeout=10) as smtp:
            smtp.login(config['EMAIL_USER'], config['EMAIL_PASS'])
            smtp.send_message(msg)
        return True
    except (smtplib.SMTPException, OSError) as exc:
        # The message is already stored; mail is optional
        logger.warning('Contact notification not sent: %s', exc)
        return False
