"""
Notification Emails

Confirmation to the applicant and a notification to the board for every
membership request or application. Both are best-effort.
"""

import logging

from flask import current_app, render_template

from association_site.services.mailer import get_mailer

logger = logging.getLogger(__name__)


def _send(template, to, subject, **context):
    context.setdefault('association_name', current_app.config['ASSOCIATION_NAME'])
    try:
        html = render_template(f'email/{template}.html', **context)
        text = render_template(f'email/{template}.txt', **context)
    except Exception:
        logger.exception('Could not render email template %s', template)
        return False
    return get_mailer().send(to=to, subject=subject, html=html, text=text)


def send_confirmation_email(applicant):
    """Thank the applicant. `applicant` is a dict of submitted fields."""
    name = current_app.config['ASSOCIATION_NAME']
    return _send('confirmation', applicant['email'],
                 f'Thank you for your application to {name}', applicant=applicant)


def send_admin_notification(applicant, kind='Membership request'):
    subject = f'New {kind.lower()}: {applicant["name"]}'
    return _send('admin_notification', current_app.config['ADMIN_EMAIL'], subject,
                 applicant=applicant, kind=kind)
