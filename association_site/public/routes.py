"""
Public Routes

Board and event listings for the public pages, plus the membership and
application forms.
"""

import logging
import re

from flask import jsonify

from association_site.extensions import db
from association_site.models import (
    Application,
    ApplicationType,
    BoardMember,
    Event,
    MembershipRequest,
    PastEvent,
)
from association_site.public import public_bp
from association_site.services.dates import today_utc
from association_site.services.notifications import send_admin_notification, send_confirmation_email
from association_site.utils import json_body

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')


def _error(message, status):
    return jsonify({'ok': False, 'error': message}), status


def _clean(value):
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _applicant_from(body, notes_key):
    """Normalise submitted contact fields; returns (fields, error message)."""
    name = _clean(body.get('name'))
    email = (_clean(body.get('email')) or '').lower()
    if not name or not email:
        return None, 'Name and email are required'
    if not EMAIL_RE.match(email):
        return None, 'Invalid email format'
    return {
        'name': name,
        'email': email,
        'phone': _clean(body.get('phone')),
        'university': _clean(body.get('university')),
        'study_program': _clean(body.get('studyProgram')),
        'notes': _clean(body.get(notes_key)),
    }, None


@public_bp.route('/board', methods=['GET'])
def board():
    """Board members in display order"""
    try:
        members = BoardMember.query.order_by(BoardMember.order.asc(), BoardMember.id.asc()).all()
    except Exception:
        logger.exception('Board API error')
        return _error('Failed to fetch board members', 500)
    return jsonify({'ok': True, 'members': [m.to_dict() for m in members]})


@public_bp.route('/events', methods=['GET'])
def events():
    """Visible events split into upcoming and past"""
    try:
        today = today_utc()
        upcoming, past = [], []
        for event in Event.query.filter_by(hidden=False).all():
            if event.date_tba or event.date >= today:
                upcoming.append(event)
            else:
                past.append(event)
        past.extend(PastEvent.query.filter_by(hidden=False).all())
    except Exception:
        logger.exception('Events API error')
        return _error('Failed to fetch events', 500)

    upcoming.sort(key=lambda e: e.date)
    past.sort(key=lambda e: e.date, reverse=True)
    return jsonify({
        'ok': True,
        'upcoming': [e.to_dict() for e in upcoming],
        'past': [e.to_dict() for e in past],
    })


@public_bp.route('/membership', methods=['POST'])
def submit_membership():
    body = json_body()
    applicant, error = _applicant_from(body, 'notes')
    if error:
        return _error(error, 400)

    try:
        membership = MembershipRequest(**applicant)
        db.session.add(membership)
        db.session.commit()

        membership.user_email_sent = send_confirmation_email(applicant)
        membership.admin_email_sent = send_admin_notification(applicant, kind='Membership request')
        db.session.commit()
    except Exception:
        db.session.rollback()
        logger.exception('Membership submission error')
        return _error('Failed to submit application. Please try again.', 500)

    logger.info('Membership request %s received (user email: %s, admin email: %s)',
                membership.id, membership.user_email_sent, membership.admin_email_sent)
    return jsonify({
        'ok': True,
        'message': "Application submitted successfully! We'll be in touch soon.",
        'id': membership.id,
    })


@public_bp.route('/applications', methods=['POST'])
def submit_application():
    body = json_body()
    application_type = _clean(body.get('type'))
    applicant, error = _applicant_from(body, 'message')
    if not application_type:
        return _error('Name, email, and type are required', 400)
    if error:
        return _error(error, 400)
    if application_type not in ApplicationType.__members__:
        return _error('Invalid application type', 400)

    fields = dict(applicant)
    fields['message'] = fields.pop('notes')
    try:
        application = Application(type=ApplicationType[application_type], **fields)
        db.session.add(application)
        db.session.commit()

        kind = 'Team application' if application.type is ApplicationType.TEAM else 'Member application'
        application.user_email_sent = send_confirmation_email(applicant)
        application.admin_email_sent = send_admin_notification(applicant, kind=kind)
        db.session.commit()
    except Exception:
        db.session.rollback()
        logger.exception('Application submission error')
        return _error('Failed to submit application. Please try again.', 500)

    return jsonify({'ok': True, 'message': 'Application submitted successfully!', 'id': application.id})
