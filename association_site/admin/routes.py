"""
Admin Routes

JSON API behind the admin area. Every endpoint requires at least the
EDITOR role; user provisioning requires ADMIN.
"""

import logging
import secrets
import time

from flask import current_app, jsonify, request
from werkzeug.utils import secure_filename

from association_site.admin import admin_bp
from association_site.admin.entities import BOARD_MEMBERS, EVENT_TYPES, NotFoundError, ValidationError
from association_site.admin.handlers import EntityHandler
from association_site.auth.access import role_rank, role_required, session_user
from association_site.auth.passwords import hash_password
from association_site.extensions import db
from association_site.models import (
    Application,
    ApplicationStatus,
    ApplicationType,
    MembershipRequest,
    Role,
    User,
)
from association_site.services.blob import BlobStoreError, get_blob_store
from association_site.utils import json_body

logger = logging.getLogger(__name__)


def _error(message, status):
    return jsonify({'ok': False, 'error': message}), status


def _handler(entity):
    return EntityHandler(entity, get_blob_store())


def _mutate(handler, action, payload, key):
    """Run one admin action and translate its outcome into a response."""
    try:
        record = handler.dispatch(action, payload)
    except ValidationError as e:
        db.session.rollback()
        return _error(str(e), 400)
    except NotFoundError as e:
        db.session.rollback()
        logger.warning('Admin %s on %s failed: %s', action, handler.entity.name, e)
        return _error('Operation failed', 500)
    except Exception:
        db.session.rollback()
        logger.exception('Admin %s on %s failed', action, handler.entity.name)
        return _error('Operation failed', 500)

    body = {'ok': True}
    if action in ('create', 'update'):
        body[key] = record.to_dict()
    return jsonify(body)


# -----------------------------------------------------------------------------
# Board members
# -----------------------------------------------------------------------------

@admin_bp.route('/board', methods=['GET'])
@role_required(Role.EDITOR)
def list_board():
    try:
        members = _handler(BOARD_MEMBERS).list()
    except Exception:
        logger.exception('Board admin listing failed')
        return _error('Failed to fetch board members', 500)
    return jsonify({'ok': True, 'members': [m.to_dict() for m in members]})


@admin_bp.route('/board', methods=['POST'])
@role_required(Role.EDITOR)
def mutate_board():
    """Create, update, delete or reorder board members"""
    body = json_body()
    return _mutate(_handler(BOARD_MEMBERS), body.get('action'), body, 'member')


# -----------------------------------------------------------------------------
# Events (upcoming and past)
# -----------------------------------------------------------------------------

@admin_bp.route('/events', methods=['GET'])
@role_required(Role.EDITOR)
def list_events():
    """All events including hidden ones"""
    try:
        upcoming = _handler(EVENT_TYPES['upcoming']).list()
        past = _handler(EVENT_TYPES['past']).list()
    except Exception:
        logger.exception('Admin events listing failed')
        return _error('Database error', 500)
    return jsonify({
        'ok': True,
        'upcoming': [e.to_dict() for e in upcoming],
        'past': [e.to_dict() for e in past],
    })


@admin_bp.route('/events', methods=['POST'])
@role_required(Role.EDITOR)
def mutate_events():
    body = json_body()
    action, event_type, data = body.get('action'), body.get('type'), body.get('data')

    if not action or not event_type or not isinstance(data, dict):
        return _error('Invalid request', 400)
    if not isinstance(event_type, str) or event_type not in EVENT_TYPES:
        return _error('Invalid action or type', 400)

    return _mutate(_handler(EVENT_TYPES[event_type]), action, data, 'event')


# -----------------------------------------------------------------------------
# Membership requests and applications
# -----------------------------------------------------------------------------

@admin_bp.route('/memberships', methods=['GET'])
@role_required(Role.EDITOR)
def list_memberships():
    try:
        requests_ = MembershipRequest.query.order_by(
            MembershipRequest.created_at.desc(), MembershipRequest.id.desc()).all()
    except Exception:
        logger.exception('Failed to fetch membership requests')
        return _error('Failed to fetch requests', 500)
    return jsonify({'ok': True, 'requests': [r.to_dict() for r in requests_]})


@admin_bp.route('/applications', methods=['GET'])
@role_required(Role.EDITOR)
def list_applications():
    query = Application.query
    type_filter = (request.args.get('type') or '').upper()
    if type_filter in ApplicationType.__members__:
        query = query.filter_by(type=ApplicationType[type_filter])

    try:
        applications = query.order_by(Application.created_at.desc(), Application.id.desc()).all()
    except Exception:
        logger.exception('Failed to fetch applications')
        return _error('Failed to fetch applications', 500)
    return jsonify({'ok': True, 'applications': [a.to_dict() for a in applications]})


@admin_bp.route('/applications', methods=['PATCH'])
@role_required(Role.EDITOR)
def update_application_status():
    """Accept or reject a pending application"""
    body = json_body()
    application_id, status = body.get('id'), body.get('status')

    if not application_id or not status:
        return _error('ID and status are required', 400)
    if not isinstance(status, str) or status not in ApplicationStatus.__members__:
        return _error('Invalid status', 400)

    try:
        application = db.session.get(Application, int(application_id))
        if application is None:
            logger.warning('Status change for missing application %s', application_id)
            return _error('Failed to update application', 500)

        target = ApplicationStatus[status]
        if target == application.status:
            return jsonify({'ok': True, 'application': application.to_dict()})
        if not application.can_transition_to(target):
            return _error(f'Cannot change status from {application.status.value} to {target.value}', 400)

        application.status = target
        db.session.commit()
    except (TypeError, ValueError):
        return _error('ID must be an integer', 400)
    except Exception:
        db.session.rollback()
        logger.exception('Failed to update application %s', application_id)
        return _error('Failed to update application', 500)

    logger.info('Application %s marked %s', application.id, target.value)
    return jsonify({'ok': True, 'application': application.to_dict()})


# -----------------------------------------------------------------------------
# User accounts
# -----------------------------------------------------------------------------

@admin_bp.route('/users', methods=['GET'])
@role_required(Role.ADMIN)
def list_users():
    users = User.query.order_by(User.username).all()
    return jsonify({'ok': True, 'users': [u.to_dict(detailed=True) for u in users]})


@admin_bp.route('/users', methods=['POST'])
@role_required(Role.ADMIN)
def create_user():
    """Provision a back-office account no more privileged than the caller"""
    body = json_body()
    username = str(body.get('username') or '').strip()
    password = str(body.get('password') or '')
    role_name = str(body.get('role') or Role.EDITOR.value).upper()

    if not username or not password:
        return _error('Username and password required', 400)
    min_length = current_app.config['MIN_PASSWORD_LENGTH']
    if len(password) < min_length:
        return _error(f'Password must be at least {min_length} characters', 400)
    if role_name not in Role.__members__:
        return _error('Invalid role', 400)

    role = Role[role_name]
    if role_rank(role) > role_rank(session_user().role):
        return _error('Cannot grant a role above your own', 400)
    if User.query.filter_by(username=username).first():
        return _error('Username already taken', 400)

    user = User(
        username=username,
        password_hash=hash_password(password),
        role=role,
        first_name=(body.get('firstName') or '').strip() or None,
        last_name=(body.get('lastName') or '').strip() or None,
        email=(body.get('email') or '').strip() or None,
    )
    try:
        db.session.add(user)
        db.session.commit()
    except Exception:
        db.session.rollback()
        logger.exception('Could not create user "%s"', username)
        return _error('Operation failed', 500)

    logger.info('User "%s" created with role %s', username, role.value)
    return jsonify({'ok': True, 'user': user.to_dict(detailed=True)})


# -----------------------------------------------------------------------------
# Image upload
# -----------------------------------------------------------------------------

@admin_bp.route('/upload', methods=['POST'])
@role_required(Role.EDITOR)
def upload_image():
    file = request.files.get('file')
    if file is None:
        return _error('No file provided', 400)

    if file.mimetype not in current_app.config['ALLOWED_IMAGE_TYPES']:
        return _error('Invalid file type. Please upload an image.', 400)

    data = file.read()
    max_bytes = current_app.config['MAX_UPLOAD_BYTES']
    if len(data) > max_bytes:
        return _error(f'File too large. Maximum size is {max_bytes // (1024 * 1024)}MB.', 400)

    filename = secure_filename(file.filename or '')
    ext = filename.rsplit('.', 1)[-1].lower() if '.' in filename else 'jpg'
    path = f'events/{int(time.time() * 1000)}-{secrets.token_hex(4)}.{ext}'

    try:
        blob = get_blob_store().put(path, data, content_type=file.mimetype)
    except BlobStoreError:
        logger.exception('Image upload failed')
        return _error('Upload failed', 500)

    return jsonify({'ok': True, 'url': blob['url'], 'filename': blob['pathname']})
