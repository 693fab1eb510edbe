"""
Auth Routes

JSON endpoints for session login/logout, the current user and password
changes.
"""

import logging

from flask import current_app, jsonify, request

from association_site.auth import auth_bp
from association_site.auth.access import session_user
from association_site.auth.passwords import hash_password, needs_rehash, verify_password
from association_site.auth.sessions import (
    attach_session_cookie,
    clear_session_cookie,
    create_session,
    destroy_session,
    session_cookie_name,
)
from association_site.extensions import db
from association_site.models import Role, User
from association_site.utils import json_body

logger = logging.getLogger(__name__)


def _error(message, status):
    return jsonify({'ok': False, 'error': message}), status


def _bootstrap_superadmin(username, password):
    """Create the first SUPERADMIN when the users table is empty."""
    config = current_app.config
    if username != config['BOOTSTRAP_USERNAME'] or password != config['BOOTSTRAP_PASSWORD']:
        return None
    if User.query.count() != 0:
        return None

    user = User(username=username, password_hash=hash_password(password), role=Role.SUPERADMIN)
    db.session.add(user)
    db.session.commit()
    logger.warning('Bootstrapped initial SUPERADMIN "%s"; change its password', username)
    return user


@auth_bp.route('/login', methods=['POST'])
def login():
    """Verify credentials and open a session"""
    body = json_body()
    username = str(body.get('username') or '').strip()
    password = str(body.get('password') or '')

    if not username or not password:
        return _error('Username and password required', 400)

    try:
        message = None
        user = _bootstrap_superadmin(username, password)
        if user is not None:
            message = 'Initial admin user created. Please change your password!'
        else:
            user = User.query.filter_by(username=username).first()
            if not user or not user.password_hash or not verify_password(password, user.password_hash):
                logger.info('Failed login for "%s"', username)
                return _error('Invalid credentials', 401)

            if needs_rehash(user.password_hash):
                user.password_hash = hash_password(password)
                db.session.commit()

        issued = create_session(user.id)
        payload = {'ok': True, 'user': user.to_dict()}
        if message:
            payload['message'] = message
        response = jsonify(payload)
        attach_session_cookie(response, issued)
        logger.info('User "%s" logged in', user.username)
        return response
    except Exception:
        db.session.rollback()
        logger.exception('Login failed')
        return _error('Login failed', 500)


@auth_bp.route('/logout', methods=['POST'])
def logout():
    """Destroy the session; always succeeds"""
    token = request.cookies.get(session_cookie_name())
    try:
        destroy_session(token)
    except Exception:
        db.session.rollback()
        logger.exception('Could not delete session on logout')

    response = jsonify({'ok': True})
    clear_session_cookie(response)
    return response


@auth_bp.route('/me', methods=['GET'])
def me():
    """Current user; a missing session is not an error here"""
    try:
        user = session_user()
    except Exception:
        logger.exception('Auth check failed')
        user = None

    if user is None:
        return jsonify({'ok': False, 'user': None})
    return jsonify({'ok': True, 'user': user.to_dict(detailed=True)})


@auth_bp.route('/change-password', methods=['POST'])
def change_password():
    user = session_user()
    if user is None:
        return _error('Unauthorized', 401)

    body = json_body()
    current_password = body.get('currentPassword') or ''
    new_password = body.get('newPassword') or ''

    if not current_password or not new_password:
        return _error('Both passwords are required', 400)
    if not isinstance(current_password, str) or not isinstance(new_password, str):
        return _error('Passwords must be strings', 400)

    min_length = current_app.config['MIN_PASSWORD_LENGTH']
    if len(new_password) < min_length:
        return _error(f'New password must be at least {min_length} characters', 400)

    if not verify_password(current_password, user.password_hash):
        return _error('Current password is incorrect', 400)

    try:
        user.password_hash = hash_password(new_password)
        db.session.commit()
    except Exception:
        db.session.rollback()
        logger.exception('Password change failed for user %s', user.id)
        return _error('Failed to change password', 500)

    logger.info('User "%s" changed their password', user.username)
    return jsonify({'ok': True, 'message': 'Password updated successfully'})
