"""
Session Store

Opaque, database-backed session tokens with a fixed absolute expiry.
Expired rows are removed lazily when they are next presented; there is
no background sweep and no sliding expiration.
"""

import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from association_site.extensions import db
from association_site.models import UserSession
from association_site.services.dates import utcnow

logger = logging.getLogger(__name__)

TOKEN_BYTES = 24
DEFAULT_TTL = timedelta(days=1)


@dataclass(frozen=True)
class IssuedSession:
    token: str
    expires: datetime


def create_session(user_id, ttl=None):
    """Persist a new session for `user_id` and return its token and expiry."""
    if ttl is None:
        ttl = timedelta(days=current_app.config.get('SESSION_TTL_DAYS', DEFAULT_TTL.days))
    token = secrets.token_hex(TOKEN_BYTES)
    expires = utcnow() + ttl
    db.session.add(UserSession(session_token=token, user_id=user_id, expires=expires))
    db.session.commit()
    return IssuedSession(token=token, expires=expires)


def resolve_session(token):
    """Return the user owning `token`, or None if unknown or expired."""
    if not token:
        return None

    record = UserSession.query.filter_by(session_token=token).first()
    if record is None:
        return None

    if record.expires < utcnow():
        record_id = record.id
        try:
            db.session.delete(record)
            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            logger.warning('Could not delete expired session %s', record_id, exc_info=True)
        return None

    return record.user


def destroy_session(token):
    """Delete the session for `token`; unknown tokens are ignored."""
    if not token:
        return
    UserSession.query.filter_by(session_token=token).delete()
    db.session.commit()


def session_cookie_name():
    return current_app.config.get('SESSION_TOKEN_COOKIE', 'sid')


def attach_session_cookie(response, issued):
    """Set the http-only session cookie, expiring with the session."""
    response.set_cookie(
        session_cookie_name(),
        issued.token,
        expires=issued.expires,
        path='/',
        httponly=True,
        samesite='Lax',
        secure=current_app.config.get('SESSION_COOKIE_SECURE', True),
    )
    return response


def clear_session_cookie(response):
    response.set_cookie(session_cookie_name(), '', path='/', max_age=0)
    return response
