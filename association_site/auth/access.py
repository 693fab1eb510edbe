"""
Access Control

Roles form a strict hierarchy (EDITOR < ADMIN < SUPERADMIN). A check
yields a tagged AccessResult so callers and tests can tell "no session"
from "insufficient role", while HTTP responses collapse both into 401.
"""

import enum
import logging
from dataclasses import dataclass
from functools import wraps
from typing import Optional

from flask import request
from flask_login import current_user

from association_site.extensions import login_manager
from association_site.models import ROLE_ORDER, Role, User

logger = logging.getLogger(__name__)


class Denial(enum.Enum):
    NO_SESSION = 'no_session'
    INSUFFICIENT_ROLE = 'insufficient_role'


@dataclass(frozen=True)
class AccessResult:
    user: Optional[User] = None
    denial: Optional[Denial] = None

    @property
    def granted(self) -> bool:
        return self.user is not None and self.denial is None


def role_rank(role) -> int:
    """Position of `role` in the hierarchy; unknown roles rank below EDITOR."""
    if isinstance(role, str):
        try:
            role = Role(role.upper())
        except ValueError:
            return -1
    try:
        return ROLE_ORDER.index(role)
    except ValueError:
        return -1


def required_rank(min_role) -> int:
    """Rank of a role used as a threshold; unknown names raise ValueError."""
    rank = role_rank(min_role)
    if rank < 0:
        raise ValueError(f'Unknown role: {min_role!r}')
    return rank


def check_role(user, min_role) -> AccessResult:
    """Decide whether `user` (possibly None) holds at least `min_role`."""
    threshold = required_rank(min_role)
    if user is None:
        return AccessResult(denial=Denial.NO_SESSION)
    if role_rank(user.role) < threshold:
        return AccessResult(denial=Denial.INSUFFICIENT_ROLE)
    return AccessResult(user=user)


def session_user():
    """The user behind the current request's session cookie, or None."""
    if current_user and current_user.is_authenticated:
        return current_user._get_current_object()
    return None


def authorize(min_role) -> AccessResult:
    return check_role(session_user(), min_role)


def require_role(min_role):
    """Return the current user if they hold at least `min_role`, else None."""
    return authorize(min_role).user


def role_required(min_role):
    """Decorator rejecting the request with 401 unless the role check passes.

    Runs before the view body, so no work happens for unauthorized callers.
    """
    required_rank(min_role)

    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            result = authorize(min_role)
            if not result.granted:
                logger.info('Denied %s %s: %s', request.method, request.path, result.denial.value)
                return login_manager.unauthorized()
            return f(*args, **kwargs)
        return wrapper
    return decorator
