"""
Credential Hashing

Passwords are stored as Werkzeug-format PBKDF2 records:

    pbkdf2:sha256:<iterations>$<salt>$<hex derived key>

The scheme, digest and iteration count travel with every record, so the
work factor for new hashes can be raised without invalidating old ones.
"""

import hashlib
import logging

from flask import current_app, has_app_context
from werkzeug.security import check_password_hash, generate_password_hash

logger = logging.getLogger(__name__)

SCHEME = 'pbkdf2'
DIGEST = 'sha256'
KEY_LENGTH = 32
SALT_LENGTH = 16
MIN_ITERATIONS = 100_000
DEFAULT_ITERATIONS = 100_000
MAX_ITERATIONS = 5_000_000


def _configured_iterations():
    if has_app_context():
        return int(current_app.config.get('PASSWORD_HASH_ITERATIONS', DEFAULT_ITERATIONS))
    return DEFAULT_ITERATIONS


def _method(iterations):
    return f'{SCHEME}:{DIGEST}:{iterations}'


def hash_password(password, salt=None, iterations=None):
    """Hash `password`, with a fresh random salt unless one is given."""
    if iterations is None:
        iterations = _configured_iterations()
    if iterations < MIN_ITERATIONS:
        raise ValueError(f'iterations must be at least {MIN_ITERATIONS}')

    if salt is None:
        return generate_password_hash(password, method=_method(iterations), salt_length=SALT_LENGTH)

    if not salt or '$' in salt:
        raise ValueError('salt must be a non-empty string without "$"')
    derived = hashlib.pbkdf2_hmac(
        DIGEST, password.encode('utf-8'), salt.encode('utf-8'), iterations, dklen=KEY_LENGTH
    ).hex()
    return f'{_method(iterations)}${salt}${derived}'


def verify_password(password, stored):
    """Check `password` against a stored record. Never raises."""
    if password is None or not stored or not isinstance(stored, str):
        return False
    if not stored.startswith(SCHEME + ':'):
        return False

    # Reject unusable parameters before handing the record to the KDF
    iterations = iterations_of(stored)
    digest = stored.split(':', 2)[1]
    if iterations is None or not MIN_ITERATIONS <= iterations <= MAX_ITERATIONS:
        return False
    if digest not in hashlib.algorithms_available:
        return False

    try:
        return check_password_hash(stored, password)
    except (ValueError, TypeError, OverflowError):
        logger.warning('Malformed password record rejected')
        return False


def iterations_of(stored):
    """Iteration count embedded in a stored record, or None if unreadable."""
    try:
        method = stored.split('$', 1)[0]
        scheme, _digest, iterations = method.split(':')
        return int(iterations) if scheme == SCHEME else None
    except (AttributeError, ValueError):
        return None


def needs_rehash(stored):
    """True when the record was hashed with fewer iterations than configured."""
    iterations = iterations_of(stored)
    return iterations is not None and iterations < _configured_iterations()
