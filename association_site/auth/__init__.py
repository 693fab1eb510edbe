"""
Auth Blueprint

Cookie-based session authentication: login, logout, current user and
password change.
"""

from flask import Blueprint

auth_bp = Blueprint('auth', __name__)

from association_site.auth import routes  # noqa: E402, F401
