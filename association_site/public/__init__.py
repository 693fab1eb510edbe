"""
Public Blueprint

Unauthenticated JSON API backing the public pages.
"""

from flask import Blueprint

public_bp = Blueprint('public', __name__)

from association_site.public import routes  # noqa: E402, F401
