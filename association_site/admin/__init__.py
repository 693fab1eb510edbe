"""
Admin Blueprint

Role-gated JSON API for managing board members, events, applications and
user accounts.
"""

from flask import Blueprint

admin_bp = Blueprint('admin', __name__)

from association_site.admin import routes  # noqa: E402, F401
