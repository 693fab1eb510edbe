"""
Flask Extensions

The login manager does not use Flask's signed-cookie session: the current
user is resolved from an opaque, database-backed session token instead.
"""

from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager

# Database instance
db = SQLAlchemy()

# Resolves the `sid` cookie to a User (see auth.sessions)
login_manager = LoginManager()
