"""
User and Session Models
"""

import enum

from flask_login import UserMixin

from association_site.extensions import db
from association_site.services.dates import utcnow


class Role(enum.Enum):
    """Role tiers in ascending order of privilege."""
    EDITOR = 'EDITOR'
    ADMIN = 'ADMIN'
    SUPERADMIN = 'SUPERADMIN'


# Ordered lowest to highest; a role grants everything below it
ROLE_ORDER = [Role.EDITOR, Role.ADMIN, Role.SUPERADMIN]


class User(UserMixin, db.Model):
    """Back-office account"""
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(80), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(db.Enum(Role, native_enum=False, length=16), nullable=False, default=Role.EDITOR)
    first_name = db.Column(db.String(80))
    last_name = db.Column(db.String(80))
    email = db.Column(db.String(120))
    created_at = db.Column(db.DateTime, default=utcnow)

    sessions = db.relationship('UserSession', backref='user', lazy=True,
                               cascade='all, delete-orphan')

    def to_dict(self, detailed=False):
        data = {'id': self.id, 'username': self.username, 'role': self.role.value}
        if detailed:
            data.update(firstName=self.first_name, lastName=self.last_name, email=self.email)
        return data

    def __repr__(self):
        return f'<User {self.username} {self.role.value}>'


class UserSession(db.Model):
    """Opaque session token bound to one user with an absolute expiry"""
    __tablename__ = 'sessions'

    id = db.Column(db.Integer, primary_key=True)
    session_token = db.Column(db.String(64), unique=True, nullable=False, index=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    expires = db.Column(db.DateTime, nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow)

    def __repr__(self):
        return f'<UserSession user:{self.user_id} expires:{self.expires}>'
