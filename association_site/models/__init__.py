"""
Models Package

Exports all models for easy importing.
"""

from association_site.models.user import User, UserSession, Role, ROLE_ORDER
from association_site.models.board import BoardMember
from association_site.models.event import Event, PastEvent
from association_site.models.application import (
    Application,
    ApplicationStatus,
    ApplicationType,
    MembershipRequest,
)

__all__ = [
    'User',
    'UserSession',
    'Role',
    'ROLE_ORDER',
    'BoardMember',
    'Event',
    'PastEvent',
    'Application',
    'ApplicationStatus',
    'ApplicationType',
    'MembershipRequest',
]
