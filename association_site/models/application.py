"""
Membership Request and Application Models
"""

import enum

from association_site.extensions import db
from association_site.services.dates import utcnow


class ApplicationType(enum.Enum):
    TEAM = 'TEAM'
    MEMBER = 'MEMBER'


class ApplicationStatus(enum.Enum):
    PENDING = 'PENDING'
    ACCEPTED = 'ACCEPTED'
    REJECTED = 'REJECTED'


# PENDING is the only state with outgoing transitions
STATUS_TRANSITIONS = {
    ApplicationStatus.PENDING: {ApplicationStatus.ACCEPTED, ApplicationStatus.REJECTED},
    ApplicationStatus.ACCEPTED: set(),
    ApplicationStatus.REJECTED: set(),
}


class MembershipRequest(db.Model):
    """Public membership request (append-only)"""
    __tablename__ = 'membership_requests'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(120), nullable=False, index=True)
    phone = db.Column(db.String(40))
    university = db.Column(db.String(200))
    study_program = db.Column(db.String(200))
    notes = db.Column(db.Text)
    user_email_sent = db.Column(db.Boolean, nullable=False, default=False)
    admin_email_sent = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime, default=utcnow, index=True)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'phone': self.phone,
            'university': self.university,
            'studyProgram': self.study_program,
            'notes': self.notes,
            'userEmailSent': self.user_email_sent,
            'adminEmailSent': self.admin_email_sent,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f'<MembershipRequest {self.email}>'


class Application(db.Model):
    """Team or member application reviewed by the board"""
    __tablename__ = 'applications'

    id = db.Column(db.Integer, primary_key=True)
    type = db.Column(db.Enum(ApplicationType, native_enum=False, length=16), nullable=False, index=True)
    name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(120), nullable=False)
    phone = db.Column(db.String(40))
    university = db.Column(db.String(200))
    study_program = db.Column(db.String(200))
    message = db.Column(db.Text)
    status = db.Column(db.Enum(ApplicationStatus, native_enum=False, length=16),
                       nullable=False, default=ApplicationStatus.PENDING)
    user_email_sent = db.Column(db.Boolean, nullable=False, default=False)
    admin_email_sent = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime, default=utcnow, index=True)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    def can_transition_to(self, status):
        return status in STATUS_TRANSITIONS[self.status]

    def to_dict(self):
        return {
            'id': self.id,
            'type': self.type.value,
            'name': self.name,
            'email': self.email,
            'phone': self.phone,
            'university': self.university,
            'studyProgram': self.study_program,
            'message': self.message,
            'status': self.status.value,
            'userEmailSent': self.user_email_sent,
            'adminEmailSent': self.admin_email_sent,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f'<Application {self.type.value} {self.email} {self.status.value}>'
