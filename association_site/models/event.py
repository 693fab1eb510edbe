"""
Event Models

Dates are stored at UTC midnight and never carry a time-of-day; the
optional `time` string is display-only.
"""

from association_site.extensions import db
from association_site.services.dates import to_date_only_string, utcnow


class Event(db.Model):
    """Upcoming event"""
    __tablename__ = 'events'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    date = db.Column(db.DateTime, nullable=False, index=True)
    time = db.Column(db.String(20))
    date_tba = db.Column(db.Boolean, nullable=False, default=False)
    venue = db.Column(db.String(200))
    location = db.Column(db.String(200))
    description = db.Column(db.Text)
    image = db.Column(db.Text)
    gallery = db.Column(db.Text)
    button_text = db.Column(db.String(80))
    button_url = db.Column(db.String(500))
    hidden = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'date': to_date_only_string(self.date),
            'time': self.time,
            'dateTBA': self.date_tba,
            'venue': self.venue,
            'location': self.location,
            'description': self.description,
            'image': self.image,
            'gallery': self.gallery,
            'buttonText': self.button_text,
            'buttonUrl': self.button_url,
            'hidden': self.hidden,
        }

    def __repr__(self):
        return f'<Event {self.title} {to_date_only_string(self.date)}>'


class PastEvent(db.Model):
    """Archived event with an optional photo gallery"""
    __tablename__ = 'past_events'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    date = db.Column(db.DateTime, nullable=False, index=True)
    venue = db.Column(db.String(200))
    location = db.Column(db.String(200))
    description = db.Column(db.Text)
    image = db.Column(db.Text)
    # Comma-separated image URLs
    gallery = db.Column(db.Text)
    hidden = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'date': to_date_only_string(self.date),
            'venue': self.venue,
            'location': self.location,
            'description': self.description,
            'image': self.image,
            'gallery': self.gallery,
            'hidden': self.hidden,
        }

    def __repr__(self):
        return f'<PastEvent {self.title} {to_date_only_string(self.date)}>'
