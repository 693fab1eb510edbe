"""
Board Member Model
"""

from association_site.extensions import db
from association_site.services.dates import utcnow


class BoardMember(db.Model):
    """Board member shown on the about page, sorted by `order`"""
    __tablename__ = 'board_members'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    role = db.Column(db.String(120), nullable=False)
    # Secondary roles, free text
    roles = db.Column(db.String(255))
    image = db.Column(db.Text)
    order = db.Column('order', db.Integer, nullable=False, default=0, index=True)
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'role': self.role,
            'roles': self.roles,
            'image': self.image,
            'order': self.order,
        }

    def __repr__(self):
        return f'<BoardMember {self.name} #{self.order}>'
