"""
About Page Models
"""

from fountaingate.extensions import db
from fountaingate.models.base import RecordMixin, new_id


class CoreValue(RecordMixin, db.Model):
    __tablename__ = 'core_values'

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    title = db.Column(db.String(200), nullable=False, default='')
    description = db.Column(db.Text, default='')
    icon = db.Column(db.String(50), default='')
    order_index = db.Column(db.Integer, default=0, nullable=False)

    def __repr__(self):
        return f'<CoreValue {self.title}>'


class StaffMember(RecordMixin, db.Model):
    __tablename__ = 'staff_members'

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    name = db.Column(db.String(120), nullable=False, default='')
    position = db.Column(db.String(120), default='')
    image_url = db.Column(db.String(500), default='')
    bio = db.Column(db.Text, default='')
    order_index = db.Column(db.Integer, default=0, nullable=False)

    def __repr__(self):
        return f'<StaffMember {self.name}>'
