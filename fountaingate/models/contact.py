"""
Contact Inquiry Model
"""

from datetime import datetime
from fountaingate.extensions import db
from fountaingate.models.base import RecordMixin, new_id


class ContactInquiry(RecordMixin, db.Model):
    """Message submitted from the public Contact page"""
    __tablename__ = 'contact_inquiries'

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    name = db.Column(db.String(120), nullable=False, default='')
    email = db.Column(db.String(120), nullable=False, default='')
    phone = db.Column(db.String(40), default='')
    message = db.Column(db.Text, default='')
    status = db.Column(db.String(20), default='new', nullable=False)  # new | read | responded
    created_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)

    def __repr__(self):
        return f'<ContactInquiry {self.name} [{self.status}]>'
