"""
Site Content Model

Generic key -> value store for the editable text fields on every page.
"""

from fountaingate.extensions import db
from fountaingate.models.base import RecordMixin, new_id


class SiteContent(RecordMixin, db.Model):
    __tablename__ = 'site_content'

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    section = db.Column(db.String(60), default='general', index=True)
    key = db.Column(db.String(100), unique=True, nullable=False, index=True)
    value = db.Column(db.Text, default='')
    type = db.Column(db.String(20), default='text', nullable=False)  # text | textarea | html | url | json

    def __repr__(self):
        return f'<SiteContent {self.key}>'
