"""
Gallery Model
"""

from datetime import datetime
from fountaingate.extensions import db
from fountaingate.models.base import RecordMixin, new_id


class GalleryItem(RecordMixin, db.Model):
    """Photo or video shown on the Gallery page"""
    __tablename__ = 'gallery_items'

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    title = db.Column(db.String(200), nullable=False, default='')
    media_url = db.Column(db.String(500), nullable=False, default='')
    media_type = db.Column(db.String(10), default='photo', nullable=False)  # photo | video
    category = db.Column(db.String(80), default='')
    created_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)

    def __repr__(self):
        return f'<GalleryItem {self.media_type}:{self.title}>'
