"""
News & Events Models
"""

from datetime import datetime
from fountaingate.extensions import db
from fountaingate.models.base import RecordMixin, new_id


class NewsPost(RecordMixin, db.Model):
    __tablename__ = 'news_posts'

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    title = db.Column(db.String(200), nullable=False, default='')
    excerpt = db.Column(db.Text, default='')
    content = db.Column(db.Text, default='')
    image_url = db.Column(db.String(500))
    published_date = db.Column(db.String(10), default='')  # YYYY-MM-DD
    created_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)

    def __repr__(self):
        return f'<NewsPost {self.title}>'


class Event(RecordMixin, db.Model):
    __tablename__ = 'events'

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    title = db.Column(db.String(200), nullable=False, default='')
    description = db.Column(db.Text, default='')
    event_date = db.Column(db.String(10), default='')  # YYYY-MM-DD
    location = db.Column(db.String(200), default='')
    image_url = db.Column(db.String(500))
    created_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)

    def __repr__(self):
        return f'<Event {self.title} on {self.event_date}>'
