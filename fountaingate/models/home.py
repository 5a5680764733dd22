"""
Homepage Models
"""

from fountaingate.extensions import db
from fountaingate.models.base import RecordMixin, new_id


class CarouselSlide(RecordMixin, db.Model):
    """Hero carousel slide"""
    __tablename__ = 'carousel_slides'

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    title = db.Column(db.String(200), nullable=False, default='')
    description = db.Column(db.Text, default='')
    image_url = db.Column(db.String(500), default='')
    order_index = db.Column(db.Integer, default=0, nullable=False)

    def __repr__(self):
        return f'<CarouselSlide {self.title}>'


class HomepageStat(RecordMixin, db.Model):
    """Headline number shown on the homepage (e.g. "500+ Students")"""
    __tablename__ = 'homepage_stats'

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    value = db.Column(db.String(50), nullable=False, default='')
    label = db.Column(db.String(100), nullable=False, default='')
    order_index = db.Column(db.Integer, default=0, nullable=False)

    def __repr__(self):
        return f'<HomepageStat {self.value} {self.label}>'


class HomepageFeature(RecordMixin, db.Model):
    """Feature card on the homepage"""
    __tablename__ = 'homepage_features'

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    icon = db.Column(db.String(50), default='')
    title = db.Column(db.String(200), nullable=False, default='')
    description = db.Column(db.Text, default='')
    order_index = db.Column(db.Integer, default=0, nullable=False)

    def __repr__(self):
        return f'<HomepageFeature {self.title}>'
