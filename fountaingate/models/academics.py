"""
Academics Models
"""

from fountaingate.extensions import db
from fountaingate.models.base import RecordMixin, new_id


class AcademicProgram(RecordMixin, db.Model):
    """Programme offered by the school (Creche, Nursery, Primary, JHS)"""
    __tablename__ = 'academic_programs'

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    name = db.Column(db.String(120), nullable=False, default='')
    description = db.Column(db.Text, default='')
    age_range = db.Column(db.String(50), default='')
    icon = db.Column(db.String(50), default='')
    features = db.Column(db.JSON, default=list)
    order_index = db.Column(db.Integer, default=0, nullable=False)

    def __repr__(self):
        return f'<AcademicProgram {self.name}>'


class AcademicFacility(RecordMixin, db.Model):
    __tablename__ = 'academic_facilities'

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    title = db.Column(db.String(200), nullable=False, default='')
    description = db.Column(db.Text, default='')
    icon = db.Column(db.String(50), default='')
    order_index = db.Column(db.Integer, default=0, nullable=False)

    def __repr__(self):
        return f'<AcademicFacility {self.title}>'
