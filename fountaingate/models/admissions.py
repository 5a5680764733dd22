"""
Admissions Models
"""

from datetime import datetime
from fountaingate.extensions import db
from fountaingate.models.base import RecordMixin, new_id


class AdmissionStep(RecordMixin, db.Model):
    __tablename__ = 'admission_steps'

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    title = db.Column(db.String(200), nullable=False, default='')
    description = db.Column(db.Text, default='')
    icon = db.Column(db.String(50), default='')
    order_index = db.Column(db.Integer, default=0, nullable=False)

    def __repr__(self):
        return f'<AdmissionStep {self.title}>'


class AdmissionRequirement(RecordMixin, db.Model):
    __tablename__ = 'admission_requirements'

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    requirement = db.Column(db.String(255), nullable=False, default='')
    order_index = db.Column(db.Integer, default=0, nullable=False)

    def __repr__(self):
        return f'<AdmissionRequirement {self.requirement}>'


class RequiredDocument(RecordMixin, db.Model):
    __tablename__ = 'required_documents'

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    title = db.Column(db.String(200), nullable=False, default='')
    description = db.Column(db.Text, default='')
    order_index = db.Column(db.Integer, default=0, nullable=False)

    def __repr__(self):
        return f'<RequiredDocument {self.title}>'


class AdmissionInquiry(RecordMixin, db.Model):
    """Enrolment enquiry submitted from the public Admissions page"""
    __tablename__ = 'admission_inquiries'

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    parent_name = db.Column(db.String(120), nullable=False, default='')
    email = db.Column(db.String(120), nullable=False, default='')
    phone = db.Column(db.String(40), default='')
    student_name = db.Column(db.String(120), default='')
    student_age = db.Column(db.String(20), default='')
    grade_level = db.Column(db.String(60), default='')
    message = db.Column(db.Text, default='')
    status = db.Column(db.String(20), default='new', nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)

    def __repr__(self):
        return f'<AdmissionInquiry {self.parent_name} for {self.student_name}>'
