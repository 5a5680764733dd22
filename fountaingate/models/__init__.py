"""
Models Package

Exports all models for easy importing. ``COLLECTION_MODELS`` maps each
backend collection name to its model.
"""

from fountaingate.models.home import CarouselSlide, HomepageStat, HomepageFeature
from fountaingate.models.about import CoreValue, StaffMember
from fountaingate.models.academics import AcademicProgram, AcademicFacility
from fountaingate.models.admissions import (
    AdmissionStep, AdmissionRequirement, RequiredDocument, AdmissionInquiry
)
from fountaingate.models.news import NewsPost, Event
from fountaingate.models.gallery import GalleryItem
from fountaingate.models.contact import ContactInquiry
from fountaingate.models.site_content import SiteContent

COLLECTION_MODELS = {
    model.__tablename__: model
    for model in (
        CarouselSlide, HomepageStat, HomepageFeature,
        CoreValue, StaffMember,
        AcademicProgram, AcademicFacility,
        AdmissionStep, AdmissionRequirement, RequiredDocument, AdmissionInquiry,
        NewsPost, Event,
        GalleryItem,
        ContactInquiry,
        SiteContent,
    )
}

__all__ = [
    'CarouselSlide', 'HomepageStat', 'HomepageFeature',
    'CoreValue', 'StaffMember',
    'AcademicProgram', 'AcademicFacility',
    'AdmissionStep', 'AdmissionRequirement', 'RequiredDocument', 'AdmissionInquiry',
    'NewsPost', 'Event',
    'GalleryItem',
    'ContactInquiry',
    'SiteContent',
    'COLLECTION_MODELS',
]
