"""
Site Content Services

Editable text fields stored in the ``site_content`` key/value collection,
grouped into sections for the admin editor.
"""

import logging

from fountaingate.services.backend import BackendError
from fountaingate.services.content import OperationResult

logger = logging.getLogger(__name__)

CONTENT_TYPES = ('text', 'textarea', 'html', 'url', 'json')


def _field(key, label, type='text', placeholder=''):
    return {'key': key, 'label': label, 'type': type, 'placeholder': placeholder}


CONTENT_SECTIONS = {
    'mission': {
        'title': 'Mission Statement',
        'fields': [
            _field('mission_text', 'Mission Statement', 'textarea',
                   'Enter your school mission statement...'),
        ],
    },
    'vision': {
        'title': 'Vision Statement',
        'fields': [
            _field('vision_text', 'Vision Statement', 'textarea',
                   'Enter your school vision statement...'),
        ],
    },
    'history': {
        'title': 'School History',
        'fields': [
            _field('history_paragraph_1', 'First Paragraph', 'textarea'),
            _field('history_paragraph_2', 'Second Paragraph', 'textarea'),
            _field('history_paragraph_3', 'Third Paragraph', 'textarea'),
        ],
    },
    'welcome': {
        'title': 'Home - Welcome Section',
        'fields': [
            _field('welcome_heading', 'Heading', 'text', "Building Tomorrow's Leaders Today"),
            _field('welcome_paragraph_1', 'First Paragraph', 'textarea'),
            _field('welcome_paragraph_2', 'Second Paragraph', 'textarea'),
            _field('welcome_image_url', 'Image URL', 'url'),
        ],
    },
    'cta': {
        'title': 'Home - Call to Action',
        'fields': [
            _field('cta_heading', 'Heading', 'text', 'Ready to Join Our Community?'),
            _field('cta_subheading', 'Subheading', 'textarea'),
        ],
    },
    'contact_info': {
        'title': 'Contact Information',
        'fields': [
            _field('address_line_1', 'Address Line 1'),
            _field('address_line_2', 'Address Line 2'),
            _field('address_line_3', 'City/Region'),
            _field('phone_primary', 'Primary Phone'),
            _field('phone_secondary', 'Secondary Phone'),
            _field('email_primary', 'Primary Email'),
            _field('email_secondary', 'Secondary Email'),
            _field('office_hours', 'Office Hours'),
        ],
    },
    'social_media': {
        'title': 'Social Media Links',
        'fields': [
            _field('facebook_url', 'Facebook URL', 'url'),
            _field('twitter_url', 'Twitter URL', 'url'),
            _field('instagram_url', 'Instagram URL', 'url'),
            _field('youtube_url', 'YouTube URL', 'url'),
        ],
    },
    'academic_excellence': {
        'title': 'Academics - Excellence Stats',
        'fields': [
            _field('bece_pass_rate', 'BECE Pass Rate'),
            _field('category_a_rate', 'Category A Placement Rate'),
            _field('awards_won', 'Awards Won'),
        ],
    },
    'admissions_contact': {
        'title': 'Admissions - Contact Details',
        'fields': [
            _field('admissions_phone', 'Admissions Phone'),
            _field('admissions_email', 'Admissions Email'),
        ],
    },
}


def section_keys(*sections):
    return [f['key'] for name in sections for f in CONTENT_SECTIONS[name]['fields']]


class SiteContentManager:
    """Read and upsert ``site_content`` values keyed by ``key``."""

    collection = 'site_content'

    def __init__(self, backend):
        self.backend = backend
        self.content = {}

    def load(self, keys=None, sections=None):
        """Return ``{key: value}``; on error log and return what was loaded before."""
        in_ = None
        if keys is not None:
            in_ = ('key', list(keys))
        elif sections is not None:
            in_ = ('section', list(sections))

        try:
            rows = self.backend.select(self.collection, in_=in_)
        except BackendError as e:
            logger.error('Error fetching site content: %s', e)
            return dict(self.content)

        self.content = {row['key']: row.get('value') or '' for row in rows}
        return dict(self.content)

    def field_type(self, section, key):
        for f in CONTENT_SECTIONS.get(section, {}).get('fields', []):
            if f['key'] == key:
                return f['type']
        return 'text'

    def save(self, section, values):
        try:
            for key, value in values.items():
                content_type = self.field_type(section, key)
                if content_type not in CONTENT_TYPES:
                    content_type = 'text'
                self.backend.upsert(
                    self.collection,
                    {'key': key, 'value': value, 'section': section or 'general', 'type': content_type},
                    on_conflict='key',
                )
        except BackendError as e:
            logger.error('Error saving site content for %s: %s', section, e)
            return OperationResult.failure('Error saving content. Please try again.')

        self.load()
        return OperationResult.success('Content saved successfully.')
