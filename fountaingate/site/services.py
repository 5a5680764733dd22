"""
Site Services

Gathers the content each public page renders and records form submissions.
A failed fetch renders as an empty section rather than an error page.
"""

import logging
from dataclasses import asdict

from fountaingate.services import (
    BackendError, OperationResult, SiteContentManager, get_backend, get_content_cache,
)
from fountaingate.services.site_content import section_keys

logger = logging.getLogger(__name__)

# Same-day posts show the most recently created first
NEWS_ORDER = ('published_date', 'created_at')


def fetch_collection(collection, order_by='order_index', descending=False, limit=None):
    try:
        return get_backend().select(collection, order_by=order_by, descending=descending, limit=limit)
    except BackendError as e:
        logger.error('Error fetching %s: %s', collection, e)
        return []


def fetch_content(*sections):
    return SiteContentManager(get_backend()).load(keys=section_keys(*sections))


def get_home_data():
    return {
        'slides': fetch_collection('carousel_slides'),
        'stats': fetch_collection('homepage_stats'),
        'features': fetch_collection('homepage_features'),
        'content': fetch_content('welcome', 'cta'),
    }


def get_about_data():
    return {
        'core_values': fetch_collection('core_values'),
        'staff': fetch_collection('staff_members'),
        'content': fetch_content('mission', 'vision', 'history'),
    }


def get_academics_data():
    return {
        'programs': fetch_collection('academic_programs'),
        'facilities': fetch_collection('academic_facilities'),
        'content': fetch_content('academic_excellence'),
    }


def get_admissions_data():
    return {
        'steps': fetch_collection('admission_steps'),
        'requirements': fetch_collection('admission_requirements'),
        'documents': fetch_collection('required_documents'),
        'content': fetch_content('admissions_contact'),
    }


def get_contact_data():
    return {'content': fetch_content('contact_info', 'social_media')}


def get_news_and_events():
    """News (newest first) and events (soonest first) from the configured source."""
    cache = get_content_cache()
    if cache is not None:
        return {
            'news': [asdict(item) for item in cache.news],
            'events': [asdict(item) for item in cache.events],
        }
    return {
        'news': fetch_collection('news_posts', order_by=NEWS_ORDER, descending=True),
        'events': fetch_collection('events', order_by='event_date'),
    }


def get_gallery_data(media_type='all', category='all'):
    items = fetch_collection('gallery_items', order_by='created_at', descending=True)
    categories = []
    for item in items:
        if item.get('category') and item['category'] not in categories:
            categories.append(item['category'])

    filtered = [
        item for item in items
        if (media_type in (None, '', 'all') or item.get('media_type') == media_type)
        and (category in (None, '', 'all') or item.get('category') == category)
    ]
    return {
        'items': filtered,
        'categories': categories,
        'media_type': media_type or 'all',
        'category': category or 'all',
    }


def _required(form, names):
    values = {name: (form.get(name) or '').strip() for name in names}
    missing = [name for name, value in values.items() if not value]
    return values, missing


def submit_contact_inquiry(form):
    """Validate and store a contact form submission.

    Returns ``(OperationResult, values)`` so the form can be re-rendered.
    """
    values, missing = _required(form, ['name', 'email', 'message'])
    values['phone'] = (form.get('phone') or '').strip()
    if missing:
        return OperationResult.failure('Please fill in all required fields.'), values
    if '@' not in values['email']:
        return OperationResult.failure('Please provide a valid email address.'), values

    try:
        get_backend().insert('contact_inquiries', [dict(values, status='new')])
    except BackendError as e:
        logger.error('Error submitting contact inquiry: %s', e)
        return OperationResult.failure(
            'Sorry, your message could not be sent. Please try again.'), values
    return OperationResult.success("Thank you! Your message has been sent. We'll be in touch soon."), {}


def submit_admission_inquiry(form):
    values, missing = _required(form, ['parent_name', 'email', 'phone', 'student_name'])
    for name in ('student_age', 'grade_level', 'message'):
        values[name] = (form.get(name) or '').strip()
    if missing:
        return OperationResult.failure('Please fill in all required fields.'), values
    if '@' not in values['email']:
        return OperationResult.failure('Please provide a valid email address.'), values

    try:
        get_backend().insert('admission_inquiries', [dict(values, status='new')])
    except BackendError as e:
        logger.error('Error submitting admission inquiry: %s', e)
        return OperationResult.failure(
            'Sorry, your inquiry could not be submitted. Please try again.'), values
    return OperationResult.success(
        'Thank you for your interest! Our admissions team will contact you shortly.'), {}
