"""
Admin Collection Definitions

One entry per editable collection: title, editor fields, list order and the
client-side filters offered on the list page. News and events are separate
entries with their own field sets.
"""

from flask import abort

from fountaingate.services import (
    CacheEntityManager, EntityManager, get_backend, get_content_cache,
)


def field(name, label, type='text', required=False, options=None):
    return {'name': name, 'label': label, 'type': type, 'required': required,
            'options': options or []}


ICON_FIELD = field('icon', 'Icon name')

COLLECTIONS = {
    'carousel_slides': {
        'title': 'Carousel Slides',
        'label': 'slide',
        'fields': [
            field('title', 'Title', required=True),
            field('description', 'Description', 'textarea'),
            field('image_url', 'Image URL', 'url', required=True),
        ],
        'summary': ['title', 'description'],
    },
    'homepage_stats': {
        'title': 'Homepage Stats',
        'label': 'stat',
        'fields': [
            field('value', 'Value', required=True),
            field('label', 'Label', required=True),
        ],
        'summary': ['value', 'label'],
    },
    'homepage_features': {
        'title': 'Homepage Features',
        'label': 'feature',
        'fields': [
            ICON_FIELD,
            field('title', 'Title', required=True),
            field('description', 'Description', 'textarea'),
        ],
        'summary': ['title', 'description'],
    },
    'core_values': {
        'title': 'Core Values',
        'label': 'core value',
        'fields': [
            field('title', 'Title', required=True),
            field('description', 'Description', 'textarea'),
            ICON_FIELD,
        ],
        'summary': ['title', 'description'],
    },
    'staff_members': {
        'title': 'Staff Members',
        'label': 'staff member',
        'fields': [
            field('name', 'Name', required=True),
            field('position', 'Position', required=True),
            field('image_url', 'Photo URL', 'url'),
            field('bio', 'Biography', 'textarea'),
        ],
        'summary': ['name', 'position'],
    },
    'academic_programs': {
        'title': 'Academic Programs',
        'label': 'program',
        'fields': [
            field('name', 'Program name', required=True),
            field('age_range', 'Age range'),
            field('description', 'Description', 'textarea'),
            ICON_FIELD,
            field('features', 'Features (one per line)', 'list'),
        ],
        'summary': ['name', 'age_range'],
    },
    'academic_facilities': {
        'title': 'Academic Facilities',
        'label': 'facility',
        'fields': [
            field('title', 'Title', required=True),
            field('description', 'Description', 'textarea'),
            ICON_FIELD,
        ],
        'summary': ['title', 'description'],
    },
    'admission_steps': {
        'title': 'Admission Steps',
        'label': 'step',
        'fields': [
            field('title', 'Title', required=True),
            field('description', 'Description', 'textarea'),
            ICON_FIELD,
        ],
        'summary': ['title', 'description'],
    },
    'admission_requirements': {
        'title': 'Admission Requirements',
        'label': 'requirement',
        'fields': [
            field('requirement', 'Requirement', required=True),
        ],
        'summary': ['requirement'],
    },
    'required_documents': {
        'title': 'Required Documents',
        'label': 'document',
        'fields': [
            field('title', 'Title', required=True),
            field('description', 'Description', 'textarea'),
        ],
        'summary': ['title', 'description'],
    },
    'gallery_items': {
        'title': 'Gallery',
        'label': 'gallery item',
        'order_by': 'created_at',
        'descending': True,
        'fields': [
            field('title', 'Title', required=True),
            field('media_url', 'Media URL', 'url', required=True),
            field('media_type', 'Media type', 'select', required=True, options=['photo', 'video']),
            field('category', 'Category'),
        ],
        'summary': ['title', 'media_type', 'category'],
        'filters': ['media_type', 'category'],
    },
    'news_posts': {
        'title': 'News',
        'label': 'news post',
        'cache_kind': 'news',
        'order_by': ('published_date', 'created_at'),
        'descending': True,
        'fields': [
            field('title', 'Title', required=True),
            field('excerpt', 'Excerpt', 'textarea', required=True),
            field('content', 'Content', 'textarea', required=True),
            field('image_url', 'Image URL', 'url'),
            field('published_date', 'Published date', 'date', required=True),
        ],
        'summary': ['title', 'published_date'],
    },
    'events': {
        'title': 'Events',
        'label': 'event',
        'cache_kind': 'events',
        'order_by': 'event_date',
        'descending': False,
        'fields': [
            field('title', 'Title', required=True),
            field('description', 'Description', 'textarea', required=True),
            field('event_date', 'Event date', 'date', required=True),
            field('location', 'Location', required=True),
            field('image_url', 'Image URL', 'url'),
        ],
        'summary': ['title', 'event_date', 'location'],
    },
}


def get_collection(name):
    definition = COLLECTIONS.get(name)
    if definition is None:
        abort(404)
    return definition


def blank_record(definition):
    blank = {}
    for f in definition['fields']:
        if f['type'] == 'list':
            blank[f['name']] = []
        elif f['type'] == 'select':
            blank[f['name']] = f['options'][0]
        else:
            blank[f['name']] = ''
    return blank


def manager_for(name):
    """Build the entity manager for a collection, honouring NEWS_EVENTS_SOURCE."""
    definition = get_collection(name)
    cache = get_content_cache()
    if cache is not None and definition.get('cache_kind'):
        return CacheEntityManager(cache, definition['cache_kind'],
                                  blank=blank_record(definition), label=definition['label'])
    return EntityManager(
        get_backend(),
        name,
        order_by=definition.get('order_by', 'order_index'),
        descending=definition.get('descending', False),
        blank=blank_record(definition),
        label=definition['label'],
    )


def record_from_form(definition, form, record_id=''):
    """Collect the editor fields from a submitted form.

    Returns ``(record, errors)``; list fields are split one item per line.
    """
    record = {'id': record_id}
    errors = []
    for f in definition['fields']:
        raw = form.get(f['name'], '')
        if f['type'] == 'list':
            value = [line.strip() for line in raw.splitlines() if line.strip()]
            missing = not value
        else:
            value = raw.strip()
            missing = not value
        if f['type'] == 'select' and value and value not in f['options']:
            errors.append(f'{f["label"]} must be one of: {", ".join(f["options"])}.')
        if f['required'] and missing:
            errors.append(f'{f["label"]} is required.')
        if f['name'] == 'image_url' and not value:
            value = None
        record[f['name']] = value
    return record, errors
