"""
Local Content Cache

News and events kept in local key/value storage instead of the backend,
used when ``NEWS_EVENTS_SOURCE = 'local'``. Every mutation rebuilds the whole
sequence, re-sorts it (news newest first, events soonest first) and writes it
back in one piece.
"""

import json
import logging
import random
import string
import threading
import time
from dataclasses import asdict, dataclass, fields
from datetime import date
from typing import ClassVar, Optional

from fountaingate.services.content import EntityManager, OperationResult

logger = logging.getLogger(__name__)

STORAGE_KEYS = {
    'news': 'fga-news',
    'events': 'fga-events',
}

_BASE36 = string.digits + string.ascii_lowercase


@dataclass
class NewsPost:
    kind: ClassVar[str] = 'news'
    id: str
    title: str
    excerpt: str
    content: str
    published_date: str
    image_url: Optional[str] = None


@dataclass
class EventItem:
    kind: ClassVar[str] = 'events'
    id: str
    title: str
    description: str
    event_date: str
    location: str
    image_url: Optional[str] = None


RECORD_TYPES = {cls.kind: cls for cls in (NewsPost, EventItem)}

SEED_NEWS = [
    NewsPost(
        id='news-1',
        title='New Science Laboratory Commissioned',
        excerpt='Our modern science laboratory is now open, offering hands-on learning '
                'experiences for students across all levels.',
        content='We are excited to announce the commissioning of our new science laboratory '
                'equipped with state-of-the-art apparatus. This facility will enable students '
                'from Creche to JHS to explore scientific concepts through practical '
                'experiments, fostering curiosity and innovation.',
        image_url='https://images.pexels.com/photos/3825571/pexels-photo-3825571.jpeg'
                  '?auto=compress&cs=tinysrgb&w=800',
        published_date='2025-10-15',
    ),
    NewsPost(
        id='news-2',
        title='Fountain Gate Students Excel in BECE',
        excerpt='Congratulations to our JHS graduates for achieving a 100% pass rate in the '
                '2025 BECE examinations!',
        content='The Fountain Gate Academy JHS class of 2025 has achieved outstanding results in '
                'the BECE examinations, with all students securing admission into top Category A '
                'senior high schools. Their success reflects the dedication of our teachers, '
                'students, and supportive parents.',
        image_url='https://images.pexels.com/photos/4449511/pexels-photo-4449511.jpeg'
                  '?auto=compress&cs=tinysrgb&w=800',
        published_date='2025-09-28',
    ),
]

SEED_EVENTS = [
    EventItem(
        id='event-1',
        title='Open House & Campus Tour',
        description='Prospective parents and students are invited to tour our facilities, '
                    'meet teachers, and experience life at Fountain Gate Academy.',
        event_date='2025-11-15',
        location='Fountain Gate Academy Campus',
        image_url='https://images.pexels.com/photos/256395/pexels-photo-256395.jpeg'
                  '?auto=compress&cs=tinysrgb&w=800',
    ),
    EventItem(
        id='event-2',
        title='Cultural Day Celebration',
        description='A vibrant celebration of Ghanaian culture featuring performances, '
                    'exhibitions, and traditional cuisine prepared by students.',
        event_date='2026-01-20',
        location='School Assembly Hall',
        image_url='https://images.pexels.com/photos/935985/pexels-photo-935985.jpeg'
                  '?auto=compress&cs=tinysrgb&w=800',
    ),
]


def _base36(number):
    if number == 0:
        return '0'
    digits = []
    while number:
        number, rem = divmod(number, 36)
        digits.append(_BASE36[rem])
    return ''.join(reversed(digits))


def generate_id(prefix):
    """``<prefix>-<base36 ms timestamp>-<6 random base36 chars>``; collisions are not checked."""
    millis = int(time.time() * 1000)
    suffix = ''.join(random.choice(_BASE36) for _ in range(6))
    return f'{prefix}-{_base36(millis)}-{suffix}'


def _date_key(value):
    try:
        return date.fromisoformat((value or '')[:10])
    except ValueError:
        return date.min


def sort_news(items):
    return sorted(items, key=lambda n: _date_key(n.published_date), reverse=True)


def sort_events(items):
    return sorted(items, key=lambda e: _date_key(e.event_date))


def _sanitize(cls, payload):
    """Trim every string field and normalise a blank image URL to None."""
    clean = {}
    for f in fields(cls):
        if f.name == 'id':
            continue
        value = payload.get(f.name)
        if isinstance(value, str):
            value = value.strip()
        if f.name == 'image_url':
            value = value or None
        elif value is None:
            value = ''
        clean[f.name] = value
    return clean


def _from_dict(cls, data):
    names = [f.name for f in fields(cls)]
    return cls(**{name: data[name] for name in names if name in data})


SORTERS = {'news': sort_news, 'events': sort_events}
SEEDS = {'news': SEED_NEWS, 'events': SEED_EVENTS}
ID_PREFIXES = {'news': 'news', 'events': 'event'}


class LocalContentCache:
    """News and events persisted in a ``Storage`` under fixed keys.

    Storage is the source of truth: every read and every mutation loads the
    current list first, so several workers can share one cache file.
    """

    def __init__(self, storage):
        self.storage = storage
        self._lock = threading.Lock()

    @property
    def news(self):
        return self.load('news')

    @property
    def events(self):
        return self.load('events')

    def load(self, kind):
        key = STORAGE_KEYS[kind]
        cls = RECORD_TYPES[kind]
        try:
            stored = self.storage.get(key)
            if not stored:
                return list(SEEDS[kind])
            parsed = json.loads(stored)
            if not isinstance(parsed, list):
                raise ValueError(f'expected a list, got {type(parsed).__name__}')
            return [_from_dict(cls, item) for item in parsed]
        except Exception as e:
            logger.warning('Failed to parse local storage for key "%s": %s', key, e)
            return list(SEEDS[kind])

    def _persist(self, kind, items):
        key = STORAGE_KEYS[kind]
        try:
            self.storage.set(key, json.dumps([asdict(item) for item in items]))
        except Exception as e:
            logger.warning('Failed to write local storage for key "%s": %s', key, e)

    def add(self, kind, payload):
        cls = RECORD_TYPES[kind]
        entry = cls(id=generate_id(ID_PREFIXES[kind]), **_sanitize(cls, payload))
        with self._lock:
            self._persist(kind, SORTERS[kind]([entry] + self.load(kind)))
        return entry

    def update(self, kind, item_id, payload):
        """Replace one item; returns False when no item has ``item_id``."""
        cls = RECORD_TYPES[kind]
        clean = _sanitize(cls, payload)
        with self._lock:
            items = self.load(kind)
            if not any(item.id == item_id for item in items):
                return False
            self._persist(kind, SORTERS[kind]([
                cls(id=item.id, **clean) if item.id == item_id else item
                for item in items
            ]))
        return True

    def delete(self, kind, item_id):
        with self._lock:
            items = self.load(kind)
            kept = [item for item in items if item.id != item_id]
            if len(kept) == len(items):
                return False
            self._persist(kind, kept)
        return True

    # News

    def add_news(self, payload):
        return self.add('news', payload)

    def update_news(self, item_id, payload):
        return self.update('news', item_id, payload)

    def delete_news(self, item_id):
        return self.delete('news', item_id)

    # Events

    def add_event(self, payload):
        return self.add('events', payload)

    def update_event(self, item_id, payload):
        return self.update('events', item_id, payload)

    def delete_event(self, item_id):
        return self.delete('events', item_id)


class CacheEntityManager(EntityManager):
    """Entity manager over the local cache, so the admin editor works unchanged."""

    def __init__(self, cache, kind, blank=None, label=None):
        super().__init__(backend=None, collection=kind, order_by=None, blank=blank, label=label)
        self.cache = cache
        self.kind = kind

    def list(self):
        self.items = [asdict(item) for item in self.cache.load(self.kind)]
        return self.items

    def save(self, record):
        record_id = record.get('id')
        if record_id:
            if not self.cache.update(self.kind, record_id, record):
                logger.error('Error saving %s: no item with id %s', self.label, record_id)
                self.editing = dict(record)
                self.list()
                return OperationResult.failure(f'{self.label.capitalize()} not found.')
        else:
            self.cache.add(self.kind, record)

        self.list()
        self.close_editor()
        verb = 'updated' if record_id else 'added'
        return OperationResult.success(f'{self.label.capitalize()} {verb} successfully.', record)

    def delete(self, record_id, confirm):
        if not confirm():
            return OperationResult.cancel()
        removed = self.cache.delete(self.kind, record_id)
        self.list()
        if not removed:
            return OperationResult.failure(f'{self.label.capitalize()} not found.')
        if self.editing and self.editing.get('id') == record_id:
            self.close_editor()
        return OperationResult.success(f'{self.label.capitalize()} deleted.')

    def set_status(self, record_id, status):
        return OperationResult.failure('Cached news and events have no status.')
