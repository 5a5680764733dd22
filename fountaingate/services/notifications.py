"""
Notification Feed

Backs the bell icon in the admin header: the most recent contact and
admission inquiries merged into one newest-first list. Read flags are kept in
process memory only.
"""

import logging
import re
from datetime import datetime, timezone

from fountaingate.services.backend import BackendError

logger = logging.getLogger(__name__)

NOTIFICATION_SOURCES = (
    ('contact_inquiries', 'contact'),
    ('admission_inquiries', 'admission'),
)

FRACTION = re.compile(r'\.(\d+)')


def _excerpt(text, length=60):
    text = (text or '').strip()
    return text if len(text) <= length else text[:length - 3].rstrip() + '...'


def build_notification(kind, row):
    if kind == 'contact':
        title = 'New Contact Inquiry'
        message = f'{row.get("name", "Someone")} sent a message: "{_excerpt(row.get("message"))}"'
    else:
        title = 'New Admission Inquiry'
        message = (f'{row.get("parent_name", "A parent")} is interested in enrolling '
                   f'{row.get("student_name") or "a child"}')
    return {
        'id': f'{kind}-{row.get("id")}',
        'type': kind,
        'title': title,
        'message': message,
        'read': False,
        'created_at': row.get('created_at') or '',
        'data': row,
    }


class NotificationFeed:
    """Latest inquiries from every source, refreshed on each insert notification."""

    def __init__(self, backend, per_source=10, cap=20):
        self.backend = backend
        self.per_source = per_source
        self.cap = cap
        self.notifications = []
        self._read_ids = set()
        self._unsubscribers = []

    def start(self):
        if not self._unsubscribers:
            for collection, _ in NOTIFICATION_SOURCES:
                self._unsubscribers.append(
                    self.backend.subscribe(collection, self._on_insert)
                )
        self.refresh()
        return self

    def stop(self):
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []

    def _on_insert(self, row):
        self.refresh()

    def refresh(self):
        merged = []
        try:
            for collection, kind in NOTIFICATION_SOURCES:
                rows = self.backend.select(
                    collection, order_by='created_at', descending=True, limit=self.per_source
                )
                merged.extend(build_notification(kind, row) for row in rows)
        except BackendError as e:
            logger.error('Error fetching notifications: %s', e)
            return self.notifications

        merged.sort(key=lambda n: n['created_at'], reverse=True)
        merged = merged[:self.cap]
        for n in merged:
            n['read'] = n['id'] in self._read_ids
        self.notifications = merged
        return self.notifications

    @property
    def unread_count(self):
        return sum(1 for n in self.notifications if not n['read'])

    def mark_read(self, notification_id):
        self._read_ids.add(notification_id)
        for n in self.notifications:
            if n['id'] == notification_id:
                n['read'] = True

    def mark_all_read(self):
        for n in self.notifications:
            self._read_ids.add(n['id'])
            n['read'] = True


def parse_timestamp(value):
    """Parse an ISO-8601 timestamp, or return None when it is not one.

    Fractional seconds of any length are padded or cut to six digits first.
    """
    if isinstance(value, datetime):
        return value
    text = str(value).replace('Z', '+00:00')
    text = FRACTION.sub(lambda m: '.' + (m.group(1) + '000000')[:6], text)
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def format_time_ago(value, now=None):
    """Render a timestamp as 'Just now', '5m ago', '3h ago' or '2d ago'."""
    moment = parse_timestamp(value)
    if moment is None:
        return ''
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    minutes = int((now - moment).total_seconds() // 60)
    if minutes < 1:
        return 'Just now'
    if minutes < 60:
        return f'{minutes}m ago'
    if minutes < 1440:
        return f'{minutes // 60}h ago'
    return f'{minutes // 1440}d ago'
