from datetime import datetime, timedelta

import pytest

from fountaingate.services import NotificationFeed, format_time_ago
from conftest import FakeBackend


def contact(i, minute):
    return {'id': f'c{i}', 'name': f'Parent {i}', 'email': 'p@x.com', 'message': 'Hello there',
            'status': 'new', 'created_at': f'2025-10-15T10:{minute:02d}:00'}


def admission(i, minute):
    return {'id': f'a{i}', 'parent_name': f'Guardian {i}', 'student_name': f'Child {i}',
            'email': 'g@x.com', 'status': 'new', 'created_at': f'2025-10-15T11:{minute:02d}:00'}


def test_merges_sources_newest_first():
    backend = FakeBackend({
        'contact_inquiries': [contact(1, 5)],
        'admission_inquiries': [admission(1, 0)],
    })
    feed = NotificationFeed(backend).start()

    assert [n['id'] for n in feed.notifications] == ['admission-a1', 'contact-c1']
    assert feed.notifications[0]['message'] == 'Guardian 1 is interested in enrolling Child 1'
    assert feed.notifications[1]['message'] == 'Parent 1 sent a message: "Hello there"'
    assert feed.unread_count == 2


def test_caps_at_twenty_with_ten_per_source():
    backend = FakeBackend({
        'contact_inquiries': [contact(i, i) for i in range(15)],
        'admission_inquiries': [admission(i, i) for i in range(15)],
    })
    feed = NotificationFeed(backend, per_source=10, cap=20).start()

    assert len(feed.notifications) == 20
    assert sum(1 for n in feed.notifications if n['type'] == 'contact') == 10
    assert feed.notifications[0]['id'] == 'admission-a14'


def test_insert_refreshes_feed_and_keeps_read_flags():
    backend = FakeBackend({'contact_inquiries': [contact(1, 5)], 'admission_inquiries': []})
    feed = NotificationFeed(backend).start()
    feed.mark_read('contact-c1')
    assert feed.unread_count == 0

    backend.insert('contact_inquiries', [contact(2, 30)])

    assert [n['id'] for n in feed.notifications] == ['contact-c2', 'contact-c1']
    assert [n['read'] for n in feed.notifications] == [False, True]

    feed.mark_all_read()
    assert feed.unread_count == 0


def test_stop_unsubscribes():
    backend = FakeBackend({'contact_inquiries': [], 'admission_inquiries': []})
    feed = NotificationFeed(backend).start()
    feed.stop()

    backend.insert('contact_inquiries', [contact(1, 5)])
    assert feed.notifications == []


def test_failed_refresh_keeps_previous_notifications():
    backend = FakeBackend({'contact_inquiries': [contact(1, 5)], 'admission_inquiries': []})
    feed = NotificationFeed(backend).start()
    backend.fail.add('select')

    assert len(feed.refresh()) == 1


NOW = datetime(2025, 10, 15, 12, 0, 0)


@pytest.mark.parametrize('delta, expected', [
    (timedelta(seconds=30), 'Just now'),
    (timedelta(minutes=5), '5m ago'),
    (timedelta(hours=3), '3h ago'),
    (timedelta(days=2, hours=1), '2d ago'),
])
def test_format_time_ago(delta, expected):
    assert format_time_ago((NOW - delta).isoformat(), now=NOW) == expected


def test_format_time_ago_ignores_bad_values():
    assert format_time_ago('', now=NOW) == ''
    assert format_time_ago(None, now=NOW) == ''


@pytest.mark.parametrize('stamp', [
    '2025-10-15T09:00:00.12345+00:00',
    '2025-10-15T09:00:00.1+00:00',
    '2025-10-15T09:00:00.123456789Z',
])
def test_format_time_ago_accepts_any_fraction_length(stamp):
    assert format_time_ago(stamp, now=NOW) == '3h ago'
