import json

import pytest

from fountaingate.services import (
    AuthGate, MemoryStorage, PortalSession, SessionStore, create_user_profile,
)
from fountaingate.services.auth import PORTAL_EXPIRY_KEY, PORTAL_SESSION_KEY

ADMIN_EMAIL = 'admin@fga.local'
ADMIN_PASSWORD = 'SecurePass123'
SESSION_KEY = 'fga-admin-session'


class BrokenStorage:
    def get(self, key):
        raise OSError('storage unavailable')

    def set(self, key, value):
        raise OSError('storage unavailable')

    def remove(self, key):
        raise OSError('storage unavailable')


def make_gate(storage=None):
    storage = storage if storage is not None else MemoryStorage()
    store = SessionStore(storage, SESSION_KEY, ADMIN_EMAIL)
    return AuthGate(store, ADMIN_EMAIL, ADMIN_PASSWORD).init(), storage


@pytest.mark.parametrize('email, name', [
    ('jane.doe@x.com', 'Jane Doe'),
    ('admin@x.com', 'Admin'),
    ('mary-ann_smith@school.org', 'Mary Ann Smith'),
    ('._-@x.com', 'Administrator'),
])
def test_create_user_profile(email, name):
    assert create_user_profile(email) == {'email': email, 'name': name}


@pytest.mark.parametrize('email, password', [
    ('admin@fga.local', 'wrong'),
    ('other@fga.local', 'SecurePass123'),
    ('admin@fga.local', 'securepass123'),
    ('', ''),
])
def test_login_rejects_any_other_pair(email, password):
    gate, storage = make_gate()
    assert gate.login(email, password) is False
    assert gate.is_authenticated is False
    assert storage.get(SESSION_KEY) is None


def test_login_normalizes_email_and_persists():
    gate, storage = make_gate()
    assert gate.login('  ADMIN@FGA.Local ', ADMIN_PASSWORD) is True
    assert gate.user == {'email': 'admin@fga.local', 'name': 'Admin'}
    assert json.loads(storage.get(SESSION_KEY)) == gate.user


def test_reloading_session_yields_same_identity():
    gate, storage = make_gate()
    gate.login(ADMIN_EMAIL, ADMIN_PASSWORD)

    reloaded, _ = make_gate(storage)
    assert reloaded.is_authenticated
    assert reloaded.user == gate.user


def test_legacy_marker_loads_admin_profile():
    _, storage = make_gate(MemoryStorage({SESSION_KEY: 'true'}))
    store = SessionStore(storage, SESSION_KEY, ADMIN_EMAIL)
    assert store.load() == create_user_profile(ADMIN_EMAIL)


@pytest.mark.parametrize('stored', [
    '{not json',
    json.dumps({'email': 'admin@fga.local'}),
    json.dumps({'email': 1, 'name': 'Admin'}),
    json.dumps(['admin@fga.local', 'Admin']),
])
def test_invalid_stored_session_reads_as_logged_out(stored):
    gate, _ = make_gate(MemoryStorage({SESSION_KEY: stored}))
    assert gate.is_authenticated is False


def test_storage_failures_are_not_raised():
    gate, _ = make_gate(BrokenStorage())
    assert gate.user is None
    # Login still succeeds in memory when the write fails
    assert gate.login(ADMIN_EMAIL, ADMIN_PASSWORD) is True
    gate.logout()
    assert gate.is_authenticated is False


def test_logout_clears_persisted_session():
    gate, storage = make_gate()
    gate.login(ADMIN_EMAIL, ADMIN_PASSWORD)
    gate.teardown()
    assert gate.user is None
    assert storage.get(SESSION_KEY) is None


class FakeClock:
    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now


def test_portal_session_expires_after_configured_hours():
    clock = FakeClock(1_000_000)
    storage = MemoryStorage()
    portal = PortalSession(storage, hours=24, clock=clock)
    portal.start('admin')

    assert json.loads(storage.get(PORTAL_SESSION_KEY)) == {'username': 'admin', 'loginTime': 1_000_000}
    assert storage.get(PORTAL_EXPIRY_KEY) == str(1_000_000 + 24 * 60 * 60 * 1000)

    clock.now += 23 * 60 * 60 * 1000
    assert portal.current_username() == 'admin'

    clock.now += 60 * 60 * 1000
    assert portal.current_username() is None
    assert storage.get(PORTAL_SESSION_KEY) is None
    assert storage.get(PORTAL_EXPIRY_KEY) is None


def test_corrupt_portal_session_is_cleared():
    storage = MemoryStorage({PORTAL_SESSION_KEY: '{broken', PORTAL_EXPIRY_KEY: '99999999999999'})
    portal = PortalSession(storage, clock=FakeClock(0))
    assert portal.current_username() is None
    assert storage.data == {}


# Routes

def test_admin_pages_require_login(client):
    r = client.get('/admin/dashboard')
    assert r.status_code == 302
    assert '/admin/login' in r.headers['Location']


def test_admin_login_and_logout(client):
    r = client.post('/admin/login', data={'email': 'admin@fga.local', 'password': 'SecurePass123'},
                    follow_redirects=True)
    assert r.status_code == 200
    assert 'Welcome, Admin!' in r.get_data(as_text=True)

    with client.session_transaction() as sess:
        assert json.loads(sess[SESSION_KEY]) == {'email': 'admin@fga.local', 'name': 'Admin'}

    r = client.get('/admin/logout', follow_redirects=True)
    assert 'You have been logged out of the admin panel.' in r.get_data(as_text=True)
    assert client.get('/admin/dashboard').status_code == 302


def test_admin_login_rejects_bad_password(client):
    r = client.post('/admin/login', data={'email': 'admin@fga.local', 'password': 'nope'})
    assert r.status_code == 200
    assert 'Invalid email or password.' in r.get_data(as_text=True)
    assert client.get('/admin/dashboard').status_code == 302


def test_admin_login_requires_both_fields(client):
    r = client.post('/admin/login', data={'email': '', 'password': ''})
    assert 'Please enter both email and password.' in r.get_data(as_text=True)


def test_legacy_marker_cookie_grants_access(client):
    with client.session_transaction() as sess:
        sess[SESSION_KEY] = 'true'
    assert client.get('/admin/dashboard').status_code == 200


def test_login_redirects_to_next(client):
    r = client.post('/admin/login?next=/admin/site-content',
                    data={'email': 'admin@fga.local', 'password': 'SecurePass123'})
    assert r.headers['Location'].endswith('/admin/site-content')


def test_portal_login_grants_admin_access(client):
    r = client.post('/portal/login', data={'username': 'admin', 'password': 'admin123'})
    assert r.status_code == 302
    assert client.get('/admin/dashboard').status_code == 200

    client.get('/portal/logout')
    assert client.get('/admin/dashboard').status_code == 302


def test_portal_login_rejects_bad_credentials(client):
    r = client.post('/portal/login', data={'username': 'admin', 'password': 'wrong'})
    assert 'Invalid username or password' in r.get_data(as_text=True)


def test_expired_portal_session_is_rejected(client):
    with client.session_transaction() as sess:
        sess[PORTAL_SESSION_KEY] = json.dumps({'username': 'admin', 'loginTime': 0})
        sess[PORTAL_EXPIRY_KEY] = '1'
    assert client.get('/admin/dashboard').status_code == 302
    with client.session_transaction() as sess:
        assert PORTAL_SESSION_KEY not in sess
