"""
Admin Authentication Services

Two independent admin logins exist:

- ``AuthGate``: the primary email/password gate. Its session record
  ``{email, name}`` is persisted through a ``SessionStore``.
- ``PortalSession``: the older username/password screen, which keeps a
  ``{username, loginTime}`` record plus a separate expiry timestamp and
  expires after a fixed number of hours.

There are no roles: any authenticated admin may edit every collection.
"""

import json
import logging
import re
import time

logger = logging.getLogger(__name__)

LEGACY_SESSION_MARKER = 'true'
PORTAL_SESSION_KEY = 'admin_session'
PORTAL_EXPIRY_KEY = 'admin_session_expiry'


def create_user_profile(email):
    """Derive the display identity from the local part of an email.

    ``jane.doe@x.com`` -> ``{'email': ..., 'name': 'Jane Doe'}``. A local part
    made only of separators yields ``'Administrator'``.
    """
    local_part = email.split('@')[0]
    segments = [s for s in re.split(r'[._-]', local_part) if s]
    name = ' '.join(s[0].upper() + s[1:] for s in segments) or 'Administrator'
    return {'email': email, 'name': name}


class SessionStore:
    """Load and persist the admin session record under one storage key.

    Never raises: storage or parse failures are logged and read as
    "logged out" / "write skipped".
    """

    def __init__(self, storage, key, fallback_email):
        self.storage = storage
        self.key = key
        self.fallback_email = fallback_email

    def load(self):
        try:
            stored = self.storage.get(self.key)
            if not stored:
                return None

            if stored == LEGACY_SESSION_MARKER:
                # Older releases stored a bare flag
                return create_user_profile(self.fallback_email)

            parsed = json.loads(stored)
            if (isinstance(parsed, dict)
                    and isinstance(parsed.get('email'), str)
                    and isinstance(parsed.get('name'), str)):
                return {'email': parsed['email'], 'name': parsed['name']}
            return None
        except Exception as e:
            logger.warning('Failed to read admin session from storage: %s', e)
            return None

    def persist(self, user):
        try:
            if user:
                self.storage.set(self.key, json.dumps(user))
            else:
                self.storage.remove(self.key)
        except Exception as e:
            logger.warning('Failed to write admin session to storage: %s', e)


class AuthGate:
    """Session context for the primary admin login.

    Built once per request with its store injected, ``init()`` loads the
    persisted session and every change is written straight back.
    """

    def __init__(self, store, admin_email, admin_password):
        self.store = store
        self.admin_email = admin_email.strip().lower()
        self.admin_password = admin_password
        self._user = None

    def init(self):
        self._user = self.store.load()
        return self

    def teardown(self):
        self.logout()

    @property
    def user(self):
        return self._user

    @property
    def is_authenticated(self):
        return self._user is not None

    def _set_user(self, user):
        self._user = user
        self.store.persist(user)

    def login(self, email, password):
        """Return True and start a session when the credentials match."""
        normalized_email = (email or '').strip().lower()
        if normalized_email == self.admin_email and password == self.admin_password:
            self._set_user(create_user_profile(normalized_email))
            return True
        return False

    def logout(self):
        self._set_user(None)


def _now_ms():
    return int(time.time() * 1000)


class PortalSession:
    """Time-boxed session for the legacy username/password login screen."""

    def __init__(self, storage, hours=24, clock=_now_ms):
        self.storage = storage
        self.duration_ms = int(hours * 60 * 60 * 1000)
        self.clock = clock

    def start(self, username):
        now = self.clock()
        self.storage.set(PORTAL_SESSION_KEY, json.dumps({'username': username, 'loginTime': now}))
        self.storage.set(PORTAL_EXPIRY_KEY, str(now + self.duration_ms))

    def end(self):
        self.storage.remove(PORTAL_SESSION_KEY)
        self.storage.remove(PORTAL_EXPIRY_KEY)

    def current_username(self):
        """Return the logged-in username, clearing the session if expired or corrupt."""
        session_data = self.storage.get(PORTAL_SESSION_KEY)
        expiry = self.storage.get(PORTAL_EXPIRY_KEY)
        if not session_data or not expiry:
            return None

        try:
            if self.clock() >= int(expiry):
                logger.info('Portal session expired')
                self.end()
                return None
            username = json.loads(session_data)['username']
            if not isinstance(username, str):
                raise ValueError('username is not a string')
            return username
        except (ValueError, KeyError, TypeError) as e:
            logger.warning('Clearing corrupted portal session: %s', e)
            self.end()
            return None
