"""
Services Package

Exports all services for easy importing and wires the per-application
components (content backend, notification feed, local content cache) into
``app.extensions``.
"""

import os

from flask import current_app

from fountaingate.services.auth import AuthGate, PortalSession, SessionStore, create_user_profile
from fountaingate.services.backend import BackendError, ContentBackend, SQLAlchemyBackend
from fountaingate.services.content import EntityManager, OperationResult, INQUIRY_STATUSES
from fountaingate.services.content_cache import CacheEntityManager, LocalContentCache
from fountaingate.services.export import inquiries_to_csv, export_filename
from fountaingate.services.notifications import NotificationFeed, format_time_ago
from fountaingate.services.rest_backend import RestBackend
from fountaingate.services.site_content import CONTENT_SECTIONS, SiteContentManager
from fountaingate.services.storage import FlaskSessionStorage, JsonFileStorage, MemoryStorage

__all__ = [
    'AuthGate', 'PortalSession', 'SessionStore', 'create_user_profile',
    'BackendError', 'ContentBackend', 'SQLAlchemyBackend', 'RestBackend',
    'EntityManager', 'OperationResult', 'INQUIRY_STATUSES',
    'CacheEntityManager', 'LocalContentCache',
    'inquiries_to_csv', 'export_filename',
    'NotificationFeed', 'format_time_ago',
    'CONTENT_SECTIONS', 'SiteContentManager',
    'FlaskSessionStorage', 'JsonFileStorage', 'MemoryStorage',
    'init_services', 'get_backend', 'get_feed', 'get_content_cache',
]


def build_backend(config):
    """Create the content backend selected by ``CONTENT_BACKEND``."""
    kind = config.get('CONTENT_BACKEND', 'sql')
    if kind == 'rest':
        if not config.get('CONTENT_REST_URL'):
            raise RuntimeError('CONTENT_BACKEND is "rest" but CONTENT_REST_URL is not set')
        return RestBackend(
            config['CONTENT_REST_URL'],
            config.get('CONTENT_REST_KEY', ''),
            timeout=config.get('CONTENT_REST_TIMEOUT', 10),
        )
    if kind != 'sql':
        raise RuntimeError(f'Unknown CONTENT_BACKEND "{kind}"')
    return SQLAlchemyBackend()


def init_services(app):
    """Attach backend, notification feed and (optionally) the local cache to ``app``."""
    backend = build_backend(app.config)
    app.extensions['content_backend'] = backend
    app.extensions['notification_feed'] = NotificationFeed(
        backend,
        per_source=app.config.get('NOTIFICATION_FETCH_LIMIT', 10),
        cap=app.config.get('NOTIFICATION_CAP', 20),
    )

    if app.config.get('NEWS_EVENTS_SOURCE') == 'local':
        cache_path = app.config.get('CONTENT_CACHE_FILE', 'content_cache.json')
        if not os.path.isabs(cache_path):
            cache_path = os.path.join(app.instance_path, cache_path)
        app.extensions['content_cache'] = LocalContentCache(JsonFileStorage(cache_path))


def get_backend():
    return current_app.extensions['content_backend']


def get_feed():
    return current_app.extensions['notification_feed']


def get_content_cache():
    """The local news/events cache, or None when news and events live in the backend."""
    return current_app.extensions.get('content_cache')
