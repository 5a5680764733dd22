"""
Configuration settings for the Fountain Gate Academy website and admin portal
"""
import os


class Config:
    """Flask application configuration"""

    SCHOOL_NAME = 'Fountain Gate Academy'

    # Flask secret key for sessions (the admin session lives in the signed cookie)
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production-12345'

    # Database configuration
    basedir = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or \
        'sqlite:///' + os.path.join(basedir, 'instance', 'fountaingate.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SEED_DEFAULT_CONTENT = True

    # Content backend: 'sql' uses the local database, 'rest' a hosted PostgREST endpoint
    CONTENT_BACKEND = os.environ.get('CONTENT_BACKEND') or 'sql'
    CONTENT_REST_URL = os.environ.get('CONTENT_REST_URL') or ''
    CONTENT_REST_KEY = os.environ.get('CONTENT_REST_KEY') or ''
    CONTENT_REST_TIMEOUT = float(os.environ.get('CONTENT_REST_TIMEOUT') or 10)

    # Where news and events live: 'backend' collections or the 'local' cache file
    NEWS_EVENTS_SOURCE = os.environ.get('NEWS_EVENTS_SOURCE') or 'backend'
    CONTENT_CACHE_FILE = os.environ.get('CONTENT_CACHE_FILE') or 'content_cache.json'

    # Primary admin gate (email login)
    ADMIN_EMAIL = os.environ.get('ADMIN_EMAIL') or 'admin@fga.local'
    ADMIN_EMAIL_PASSWORD = os.environ.get('ADMIN_EMAIL_PASSWORD') or 'SecurePass123'
    ADMIN_SESSION_KEY = 'fga-admin-session'

    # Legacy portal login (username, 24 hour session)
    ADMIN_USERNAME = os.environ.get('ADMIN_USERNAME') or 'admin'
    ADMIN_PASSWORD = os.environ.get('ADMIN_PASSWORD') or 'admin123'
    PORTAL_SESSION_HOURS = 24

    # Notification bell
    NOTIFICATION_FETCH_LIMIT = 10
    NOTIFICATION_CAP = 20


class TestConfig(Config):
    """Testing configuration"""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SEED_DEFAULT_CONTENT = False
    NEWS_EVENTS_SOURCE = 'backend'
    CONTENT_BACKEND = 'sql'
