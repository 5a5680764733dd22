"""
Fountain Gate Academy - Application Factory

This module provides the Flask application factory pattern for creating
and configuring the school website and its admin portal.
"""

import logging
import os

from flask import Flask

from fountaingate.extensions import db, login_manager
from fountaingate.config import Config

logger = logging.getLogger(__name__)


def create_app(config_class=Config):
    """Create and configure the Flask application.

    Args:
        config_class: Configuration class to use (default: Config)

    Returns:
        Configured Flask application instance
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    # Initialize extensions
    db.init_app(app)
    login_manager.init_app(app)
    login_manager.login_view = 'admin.login'
    login_manager.login_message_category = 'info'

    # Admin sessions live in the cookie session, not in a users table
    from fountaingate.admin.identity import load_admin_from_request
    login_manager.request_loader(load_admin_from_request)

    # Register blueprints
    from fountaingate.site import site_bp
    from fountaingate.admin import admin_bp
    from fountaingate.auth import auth_bp

    app.register_blueprint(site_bp)
    app.register_blueprint(admin_bp, url_prefix='/admin')
    app.register_blueprint(auth_bp, url_prefix='/portal')

    @app.context_processor
    def inject_site_globals():
        """Inject `is_admin` and the school name into every template."""
        from flask_login import current_user
        return dict(is_admin=current_user.is_authenticated,
                    school_name=app.config['SCHOOL_NAME'])

    @app.template_filter('time_ago')
    def time_ago_filter(value):
        from fountaingate.services.notifications import format_time_ago
        return format_time_ago(value)

    from fountaingate.services import init_services, get_feed
    init_services(app)

    with app.app_context():
        os.makedirs(app.instance_path, exist_ok=True)
        if app.config['CONTENT_BACKEND'] == 'sql':
            from fountaingate import models  # noqa: F401
            db.create_all()
            if app.config['SEED_DEFAULT_CONTENT']:
                _ensure_default_data(app)
        get_feed().start()

    return app


DEFAULT_SITE_CONTENT = {
    'mission': {
        'mission_text': 'To provide quality, holistic education that nurtures every child '
                        'academically, morally and socially.',
    },
    'vision': {
        'vision_text': 'To raise confident, disciplined and God-fearing leaders who '
                       'excel in all they do.',
    },
    'welcome': {
        'welcome_heading': "Building Tomorrow's Leaders Today",
        'welcome_paragraph_1': 'Fountain Gate Academy is a caring learning community serving '
                               'over 500 students from Creche to JHS.',
    },
    'cta': {
        'cta_heading': 'Ready to Join Our Community?',
        'cta_subheading': 'Schedule a visit or start your application today.',
    },
    'contact_info': {
        'phone_primary': '',
        'email_primary': 'info@fountaingate.edu.gh',
        'office_hours': 'Monday - Friday: 7:30 AM - 4:00 PM',
    },
}

DEFAULT_STATS = [
    ('500+', 'Students'),
    ('40+', 'Qualified Staff'),
    ('15+', 'Years of Excellence'),
    ('100%', 'BECE Pass Rate'),
]


def _ensure_default_data(app):
    """Ensure default site text and homepage stats exist."""
    from fountaingate.models import HomepageStat, SiteContent
    from fountaingate.services.site_content import CONTENT_SECTIONS

    try:
        if not SiteContent.query.first():
            for section, values in DEFAULT_SITE_CONTENT.items():
                types = {f['key']: f['type'] for f in CONTENT_SECTIONS[section]['fields']}
                for key, value in values.items():
                    db.session.add(SiteContent(section=section, key=key, value=value,
                                               type=types.get(key, 'text')))
            logger.info('Created default site content')

        if not HomepageStat.query.first():
            for index, (value, label) in enumerate(DEFAULT_STATS):
                db.session.add(HomepageStat(value=value, label=label, order_index=index))
            logger.info('Created default homepage stats')

        db.session.commit()
    except Exception as e:
        db.session.rollback()
        logger.error('Could not create default content: %s', e)
