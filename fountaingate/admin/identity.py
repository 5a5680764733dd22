"""
Admin Identity

Builds the per-request session context objects and exposes whichever admin
session is active (primary email gate or legacy portal) to Flask-Login.
"""

from flask import current_app, g
from flask_login import UserMixin

from fountaingate.services import AuthGate, FlaskSessionStorage, PortalSession, SessionStore


class AdminIdentity(UserMixin):
    """The logged-in administrator as seen by templates (``current_user``)."""

    def __init__(self, email, name, source):
        self.email = email
        self.name = name
        self.source = source

    def get_id(self):
        return self.email or self.name

    def __repr__(self):
        return f'<AdminIdentity {self.name} via {self.source}>'


def get_auth():
    """The request's AuthGate, loaded from the cookie session on first use."""
    if 'admin_auth' not in g:
        config = current_app.config
        store = SessionStore(FlaskSessionStorage(), config['ADMIN_SESSION_KEY'], config['ADMIN_EMAIL'])
        g.admin_auth = AuthGate(store, config['ADMIN_EMAIL'], config['ADMIN_EMAIL_PASSWORD']).init()
    return g.admin_auth


def get_portal():
    if 'portal_session' not in g:
        g.portal_session = PortalSession(
            FlaskSessionStorage(), hours=current_app.config['PORTAL_SESSION_HOURS']
        )
    return g.portal_session


def load_admin_from_request(request):
    """Flask-Login request loader: primary gate first, then the legacy portal."""
    auth = get_auth()
    if auth.is_authenticated:
        return AdminIdentity(auth.user['email'], auth.user['name'], 'email')

    username = get_portal().current_username()
    if username:
        return AdminIdentity(None, username, 'portal')
    return None
