"""
Auth Blueprint

Legacy username/password login for the admin portal.
"""

from flask import Blueprint

auth_bp = Blueprint('auth', __name__)

from fountaingate.auth import routes  # noqa: E402, F401
