"""
Site Blueprint

Public pages of the school website.
"""

from flask import Blueprint

site_bp = Blueprint('site', __name__)

from fountaingate.site import routes  # noqa: E402, F401
