"""
Admin Blueprint

Content management portal for school staff.
"""

from flask import Blueprint

admin_bp = Blueprint('admin', __name__)

from fountaingate.admin import routes  # noqa: E402, F401
