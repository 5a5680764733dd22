"""
Admin Decorator

Admin access needs an active admin session, either from the email gate or
from the legacy portal login. There are no roles.
"""

from functools import wraps
from flask import redirect, request, url_for
from flask_login import current_user


def admin_required(f):
    """Decorator to ensure the request is from an authenticated admin."""
    @wraps(f)
    def wrapper(*args, **kwargs):
        if not current_user.is_authenticated:
            return redirect(url_for('admin.login', next=request.path))
        return f(*args, **kwargs)
    return wrapper
