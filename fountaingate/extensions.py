"""
Flask Extensions

The admin identity is not a database user: Flask-Login is only used to expose
whichever admin session is active as ``current_user``.
"""

from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager

# Database instance
db = SQLAlchemy()

# Login manager backed by a request loader (see fountaingate.admin.identity)
login_manager = LoginManager()
