# healthsync/routes/admin/__init__.py
from flask import Blueprint

admin_bp = Blueprint("admin", __name__)

from . import users, user_management, statistics  # noqa: E402,F401
