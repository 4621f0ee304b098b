# middleware/auth.py
from functools import wraps

from flask import Blueprint, current_app, session

from middleware.errors import AuthenticationError
from services.auth_service import ensure_default_users

auth_bp = Blueprint("auth", __name__, url_prefix="/api/auth")


@auth_bp.before_app_request
def _seed_default_users_once():
    # store a flag on the app object so it persists across requests
    if current_app.config.get("_DEFAULT_USERS_SEEDED", False):
        return
    current_app.config["_DEFAULT_USERS_SEEDED"] = True
    if current_app.config.get("LOGIN_DISABLED"):
        return
    try:
        ensure_default_users()
    except Exception as exc:
        current_app.logger.warning("ensure_default_users failed: %s", exc)


def login_required(view_func):
    """Decorator that requires a logged-in admin (session['username'])."""
    @wraps(view_func)
    def wrapper(*args, **kwargs):
        if current_app.config.get("LOGIN_DISABLED"):
            return view_func(*args, **kwargs)
        if "username" not in session:
            raise AuthenticationError("Please log in to continue.")
        return view_func(*args, **kwargs)
    return wrapper
