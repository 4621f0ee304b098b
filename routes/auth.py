# routes/auth.py
from flask import jsonify, request, session

from middleware.auth import auth_bp
from middleware.errors import AuthenticationError, ValidationError
from services.auth_service import authenticate


@auth_bp.post("/login")
def login():
    """Authenticate an admin and open a session."""
    data = request.get_json(silent=True) or {}
    username = (data.get("username") or "").strip()
    password = data.get("password") or ""
    if not username or not password:
        raise ValidationError("Username and password are required.")

    user = authenticate(username, password)
    if not user:
        raise AuthenticationError("Invalid username or password.")

    session.clear()
    session["username"] = user["username"]
    return jsonify({"status": "ok", "user": user})


@auth_bp.post("/logout")
def logout():
    session.clear()
    return jsonify({"status": "ok"})
