# services/auth_service.py
import json
import logging
import os
from typing import Optional, Dict, Any

from werkzeug.security import generate_password_hash, check_password_hash

from domain.models.user import AdminRole, AdminUser
from repositories.users_repository import UserRepository

logger = logging.getLogger(__name__)

_repo = UserRepository()


def authenticate(username: str, password: str) -> Optional[Dict[str, Any]]:
    """Return the public user dict if credentials are valid and the account active."""
    user = _repo.get_by_username(username)
    if not user or not user.is_active:
        return None
    if not check_password_hash(user.password_hash, password):
        return None
    return user.to_public_dict()


def _load_admin_users_from_env() -> list[tuple[str, str]]:
    """
    Returns a list of (username, password) from env:
      1) ADMIN_USERS (JSON array of {"username","password"})
      2) ADMIN_USERNAME + ADMIN_PASSWORD (single pair)
    """
    users: list[tuple[str, str]] = []

    raw_json = os.getenv("ADMIN_USERS")
    if raw_json:
        try:
            data = json.loads(raw_json)
        except json.JSONDecodeError as e:
            logger.error("Failed to parse ADMIN_USERS JSON: %s", e)
            data = []
        for item in data:
            u = (item.get("username") or "").strip()
            p = item.get("password")
            if u and p is not None:
                users.append((u, p))

    if not users:
        u = (os.getenv("ADMIN_USERNAME") or "").strip()
        p = os.getenv("ADMIN_PASSWORD")
        if u and p is not None:
            users.append((u, p))

    # Deduplicate by username, keep the first occurrence
    seen = set()
    deduped: list[tuple[str, str]] = []
    for u, p in users:
        if u not in seen:
            seen.add(u)
            deduped.append((u, p))
    return deduped


def ensure_default_users() -> int:
    """Idempotently create the configured admin users; returns how many were added."""
    created = 0
    for username, raw_pw in _load_admin_users_from_env():
        if not _repo.get_by_username(username):
            _repo.create(
                AdminUser(
                    username=username,
                    password_hash=generate_password_hash(raw_pw),
                    role=AdminRole.SUPER_ADMIN,
                )
            )
            created += 1
    if created:
        logger.info("Seeded %d admin user(s)", created)
    return created
