from __future__ import annotations

import uuid
from typing import Any

import bcrypt

_users: dict[str, dict[str, Any]] = {}


def _hash_password(plain: str) -> str:
    return bcrypt.hashpw(plain.encode(), bcrypt.gensalt()).decode()


def _verify_password(plain: str, hashed: str) -> bool:
    return bcrypt.checkpw(plain.encode(), hashed.encode())


def _public(record: dict[str, Any]) -> dict[str, Any]:
    return {"id": record["id"], "name": record["name"], "email": record["email"]}


def _add_user(name: str, email: str, password: str, user_id: str | None = None) -> dict[str, Any]:
    record = {
        "id": user_id or uuid.uuid4().hex,
        "name": name,
        "email": email.lower(),
        "password_hash": _hash_password(password),
        "current_group_id": None,
    }
    _users[record["email"]] = record
    return record


def _seed_users() -> None:
    """Pre-seed demo users on import."""
    _add_user("Alex", "alex@example.com", "alex123", user_id="user-alex")
    _add_user("Sam", "sam@example.com", "sam123", user_id="user-sam")


def register(name: str, email: str, password: str) -> dict[str, Any] | None:
    """Create an account. Returns ``{id, name, email}`` or ``None`` if the email is taken."""
    if email.lower() in _users:
        return None
    return _public(_add_user(name, email, password))


def authenticate(email: str, password: str) -> dict[str, Any] | None:
    """Verify credentials. Returns ``{id, name, email}`` or ``None``."""
    record = _users.get(email.lower())
    if record and _verify_password(password, record["password_hash"]):
        return _public(record)
    return None


def _find_by_id(user_id: str) -> dict[str, Any] | None:
    for record in _users.values():
        if record["id"] == user_id:
            return record
    return None


def get_current_group_id(user_id: str) -> str | None:
    record = _find_by_id(user_id)
    return record["current_group_id"] if record else None


def set_current_group_id(user_id: str, group_id: str | None) -> None:
    record = _find_by_id(user_id)
    if record:
        record["current_group_id"] = group_id


_seed_users()
