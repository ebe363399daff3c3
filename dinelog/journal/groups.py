from __future__ import annotations

import uuid
from typing import Any

_groups: dict[str, dict[str, Any]] = {}


def add_group(name: str, member_ids: list[str], group_id: str | None = None) -> dict[str, Any]:
    group = {
        "id": group_id or uuid.uuid4().hex,
        "name": name,
        "members": list(member_ids),
    }
    _groups[group["id"]] = group
    return group


def get_group(group_id: str) -> dict[str, Any] | None:
    return _groups.get(group_id)


def is_member(group_id: str, user_id: str) -> bool:
    group = _groups.get(group_id)
    return bool(group) and user_id in group["members"]


def groups_for_user(user_id: str) -> list[dict[str, Any]]:
    return [g for g in _groups.values() if user_id in g["members"]]


def _seed_groups() -> None:
    """Pre-seed a demo group shared by the demo users."""
    add_group("Family Dinners", ["user-alex", "user-sam"], group_id="group-family")


_seed_groups()
