from __future__ import annotations

from fastapi import Depends, HTTPException, Request

from ..journal.groups import is_member
from ..journal.scope import GroupScope, PersonalScope, Scope
from .users import get_current_group_id


def require_user(request: Request) -> dict:
    """Raise 401 if no user is logged in."""
    user = request.session.get("user")
    if not user:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return user


def require_scope(user: dict = Depends(require_user)) -> Scope:
    """Resolve the group the user has selected, falling back to personal scope."""
    group_id = get_current_group_id(user["id"])
    if group_id and is_member(group_id, user["id"]):
        return GroupScope(group_id)
    return PersonalScope(user["id"])
