from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Union

from .models import Restaurant, Visit

Record = Union[Restaurant, Visit]
RecordFilter = Callable[[Record], bool]


@dataclass(frozen=True)
class PersonalScope:
    """Records owned by one user outside any group."""

    user_id: str

    @property
    def group_id(self) -> None:
        return None


@dataclass(frozen=True)
class GroupScope:
    """Records shared by every member of a group."""

    group_id: str


Scope = Union[PersonalScope, GroupScope]


def personal_filter(user_id: str) -> RecordFilter:
    return lambda record: record.user_id == user_id and record.group_id is None


def group_filter(group_id: str) -> RecordFilter:
    return lambda record: record.group_id == group_id


def scope_filter(scope: Scope) -> RecordFilter:
    if isinstance(scope, GroupScope):
        return group_filter(scope.group_id)
    return personal_filter(scope.user_id)


def is_group(scope: Scope) -> bool:
    return isinstance(scope, GroupScope)
