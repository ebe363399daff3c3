from __future__ import annotations

import uuid
from datetime import datetime

import pytest

from dinelog.auth.users import set_current_group_id
from dinelog.journal.models import DishReview, Restaurant, Visit
from dinelog.journal.store import clear_store


@pytest.fixture(autouse=True)
def _reset_journal():
    clear_store()
    for user_id in ("user-alex", "user-sam"):
        set_current_group_id(user_id, None)
    yield
    clear_store()


class FirstChoice:
    """Deterministic stand-in for ``random.Random``."""

    def choice(self, seq):
        return seq[0]


class LastChoice:
    def choice(self, seq):
        return seq[-1]


@pytest.fixture
def make_restaurant():
    def _make(name="Pho 24", cuisine_type="Vietnamese", user_id="user-alex", group_id=None, restaurant_id=None):
        return Restaurant(
            id=restaurant_id or uuid.uuid4().hex,
            name=name,
            cuisine_type=cuisine_type,
            user_id=user_id,
            group_id=group_id,
            created_at=datetime(2024, 1, 1),
        )

    return _make


@pytest.fixture
def make_visit():
    def _make(restaurant, date, rating=4, dishes=(), user_id="user-alex"):
        return Visit(
            id=uuid.uuid4().hex,
            restaurant_id=restaurant if isinstance(restaurant, str) else restaurant.id,
            user_id=user_id,
            group_id=None if isinstance(restaurant, str) else restaurant.group_id,
            date=datetime.fromisoformat(date) if isinstance(date, str) else date,
            overall_rating=rating,
            dishes=[DishReview(name=n, rating=r) for n, r in dishes],
            created_at=datetime(2024, 1, 1),
        )

    return _make


@pytest.fixture
def first_choice():
    return FirstChoice()


@pytest.fixture
def last_choice():
    return LastChoice()
