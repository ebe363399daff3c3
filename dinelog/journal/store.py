from __future__ import annotations

import logging
import uuid
from datetime import datetime

from .dates import to_local
from .models import Restaurant, RestaurantCreate, Visit, VisitCreate
from .scope import Scope, scope_filter

logger = logging.getLogger(__name__)

_restaurants: list[Restaurant] = []
_visits: list[Visit] = []


def _new_id() -> str:
    return uuid.uuid4().hex


# ── Writes ───────────────────────────────────────────────────────────────


def add_restaurant(scope: Scope, user: dict, body: RestaurantCreate) -> Restaurant:
    restaurant = Restaurant(
        id=_new_id(),
        name=body.name,
        cuisine_type=body.cuisine_type,
        location=body.location,
        user_id=user["id"],
        group_id=scope.group_id,
        created_at=datetime.now(),
    )
    _restaurants.append(restaurant)
    logger.info("Restaurant %s created in %s", restaurant.id, scope)
    return restaurant


def add_visit(scope: Scope, user: dict, body: VisitCreate) -> Visit:
    visit = Visit(
        id=_new_id(),
        restaurant_id=body.restaurant_id,
        user_id=user["id"],
        group_id=scope.group_id,
        added_by=user["id"],
        added_by_name=user.get("name"),
        date=body.date,
        overall_rating=body.overall_rating,
        overall_review=body.overall_review,
        dishes=body.dishes,
        created_at=datetime.now(),
    )
    _visits.append(visit)
    logger.info("Visit %s logged for restaurant %s in %s", visit.id, visit.restaurant_id, scope)
    return visit


# ── Reads ────────────────────────────────────────────────────────────────


def find_restaurants(scope: Scope, sort_by_name: bool = False) -> list[Restaurant]:
    matches = scope_filter(scope)
    restaurants = [r for r in _restaurants if matches(r)]
    if sort_by_name:
        restaurants.sort(key=lambda r: r.name)
    return restaurants


def find_visits(
    scope: Scope,
    descending: bool = False,
    limit: int | None = None,
) -> list[Visit]:
    """Return visits in *scope* sorted by date."""
    matches = scope_filter(scope)
    visits = sorted(
        (v for v in _visits if matches(v)),
        key=lambda v: to_local(v.date),
        reverse=descending,
    )
    if limit is not None:
        visits = visits[:limit]
    return visits


def get_restaurant(scope: Scope, restaurant_id: str) -> Restaurant | None:
    matches = scope_filter(scope)
    for r in _restaurants:
        if r.id == restaurant_id and matches(r):
            return r
    return None


def clear_store() -> None:
    _restaurants.clear()
    _visits.clear()
