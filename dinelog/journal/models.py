from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model that speaks camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ── Stored records ───────────────────────────────────────────────────────


class DishReview(CamelModel):
    name: str = Field(..., min_length=1)
    rating: int = Field(..., ge=1, le=5)
    review: str | None = None


class Restaurant(CamelModel):
    id: str
    name: str
    cuisine_type: str
    location: str = ""
    user_id: str
    group_id: str | None = None
    created_at: datetime


class Visit(CamelModel):
    id: str
    restaurant_id: str
    user_id: str
    group_id: str | None = None
    added_by: str | None = None
    added_by_name: str | None = None
    date: datetime
    overall_rating: int = Field(..., ge=1, le=5)
    overall_review: str = ""
    dishes: list[DishReview] = Field(default_factory=list)
    created_at: datetime


# ── Request bodies ───────────────────────────────────────────────────────


class LoginRequest(CamelModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class RegisterRequest(CamelModel):
    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=6)


class GroupSwitchRequest(CamelModel):
    group_id: str | None = None


class RestaurantCreate(CamelModel):
    name: str = Field(..., min_length=1)
    cuisine_type: str = Field(..., min_length=1)
    location: str = ""


class VisitCreate(CamelModel):
    restaurant_id: str = Field(..., min_length=1)
    date: datetime
    overall_rating: int = Field(..., ge=1, le=5)
    overall_review: str = ""
    dishes: list[DishReview] = Field(..., min_length=1)


# ── Responses ────────────────────────────────────────────────────────────


class RestaurantWithStats(Restaurant):
    total_visits: int = 0
    average_rating: float = 0.0


class VisitWithRestaurant(Visit):
    restaurant: Restaurant | None = None


class FavoriteRestaurant(Restaurant):
    avg_rating: float
    visit_count: int


class DashboardStats(CamelModel):
    total_visits: int
    total_restaurants: int
    average_rating: float
    favorite_restaurant: FavoriteRestaurant | None = None


class GroupOut(CamelModel):
    id: str
    name: str
    members: list[str]


class GroupsResponse(CamelModel):
    groups: list[GroupOut]
    current_group: GroupOut | None = None


class Suggestion(CamelModel):
    type: Literal["cuisine", "restaurant", "dish"]
    message: str


class RandomSuggestion(CamelModel):
    message: str
    restaurant: Restaurant | None = None
