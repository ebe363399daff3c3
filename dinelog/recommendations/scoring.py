"""
"Surprise me" suggestion.

Every restaurant in scope gets a heuristic score:

    avg_rating * 20
    + min(days_since_last_visit, 30) * 2
    + 50                       if never visited
    - 2 * visit_count          if visited more than 5 times

The restaurants are ranked by score and one of the top three is picked at
random, so repeated requests do not always land on the same place.
"""
from __future__ import annotations

import random
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Protocol, Sequence

from ..journal.dates import days_since, to_local
from ..journal.models import RandomSuggestion, Restaurant, Visit
from .config import DEFAULT_SCORING_CONFIG, ScoringConfig

NO_DATA_MESSAGE = "Add some restaurants first to get personalized suggestions!"


class RandomSource(Protocol):
    """Anything that can pick from a sequence, e.g. ``random.Random``."""

    def choice(self, seq: Sequence[Any]) -> Any: ...


@dataclass(frozen=True)
class RestaurantScore:
    restaurant: Restaurant
    score: float
    visit_count: int
    avg_rating: float
    days_since_last_visit: int


def score(
    avg_rating: float,
    days_since_last_visit: int,
    visit_count: int,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> float:
    total = avg_rating * config.rating_weight
    total += min(days_since_last_visit, config.recency_cap_days) * config.recency_weight
    if visit_count == 0:
        total += config.unvisited_bonus
    if visit_count > config.over_visit_threshold:
        total -= visit_count * config.over_visit_penalty
    return total


def score_restaurants(
    restaurants: list[Restaurant],
    visits: list[Visit],
    now: datetime | None = None,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> list[RestaurantScore]:
    """Score each restaurant, highest first. Ties keep the input order."""
    now = now or datetime.now()
    scored: list[RestaurantScore] = []
    for restaurant in restaurants:
        own = [v for v in visits if v.restaurant_id == restaurant.id]
        count = len(own)
        if count:
            avg = sum(v.overall_rating for v in own) / count
            days = days_since(max(own, key=lambda v: to_local(v.date)).date, now)
        else:
            avg = 0.0
            days = config.never_visited_days
        scored.append(RestaurantScore(
            restaurant=restaurant,
            score=score(avg, days, count, config),
            visit_count=count,
            avg_rating=avg,
            days_since_last_visit=days,
        ))
    scored.sort(key=lambda s: s.score, reverse=True)
    return scored


def top_candidates(
    scored: list[RestaurantScore],
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> list[RestaurantScore]:
    return scored[: min(config.candidate_pool, len(scored))]


def suggestion_message(
    pick: RestaurantScore,
    group: bool,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> str:
    name = pick.restaurant.name
    cuisine = pick.restaurant.cuisine_type
    subject = "Your group" if group else "You"
    hasnt = "Your group hasn't" if group else "You haven't"

    if pick.visit_count == 0:
        return f"🎯 Try {name}! {hasnt} been there yet and it's {cuisine} cuisine."
    if pick.days_since_last_visit > config.long_absence_days:
        return (
            f"🎯 How about {name}? {hasnt} been there in {pick.days_since_last_visit} days "
            f"and {subject.lower()} gave it {pick.avg_rating:.1f}⭐ before!"
        )
    if pick.avg_rating >= config.beloved_rating:
        return (
            f"🎯 {name} is calling! {subject} gave it {pick.avg_rating:.1f}⭐ "
            "- time for another great meal?"
        )
    return f"🎯 Why not visit {name} today? Perfect for some {cuisine} food!"


def random_suggestion(
    restaurants: list[Restaurant],
    visits: list[Visit],
    group: bool = False,
    rng: RandomSource | None = None,
    now: datetime | None = None,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> RandomSuggestion:
    """Pick one of the best-scoring restaurants and explain why."""
    if not restaurants:
        return RandomSuggestion(message=NO_DATA_MESSAGE)

    rng = rng or random.Random()
    candidates = top_candidates(score_restaurants(restaurants, visits, now, config), config)
    pick = rng.choice(candidates)
    return RandomSuggestion(
        message=suggestion_message(pick, group, config),
        restaurant=pick.restaurant,
    )
