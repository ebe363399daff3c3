from __future__ import annotations

import random
from collections import Counter
from datetime import datetime

from ..journal.dates import days_since, to_local
from ..journal.models import Restaurant, Suggestion, Visit
from .config import DEFAULT_SCORING_CONFIG, ScoringConfig
from .scoring import RandomSource


def _chronological(visits: list[Visit]) -> list[Visit]:
    return sorted(visits, key=lambda v: to_local(v.date))


def cuisine_counts(visits: list[Visit], restaurants: list[Restaurant]) -> Counter[str]:
    """Visits per cuisine, keyed in first-visit order."""
    by_id = {r.id: r for r in restaurants}
    counter: Counter[str] = Counter()
    for v in _chronological(visits):
        restaurant = by_id.get(v.restaurant_id)
        if restaurant:
            counter[restaurant.cuisine_type] += 1
    return counter


def least_tried_cuisine(counter: Counter[str]) -> str | None:
    # min() keeps the first of equal counts, i.e. the earliest tried cuisine
    if not counter:
        return None
    return min(counter.items(), key=lambda kv: kv[1])[0]


def days_since_cuisine(
    visits: list[Visit],
    restaurants: list[Restaurant],
    cuisine: str,
    now: datetime | None = None,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> int:
    cuisine_ids = {r.id for r in restaurants if r.cuisine_type == cuisine}
    dates = [to_local(v.date) for v in visits if v.restaurant_id in cuisine_ids]
    if not dates:
        return config.never_visited_days
    return days_since(max(dates), now)


def favorite_dish(visits: list[Visit]) -> str | None:
    counter: Counter[str] = Counter()
    for v in _chronological(visits):
        for dish in v.dishes:
            counter[dish.name] += 1
    if not counter:
        return None
    return max(counter.items(), key=lambda kv: kv[1])[0]


def build_suggestions(
    visits: list[Visit],
    restaurants: list[Restaurant],
    group: bool = False,
    rng: RandomSource | None = None,
    now: datetime | None = None,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> list[Suggestion]:
    """Dashboard feed. Each entry is added only when its trigger holds."""
    if not visits:
        return []

    rng = rng or random.Random()
    suggestions: list[Suggestion] = []
    by_id = {r.id: r for r in restaurants}

    # Cuisine diversity
    counts = cuisine_counts(visits, restaurants)
    if len(counts) > 1:
        cuisine = least_tried_cuisine(counts)
        gap = days_since_cuisine(visits, restaurants, cuisine, now, config)
        if gap > config.cuisine_gap_days:
            hasnt = "Your group hasn't" if group else "You haven't"
            suggestions.append(Suggestion(
                type="cuisine",
                message=f"{hasnt} had {cuisine} in {gap} days. Time to try it again!",
            ))

    # Beloved restaurant
    beloved = [v for v in visits if v.overall_rating >= config.beloved_rating]
    if beloved:
        pick = rng.choice(beloved)
        restaurant = by_id.get(pick.restaurant_id)
        if restaurant:
            loved = "Your group loved" if group else "You loved"
            suggestions.append(Suggestion(
                type="restaurant",
                message=f"{loved} {restaurant.name} ({pick.overall_rating}⭐). Consider visiting again!",
            ))

    # Unvisited restaurant
    visited_ids = {v.restaurant_id for v in visits}
    unvisited = [r for r in restaurants if r.id not in visited_ids]
    if unvisited:
        pick_restaurant = rng.choice(unvisited)
        hasnt_tried = "Your group hasn't tried" if group else "You haven't tried"
        suggestions.append(Suggestion(
            type="restaurant",
            message=f"{hasnt_tried} {pick_restaurant.name} yet. Give it a shot!",
        ))

    # Favourite dish
    dish = favorite_dish(visits)
    if dish:
        owner = "your group's" if group else "your"
        suggestions.append(Suggestion(
            type="dish",
            message=f"{dish} is {owner} most ordered dish. Craving it again?",
        ))

    return suggestions[: config.max_suggestions]
