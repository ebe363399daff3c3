from __future__ import annotations

import math
from collections import Counter, defaultdict
from typing import Any, Iterable

from ..journal.dates import DAY_NAMES, month_key, to_local, weekday_index
from ..journal.models import DashboardStats, FavoriteRestaurant, Restaurant, Visit

TOP_RESTAURANTS_LIMIT = 10
TOP_DISHES_LIMIT = 15


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _index_restaurants(restaurants: Iterable[Restaurant]) -> dict[str, Restaurant]:
    return {r.id: r for r in restaurants}


def _chronological(visits: list[Visit]) -> list[Visit]:
    # stable, so equal timestamps keep caller order
    return sorted(visits, key=lambda v: to_local(v.date))


def visits_by_month(visits: list[Visit]) -> list[dict[str, Any]]:
    counter: Counter[str] = Counter(month_key(v.date) for v in visits)
    return [{"month": m, "visits": c} for m, c in sorted(counter.items())]


def cuisine_distribution(visits: list[Visit], restaurants: list[Restaurant]) -> list[dict[str, Any]]:
    """Share of visits per cuisine; visits to unknown restaurants still count toward the total."""
    by_id = _index_restaurants(restaurants)
    counter: Counter[str] = Counter()
    for v in _chronological(visits):
        restaurant = by_id.get(v.restaurant_id)
        if restaurant:
            counter[restaurant.cuisine_type] += 1

    total = len(visits)
    return [
        {
            "cuisine": cuisine,
            "count": count,
            "percentage": _round_half_up(count / total * 100),
        }
        for cuisine, count in sorted(counter.items(), key=lambda kv: kv[1], reverse=True)
    ]


def rating_trends(visits: list[Visit]) -> list[dict[str, Any]]:
    ratings: dict[str, list[int]] = defaultdict(list)
    for v in visits:
        ratings[month_key(v.date)].append(v.overall_rating)
    return [
        {"month": m, "avgRating": sum(r) / len(r)}
        for m, r in sorted(ratings.items())
    ]


def top_restaurants(visits: list[Visit], restaurants: list[Restaurant]) -> list[dict[str, Any]]:
    by_id = _index_restaurants(restaurants)
    stats: dict[str, dict[str, int]] = {}
    for v in _chronological(visits):
        s = stats.setdefault(v.restaurant_id, {"visits": 0, "total_rating": 0})
        s["visits"] += 1
        s["total_rating"] += v.overall_rating

    ranked = sorted(stats.items(), key=lambda kv: kv[1]["visits"], reverse=True)
    result = []
    for restaurant_id, s in ranked[:TOP_RESTAURANTS_LIMIT]:
        restaurant = by_id.get(restaurant_id)
        result.append({
            "name": restaurant.name if restaurant else "Unknown",
            "visits": s["visits"],
            "avgRating": s["total_rating"] / s["visits"],
        })
    return result


def top_dishes(visits: list[Visit]) -> list[dict[str, Any]]:
    stats: dict[str, dict[str, int]] = {}
    for v in _chronological(visits):
        for dish in v.dishes:
            s = stats.setdefault(dish.name, {"count": 0, "total_rating": 0})
            s["count"] += 1
            s["total_rating"] += dish.rating

    ranked = sorted(stats.items(), key=lambda kv: kv[1]["count"], reverse=True)
    return [
        {"name": name, "count": s["count"], "avgRating": s["total_rating"] / s["count"]}
        for name, s in ranked[:TOP_DISHES_LIMIT]
    ]


def visits_by_day_of_week(visits: list[Visit]) -> list[dict[str, Any]]:
    counts = [0] * 7
    for v in visits:
        counts[weekday_index(v.date)] += 1
    return [{"day": day, "visits": counts[i]} for i, day in enumerate(DAY_NAMES)]


def visits_by_time_of_day(visits: list[Visit]) -> list[dict[str, Any]]:
    counts = [0] * 24
    for v in visits:
        counts[to_local(v.date).hour] += 1
    return [{"hour": f"{h}:00", "visits": c} for h, c in enumerate(counts) if c > 0]


def compute_analytics(visits: list[Visit], restaurants: list[Restaurant]) -> dict[str, Any]:
    if not visits:
        return {
            "visitsByMonth": [],
            "cuisineDistribution": [],
            "ratingTrends": [],
            "topRestaurants": [],
            "topDishes": [],
            "visitsByDayOfWeek": [],
            "visitsByTimeOfDay": [],
        }

    return {
        "visitsByMonth": visits_by_month(visits),
        "cuisineDistribution": cuisine_distribution(visits, restaurants),
        "ratingTrends": rating_trends(visits),
        "topRestaurants": top_restaurants(visits, restaurants),
        "topDishes": top_dishes(visits),
        "visitsByDayOfWeek": visits_by_day_of_week(visits),
        "visitsByTimeOfDay": visits_by_time_of_day(visits),
    }


# ── Dashboard ────────────────────────────────────────────────────────────


def restaurant_visit_stats(visits: list[Visit]) -> dict[str, dict[str, float]]:
    """Per restaurant id: ``{"visits", "avg_rating"}`` in first-visit order."""
    totals: dict[str, list[int]] = {}
    for v in _chronological(visits):
        totals.setdefault(v.restaurant_id, []).append(v.overall_rating)
    return {
        rid: {"visits": len(r), "avg_rating": sum(r) / len(r)}
        for rid, r in totals.items()
    }


def compute_dashboard_stats(visits: list[Visit], restaurants: list[Restaurant]) -> DashboardStats:
    average = sum(v.overall_rating for v in visits) / len(visits) if visits else 0.0

    favorite = None
    stats = restaurant_visit_stats(visits)
    if stats:
        best_id, best = max(
            stats.items(),
            key=lambda kv: (kv[1]["avg_rating"], kv[1]["visits"]),
        )
        restaurant = _index_restaurants(restaurants).get(best_id)
        if restaurant:
            favorite = FavoriteRestaurant(
                **restaurant.model_dump(),
                avg_rating=best["avg_rating"],
                visit_count=best["visits"],
            )

    return DashboardStats(
        total_visits=len(visits),
        total_restaurants=len(restaurants),
        average_rating=average,
        favorite_restaurant=favorite,
    )
