from __future__ import annotations

from datetime import datetime

import pytest

from dinelog.recommendations.config import ScoringConfig
from dinelog.recommendations.scoring import (
    NO_DATA_MESSAGE,
    random_suggestion,
    score,
    score_restaurants,
    top_candidates,
)

NOW = datetime(2024, 3, 1, 12, 0)


# ── Score formula ────────────────────────────────────────────────────────


def test_score_never_visited():
    assert score(0.0, 999, 0) == 30 * 2 + 50


def test_score_visited():
    assert score(4.0, 10, 1) == 4 * 20 + 10 * 2


def test_score_over_visited_penalty():
    assert score(5.0, 5, 7) == 100 + 10 - 14
    assert score(5.0, 5, 5) == 110


def test_score_monotonic_in_rating_and_recency():
    for days in range(0, 40):
        ratings = [score(r / 2, days, 3) for r in range(2, 11)]
        assert ratings == sorted(ratings)
    for rating in (1.0, 3.5, 5.0):
        by_days = [score(rating, d, 3) for d in range(0, 60)]
        assert by_days == sorted(by_days)
        assert by_days[30] == by_days[59]


def test_score_respects_config():
    config = ScoringConfig(rating_weight=10.0, unvisited_bonus=0.0)
    assert score(0.0, 999, 0, config) == 60


# ── Ranking ──────────────────────────────────────────────────────────────


def test_score_restaurants_fields(make_restaurant, make_visit):
    pho = make_restaurant()
    visits = [
        make_visit(pho, "2024-02-20T12:00:00", rating=3),
        make_visit(pho, "2024-01-01T12:00:00", rating=5),
    ]
    [s] = score_restaurants([pho], visits, now=NOW)
    assert s.visit_count == 2
    assert s.avg_rating == 4
    # most recent visit wins regardless of input order
    assert s.days_since_last_visit == 10
    assert s.score == 4 * 20 + 10 * 2


def test_score_restaurants_never_visited_sentinel(make_restaurant):
    [s] = score_restaurants([make_restaurant()], [], now=NOW)
    assert s.visit_count == 0
    assert s.avg_rating == 0
    assert s.days_since_last_visit == 999


def _four_restaurants(make_restaurant, make_visit):
    a = make_restaurant("Never Been")
    b = make_restaurant("Yesterday")
    c = make_restaurant("Ten Days")
    d = make_restaurant("Meh")
    visits = [
        make_visit(b, "2024-02-29T12:00:00", rating=5),
        make_visit(c, "2024-02-20T12:00:00", rating=3),
        make_visit(d, "2024-02-28T12:00:00", rating=1),
    ]
    return [d, c, b, a], visits


def test_ranking_and_top_three(make_restaurant, make_visit):
    restaurants, visits = _four_restaurants(make_restaurant, make_visit)
    ranked = score_restaurants(restaurants, visits, now=NOW)
    assert [s.restaurant.name for s in ranked] == ["Never Been", "Yesterday", "Ten Days", "Meh"]
    assert [s.restaurant.name for s in top_candidates(ranked)] == ["Never Been", "Yesterday", "Ten Days"]


def test_top_candidates_shorter_than_pool(make_restaurant):
    ranked = score_restaurants([make_restaurant()], [], now=NOW)
    assert len(top_candidates(ranked)) == 1


def test_random_pick_stays_in_top_three(make_restaurant, make_visit, last_choice):
    restaurants, visits = _four_restaurants(make_restaurant, make_visit)
    result = random_suggestion(restaurants, visits, rng=last_choice, now=NOW)
    assert result.restaurant.name == "Ten Days"


# ── Messages ─────────────────────────────────────────────────────────────


def test_no_restaurants_returns_no_data(make_visit):
    result = random_suggestion([], [make_visit("x", "2024-01-01T12:00:00")], now=NOW)
    assert result.message == NO_DATA_MESSAGE
    assert result.restaurant is None


@pytest.mark.parametrize(
    "visit_spec, group, expected",
    [
        (None, False, "🎯 Try Pho 24! You haven't been there yet and it's Vietnamese cuisine."),
        (None, True, "🎯 Try Pho 24! Your group hasn't been there yet and it's Vietnamese cuisine."),
        (
            ("2024-01-01T12:00:00", 4),
            False,
            "🎯 How about Pho 24? You haven't been there in 60 days and you gave it 4.0⭐ before!",
        ),
        (
            ("2024-01-01T12:00:00", 4),
            True,
            "🎯 How about Pho 24? Your group hasn't been there in 60 days and your group gave it 4.0⭐ before!",
        ),
        (
            ("2024-02-20T12:00:00", 5),
            False,
            "🎯 Pho 24 is calling! You gave it 5.0⭐ - time for another great meal?",
        ),
        (
            ("2024-02-20T12:00:00", 5),
            True,
            "🎯 Pho 24 is calling! Your group gave it 5.0⭐ - time for another great meal?",
        ),
        (
            ("2024-02-20T12:00:00", 3),
            False,
            "🎯 Why not visit Pho 24 today? Perfect for some Vietnamese food!",
        ),
    ],
)
def test_message_policy(make_restaurant, make_visit, first_choice, visit_spec, group, expected):
    pho = make_restaurant()
    visits = []
    if visit_spec:
        date, rating = visit_spec
        visits.append(make_visit(pho, date, rating=rating))

    result = random_suggestion([pho], visits, group=group, rng=first_choice, now=NOW)

    assert result.message == expected
    assert result.restaurant.id == pho.id
