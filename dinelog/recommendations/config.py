from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ScoringConfig:
    rating_weight: float = 20.0
    recency_cap_days: int = 30
    recency_weight: float = 2.0
    unvisited_bonus: float = 50.0
    over_visit_threshold: int = 5
    over_visit_penalty: float = 2.0
    candidate_pool: int = 3
    never_visited_days: int = 999
    long_absence_days: int = 30
    beloved_rating: float = 4.5
    cuisine_gap_days: int = 14
    max_suggestions: int = 5


DEFAULT_SCORING_CONFIG = ScoringConfig()
