"""
Resilience Index

Recency-weighted score of how quickly a subject gets going again after a
miss. Each comeback is scored by the length of the miss run before it and
weighted by its age, so recent comebacks dominate.
"""

from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from nonzero.services.streak_engine import DaySeries
from nonzero.utils.dates import date_range

HALF_LIFE_DAYS = 30.0
DECAY_BASE = 0.5
SEVERITY_STEP = 0.5


@dataclass(frozen=True)
class ComebackEvent:
    day: date
    missed_days: int
    score: float
    weight: float


def comeback_score(missed_days: int) -> float:
    """1.0 after a single missed day, 0.667 after two, 0.5 after three..."""
    return 1.0 / (1.0 + (missed_days - 1) * SEVERITY_STEP)


def recency_weight(age_days: int) -> float:
    """Halves every ``HALF_LIFE_DAYS``."""
    return DECAY_BASE ** (age_days / HALF_LIFE_DAYS)


def comeback_events(series: DaySeries) -> List[ComebackEvent]:
    """Walk the window day by day and score every comeback."""
    events = []
    consecutive_missed = 0
    previous_was_zero = False

    for day in date_range(series.start, series.end):
        is_non_zero = series.is_non_zero(day)

        if is_non_zero and previous_was_zero:
            age = (series.end - day).days
            events.append(ComebackEvent(
                day=day,
                missed_days=consecutive_missed,
                score=comeback_score(consecutive_missed),
                weight=recency_weight(age),
            ))

        if is_non_zero:
            consecutive_missed = 0
        else:
            consecutive_missed += 1
        previous_was_zero = not is_non_zero

    return events


def resilience_index(series: DaySeries) -> Optional[float]:
    """
    Weighted mean comeback score in (0, 1].

    Returns:
        None when there was never a comeback. Callers show that as "—",
        not as 0%.
    """
    weighted_score_sum = 0.0
    weight_sum = 0.0
    for event in comeback_events(series):
        weighted_score_sum += event.score * event.weight
        weight_sum += event.weight

    if weight_sum == 0:
        return None
    return weighted_score_sum / weight_sum
