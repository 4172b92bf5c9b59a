"""
Interval preview for answer buttons.

Grades the same snapshot once per rating and labels each outcome, without
persisting or mutating anything.
"""

from datetime import datetime

from cadence.domain.scheduling.models import (
    CardSnapshot,
    CardState,
    IntervalPreview,
    Rating,
    SchedulerSettings,
    SchedulingResult,
)

from .due_dates import round_half_up
from .formatting import format_interval, format_interval_days
from .scheduler import grade_card


def _label(result: SchedulingResult, now: datetime) -> str:
    if result.state in (CardState.LEARNING, CardState.RELEARNING):
        minutes = round_half_up((result.due_at - now).total_seconds() / 60)
        return format_interval(minutes)
    return format_interval_days(result.interval_days)


def preview_intervals(
    card: CardSnapshot,
    settings: SchedulerSettings,
    now: datetime | None = None,
) -> IntervalPreview:
    """
    Preview the interval each rating would produce.

    Hard is left out for new cards. When now is omitted the current local
    time is used; pass it explicitly for deterministic output.
    """
    now = now or datetime.now()
    ratings = list(Rating)
    if CardState.parse(card.state) is CardState.NEW:
        ratings.remove(Rating.HARD)

    labels = {rating: _label(grade_card(card, rating, settings, now), now) for rating in ratings}

    return IntervalPreview(
        again=labels[Rating.AGAIN],
        hard=labels.get(Rating.HARD),
        good=labels[Rating.GOOD],
        easy=labels[Rating.EASY],
    )
