"""
Due date computation.

Intraday delays fire at an exact offset from now. Interday delays and all
review intervals land on a calendar day, pinned to the rollover hour so that
"due today" does not depend on the hour the user studied.
"""

import math
from datetime import datetime, timedelta

from cadence.domain.constants import MINUTES_PER_DAY, ROLLOVER_HOUR

from .steps import is_interday


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return math.floor(value + 0.5)


def _pin_to_day(now: datetime, days: int) -> datetime:
    target = now + timedelta(days=days)
    return target.replace(hour=ROLLOVER_HOUR, minute=0, second=0, microsecond=0)


def due_from_delay(delay_minutes: float, now: datetime) -> datetime:
    """
    Due date for a learning step.

    Interday steps advance whole days from now's date and pin to the rollover
    hour; intraday steps return now + delay exactly.
    """
    if is_interday(delay_minutes):
        return _pin_to_day(now, math.floor(delay_minutes / MINUTES_PER_DAY))
    return now + timedelta(minutes=delay_minutes)


def due_from_interval_days(days: float, now: datetime) -> datetime:
    """Due date for a review interval, pinned to the rollover hour."""
    return _pin_to_day(now, round_half_up(days))
