# Domain Scheduling Package
from .errors import SchedulingError, UnknownCardStateError, UnknownRatingError
from .models import (
    CardSnapshot,
    CardState,
    IntervalPreview,
    Rating,
    ReviewLog,
    SchedulerSettings,
    SchedulingResult,
)

__all__ = [
    "CardSnapshot",
    "CardState",
    "IntervalPreview",
    "Rating",
    "ReviewLog",
    "SchedulerSettings",
    "SchedulingResult",
    "SchedulingError",
    "UnknownCardStateError",
    "UnknownRatingError",
]
