"""
Domain models for SM-2 scheduling.

These are pure data structures with no I/O or external dependencies.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from cadence.domain.constants import (
    DEFAULT_EASY_BONUS,
    DEFAULT_GRADUATING_INTERVAL_DAYS,
    DEFAULT_HARD_INTERVAL,
    DEFAULT_LEARNING_STEPS_MINUTES,
    DEFAULT_STARTING_EASE,
)

from .errors import UnknownCardStateError, UnknownRatingError


class CardState(str, Enum):
    """Lifecycle state of a card. Values match the persisted tag."""

    NEW = "new"
    LEARNING = "learning"
    REVIEW = "review"
    RELEARNING = "relearning"

    @classmethod
    def parse(cls, value: "CardState | str") -> "CardState":
        try:
            return cls(value)
        except ValueError:
            raise UnknownCardStateError(value) from None


class Rating(str, Enum):
    """Button pressed after revealing the answer."""

    AGAIN = "again"
    HARD = "hard"
    GOOD = "good"
    EASY = "easy"

    @classmethod
    def parse(cls, value: "Rating | str") -> "Rating":
        try:
            return cls(value.lower() if isinstance(value, str) else value)
        except ValueError:
            raise UnknownRatingError(value) from None


@dataclass(frozen=True)
class CardSnapshot:
    """
    Immutable view of a stored card, as handed to the scheduler.

    Attributes:
        state: Lifecycle tag. Raw strings are accepted and checked at dispatch.
        due_at: Moment the card becomes eligible for review.
        interval_days: Current review interval (0 while learning).
        ease: SM-2 ease multiplier (e.g. 2.5 = 250%).
        learning_step_index: Position in the learning steps while (re)learning.
        reps: Completed gradings.
        lapses: Times the card was forgotten while in review.
        card_id: Optional identifier, used by the queue builder and review log.
        created_at: Optional creation time, orders new cards in a queue.
        suspended: Suspended cards never enter a study queue.
    """

    state: CardState | str
    due_at: datetime
    interval_days: float = 0
    ease: float = DEFAULT_STARTING_EASE
    learning_step_index: int = 0
    reps: int = 0
    lapses: int = 0

    card_id: str | None = None
    created_at: datetime | None = None
    suspended: bool = False


@dataclass(frozen=True)
class SchedulerSettings:
    """
    Scheduler configuration. Read-only to the scheduler.

    hard_interval multiplies the review interval on a Hard rating; its
    direction (shrink vs. grow) is left to configuration.
    """

    starting_ease: float = DEFAULT_STARTING_EASE
    easy_bonus: float = DEFAULT_EASY_BONUS
    hard_interval: float = DEFAULT_HARD_INTERVAL
    learning_steps: tuple[float, ...] = tuple(DEFAULT_LEARNING_STEPS_MINUTES)
    graduating_interval_days: int = DEFAULT_GRADUATING_INTERVAL_DAYS


@dataclass(frozen=True)
class SchedulingResult:
    """Complete replacement for the scheduling fields of a card."""

    state: CardState
    due_at: datetime
    interval_days: float
    ease: float
    learning_step_index: int
    reps: int
    lapses: int

    def as_record(self) -> dict[str, Any]:
        """
        Map the result onto a storage row.

        Ease is rounded to two decimals to fit a DECIMAL(3,2) column.
        """
        return {
            "state": self.state.value,
            "due_at": self.due_at.isoformat(),
            "interval_days": self.interval_days,
            "ease": round(self.ease, 2),
            "learning_step_index": self.learning_step_index,
            "reps": self.reps,
            "lapses": self.lapses,
        }


@dataclass(frozen=True)
class IntervalPreview:
    """Human-readable label per answer button. hard is None for new cards."""

    again: str
    good: str
    easy: str
    hard: str | None = None

    def as_dict(self) -> dict[str, str]:
        out = {"again": self.again, "good": self.good, "easy": self.easy}
        if self.hard is not None:
            out["hard"] = self.hard
        return out


@dataclass(frozen=True)
class ReviewLog:
    """
    A single grading event.

    Attributes:
        card_id: The card that was graded.
        rating: Button pressed.
        reviewed_at: When the grading happened.
        previous_state: State before grading; drives the daily quota counts.
        previous_interval: Interval before grading (days).
        new_interval: Interval assigned by this grading (days).
        new_due_at: Due time assigned by this grading.
        elapsed_ms: Time spent answering, if measured.
    """

    card_id: str | None
    rating: Rating
    reviewed_at: datetime
    previous_state: CardState
    previous_interval: float
    new_interval: float
    new_due_at: datetime
    elapsed_ms: int | None = None
