"""
Anki-style SM-2 scheduler.

Pure transition functions, one per card state, plus the dispatcher that
picks between them. Nothing here reads the clock or touches storage: the
caller passes a card snapshot, a rating, settings and the current time, and
gets back a fresh SchedulingResult.

State flow:
    new -> learning -> review <-> relearning

Lapsed review cards stay in review with their interval reset; relearning is
handled exactly like learning for cards that already carry that state.
"""

import logging
from datetime import datetime

from cadence.domain.constants import (
    DEFAULT_LEARNING_STEPS_MINUTES,
    EASE_BONUS_EASY,
    EASE_PENALTY_AGAIN,
    EASE_PENALTY_HARD,
    MAX_EASE,
    MIN_EASE,
)
from cadence.domain.scheduling.errors import UnknownCardStateError
from cadence.domain.scheduling.models import (
    CardSnapshot,
    CardState,
    Rating,
    SchedulerSettings,
    SchedulingResult,
)

from .due_dates import due_from_delay, due_from_interval_days, round_half_up

logger = logging.getLogger(__name__)


def clamp_ease(ease: float, min_ease: float = MIN_EASE, max_ease: float = MAX_EASE) -> float:
    return max(min_ease, min(max_ease, ease))


def _learning_steps(settings: SchedulerSettings) -> list[float]:
    # A step string with no valid tokens must not block reviews.
    return list(settings.learning_steps) or list(DEFAULT_LEARNING_STEPS_MINUTES)


def _graduate(
    card: CardSnapshot, settings: SchedulerSettings, now: datetime, ease: float, reps: int
) -> SchedulingResult:
    interval = settings.graduating_interval_days
    return SchedulingResult(
        state=CardState.REVIEW,
        due_at=due_from_interval_days(interval, now),
        interval_days=interval,
        ease=ease,
        learning_step_index=0,
        reps=reps,
        lapses=card.lapses,
    )


def schedule_new(
    card: CardSnapshot, rating: Rating, settings: SchedulerSettings, now: datetime
) -> SchedulingResult:
    """
    Schedule a card that has never been graded.

    Again and Hard/Good both enter learning at step 0, but only Hard/Good
    count as a completed rep. Easy graduates immediately.
    """
    steps = _learning_steps(settings)

    if rating is Rating.EASY:
        return _graduate(card, settings, now, ease=settings.starting_ease, reps=1)

    return SchedulingResult(
        state=CardState.LEARNING,
        due_at=due_from_delay(steps[0], now),
        interval_days=0,
        ease=settings.starting_ease,
        learning_step_index=0,
        reps=0 if rating is Rating.AGAIN else 1,
        lapses=0,
    )


def schedule_learning(
    card: CardSnapshot, rating: Rating, settings: SchedulerSettings, now: datetime
) -> SchedulingResult:
    """
    Schedule a card that is working through its learning steps.

    Again restarts the steps, Hard/Good advance one step (graduating past
    the last one), Easy graduates regardless of the current step.
    """
    steps = _learning_steps(settings)
    state = CardState.parse(card.state)
    current_step = card.learning_step_index or 0

    if rating is Rating.AGAIN:
        return SchedulingResult(
            state=state,
            due_at=due_from_delay(steps[0], now),
            interval_days=0,
            ease=card.ease,
            learning_step_index=0,
            reps=card.reps,
            lapses=card.lapses,
        )

    if rating is Rating.EASY:
        return _graduate(card, settings, now, ease=card.ease, reps=card.reps + 1)

    next_step = current_step + 1
    if next_step >= len(steps):
        return _graduate(card, settings, now, ease=card.ease, reps=card.reps + 1)

    return SchedulingResult(
        state=state,
        due_at=due_from_delay(steps[next_step], now),
        interval_days=0,
        ease=card.ease,
        learning_step_index=next_step,
        reps=card.reps + 1,
        lapses=card.lapses,
    )


def schedule_review(
    card: CardSnapshot, rating: Rating, settings: SchedulerSettings, now: datetime
) -> SchedulingResult:
    """
    Schedule a graduated card using SM-2.

    Again: ease -0.20, lapse counted, interval reset to the graduating interval.
    Hard:  ease -0.15, interval x hard_interval.
    Good:  interval x ease.
    Easy:  ease +0.15, interval x ease x easy_bonus.

    Hard/Good/Easy intervals are rounded and never drop below the graduating
    interval.
    """
    floor_days = settings.graduating_interval_days
    ease = card.ease or settings.starting_ease
    interval = card.interval_days or floor_days
    lapses = card.lapses

    if rating is Rating.AGAIN:
        ease = clamp_ease(ease - EASE_PENALTY_AGAIN)
        lapses += 1
        interval = floor_days
    else:
        if rating is Rating.HARD:
            ease = clamp_ease(ease - EASE_PENALTY_HARD)
            interval = interval * settings.hard_interval
        elif rating is Rating.GOOD:
            interval = interval * ease
        else:
            ease = clamp_ease(ease + EASE_BONUS_EASY)
            interval = interval * ease * settings.easy_bonus
        interval = max(floor_days, round_half_up(interval))

    return SchedulingResult(
        state=CardState.REVIEW,
        due_at=due_from_interval_days(interval, now),
        interval_days=interval,
        ease=ease,
        learning_step_index=0,
        reps=card.reps + 1,
        lapses=lapses,
    )


def schedule_relearning(
    card: CardSnapshot, rating: Rating, settings: SchedulerSettings, now: datetime
) -> SchedulingResult:
    return schedule_learning(card, rating, settings, now)


_TRANSITIONS = {
    CardState.NEW: schedule_new,
    CardState.LEARNING: schedule_learning,
    CardState.REVIEW: schedule_review,
    CardState.RELEARNING: schedule_relearning,
}


def grade_card(
    card: CardSnapshot,
    rating: Rating | str,
    settings: SchedulerSettings,
    now: datetime,
) -> SchedulingResult:
    """
    Grade a card and compute its next scheduling state.

    Args:
        card: Snapshot of the card being graded. Never mutated.
        rating: again/hard/good/easy, as a Rating or its string value.
        settings: Scheduler configuration.
        now: Current time; all due dates are computed relative to it.

    Returns:
        A new SchedulingResult replacing the card's scheduling fields.

    Raises:
        UnknownCardStateError: The card's state tag is not a known state.
        UnknownRatingError: The rating is not one of the four buttons.
    """
    state = CardState.parse(card.state)
    rating = Rating.parse(rating)

    transition = _TRANSITIONS.get(state)
    if transition is None:
        raise UnknownCardStateError(card.state)

    result = transition(card, rating, settings, now)
    logger.debug(
        f"Graded {card.card_id or '<card>'} {rating.value}: "
        f"{state.value} -> {result.state.value}, "
        f"interval={result.interval_days}d, ease={result.ease:.2f}, due={result.due_at.isoformat()}"
    )
    return result
