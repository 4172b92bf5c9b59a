"""
Queue builder for daily study sessions.

Builds ordered study queues by:
1. Taking due learning/relearning cards first
2. Filling with due review cards, within the daily review quota
3. Filling with new cards, oldest first, within the daily new-card quota
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from typing import Literal

from cadence.domain.constants import (
    DEFAULT_MAX_REVIEWS_PER_DAY,
    DEFAULT_NEW_CARDS_PER_DAY,
    DEFAULT_QUEUE_LIMIT,
)
from cadence.domain.scheduling.models import CardSnapshot, CardState, ReviewLog

logger = logging.getLogger(__name__)

ReviewOrder = Literal["reviewsFirst", "newFirst", "mixed"]


@dataclass
class StudyLimits:
    """Daily limits and ordering for a study session."""

    new_cards_per_day: int = DEFAULT_NEW_CARDS_PER_DAY
    max_reviews_per_day: int = DEFAULT_MAX_REVIEWS_PER_DAY
    review_order: ReviewOrder = "reviewsFirst"


@dataclass
class DueCounts:
    new: int = 0
    learning: int = 0  # includes relearning
    review: int = 0


@dataclass
class StudyQueue:
    """Result of queue building operation."""

    cards: list[CardSnapshot]  # Final study order
    learning: list[CardSnapshot]
    review: list[CardSnapshot]
    new: list[CardSnapshot]
    new_allowed: int  # Remaining new-card quota before this queue
    reviews_allowed: int  # Remaining review quota before this queue


def _aware(ts: datetime) -> datetime:
    # Naive timestamps are local time; exported rows usually carry an offset.
    return ts if ts.tzinfo is not None else ts.astimezone()


def _start_of_day(now: datetime) -> datetime:
    return _aware(now.replace(hour=0, minute=0, second=0, microsecond=0))


def _remaining_quotas(
    limits: StudyLimits, reviewed_today: Iterable[ReviewLog], now: datetime
) -> tuple[int, int]:
    day_start = _start_of_day(now)
    new_done = 0
    reviews_done = 0
    for log in reviewed_today:
        if _aware(log.reviewed_at) < day_start:
            continue
        if log.previous_state is CardState.NEW:
            new_done += 1
        elif log.previous_state is CardState.REVIEW:
            reviews_done += 1

    return (
        max(0, limits.new_cards_per_day - new_done),
        max(0, limits.max_reviews_per_day - reviews_done),
    )


def _interleave(new: list[CardSnapshot], review: list[CardSnapshot]) -> list[CardSnapshot]:
    mixed: list[CardSnapshot] = []
    for i in range(max(len(new), len(review))):
        if i < len(new):
            mixed.append(new[i])
        if i < len(review):
            mixed.append(review[i])
    return mixed


def build_study_queue(
    cards: Iterable[CardSnapshot],
    limits: StudyLimits,
    now: datetime,
    reviewed_today: Iterable[ReviewLog] = (),
    limit: int = DEFAULT_QUEUE_LIMIT,
) -> StudyQueue:
    """
    Build today's study queue from card snapshots.

    Args:
        cards: Candidate cards (typically a deck and its children).
        limits: Daily quotas and new/review ordering.
        now: Current time; only cards with due_at <= now are eligible.
            Naive and offset-aware timestamps may be mixed; naive ones are
            read as local time.
        reviewed_today: Review logs used to consume the daily quotas.
            Logs from before local midnight are ignored.
        limit: Maximum total cards in the queue (default: 50). Negative
            values are treated as 0.

    Returns:
        StudyQueue with the final order and the per-bucket selections.

    Raises:
        UnknownCardStateError: A card carries an unknown state tag.
    """
    limit = max(0, limit)
    current = _aware(now)
    new_allowed, reviews_allowed = _remaining_quotas(limits, reviewed_today, now)

    learning: list[CardSnapshot] = []
    review: list[CardSnapshot] = []
    new: list[CardSnapshot] = []

    for card in cards:
        if card.suspended or _aware(card.due_at) > current:
            continue
        state = CardState.parse(card.state)
        if state in (CardState.LEARNING, CardState.RELEARNING):
            learning.append(card)
        elif state is CardState.REVIEW:
            review.append(card)
        else:
            new.append(card)

    learning.sort(key=lambda c: _aware(c.due_at))
    learning = learning[:limit]

    review_cap = min(max(0, limit - len(learning)), reviews_allowed)
    review.sort(key=lambda c: _aware(c.due_at))
    review = review[:review_cap]

    new_cap = min(max(0, limit - len(learning) - len(review)), new_allowed)
    # Oldest first; cards without a creation time fall back to their due time.
    new.sort(key=lambda c: _aware(c.created_at or c.due_at))
    new = new[:new_cap]

    if limits.review_order == "newFirst":
        ordered = learning + new + review
    elif limits.review_order == "mixed":
        ordered = learning + _interleave(new, review)
    else:
        ordered = learning + review + new

    logger.debug(
        f"Study queue: {len(learning)} learning, {len(review)} review, {len(new)} new "
        f"(quotas: {reviews_allowed} review, {new_allowed} new)"
    )

    return StudyQueue(
        cards=ordered,
        learning=learning,
        review=review,
        new=new,
        new_allowed=new_allowed,
        reviews_allowed=reviews_allowed,
    )


def count_due(cards: Iterable[CardSnapshot], now: datetime) -> DueCounts:
    """Count due, non-suspended cards per bucket."""
    counts = DueCounts()
    current = _aware(now)
    for card in cards:
        if card.suspended or _aware(card.due_at) > current:
            continue
        state = CardState.parse(card.state)
        if state is CardState.NEW:
            counts.new += 1
        elif state is CardState.REVIEW:
            counts.review += 1
        else:
            counts.learning += 1
    return counts
