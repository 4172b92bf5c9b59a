"""Review log construction for a completed grading."""

from datetime import datetime

from cadence.domain.scheduling.models import (
    CardSnapshot,
    CardState,
    Rating,
    ReviewLog,
    SchedulingResult,
)


def build_review_log(
    card: CardSnapshot,
    rating: Rating | str,
    result: SchedulingResult,
    now: datetime,
    elapsed_ms: int | None = None,
) -> ReviewLog:
    """
    Record a grading event.

    The previous state is what the daily new/review quotas count against, so
    it must come from the snapshot as it was before grading.
    """
    return ReviewLog(
        card_id=card.card_id,
        rating=Rating.parse(rating),
        reviewed_at=now,
        previous_state=CardState.parse(card.state),
        previous_interval=card.interval_days,
        new_interval=result.interval_days,
        new_due_at=result.due_at,
        elapsed_ms=elapsed_ms,
    )
