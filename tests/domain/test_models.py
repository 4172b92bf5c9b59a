"""Tests for scheduling domain models."""

from dataclasses import FrozenInstanceError
from datetime import datetime

import pytest

from cadence.domain.scheduling.errors import UnknownCardStateError, UnknownRatingError
from cadence.domain.scheduling.models import (
    CardSnapshot,
    CardState,
    IntervalPreview,
    Rating,
    SchedulingResult,
)


def test_card_state_parse():
    assert CardState.parse("relearning") is CardState.RELEARNING
    assert CardState.parse(CardState.NEW) is CardState.NEW
    assert CardState.REVIEW == "review"

    with pytest.raises(UnknownCardStateError, match="Unknown card state: 'archived'"):
        CardState.parse("archived")


def test_rating_parse():
    assert Rating.parse("HARD") is Rating.HARD
    assert Rating.parse(Rating.EASY) is Rating.EASY

    with pytest.raises(UnknownRatingError) as exc_info:
        Rating.parse("5")
    assert exc_info.value.rating == "5"


def test_snapshot_is_frozen():
    card = CardSnapshot(state=CardState.NEW, due_at=datetime(2024, 1, 1))
    with pytest.raises(FrozenInstanceError):
        card.reps = 3  # type: ignore[misc]


def test_snapshot_defaults():
    card = CardSnapshot(state=CardState.NEW, due_at=datetime(2024, 1, 1))
    assert card.ease == 2.5
    assert card.interval_days == 0
    assert card.learning_step_index == 0
    assert (card.reps, card.lapses) == (0, 0)
    assert not card.suspended


def test_result_as_record():
    result = SchedulingResult(
        state=CardState.REVIEW,
        due_at=datetime(2024, 3, 11, 4, 0),
        interval_days=34,
        ease=2.6500000000000004,
        learning_step_index=0,
        reps=6,
        lapses=1,
    )

    assert result.as_record() == {
        "state": "review",
        "due_at": "2024-03-11T04:00:00",
        "interval_days": 34,
        "ease": 2.65,
        "learning_step_index": 0,
        "reps": 6,
        "lapses": 1,
    }


def test_preview_as_dict():
    preview = IntervalPreview(again="1m", good="10m", easy="1 day", hard="10m")
    assert preview.as_dict() == {"again": "1m", "good": "10m", "easy": "1 day", "hard": "10m"}
