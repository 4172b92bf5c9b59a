"""Tests for answer-button interval previews."""

from dataclasses import replace

import pytest

from cadence.application.scheduling.preview import preview_intervals
from cadence.domain.scheduling.errors import UnknownCardStateError
from cadence.domain.scheduling.models import CardSnapshot, CardState, SchedulerSettings


def test_new_card_has_no_hard_button(settings, now):
    card = CardSnapshot(state=CardState.NEW, due_at=now)
    preview = preview_intervals(card, settings, now)

    assert preview.again == "1m"
    assert preview.good == "1m"
    assert preview.easy == "1 day"
    assert preview.hard is None
    assert "hard" not in preview.as_dict()


def test_learning_card(settings, now):
    card = CardSnapshot(state=CardState.LEARNING, due_at=now, learning_step_index=0, reps=1)
    preview = preview_intervals(card, settings, now)

    assert preview.as_dict() == {"again": "1m", "hard": "10m", "good": "10m", "easy": "1 day"}


def test_learning_card_with_hour_step(now):
    settings = SchedulerSettings(learning_steps=(10.0, 180.0))
    card = CardSnapshot(state=CardState.LEARNING, due_at=now)
    assert preview_intervals(card, settings, now).good == "3h"


def test_review_card(settings, now):
    card = CardSnapshot(
        state=CardState.REVIEW, due_at=now, interval_days=10, ease=2.5, reps=5
    )
    preview = preview_intervals(card, settings, now)

    assert preview.again == "1 day"
    assert preview.hard == "12 days"
    assert preview.good == "25 days"
    assert preview.easy == "1 month"


def test_mature_review_card_in_years(settings, now):
    card = CardSnapshot(state=CardState.REVIEW, due_at=now, interval_days=300, ease=2.5)
    assert preview_intervals(card, settings, now).good == "2 years"


def test_relearning_card_uses_minutes(settings, now):
    card = CardSnapshot(state=CardState.RELEARNING, due_at=now, interval_days=1, ease=2.0)
    preview = preview_intervals(card, settings, now)
    assert preview.again == "1m"
    assert preview.good == "10m"


def test_preview_is_idempotent_and_pure(settings, now):
    card = CardSnapshot(state=CardState.REVIEW, due_at=now, interval_days=4, ease=2.2)
    before = replace(card)

    assert preview_intervals(card, settings, now) == preview_intervals(card, settings, now)
    assert card == before


def test_preview_defaults_to_current_time(settings, now):
    card = CardSnapshot(state=CardState.LEARNING, due_at=now)
    assert preview_intervals(card, settings).again == "1m"


def test_unknown_state_propagates(settings, now):
    card = CardSnapshot(state="buried", due_at=now)
    with pytest.raises(UnknownCardStateError):
        preview_intervals(card, settings, now)
