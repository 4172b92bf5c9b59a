"""Tests for review log construction."""

from datetime import datetime

from cadence.application.scheduling.review_log import build_review_log
from cadence.application.scheduling.scheduler import grade_card
from cadence.domain.scheduling.models import CardSnapshot, CardState, Rating


def test_review_log_records_previous_and_new_state(settings, now):
    card = CardSnapshot(
        state=CardState.REVIEW, due_at=now, interval_days=10, ease=2.5, reps=5, card_id="c1"
    )
    result = grade_card(card, Rating.AGAIN, settings, now)

    log = build_review_log(card, "again", result, now, elapsed_ms=4200)

    assert log.card_id == "c1"
    assert log.rating is Rating.AGAIN
    assert log.reviewed_at == now
    assert log.previous_state is CardState.REVIEW
    assert log.previous_interval == 10
    assert log.new_interval == 1
    assert log.new_due_at == datetime(2024, 3, 11, 4, 0)
    assert log.elapsed_ms == 4200


def test_review_log_for_new_card(settings, now):
    card = CardSnapshot(state="new", due_at=now)
    result = grade_card(card, Rating.GOOD, settings, now)

    log = build_review_log(card, Rating.GOOD, result, now)

    assert log.previous_state is CardState.NEW
    assert log.card_id is None
    assert log.elapsed_ms is None
    assert log.new_interval == 0
