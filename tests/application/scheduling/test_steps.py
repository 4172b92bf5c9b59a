"""Tests for learning step parsing."""

import logging

from cadence.application.scheduling.steps import (
    is_interday,
    parse_steps,
    settings_from_step_string,
)


def test_parse_minutes_hours_days():
    assert parse_steps("1m 10m 1d") == [1, 10, 1440]
    assert parse_steps("10m 1d 3d") == [10, 1440, 4320]
    assert parse_steps("1h 1.5h") == [60, 90]


def test_parse_default_unit_is_minutes():
    assert parse_steps("30 5") == [30, 5]


def test_parse_is_case_insensitive():
    assert parse_steps("2D 1M") == [2880, 1]


def test_parse_preserves_order_and_duplicates():
    assert parse_steps("10m 1m 1m") == [10, 1, 1]


def test_parse_skips_malformed_token_with_warning(caplog):
    with caplog.at_level(logging.WARNING, logger="cadence.application.scheduling.steps"):
        assert parse_steps("bogus 5m") == [5]

    assert 'Invalid step format: "bogus"' in caplog.text


def test_parse_skips_zero_length_step(caplog):
    with caplog.at_level(logging.WARNING):
        assert parse_steps("0m 5m") == [5]
    assert "Zero-length step" in caplog.text


def test_parse_rejects_unknown_units_and_negatives():
    assert parse_steps("5s -3m 1w 2m") == [2]


def test_parse_empty_input():
    assert parse_steps("") == []
    assert parse_steps("   \t ") == []
    assert parse_steps(None) == []


def test_parse_tolerates_extra_whitespace():
    assert parse_steps("  1m \n 10m  ") == [1, 10]


def test_is_interday_boundary():
    assert is_interday(1440)
    assert is_interday(4320)
    assert not is_interday(1439)
    assert not is_interday(10)


def test_settings_from_step_string():
    settings = settings_from_step_string("1m 10m", starting_ease=2.3)
    assert settings.learning_steps == (1.0, 10.0)
    assert settings.starting_ease == 2.3


def test_settings_from_invalid_step_string_keeps_default():
    settings = settings_from_step_string("bogus")
    assert settings.learning_steps == (1.0,)
