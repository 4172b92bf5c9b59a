"""Tests for interval labels."""

import pytest

from cadence.application.scheduling.formatting import format_interval, format_interval_days


@pytest.mark.parametrize(
    "minutes, expected",
    [
        (0, "<1m"),
        (0.5, "<1m"),
        (1, "1m"),
        (10, "10m"),
        (60, "1h"),
        (90, "2h"),
        (1440, "1 day"),
        (2880, "2 days"),
        (1440 * 45, "2 months"),
        (1440 * 400, "1 year"),
    ],
)
def test_format_interval(minutes, expected):
    assert format_interval(minutes) == expected


@pytest.mark.parametrize(
    "days, expected",
    [
        (0.5, "<1 day"),
        (1, "1 day"),
        (3, "3 days"),
        (29, "29 days"),
        (30, "1 month"),
        (34, "1 month"),
        (60, "2 months"),
        (364, "12 months"),
        (365, "1 year"),
        (730, "2 years"),
    ],
)
def test_format_interval_days(days, expected):
    assert format_interval_days(days) == expected
