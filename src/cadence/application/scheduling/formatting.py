"""Short human-readable labels for intervals, shown on answer buttons."""

from cadence.domain.constants import MINUTES_PER_DAY

from .due_dates import round_half_up


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"


def _format_days(days: float) -> str:
    if days < 30:
        return _plural(round_half_up(days), "day")
    if days < 365:
        return _plural(round_half_up(days / 30), "month")
    return _plural(round_half_up(days / 365), "year")


def format_interval(minutes: float) -> str:
    """
    Format a delay given in minutes.

    <1m, Nm, Nh below a day; days, months, years above it.
    """
    if minutes < 1:
        return "<1m"
    if minutes < 60:
        return f"{round_half_up(minutes)}m"
    if minutes < MINUTES_PER_DAY:
        return f"{round_half_up(minutes / 60)}h"
    return _format_days(minutes / MINUTES_PER_DAY)


def format_interval_days(days: float) -> str:
    """Format a review interval given in days."""
    if days < 1:
        return "<1 day"
    return _format_days(days)
