"""
Learning step parsing.

Turns a step specification such as "1m 10m 1d" into minute durations.
"""

import logging
import re

from cadence.domain.constants import MINUTES_PER_DAY
from cadence.domain.scheduling.models import SchedulerSettings

logger = logging.getLogger(__name__)

_STEP_PATTERN = re.compile(r"^(\d+(?:\.\d+)?)(m|h|d)?$")
_UNIT_MINUTES = {"m": 1, "h": 60, "d": MINUTES_PER_DAY}


def parse_steps(steps_str: str | None) -> list[float]:
    """
    Parse a whitespace-separated step specification into minutes.

    Examples:
        "1m 10m"     -> [1, 10]
        "1m 10m 1d"  -> [1, 10, 1440]
        "10m 1d 3d"  -> [10, 1440, 4320]
        "bogus 5m"   -> [5]

    Tokens without a unit are minutes. Malformed or zero-length tokens are
    logged and skipped. Order is preserved; nothing is sorted or deduplicated.
    """
    if not steps_str or not steps_str.strip():
        return []

    minutes: list[float] = []
    for token in steps_str.split():
        step = token.lower()
        match = _STEP_PATTERN.match(step)
        if not match:
            logger.warning(f'Invalid step format: "{token}", skipping')
            continue

        value = float(match.group(1)) * _UNIT_MINUTES[match.group(2) or "m"]
        if value <= 0:
            logger.warning(f'Zero-length step: "{token}", skipping')
            continue
        minutes.append(value)

    return minutes


def is_interday(step_minutes: float) -> bool:
    """Steps of a day or more are scheduled on the calendar, not the clock."""
    return step_minutes >= MINUTES_PER_DAY


def settings_from_step_string(steps_str: str | None, **overrides) -> SchedulerSettings:
    """
    Build SchedulerSettings from a step specification.

    An empty result keeps the settings default; the scheduler falls back to
    its default step in any case.
    """
    steps = parse_steps(steps_str)
    if steps:
        overrides["learning_steps"] = tuple(steps)
    return SchedulerSettings(**overrides)
