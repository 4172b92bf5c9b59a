# Application Scheduling Package
from .due_dates import due_from_delay, due_from_interval_days
from .formatting import format_interval, format_interval_days
from .preview import preview_intervals
from .review_log import build_review_log
from .scheduler import clamp_ease, grade_card
from .steps import is_interday, parse_steps, settings_from_step_string

__all__ = [
    "build_review_log",
    "clamp_ease",
    "due_from_delay",
    "due_from_interval_days",
    "format_interval",
    "format_interval_days",
    "grade_card",
    "is_interday",
    "parse_steps",
    "preview_intervals",
    "settings_from_step_string",
]
