"""Centralized constants for the Cadence scheduler.

All magic numbers and configuration defaults live here so every layer
imports from a single source of truth.
"""

# ---------- Calendar ----------
MINUTES_PER_DAY = 1440
ROLLOVER_HOUR = 4  # local hour at which a new study day begins

# ---------- Ease ----------
MIN_EASE = 1.3
MAX_EASE = 3.0
EASE_PENALTY_AGAIN = 0.20
EASE_PENALTY_HARD = 0.15
EASE_BONUS_EASY = 0.15

# ---------- Scheduler Defaults ----------
DEFAULT_LEARNING_STEPS_MINUTES = [1.0]
DEFAULT_GRADUATING_INTERVAL_DAYS = 1
DEFAULT_STARTING_EASE = 2.5
DEFAULT_EASY_BONUS = 1.3
DEFAULT_HARD_INTERVAL = 1.2

# ---------- Study Queue ----------
DEFAULT_NEW_CARDS_PER_DAY = 20
DEFAULT_MAX_REVIEWS_PER_DAY = 9999
DEFAULT_QUEUE_LIMIT = 50
