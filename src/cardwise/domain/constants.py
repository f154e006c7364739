"""Centralized constants for cardwise scheduling.

All tuning values for the review scheduler live here so every layer
imports from a single source of truth. Changing any of them changes
scheduling behavior for existing cards.
"""

from datetime import timedelta

# ---------- Easiness factor ----------
DEFAULT_EASINESS_FACTOR = 2.5
MIN_EASINESS_FACTOR = 1.3
CONFUSED_EASINESS_PENALTY = 0.3

# ---------- SM-2 easiness update ----------
# ef' = ef + (BASE - (MAX_QUALITY - q) * (LINEAR + (MAX_QUALITY - q) * QUADRATIC))
SM2_BASE_ADJUSTMENT = 0.1
SM2_LINEAR_COEFFICIENT = 0.08
SM2_QUADRATIC_COEFFICIENT = 0.02
MAX_QUALITY = 5
QUALITY_OFFSET = 2  # quality = int(Feedback) + QUALITY_OFFSET

# ---------- Intervals ----------
RELEARN_DELAY = timedelta(hours=4)
NEW_INTERVAL_DAYS = 1
LEARNING_INTERVAL_DAYS = 3
REVIEW_INTERVALS_DAYS = (0, 1, 3, 7, 14, 30, 60, 120)

# ---------- Feedback strength ----------
NOT_SURE_INTERVAL_MULTIPLIER = 0.7
NOT_SURE_MIN_INTERVAL_DAYS = 1
EASY_INTERVAL_MULTIPLIER = 1.3

# ---------- Queries ----------
DEFAULT_UPCOMING_WINDOW_DAYS = 3
