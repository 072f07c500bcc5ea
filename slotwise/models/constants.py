"""Constants for slotwise.

This module centralizes all magic numbers and default values used throughout the engine.
"""


# Task defaults
DEFAULT_TASK_DURATION_MINUTES = 60

# Slot generation
SLOT_GRANULARITY_MINUTES = 30
CONFLICT_HORIZON_DAYS = 7
DEADLINE_HORIZON_DAYS = 3
ENERGY_HORIZON_DAYS = 7
CALENDAR_LOOKAHEAD_DAYS = 30

# Heuristic thresholds
DEADLINE_PROXIMITY_HOURS = 24
OVERLOAD_THRESHOLD_MINUTES = 360  # 6 hours scheduled on one day

# Heuristic confidences
CONFLICT_CONFIDENCE = 1.0
DEADLINE_PROXIMITY_CONFIDENCE = 0.9
BREAK_VIOLATION_CONFIDENCE = 0.85
OVERLOAD_CONFIDENCE = 0.8
ENERGY_MISMATCH_CONFIDENCE = 0.7

# Suggestion queue
MIN_SUGGESTION_CONFIDENCE = 0.6
MAX_PENDING_SUGGESTIONS = 5
SUGGESTION_TTL_HOURS = 24
MAX_LISTED_SUGGESTIONS = 20

# Auto-schedule settings defaults (Monday=1 .. Sunday=7)
DEFAULT_WORK_DAYS = [1, 2, 3, 4, 5]
DEFAULT_WORK_HOUR_START = 9
DEFAULT_WORK_HOUR_END = 17
DEFAULT_BUFFER_MINUTES = 15
DEFAULT_MIN_BREAK_MINUTES = 15
DEFAULT_MAX_CONSECUTIVE_HOURS = 3
DEFAULT_HIGH_ENERGY_WINDOW = (9, 12)
DEFAULT_MEDIUM_ENERGY_WINDOW = (13, 16)
DEFAULT_LOW_ENERGY_WINDOW = (16, 18)
