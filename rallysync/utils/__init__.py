"""
Utilities package for the RallySync rally timing planner.

This package contains utility functions used throughout the application.
"""
from .time_utils import fmt_mmss, fmt_hms, fmt_utc_clock, fmt_signed_seconds, ordinal, now_ts
from .duration import normalize_int, to_seconds, hms_to_seconds
from .constants import (
    APP_TITLE, GAP_SECONDS, RALLY_PREP_SECONDS, READINESS_SECONDS,
    MIN_TARGET_LEAD_SECONDS, VERIFICATION_RALLY_SECONDS, SECONDS_PER_DAY,
    DEFAULT_REINFORCEMENT_OFFSET_SECONDS, SETUP_STORAGE_KEY, DEFAULT_SETUP_FILE
)

__all__ = [
    "fmt_mmss", "fmt_hms", "fmt_utc_clock", "fmt_signed_seconds", "ordinal", "now_ts",
    "normalize_int", "to_seconds", "hms_to_seconds",
    "APP_TITLE", "GAP_SECONDS", "RALLY_PREP_SECONDS", "READINESS_SECONDS",
    "MIN_TARGET_LEAD_SECONDS", "VERIFICATION_RALLY_SECONDS", "SECONDS_PER_DAY",
    "DEFAULT_REINFORCEMENT_OFFSET_SECONDS", "SETUP_STORAGE_KEY", "DEFAULT_SETUP_FILE"
]
