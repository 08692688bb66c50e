"""
Constants for the RallySync rally timing planner.

This module contains configuration constants used throughout the application.
"""

# Application metadata
APP_TITLE = "Rally Timing Planner"

# Rally planner timing defaults
GAP_SECONDS = 2            # stagger between consecutive arrivals
RALLY_PREP_SECONDS = 5 * 60
READINESS_SECONDS = 40     # minimum read time before any rally start

# Fixed-target variant: the target must be at least this far ahead of now
MIN_TARGET_LEAD_SECONDS = 7 * 60

# In-game rally countdown used for the verification anchors (not configurable)
VERIFICATION_RALLY_SECONDS = 5 * 60

SECONDS_PER_DAY = 24 * 60 * 60

# Reinforcement tool defaults
DEFAULT_REINFORCEMENT_OFFSET_SECONDS = 1

# Setup snapshot persistence
SETUP_STORAGE_KEY = "kingshot_setup_v1"
DEFAULT_SETUP_FILE = "rallysync_setup.json"

# Clipboard message layout
BULLET = "•"
MESSAGE_DIVIDER = "----"
VERIFICATION_HEADER = "Verification:"

ORDINAL_WORDS = [
    "first", "second", "third", "fourth", "fifth",
    "sixth", "seventh", "eighth", "ninth", "tenth",
]

# Advisory notices
NOTICE_NO_DURATIONS = "Choose at least one leader with a non-zero duration."
NOTICE_NO_TARGET = "Define a target in the Setup page first."
NOTICE_NO_MEMBERS = "Add at least one member in the Setup page."
NOTICE_REINFORCEMENT_INCOMPLETE = "Enter the opponent rally time and at least one march time."
