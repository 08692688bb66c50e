"""
Models package for the RallySync rally timing planner.

This package contains the core data models used throughout the application.
"""
from .member import Member, SetupData, new_row_id
from .march import MarchRow, PlannerState
from .plan import (
    ScheduleEntry, PlanRow, RallyPlan, TargetResolution,
    MODE_READINESS, MODE_FIXED_TARGET
)
from .reinforcement import ReinforcementRow, ReinforcementSend, ReinforcementResult
from .settings import ScheduleSettings

__all__ = [
    "Member", "SetupData", "new_row_id", "MarchRow", "PlannerState",
    "ScheduleEntry", "PlanRow", "RallyPlan", "TargetResolution",
    "MODE_READINESS", "MODE_FIXED_TARGET",
    "ReinforcementRow", "ReinforcementSend", "ReinforcementResult",
    "ScheduleSettings"
]
