"""
RallySync Rally Timing Planner

Computes rally-start and send times so that several rally leaders hit the
same target a fixed two seconds apart, each with enough time to read their
instructions, plus reinforcement timings for defending against a rally.

This package provides a Flask web API on top of pure scheduling services.
"""
from .models import Member, SetupData, MarchRow, PlanRow, RallyPlan, ScheduleSettings
from .services import (
    PersistenceService, SetupService, ScheduleBuilder, VerificationService,
    MessageService, PlannerService, ReinforcementService
)
from .ui import create_app, run_web_app
from .utils import fmt_hms, fmt_mmss, now_ts, APP_TITLE

__version__ = "1.0.0"
__author__ = "RallySync Development Team"

__all__ = [
    "Member", "SetupData", "MarchRow", "PlanRow", "RallyPlan", "ScheduleSettings",
    "PersistenceService", "SetupService", "ScheduleBuilder", "VerificationService",
    "MessageService", "PlannerService", "ReinforcementService",
    "create_app", "run_web_app", "fmt_hms", "fmt_mmss", "now_ts", "APP_TITLE"
]
