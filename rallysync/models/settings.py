"""Timing settings shared by the schedule builder and planner."""

from dataclasses import dataclass

from ..utils import (
    GAP_SECONDS, RALLY_PREP_SECONDS, READINESS_SECONDS, MIN_TARGET_LEAD_SECONDS
)


@dataclass(frozen=True)
class ScheduleSettings:
    """
    Fixed constants used by the scheduling arithmetic.

    Attributes:
        gap_seconds: Stagger between consecutive arrivals
        rally_prep_seconds: Rally countdown before a march can be sent
        readiness_seconds: Minimum time between now and any rally start
        min_target_lead_seconds: Minimum lead for a user-chosen target time
    """
    gap_seconds: int = GAP_SECONDS
    rally_prep_seconds: int = RALLY_PREP_SECONDS
    readiness_seconds: int = READINESS_SECONDS
    min_target_lead_seconds: int = MIN_TARGET_LEAD_SECONDS

    def __post_init__(self) -> None:
        for name in ("gap_seconds", "rally_prep_seconds", "readiness_seconds", "min_target_lead_seconds"):
            value = getattr(self, name)
            if not isinstance(value, int) or value < 0:
                raise ValueError(f"{name} must be a non-negative integer, got {value!r}")
