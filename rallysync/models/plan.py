"""Dataclasses representing rally plans produced by the schedule builder."""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from ..utils import fmt_hms, fmt_utc_clock, fmt_signed_seconds

MODE_READINESS = "readiness"
MODE_FIXED_TARGET = "fixed_target"


@dataclass(frozen=True)
class ScheduleEntry:
    """One participant handed to the schedule builder, in arrival order."""

    id: str
    name: str
    duration_seconds: int


@dataclass(frozen=True)
class PlanRow:
    """Timing for a single rally leader. All timestamps are epoch seconds."""

    id: str
    seq: int
    name: str
    target: str
    duration_seconds: int
    arrival_ts: int
    send_ts: int
    rally_start_ts: int
    offset_seconds: int
    start_delta_seconds: int

    @property
    def duration_hms(self) -> str:
        return fmt_hms(self.duration_seconds)

    @property
    def arrival_time(self) -> str:
        return fmt_utc_clock(self.arrival_ts)

    @property
    def send_time(self) -> str:
        return fmt_utc_clock(self.send_ts)

    @property
    def rally_start_time(self) -> str:
        return fmt_utc_clock(self.rally_start_ts)

    @property
    def start_delta_label(self) -> str:
        return fmt_signed_seconds(self.start_delta_seconds)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "seq": self.seq,
            "name": self.name,
            "target": self.target,
            "duration_seconds": self.duration_seconds,
            "duration_hms": self.duration_hms,
            "offset_seconds": self.offset_seconds,
            "start_delta_seconds": self.start_delta_seconds,
            "start_delta": self.start_delta_label,
            "arrival_ts": self.arrival_ts,
            "send_ts": self.send_ts,
            "rally_start_ts": self.rally_start_ts,
            "arrival_time": self.arrival_time,
            "send_time": self.send_time,
            "rally_start_time": self.rally_start_time,
        }


@dataclass(frozen=True)
class RallyPlan:
    """
    Result of one calculation request.

    A plan without rows is an advisory result: ``note`` explains why nothing
    was scheduled, and ``earliest_target_ts`` is set when a fixed target time
    was rejected as too soon.
    """

    rows: Tuple[PlanRow, ...] = ()
    note: str = ""
    mode: str = MODE_READINESS
    reference_ts: Optional[int] = None
    earliest_target_ts: Optional[int] = None

    @property
    def has_plan(self) -> bool:
        return len(self.rows) > 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rows": [row.to_dict() for row in self.rows],
            "note": self.note,
            "mode": self.mode,
            "reference_ts": self.reference_ts,
            "earliest_target_ts": self.earliest_target_ts,
            "earliest_target_time": (
                fmt_utc_clock(self.earliest_target_ts) if self.earliest_target_ts is not None else None
            ),
        }


@dataclass(frozen=True)
class TargetResolution:
    """Outcome of resolving a user-entered target arrival clock time."""

    accepted: bool
    arrival_ts: int
    earliest_ts: int
