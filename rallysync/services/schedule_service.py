"""
Schedule builder for the RallySync rally timing planner.

Turns an ordered list of rally leaders and their march times into absolute
arrival, send and rally-start times. Two modes are supported:

* readiness mode: the schedule is anchored as early as possible while every
  rally start stays at least ``readiness_seconds`` after the reference time;
* fixed-target mode: the first arrival is pinned to a user-chosen UTC clock
  time that must be at least ``min_target_lead_seconds`` away.

In both modes consecutive arrivals are exactly ``gap_seconds`` apart.
"""
from typing import List, Optional, Sequence

from loguru import logger

from ..models import (
    ScheduleEntry, PlanRow, RallyPlan, TargetResolution, ScheduleSettings,
    MODE_READINESS, MODE_FIXED_TARGET
)
from ..utils import fmt_utc_clock, hms_to_seconds, SECONDS_PER_DAY
from ..utils.constants import NOTICE_NO_DURATIONS


def start_delta(index: int, duration: int, first_duration: int, gap: int) -> int:
    """
    Rally-start offset of the leader at ``index`` relative to the first leader.

    Positive means this leader starts later than the first one.
    """
    return index * gap - (duration - first_duration)


class ScheduleBuilder:
    """Service computing rally plans from leaders in arrival order."""

    def __init__(self, settings: Optional[ScheduleSettings] = None):
        self.settings = settings or ScheduleSettings()

    # ------------------------------------------------------------------
    # Readiness mode
    # ------------------------------------------------------------------
    def max_skew(self, durations: Sequence[int]) -> int:
        """Largest ``d_i - i*G`` over the list, never below zero."""
        gap = self.settings.gap_seconds
        skew = 0
        for index, duration in enumerate(durations):
            skew = max(skew, duration - index * gap)
        return skew

    def build_plan(
        self,
        entries: Sequence[ScheduleEntry],
        reference_ts: int,
        target_label: str = "",
    ) -> RallyPlan:
        """
        Build a plan anchored so every rally start is at least
        ``readiness_seconds`` after ``reference_ts``.

        Args:
            entries: Leaders in arrival order
            reference_ts: Epoch seconds of "now"
            target_label: Target name copied onto every row

        Returns:
            RallyPlan with rows, or without rows and an advisory note
        """
        active = self._active_entries(entries)
        if not active:
            return RallyPlan(note=NOTICE_NO_DURATIONS, mode=MODE_READINESS, reference_ts=reference_ts)

        s = self.settings
        skew = self.max_skew([entry.duration_seconds for entry in active])
        first_arrival = reference_ts + s.readiness_seconds + s.rally_prep_seconds + skew
        rows = self._rows_from_first_arrival(active, first_arrival, target_label)

        logger.debug(
            "Readiness anchor computed",
            reference_ts=reference_ts,
            max_skew=skew,
            first_arrival_ts=first_arrival,
        )
        logger.info("Rally plan computed", mode=MODE_READINESS, rows=len(rows))

        note = (
            f"Arrivals are evenly spaced by {s.gap_seconds}s. "
            f"All rally starts are ≥{s.readiness_seconds}s from now."
        )
        if target_label:
            note += f" Target: {target_label}."
        return RallyPlan(rows=tuple(rows), note=note, mode=MODE_READINESS, reference_ts=reference_ts)

    # ------------------------------------------------------------------
    # Fixed-target mode
    # ------------------------------------------------------------------
    def resolve_target_arrival(self, target_clock: str, now_ts: int) -> TargetResolution:
        """
        Resolve an ``HH:MM[:SS]`` UTC clock time to its next occurrence.

        A time earlier than now today rolls over to tomorrow. The result is
        rejected when it is less than ``min_target_lead_seconds`` ahead.
        """
        seconds_of_day = hms_to_seconds(target_clock) % SECONDS_PER_DAY
        day_start = now_ts - now_ts % SECONDS_PER_DAY
        arrival = day_start + seconds_of_day
        if arrival < now_ts:
            arrival += SECONDS_PER_DAY

        earliest = now_ts + self.settings.min_target_lead_seconds
        return TargetResolution(accepted=arrival >= earliest, arrival_ts=arrival, earliest_ts=earliest)

    def build_fixed_target_plan(
        self,
        entries: Sequence[ScheduleEntry],
        target_clock: str,
        now_ts: int,
        target_label: str = "",
    ) -> RallyPlan:
        """
        Build a plan whose first arrival lands exactly at ``target_clock``.

        No readiness shift is applied, so leaders with long marches may get
        less than the nominal read time before their rally start.
        """
        active = self._active_entries(entries)
        if not active:
            return RallyPlan(note=NOTICE_NO_DURATIONS, mode=MODE_FIXED_TARGET, reference_ts=now_ts)

        resolution = self.resolve_target_arrival(target_clock, now_ts)
        if not resolution.accepted:
            logger.info(
                "Target arrival rejected",
                target_clock=target_clock,
                earliest_ts=resolution.earliest_ts,
            )
            return RallyPlan(
                note=(
                    "Target arrival time is too soon. "
                    f"Earliest allowed is {fmt_utc_clock(resolution.earliest_ts)} UTC."
                ),
                mode=MODE_FIXED_TARGET,
                reference_ts=now_ts,
                earliest_target_ts=resolution.earliest_ts,
            )

        s = self.settings
        rows = self._rows_from_first_arrival(active, resolution.arrival_ts, target_label)
        floor = now_ts + s.readiness_seconds
        short = sum(1 for row in rows if row.rally_start_ts < floor)

        logger.info("Rally plan computed", mode=MODE_FIXED_TARGET, rows=len(rows), short_buffer=short)

        note = (
            f"First arrival at {fmt_utc_clock(resolution.arrival_ts)} UTC, "
            f"arrivals spaced by {s.gap_seconds}s."
        )
        if short:
            note += f" {short} leader(s) get less than {s.readiness_seconds}s before their rally start."
        if target_label:
            note += f" Target: {target_label}."
        return RallyPlan(rows=tuple(rows), note=note, mode=MODE_FIXED_TARGET, reference_ts=now_ts)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _active_entries(entries: Sequence[ScheduleEntry]) -> List[ScheduleEntry]:
        return [entry for entry in entries if entry.duration_seconds > 0]

    def _rows_from_first_arrival(
        self,
        active: Sequence[ScheduleEntry],
        first_arrival: int,
        target_label: str,
    ) -> List[PlanRow]:
        s = self.settings
        first_duration = active[0].duration_seconds
        rows = []
        for index, entry in enumerate(active):
            arrival = first_arrival + index * s.gap_seconds
            send = arrival - entry.duration_seconds
            rows.append(PlanRow(
                id=entry.id,
                seq=index + 1,
                name=entry.name or f"Leader {index + 1}",
                target=target_label,
                duration_seconds=entry.duration_seconds,
                arrival_ts=arrival,
                send_ts=send,
                rally_start_ts=send - s.rally_prep_seconds,
                offset_seconds=index * s.gap_seconds,
                start_delta_seconds=start_delta(index, entry.duration_seconds, first_duration, s.gap_seconds),
            ))
        return rows
