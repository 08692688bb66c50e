"""
Rally planner service for the RallySync rally timing planner.

The planner page is modelled as an immutable PlannerState. The module-level
functions are pure transitions (old state in, new state out); PlannerService
runs them as commands so every user action can be undone.
"""
from dataclasses import replace
from typing import List, Optional

from loguru import logger

from ..models import MarchRow, PlannerState, ScheduleEntry, SetupData
from ..utils import now_ts
from ..utils.constants import NOTICE_NO_TARGET, NOTICE_NO_MEMBERS
from .message_service import MessageService
from .planner_commands import CommandManager, StateTransitionCommand
from .schedule_service import ScheduleBuilder
from .setup_service import SetupService


class PlannerError(ValueError):
    """Raised when a planner action references an unknown row."""
    pass


# ----------------------------------------------------------------------
# Pure state transitions
# ----------------------------------------------------------------------
def _require_index(state: PlannerState, row_id: str) -> int:
    index = state.index_of(row_id)
    if index < 0:
        raise PlannerError(f"March row not found: {row_id}")
    return index


def _replace_row(state: PlannerState, index: int, row: MarchRow) -> PlannerState:
    marches = list(state.marches)
    marches[index] = row
    return replace(state, marches=tuple(marches))


def add_march(state: PlannerState, leader: str = "") -> PlannerState:
    return replace(state, marches=state.marches + (MarchRow(leader=leader or ""),))


def remove_march(state: PlannerState, row_id: str) -> PlannerState:
    """Remove a row; the last remaining row is kept."""
    _require_index(state, row_id)
    if len(state.marches) <= 1:
        return state
    return replace(state, marches=tuple(row for row in state.marches if row.id != row_id))


def update_leader(state: PlannerState, row_id: str, leader: str) -> PlannerState:
    index = _require_index(state, row_id)
    return _replace_row(state, index, state.marches[index].with_leader(leader))


def _swap(state: PlannerState, first: int, second: int) -> PlannerState:
    marches = list(state.marches)
    marches[first], marches[second] = marches[second], marches[first]
    return replace(state, marches=tuple(marches))


def move_up(state: PlannerState, index: int) -> PlannerState:
    """Swap the row at ``index`` with the one above it."""
    if index <= 0 or index >= len(state.marches):
        return state
    return _swap(state, index - 1, index)


def move_down(state: PlannerState, index: int) -> PlannerState:
    """Swap the row at ``index`` with the one below it."""
    if index < 0 or index >= len(state.marches) - 1:
        return state
    return _swap(state, index, index + 1)


def toggle_edit(state: PlannerState, row_id: str, on: Optional[bool] = None) -> PlannerState:
    index = _require_index(state, row_id)
    row = state.marches[index]
    editing = (not row.editing) if on is None else bool(on)
    if editing == row.editing:
        return state
    return _replace_row(state, index, replace(row, editing=editing))


def set_custom(
    state: PlannerState,
    row_id: str,
    minutes: Optional[str] = None,
    seconds: Optional[str] = None,
) -> PlannerState:
    """Set the custom minutes and/or seconds override of a row."""
    index = _require_index(state, row_id)
    return _replace_row(state, index, state.marches[index].with_custom(minutes, seconds))


def clear_custom(state: PlannerState, row_id: str) -> PlannerState:
    index = _require_index(state, row_id)
    return _replace_row(state, index, state.marches[index].without_custom())


def reset(state: PlannerState) -> PlannerState:
    """Back to a single empty row with no plan and no note."""
    return PlannerState()


def schedule_entries(state: PlannerState, setup: SetupData) -> List[ScheduleEntry]:
    """Resolve planner rows to schedule builder input, in arrival order."""
    return [
        ScheduleEntry(id=row.id, name=row.leader, duration_seconds=row.effective_seconds(setup))
        for row in state.marches
    ]


def calculate(
    state: PlannerState,
    setup: SetupData,
    builder: ScheduleBuilder,
    reference_ts: int,
    target_clock: Optional[str] = None,
) -> PlannerState:
    """
    Recompute the whole plan from the current rows and setup.

    Incomplete setup clears the plan and leaves an advisory note. Otherwise
    the builder's result replaces the previous plan; a result without rows
    (no durations, target too soon) also clears the displayed plan.
    """
    if not setup.target_label:
        return replace(state, plan=None, note=NOTICE_NO_TARGET)
    if not setup.members:
        return replace(state, plan=None, note=NOTICE_NO_MEMBERS)

    entries = schedule_entries(state, setup)
    if target_clock:
        plan = builder.build_fixed_target_plan(entries, target_clock, reference_ts, setup.target_label)
    else:
        plan = builder.build_plan(entries, reference_ts, setup.target_label)
    return replace(state, plan=plan, note=plan.note)


# ----------------------------------------------------------------------
# Service
# ----------------------------------------------------------------------
class PlannerService:
    """
    Service running planner transitions as undoable commands.

    Attributes:
        state: Current PlannerState snapshot (replaced, never mutated)
    """

    def __init__(
        self,
        setup_service: SetupService,
        schedule_builder: Optional[ScheduleBuilder] = None,
        message_service: Optional[MessageService] = None,
        command_manager: Optional[CommandManager] = None,
    ):
        self.setup_service = setup_service
        self.schedule_builder = schedule_builder or ScheduleBuilder()
        self.message_service = message_service or MessageService()
        self.command_manager = command_manager or CommandManager()
        self.state = PlannerState()

    def _run(self, transition, description: str) -> bool:
        command = StateTransitionCommand(self, transition, description)
        return self.command_manager.execute_command(command)

    def add_march(self, leader: str = "") -> MarchRow:
        """Append a row and return it."""
        self._run(lambda s: add_march(s, leader), "Add March")
        return self.state.marches[-1]

    def remove_march(self, row_id: str) -> bool:
        """
        Remove a row. Returns False when it was the only row.

        Raises:
            PlannerError: If the row is unknown
        """
        _require_index(self.state, row_id)
        return self._run(lambda s: remove_march(s, row_id), "Remove March")

    def update_leader(self, row_id: str, leader: str) -> bool:
        _require_index(self.state, row_id)
        return self._run(lambda s: update_leader(s, row_id, leader), f"Set Leader {leader}")

    def move(self, row_id: str, direction: str) -> bool:
        """
        Move a row one place ``"up"`` or ``"down"`` in arrival order.

        Raises:
            PlannerError: If the row or direction is unknown
        """
        _require_index(self.state, row_id)
        if direction == "up":
            return self._run(lambda s: move_up(s, s.index_of(row_id)), "Move Up")
        if direction == "down":
            return self._run(lambda s: move_down(s, s.index_of(row_id)), "Move Down")
        raise PlannerError(f"Unknown direction: {direction}")

    def toggle_edit(self, row_id: str, on: Optional[bool] = None) -> bool:
        _require_index(self.state, row_id)
        return self._run(lambda s: toggle_edit(s, row_id, on), "Edit Duration")

    def set_custom(self, row_id: str, minutes: Optional[str] = None, seconds: Optional[str] = None) -> bool:
        _require_index(self.state, row_id)
        return self._run(lambda s: set_custom(s, row_id, minutes, seconds), "Set Custom Duration")

    def clear_custom(self, row_id: str) -> bool:
        _require_index(self.state, row_id)
        return self._run(lambda s: clear_custom(s, row_id), "Reset To Preset")

    def reset(self) -> bool:
        return self._run(reset, "Reset Planner")

    def calculate(self, reference_ts: Optional[int] = None, target_clock: Optional[str] = None) -> PlannerState:
        """
        Calculate the plan from one read of the wall clock.

        Args:
            reference_ts: Override for "now" in epoch seconds
            target_clock: Optional ``HH:MM[:SS]`` UTC target arrival time

        Returns:
            The new planner state
        """
        now = now_ts() if reference_ts is None else int(reference_ts)
        setup = self.setup_service.setup
        self._run(
            lambda s: calculate(s, setup, self.schedule_builder, now, target_clock),
            "Calculate",
        )
        if self.state.plan is None or not self.state.plan.has_plan:
            logger.info("Plan not computed", note=self.state.note)
        return self.state

    def undo(self) -> bool:
        return self.command_manager.undo()

    def redo(self) -> bool:
        return self.command_manager.redo()

    def clipboard_text(self) -> str:
        """Messages plus verification for the current plan, or ``""``."""
        plan = self.state.plan
        if plan is None or not plan.has_plan:
            return ""
        return self.message_service.build_messages(plan.rows)
