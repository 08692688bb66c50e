"""
Command pattern implementation for rally planner actions.

Every planner action (add/remove/reorder/edit/calculate/reset) is a command
that replaces the planner's immutable state snapshot. Commands remember the
snapshot they replaced, so undo simply puts it back.
"""
from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Protocol

from loguru import logger

from ..models import PlannerState


class Command(ABC):
    """A reversible planner action."""

    @abstractmethod
    def execute(self) -> bool:
        """Apply the action; False means nothing changed."""

    @abstractmethod
    def undo(self) -> bool:
        """Revert the action; False means there was nothing to revert."""

    @property
    @abstractmethod
    def description(self) -> str:
        """Label shown in the command history."""


class StateHolder(Protocol):
    """Anything owning a current PlannerState that commands can replace."""

    state: PlannerState


class StateTransitionCommand(Command):
    """Command applying a pure ``PlannerState -> PlannerState`` transition."""

    def __init__(
        self,
        holder: StateHolder,
        transition: Callable[[PlannerState], PlannerState],
        description: str,
    ):
        self.holder = holder
        self.transition = transition
        self._description = description
        self._previous_state: Optional[PlannerState] = None
        self._result_state: Optional[PlannerState] = None
        self._applied = False

    def execute(self) -> bool:
        """
        Apply the transition to the holder's current state.

        Re-executing after an undo (redo) restores the exact snapshot the
        first execution produced, so generated row ids stay stable.

        Raises:
            PlannerError: Propagated from the transition for unknown rows
        """
        previous = self.holder.state
        if self._result_state is not None and previous is self._previous_state:
            new_state = self._result_state
        else:
            new_state = self.transition(previous)
        if new_state is previous:
            return False
        self._previous_state = previous
        self._result_state = new_state
        self.holder.state = new_state
        self._applied = True
        return True

    def undo(self) -> bool:
        """Restore the snapshot replaced by the last execute."""
        if not self._applied or self._previous_state is None:
            return False
        self.holder.state = self._previous_state
        self._applied = False
        return True

    @property
    def description(self) -> str:
        return self._description


class CommandManager:
    """Linear undo/redo history of planner commands, capped at ``max_history``."""

    def __init__(self, max_history: int = 50):
        self.max_history = max_history
        self._history: List[Command] = []
        self._cursor = -1

    def execute_command(self, command: Command) -> bool:
        """Run ``command`` and record it; no-op commands are not recorded."""
        if not command.execute():
            return False

        # a new action discards the redo tail
        del self._history[self._cursor + 1:]
        self._history.append(command)
        if len(self._history) > self.max_history:
            del self._history[0]
        self._cursor = len(self._history) - 1

        logger.debug("Planner command executed", command=command.description)
        return True

    def undo(self) -> bool:
        if not self.can_undo():
            return False
        if not self._history[self._cursor].undo():
            return False
        self._cursor -= 1
        logger.debug("Planner command undone", command=self._history[self._cursor + 1].description)
        return True

    def redo(self) -> bool:
        if not self.can_redo():
            return False
        if not self._history[self._cursor + 1].execute():
            return False
        self._cursor += 1
        return True

    def can_undo(self) -> bool:
        return self._cursor >= 0

    def can_redo(self) -> bool:
        return self._cursor < len(self._history) - 1

    def get_command_history(self) -> List[str]:
        """Descriptions of every recorded command, oldest first."""
        return [cmd.description for cmd in self._history]

    def clear_history(self) -> None:
        self._history.clear()
        self._cursor = -1
