"""
Planner row models for the RallySync rally timing planner.

A MarchRow is one line of the rally planner: the chosen leader plus an
optional custom march time that overrides the leader's preset.
"""
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional, Tuple

from .member import SetupData, new_row_id
from .plan import RallyPlan
from ..utils import to_seconds


@dataclass(frozen=True)
class MarchRow:
    """
    A single planner row. Position in the planner list is the arrival order.

    Attributes:
        id: Opaque stable identifier
        leader: Name of the setup member leading this rally (may be empty)
        custom_minutes: Raw custom minutes override, if any
        custom_seconds: Raw custom seconds override, if any
        editing: Whether the custom duration editor is open
    """
    id: str = field(default_factory=new_row_id)
    leader: str = ""
    custom_minutes: Optional[str] = None
    custom_seconds: Optional[str] = None
    editing: bool = False

    @property
    def custom_total_seconds(self) -> int:
        return to_seconds(self.custom_minutes, self.custom_seconds)

    def preset_seconds(self, setup: SetupData) -> int:
        return setup.preset_seconds(self.leader)

    def effective_seconds(self, setup: SetupData) -> int:
        """Custom override when positive, otherwise the leader's preset."""
        custom = self.custom_total_seconds
        if custom > 0:
            return custom
        return self.preset_seconds(setup)

    def is_using_custom(self, setup: SetupData) -> bool:
        return self.custom_total_seconds > 0 and self.effective_seconds(setup) != self.preset_seconds(setup)

    def with_leader(self, leader: str) -> "MarchRow":
        return replace(self, leader=leader or "")

    def with_custom(self, minutes: Optional[str] = None, seconds: Optional[str] = None) -> "MarchRow":
        return replace(
            self,
            custom_minutes=self.custom_minutes if minutes is None else minutes,
            custom_seconds=self.custom_seconds if seconds is None else seconds,
        )

    def without_custom(self) -> "MarchRow":
        return replace(self, custom_minutes=None, custom_seconds=None)

    def to_dict(self, setup: Optional[SetupData] = None) -> Dict[str, Any]:
        data = {
            "id": self.id,
            "leader": self.leader,
            "custom_minutes": self.custom_minutes,
            "custom_seconds": self.custom_seconds,
            "editing": self.editing,
        }
        if setup is not None:
            data["effective_seconds"] = self.effective_seconds(setup)
            data["preset_seconds"] = self.preset_seconds(setup)
            data["using_custom"] = self.is_using_custom(setup)
        return data


@dataclass(frozen=True)
class PlannerState:
    """
    Immutable snapshot of the rally planner page.

    Attributes:
        marches: Planner rows in arrival order (never empty)
        plan: Result of the last calculation, or None when cleared
        note: Advisory or informational text shown with the plan
    """
    marches: Tuple[MarchRow, ...] = field(default_factory=lambda: (MarchRow(),))
    plan: Optional[RallyPlan] = None
    note: str = ""

    def index_of(self, row_id: str) -> int:
        """Position of a row, or -1 if unknown."""
        for index, row in enumerate(self.marches):
            if row.id == row_id:
                return index
        return -1
