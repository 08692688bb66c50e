"""
Member and setup models for the RallySync rally timing planner.

This module contains the Member dataclass (a named player with a preset march
time) and SetupData, the target label plus member list shared by the rally
planner and the reinforcement tool.
"""
import uuid
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional, Tuple

from ..utils import normalize_int, to_seconds


def new_row_id() -> str:
    """Generate a short opaque id for members and planner rows."""
    return uuid.uuid4().hex[:10]


@dataclass(frozen=True)
class Member:
    """
    A player defined on the setup page.

    Attributes:
        id: Opaque stable identifier
        name: Display name, also used to pick the member as a leader
        minutes: Raw minutes text as typed
        seconds: Raw seconds text as typed
    """
    id: str = field(default_factory=new_row_id)
    name: str = ""
    minutes: str = "0"
    seconds: str = "0"

    @property
    def march_seconds(self) -> int:
        """Stored march duration in seconds."""
        return to_seconds(self.minutes, self.seconds)

    def with_name(self, name: str) -> "Member":
        return replace(self, name=name or "")

    def with_minutes(self, minutes: str) -> "Member":
        return replace(self, minutes=minutes)

    def with_seconds(self, seconds: str) -> "Member":
        return replace(self, seconds=seconds)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "m": self.minutes,
            "s": self.seconds,
            "marchSec": self.march_seconds,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Member":
        """
        Create from dictionary for JSON deserialization.

        ``marchSec`` is ignored; the duration is always recomputed from the
        raw minutes and seconds. Older snapshots that only stored ``marchSec``
        are split back into minutes and seconds.

        Raises:
            ValueError: If data is not a dictionary
        """
        if not isinstance(data, dict):
            raise ValueError(f"Member entry must be an object, got {type(data).__name__}")

        minutes = data.get("m")
        seconds = data.get("s")
        if minutes is None and seconds is None and "marchSec" in data:
            total = normalize_int(data.get("marchSec"))
            minutes, seconds = str(total // 60), str(total % 60)

        return cls(
            id=str(data.get("id") or new_row_id()),
            name=str(data.get("name") or ""),
            minutes="0" if minutes is None else str(minutes),
            seconds="0" if seconds is None else str(seconds),
        )


@dataclass(frozen=True)
class SetupData:
    """
    Target label and member presets.

    Instances are immutable snapshots; every edit produces a new SetupData.
    """
    target_label: str = ""
    members: Tuple[Member, ...] = ()

    @property
    def is_complete(self) -> bool:
        """Whether the planner has what it needs to calculate."""
        return bool(self.target_label) and len(self.members) > 0

    def find_member(self, member_id: str) -> Optional[Member]:
        for member in self.members:
            if member.id == member_id:
                return member
        return None

    def find_member_by_name(self, name: str) -> Optional[Member]:
        """Return the first member with this exact name, if any."""
        if not name:
            return None
        for member in self.members:
            if member.name == name:
                return member
        return None

    def preset_seconds(self, name: str) -> int:
        """March time stored for the named member, or 0 if unknown."""
        member = self.find_member_by_name(name)
        return member.march_seconds if member else 0

    @property
    def leader_names(self) -> Tuple[str, ...]:
        return tuple(member.name for member in self.members)

    def to_json(self) -> dict:
        """
        Convert SetupData to the persisted snapshot shape.

        Returns:
            ``{"targetLabel": str, "members": [...]}``
        """
        return {
            "targetLabel": self.target_label,
            "members": [member.to_dict() for member in self.members],
        }

    @staticmethod
    def from_json(data: dict) -> "SetupData":
        """
        Create SetupData from a persisted snapshot.

        Raises:
            ValueError: If the snapshot structure is invalid
        """
        if not isinstance(data, dict):
            raise ValueError("Setup snapshot must be an object")
        members = data.get("members") or []
        if not isinstance(members, list):
            raise ValueError("Setup members must be a list")
        return SetupData(
            target_label=str(data.get("targetLabel") or ""),
            members=tuple(Member.from_dict(item) for item in members),
        )
