"""
Setup service for the RallySync rally timing planner.

Holds the current setup snapshot (target label plus member presets). Every
edit replaces the snapshot with a new value and persists it.
"""
from typing import Optional

from loguru import logger

from ..models import Member, SetupData
from .persistence_service import PersistenceService


class SetupError(ValueError):
    """Raised for edits that reference unknown members or fields."""
    pass


class SetupService:
    """Service managing the target label and member presets."""

    EDITABLE_FIELDS = ("name", "m", "s")

    def __init__(self, persistence_service: Optional[PersistenceService] = None):
        """
        Initialize SetupService, loading the stored snapshot once.

        Args:
            persistence_service: Optional persistence service instance
        """
        self.persistence_service = persistence_service or PersistenceService()
        self._setup = self.persistence_service.load_setup()
        logger.info(
            "Setup loaded",
            target=self._setup.target_label,
            members=len(self._setup.members),
        )

    @property
    def setup(self) -> SetupData:
        return self._setup

    def replace(self, setup: SetupData) -> SetupData:
        """Swap in a new snapshot and persist it."""
        self._setup = setup
        self.persistence_service.save_setup(setup)
        return setup

    def set_target_label(self, label: str) -> SetupData:
        return self.replace(SetupData(target_label=label or "", members=self._setup.members))

    def add_member(self, name: str = "", minutes: str = "0", seconds: str = "0") -> Member:
        """Append a member and return it."""
        member = Member(name=name or "", minutes=str(minutes), seconds=str(seconds))
        self.replace(SetupData(
            target_label=self._setup.target_label,
            members=self._setup.members + (member,),
        ))
        return member

    def update_member(self, member_id: str, field: str, value: str) -> Member:
        """
        Edit one field of a member.

        Args:
            member_id: Id of the member to edit
            field: ``"name"``, ``"m"`` (minutes) or ``"s"`` (seconds)
            value: Raw text entered by the user

        Returns:
            The updated member

        Raises:
            SetupError: If the member or field is unknown
        """
        if field not in self.EDITABLE_FIELDS:
            raise SetupError(f"Unknown member field: {field}")
        current = self._setup.find_member(member_id)
        if current is None:
            raise SetupError(f"Member not found: {member_id}")

        value = "" if value is None else str(value)
        if field == "name":
            updated = current.with_name(value)
        elif field == "m":
            updated = current.with_minutes(value)
        else:
            updated = current.with_seconds(value)

        self.replace(SetupData(
            target_label=self._setup.target_label,
            members=tuple(updated if m.id == member_id else m for m in self._setup.members),
        ))
        return updated

    def remove_member(self, member_id: str) -> None:
        """
        Remove a member.

        Raises:
            SetupError: If the member is unknown
        """
        if self._setup.find_member(member_id) is None:
            raise SetupError(f"Member not found: {member_id}")
        self.replace(SetupData(
            target_label=self._setup.target_label,
            members=tuple(m for m in self._setup.members if m.id != member_id),
        ))
