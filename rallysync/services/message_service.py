"""Instruction messages for rally leaders, ready to paste into chat."""

from typing import Optional, Sequence

from ..models import PlanRow
from ..utils.constants import BULLET, MESSAGE_DIVIDER, VERIFICATION_HEADER
from .verification_service import VerificationService


class MessageService:
    """Renders per-leader instructions and the combined clipboard block."""

    def __init__(self, verification_service: Optional[VerificationService] = None):
        self.verification_service = verification_service or VerificationService()

    @staticmethod
    def message_for(row: PlanRow) -> str:
        """
        Instruction line for one leader.

        Example:
            ``Jins for Sanctuary start rally at 19:01:38 UTC``
        """
        target_text = f" for {row.target}" if row.target else ""
        return f"{row.name}{target_text} start rally at {row.rally_start_time} UTC"

    def build_messages(self, rows: Sequence[PlanRow]) -> str:
        """Bulleted instructions followed by the verification check-list."""
        messages = "\n".join(f"{BULLET} {self.message_for(row)}" for row in rows)
        summary = self.verification_service.render(rows)
        return f"{messages}\n{MESSAGE_DIVIDER}\n{VERIFICATION_HEADER}\n{summary}"
