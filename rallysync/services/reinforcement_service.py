"""
Reinforcement timing for defending against an incoming rally.

Given the time left on an opponent's rally and their march time, the service
estimates launch and impact, then tells each garrison player when to send so
their reinforcement lands a few seconds after the hit.
"""
from dataclasses import replace
from typing import Optional, Sequence

from loguru import logger

from ..models import ReinforcementRow, ReinforcementSend, ReinforcementResult, SetupData
from ..utils import normalize_int, to_seconds, now_ts, DEFAULT_REINFORCEMENT_OFFSET_SECONDS
from ..utils.constants import NOTICE_REINFORCEMENT_INCOMPLETE


class ReinforcementService:
    """Service computing reinforcement send times. Always lands after impact."""

    @staticmethod
    def select_leader(row: ReinforcementRow, leader: str, setup: SetupData) -> ReinforcementRow:
        """
        Pick a member for a row, auto-filling their stored march time.

        An unknown name only changes the label and keeps the typed time.
        """
        member = setup.find_member_by_name(leader)
        if member is None:
            return replace(row, leader=leader or "")
        total = member.march_seconds
        return replace(row, leader=leader, minutes=str(total // 60), seconds=str(total % 60))

    @staticmethod
    def can_calculate(
        rally_minutes: str,
        rally_seconds: str,
        rows: Sequence[ReinforcementRow],
    ) -> bool:
        return to_seconds(rally_minutes, rally_seconds) > 0 and any(row.march_seconds > 0 for row in rows)

    def calculate(
        self,
        rally_minutes: str,
        rally_seconds: str,
        opponent_march_minutes: str,
        opponent_march_seconds: str,
        rows: Sequence[ReinforcementRow],
        offset_seconds=DEFAULT_REINFORCEMENT_OFFSET_SECONDS,
        reference_ts: Optional[int] = None,
    ) -> ReinforcementResult:
        """
        Compute send times so every row arrives ``offset_seconds`` after impact.

        Args:
            rally_minutes: Opponent rally time remaining, minutes text
            rally_seconds: Opponent rally time remaining, seconds text
            opponent_march_minutes: Opponent march time to us, minutes text
            opponent_march_seconds: Opponent march time to us, seconds text
            rows: Our players with their march times
            offset_seconds: How long after impact to land
            reference_ts: Override for "now" in epoch seconds

        Returns:
            ReinforcementResult; without sends and with a note when the
            opponent rally time or every march time is missing
        """
        offset = normalize_int(offset_seconds)
        if not self.can_calculate(rally_minutes, rally_seconds, rows):
            return ReinforcementResult(offset_seconds=offset, note=NOTICE_REINFORCEMENT_INCOMPLETE)

        now = now_ts() if reference_ts is None else int(reference_ts)
        launch = now + to_seconds(rally_minutes, rally_seconds)
        impact = launch + to_seconds(opponent_march_minutes, opponent_march_seconds)

        sends = tuple(
            ReinforcementSend(
                id=row.id,
                name=row.leader or "Player",
                march_seconds=row.march_seconds,
                send_ts=impact + offset - row.march_seconds,
            )
            for row in rows
            if row.march_seconds > 0
        )
        logger.info("Reinforcement timing computed", impact_ts=impact, sends=len(sends))
        return ReinforcementResult(launch_ts=launch, impact_ts=impact, offset_seconds=offset, sends=sends)
