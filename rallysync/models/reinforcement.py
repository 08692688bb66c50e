"""Dataclasses for the reinforcement timing tool."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from .member import new_row_id
from ..utils import fmt_utc_clock, to_seconds


@dataclass(frozen=True)
class ReinforcementRow:
    """One garrison player with their own march time to the defended target."""

    id: str = field(default_factory=new_row_id)
    leader: str = ""
    minutes: str = "0"
    seconds: str = "0"

    @property
    def march_seconds(self) -> int:
        return to_seconds(self.minutes, self.seconds)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ReinforcementRow":
        return cls(
            id=str(data.get("id") or new_row_id()),
            leader=str(data.get("leader") or ""),
            minutes=str(data.get("m", data.get("minutes", "0"))),
            seconds=str(data.get("s", data.get("seconds", "0"))),
        )


@dataclass(frozen=True)
class ReinforcementSend:
    """When one player must send so they land just after the enemy impact."""

    id: str
    name: str
    march_seconds: int
    send_ts: int

    @property
    def send_time(self) -> str:
        return fmt_utc_clock(self.send_ts)


@dataclass(frozen=True)
class ReinforcementResult:
    """Launch/impact estimate for an incoming rally plus per-player send times."""

    launch_ts: Optional[int] = None
    impact_ts: Optional[int] = None
    offset_seconds: int = 0
    sends: Tuple[ReinforcementSend, ...] = ()
    note: str = ""

    @property
    def has_sends(self) -> bool:
        return len(self.sends) > 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "launch_ts": self.launch_ts,
            "impact_ts": self.impact_ts,
            "launch_time": fmt_utc_clock(self.launch_ts) if self.launch_ts is not None else None,
            "impact_time": fmt_utc_clock(self.impact_ts) if self.impact_ts is not None else None,
            "offset_seconds": self.offset_seconds,
            "sends": [
                {
                    "id": send.id,
                    "name": send.name,
                    "march_seconds": send.march_seconds,
                    "send_ts": send.send_ts,
                    "send_time": send.send_time,
                }
                for send in self.sends
            ],
            "note": self.note,
        }
