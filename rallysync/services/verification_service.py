"""
Verification summary for computed rally plans.

Squad leaders cross-check a plan against the in-game rally countdowns: each
rally should appear a known number of seconds after the previous one, which is
easiest to spot by watching the previous leader's countdown reach an anchor
value. This service ranks rows by rally start ("appearance") and by arrival
("impact") and renders that check-list.
"""
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from ..models import PlanRow
from ..utils import fmt_mmss, ordinal, VERIFICATION_RALLY_SECONDS


@dataclass(frozen=True)
class VerificationLine:
    """One entry of the appearance-ordered check-list."""

    name: str
    appearance_rank: int
    impact_rank: int
    previous_name: Optional[str] = None
    delta_seconds: int = 0
    anchor: Optional[str] = None

    def render(self) -> str:
        appear = ordinal(self.appearance_rank)
        if self.previous_name is None:
            return f"- {self.name} appear {appear}."

        magnitude = abs(self.delta_seconds)
        unit = "second" if magnitude == 1 else "seconds"
        direction = "more" if self.delta_seconds >= 0 else "less"
        return (
            f"- {self.name} appear {appear}, rally shows {magnitude} {unit} {direction} "
            f"than {self.previous_name} (should appear when {self.previous_name}'s rally at {self.anchor})"
        )


class VerificationService:
    """Builds the appearance/impact check-list for a plan."""

    @staticmethod
    def appearance_order(rows: Sequence[PlanRow]) -> List[PlanRow]:
        return sorted(rows, key=lambda row: row.rally_start_ts)

    @staticmethod
    def impact_order(rows: Sequence[PlanRow]) -> List[PlanRow]:
        return sorted(rows, key=lambda row: row.arrival_ts)

    @staticmethod
    def anchor_for(delta_seconds: int) -> str:
        """Countdown value of the previous rally at which the next should appear."""
        return fmt_mmss(VERIFICATION_RALLY_SECONDS - abs(delta_seconds))

    def build_lines(self, rows: Sequence[PlanRow]) -> List[VerificationLine]:
        """
        Build one line per row in appearance order.

        The impact rank is reported alongside but the two orders are not
        reconciled: with uneven march times they can legitimately differ.
        """
        impact_rank: Dict[str, int] = {
            row.id: rank for rank, row in enumerate(self.impact_order(rows), start=1)
        }

        lines = []
        previous: Optional[PlanRow] = None
        for rank, row in enumerate(self.appearance_order(rows), start=1):
            if previous is None:
                lines.append(VerificationLine(
                    name=row.name,
                    appearance_rank=rank,
                    impact_rank=impact_rank[row.id],
                ))
            else:
                delta = row.rally_start_ts - previous.rally_start_ts
                lines.append(VerificationLine(
                    name=row.name,
                    appearance_rank=rank,
                    impact_rank=impact_rank[row.id],
                    previous_name=previous.name,
                    delta_seconds=delta,
                    anchor=self.anchor_for(delta),
                ))
            previous = row
        return lines

    def render(self, rows: Sequence[PlanRow]) -> str:
        """Render the check-list text, or an empty string for no rows."""
        if not rows:
            return ""
        return "\n".join(line.render() for line in self.build_lines(rows))
