"""
Score facts and score-history events for the side-bet system.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class HoleScore:
    """A verified score for one player on one hole.

    Scores are immutable facts. A correction is a new fact with the same
    (player_id, hole_number) key and a later timestamp.
    """
    player_id: str
    hole_number: int
    gross_strokes: int
    net_strokes: int
    timestamp: datetime
    putts: Optional[int] = None
    round_id: Optional[str] = None

    @property
    def key(self):
        return (self.player_id, self.hole_number)


@dataclass(frozen=True)
class ReopenEvent:
    """Explicit, audited request to reopen a finalized snake bracket or closed match."""
    target_kind: str
    target_id: str
    timestamp: datetime
    actor: str
    reason: str = ""
