"""
Append-only score history for one round.
"""

import logging
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from models.score import HoleScore, ReopenEvent
from .score_snapshot import ScoreSnapshot

logger = logging.getLogger(__name__)

REOPEN_TARGET_KINDS = ("snake", "match")


class ScoreHistory:
    """Event log of hole scores and reopen requests.

    The log is the single source of truth: engines never patch their own
    state, they re-derive everything from a view of this log. Resolution is
    last-write-wins per (player, hole); among equal timestamps the fact
    recorded last wins.
    """

    def __init__(self, scores: Optional[Iterable[HoleScore]] = None,
                 reopens: Optional[Iterable[ReopenEvent]] = None):
        self._facts: List[HoleScore] = []
        self._reopens: List[ReopenEvent] = []
        self._resolved: Optional[Dict[Tuple[str, int], HoleScore]] = None
        for score in scores or []:
            self.record(score)
        for event in reopens or []:
            self._reopens.append(event)

    def __len__(self) -> int:
        return len(self._facts)

    @property
    def facts(self) -> Tuple[HoleScore, ...]:
        return tuple(self._facts)

    @property
    def reopens(self) -> Tuple[ReopenEvent, ...]:
        return tuple(self._reopens)

    def record(self, score: HoleScore) -> None:
        """Append a score fact."""
        self._facts.append(score)
        self._resolved = None

    def record_all(self, scores: Iterable[HoleScore]) -> int:
        count = 0
        for score in scores:
            self.record(score)
            count += 1
        return count

    def reopen(self, target_kind: str, target_id: str, timestamp: datetime,
               actor: str, reason: str = "") -> ReopenEvent:
        """Record an explicit reopen of a finalized snake bracket or closed match."""
        if target_kind not in REOPEN_TARGET_KINDS:
            raise ValueError(f"Cannot reopen unknown target kind '{target_kind}'")
        event = ReopenEvent(target_kind, target_id, timestamp, actor, reason)
        self._reopens.append(event)
        logger.info(f"Reopen of {target_kind} '{target_id}' recorded by {actor} at {timestamp}: {reason}")
        return event

    def reopen_times(self, target_kind: str, target_id: str) -> List[datetime]:
        return sorted(e.timestamp for e in self._reopens
                      if e.target_kind == target_kind and e.target_id == target_id)

    def latest_scores(self) -> Dict[Tuple[str, int], HoleScore]:
        """Resolve the log to the current score per (player, hole)."""
        if self._resolved is None:
            resolved: Dict[Tuple[str, int], HoleScore] = {}
            for score in self._facts:
                current = resolved.get(score.key)
                if current is None or score.timestamp >= current.timestamp:
                    resolved[score.key] = score
            self._resolved = resolved
        return self._resolved

    def corrections(self) -> List[HoleScore]:
        """Facts that replaced an earlier fact for the same (player, hole)."""
        seen = set()
        corrected = []
        for score in sorted(self._facts, key=lambda s: s.timestamp):
            if score.key in seen:
                corrected.append(score)
            seen.add(score.key)
        return corrected

    def timestamps(self) -> List[datetime]:
        """Distinct instants at which the log changed, in order."""
        instants = {s.timestamp for s in self._facts}
        instants.update(e.timestamp for e in self._reopens)
        return sorted(instants)

    def as_of(self, cutoff: datetime) -> "ScoreHistory":
        """The history as it stood at `cutoff` (inclusive)."""
        return ScoreHistory(
            [s for s in self._facts if s.timestamp <= cutoff],
            [e for e in self._reopens if e.timestamp <= cutoff],
        )

    def snapshot(self, roster: Optional[Sequence[str]] = None, total_holes: int = 18) -> ScoreSnapshot:
        """Resolved, roster-filtered view of the history."""
        return ScoreSnapshot.build(self.latest_scores().values(), roster, total_holes)
