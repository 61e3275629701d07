"""
Immutable per-hole view of resolved scores.
"""

import logging
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from models.issues import IssueKind, ResultIssue
from models.score import HoleScore

logger = logging.getLogger(__name__)


class ScoreSnapshot:
    """Resolved scores keyed by hole, restricted to the round's roster."""

    def __init__(self, by_hole: Dict[int, Dict[str, HoleScore]], roster: Tuple[str, ...],
                 total_holes: int, issues: List[ResultIssue]):
        self._by_hole = by_hole
        self.roster = roster
        self.total_holes = total_holes
        self.issues = issues

    @classmethod
    def build(cls, scores: Iterable[HoleScore], roster: Optional[Sequence[str]],
              total_holes: int) -> "ScoreSnapshot":
        scores = sorted(scores, key=lambda s: (s.hole_number, s.player_id))
        if roster:
            field_players = tuple(sorted(set(roster)))
        else:
            field_players = tuple(sorted({s.player_id for s in scores}))
        known = set(field_players)

        issues: List[ResultIssue] = []
        by_hole: Dict[int, Dict[str, HoleScore]] = {}
        for score in scores:
            if score.player_id not in known:
                issues.append(ResultIssue(
                    IssueKind.UNKNOWN_PLAYER_REFERENCE,
                    f"Score for unknown player '{score.player_id}' on hole {score.hole_number} dropped",
                    player_id=score.player_id, hole_number=score.hole_number,
                ))
                continue
            if not 1 <= score.hole_number <= total_holes:
                issues.append(ResultIssue(
                    IssueKind.INCONSISTENT_HOLE_SEQUENCE,
                    f"Hole {score.hole_number} is outside a {total_holes}-hole round; score dropped",
                    player_id=score.player_id, hole_number=score.hole_number,
                ))
                continue
            by_hole.setdefault(score.hole_number, {})[score.player_id] = score

        issues.extend(cls._sequence_gaps(by_hole, field_players))
        for issue in issues:
            logger.debug(issue.message)
        return cls(by_hole, field_players, total_holes, issues)

    @staticmethod
    def _sequence_gaps(by_hole: Dict[int, Dict[str, HoleScore]],
                       players: Tuple[str, ...]) -> List[ResultIssue]:
        """Report players who posted a hole while an earlier hole is still open."""
        gaps = []
        for player_id in players:
            posted = sorted(h for h, scores in by_hole.items() if player_id in scores)
            if not posted:
                continue
            missing = [h for h in range(1, posted[-1]) if h not in posted]
            if missing:
                gaps.append(ResultIssue(
                    IssueKind.INCONSISTENT_HOLE_SEQUENCE,
                    f"Player '{player_id}' posted hole {posted[-1]} before hole(s) {missing}",
                    player_id=player_id, hole_number=missing[0],
                ))
        return gaps

    def hole_scores(self, hole_number: int) -> Dict[str, HoleScore]:
        return dict(self._by_hole.get(hole_number, {}))

    def has_scores(self, hole_number: int) -> bool:
        return bool(self._by_hole.get(hole_number))

    def is_hole_complete(self, hole_number: int, players: Optional[Iterable[str]] = None) -> bool:
        """Whether every given player (default: the roster) has posted the hole."""
        posted = self._by_hole.get(hole_number, {})
        expected = tuple(players) if players is not None else self.roster
        return bool(expected) and all(p in posted for p in expected)
