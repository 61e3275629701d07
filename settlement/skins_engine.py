"""
Skins calculation for the side-bet system.
"""

import logging
from decimal import Decimal
from typing import Dict, List, Optional

from history.score_history import ScoreHistory
from history.score_snapshot import ScoreSnapshot
from models.bets import SETTLE_ON_ARRIVAL, SETTLE_ON_COMPLETE
from models.issues import IssueKind, ResultIssue
from models.results import SkinResult, SkinsOutcome
from models.score import HoleScore

logger = logging.getLogger(__name__)


class SkinsEngine:
    """Computes the per-hole skins winner, carryover and pot.

    Holes are derived strictly in order. A hole's result depends only on the
    scores of that hole and the holes before it, so correcting hole k never
    changes any result for a hole before k.
    """

    def __init__(self, skin_base_amount: Decimal, total_holes: int = 18,
                 settle_policy: str = SETTLE_ON_COMPLETE):
        self.skin_base_amount = skin_base_amount
        self.total_holes = total_holes
        self.settle_policy = settle_policy

    def calculate(self, history: ScoreHistory, roster: Optional[List[str]] = None) -> SkinsOutcome:
        """Derive every skin result available from the history."""
        snapshot = history.snapshot(roster, self.total_holes)
        return self.calculate_from_snapshot(snapshot)

    def calculate_from_snapshot(self, snapshot: ScoreSnapshot) -> SkinsOutcome:
        outcome = SkinsOutcome()
        carry_count = 0
        chain_provisional = False

        for hole in range(1, self.total_holes + 1):
            if not self._is_derivable(snapshot, hole):
                logger.debug(f"Skins derivation stops at hole {hole}: not yet played")
                break

            complete = snapshot.is_hole_complete(hole)
            chain_provisional = chain_provisional or not complete
            pot = self.skin_base_amount * (1 + carry_count)
            result = self._score_hole(hole, snapshot.hole_scores(hole), pot, chain_provisional)

            if result.is_carryover:
                carry_count += 1
            else:
                carry_count = 0

            if result.is_unresolved:
                outcome.issues.append(ResultIssue(
                    IssueKind.UNRESOLVED_SKIN_TIE,
                    f"Hole {hole} tied between {', '.join(result.tied_player_ids)} "
                    f"with no hole left to carry {pot} to",
                    hole_number=hole,
                ))
            outcome.results.append(result)

        return outcome

    def _is_derivable(self, snapshot: ScoreSnapshot, hole: int) -> bool:
        if self.settle_policy == SETTLE_ON_ARRIVAL:
            return snapshot.has_scores(hole)
        return snapshot.is_hole_complete(hole)

    def _score_hole(self, hole: int, scores: Dict[str, HoleScore], pot: Decimal,
                    provisional: bool) -> SkinResult:
        low = min(s.net_strokes for s in scores.values())
        leaders = tuple(sorted(p for p, s in scores.items() if s.net_strokes == low))

        if len(leaders) == 1:
            return SkinResult(
                hole_number=hole,
                winner_id=leaders[0],
                winner_score=low,
                pot_amount=pot,
                is_carryover=False,
                is_provisional=provisional,
            )

        if hole == self.total_holes:
            return SkinResult(
                hole_number=hole,
                winner_id=None,
                winner_score=low,
                pot_amount=pot,
                is_carryover=False,
                is_provisional=provisional,
                is_unresolved=True,
                tied_player_ids=leaders,
            )

        return SkinResult(
            hole_number=hole,
            winner_id=None,
            winner_score=low,
            pot_amount=pot,
            is_carryover=True,
            is_provisional=provisional,
            tied_player_ids=leaders,
        )

    @staticmethod
    def winnings_by_player(results: List[SkinResult]) -> Dict[str, Decimal]:
        """Pot amounts won per player."""
        winnings: Dict[str, Decimal] = {}
        for result in results:
            if result.winner_id and not result.is_carryover:
                winnings[result.winner_id] = winnings.get(result.winner_id, Decimal("0")) + result.pot_amount
        return winnings

    @staticmethod
    def pending_carryover(results: List[SkinResult]) -> Decimal:
        """Pot currently rolling forward, or left unresolved at the final hole."""
        if results and (results[-1].is_carryover or results[-1].is_unresolved):
            return results[-1].pot_amount
        return Decimal("0")
