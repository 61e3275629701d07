"""
Snake tracking for the side-bet system.
"""

import logging
from decimal import Decimal
from typing import Dict, List, Optional, Tuple

from history.freeze import derive_with_freeze, late_facts
from history.score_history import ScoreHistory
from models.bets import BACK_NINE, FRONT_NINE, OVERALL
from models.results import SnakeOutcome, SnakeState
from .snake_policies import SnakePolicy, WorstGrossPolicy

logger = logging.getLogger(__name__)


def bracket_ranges(total_holes: int = 18) -> Dict[str, Tuple[int, int]]:
    """Inclusive hole range of each bracket for a round of `total_holes`."""
    if total_holes <= 9:
        return {FRONT_NINE: (1, total_holes), OVERALL: (1, total_holes)}
    return {
        FRONT_NINE: (1, 9),
        BACK_NINE: (10, total_holes),
        OVERALL: (1, total_holes),
    }


class SnakeEngine:
    """Tracks the holder of each snake bracket.

    Each bracket is replayed independently. A bracket becomes final once every
    hole in its range has been posted by the whole field, and stays frozen at
    that instant unless the history carries an explicit reopen for it.
    """

    def __init__(self, snake_amounts: Dict[str, Decimal], policy: Optional[SnakePolicy] = None,
                 total_holes: int = 18):
        self.snake_amounts = snake_amounts
        self.policy = policy or WorstGrossPolicy()
        self.total_holes = total_holes
        self.ranges = bracket_ranges(total_holes)

    def calculate(self, history: ScoreHistory, roster: Optional[List[str]] = None) -> SnakeOutcome:
        outcome = SnakeOutcome()
        for bracket, (first_hole, last_hole) in self.ranges.items():
            def derive(view, bracket=bracket):
                return self._derive_bracket(view, roster, bracket)

            state, frozen_at = derive_with_freeze(
                history, derive, lambda s: s.is_final, history.reopen_times("snake", bracket)
            )
            if frozen_at is not None:
                state = SnakeState(
                    bracket=state.bracket,
                    current_holder_id=state.current_holder_id,
                    last_hole_updated=state.last_hole_updated,
                    amount=state.amount,
                    is_final=True,
                    holder_value=state.holder_value,
                    finalized_at=frozen_at,
                )
            outcome.states.append(state)
            outcome.issues.extend(late_facts(
                history, frozen_at,
                lambda s, lo=first_hole, hi=last_hole: (
                    lo <= s.hole_number <= hi and (not roster or s.player_id in roster)
                ),
                f"snake bracket '{bracket}'",
            ))
        return outcome

    def _derive_bracket(self, history: ScoreHistory, roster: Optional[List[str]],
                        bracket: str) -> SnakeState:
        first_hole, last_hole = self.ranges[bracket]
        snapshot = history.snapshot(roster, self.total_holes)
        holder_id = None
        holder_value = None
        last_hole_updated = 0

        for hole in range(first_hole, last_hole + 1):
            scores = snapshot.hole_scores(hole)
            if not scores:
                continue
            candidate = self.policy.candidate(scores[p] for p in sorted(scores))
            if candidate is None:
                continue
            player_id, value = candidate

            if holder_id is None:
                if self.policy.establishes(value):
                    holder_id, holder_value, last_hole_updated = player_id, value, hole
                    logger.debug(f"{bracket}: {player_id} picks up the snake on hole {hole}")
            elif self.policy.beats(value, holder_value):
                if player_id != holder_id:
                    logger.debug(f"{bracket}: snake passes from {holder_id} to {player_id} on hole {hole}")
                    holder_id, last_hole_updated = player_id, hole
                holder_value = value

        return SnakeState(
            bracket=bracket,
            current_holder_id=holder_id,
            last_hole_updated=last_hole_updated,
            amount=self.snake_amounts.get(bracket, Decimal("0")),
            is_final=all(snapshot.is_hole_complete(h) for h in range(first_hole, last_hole + 1)),
            holder_value=holder_value,
        )
