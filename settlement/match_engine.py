"""
Better-ball match play for the side-bet system.
"""

import logging
from typing import Dict, List, Optional, Tuple

from history.freeze import derive_with_freeze, late_corrections
from history.score_history import ScoreHistory
from history.score_snapshot import ScoreSnapshot
from models.bets import SETTLE_ON_ARRIVAL, SETTLE_ON_COMPLETE, Team, TeamPairing
from models.results import (
    MATCH_ACTIVE, MATCH_HALVED, MATCH_LOST, MATCH_WON, MatchOutcome, TeamMatchState,
)
from models.score import HoleScore

logger = logging.getLogger(__name__)


class MatchEngine:
    """Computes the status of each 2v2 better-ball match.

    Holes are counted in order from the first tee; a match that closes out
    (or finishes level) is frozen, and hole events after that instant are
    no-ops unless the match is explicitly reopened.
    """

    def __init__(self, pairings: List[TeamPairing], total_holes: int = 18,
                 settle_policy: str = SETTLE_ON_COMPLETE):
        self.pairings = pairings
        self.total_holes = total_holes
        self.settle_policy = settle_policy

    def calculate(self, history: ScoreHistory, roster: Optional[List[str]] = None) -> MatchOutcome:
        outcome = MatchOutcome()
        for pairing in self.pairings:
            def derive(view, pairing=pairing):
                return self._derive_match(view.snapshot(roster, self.total_holes), pairing)

            (state_a, state_b), frozen_at = derive_with_freeze(
                history, derive, lambda states: states[0].is_terminal,
                history.reopen_times("match", pairing.match_id),
            )
            outcome.states.extend([state_a, state_b])

            players = set(pairing.player_ids)
            outcome.issues.extend(late_corrections(
                history, frozen_at, lambda s, players=players: s.player_id in players,
                f"match '{pairing.match_id}'",
            ))
            if frozen_at is not None:
                logger.debug(f"Match {pairing.match_id} final since {frozen_at}")
        return outcome

    @staticmethod
    def better_ball(team: Team, scores: Dict[str, HoleScore]) -> Optional[int]:
        """Lowest net score among the team's players who posted the hole."""
        nets = [scores[p].net_strokes for p in team.player_ids if p in scores]
        return min(nets) if nets else None

    def _hole_played(self, pairing: TeamPairing, scores: Dict[str, HoleScore]) -> Tuple[bool, bool]:
        """Whether a hole counts for the match, and whether it counts provisionally."""
        complete = all(p in scores for p in pairing.player_ids)
        if complete:
            return True, False
        if self.settle_policy == SETTLE_ON_ARRIVAL:
            both_sides = (self.better_ball(pairing.team_a, scores) is not None and
                          self.better_ball(pairing.team_b, scores) is not None)
            return both_sides, both_sides
        return False, False

    def _derive_match(self, snapshot: ScoreSnapshot,
                      pairing: TeamPairing) -> Tuple[TeamMatchState, TeamMatchState]:
        won = lost = halved = 0
        current_hole = 0
        provisional = False
        status = MATCH_ACTIVE
        margin = None

        for hole in range(1, self.total_holes + 1):
            scores = snapshot.hole_scores(hole)
            played, hole_provisional = self._hole_played(pairing, scores)
            if not played:
                break
            provisional = provisional or hole_provisional

            score_a = self.better_ball(pairing.team_a, scores)
            score_b = self.better_ball(pairing.team_b, scores)
            if score_a < score_b:
                won += 1
            elif score_b < score_a:
                lost += 1
            else:
                halved += 1
            current_hole = hole

            lead = won - lost
            remaining = self.total_holes - current_hole
            if lead > remaining:
                status, margin = MATCH_WON, abs(lead)
                break
            if lead < -remaining:
                status, margin = MATCH_LOST, abs(lead)
                break

        if status == MATCH_ACTIVE and current_hole == self.total_holes and won == lost:
            status = MATCH_HALVED

        state_a = TeamMatchState(
            match_id=pairing.match_id,
            team_id=pairing.team_a.team_id,
            opponent_id=pairing.team_b.team_id,
            holes_won=won,
            holes_lost=lost,
            holes_halved=halved,
            current_hole=current_hole,
            status=status,
            margin_of_victory=margin,
            is_provisional=provisional,
        )
        state_b = TeamMatchState(
            match_id=pairing.match_id,
            team_id=pairing.team_b.team_id,
            opponent_id=pairing.team_a.team_id,
            holes_won=lost,
            holes_lost=won,
            holes_halved=halved,
            current_hole=current_hole,
            status=_opposite(status),
            margin_of_victory=margin,
            is_provisional=provisional,
        )
        return state_a, state_b


def _opposite(status: str) -> str:
    if status == MATCH_WON:
        return MATCH_LOST
    if status == MATCH_LOST:
        return MATCH_WON
    return status
