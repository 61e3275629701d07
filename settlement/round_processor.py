"""
Round processor for the side-bet system.
"""

import logging
from typing import List

from history.score_history import ScoreHistory
from models.bets import RoundSetup
from models.issues import ResultIssue
from models.results import MatchOutcome, RoundReport, RoundStatus, SkinsOutcome, SnakeOutcome
from .match_engine import MatchEngine
from .settlement_aggregator import SettlementAggregator
from .skins_engine import SkinsEngine
from .snake_engine import SnakeEngine
from .snake_policies import get_snake_policy

logger = logging.getLogger(__name__)


class RoundProcessor:
    """Runs the three engines and the aggregator over one round's history."""

    def __init__(self, setup: RoundSetup, history: ScoreHistory):
        self.setup = setup
        self.history = history
        self.skins_engine = SkinsEngine(setup.bets.skin_base_amount, setup.total_holes, setup.settle_policy)
        self.snake_engine = SnakeEngine(setup.bets.snake_amounts, get_snake_policy(setup.snake_policy),
                                        setup.total_holes)
        self.match_engine = MatchEngine(setup.pairings, setup.total_holes, setup.settle_policy)
        self.aggregator = SettlementAggregator(setup.bets)

    def process(self) -> RoundReport:
        """Compute the current (possibly provisional) state of every bet."""
        roster = self.setup.roster
        snapshot = self.history.snapshot(roster, self.setup.total_holes)

        skins = self.skins_engine.calculate_from_snapshot(snapshot)
        snakes = self.snake_engine.calculate(self.history, roster)
        matches = self.match_engine.calculate(self.history, roster)
        ledger = self.aggregator.aggregate(
            snapshot.roster, skins.results, snakes.states, matches.states,
            self.setup.pairings, self.setup.presses,
        )

        status = self.round_status(skins, snakes, matches)
        issues: List[ResultIssue] = []
        for source in (self.setup.issues, snapshot.issues, skins.issues, snakes.issues,
                       matches.issues, ledger.issues):
            for issue in source:
                if issue not in issues:
                    issues.append(issue)

        logger.info(f"Round {self.setup.round_id}: {len(skins.results)} skins derived, "
                    f"{sum(1 for s in snakes.states if s.is_final)}/{len(snakes.states)} snakes final, "
                    f"{sum(1 for m in matches.states if m.is_terminal) // 2}/{len(self.setup.pairings)} "
                    f"matches closed, status {status.value}")
        if issues:
            logger.warning(f"Round {self.setup.round_id}: {len(issues)} issue(s) reported")

        return RoundReport(
            round_id=self.setup.round_id,
            status=status,
            skins=skins,
            snakes=snakes,
            matches=matches,
            ledger=ledger,
            issues=issues,
        )

    def settle(self) -> RoundReport:
        """Compute the ledger and mark a completed round as settled."""
        report = self.process()
        if report.status == RoundStatus.COMPLETED:
            report.status = RoundStatus.SETTLED
            logger.info(f"Round {self.setup.round_id} settled")
        else:
            logger.warning(f"Round {self.setup.round_id} is {report.status.value}; ledger is provisional")
        return report

    def round_status(self, skins: SkinsOutcome, snakes: SnakeOutcome, matches: MatchOutcome) -> RoundStatus:
        if len(self.history) == 0:
            return RoundStatus.NOT_STARTED

        last_skin = skins.result_for_hole(self.setup.total_holes)
        skins_done = last_skin is not None and not any(r.is_provisional for r in skins.results)
        snakes_done = all(s.is_final for s in snakes.states)
        matches_done = all(m.is_terminal for m in matches.states)

        if skins_done and snakes_done and matches_done:
            return RoundStatus.COMPLETED
        return RoundStatus.IN_PROGRESS
