"""
Models package for the side-bet settlement system.

This package contains all data models and dataclasses used throughout the system.
"""

from .score import HoleScore, ReopenEvent
from .issues import IssueKind, ResultIssue
from .bets import (
    BetConfiguration, Team, TeamPairing, PressBet, RoundSetup,
    SETTLE_ON_COMPLETE, SETTLE_ON_ARRIVAL, SETTLE_POLICIES,
    FRONT_NINE, BACK_NINE, OVERALL, SNAKE_BRACKETS,
)
from .results import (
    SkinResult, SnakeState, TeamMatchState, SettlementLedgerEntry, SettlementLedger,
    SkinsOutcome, SnakeOutcome, MatchOutcome, RoundReport, RoundStatus,
    MATCH_ACTIVE, MATCH_WON, MATCH_LOST, MATCH_HALVED,
)

__all__ = [
    'HoleScore', 'ReopenEvent', 'IssueKind', 'ResultIssue',
    'BetConfiguration', 'Team', 'TeamPairing', 'PressBet', 'RoundSetup',
    'SETTLE_ON_COMPLETE', 'SETTLE_ON_ARRIVAL', 'SETTLE_POLICIES',
    'FRONT_NINE', 'BACK_NINE', 'OVERALL', 'SNAKE_BRACKETS',
    'SkinResult', 'SnakeState', 'TeamMatchState', 'SettlementLedgerEntry', 'SettlementLedger',
    'SkinsOutcome', 'SnakeOutcome', 'MatchOutcome', 'RoundReport', 'RoundStatus',
    'MATCH_ACTIVE', 'MATCH_WON', 'MATCH_LOST', 'MATCH_HALVED',
]
