"""
Derived result models produced by the settlement engines.

None of these are stored independently; each is reproduced by replaying
the score history against the round configuration.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from .issues import ResultIssue

MATCH_ACTIVE = "active"
MATCH_WON = "won"
MATCH_LOST = "lost"
MATCH_HALVED = "halved"


class RoundStatus(Enum):
    NOT_STARTED = "NotStarted"
    IN_PROGRESS = "InProgress"
    COMPLETED = "Completed"
    SETTLED = "Settled"


@dataclass(frozen=True)
class SkinResult:
    """Outcome of the skins game on one hole."""
    hole_number: int
    winner_id: Optional[str]
    winner_score: Optional[int]
    pot_amount: Decimal
    is_carryover: bool
    is_provisional: bool = False
    is_unresolved: bool = False
    tied_player_ids: Tuple[str, ...] = ()


@dataclass(frozen=True)
class SnakeState:
    """Holder of one snake bracket."""
    bracket: str
    current_holder_id: Optional[str]
    last_hole_updated: int
    amount: Decimal
    is_final: bool
    holder_value: Any = None
    finalized_at: Optional[datetime] = None


@dataclass(frozen=True)
class TeamMatchState:
    """One team's view of a better-ball match."""
    match_id: str
    team_id: str
    opponent_id: str
    holes_won: int = 0
    holes_lost: int = 0
    holes_halved: int = 0
    current_hole: int = 0
    status: str = MATCH_ACTIVE
    margin_of_victory: Optional[int] = None
    is_provisional: bool = False

    @property
    def lead(self) -> int:
        return self.holes_won - self.holes_lost

    @property
    def is_terminal(self) -> bool:
        return self.status != MATCH_ACTIVE and not self.is_provisional


@dataclass
class SkinsOutcome:
    results: List[SkinResult] = field(default_factory=list)
    issues: List[ResultIssue] = field(default_factory=list)

    def result_for_hole(self, hole_number: int) -> Optional[SkinResult]:
        for result in self.results:
            if result.hole_number == hole_number:
                return result
        return None


@dataclass
class SnakeOutcome:
    states: List[SnakeState] = field(default_factory=list)
    issues: List[ResultIssue] = field(default_factory=list)

    def state_for(self, bracket: str) -> Optional[SnakeState]:
        for state in self.states:
            if state.bracket == bracket:
                return state
        return None


@dataclass
class MatchOutcome:
    states: List[TeamMatchState] = field(default_factory=list)
    issues: List[ResultIssue] = field(default_factory=list)

    def state_for(self, match_id: str, team_id: str) -> Optional[TeamMatchState]:
        for state in self.states:
            if state.match_id == match_id and state.team_id == team_id:
                return state
        return None


@dataclass(frozen=True)
class SettlementLedgerEntry:
    """Net position of one player across every side bet."""
    player_id: str
    gross_winnings: Decimal
    gross_losses: Decimal
    net_winnings: Decimal
    breakdown: Dict[str, Decimal] = field(default_factory=dict)
    is_provisional: bool = False


@dataclass
class SettlementLedger:
    entries: List[SettlementLedgerEntry] = field(default_factory=list)
    issues: List[ResultIssue] = field(default_factory=list)
    is_provisional: bool = False
    monetary_display_suppressed: bool = False

    def entry_for(self, player_id: str) -> Optional[SettlementLedgerEntry]:
        for entry in self.entries:
            if entry.player_id == player_id:
                return entry
        return None


@dataclass
class RoundReport:
    """Everything the presentation layer needs for one round."""
    round_id: str
    status: RoundStatus
    skins: SkinsOutcome
    snakes: SnakeOutcome
    matches: MatchOutcome
    ledger: SettlementLedger
    issues: List[ResultIssue] = field(default_factory=list)
