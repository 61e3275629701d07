"""
Bet configuration and round setup models.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, List, Optional, Tuple

from .issues import ResultIssue

SETTLE_ON_COMPLETE = "settle_on_complete"
SETTLE_ON_ARRIVAL = "settle_on_arrival"
SETTLE_POLICIES = (SETTLE_ON_COMPLETE, SETTLE_ON_ARRIVAL)

FRONT_NINE = "front_nine"
BACK_NINE = "back_nine"
OVERALL = "overall"
SNAKE_BRACKETS = (FRONT_NINE, BACK_NINE, OVERALL)


@dataclass(frozen=True)
class BetConfiguration:
    """Stakes for one round. Supplied once and immutable during play."""
    skin_base_amount: Decimal = Decimal("0")
    snake_amounts: Dict[str, Decimal] = field(default_factory=dict)
    match_entry_fee: Decimal = Decimal("0")
    is_configured: bool = True

    def snake_amount(self, bracket: str) -> Decimal:
        return self.snake_amounts.get(bracket, Decimal("0"))

    @classmethod
    def zero_stakes(cls) -> "BetConfiguration":
        """Configuration used when bet amounts are absent."""
        return cls(is_configured=False)


@dataclass(frozen=True)
class Team:
    """Two players sharing a better-ball score."""
    team_id: str
    player_ids: Tuple[str, ...]


@dataclass(frozen=True)
class TeamPairing:
    """One 2v2 match between two teams."""
    match_id: str
    team_a: Team
    team_b: Team

    @property
    def player_ids(self) -> Tuple[str, ...]:
        return self.team_a.player_ids + self.team_b.player_ids


@dataclass(frozen=True)
class PressBet:
    """A press between two players, resolved outside the engines."""
    press_id: str
    initiator_id: str
    target_id: str
    amount: Decimal
    status: str = "active"
    winner_id: Optional[str] = None


@dataclass
class RoundSetup:
    """Everything a round needs besides its scores."""
    round_id: str
    total_holes: int
    roster: List[str]
    bets: BetConfiguration
    pairings: List[TeamPairing] = field(default_factory=list)
    presses: List[PressBet] = field(default_factory=list)
    snake_policy: str = "worst_gross"
    settle_policy: str = SETTLE_ON_COMPLETE
    issues: List[ResultIssue] = field(default_factory=list)
