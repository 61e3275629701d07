"""
Qualifying strategies for the snake side bet.

The exact event that moves the snake differs between groups, so the rule is
a named strategy selected in the round configuration.
"""

import logging
from typing import Any, Dict, Iterable, Optional, Tuple

from models.score import HoleScore

logger = logging.getLogger(__name__)

DEFAULT_SNAKE_POLICY = "worst_gross"


class SnakePolicy:
    """Base strategy: larger qualifying values are worse."""

    name = ""

    def qualifying_value(self, score: HoleScore) -> Any:
        """Value of a posted score, or None when it is not a snake event."""
        raise NotImplementedError

    def establishes(self, value: Any) -> bool:
        """Whether a value is bad enough to pick up an unheld snake."""
        return value is not None

    def beats(self, challenger: Any, holder: Any) -> bool:
        """Whether a challenger's value strictly takes the snake from the holder."""
        return challenger > holder

    def candidate(self, scores: Iterable[HoleScore]) -> Optional[Tuple[str, Any]]:
        """The single worst qualifying score on a hole, or None on no event or a tie."""
        values = [(s.player_id, self.qualifying_value(s)) for s in scores]
        values = [(p, v) for p, v in values if v is not None]
        if not values:
            return None
        worst = max(v for _, v in values)
        worst_players = [p for p, v in values if v == worst]
        if len(worst_players) > 1:
            return None
        return worst_players[0], worst


class WorstGrossPolicy(SnakePolicy):
    """The highest gross score on a hole."""

    name = "worst_gross"

    def qualifying_value(self, score: HoleScore) -> Any:
        return score.gross_strokes


class WorstNetPolicy(SnakePolicy):
    """The highest net score on a hole."""

    name = "worst_net"

    def qualifying_value(self, score: HoleScore) -> Any:
        return score.net_strokes


class ThreePuttPolicy(SnakePolicy):
    """Three or more putts. A later hole beats an earlier one; on the same hole more putts win."""

    name = "three_putt"

    def __init__(self, minimum_putts: int = 3):
        self.minimum_putts = minimum_putts

    def qualifying_value(self, score: HoleScore) -> Any:
        if score.putts is None or score.putts < self.minimum_putts:
            return None
        return (score.hole_number, score.putts)


SNAKE_POLICIES: Dict[str, type] = {
    WorstGrossPolicy.name: WorstGrossPolicy,
    WorstNetPolicy.name: WorstNetPolicy,
    ThreePuttPolicy.name: ThreePuttPolicy,
}


def get_snake_policy(name: Optional[str]) -> SnakePolicy:
    """Look up a policy by name, falling back to the default for unknown names."""
    policy_class = SNAKE_POLICIES.get(name or DEFAULT_SNAKE_POLICY)
    if policy_class is None:
        logger.warning(f"Unknown snake policy '{name}', using '{DEFAULT_SNAKE_POLICY}'")
        policy_class = SNAKE_POLICIES[DEFAULT_SNAKE_POLICY]
    return policy_class()
