"""
Settlement engines package for the side-bet system.
"""

from .skins_engine import SkinsEngine
from .snake_engine import SnakeEngine, bracket_ranges
from .snake_policies import SnakePolicy, get_snake_policy, SNAKE_POLICIES, DEFAULT_SNAKE_POLICY
from .match_engine import MatchEngine
from .settlement_aggregator import SettlementAggregator
from .round_processor import RoundProcessor

__all__ = [
    'SkinsEngine', 'SnakeEngine', 'bracket_ranges', 'SnakePolicy', 'get_snake_policy',
    'SNAKE_POLICIES', 'DEFAULT_SNAKE_POLICY', 'MatchEngine', 'SettlementAggregator', 'RoundProcessor',
]
