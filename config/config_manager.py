"""
Configuration management for the side-bet system.
"""

import logging
from typing import Any, Dict, List

import yaml

from models.bets import (
    BetConfiguration, PressBet, RoundSetup, Team, TeamPairing,
    SETTLE_ON_COMPLETE, SETTLE_POLICIES, SNAKE_BRACKETS,
)
from models.issues import IssueKind, ResultIssue
from utils.money_utils import MoneyUtils

logger = logging.getLogger(__name__)


class ConfigManager:
    """Manages configuration loading and provides default values."""

    @staticmethod
    def load_config(config_file: str) -> Dict[str, Any]:
        """Load configuration from YAML file."""
        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                config = yaml.safe_load(f)
        except FileNotFoundError:
            logger.warning(f"Configuration file '{config_file}' not found. Using default configuration.")
            return ConfigManager.get_default_config()
        except yaml.YAMLError as e:
            logger.warning(f"Error parsing configuration file: {e}. Using default configuration.")
            return ConfigManager.get_default_config()

        if not isinstance(config, dict):
            logger.warning(f"Configuration file '{config_file}' is empty. Using default configuration.")
            return ConfigManager.get_default_config()
        return config

    @staticmethod
    def get_default_config() -> Dict[str, Any]:
        """Return default configuration if config file is not available."""
        return {
            'round': {
                'round_id': 'round-1',
                'total_holes': 18,
                'settle_policy': SETTLE_ON_COMPLETE,
            },
            'players': [],
            'pairings': [],
            'bets': {
                'skin_base_amount': 10,
                'snake_amounts': {'front_nine': 5, 'back_nine': 5, 'overall': 10},
                'match_entry_fee': 20,
            },
            'snake': {'policy': 'worst_gross'},
            'feed': {'base_url': None, 'timeout': 30},
            'reports': {'output_dir': 'reports'},
        }

    @staticmethod
    def build_bet_configuration(bets_config: Any) -> BetConfiguration:
        """Turn the `bets` section into a BetConfiguration; absent bets mean zero stakes."""
        if not isinstance(bets_config, dict) or not bets_config:
            return BetConfiguration.zero_stakes()

        snake_amounts = {}
        for bracket, amount in (bets_config.get('snake_amounts') or {}).items():
            if bracket not in SNAKE_BRACKETS:
                logger.warning(f"Ignoring snake amount for unknown bracket '{bracket}'")
                continue
            snake_amounts[bracket] = MoneyUtils.to_money(amount)

        return BetConfiguration(
            skin_base_amount=MoneyUtils.to_money(bets_config.get('skin_base_amount')),
            snake_amounts=snake_amounts,
            match_entry_fee=MoneyUtils.to_money(bets_config.get('match_entry_fee')),
        )

    @staticmethod
    def build_pairings(pairings_config: Any) -> List[TeamPairing]:
        pairings = []
        for index, entry in enumerate(pairings_config or [], 1):
            try:
                team_a = Team(str(entry['team_a']['team_id']),
                              tuple(str(p) for p in entry['team_a']['players']))
                team_b = Team(str(entry['team_b']['team_id']),
                              tuple(str(p) for p in entry['team_b']['players']))
            except (KeyError, TypeError) as e:
                logger.warning(f"Skipping malformed pairing #{index}: missing {e}")
                continue
            pairings.append(TeamPairing(str(entry.get('match_id', f"match-{index}")), team_a, team_b))
        return pairings

    @staticmethod
    def build_presses(presses_config: Any) -> List[PressBet]:
        presses = []
        for index, entry in enumerate(presses_config or [], 1):
            try:
                presses.append(PressBet(
                    press_id=str(entry.get('press_id', f"press-{index}")),
                    initiator_id=str(entry['initiator_id']),
                    target_id=str(entry['target_id']),
                    amount=MoneyUtils.to_money(entry.get('amount')),
                    status=entry.get('status', 'active'),
                    winner_id=entry.get('winner_id'),
                ))
            except (KeyError, TypeError, AttributeError) as e:
                logger.warning(f"Skipping malformed press #{index}: {e}")
        return presses

    @staticmethod
    def build_round_setup(config: Dict[str, Any]) -> RoundSetup:
        """Build the round setup from a loaded configuration mapping."""
        round_config = config.get('round') or {}
        issues = []

        bets = ConfigManager.build_bet_configuration(config.get('bets'))
        if not bets.is_configured:
            logger.warning("No bet amounts configured; the round will be settled at zero stakes")

        settle_policy = round_config.get('settle_policy', SETTLE_ON_COMPLETE)
        if settle_policy not in SETTLE_POLICIES:
            logger.warning(f"Unknown settle policy '{settle_policy}', using '{SETTLE_ON_COMPLETE}'")
            issues.append(ResultIssue(
                IssueKind.MISSING_CONFIGURATION,
                f"Unknown settle policy '{settle_policy}'; using '{SETTLE_ON_COMPLETE}'",
            ))
            settle_policy = SETTLE_ON_COMPLETE

        try:
            total_holes = int(round_config.get('total_holes', 18))
        except (TypeError, ValueError):
            logger.warning(f"Invalid total_holes '{round_config.get('total_holes')}', using 18")
            issues.append(ResultIssue(
                IssueKind.MISSING_CONFIGURATION,
                f"Invalid total_holes '{round_config.get('total_holes')}'; using 18",
            ))
            total_holes = 18

        return RoundSetup(
            round_id=str(round_config.get('round_id', 'round-1')),
            total_holes=total_holes,
            roster=[str(p) for p in config.get('players') or []],
            bets=bets,
            pairings=ConfigManager.build_pairings(config.get('pairings')),
            presses=ConfigManager.build_presses(config.get('presses')),
            snake_policy=(config.get('snake') or {}).get('policy', 'worst_gross'),
            settle_policy=settle_policy,
            issues=issues,
        )
