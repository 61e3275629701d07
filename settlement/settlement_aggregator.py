"""
Settlement of skins, snake, match and press outcomes into a per-player ledger.
"""

import logging
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Set

from models.bets import BetConfiguration, PressBet, TeamPairing
from models.issues import IssueKind, ResultIssue
from models.results import (
    MATCH_ACTIVE, MATCH_HALVED, MATCH_WON, SettlementLedger, SettlementLedgerEntry,
    SkinResult, SnakeState, TeamMatchState,
)
from utils.money_utils import MoneyUtils

logger = logging.getLogger(__name__)

CATEGORIES = ("skins", "snake", "match", "press")
ZERO = Decimal("0")


class _Book:
    """Running receipts and payments per player and category."""

    def __init__(self, players: Iterable[str]):
        self.received = {p: {c: ZERO for c in CATEGORIES} for p in players}
        self.paid = {p: {c: ZERO for c in CATEGORIES} for p in players}
        self.provisional: Set[str] = set()

    def _ensure(self, player_id: str) -> None:
        if player_id not in self.received:
            self.received[player_id] = {c: ZERO for c in CATEGORIES}
            self.paid[player_id] = {c: ZERO for c in CATEGORIES}

    def receive(self, player_id: str, category: str, amount: Decimal) -> None:
        self._ensure(player_id)
        self.received[player_id][category] += amount

    def pay(self, player_id: str, category: str, amount: Decimal) -> None:
        self._ensure(player_id)
        self.paid[player_id][category] += amount


class SettlementAggregator:
    """Folds the engine outputs into one ledger entry per player.

    Rules:
    - skins: a resolved pot is funded equally by the field and paid to the winner
    - snake: a bracket holder pays the bracket amount, shared by everyone else
    - match: every player pays the entry fee; winners collect twice the fee,
      a halved match refunds it and an active match holds it
    - press: a completed press moves its amount from loser to winner

    Shared amounts are split to the cent; leftover cents go to the players
    first in sorted order, so every ledger nets to zero.
    """

    def __init__(self, bets: BetConfiguration):
        self.bets = bets

    def aggregate(self, roster: List[str], skin_results: List[SkinResult],
                  snake_states: List[SnakeState], match_states: List[TeamMatchState],
                  pairings: Optional[List[TeamPairing]] = None,
                  presses: Optional[List[PressBet]] = None) -> SettlementLedger:
        players = sorted(set(roster))
        book = _Book(players)
        ledger = SettlementLedger(monetary_display_suppressed=not self.bets.is_configured)
        if not self.bets.is_configured:
            ledger.issues.append(ResultIssue(
                IssueKind.MISSING_CONFIGURATION,
                "Bet amounts not configured; settling at zero stakes",
            ))

        self._settle_skins(book, players, skin_results)
        self._settle_snakes(book, players, snake_states)
        self._settle_matches(book, match_states, pairings or [])
        self._settle_presses(book, presses or [])

        for player_id in sorted(book.received):
            received = book.received[player_id]
            paid = book.paid[player_id]
            gross_winnings = sum(received.values(), ZERO)
            gross_losses = sum(paid.values(), ZERO)
            ledger.entries.append(SettlementLedgerEntry(
                player_id=player_id,
                gross_winnings=MoneyUtils.round_cents(gross_winnings),
                gross_losses=MoneyUtils.round_cents(gross_losses),
                net_winnings=MoneyUtils.round_cents(gross_winnings - gross_losses),
                breakdown={c: MoneyUtils.round_cents(received[c] - paid[c]) for c in CATEGORIES},
                is_provisional=player_id in book.provisional,
            ))

        ledger.is_provisional = bool(book.provisional)
        logger.debug(f"Ledger computed for {len(ledger.entries)} players "
                     f"({'provisional' if ledger.is_provisional else 'final'})")
        return ledger

    def _settle_skins(self, book: _Book, players: List[str], results: List[SkinResult]) -> None:
        if not players:
            return
        for result in results:
            if result.is_provisional:
                book.provisional.update(players)
            if result.winner_id is None or result.is_carryover:
                continue
            pot = MoneyUtils.round_cents(result.pot_amount)
            for player_id, share in zip(players, MoneyUtils.split_cents(pot, len(players))):
                book.pay(player_id, "skins", share)
            book.receive(result.winner_id, "skins", pot)

    def _settle_snakes(self, book: _Book, players: List[str], states: List[SnakeState]) -> None:
        for state in states:
            if not state.is_final:
                book.provisional.update(players)
            holder = state.current_holder_id
            others = [p for p in players if p != holder]
            if holder is None or not others:
                continue
            amount = MoneyUtils.round_cents(state.amount)
            book.pay(holder, "snake", amount)
            for player_id, share in zip(others, MoneyUtils.split_cents(amount, len(others))):
                book.receive(player_id, "snake", share)

    def _settle_matches(self, book: _Book, states: List[TeamMatchState],
                        pairings: List[TeamPairing]) -> None:
        fee = MoneyUtils.round_cents(self.bets.match_entry_fee)
        team_players: Dict[str, tuple] = {}
        for pairing in pairings:
            team_players[pairing.team_a.team_id] = pairing.team_a.player_ids
            team_players[pairing.team_b.team_id] = pairing.team_b.player_ids

        for state in states:
            members = team_players.get(state.team_id, ())
            for player_id in members:
                book.pay(player_id, "match", fee)
                if state.status == MATCH_WON:
                    book.receive(player_id, "match", fee * 2)
                elif state.status == MATCH_HALVED:
                    book.receive(player_id, "match", fee)
                if state.status == MATCH_ACTIVE or state.is_provisional:
                    book.provisional.add(player_id)

    def _settle_presses(self, book: _Book, presses: List[PressBet]) -> None:
        for press in presses:
            if press.status != "completed" or not press.winner_id:
                continue
            if press.winner_id == press.initiator_id:
                loser = press.target_id
            else:
                loser = press.initiator_id
            amount = MoneyUtils.round_cents(press.amount)
            book.receive(press.winner_id, "press", amount)
            book.pay(loser, "press", amount)
