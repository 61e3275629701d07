"""
Display strings for skins, snake and match status.
"""

from typing import List, Optional

from models.bets import BACK_NINE, FRONT_NINE
from models.results import MATCH_ACTIVE, MATCH_HALVED, SkinResult, SnakeState, TeamMatchState
from settlement.skins_engine import SkinsEngine
from utils.money_utils import MoneyUtils

SNAKE_LABELS = {FRONT_NINE: "Front 9", BACK_NINE: "Back 9"}


class StatusFormatter:
    """Formats engine outputs for leaderboard and widget text."""

    def __init__(self, suppress_money: bool = False):
        self.suppress_money = suppress_money

    def money(self, amount) -> str:
        return MoneyUtils.format_money(amount, self.suppress_money)

    def skins_status(self, results: List[SkinResult], current_hole: Optional[int] = None) -> str:
        recent = [r for r in results if current_hole is None or r.hole_number <= current_hole]
        if not recent:
            return "No skins yet"

        latest = recent[-1]
        if latest.is_unresolved:
            return f"Hole {latest.hole_number} tied - {self.money(latest.pot_amount)} unresolved"
        if latest.is_carryover:
            return f"Pot carries: {self.money(SkinsEngine.pending_carryover(recent))}"
        text = f"Last skin: Hole {latest.hole_number} - {self.money(latest.pot_amount)}"
        if latest.is_provisional:
            text += " (provisional)"
        return text

    def snake_status(self, state: SnakeState, holder_name: Optional[str] = None) -> str:
        label = SNAKE_LABELS.get(state.bracket, "Overall")
        name = holder_name or state.current_holder_id
        if not name:
            return f"{label} Snake: No holder"
        if state.is_final:
            return f"{label} Snake Winner: {name} - {self.money(state.amount)}"
        return f"{label} Snake: {name} (Hole {state.last_hole_updated})"

    @staticmethod
    def match_status(state: TeamMatchState, total_holes: int = 18) -> str:
        """Match-play score from one team's perspective, e.g. '2 UP', '3 & 2', 'All Square'."""
        lead = state.lead
        if state.status == MATCH_ACTIVE:
            if lead == 0:
                return "All Square"
            return f"{abs(lead)} {'UP' if lead > 0 else 'DOWN'}"

        if state.status == MATCH_HALVED:
            return "Match Halved"

        remaining = total_holes - state.current_hole
        if remaining == 0:
            result = f"{state.margin_of_victory} UP"
        else:
            result = f"{state.margin_of_victory} & {remaining}"
        return result if lead > 0 else f"Lost {result}"
