"""
Report generator for the side-bet system.
"""

import os
import logging
from typing import Dict

import pandas as pd

from models.results import RoundReport
from settlement.skins_engine import SkinsEngine
from .status_formatter import StatusFormatter

logger = logging.getLogger(__name__)


class ReportGenerator:
    """Generates CSV reports and a text summary for a processed round."""

    def __init__(self, report: RoundReport, total_holes: int = 18):
        self.report = report
        self.total_holes = total_holes
        self.suppress_money = report.ledger.monetary_display_suppressed
        self.formatter = StatusFormatter(self.suppress_money)

    def _amount(self, amount):
        return None if self.suppress_money else float(amount)

    def generate_skins_report(self, output_file: str) -> int:
        """
        Generate the hole-by-hole skins report.
        Returns the number of holes in the report.
        """
        data = []
        for result in self.report.skins.results:
            data.append({
                'Hole': result.hole_number,
                'Winner': result.winner_id or '',
                'Winning Score': result.winner_score,
                'Pot': self._amount(result.pot_amount),
                'Carryover': result.is_carryover,
                'Unresolved': result.is_unresolved,
                'Provisional': result.is_provisional,
                'Tied Players': ' '.join(result.tied_player_ids),
            })
        return self._write(data, output_file, "skins")

    def generate_snake_report(self, output_file: str) -> int:
        data = []
        for state in self.report.snakes.states:
            data.append({
                'Bracket': state.bracket,
                'Holder': state.current_holder_id or '',
                'Last Hole Updated': state.last_hole_updated,
                'Amount': self._amount(state.amount),
                'Final': state.is_final,
                'Status': self.formatter.snake_status(state),
            })
        return self._write(data, output_file, "snake")

    def generate_match_report(self, output_file: str) -> int:
        data = []
        for state in self.report.matches.states:
            data.append({
                'Match': state.match_id,
                'Team': state.team_id,
                'Opponent': state.opponent_id,
                'Won': state.holes_won,
                'Lost': state.holes_lost,
                'Halved': state.holes_halved,
                'Thru': state.current_hole,
                'Status': state.status,
                'Margin': state.margin_of_victory,
                'Score': self.formatter.match_status(state, self.total_holes),
                'Provisional': state.is_provisional,
            })
        return self._write(data, output_file, "match")

    def generate_ledger_report(self, output_file: str) -> int:
        data = []
        for entry in self.report.ledger.entries:
            row = {
                'Player': entry.player_id,
                'Gross Winnings': self._amount(entry.gross_winnings),
                'Gross Losses': self._amount(entry.gross_losses),
                'Net Winnings': self._amount(entry.net_winnings),
            }
            for category, amount in entry.breakdown.items():
                row[category.capitalize()] = self._amount(amount)
            row['Provisional'] = entry.is_provisional
            data.append(row)
        return self._write(data, output_file, "ledger")

    def _write(self, data, output_file: str, name: str) -> int:
        if not data:
            logger.warning(f"No {name} data available for report generation")
            return 0
        df = pd.DataFrame(data)
        df.to_csv(output_file, index=False, encoding='utf-8')
        logger.info(f"Generated {name} report with {len(data)} rows: {output_file}")
        return len(data)

    def summary_lines(self):
        """Short text summary of every bet, as shown on the round page."""
        lines = [f"Round {self.report.round_id} - {self.report.status.value}"]
        lines.append(f"Skins: {self.formatter.skins_status(self.report.skins.results)}")
        won = SkinsEngine.winnings_by_player(self.report.skins.results)
        if won:
            lines.append("Skins won: " + ", ".join(
                f"{player_id} {self.formatter.money(amount)}" for player_id, amount in sorted(won.items())))
        for state in self.report.snakes.states:
            lines.append(self.formatter.snake_status(state))
        for state in self.report.matches.states:
            lines.append(f"Match {state.match_id} {state.team_id}: "
                         f"{self.formatter.match_status(state, self.total_holes)}")
        for issue in self.report.issues:
            lines.append(f"! {issue.kind.value}: {issue.message}")
        return lines

    def generate_all_reports(self, output_dir: str = "reports") -> Dict[str, int]:
        """Generate all reports into `output_dir`."""
        os.makedirs(output_dir, exist_ok=True)
        results = {
            'skins': self.generate_skins_report(os.path.join(output_dir, "skins.csv")),
            'snake': self.generate_snake_report(os.path.join(output_dir, "snake.csv")),
            'matches': self.generate_match_report(os.path.join(output_dir, "matches.csv")),
            'ledger': self.generate_ledger_report(os.path.join(output_dir, "ledger.csv")),
        }
        summary_file = os.path.join(output_dir, "summary.txt")
        with open(summary_file, 'w', encoding='utf-8') as f:
            f.write("\n".join(self.summary_lines()) + "\n")
        logger.info(f"Wrote round summary: {summary_file}")
        return results
