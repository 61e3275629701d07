"""
Score feed adapter for the side-bet system.

Verified scores arrive either as a CSV export from the score-entry system or
from its HTTP endpoint. Both are normalized into HoleScore facts here.
"""

import logging
from datetime import datetime, timedelta
from typing import Any, List, Optional

import pandas as pd
import requests

from models.score import HoleScore
from utils.handicap_utils import HandicapUtils

logger = logging.getLogger(__name__)

FALLBACK_EPOCH = datetime(1970, 1, 1)


class ScoreFeed:
    """Loads hole scores from CSV files or the score-entry web API."""

    def __init__(self, base_url: Optional[str] = None, timeout: int = 30,
                 session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip('/') if base_url else None
        self.timeout = timeout
        self.session = session or requests.Session()
        self.rejected_rows = 0

    def load_scores_from_csv(self, csv_file: str, round_id: Optional[str] = None) -> List[HoleScore]:
        """
        Load scores from a CSV file.
        Returns the scores that could be parsed; malformed rows are skipped.
        """
        try:
            df = pd.read_csv(csv_file)
            logger.info(f"Loaded score CSV with {len(df)} rows")
        except Exception as e:
            logger.error(f"Error loading score CSV file: {e}")
            return []
        return self._scores_from_frame(df, round_id)

    def fetch_scores(self, round_id: str) -> List[HoleScore]:
        """Fetch the scores of a round from the score endpoint."""
        if not self.base_url:
            logger.warning("No score feed base URL configured")
            return []

        url = f"{self.base_url}/rounds/{round_id}/scores"
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.error(f"Error fetching scores for round {round_id}: {e}")
            return []

        records = payload.get('scores', []) if isinstance(payload, dict) else payload
        if not records:
            logger.info(f"No scores posted yet for round {round_id}")
            return []
        return self._scores_from_frame(pd.DataFrame(records), round_id)

    def _scores_from_frame(self, df: pd.DataFrame, round_id: Optional[str]) -> List[HoleScore]:
        scores = []
        self.rejected_rows = 0
        for index, row in df.iterrows():
            score = self._row_to_score(row, index, round_id)
            if score is None:
                self.rejected_rows += 1
                continue
            scores.append(score)
        if self.rejected_rows:
            logger.warning(f"Skipped {self.rejected_rows} malformed score rows")
        logger.info(f"Parsed {len(scores)} hole scores")
        return scores

    def _row_to_score(self, row: pd.Series, index: int, round_id: Optional[str]) -> Optional[HoleScore]:
        """Convert one feed row into a HoleScore, or None if it cannot be used."""
        player_id = row.get('player_id')
        hole_number = row.get('hole_number')
        gross = row.get('gross_strokes')

        # Skip if essential fields are missing
        if pd.isna(player_id) or pd.isna(hole_number) or pd.isna(gross):
            return None

        try:
            hole_number = int(hole_number)
            gross = int(gross)
            net = self._net_strokes(row, gross)
            putts = _optional_int(row.get('putts'))
            timestamp = self._timestamp(row.get('timestamp'), index)
        except (ValueError, TypeError) as e:
            logger.warning(f"Could not parse score row {index} for player {player_id}: {e}")
            return None

        return HoleScore(
            player_id=str(player_id),
            hole_number=hole_number,
            gross_strokes=gross,
            net_strokes=net,
            timestamp=timestamp,
            putts=putts,
            round_id=round_id,
        )

    @staticmethod
    def _net_strokes(row: pd.Series, gross: int) -> int:
        """Net strokes from the row, else derived from the handicap columns, else gross."""
        net = _optional_int(row.get('net_strokes'))
        if net is not None:
            return net
        course_handicap = _optional_int(row.get('course_handicap'))
        if course_handicap is None:
            course_handicap = _course_handicap(row.get('handicap_index'), row.get('slope_rating'))
        stroke_index = _optional_int(row.get('stroke_index'))
        if course_handicap is not None and stroke_index is not None:
            return HandicapUtils.net_score(gross, course_handicap, stroke_index)
        return gross

    @staticmethod
    def _timestamp(value: Any, index: int) -> datetime:
        """Naive UTC timestamp; rows without one are ordered by position."""
        if value is None or pd.isna(value):
            return FALLBACK_EPOCH + timedelta(seconds=int(index))
        stamp = pd.Timestamp(value)
        if stamp.tzinfo is not None:
            stamp = stamp.tz_convert('UTC').tz_localize(None)
        return stamp.to_pydatetime()


def _optional_int(value: Any) -> Optional[int]:
    if value is None or pd.isna(value):
        return None
    return int(float(value))


def _course_handicap(handicap_index: Any, slope_rating: Any) -> Optional[int]:
    if handicap_index is None or slope_rating is None or pd.isna(handicap_index) or pd.isna(slope_rating):
        return None
    return HandicapUtils.course_handicap(float(handicap_index), float(slope_rating))
