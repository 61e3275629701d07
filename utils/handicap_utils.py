"""
Handicap utilities used to derive net strokes from gross strokes.
"""

import math


class HandicapUtils:
    """Course handicap and per-hole stroke allocation."""

    @staticmethod
    def course_handicap(handicap_index: float, slope_rating: float) -> int:
        """Course handicap from a handicap index and slope rating, never negative."""
        return max(int(round(handicap_index * slope_rating / 113)), 0)

    @staticmethod
    def strokes_received(course_handicap: int, stroke_index: int) -> int:
        """
        Strokes a player receives on a hole.

        Holes are allocated strokes in order of their stroke index (1 is the
        hardest); handicaps above 18 start a second pass.
        """
        if course_handicap < stroke_index:
            return 0
        return 1 + math.floor((course_handicap - stroke_index) / 18)

    @staticmethod
    def net_score(gross_strokes: int, course_handicap: int, stroke_index: int) -> int:
        return gross_strokes - HandicapUtils.strokes_received(course_handicap, stroke_index)
