"""
Score history package for the side-bet settlement system.
"""

from .score_history import ScoreHistory
from .score_snapshot import ScoreSnapshot
from .freeze import derive_with_freeze, late_corrections, late_facts

__all__ = ['ScoreHistory', 'ScoreSnapshot', 'derive_with_freeze', 'late_corrections', 'late_facts']
