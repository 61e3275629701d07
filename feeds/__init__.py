"""
Score feed package for the side-bet system.
"""

from .score_feed import ScoreFeed

__all__ = ['ScoreFeed']
