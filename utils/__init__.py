"""
Utility functions package for the side-bet system.
"""

from .handicap_utils import HandicapUtils
from .money_utils import MoneyUtils

__all__ = ['HandicapUtils', 'MoneyUtils']
