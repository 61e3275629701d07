"""
Reports package for the side-bet system.
"""

from .report_generator import ReportGenerator
from .status_formatter import StatusFormatter

__all__ = ['ReportGenerator', 'StatusFormatter']
