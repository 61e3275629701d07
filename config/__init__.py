"""
Configuration package for the side-bet system.
"""

from .config_manager import ConfigManager

__all__ = ['ConfigManager']
