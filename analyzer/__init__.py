"""
Lift System Analyzer

This package provides recording and reporting tools for
lift dispatch runs.

Components:
- Statistics: Broadcast recorder with JSON Lines export and trajectory plots
"""

__version__ = "0.1.0"

from .statistics import Statistics

__all__ = ['Statistics']
