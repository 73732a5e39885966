"""
Lift Dispatch Controller

This package provides the dispatcher and the allocation strategies that
assign floor requests to lifts.
"""

__version__ = "0.1.0"

from .dispatcher import Dispatcher

__all__ = ['Dispatcher']
