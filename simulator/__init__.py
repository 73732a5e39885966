"""
Lift Simulator - Core simulation engine

This package provides the lift state machine, the floor request registry
and pending queue, and the SimPy infrastructure they run on.
LiftSimulation lives in simulator.simulation.
"""

__version__ = "0.1.0"

from .core.lift import Lift, LiftStatus, DoorState
from .core.floor_request import Direction, FloorRequest
from .core.floor_request_registry import FloorRequestRegistry
from .core.pending_request_queue import PendingRequestQueue
from .core.entity import Entity

from .infrastructure.message_broker import MessageBroker
from .infrastructure.realtime_env import RealtimeEnvironment

from .exceptions import InvalidConfigurationError, PreconditionViolation

__all__ = [
    'Lift',
    'LiftStatus',
    'DoorState',
    'Direction',
    'FloorRequest',
    'FloorRequestRegistry',
    'PendingRequestQueue',
    'Entity',
    'MessageBroker',
    'RealtimeEnvironment',
    'InvalidConfigurationError',
    'PreconditionViolation',
]
