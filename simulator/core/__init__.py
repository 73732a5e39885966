"""Core simulation entities"""

from .entity import Entity
from .lift import Lift, LiftStatus, DoorState
from .floor_request import Direction, FloorRequest
from .floor_request_registry import FloorRequestRegistry
from .pending_request_queue import PendingRequestQueue

__all__ = [
    'Entity',
    'Lift',
    'LiftStatus',
    'DoorState',
    'Direction',
    'FloorRequest',
    'FloorRequestRegistry',
    'PendingRequestQueue',
]
