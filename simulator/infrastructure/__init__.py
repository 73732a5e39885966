"""Notification broker and wall-clock pacing shared by the lift simulation"""

from .message_broker import MessageBroker
from .realtime_env import RealtimeEnvironment

__all__ = [
    'MessageBroker',
    'RealtimeEnvironment',
]

