"""
Floor request types

A floor request is a (floor, direction) pair created by a hall button press.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Union


class Direction(Enum):
    """Hall button direction"""
    UP = "up"
    DOWN = "down"

    @classmethod
    def parse(cls, value: Union["Direction", str]) -> "Direction":
        """
        Accept a Direction or its name/value ("UP", "up", "Down", ...)

        Raises:
            ValueError: If the value is not a known direction
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown direction '{value}'. Must be 'up' or 'down'") from None


@dataclass(frozen=True)
class FloorRequest:
    """
    An unserved hall call.

    Attributes:
        floor: Floor where the button was pressed (1-indexed)
        direction: Requested travel direction
        requested_at: Simulation time of the press (not part of equality)
    """
    floor: int
    direction: Direction
    requested_at: float = field(default=0.0, compare=False)

    def to_dict(self) -> dict:
        return {
            'floor': self.floor,
            'direction': self.direction.value,
            'requested_at': self.requested_at,
        }
