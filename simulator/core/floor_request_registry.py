import simpy
from typing import Dict, List, Tuple

from ..exceptions import PreconditionViolation
from ..infrastructure.message_broker import MessageBroker
from .floor_request import Direction


class FloorRequestRegistry:
    """
    Hall button lights for every floor (with state management functionality)

    One UP and one DOWN flag per floor. A flag is the source of truth for
    "is this button currently lit"; the top floor has no UP button and
    floor 1 has no DOWN button.
    """
    def __init__(self, env: simpy.Environment, num_floors: int, broker: MessageBroker):
        """
        Args:
            env (simpy.Environment): SimPy environment
            num_floors (int): Number of floors (1-indexed)
            broker (MessageBroker): Message broker for button light notifications
        """
        self.env = env
        self.num_floors = num_floors
        self.broker = broker
        self._flags: Dict[int, Dict[Direction, bool]] = {
            floor: {Direction.UP: False, Direction.DOWN: False}
            for floor in range(1, num_floors + 1)
        }

    def has_button(self, floor: int, direction: Direction) -> bool:
        """Check whether a (floor, direction) button exists in this building"""
        if floor < 1 or floor > self.num_floors:
            return False
        if direction is Direction.UP:
            return floor < self.num_floors
        return floor > 1

    def _check_button(self, floor: int, direction: Direction):
        if not self.has_button(floor, direction):
            raise PreconditionViolation(
                f"No {direction.name} button at floor {floor} (floors 1-{self.num_floors})")

    def is_active(self, floor: int, direction: Direction) -> bool:
        """Check if the button is lit"""
        self._check_button(floor, direction)
        return self._flags[floor][direction]

    def submit(self, floor: int, direction: Direction) -> bool:
        """
        Light the button for a new request.

        Returns:
            True if this press created a new active request,
            False if the button was already lit (duplicate press)
        """
        self._check_button(floor, direction)
        if self._flags[floor][direction]:
            print(f"{self.env.now:.2f} [Registry] Button at floor {floor} ({direction.name}) already lit. Ignored.")
            return False

        self._flags[floor][direction] = True
        print(f"{self.env.now:.2f} [Registry] Button pressed at floor {floor} ({direction.name}). Light ON.")
        self._publish(floor, direction, True)
        return True

    def clear(self, floor: int, direction: Direction) -> bool:
        """
        Turn the button off once a lift finished its door cycle at the floor.

        Returns:
            True if the button was lit and is now off
        """
        if not self.has_button(floor, direction):
            return False
        if not self._flags[floor][direction]:
            return False

        self._flags[floor][direction] = False
        print(f"{self.env.now:.2f} [Registry] Request served at floor {floor} ({direction.name}). Light OFF.")
        self._publish(floor, direction, False)
        return True

    def active_requests(self) -> List[Tuple[int, Direction]]:
        """Snapshot of all lit buttons, ordered by floor then UP before DOWN"""
        return [
            (floor, direction)
            for floor in range(1, self.num_floors + 1)
            for direction in (Direction.UP, Direction.DOWN)
            if self._flags[floor][direction]
        ]

    def _publish(self, floor: int, direction: Direction, active: bool):
        message = {
            "timestamp": self.env.now,
            "floor": floor,
            "direction": direction.value,
            "active": active,
        }
        self.broker.put(f"floor/{floor}/request", message)
