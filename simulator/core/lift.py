import simpy
from enum import Enum
from typing import Optional

from ..exceptions import PreconditionViolation
from ..infrastructure.message_broker import MessageBroker
from .entity import Entity


class LiftStatus(Enum):
    """Closed set of lift states. Only IDLE accepts a destination."""
    IDLE = "IDLE"
    MOVING = "MOVING"
    DOORS_OPENING = "DOORS_OPENING"
    DOORS_OPEN = "DOORS_OPEN"
    DOORS_CLOSING = "DOORS_CLOSING"


class DoorState(Enum):
    """Door states reported to observers"""
    OPENING = "OPENING"
    OPEN = "OPEN"
    CLOSING = "CLOSING"
    CLOSED = "CLOSED"


# Door state that each lift status implies (MOVING keeps doors closed, no report)
_DOOR_STATE_FOR_STATUS = {
    LiftStatus.DOORS_OPENING: DoorState.OPENING,
    LiftStatus.DOORS_OPEN: DoorState.OPEN,
    LiftStatus.DOORS_CLOSING: DoorState.CLOSING,
    LiftStatus.IDLE: DoorState.CLOSED,
}


class Lift(Entity):
    """
    Lift that serves one destination at a time.

    Trip sequence:
        IDLE -> MOVING -> DOORS_OPENING -> DOORS_OPEN -> DOORS_CLOSING -> IDLE

    A destination equal to the current floor skips MOVING and only cycles
    the doors. Every transition is published on the broker; reaching IDLE
    also publishes lift/<id>/idle, which the dispatcher listens to.
    """

    def __init__(self, env: simpy.Environment, lift_id: int, broker: MessageBroker, num_floors: int,
                 time_per_floor: float = 2.0, door_open_time: float = 2.5, door_close_time: float = 2.5,
                 initial_floor: int = 1):
        """
        Args:
            env: SimPy environment
            lift_id: Stable identifier (1..N)
            broker: Message broker for notifications
            num_floors: Number of floors served (1-indexed)
            time_per_floor: Travel time per floor (seconds)
            door_open_time: Time the doors stay open (seconds)
            door_close_time: Time the doors take to close (seconds)
            initial_floor: Floor the lift rests at when created
        """
        self.lift_id = lift_id
        self.broker = broker
        self.num_floors = num_floors
        self.time_per_floor = time_per_floor
        self.door_open_time = door_open_time
        self.door_close_time = door_close_time
        self.current_floor = initial_floor
        self.target_floor: Optional[int] = None
        self.trips_completed = 0

        super().__init__(env, f"Lift_{lift_id}", initial_state=LiftStatus.IDLE)
        self._destination_event = self.env.event()

    @property
    def status(self) -> LiftStatus:
        return self.state

    def is_idle(self) -> bool:
        return self.state is LiftStatus.IDLE

    def travel_time(self, target_floor: int) -> float:
        """Seconds needed to travel from the current floor to target_floor"""
        return abs(target_floor - self.current_floor) * self.time_per_floor

    def dispatch_to(self, target_floor: int):
        """
        Assign a destination. The lift leaves IDLE immediately.

        Raises:
            PreconditionViolation: If the lift is not IDLE or the floor does not exist
        """
        if not self.is_idle():
            raise PreconditionViolation(
                f"{self.name} is {self.state.name}; a destination can only be assigned while IDLE")
        if target_floor < 1 or target_floor > self.num_floors:
            raise PreconditionViolation(
                f"Invalid target floor {target_floor} for {self.name} (floors 1-{self.num_floors})")

        self.target_floor = target_floor
        print(f"{self.env.now:.2f} [{self.name}] Dispatched: {self.current_floor}F -> {target_floor}F")
        self._publish_busy(True)

        if target_floor == self.current_floor:
            self.set_state(LiftStatus.DOORS_OPENING)
        else:
            travel_time = self.travel_time(target_floor)
            self.set_state(LiftStatus.MOVING)
            self._publish_position(target_floor, travel_time)

        self._destination_event.succeed(target_floor)

    def run(self):
        """Main process: wait for a destination, travel, cycle the doors"""
        while True:
            target_floor = yield self._destination_event
            self._destination_event = self.env.event()

            if self.state is LiftStatus.MOVING:
                yield self.env.timeout(self.travel_time(target_floor))
                # Floor and status change together on arrival
                self.current_floor = target_floor
                self.set_state(LiftStatus.DOORS_OPENING)

            yield from self._door_cycle()

            self.target_floor = None
            self.trips_completed += 1
            self.set_state(LiftStatus.IDLE)
            self._publish_busy(False)
            self.broker.put(f"lift/{self.lift_id}/idle", {
                "timestamp": self.env.now,
                "lift_id": self.lift_id,
                "floor": self.current_floor,
            })

    def _door_cycle(self):
        self.set_state(LiftStatus.DOORS_OPEN)
        yield self.env.timeout(self.door_open_time)
        self.set_state(LiftStatus.DOORS_CLOSING)
        yield self.env.timeout(self.door_close_time)

    def _on_state_changed(self, old_state, new_state):
        super()._on_state_changed(old_state, new_state)
        self._report_status()
        door_state = _DOOR_STATE_FOR_STATUS.get(new_state)
        if door_state is not None:
            self._publish_door(door_state)

    def _report_status(self):
        self.broker.put(f"lift/{self.lift_id}/status", {
            "timestamp": self.env.now,
            "lift_id": self.lift_id,
            "floor": self.current_floor,
            "status": self.state.value,
            "target_floor": self.target_floor,
        })

    def _publish_position(self, floor: int, travel_time: float):
        self.broker.put(f"lift/{self.lift_id}/position", {
            "timestamp": self.env.now,
            "lift_id": self.lift_id,
            "floor": floor,
            "travel_duration_ms": int(round(travel_time * 1000)),
        })

    def _publish_door(self, door_state: DoorState):
        self.broker.put(f"lift/{self.lift_id}/door", {
            "timestamp": self.env.now,
            "lift_id": self.lift_id,
            "state": door_state.value,
        })

    def _publish_busy(self, is_busy: bool):
        self.broker.put(f"lift/{self.lift_id}/busy", {
            "timestamp": self.env.now,
            "lift_id": self.lift_id,
            "is_busy": is_busy,
        })
