from contextlib import contextmanager
from typing import Dict, Optional, Union

from simulator.core.floor_request import Direction, FloorRequest
from simulator.core.floor_request_registry import FloorRequestRegistry
from simulator.core.lift import Lift
from simulator.core.pending_request_queue import PendingRequestQueue
from simulator.exceptions import PreconditionViolation
from simulator.infrastructure.message_broker import MessageBroker
from .algorithms.nearest_idle_lift import NearestIdleLiftStrategy
from .interfaces.allocation_strategy import IAllocationStrategy


class Dispatcher:
    """
    Dispatcher that assigns floor requests to idle lifts

    This is a controller, not a simulated entity. It owns the floor request
    registry and the pending request queue; lifts are only read for
    selection and driven through Lift.dispatch_to().

    Requests that find no idle lift wait in the pending queue. Each time a
    lift reports idle, the dispatcher clears the requests at that floor and
    tries to serve one pending request.
    """
    def __init__(self, name: str, broker: MessageBroker, num_floors: int,
                 strategy: IAllocationStrategy = None):
        self.name = name
        self.broker = broker
        self.num_floors = num_floors
        self.strategy = strategy or NearestIdleLiftStrategy()
        self.registry = FloorRequestRegistry(broker.env, num_floors, broker)
        self.pending_queue = PendingRequestQueue()
        self.lifts: Dict[int, Lift] = {}
        self._busy = False

        print(f"{self.broker.get_current_time():.2f} [{self.name}] Using strategy: {self.strategy.get_strategy_name()}")

    def register_lift(self, lift: Lift):
        """
        Register a lift under dispatcher management

        The idle report is handled synchronously, in the same step in which
        the lift becomes IDLE, so no press can observe the lift idle while
        its floor is still lit or the queue is undrained.
        """
        self.lifts[lift.lift_id] = lift
        self.broker.subscribe(self._idle_topic(lift.lift_id), self._on_idle_report)
        print(f"{self.broker.get_current_time():.2f} [{self.name}] {lift.name} registered.")

    def handle_floor_request(self, floor: int, direction: Union[Direction, str]) -> bool:
        """
        Single entry point for hall button presses.

        Returns:
            True if the request was accepted (assigned or queued),
            False if the same request was already active
        """
        try:
            direction = Direction.parse(direction)
        except ValueError as e:
            raise PreconditionViolation(str(e)) from e

        with self._exclusive():
            if not self.registry.submit(floor, direction):
                return False

            request = FloorRequest(floor, direction, requested_at=self.broker.get_current_time())
            lift_id = self.select_lift(request)
            if lift_id is not None:
                self._assign(lift_id, request, from_queue=False)
            else:
                self.pending_queue.enqueue(request)
                print(f"{self.broker.get_current_time():.2f} [{self.name}] All lifts busy. "
                      f"Queued floor {floor} {direction.name} (pending: {len(self.pending_queue)})")
                self.broker.put('dispatcher/queued', {
                    "timestamp": self.broker.get_current_time(),
                    "floor": floor,
                    "direction": direction.value,
                    "queue_length": len(self.pending_queue),
                })
            return True

    def select_lift(self, request: FloorRequest) -> Optional[int]:
        """Run the allocation strategy over current lift statuses"""
        request_data = {
            'floor': request.floor,
            'direction': request.direction.value,
            'timestamp': self.broker.get_current_time(),
        }
        return self.strategy.select_lift(request_data, self.lift_statuses())

    def lift_statuses(self) -> Dict[int, Dict]:
        return {
            lift_id: {'floor': lift.current_floor, 'status': lift.status.value}
            for lift_id, lift in self.lifts.items()
        }

    def on_lift_idle(self, lift_id: int, floor: int):
        """
        React to a lift finishing its door cycle at a floor.

        Both directions at the floor are satisfied at once. Then at most one
        pending request is served: if no lift can take it, it goes back to
        the head of the queue.
        """
        with self._exclusive():
            print(f"{self.broker.get_current_time():.2f} [{self.name}] Lift_{lift_id} idle at floor {floor}")
            self.registry.clear(floor, Direction.UP)
            self.registry.clear(floor, Direction.DOWN)
            for request in self.pending_queue.discard_floor(floor):
                print(f"{self.broker.get_current_time():.2f} [{self.name}] Dropped pending floor "
                      f"{request.floor} {request.direction.name}: served by Lift_{lift_id}")

            request = self.pending_queue.dequeue_one()
            if request is None:
                return

            selected = self.select_lift(request)
            if selected is None:
                self.pending_queue.requeue_front(request)
                print(f"{self.broker.get_current_time():.2f} [{self.name}] Still no idle lift for floor "
                      f"{request.floor} {request.direction.name}. Kept at head of queue.")
                return

            self._assign(selected, request, from_queue=True)

    def _assign(self, lift_id: int, request: FloorRequest, from_queue: bool):
        lift = self.lifts[lift_id]
        lift.dispatch_to(request.floor)
        print(f"{self.broker.get_current_time():.2f} [{self.name}] Assigned floor {request.floor} "
              f"{request.direction.name} to {lift.name}" + (" (from queue)" if from_queue else ""))
        self.broker.put('dispatcher/assignment', {
            "timestamp": self.broker.get_current_time(),
            "floor": request.floor,
            "direction": request.direction.value,
            "lift_id": lift_id,
            "from_queue": from_queue,
            "requested_at": request.requested_at,
        })

    def _on_idle_report(self, topic: str, message: dict):
        self.on_lift_idle(message["lift_id"], message["floor"])

    @staticmethod
    def _idle_topic(lift_id: int) -> str:
        return f"lift/{lift_id}/idle"

    @contextmanager
    def _exclusive(self):
        # Rejects re-entrant calls (e.g. from a notification callback) mid-mutation
        if self._busy:
            raise PreconditionViolation(f"{self.name} re-entered while handling another event")
        self._busy = True
        try:
            yield
        finally:
            self._busy = False
