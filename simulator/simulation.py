"""
LiftSimulation - one owned simulation run

Builds the SimPy environment, broker, lifts and dispatcher from a
SimulationConfig, and is the inbound surface for the presentation layer:
configure(), submit_floor_request(), run() and reset().
"""

import simpy
from typing import List, Optional, Union

from config.simulation import SimulationConfig
from controller.algorithms import create_strategy
from controller.dispatcher import Dispatcher
from controller.interfaces.allocation_strategy import IAllocationStrategy
from .core.floor_request import Direction
from .core.lift import Lift
from .exceptions import PreconditionViolation
from .infrastructure.message_broker import MessageBroker
from .infrastructure.realtime_env import RealtimeEnvironment


class LiftSimulation:
    """
    A multi-lift simulation built from a SimulationConfig.

    Every configure() or reset() discards the previous environment and
    starts again with all lifts idle at floor 1 and no active requests.

    Usage:
        sim = LiftSimulation()
        sim.configure(floors=6, lifts=2)
        sim.broker.subscribe('*', renderer.on_notification)
        sim.submit_floor_request(4, 'up')
        sim.run()
    """

    def __init__(self, config: SimulationConfig = None, strategy: IAllocationStrategy = None,
                 verbose: bool = True):
        """
        Args:
            config: Simulation configuration (defaults: 5 floors, 2 lifts)
            strategy: Allocation strategy overriding config.dispatch.strategy
            verbose: Print broker traffic
        """
        self.config = config if config is not None else SimulationConfig()
        self.config.validate()
        self.strategy = strategy
        self.verbose = verbose

        self.env: Optional[simpy.Environment] = None
        self.broker: Optional[MessageBroker] = None
        self.dispatcher: Optional[Dispatcher] = None
        self.lifts: List[Lift] = []
        self.run_count = 0

        self.reset()

    @property
    def num_floors(self) -> int:
        return self.config.building.num_floors

    @property
    def num_lifts(self) -> int:
        return self.config.lift.num_lifts

    def configure(self, floors: int, lifts: int):
        """
        Rebuild the simulation for a new building size.

        Raises:
            InvalidConfigurationError: If floors is outside 2-9 or lifts outside 1-5.
                The current run is left untouched in that case.
        """
        self.config = self.config.with_counts(floors, lifts)
        self.reset()

    def reset(self):
        """Tear down the current run and build a fresh one from self.config"""
        if self.config.realtime_factor > 0:
            self.env = RealtimeEnvironment(realtime_factor=self.config.realtime_factor)
        else:
            self.env = simpy.Environment()
        self.broker = MessageBroker(self.env, verbose=self.verbose)

        strategy = self.strategy or create_strategy(self.config.dispatch.strategy, verbose=self.verbose)
        self.dispatcher = Dispatcher("Dispatcher", self.broker, self.num_floors, strategy)

        self.lifts = []
        for lift_id in range(1, self.num_lifts + 1):
            lift = Lift(
                self.env, lift_id, self.broker, self.num_floors,
                time_per_floor=self.config.lift.time_per_floor,
                door_open_time=self.config.door.open_time,
                door_close_time=self.config.door.close_time
            )
            self.lifts.append(lift)
            self.dispatcher.register_lift(lift)

        for request in self.config.requests:
            self.schedule_floor_request(request.time, request.floor, request.direction)

        self.run_count += 1
        print(f"{self.env.now:.2f} [Simulation] Ready: {self.num_floors} floors, {self.num_lifts} lifts")

    def submit_floor_request(self, floor: int, direction: Union[Direction, str]) -> bool:
        """
        Press a hall button now.

        Returns:
            True if the request is new, False if the button was already lit
        """
        return self.dispatcher.handle_floor_request(floor, direction)

    def schedule_floor_request(self, at: float, floor: int, direction: Union[Direction, str]):
        """Press a hall button at simulation time `at`"""
        if at < self.env.now:
            raise PreconditionViolation(f"Cannot schedule a request in the past ({at} < {self.env.now})")
        return self.env.process(self._delayed_request(at, floor, direction))

    def _delayed_request(self, at: float, floor: int, direction: Union[Direction, str]):
        yield self.env.timeout(at - self.env.now)
        # Timers that elapse at the same instant complete before the press
        yield self.env.timeout(0)
        self.submit_floor_request(floor, direction)

    def run(self, until: Optional[float] = None):
        """
        Advance simulated time.

        Args:
            until: Stop at this time. None runs until no trip is left in flight.
        """
        if until is None:
            until = self.config.simulation_duration
        self.env.run(until=until)

    def get_lift(self, lift_id: int) -> Lift:
        for lift in self.lifts:
            if lift.lift_id == lift_id:
                return lift
        raise PreconditionViolation(f"No lift with id {lift_id}")

    def is_request_active(self, floor: int, direction: Union[Direction, str]) -> bool:
        """Button highlight state for the presentation layer"""
        return self.dispatcher.registry.is_active(floor, Direction.parse(direction))

    def all_idle(self) -> bool:
        return all(lift.is_idle() for lift in self.lifts) and len(self.dispatcher.pending_queue) == 0

    def metadata(self) -> dict:
        """Run description written at the top of event logs"""
        return {
            'num_floors': self.num_floors,
            'num_lifts': self.num_lifts,
            'time_per_floor': self.config.lift.time_per_floor,
            'door_open_time': self.config.door.open_time,
            'door_close_time': self.config.door.close_time,
            'strategy': self.dispatcher.strategy.get_strategy_name(),
        }
