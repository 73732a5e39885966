"""
Simulation Configuration

Building size, lift timings, door timings and the scripted floor requests
of a scenario. Bounds are checked in __post_init__ so no simulation state
is ever built from an invalid configuration.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from simulator.core.floor_request import Direction
from simulator.exceptions import InvalidConfigurationError

MIN_FLOORS = 2
MAX_FLOORS = 9
MIN_LIFTS = 1
MAX_LIFTS = 5


@dataclass
class BuildingConfig:
    """Building specifications"""
    num_floors: int = 5

    def __post_init__(self):
        if not isinstance(self.num_floors, int) or not (MIN_FLOORS <= self.num_floors <= MAX_FLOORS):
            raise InvalidConfigurationError(
                f"num_floors must be between {MIN_FLOORS} and {MAX_FLOORS}, got {self.num_floors}")


@dataclass
class LiftConfig:
    """Lift specifications"""
    num_lifts: int = 2
    time_per_floor: float = 2.0  # seconds

    def __post_init__(self):
        if not isinstance(self.num_lifts, int) or not (MIN_LIFTS <= self.num_lifts <= MAX_LIFTS):
            raise InvalidConfigurationError(
                f"num_lifts must be between {MIN_LIFTS} and {MAX_LIFTS}, got {self.num_lifts}")
        if self.time_per_floor <= 0:
            raise InvalidConfigurationError("time_per_floor must be positive")


@dataclass
class DoorConfig:
    """Door specifications"""
    open_time: float = 2.5  # seconds the doors stay open
    close_time: float = 2.5  # seconds

    def __post_init__(self):
        if self.open_time <= 0:
            raise InvalidConfigurationError("open_time must be positive")
        if self.close_time <= 0:
            raise InvalidConfigurationError("close_time must be positive")


@dataclass
class DispatchConfig:
    """Dispatcher settings"""
    strategy: str = "NearestIdleLift"

    def __post_init__(self):
        if not self.strategy:
            raise InvalidConfigurationError("dispatch.strategy cannot be empty")


@dataclass
class ScriptedRequest:
    """A hall button press replayed at a given simulation time"""
    time: float
    floor: int
    direction: str

    def __post_init__(self):
        if self.time < 0:
            raise InvalidConfigurationError(f"request time cannot be negative, got {self.time}")
        try:
            self.direction = Direction.parse(self.direction).value
        except ValueError as e:
            raise InvalidConfigurationError(str(e)) from e


@dataclass
class SimulationConfig:
    """
    Complete simulation configuration

    Combines building, lift, door and dispatch settings with the
    scripted requests of a scenario.
    """
    building: BuildingConfig = field(default_factory=BuildingConfig)
    lift: LiftConfig = field(default_factory=LiftConfig)
    door: DoorConfig = field(default_factory=DoorConfig)
    dispatch: DispatchConfig = field(default_factory=DispatchConfig)
    requests: List[ScriptedRequest] = field(default_factory=list)

    # Simulation control
    simulation_duration: Optional[float] = None  # None = run until every lift is idle
    realtime_factor: float = 0.0  # 1.0 = realtime, 0.0 = as fast as possible

    def __post_init__(self):
        if self.realtime_factor < 0:
            raise InvalidConfigurationError("realtime_factor cannot be negative")
        if self.simulation_duration is not None and self.simulation_duration <= 0:
            raise InvalidConfigurationError("simulation_duration must be positive")

    @classmethod
    def from_dict(cls, data: dict) -> 'SimulationConfig':
        """Create SimulationConfig from dictionary"""
        sim_data = (data or {}).get('simulation', data or {})

        building_data = sim_data.get('building', {})
        building = BuildingConfig(
            num_floors=building_data.get('num_floors', 5)
        )

        lift_data = sim_data.get('lift', {})
        lift = LiftConfig(
            num_lifts=lift_data.get('num_lifts', 2),
            time_per_floor=lift_data.get('time_per_floor', 2.0)
        )

        door_data = sim_data.get('door', {})
        door = DoorConfig(
            open_time=door_data.get('open_time', 2.5),
            close_time=door_data.get('close_time', 2.5)
        )

        dispatch_data = sim_data.get('dispatch', {})
        dispatch = DispatchConfig(
            strategy=dispatch_data.get('strategy', 'NearestIdleLift')
        )

        requests = []
        for entry in sim_data.get('requests') or []:
            try:
                requests.append(ScriptedRequest(
                    time=float(entry['time']),
                    floor=int(entry['floor']),
                    direction=entry['direction']
                ))
            except KeyError as e:
                raise InvalidConfigurationError(f"request entry {entry} is missing {e}") from e

        config = cls(
            building=building,
            lift=lift,
            door=door,
            dispatch=dispatch,
            requests=requests,
            simulation_duration=sim_data.get('simulation_duration'),
            realtime_factor=sim_data.get('realtime_factor', 0.0)
        )
        return config

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization"""
        result = {
            'simulation': {
                'building': {
                    'num_floors': self.building.num_floors
                },
                'lift': {
                    'num_lifts': self.lift.num_lifts,
                    'time_per_floor': self.lift.time_per_floor
                },
                'door': {
                    'open_time': self.door.open_time,
                    'close_time': self.door.close_time
                },
                'dispatch': {
                    'strategy': self.dispatch.strategy
                },
                'requests': [
                    {'time': r.time, 'floor': r.floor, 'direction': r.direction}
                    for r in self.requests
                ],
                'realtime_factor': self.realtime_factor
            }
        }

        if self.simulation_duration is not None:
            result['simulation']['simulation_duration'] = self.simulation_duration

        return result

    def validate(self):
        """Validate configuration consistency"""
        num_floors = self.building.num_floors
        for request in self.requests:
            if not (1 <= request.floor <= num_floors):
                raise InvalidConfigurationError(
                    f"request floor {request.floor} is outside 1-{num_floors}")
            if request.direction == Direction.UP.value and request.floor == num_floors:
                raise InvalidConfigurationError(f"top floor {num_floors} has no up button")
            if request.direction == Direction.DOWN.value and request.floor == 1:
                raise InvalidConfigurationError("floor 1 has no down button")

    def with_counts(self, num_floors: int, num_lifts: int) -> 'SimulationConfig':
        """Copy of this configuration with new floor and lift counts (timings kept)"""
        config = SimulationConfig(
            building=BuildingConfig(num_floors=num_floors),
            lift=LiftConfig(num_lifts=num_lifts, time_per_floor=self.lift.time_per_floor),
            door=DoorConfig(open_time=self.door.open_time, close_time=self.door.close_time),
            dispatch=DispatchConfig(strategy=self.dispatch.strategy),
            requests=[],
            simulation_duration=self.simulation_duration,
            realtime_factor=self.realtime_factor
        )
        config.validate()
        return config
