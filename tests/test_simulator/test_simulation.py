"""
LiftSimulation Tests

End-to-end runs through the public surface: configure, submit,
run and reset, observed through broker notifications.
"""

import sys
from pathlib import Path

# Add project root to path for imports
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

import pytest
import simpy
from config.simulation import BuildingConfig, DoorConfig, LiftConfig, ScriptedRequest, SimulationConfig
from simulator.core.lift import LiftStatus
from simulator.exceptions import InvalidConfigurationError
from simulator.infrastructure.realtime_env import RealtimeEnvironment
from simulator.simulation import LiftSimulation


def make_simulation(floors=5, lifts=2, **kwargs):
    config = SimulationConfig(
        building=BuildingConfig(num_floors=floors),
        lift=LiftConfig(num_lifts=lifts),
        **kwargs
    )
    return LiftSimulation(config, verbose=False)


def record(simulation):
    notifications = []
    simulation.broker.subscribe('*', lambda topic, message: notifications.append((topic, message)))
    return notifications


def test_default_simulation_starts_idle():
    simulation = LiftSimulation(verbose=False)
    assert simulation.num_floors == 5
    assert simulation.num_lifts == 2
    assert all(lift.status is LiftStatus.IDLE and lift.current_floor == 1 for lift in simulation.lifts)
    assert simulation.all_idle()


def test_full_cycle_clears_request_once_and_returns_idle():
    simulation = make_simulation(floors=6, lifts=1)
    notifications = record(simulation)

    simulation.submit_floor_request(4, 'down')
    assert simulation.is_request_active(4, 'down')
    simulation.run()

    request_events = [(m['direction'], m['active']) for t, m in notifications if t == 'floor/4/request']
    assert request_events == [('down', True), ('down', False)]
    assert not simulation.is_request_active(4, 'down')
    assert simulation.get_lift(1).status is LiftStatus.IDLE
    assert simulation.get_lift(1).current_floor == 4


def test_same_floor_request_cycles_doors_only():
    simulation = make_simulation(floors=5, lifts=1)
    notifications = record(simulation)

    simulation.submit_floor_request(1, 'up')
    simulation.run()

    statuses = [m['status'] for t, m in notifications if t == 'lift/1/status']
    assert statuses == ['DOORS_OPENING', 'DOORS_OPEN', 'DOORS_CLOSING', 'IDLE']
    assert simulation.env.now == pytest.approx(5.0)
    assert not simulation.is_request_active(1, 'up')


def test_no_request_is_lost_when_all_lifts_busy():
    simulation = make_simulation(floors=9, lifts=3)
    for floor in (4, 6, 8):
        simulation.submit_floor_request(floor, 'down')
    assert not any(lift.is_idle() for lift in simulation.lifts)

    simulation.submit_floor_request(2, 'up')
    assert len(simulation.dispatcher.pending_queue) == 1

    simulation.run()

    assert simulation.all_idle()
    assert simulation.dispatcher.registry.active_requests() == []
    assert 2 in [lift.current_floor for lift in simulation.lifts]


def test_scripted_requests_are_replayed():
    simulation = make_simulation(floors=5, lifts=1, requests=[
        ScriptedRequest(time=1.0, floor=3, direction='up'),
        ScriptedRequest(time=2.0, floor=5, direction='down'),
    ])

    simulation.run(until=1.5)
    assert simulation.get_lift(1).target_floor == 3

    simulation.run()
    assert simulation.get_lift(1).current_floor == 5
    # 3F at 1+4, doors to 10, 5F at 14, doors to 19
    assert simulation.env.now == pytest.approx(19.0)


def test_configure_rebuilds_fresh_run():
    simulation = make_simulation(floors=5, lifts=1)
    simulation.submit_floor_request(4, 'up')
    simulation.run(until=3.0)

    simulation.configure(floors=8, lifts=3)

    assert simulation.num_floors == 8
    assert len(simulation.lifts) == 3
    assert simulation.env.now == 0
    assert all(lift.is_idle() and lift.current_floor == 1 for lift in simulation.lifts)
    assert simulation.dispatcher.registry.active_requests() == []
    assert simulation.config.lift.time_per_floor == 2.0


@pytest.mark.parametrize("floors,lifts", [(1, 1), (10, 2), (5, 0), (5, 6)])
def test_configure_rejects_out_of_bounds(floors, lifts):
    simulation = make_simulation(floors=5, lifts=2)
    with pytest.raises(InvalidConfigurationError):
        simulation.configure(floors=floors, lifts=lifts)
    # Previous run untouched
    assert simulation.num_floors == 5
    assert len(simulation.lifts) == 2


def test_reset_discards_in_flight_trips():
    simulation = make_simulation(floors=5, lifts=1)
    simulation.submit_floor_request(5, 'down')
    simulation.run(until=2.0)
    old_env = simulation.env

    simulation.reset()

    assert simulation.env is not old_env
    assert simulation.get_lift(1).is_idle()
    assert simulation.submit_floor_request(5, 'down') is True


def test_custom_timings_are_used():
    simulation = make_simulation(floors=5, lifts=1, door=DoorConfig(open_time=1.0, close_time=0.5))
    simulation.config.lift.time_per_floor = 3.0
    simulation.reset()

    simulation.submit_floor_request(3, 'up')
    simulation.run()
    # 2 floors * 3.0 + 1.0 + 0.5
    assert simulation.env.now == pytest.approx(7.5)


def test_realtime_factor_selects_realtime_environment():
    assert type(make_simulation().env) is simpy.Environment

    simulation = make_simulation(floors=2, lifts=1, realtime_factor=1000.0)
    assert isinstance(simulation.env, RealtimeEnvironment)
    simulation.submit_floor_request(2, 'down')
    simulation.run()
    assert simulation.get_lift(1).current_floor == 2


def test_realtime_environment_speed_control():
    env = RealtimeEnvironment(realtime_factor=2.0)
    assert env.get_speed() == 2.0
    env.set_speed(0.0)
    assert env.get_speed() == 0.0
    with pytest.raises(ValueError):
        env.set_speed(-1.0)
    with pytest.raises(ValueError):
        RealtimeEnvironment(realtime_factor=-0.5)
