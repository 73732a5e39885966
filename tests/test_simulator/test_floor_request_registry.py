"""
Floor Request Registry Tests
"""

import sys
from pathlib import Path

# Add project root to path for imports
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

import pytest
import simpy
from simulator.core.floor_request import Direction
from simulator.core.floor_request_registry import FloorRequestRegistry
from simulator.exceptions import PreconditionViolation
from simulator.infrastructure.message_broker import MessageBroker


def make_registry(num_floors=5):
    env = simpy.Environment()
    broker = MessageBroker(env, verbose=False)
    notifications = []
    broker.subscribe('*', lambda topic, message: notifications.append((topic, message)))
    return FloorRequestRegistry(env, num_floors, broker), notifications


def test_submit_lights_button_once():
    registry, notifications = make_registry()

    assert registry.submit(3, Direction.UP) is True
    assert registry.submit(3, Direction.UP) is False

    assert registry.is_active(3, Direction.UP)
    assert not registry.is_active(3, Direction.DOWN)
    assert notifications == [
        ('floor/3/request', {'timestamp': 0, 'floor': 3, 'direction': 'up', 'active': True})
    ]


def test_clear_notifies_only_active_buttons():
    registry, notifications = make_registry()
    registry.submit(2, Direction.DOWN)
    notifications.clear()

    assert registry.clear(2, Direction.UP) is False
    assert registry.clear(2, Direction.DOWN) is True
    assert registry.clear(2, Direction.DOWN) is False

    assert [m['active'] for _, m in notifications] == [False]
    assert not registry.is_active(2, Direction.DOWN)


def test_button_can_be_pressed_again_after_clear():
    registry, notifications = make_registry()
    registry.submit(4, Direction.UP)
    registry.clear(4, Direction.UP)
    assert registry.submit(4, Direction.UP) is True


def test_active_requests_snapshot():
    registry, _ = make_registry()
    registry.submit(4, Direction.DOWN)
    registry.submit(1, Direction.UP)
    registry.submit(4, Direction.UP)

    assert registry.active_requests() == [
        (1, Direction.UP), (4, Direction.UP), (4, Direction.DOWN)
    ]


def test_end_floors_have_one_button():
    registry, _ = make_registry(num_floors=5)
    assert not registry.has_button(5, Direction.UP)
    assert not registry.has_button(1, Direction.DOWN)
    assert registry.has_button(5, Direction.DOWN)
    assert registry.has_button(1, Direction.UP)


@pytest.mark.parametrize("floor,direction", [
    (5, Direction.UP),
    (1, Direction.DOWN),
    (0, Direction.UP),
    (6, Direction.DOWN),
])
def test_missing_button_is_a_precondition_violation(floor, direction):
    registry, notifications = make_registry(num_floors=5)
    with pytest.raises(PreconditionViolation):
        registry.submit(floor, direction)
    assert notifications == []
