"""
Nearest Idle Lift Strategy Tests

Pure selection over status snapshots, no simulation needed.
"""

import sys
from pathlib import Path

# Add project root to path for imports
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

import pytest
from controller.algorithms import NearestIdleLiftStrategy, create_strategy
from simulator.exceptions import InvalidConfigurationError


def statuses(*lifts):
    return {
        lift_id: {'floor': floor, 'status': status}
        for lift_id, (floor, status) in enumerate(lifts, start=1)
    }


@pytest.fixture
def strategy():
    return NearestIdleLiftStrategy(verbose=False)


def test_minimal_distance_wins(strategy):
    lifts = statuses((1, 'IDLE'), (5, 'IDLE'), (9, 'IDLE'))
    assert strategy.select_lift({'floor': 6, 'direction': 'up'}, lifts) == 2


def test_tie_breaks_on_lowest_id(strategy):
    lifts = statuses((3, 'IDLE'), (7, 'IDLE'))
    assert strategy.select_lift({'floor': 5, 'direction': 'down'}, lifts) == 1


def test_tie_break_does_not_depend_on_dict_order(strategy):
    lifts = {2: {'floor': 7, 'status': 'IDLE'}, 1: {'floor': 3, 'status': 'IDLE'}}
    assert strategy.select_lift({'floor': 5, 'direction': 'down'}, lifts) == 1


def test_only_idle_lifts_are_considered(strategy):
    lifts = statuses((6, 'MOVING'), (6, 'DOORS_OPEN'), (1, 'IDLE'))
    assert strategy.select_lift({'floor': 6, 'direction': 'up'}, lifts) == 3


def test_no_idle_lift_returns_none(strategy):
    lifts = statuses((2, 'MOVING'), (4, 'DOORS_CLOSING'))
    assert strategy.select_lift({'floor': 3, 'direction': 'up'}, lifts) is None
    assert strategy.select_lift({'floor': 3, 'direction': 'up'}, {}) is None


def test_create_strategy_by_name():
    assert isinstance(create_strategy("NearestIdleLift", verbose=False), NearestIdleLiftStrategy)
    with pytest.raises(InvalidConfigurationError):
        create_strategy("Unknown")
