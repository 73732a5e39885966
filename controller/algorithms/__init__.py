"""Lift allocation algorithms"""

from typing import Dict, Type

from simulator.exceptions import InvalidConfigurationError
from ..interfaces.allocation_strategy import IAllocationStrategy
from .nearest_idle_lift import NearestIdleLiftStrategy

__all__ = ['NearestIdleLiftStrategy', 'STRATEGIES', 'create_strategy']


STRATEGIES: Dict[str, Type[IAllocationStrategy]] = {
    "NearestIdleLift": NearestIdleLiftStrategy,
}


def create_strategy(name: str, **kwargs) -> IAllocationStrategy:
    """Build an allocation strategy from its configuration name"""
    cls = STRATEGIES.get(name)
    if cls is None:
        raise InvalidConfigurationError(
            f"Unknown allocation strategy '{name}'. Available: {', '.join(STRATEGIES)}")
    return cls(**kwargs)
