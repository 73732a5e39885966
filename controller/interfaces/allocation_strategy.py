"""
Allocation Strategy Interface

Defines how a lift is selected for a floor request.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class IAllocationStrategy(ABC):
    """
    Interface for lift allocation strategies

    Strategies only read lift status snapshots; assigning the destination
    is left to the dispatcher.
    """

    @abstractmethod
    def select_lift(
        self,
        request_data: Dict[str, Any],
        lift_statuses: Dict[int, Dict[str, Any]]
    ) -> Optional[int]:
        """
        Select a lift for a floor request

        Args:
            request_data: Floor request information
                {
                    'floor': int,          # Requested floor
                    'direction': str,      # 'up' or 'down'
                    'timestamp': float     # Simulation time
                }

            lift_statuses: Current status of all lifts, keyed by lift id
                {
                    1: {
                        'floor': int,      # Current (last resting) floor
                        'status': str,     # LiftStatus value, e.g. 'IDLE'
                    },
                    ...
                }

        Returns:
            Selected lift id, or None if no lift can take the request now
        """
        pass

    @abstractmethod
    def get_strategy_name(self) -> str:
        """
        Get the name of this strategy (for logging)
        """
        pass
