"""
Nearest Idle Lift Strategy

Distance-based allocation that only considers idle lifts.
"""

from typing import Any, Dict, Optional
from ..interfaces.allocation_strategy import IAllocationStrategy


class NearestIdleLiftStrategy(IAllocationStrategy):
    """
    Nearest idle lift allocation strategy

    Selection Logic:
    - Only IDLE lifts are candidates
    - Score is abs(current_floor - requested_floor)
    - Ties go to the first lift in id order
    - No idle lift means no selection (the request waits in the queue)

    Usage:
        strategy = NearestIdleLiftStrategy()
        lift_id = strategy.select_lift(request_data, lift_statuses)
    """

    def __init__(self, verbose: bool = True):
        self.verbose = verbose

    def select_lift(
        self,
        request_data: Dict[str, Any],
        lift_statuses: Dict[int, Dict[str, Any]]
    ) -> Optional[int]:
        """
        Select the nearest idle lift

        Args:
            request_data: Floor request information
            lift_statuses: Current status of all lifts

        Returns:
            Id of the selected lift, or None if every lift is busy
        """
        request_floor = request_data['floor']

        best_lift = None
        best_distance = None

        for lift_id in sorted(lift_statuses):
            status = lift_statuses[lift_id]
            if status.get('status') != 'IDLE':
                continue

            distance = abs(status['floor'] - request_floor)

            # Strict comparison keeps the lowest id on ties
            if best_distance is None or distance < best_distance:
                best_distance = distance
                best_lift = lift_id

            if self.verbose:
                print(f"[Dispatcher] Lift_{lift_id}: Floor={status['floor']}, Distance={distance}")

        if self.verbose:
            if best_lift is None:
                print(f"[Dispatcher] No idle lift for floor {request_floor}")
            else:
                print(f"[Dispatcher] Selected Lift_{best_lift} with distance={best_distance}")

        return best_lift

    def get_strategy_name(self) -> str:
        """Return strategy name"""
        return "Nearest Idle Lift (Distance-based)"
