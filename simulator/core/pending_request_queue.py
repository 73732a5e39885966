"""
Pending Request Queue

Holds floor requests that arrived while no lift was idle.
"""

from collections import deque
from typing import Deque, Iterator, List, Optional

from .floor_request import FloorRequest


class PendingRequestQueue:
    """
    FIFO of floor requests waiting for an idle lift.

    Requests are served in arrival order. A request that was dequeued but
    still could not be served goes back to the head with requeue_front()
    so it keeps its place.
    """

    def __init__(self):
        self._requests: Deque[FloorRequest] = deque()

    def __len__(self) -> int:
        return len(self._requests)

    def __iter__(self) -> Iterator[FloorRequest]:
        return iter(list(self._requests))

    def __contains__(self, request: FloorRequest) -> bool:
        return request in self._requests

    def enqueue(self, request: FloorRequest):
        self._requests.append(request)

    def dequeue_one(self) -> Optional[FloorRequest]:
        """Remove and return the oldest request, or None if empty"""
        if not self._requests:
            return None
        return self._requests.popleft()

    def requeue_front(self, request: FloorRequest):
        self._requests.appendleft(request)

    def peek(self) -> Optional[FloorRequest]:
        return self._requests[0] if self._requests else None

    def discard_floor(self, floor: int) -> List[FloorRequest]:
        """
        Drop every queued request for a floor a lift has just serviced.

        Returns:
            The removed requests, in queue order
        """
        removed = [r for r in self._requests if r.floor == floor]
        if removed:
            self._requests = deque(r for r in self._requests if r.floor != floor)
        return removed
