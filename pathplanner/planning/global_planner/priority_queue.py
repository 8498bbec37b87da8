"""
Min-priority queue with lazy deletion.
Duplicate pushes stand in for decrease-key; planners discard stale entries on pop.
"""

import heapq
from typing import Generic, List, Optional, Tuple, TypeVar

T = TypeVar('T')


class PriorityQueue(Generic[T]):
    """
    Binary min-heap over (priority, payload) pairs.

    Stale entries are never removed proactively. Equal priorities are
    ordered by payload comparison, so payloads must be orderable.
    """

    def __init__(self):
        self._heap: List[Tuple[float, T]] = []
        self.pushes = 0
        self.pops = 0

    def push(self, priority: float, payload: T):
        heapq.heappush(self._heap, (priority, payload))
        self.pushes += 1

    def pop(self) -> Optional[Tuple[float, T]]:
        """Remove and return the minimum entry, or None when empty."""
        if not self._heap:
            return None

        self.pops += 1
        return heapq.heappop(self._heap)

    def peek(self) -> Optional[Tuple[float, T]]:
        return self._heap[0] if self._heap else None

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)
