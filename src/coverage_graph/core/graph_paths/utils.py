"""
Utility functions for path finding operations.
"""

import gc
import logging
import math
import os
import time
from heapq import heappop, heappush
from numbers import Real
from typing import Dict, List, Optional, Tuple

import psutil

from ..types import Solution

logger = logging.getLogger(__name__)


def is_better_cost(new_cost: float, old_cost: float) -> bool:
    """Return True if new_cost is strictly smaller than old_cost.

    An infinite new cost is never better, not even than another infinite cost.
    """
    return new_cost < old_cost


def reconstruct_solution(came_from: Dict[int, int], current: int) -> Solution:
    """Walk the predecessor map back from current and return the path start first."""
    solution = [current]
    while current in came_from:
        current = came_from[current]
        solution.append(current)
    solution.reverse()
    return solution


class PriorityQueue:
    """Priority queue over node indices with decrease-key.

    Entries are ordered by ``(priority, node)`` so equal priorities pop the
    lowest node index first. The queue is unbounded unless maxsize is given.
    """

    def __init__(self, maxsize: Optional[int] = None):
        self._queue: List[Tuple[float, int]] = []
        self._entry_finder: Dict[int, float] = {}
        self._maxsize = maxsize

    def add_or_update(self, item: int, priority: float) -> None:
        if item in self._entry_finder:
            # Only update if new priority is lower (better)
            if not is_better_cost(priority, self._entry_finder[item]):
                return
        elif self._maxsize is not None and len(self._entry_finder) >= self._maxsize:
            raise MemoryError(f"Priority queue exceeded {self._maxsize} entries")

        # The superseded heap entry becomes stale and is skipped in pop
        self._entry_finder[item] = priority
        heappush(self._queue, (priority, item))

    def pop(self) -> Optional[Tuple[float, int]]:
        """Remove and return the item with the lowest priority."""
        while self._queue:
            priority, item = heappop(self._queue)
            if self._entry_finder.get(item) == priority:
                del self._entry_finder[item]
                return (priority, item)
        return None

    def __contains__(self, item: int) -> bool:
        return item in self._entry_finder

    def empty(self) -> bool:
        """Return True if the queue is empty."""
        return len(self._entry_finder) == 0

    def __len__(self) -> int:
        """Return the number of valid items in the queue."""
        return len(self._entry_finder)


class MemoryManager:
    """Memory management utilities for graph algorithms."""

    def __init__(self, max_memory_mb: Optional[float] = None):
        """Initialize memory manager."""
        self.max_memory = max_memory_mb * 1024 * 1024 if max_memory_mb else None
        self.start_memory = get_memory_usage()
        self._peak_memory = self.start_memory
        self._last_check = time.time()
        self._check_interval = 0.1  # Check memory every 100ms

    def check_memory(self) -> None:
        """Check if memory usage exceeds limit."""
        current_time = time.time()
        if current_time - self._last_check < self._check_interval:
            return

        self._last_check = current_time
        current = get_memory_usage()
        self._peak_memory = max(self._peak_memory, current)

        if not self.max_memory:
            return

        if current - self.start_memory > self.max_memory:
            # Try to reclaim memory
            gc.collect()
            current = get_memory_usage()

            if current - self.start_memory > self.max_memory:
                raise MemoryError(
                    f"Memory usage {current/1024/1024:.1f}MB exceeds "
                    f"limit of {self.max_memory/1024/1024:.1f}MB"
                )

    @property
    def peak_memory_mb(self) -> float:
        """Get peak memory usage in MB."""
        return self._peak_memory / 1024 / 1024

    def reset_peak_memory(self) -> None:
        """Reset peak memory tracking."""
        self._peak_memory = get_memory_usage()
        self.start_memory = self._peak_memory
        self._last_check = time.time()


def get_memory_usage() -> int:
    """Get current memory usage in bytes."""
    process = psutil.Process(os.getpid())
    return process.memory_info().rss


def is_valid_cost(cost: float) -> bool:
    """Check that an edge cost may be stored.

    Any real number is accepted, numpy scalars included, unless it is a bool,
    NaN or negative.
    """
    if isinstance(cost, bool) or not isinstance(cost, Real):
        return False
    return not math.isnan(cost) and cost >= 0.0
