# parallel/partitioning.py
"""Host-to-worker partitioning for batch query execution."""

from __future__ import annotations

import heapq
import logging
from collections import Counter
from typing import Dict, Iterable, List, Mapping, Protocol, Tuple

from tsbench.parallel.types import QueryInput

logger = logging.getLogger(__name__)

__all__ = [
    "LoadBalancer",
    "GreedyLoadBalancer",
    "count_queries_per_host",
    "plan",
    "sorted_host_counts",
    "worker_loads",
]


class LoadBalancer(Protocol):
    """Strategy that maps every host to the worker that will run its queries."""

    def get_balanced_loads(
        self, host_counts: Mapping[str, int], num_workers: int
    ) -> Dict[str, int]:
        """Return ``{host_name: worker_index}`` covering every host once."""


def count_queries_per_host(query_inputs: Iterable[QueryInput]) -> Dict[str, int]:
    """
    Count how many queries target each host.

    Args:
        query_inputs: Queries to group

    Returns:
        Mapping of host name to its (positive) query count
    """
    return dict(Counter(q.host_name for q in query_inputs))


def sorted_host_counts(host_counts: Mapping[str, int]) -> List[Tuple[str, int]]:
    """
    Order hosts by query count, largest first.

    Hosts with equal counts are ordered by name so the planning order never
    depends on dict iteration order.
    """
    return sorted(host_counts.items(), key=lambda kv: (-kv[1], kv[0]))


def plan(host_counts: Mapping[str, int], num_workers: int) -> Dict[str, int]:
    """
    Assign hosts to workers with the greedy multi-way partitioning heuristic.

    All of a host's queries run on one worker. Hosts are visited in
    descending query count and each is given to the worker with the smallest
    running total, which approximately minimizes the largest per-worker load.
    The result is not guaranteed optimal (the exact problem is NP-hard).

    Tie-breaking:
        - Hosts with equal counts are visited in ascending name order.
        - Workers with equal running totals resolve to the lowest index.

    Args:
        host_counts: Mapping of host name to number of queries
        num_workers: Number of workers (must be >= 1)

    Returns:
        Mapping of host name to worker index in ``[0, num_workers)``

    Raises:
        ValueError: If num_workers < 1

    Example:
        >>> plan({"a": 5, "b": 3, "c": 3, "d": 1}, 2)
        {'a': 0, 'b': 1, 'c': 1, 'd': 0}
    """
    if num_workers < 1:
        raise ValueError(f"num_workers must be >= 1, got {num_workers}")

    # Min-heap of (running_load, worker_index); the index breaks load ties
    heap: List[Tuple[int, int]] = [(0, idx) for idx in range(num_workers)]
    heapq.heapify(heap)

    host_to_worker: Dict[str, int] = {}
    for host_name, count in sorted_host_counts(host_counts):
        load, worker = heapq.heappop(heap)
        host_to_worker[host_name] = worker
        heapq.heappush(heap, (load + count, worker))

    return host_to_worker


def worker_loads(
    host_counts: Mapping[str, int],
    host_to_worker: Mapping[str, int],
    num_workers: int,
) -> List[int]:
    """
    Total query count per worker implied by an assignment.

    Raises:
        KeyError: If a host in host_counts has no assigned worker
    """
    sums = [0] * num_workers
    for host_name, count in host_counts.items():
        sums[host_to_worker[host_name]] += count
    return sums


class GreedyLoadBalancer:
    """Greedy load balancer: largest host first onto the least loaded worker."""

    def get_balanced_loads(
        self, host_counts: Mapping[str, int], num_workers: int
    ) -> Dict[str, int]:
        host_to_worker = plan(host_counts, num_workers)
        logger.info(
            "Number of queries assigned to each worker: %s",
            worker_loads(host_counts, host_to_worker, num_workers),
        )
        return host_to_worker
