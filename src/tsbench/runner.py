"""Batch query runner: partition hosts, then run every query on its worker."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional, Sequence, TYPE_CHECKING

from tsbench.db.base import QueryExecutor
from tsbench.parallel.partitioning import (
    GreedyLoadBalancer,
    LoadBalancer,
    count_queries_per_host,
)
from tsbench.parallel.types import BatchResult, QueryInput
from tsbench.parallel.worker_pool import run_worker_pool

if TYPE_CHECKING:
    from tqdm import tqdm

logger = logging.getLogger(__name__)

__all__ = ["QueryRunner"]


@dataclass
class QueryRunner:
    """
    Runs a batch of queries across a fixed number of workers.

    The load balancer and executor are injected so that either can be
    swapped (another partitioning heuristic, another database) or replaced
    with a test double.
    """

    db: QueryExecutor
    workers_count: int
    load_balancer: LoadBalancer = field(default_factory=GreedyLoadBalancer)
    queue_depth: int = 1

    def __post_init__(self) -> None:
        if self.workers_count < 1:
            raise ValueError(f"workers_count must be >= 1, got {self.workers_count}")

    def plan(self, query_inputs: Sequence[QueryInput]) -> Dict[str, int]:
        """Return the host-to-worker assignment for query_inputs."""
        host_counts = count_queries_per_host(query_inputs)
        return self.load_balancer.get_balanced_loads(host_counts, self.workers_count)

    def run(
            self,
            query_inputs: Sequence[QueryInput],
            *,
            host_to_worker: Optional[Dict[str, int]] = None,
            progress: Optional[tqdm] = None,
    ) -> BatchResult:
        """
        Run all queries and return their timings.

        The assignment is computed (unless supplied) before any query is
        dispatched and is not changed during the run. Query failures are
        ignored; every query contributes one duration.

        Args:
            query_inputs: Queries to run, in dispatch order
            host_to_worker: Precomputed assignment (default: self.plan(...))
            progress: Optional progress bar advanced once per query

        Returns:
            BatchResult with one duration per query and the total elapsed time
        """
        if host_to_worker is None:
            host_to_worker = self.plan(query_inputs)

        durations, total_elapsed_ns = run_worker_pool(
            query_inputs,
            host_to_worker,
            self.workers_count,
            self.db,
            queue_depth=self.queue_depth,
            progress=progress,
        )
        return BatchResult(durations=durations, total_elapsed_ns=total_elapsed_ns)
