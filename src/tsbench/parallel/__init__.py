"""Host partitioning and the concurrent worker pool."""

from .types import QueryInput, BatchResult
from .partitioning import (
    LoadBalancer,
    GreedyLoadBalancer,
    count_queries_per_host,
    plan,
    worker_loads,
)
from .worker_pool import run_worker_pool

__all__ = [
    "QueryInput",
    "BatchResult",
    "LoadBalancer",
    "GreedyLoadBalancer",
    "count_queries_per_host",
    "plan",
    "worker_loads",
    "run_worker_pool",
]
