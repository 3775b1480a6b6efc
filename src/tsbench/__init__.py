"""Concurrent benchmark for per-host time-series queries."""

from .config import BenchmarkConfig, DatabaseConfig
from .core import run_benchmark
from .parallel import BatchResult, GreedyLoadBalancer, QueryInput
from .runner import QueryRunner
from .stats import QueryStats, summarize

__all__ = [
    "BenchmarkConfig",
    "DatabaseConfig",
    "run_benchmark",
    "BatchResult",
    "GreedyLoadBalancer",
    "QueryInput",
    "QueryRunner",
    "QueryStats",
    "summarize",
]
