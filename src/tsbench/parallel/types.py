# parallel/types.py
"""Shared types for parallel query execution."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List

__all__ = ["QueryInput", "BatchResult"]


@dataclass(frozen=True)
class QueryInput:
    """One CPU-usage query against a single host."""

    host_name: str
    """Host the query is scoped to (also the partitioning key)"""

    start_time: datetime
    """Start of the queried range (inclusive)"""

    end_time: datetime
    """End of the queried range (inclusive)"""


@dataclass(frozen=True)
class BatchResult:
    """Timings collected from one benchmark batch."""

    durations: List[int] = field(default_factory=list)
    """Per-query elapsed nanoseconds; order across workers is unspecified"""

    total_elapsed_ns: int = 0
    """Wall-clock nanoseconds from first dispatch to last worker exit"""

    @property
    def query_count(self) -> int:
        return len(self.durations)
