"""Query executor interface."""
from __future__ import annotations

from datetime import datetime
from typing import Protocol

__all__ = ["QueryExecutor"]


class QueryExecutor(Protocol):
    """
    Backend able to run one CPU-usage query.

    Implementations must be safe to call from several worker threads at once.
    A failed query is reported by raising; the return value is ignored.
    """

    def run_cpu_usage_query(
        self, host_name: str, start_time: datetime, end_time: datetime
    ) -> None:
        ...
