# stats.py
"""Summary statistics over per-query durations."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

__all__ = ["QueryStats", "summarize"]


@dataclass(frozen=True)
class QueryStats:
    """Integer statistics (nanoseconds) for a set of query durations."""

    count: int
    sum: int
    mean: Optional[int]
    median: Optional[int]
    min: Optional[int]
    max: Optional[int]

    @classmethod
    def no_data(cls) -> "QueryStats":
        """Result for a batch in which no query ran."""
        return cls(count=0, sum=0, mean=None, median=None, min=None, max=None)

    @property
    def has_data(self) -> bool:
        return self.count > 0


def summarize(durations: Iterable[int]) -> QueryStats:
    """
    Compute count, sum, mean, median, min and max.

    Mean and median use integer (floor) division; for an even count the
    median is the floored average of the two middle values.

    Args:
        durations: Per-query elapsed times in nanoseconds

    Returns:
        QueryStats, or QueryStats.no_data() if durations is empty

    Examples:
        >>> summarize([4, 1, 3, 2])
        QueryStats(count=4, sum=10, mean=2, median=2, min=1, max=4)
    """
    ordered = sorted(durations)
    count = len(ordered)
    if count == 0:
        return QueryStats.no_data()

    total = sum(ordered)
    mid = count // 2
    if count % 2 == 0:
        median = (ordered[mid - 1] + ordered[mid]) // 2
    else:
        median = ordered[mid]

    return QueryStats(
        count=count,
        sum=total,
        mean=total // count,
        median=median,
        min=ordered[0],
        max=ordered[-1],
    )
