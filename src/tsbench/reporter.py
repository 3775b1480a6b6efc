"""Run header and final statistics output."""
from __future__ import annotations

from datetime import datetime
from typing import Sequence

from tsbench.stats import QueryStats
from tsbench.utilities.display import (
    format_banner,
    format_duration_ns,
    format_integer,
    truncate_path_to_fit,
)

__all__ = ["format_final_summary", "print_pipeline_header", "print_final_summary"]


def print_pipeline_header(
    start_time: datetime,
    query_file: str,
    db_target: str,
    total_queries: int,
    total_hosts: int,
    workers: int,
    worker_loads: Sequence[int],
) -> None:
    """
    Print benchmark configuration header.

    Args:
        start_time: Run start timestamp
        query_file: Path of the query CSV
        db_target: Database target without credentials
        total_queries: Number of parsed queries
        total_hosts: Number of distinct hosts
        workers: Number of workers
        worker_loads: Queries assigned to each worker
    """
    print(format_banner("TIME-SERIES QUERY BENCHMARK", style="━"))
    print(f"Start Time: {start_time:%Y-%m-%d %H:%M:%S}")
    print()
    print(format_banner("Configuration"))
    print(f"Query file:           {truncate_path_to_fit(query_file, 'Query file:           ')}")
    print(f"Database:             {db_target}")
    print(f"Queries:              {format_integer(total_queries)}")
    print(f"Hosts:                {format_integer(total_hosts)}")
    print(f"Workers:              {workers}")
    print(f"Queries per worker:   {list(worker_loads)}")
    print()


def format_final_summary(stats: QueryStats, total_elapsed_ns: int) -> str:
    """Build the "Stats in Nanosecond" block; a no-data batch says so."""
    lines = [format_banner("Stats in Nanosecond"), ""]
    lines.append(f"Total number of queries ran:  {format_integer(stats.count)}")
    lines.append(
        f"Total processing time:        {format_integer(total_elapsed_ns)}"
        f" ({format_duration_ns(total_elapsed_ns)})"
    )
    if not stats.has_data:
        lines.append("No queries were run; no timing statistics available.")
        return "\n".join(lines)

    lines.extend([
        f"Sum of query times:           {format_integer(stats.sum)}",
        f"Mean:                         {format_integer(stats.mean)}",
        f"Median:                       {format_integer(stats.median)}",
        f"Max:                          {format_integer(stats.max)}",
        f"Min:                          {format_integer(stats.min)}",
    ])
    return "\n".join(lines)


def print_final_summary(
    start_time: datetime,
    end_time: datetime,
    stats: QueryStats,
    total_elapsed_ns: int,
) -> None:
    """Print final benchmark statistics and run times."""
    print()
    print(format_final_summary(stats, total_elapsed_ns))
    print()
    print(f"End Time: {end_time:%Y-%m-%d %H:%M:%S}")
    print(f"Total Runtime: {end_time - start_time}")
