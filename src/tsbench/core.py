"""Main entry point for the query benchmark pipeline."""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Mapping, Optional, Tuple

from setproctitle import setproctitle
from tqdm import tqdm

from tsbench.config import BenchmarkConfig, DatabaseConfig
from tsbench.db.timescale import TimescaleDB
from tsbench.io.parse import read_query_file
from tsbench.parallel.partitioning import count_queries_per_host, worker_loads
from tsbench.parallel.types import BatchResult
from tsbench.reporter import print_final_summary, print_pipeline_header
from tsbench.runner import QueryRunner
from tsbench.stats import QueryStats, summarize

logger = logging.getLogger(__name__)

__all__ = ["run_benchmark"]


def run_benchmark(
        config: BenchmarkConfig,
        *,
        environ: Optional[Mapping[str, str]] = None,
) -> Tuple[BatchResult, QueryStats]:
    """
    Main pipeline: read queries, partition hosts, run, and report timings.

    Orchestrates the complete benchmark:
    1. Reads and parses the query CSV (malformed rows are skipped)
    2. Connects to TimescaleDB with one pooled connection per worker
    3. Assigns hosts to workers with the load balancer
    4. Runs all queries concurrently and times each one
    5. Prints summary statistics

    Args:
        config: Run settings
        environ: Environment to read POSTGRES_* settings from
            (default: os.environ)

    Returns:
        Tuple of (batch_result, stats)

    Raises:
        OSError: If the query file cannot be read
        ValueError: If the query file has no header or the environment is invalid
        psycopg_pool.PoolTimeout: If the database cannot be reached
    """
    logger.info("Starting query benchmark with %d workers", config.workers)
    setproctitle("tsb:main")

    start_time = datetime.now()

    query_inputs = read_query_file(config.query_file)
    db_config = DatabaseConfig.from_env(environ)

    with TimescaleDB.connect(
        db_config, config.workers, timeout_s=config.connect_timeout_s
    ) as db:
        runner = QueryRunner(
            db=db,
            workers_count=config.workers,
            queue_depth=config.queue_depth,
        )

        host_counts = count_queries_per_host(query_inputs)
        host_to_worker = runner.plan(query_inputs)

        print_pipeline_header(
            start_time=start_time,
            query_file=str(config.query_file),
            db_target=db_config.redacted(),
            total_queries=len(query_inputs),
            total_hosts=len(host_counts),
            workers=config.workers,
            worker_loads=worker_loads(host_counts, host_to_worker, config.workers),
        )

        with tqdm(
            total=len(query_inputs),
            desc="Running Queries",
            unit="queries",
            colour="blue",
            disable=not config.show_progress,
        ) as pbar:
            result = runner.run(
                query_inputs, host_to_worker=host_to_worker, progress=pbar
            )

    stats = summarize(result.durations)
    if not stats.has_data:
        logger.warning("No queries were run from %s", config.query_file)

    end_time = datetime.now()
    print_final_summary(
        start_time=start_time,
        end_time=end_time,
        stats=stats,
        total_elapsed_ns=result.total_elapsed_ns,
    )

    logger.info("Benchmark complete: %d queries", stats.count)
    return result, stats
