"""TimescaleDB query executor backed by a psycopg connection pool."""
from __future__ import annotations

import logging
from datetime import datetime

from psycopg_pool import ConnectionPool

from tsbench.config import DatabaseConfig

logger = logging.getLogger(__name__)

__all__ = ["CPU_USAGE_QUERY", "TimescaleDB"]

# Origin aligns the one-minute buckets to the query's start time
CPU_USAGE_QUERY = """
SELECT time_bucket('1 minute', ts, origin => %(start)s) AS minute,
       min(usage) AS min_usage,
       max(usage) AS max_usage
FROM cpu_usage
WHERE ts >= %(start)s AND ts <= %(end)s AND host = %(host)s
GROUP BY minute
"""


class TimescaleDB:
    """
    Runs CPU-usage queries against TimescaleDB.

    The pool is thread-safe and shared by all workers. Its maximum size is
    the worker count so that every worker can hold a connection at once.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        self._pool = pool

    @classmethod
    def connect(
            cls,
            config: DatabaseConfig,
            pool_size: int,
            *,
            timeout_s: float = 30.0,
    ) -> "TimescaleDB":
        """
        Open a connection pool and wait until it holds a live connection.

        Args:
            config: Connection parameters
            pool_size: Maximum number of pooled connections (>= 1)
            timeout_s: How long to wait for the first connection

        Returns:
            Connected TimescaleDB executor

        Raises:
            ValueError: If pool_size < 1
            psycopg_pool.PoolTimeout: If no connection could be made in time
        """
        if pool_size < 1:
            raise ValueError(f"pool_size must be >= 1, got {pool_size}")

        logger.info(
            "Connecting to %s (pool size %d)", config.redacted(), pool_size
        )
        pool = ConnectionPool(
            config.conninfo(),
            min_size=1,
            max_size=pool_size,
            name="tsbench",
            open=True,
        )
        try:
            pool.wait(timeout=timeout_s)
        except Exception:
            pool.close()
            raise
        return cls(pool)

    def run_cpu_usage_query(
            self, host_name: str, start_time: datetime, end_time: datetime
    ) -> None:
        """Run the per-minute min/max CPU usage query for one host and range."""
        params = {"start": start_time, "end": end_time, "host": host_name}
        try:
            with self._pool.connection() as conn:
                conn.execute(CPU_USAGE_QUERY, params)
        except Exception as exc:
            logger.warning("Unable to execute query for %s: %s", host_name, exc)
            raise

    def close(self) -> None:
        self._pool.close()

    def __enter__(self) -> "TimescaleDB":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
