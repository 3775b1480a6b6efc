"""Command-line interface: ``tsbench WORKERS FILE``."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

import psycopg

from tsbench.config import BenchmarkConfig
from tsbench.core import run_benchmark
from tsbench.logger import setup_logger

__all__ = ["parse_args", "main"]


def _positive_int(value: str) -> int:
    try:
        num = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {value!r}") from None
    if num < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {num}")
    return num


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="tsbench",
        description="Benchmark TimescaleDB CPU-usage queries across concurrent workers.",
    )
    p.add_argument("workers", type=_positive_int, help="Number of concurrent workers")
    p.add_argument("query_file", type=Path, help="CSV file of hostname,start_time,end_time")
    p.add_argument("--log-dir", type=Path, default=None,
                   help="Directory for the log file (default: the query file's directory)")
    p.add_argument("--log-console", action="store_true", help="Also write log records to stderr")
    p.add_argument("--progress", action="store_true", help="Show a progress bar")
    p.add_argument("--queue-depth", type=_positive_int, default=1,
                   help="Per-worker input queue capacity (default: 1)")
    p.add_argument("--connect-timeout", type=float, default=30.0,
                   help="Seconds to wait for the database (default: 30)")
    p.add_argument("-v", "--verbose", action="store_true", help="Log at DEBUG level")
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    try:
        config = BenchmarkConfig(
            workers=args.workers,
            query_file=args.query_file,
            log_dir=args.log_dir,
            queue_depth=args.queue_depth,
            show_progress=args.progress,
            connect_timeout_s=args.connect_timeout,
        )
        setup_logger(
            config.log_dir or config.query_file.parent,
            level=logging.DEBUG if args.verbose else logging.INFO,
            console=args.log_console,
        )
        run_benchmark(config)
    except (OSError, ValueError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1
    except psycopg.Error as exc:
        print(f"ERROR: failed to create the query runner: {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
