# config.py
"""Configuration for benchmark runs."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from psycopg.conninfo import make_conninfo

__all__ = ["DatabaseConfig", "BenchmarkConfig"]


@dataclass(frozen=True)
class DatabaseConfig:
    """Connection parameters for the TimescaleDB instance under test."""

    dbname: str
    user: str
    password: str = ""
    host: str = "postgres"
    port: int = 5432

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "DatabaseConfig":
        """
        Build from ``POSTGRES_*`` environment variables.

        Reads POSTGRES_HOST, POSTGRES_PORT, POSTGRES_DBNAME, POSTGRES_USER and
        POSTGRES_PASSWORD. Host defaults to ``postgres`` (the compose service
        name) and port to 5432.

        Raises:
            ValueError: If POSTGRES_PORT is not an integer
        """
        env = os.environ if environ is None else environ
        raw_port = env.get("POSTGRES_PORT") or "5432"
        try:
            port = int(raw_port)
        except ValueError:
            raise ValueError(f"POSTGRES_PORT must be an integer, got {raw_port!r}") from None

        return cls(
            dbname=env.get("POSTGRES_DBNAME", ""),
            user=env.get("POSTGRES_USER", ""),
            password=env.get("POSTGRES_PASSWORD", ""),
            host=env.get("POSTGRES_HOST") or "postgres",
            port=port,
        )

    def conninfo(self) -> str:
        """libpq connection string for psycopg."""
        return make_conninfo(
            host=self.host,
            port=self.port,
            dbname=self.dbname,
            user=self.user,
            password=self.password,
        )

    def redacted(self) -> str:
        """Human-readable target without the password, for logs and headers."""
        return f"postgres://{self.user}@{self.host}:{self.port}/{self.dbname}"


@dataclass(frozen=True)
class BenchmarkConfig:
    """Settings for one benchmark run."""

    # Inputs
    workers: int
    query_file: Path

    # Logging
    log_dir: Optional[Path] = None  # If None, defaults to the query file's directory

    # Dispatch
    queue_depth: int = 1  # Per-worker input queue capacity
    show_progress: bool = False

    # Connection pool
    connect_timeout_s: float = 30.0

    def __post_init__(self) -> None:
        if self.workers < 1:
            raise ValueError(f"workers must be >= 1, got {self.workers}")
        if self.queue_depth < 1:
            raise ValueError(f"queue_depth must be >= 1, got {self.queue_depth}")
        if self.connect_timeout_s <= 0:
            raise ValueError(
                f"connect_timeout_s must be > 0, got {self.connect_timeout_s}"
            )
