"""Query executors."""

from .base import QueryExecutor
from .timescale import TimescaleDB

__all__ = ["QueryExecutor", "TimescaleDB"]
