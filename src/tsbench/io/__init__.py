"""Benchmark input files."""

from .parse import parse_row, parse_timestamp, read_query_file

__all__ = ["parse_row", "parse_timestamp", "read_query_file"]
