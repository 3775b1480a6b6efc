"""Parser for benchmark query files."""
from __future__ import annotations

import csv
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Sequence, Union

from tsbench.parallel.types import QueryInput

logger = logging.getLogger(__name__)

__all__ = ["TIME_FORMAT", "parse_timestamp", "parse_row", "read_query_file"]

TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def parse_timestamp(value: str) -> datetime:
    """
    Parse a ``YYYY-MM-DD HH:MM:SS`` timestamp as UTC.

    Raises:
        ValueError: If value does not match TIME_FORMAT
    """
    return datetime.strptime(value.strip(), TIME_FORMAT).replace(tzinfo=timezone.utc)


def parse_row(row: Sequence[str]) -> Optional[QueryInput]:
    """
    Convert one CSV row into a query.

    Format: ``hostname,start_time,end_time`` (extra columns are ignored)

    Returns:
        QueryInput, or None if the row is short or a timestamp is malformed

    Examples:
        >>> parse_row(["host_000008", "2017-01-01 08:59:22", "2017-01-01 09:59:22"])
        QueryInput(host_name='host_000008', ...)
        >>> parse_row(["host_000008", "yesterday", "2017-01-01 09:59:22"]) is None
        True
    """
    if len(row) < 3:
        return None

    try:
        start_time = parse_timestamp(row[1])
        end_time = parse_timestamp(row[2])
    except ValueError:
        return None

    return QueryInput(host_name=row[0], start_time=start_time, end_time=end_time)


def read_query_file(path: Union[str, Path]) -> List[QueryInput]:
    """
    Read all queries from a CSV file with a header row.

    Leading whitespace in fields is ignored. Rows that cannot be parsed are
    skipped, so the result may be empty.

    Args:
        path: Path to the CSV file

    Returns:
        Queries in file order

    Raises:
        OSError: If the file cannot be opened
        ValueError: If the file has no header row
    """
    path = Path(path).expanduser()
    query_inputs: List[QueryInput] = []
    skipped = 0

    with path.open(newline="", encoding="utf-8") as handle:
        reader = csv.reader(handle, skipinitialspace=True)

        header = next(reader, None)
        if header is None:
            raise ValueError(f"Query file {path} is empty (missing header row)")

        for line_no, row in enumerate(reader, start=2):
            query_input = parse_row(row)
            if query_input is None:
                skipped += 1
                logger.debug("Skipping malformed row %d in %s: %r", line_no, path, row)
                continue
            query_inputs.append(query_input)

    logger.info(
        "Read %d queries from %s (%d rows skipped)", len(query_inputs), path, skipped
    )
    return query_inputs
