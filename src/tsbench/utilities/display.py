# utilities/display.py
"""Common display formatting utilities for benchmark output."""

from pathlib import Path
from typing import Optional, Union

__all__ = [
    "format_integer",
    "format_duration_ns",
    "truncate_path_to_fit",
    "format_banner",
]


def format_integer(num: Optional[int]) -> str:
    """Group digits in thousands.

    Args:
        num: Integer to format, or None for a missing value

    Returns:
        Comma-grouped string, or "n/a" for None

    Examples:
        >>> format_integer(1234567)
        '1,234,567'
        >>> format_integer(-1000)
        '-1,000'
    """
    if num is None:
        return "n/a"
    return f"{num:,}"


def format_duration_ns(num_ns: Optional[int]) -> str:
    """Convert nanoseconds to a human-readable duration.

    Examples:
        >>> format_duration_ns(950)
        '950 ns'
        >>> format_duration_ns(1_536_000)
        '1.54 ms'
        >>> format_duration_ns(2_500_000_000)
        '2.50 s'
    """
    if num_ns is None:
        return "n/a"
    if abs(num_ns) < 1_000:
        return f"{num_ns} ns"
    value = float(num_ns)
    for unit in ["µs", "ms"]:
        value /= 1000.0
        if abs(value) < 1000.0:
            return f"{value:.2f} {unit}"
    return f"{value / 1000.0:.2f} s"


def truncate_path_to_fit(
    path: Union[Path, str],
    prefix: str,
    total_width: int = 100,
) -> str:
    """Truncate path to fit within total_width including prefix.

    Examples:
        >>> truncate_path_to_fit("/long/path", "Short: ", 50)
        '/long/path'
        >>> truncate_path_to_fit("/very/long/path/to/queries.csv", "Very long prefix: ", 40)
        '...path/to/queries.csv'
    """
    path_str = str(path)
    max_path_length = total_width - len(prefix)

    if len(path_str) <= max_path_length:
        return path_str

    if max_path_length < 4:
        return "..."

    return "..." + path_str[-(max_path_length - 3) :]


def format_banner(title: str, width: int = 100, style: str = "═") -> str:
    """Create a formatted banner with title and separator line."""
    return f"{title}\n{style * width}"
