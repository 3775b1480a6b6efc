"""Logging configuration for benchmark runs."""
from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Union

__all__ = ["LOG_FORMAT", "setup_logger"]

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def setup_logger(
        log_dir: Union[str, Path],
        *,
        level: int = logging.INFO,
        console: bool = False,
) -> Path:
    """
    Send root logging to ``tsbench_<timestamp>.log`` inside log_dir.

    Handlers from an earlier call are removed first, so repeated runs in one
    process each log to exactly one file.

    Args:
        log_dir: Directory for the log file (created if missing)
        level: Logging level for the root logger and its handlers
        console: If True, also log to stderr

    Returns:
        Path to the created log file
    """
    log_dir = Path(log_dir).expanduser()
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / f"tsbench_{datetime.now():%Y%m%d_%H%M%S}.log"

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.setLevel(level)

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    handlers = [logging.FileHandler(log_path, mode="w", encoding="utf-8")]
    if console:
        handlers.append(logging.StreamHandler())
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root.addHandler(handler)

    root.info("Logging initialized: %s", log_path)
    return log_path
