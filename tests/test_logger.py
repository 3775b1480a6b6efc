# tests/test_logger.py
import logging

import pytest

from tsbench.logger import setup_logger


pytestmark = pytest.mark.usefixtures("root_logging")


def test_creates_log_file(tmp_path):
    log_path = setup_logger(tmp_path)
    assert log_path.exists()
    assert log_path.parent == tmp_path
    assert log_path.name.startswith("tsbench_")
    assert "Logging initialized" in log_path.read_text()


def test_repeated_setup_keeps_a_single_file_handler(tmp_path):
    setup_logger(tmp_path / "first")
    setup_logger(tmp_path / "second")
    root = logging.getLogger()
    file_handlers = [h for h in root.handlers if isinstance(h, logging.FileHandler)]
    assert len(file_handlers) == 1
    assert len(root.handlers) == 1


def test_console_adds_stream_handler(tmp_path):
    setup_logger(tmp_path, console=True)
    root = logging.getLogger()
    kinds = sorted(type(h).__name__ for h in root.handlers)
    assert kinds == ["FileHandler", "StreamHandler"]


def test_level_applies_to_root_and_handlers(tmp_path):
    log_path = setup_logger(tmp_path, level=logging.DEBUG)
    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert all(h.level == logging.DEBUG for h in root.handlers)

    logging.getLogger("tsbench.test").debug("detail line")
    for handler in root.handlers:
        handler.flush()
    assert "detail line" in log_path.read_text()


def test_missing_directory_is_created(tmp_path):
    log_dir = tmp_path / "logs" / "bench"
    log_path = setup_logger(log_dir)
    assert log_dir.is_dir()
    assert log_path.parent == log_dir
