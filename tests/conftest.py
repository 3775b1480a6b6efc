# tests/conftest.py
import logging

import pytest


@pytest.fixture
def root_logging():
    """Drop the handlers setup_logger attached and restore the root level."""
    root = logging.getLogger()
    saved_level = root.level
    yield root
    for handler in list(root.handlers):
        if type(handler) in (logging.FileHandler, logging.StreamHandler):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(saved_level)
