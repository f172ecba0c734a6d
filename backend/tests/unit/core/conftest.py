# tests/unit/core/conftest.py
from __future__ import annotations

import logging

import pytest


@pytest.fixture()
def restore_root_logger():
    """Undo ``configure_logging`` side effects on the root logger."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)
