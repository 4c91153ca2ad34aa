"""Shared fixtures and configuration for repair tests."""

import logging
import os
import sys
from typing import List

import pytest

# Ensure the src/ layout is importable without installing
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from loguru import logger  # noqa: E402

from tests.fixtures.cases import ALL_CASES, CASE_IDS, RepairCase  # noqa: E402


@pytest.fixture(params=list(range(len(ALL_CASES))), ids=CASE_IDS)
def repair_case(request: pytest.FixtureRequest) -> RepairCase:
    """Parametrized fixture returning each table-driven repair case."""
    return ALL_CASES[request.param]


@pytest.fixture
def debug_messages():
    """Collect jsonmend DEBUG log messages; restores the silent default afterwards."""
    messages: List[str] = []
    logger.enable("jsonmend")
    sink_id = logger.add(messages.append, level="DEBUG", format="{message}")
    yield messages
    logger.remove(sink_id)
    logger.disable("jsonmend")


@pytest.fixture
def restore_logging():
    """Undo configure_logging() side effects on loguru and the stdlib root logger."""
    root = logging.getLogger()
    saved_handlers = root.handlers[:]
    saved_level = root.level
    yield
    logger.remove()
    logger.disable("jsonmend")
    root.handlers = saved_handlers
    root.setLevel(saved_level)
