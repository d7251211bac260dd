"""Pytest fixtures for tests."""

import logging

import numpy as np
import pytest

import chroma_logging


@pytest.fixture
def rng():
    """Seeded random generator so failures are reproducible."""
    return np.random.default_rng(1337)


@pytest.fixture
def device_batch(rng):
    """Non-degenerate device RGB triples (no channel at exactly 0)."""
    return rng.uniform(0.02, 1.0, size=(64, 3))


@pytest.fixture
def reset_logging():
    """Detach the handler installed by setup_logging() after the test."""
    yield
    handler = chroma_logging._handler
    for name in chroma_logging._LIBRARY_LOGGERS:
        lib_logger = logging.getLogger(name)
        if handler is not None:
            lib_logger.removeHandler(handler)
        lib_logger.setLevel(logging.NOTSET)
    chroma_logging._handler = None
