import logging

import pytest

from tagged_struct import TypeRegistry, set_log_level, set_logger

from .option_types import NOTHING_ID, SAMPLE_ID, SOME_ID, Nothing, Sample, Some


@pytest.fixture
def registry():
    """A fresh registry with the Option variants and Sample registered."""
    registry = TypeRegistry.initialize()
    registry.register(Some, SOME_ID)
    registry.register(Nothing, NOTHING_ID)
    registry.register(Sample, SAMPLE_ID)
    return registry


@pytest.fixture
def empty_registry():
    """A registry with nothing registered."""
    return TypeRegistry.initialize()


@pytest.fixture(autouse=True)
def restore_logger():
    """Undo any set_logger() or set_log_level() call made by a test."""
    yield
    set_logger(logging.getLogger("tagged_struct"))
    set_log_level(logging.WARNING)
