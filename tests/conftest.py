"""Shared fixtures for the microbench tests."""

import sys

import pytest
from helpers import TMP_MODULE_PREFIX

from microbench.utils.logger import Logger


@pytest.fixture(autouse=True)
def reset_dummy_counters():
    """Reset the call counters of the dummy modules around each test."""
    from dummy_benchmarks import broken, counting, shapes

    counting.reset()
    broken.reset()
    shapes.reset()
    yield
    counting.reset()
    broken.reset()
    shapes.reset()


@pytest.fixture
def tmp_modules(tmp_path):
    """Directory for throwaway modules, removed from sys.modules afterwards."""
    yield tmp_path
    for name in [m for m in sys.modules if m.startswith(TMP_MODULE_PREFIX)]:
        del sys.modules[name]


@pytest.fixture
def unconfigured_logger():
    """Run a test with the microbench Logger in its unconfigured state."""
    configured = Logger._configured
    Logger._configured = False
    yield
    Logger._configured = configured
