"""Tests for the centralized logging utility."""

import logging
from io import StringIO

import pytest

from microbench.utils.logger import Logger, LoggerNotConfiguredError


def test_logger_unconfigured(unconfigured_logger):
    """Test that Logger.get before configuration raises error."""
    with pytest.raises(LoggerNotConfiguredError):
        Logger.get("test")


def test_for_component_never_raises(unconfigured_logger):
    """Test that library code can get a logger before configuration."""
    log = Logger.for_component("benchmarks.scanner")
    assert isinstance(log, logging.Logger)
    assert log.name == "microbench.benchmarks.scanner"


def test_logger_configuration():
    """Test logger configuration."""
    output = StringIO()
    Logger.configure(level="DEBUG", output=output, timestamps=False)

    assert Logger.is_configured()

    log = Logger.get("test_config")
    log.debug("Debug message")

    content = output.getvalue()
    assert "DEBUG" in content
    assert "[microbench.test_config]" in content
    assert "Debug message" in content


def test_logger_set_level():
    """Test changing log level."""
    output = StringIO()
    Logger.configure(level="INFO", output=output, timestamps=False)

    log = Logger.get("test_level")
    log.debug("Hidden")
    assert "Hidden" not in output.getvalue()

    Logger.set_level("DEBUG")
    log.debug("Visible")
    assert "Visible" in output.getvalue()


def test_logger_rejects_unknown_level():
    """Test that an unknown level name is rejected."""
    with pytest.raises(ValueError):
        Logger.configure(level="CHATTY", output=StringIO())
