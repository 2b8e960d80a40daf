"""Centralized logging for microbench.

The command line configures the logger once at startup. Library code asks for
component loggers through ``Logger.for_component`` so it can run both inside the
CLI and when embedded in another program that never configured microbench.

Usage:
    from microbench.utils.logger import Logger

    # Configure once at startup
    Logger.configure(level="INFO", timestamps=True)

    # Get a logger anywhere in the codebase
    log = Logger.get("benchmarks.runner")
    log.info("Starting run...")
"""

import logging
import sys
from enum import Enum
from pathlib import Path
from typing import TextIO


class LogLevel(Enum):
    """Log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    def to_logging_level(self) -> int:
        """Convert to Python logging level."""
        level: int = getattr(logging, self.value)
        return level


class LoggerNotConfiguredError(Exception):
    """Raised when calling Logger.get() before Logger.configure()."""

    def __init__(self) -> None:
        super().__init__(
            "Logger not configured. Call Logger.configure() at application startup."
        )


class Logger:
    """Centralized logging for microbench.

    ``get`` requires a prior ``configure`` call. ``for_component`` never
    raises: before configuration it hands out the plain stdlib logger, which
    falls back to the logging module's last-resort handler for warnings.

    Example:
        >>> Logger.configure(level="DEBUG", output="stderr")
        >>> log = Logger.get("benchmarks.scanner")
        >>> log.debug("Skipping module...")
    """

    _configured: bool = False
    _root_name: str = "microbench"

    @classmethod
    def configure(
        cls,
        level: str | LogLevel = "WARNING",
        output: str | Path | TextIO | None = None,
        timestamps: bool = True,
        include_location: bool = False,
        format_string: str | None = None,
    ) -> None:
        """Configure the logger.

        Args:
            level: Log level name or LogLevel value.
            output: Where to send logs:
                - None or "stderr": sys.stderr (default, keeps reports on stdout clean)
                - "stdout": sys.stdout
                - str/Path: File path
                - TextIO: Any file-like object
            timestamps: Include timestamps in messages.
            include_location: Include [filename:lineno].
            format_string: Custom format string (overrides timestamps/include_location).

        Raises:
            ValueError: If the level name or output is not recognised.
        """
        if isinstance(level, str):
            level = LogLevel(level.upper())

        logger = logging.getLogger(cls._root_name)
        logger.setLevel(level.to_logging_level())

        for existing_handler in logger.handlers[:]:
            logger.removeHandler(existing_handler)
            existing_handler.close()

        new_handler: logging.Handler
        if output is None or output == "stderr":
            new_handler = logging.StreamHandler(sys.stderr)
        elif output == "stdout":
            new_handler = logging.StreamHandler(sys.stdout)
        elif isinstance(output, str | Path):
            new_handler = logging.FileHandler(str(output))
        elif hasattr(output, "write"):
            new_handler = logging.StreamHandler(output)
        else:
            raise ValueError(f"Invalid output: {type(output)}")

        new_handler.setLevel(level.to_logging_level())

        if format_string is None:
            parts = []
            if timestamps:
                parts.append("%(asctime)s")
            parts.append("%(levelname)s")
            parts.append("[%(name)s]")
            if include_location:
                parts.append("[%(filename)s:%(lineno)d]")
            parts.append("%(message)s")
            format_string = " ".join(parts)

        new_handler.setFormatter(logging.Formatter(format_string))
        logger.addHandler(new_handler)
        logger.propagate = False

        cls._configured = True

    @classmethod
    def get(cls, name: str | None = None) -> logging.Logger:
        """Get a logger instance.

        Args:
            name: Logger name (appended to "microbench."). If None, returns
                the root microbench logger.

        Raises:
            LoggerNotConfiguredError: If configure() hasn't been called.
        """
        if not cls._configured:
            raise LoggerNotConfiguredError()
        return cls._named(name)

    @classmethod
    def for_component(cls, name: str) -> logging.Logger:
        """Get a component logger whether or not configure() was called."""
        return cls._named(name)

    @classmethod
    def _named(cls, name: str | None) -> logging.Logger:
        if name:
            return logging.getLogger(f"{cls._root_name}.{name}")
        return logging.getLogger(cls._root_name)

    @classmethod
    def set_level(cls, level: str | LogLevel) -> None:
        """Change log level without reconfiguring.

        Raises:
            LoggerNotConfiguredError: If configure() hasn't been called.
        """
        if not cls._configured:
            raise LoggerNotConfiguredError()

        if isinstance(level, str):
            level = LogLevel(level.upper())

        logger = logging.getLogger(cls._root_name)
        logger.setLevel(level.to_logging_level())
        for handler in logger.handlers:
            handler.setLevel(level.to_logging_level())

    @classmethod
    def is_configured(cls) -> bool:
        """Check if logger has been configured."""
        return cls._configured
