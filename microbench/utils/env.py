"""Environment variable helpers with type coercion.

Recognised variables:
    MICROBENCH_LOG_LEVEL   Log level used by the CLI (default: WARNING)
    MICROBENCH_PROGRESS    Print progress lines while benchmarking (default: false)

Usage:
    from microbench.utils.env import get_env

    level = get_env("MICROBENCH_LOG_LEVEL", default="WARNING")
    progress = get_env("MICROBENCH_PROGRESS", default=False, as_type=bool)
"""

from __future__ import annotations

import os
from typing import Any, TypeVar, cast, overload

T = TypeVar("T")

LOG_LEVEL_VAR = "MICROBENCH_LOG_LEVEL"
PROGRESS_VAR = "MICROBENCH_PROGRESS"


class EnvVarError(Exception):
    """Base exception for environment variable errors."""

    pass


class EnvVarTypeError(EnvVarError):
    """Raised when an environment variable cannot be converted to the expected type."""

    def __init__(self, name: str, value: str, expected_type: type) -> None:
        self.name = name
        self.value = value
        self.expected_type = expected_type
        super().__init__(f"Cannot convert {name}='{value}' to {expected_type.__name__}")


def _coerce_type(name: str, value: str, as_type: type) -> Any:
    """Convert a string value to the specified type.

    Raises:
        EnvVarTypeError: If conversion fails.
    """
    try:
        if as_type is bool:
            return value.strip().lower() not in ("false", "0", "", "no", "off")
        if as_type is int:
            return int(value)
        if as_type is str:
            return value
        return as_type(value)
    except (ValueError, TypeError) as e:
        raise EnvVarTypeError(name, value, as_type) from e


def _log_access(name: str, value: str | None) -> None:
    """Log environment variable access if the logger is configured."""
    from microbench.utils.logger import Logger

    if Logger.is_configured():
        Logger.get("env").debug(f"ENV GET {name}={value}")


@overload
def get_env(name: str, *, default: T, as_type: type[T], log: bool = ...) -> T:
    ...


@overload
def get_env(name: str, *, default: T, log: bool = ...) -> T:
    ...


@overload
def get_env(name: str, *, log: bool = ...) -> str | None:
    ...


def get_env(
    name: str,
    *,
    default: T | None = None,
    as_type: type[T] | None = None,
    log: bool = False,
) -> T | str | None:
    """Get an environment variable with optional type coercion.

    Args:
        name: Environment variable name.
        default: Value returned when the variable is not set.
        as_type: Type to convert the value to (bool, int, str, or any
            single-argument constructor).
        log: If True, log the access at DEBUG level.

    Returns:
        The converted value, or default if the variable is not set.

    Raises:
        EnvVarTypeError: If as_type is given and conversion fails.

    Examples:
        >>> get_env("MICROBENCH_PROGRESS", default=False, as_type=bool)
        False
    """
    value = os.environ.get(name)

    if log:
        _log_access(name, value)

    if value is None:
        return default

    if as_type is not None:
        return cast(T, _coerce_type(name, value, as_type))

    return value
