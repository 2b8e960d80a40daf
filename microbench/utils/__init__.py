"""Microbench utilities - logging, environment and string helpers."""

from microbench.utils.env import (
    EnvVarError,
    EnvVarTypeError,
    get_env,
)
from microbench.utils.logger import (
    Logger,
    LoggerNotConfiguredError,
    LogLevel,
)
from microbench.utils.strings import (
    capitalize_first,
    humanize_identifier,
    split_camel_case,
)

__all__ = [
    "EnvVarError",
    "EnvVarTypeError",
    "LogLevel",
    "Logger",
    "LoggerNotConfiguredError",
    "capitalize_first",
    "get_env",
    "humanize_identifier",
    "split_camel_case",
]
