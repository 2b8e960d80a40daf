"""Discovered callables and the shape rules they are checked against."""

import inspect
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from microbench.benchmarks.marker import BenchmarkMarker, get_marker


class CallableKind(Enum):
    """How a callable is declared in its module or class body."""

    FUNCTION = "function"  # module-level function
    STATIC_METHOD = "staticmethod"
    CLASS_METHOD = "classmethod"
    INSTANCE_METHOD = "method"

    @property
    def is_static(self) -> bool:
        """True if the callable can be invoked without a receiver."""
        return self in (CallableKind.FUNCTION, CallableKind.STATIC_METHOD)

    @classmethod
    def of(cls, raw: Any, in_class: bool) -> "CallableKind | None":
        """Classify a raw module or class ``__dict__`` entry.

        Returns:
            The kind, or None if raw is not a function-like declaration.
        """
        if isinstance(raw, staticmethod):
            return cls.STATIC_METHOD
        if isinstance(raw, classmethod):
            return cls.CLASS_METHOD
        if inspect.isfunction(raw):
            return cls.INSTANCE_METHOD if in_class else cls.FUNCTION
        return None


def required_parameters(function: Callable[..., Any]) -> list[str]:
    """Names of parameters that must be supplied to call function.

    ``*args``, ``**kwargs`` and parameters with defaults are not required.
    """
    try:
        signature = inspect.signature(function)
    except (TypeError, ValueError):
        return []
    return [
        name
        for name, param in signature.parameters.items()
        if param.default is inspect.Parameter.empty
        and param.kind
        not in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
    ]


def deferred_kind(function: Callable[..., Any]) -> str | None:
    """Describe function if calling it only builds a coroutine or generator.

    Returns:
        "coroutine function", "generator function", "async generator
        function", or None for an ordinary function.
    """
    if inspect.iscoroutinefunction(function):
        return "coroutine function"
    if inspect.isasyncgenfunction(function):
        return "async generator function"
    if inspect.isgeneratorfunction(function):
        return "generator function"
    return None


def describe_signature(function: Callable[..., Any]) -> str:
    """Render the parameter list of function, without its return annotation."""
    try:
        signature = inspect.signature(function)
    except (TypeError, ValueError):
        return "(...)"
    return str(signature.replace(return_annotation=inspect.Signature.empty))


@dataclass(frozen=True)
class BenchmarkCandidate:
    """A marked callable found by the scanner.

    ``str(candidate)`` is its identity, e.g. ``"pkg.mod.Parsers.parse(self)"``;
    results and diagnostics are keyed and sorted by it.
    """

    module: str
    qualname: str
    kind: CallableKind
    function: Callable[..., Any]
    marker: BenchmarkMarker

    @classmethod
    def from_declaration(
        cls, raw: Any, module: str, in_class: bool
    ) -> "BenchmarkCandidate | None":
        """Build a candidate from a ``__dict__`` entry if it is marked."""
        kind = CallableKind.of(raw, in_class)
        if kind is None:
            return None
        marker = get_marker(raw)
        if marker is None:
            return None
        function = raw.__func__ if isinstance(raw, staticmethod | classmethod) else raw
        return cls(
            module=module,
            qualname=function.__qualname__,
            kind=kind,
            function=function,
            marker=marker,
        )

    @property
    def name(self) -> str:
        """Short name of the callable."""
        return self.function.__name__

    @property
    def identity(self) -> str:
        """Fully qualified name followed by the signature."""
        return f"{self.module}.{self.qualname}{describe_signature(self.function)}"

    def __str__(self) -> str:
        return self.identity
