"""The ``@benchmark`` decorator marking callables for discovery.

Usage:
    from microbench import benchmark

    @benchmark
    def build_lookup_table():
        ...

    class Parsers:
        @staticmethod
        @benchmark(iterations=50, before_each="mypkg.fixtures.reset_cache")
        def parse_small_document():
            ...

The decorator only records the options; nothing is validated until the
callable is measured, so a bad declaration is reported for that callable alone
instead of breaking the import of its module.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, TypeVar, overload

from microbench.models.benchmark_models import BenchmarkConfig, HookRef

F = TypeVar("F")

MARKER_ATTRIBUTE = "__microbench_marker__"


@dataclass(frozen=True)
class BenchmarkMarker:
    """Options recorded at the declaration site of a benchmarked callable.

    Only options given explicitly are stored, so run-wide defaults can fill in
    the rest when the configuration is resolved.
    """

    options: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    def resolve(self, defaults: Mapping[str, Any] | None = None) -> BenchmarkConfig:
        """Build the validated configuration.

        Args:
            defaults: Run-wide defaults, overridden by the declared options.

        Raises:
            pydantic.ValidationError: If the merged options are invalid.
        """
        merged = dict(defaults or {})
        merged.update(self.options)
        return BenchmarkConfig.model_validate(merged)


def _underlying(obj: Any) -> Any:
    """Unwrap staticmethod/classmethod descriptors to the plain function."""
    if isinstance(obj, staticmethod | classmethod):
        return obj.__func__
    return obj


@overload
def benchmark(func: F) -> F:
    ...


@overload
def benchmark(
    func: None = None,
    *,
    warm_up_iterations: int | None = ...,
    iterations: int | None = ...,
    tear_down_iterations: int | None = ...,
    before_each: HookRef | None = ...,
    after_each: HookRef | None = ...,
    comment: str | None = ...,
) -> Callable[[F], F]:
    ...


def benchmark(
    func: Any = None,
    *,
    warm_up_iterations: int | None = None,
    iterations: int | None = None,
    tear_down_iterations: int | None = None,
    before_each: HookRef | None = None,
    after_each: HookRef | None = None,
    comment: str | None = None,
) -> Any:
    """Mark a callable for benchmarking.

    Works bare (``@benchmark``) or with options (``@benchmark(iterations=5)``),
    above or below ``@staticmethod``. Only static zero-argument callables can
    actually be measured; anything else is reported when the run reaches it.

    Args:
        func: The callable, when used without parentheses.
        warm_up_iterations: Iterations excluded from statistics, run first
            (default 1000).
        iterations: Iterations used for statistics (default 1000).
        tear_down_iterations: Iterations excluded from statistics, run last
            (default 1000).
        before_each: Hook run before every iteration: a zero-argument callable
            or its dotted name ("package.module.function").
        after_each: Hook run after every iteration, same forms as before_each.
        comment: Text shown in the report of this callable.

    Returns:
        The decorated object, unchanged apart from the recorded marker.
    """
    given = {
        "warm_up_iterations": warm_up_iterations,
        "iterations": iterations,
        "tear_down_iterations": tear_down_iterations,
        "before_each": before_each,
        "after_each": after_each,
        "comment": comment,
    }
    marker = BenchmarkMarker(
        MappingProxyType({k: v for k, v in given.items() if v is not None})
    )

    def decorate(target: F) -> F:
        function = _underlying(target)
        if not callable(function):
            raise TypeError(f"@benchmark can only decorate callables, got {target!r}")
        setattr(function, MARKER_ATTRIBUTE, marker)
        return target

    if func is not None:
        return decorate(func)
    return decorate


def get_marker(obj: Any) -> BenchmarkMarker | None:
    """Return the marker recorded on obj, or None if it is not marked."""
    marker = getattr(_underlying(obj), MARKER_ATTRIBUTE, None)
    return marker if isinstance(marker, BenchmarkMarker) else None


def is_marked(obj: Any) -> bool:
    """Check whether obj is marked for benchmarking."""
    return get_marker(obj) is not None
