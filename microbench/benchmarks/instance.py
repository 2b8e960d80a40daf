"""Measurement engine: times one candidate and builds its BenchmarkInstance.

Usage:
    from microbench.benchmarks.instance import measure

    result = measure(candidate)
    print(result)   # BENCHMARK SUMMARY ...

Every iteration runs the before-each hook, the candidate and the after-each
hook, in that order. Warm-up iterations come first, then the measured ones,
then tear-down; only the measured window contributes to the statistics.
Anything the candidate or its hooks print is discarded while the loop runs.
"""

import contextlib
import importlib
import inspect
import os
import time
from collections.abc import Callable, Iterator, Mapping
from datetime import UTC, datetime
from typing import Any

from pydantic import ValidationError

from microbench.benchmarks.candidate import (
    BenchmarkCandidate,
    CallableKind,
    deferred_kind,
    required_parameters,
)
from microbench.benchmarks.errors import (
    BenchmarkInvocationError,
    HasParametersError,
    HookResolutionError,
    IterationCountError,
    NotStaticError,
    UnsupportedCallableError,
)
from microbench.models.benchmark_models import (
    BenchmarkConfig,
    BenchmarkInstance,
    HookRef,
)
from microbench.utils.logger import Logger

_HOOK_FIELDS = ("before_each", "after_each")


def check_shape(candidate: BenchmarkCandidate) -> None:
    """Reject candidates that cannot be timed with a plain zero-argument call.

    Raises:
        NotStaticError: If the candidate is an instance or class method.
        UnsupportedCallableError: If the candidate is a coroutine, generator
            or async generator function.
        HasParametersError: If the candidate has required parameters.
    """
    if not candidate.kind.is_static:
        raise NotStaticError(str(candidate))
    kind = deferred_kind(candidate.function)
    if kind is not None:
        raise UnsupportedCallableError(str(candidate), kind)
    parameters = required_parameters(candidate.function)
    if parameters:
        raise HasParametersError(str(candidate), parameters)


def resolve_config(
    candidate: BenchmarkCandidate, defaults: Mapping[str, Any] | None = None
) -> BenchmarkConfig:
    """Validate the declared options of a candidate.

    Raises:
        HookResolutionError: If a hook option is neither callable nor a name.
        IterationCountError: If an iteration count is negative, or there are
            no measured iterations.
    """
    try:
        return candidate.marker.resolve(defaults)
    except ValidationError as e:
        errors = e.errors()
        for error in errors:
            if error["loc"] and error["loc"][0] in _HOOK_FIELDS:
                field = str(error["loc"][0])
                raise HookResolutionError(
                    str(candidate),
                    repr(candidate.marker.options.get(field)),
                    error["msg"],
                ) from e
        detail = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in errors
        )
        raise IterationCountError(str(candidate), detail) from e


def _import_longest_prefix(
    parts: list[str], method: str, identifier: str
) -> tuple[Any, list[str]]:
    """Import the longest module prefix of a dotted name.

    Returns:
        The module and the remaining attribute path.
    """
    for split in range(len(parts) - 1, 0, -1):
        module_name = ".".join(parts[:split])
        try:
            return importlib.import_module(module_name), parts[split:]
        except ModuleNotFoundError as e:
            # Only a missing prefix means "try a shorter one"
            if e.name and (module_name == e.name or module_name.startswith(e.name + ".")):
                continue
            raise HookResolutionError(method, identifier, f"import failed: {e}") from e
        except Exception as e:
            raise HookResolutionError(method, identifier, f"import failed: {e!r}") from e
    raise HookResolutionError(method, identifier, "module not found")


def _resolve_hook_name(identifier: str, method: str) -> Callable[[], Any]:
    parts = identifier.split(".")
    if len(parts) < 2 or not all(part.isidentifier() for part in parts):
        raise HookResolutionError(
            method,
            identifier,
            "expected '<module>.<callable>' or '<module>.<Class>.<callable>'",
        )

    owner, attributes = _import_longest_prefix(parts, method, identifier)
    for attribute in attributes[:-1]:
        try:
            owner = getattr(owner, attribute)
        except AttributeError as e:
            detail = f"no attribute '{attribute}'"
            raise HookResolutionError(method, identifier, detail) from e

    name = attributes[-1]
    try:
        raw = inspect.getattr_static(owner, name)
    except AttributeError as e:
        detail = f"no callable named '{name}'"
        raise HookResolutionError(method, identifier, detail) from e

    kind = CallableKind.of(raw, in_class=inspect.isclass(owner))
    if kind is not None and not kind.is_static:
        raise HookResolutionError(method, identifier, "hook is not static")
    return _checked_hook(getattr(owner, name), identifier, method)


def _checked_hook(hook: Any, identifier: str, method: str) -> Callable[[], Any]:
    if not callable(hook):
        raise HookResolutionError(method, identifier, "not callable")
    parameters = required_parameters(hook)
    if parameters:
        raise HookResolutionError(
            method, identifier, f"hook requires parameters ({', '.join(parameters)})"
        )
    return hook


def resolve_hook(ref: HookRef | None, method: str) -> Callable[[], Any] | None:
    """Turn a hook reference into a zero-argument callable.

    Args:
        ref: A callable, a dotted name, or None for no hook.
        method: Identity of the candidate the hook belongs to (for errors).

    Raises:
        HookResolutionError: If the hook cannot be resolved or needs arguments.
    """
    if ref is None:
        return None
    if isinstance(ref, str):
        return _resolve_hook_name(ref, method)
    return _checked_hook(ref, getattr(ref, "__qualname__", repr(ref)), method)


@contextlib.contextmanager
def discarded_output() -> Iterator[None]:
    """Send stdout and stderr to the null device, restoring them on exit."""
    with open(os.devnull, "w") as sink, contextlib.redirect_stdout(
        sink
    ), contextlib.redirect_stderr(sink):
        yield


def _phase(iteration: int, config: BenchmarkConfig) -> str:
    if iteration < config.warm_up_iterations:
        return "warm-up"
    if iteration < config.warm_up_iterations + config.iterations:
        return "measured"
    return "tear-down"


def collect_execution_times(
    function: Callable[[], Any],
    config: BenchmarkConfig,
    method: str,
    before_each: Callable[[], Any] | None = None,
    after_each: Callable[[], Any] | None = None,
) -> list[int]:
    """Run all iterations and return the measured execution times.

    Returns:
        Exactly ``config.iterations`` durations in nanoseconds.

    Raises:
        BenchmarkInvocationError: If the function or a hook raises; the
            original exception is chained.
    """
    first_measured = config.warm_up_iterations
    end_measured = first_measured + config.iterations
    samples: list[int] = []

    with discarded_output():
        for iteration in range(config.total_iterations):
            try:
                if before_each is not None:
                    before_each()
                start = time.perf_counter_ns()
                function()
                end = time.perf_counter_ns()
                if after_each is not None:
                    after_each()
            except Exception as e:
                raise BenchmarkInvocationError(
                    method, iteration, _phase(iteration, config)
                ) from e
            if first_measured <= iteration < end_measured:
                samples.append(end - start)

    return samples


def summarize(samples: list[int]) -> tuple[int, int, int]:
    """Return (fastest, slowest, average) with a truncating integer average.

    Raises:
        ValueError: If samples is empty.
    """
    if not samples:
        raise ValueError("No samples to summarize")
    return min(samples), max(samples), sum(samples) // len(samples)


def measure(
    candidate: BenchmarkCandidate, defaults: Mapping[str, Any] | None = None
) -> BenchmarkInstance:
    """Benchmark one candidate.

    Shape, iteration counts and hooks are all checked before the candidate is
    invoked for the first time.

    Args:
        candidate: The callable to benchmark.
        defaults: Run-wide iteration defaults, overridden by declared options.

    Returns:
        The frozen measurement result.

    Raises:
        BenchmarkConfigurationError: If the candidate cannot be benchmarked as
            declared (NotStaticError, UnsupportedCallableError,
            HasParametersError, IterationCountError, HookResolutionError).
        BenchmarkInvocationError: If the candidate or a hook raises.
    """
    started_at = datetime.now(UTC)
    method = str(candidate)
    log = Logger.for_component("benchmarks.instance")

    check_shape(candidate)
    config = resolve_config(candidate, defaults)
    before_each = resolve_hook(config.before_each, method)
    after_each = resolve_hook(config.after_each, method)

    log.debug(
        f"Measuring {method}: {config.warm_up_iterations} warm-up, "
        f"{config.iterations} measured, {config.tear_down_iterations} tear-down"
    )
    samples = collect_execution_times(
        candidate.function, config, method, before_each, after_each
    )
    fastest, slowest, average = summarize(samples)

    return BenchmarkInstance(
        tested_method=method,
        test_started_at=started_at,
        test_ended_at=datetime.now(UTC),
        warm_up_iterations=config.warm_up_iterations,
        iterations=config.iterations,
        tear_down_iterations=config.tear_down_iterations,
        fastest_execution_ns=fastest,
        slowest_execution_ns=slowest,
        average_execution_ns=average,
        comment=config.comment,
    )
