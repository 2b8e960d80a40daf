"""Pydantic models for benchmark configuration and results."""

from microbench.models.benchmark_models import (
    DEFAULT_ITERATIONS,
    BenchmarkConfig,
    BenchmarkInstance,
    HookRef,
    RunConfig,
    RunDefaults,
)

__all__ = [
    "DEFAULT_ITERATIONS",
    "BenchmarkConfig",
    "BenchmarkInstance",
    "HookRef",
    "RunConfig",
    "RunDefaults",
]
