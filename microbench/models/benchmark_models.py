"""Models for benchmark configuration and measurement results."""

from collections.abc import Callable
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from microbench.utils.strings import humanize_identifier

DEFAULT_ITERATIONS = 1000

# A hook is either a zero-argument callable or a dotted name such as
# "package.module.function" or "package.module.Class.static_method".
HookRef = Callable[[], Any] | str


class BenchmarkConfig(BaseModel):
    """Resolved configuration of a single benchmarked callable."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    warm_up_iterations: int = Field(
        DEFAULT_ITERATIONS,
        ge=0,
        description="Iterations run before measuring (excluded from statistics)",
    )
    iterations: int = Field(
        DEFAULT_ITERATIONS,
        ge=1,
        description="Measured iterations (the only ones used for statistics)",
    )
    tear_down_iterations: int = Field(
        DEFAULT_ITERATIONS,
        ge=0,
        description="Iterations run after measuring (excluded from statistics)",
    )
    before_each: HookRef | None = Field(
        None, description="Hook invoked before each iteration"
    )
    after_each: HookRef | None = Field(
        None, description="Hook invoked after each iteration"
    )
    comment: str | None = Field(None, description="Free text shown in the report")

    @field_validator("before_each", "after_each", "comment", mode="before")
    @classmethod
    def _blank_is_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def total_iterations(self) -> int:
        """Warm-up, measured and tear-down iterations together."""
        return self.warm_up_iterations + self.iterations + self.tear_down_iterations


class RunDefaults(BaseModel):
    """Iteration defaults for a run, overriding the built-in value of 1000.

    Values declared on a callable always win over these.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    warm_up_iterations: int | None = Field(None, ge=0)
    iterations: int | None = Field(None, ge=1)
    tear_down_iterations: int | None = Field(None, ge=0)

    def as_options(self) -> dict[str, int]:
        """Return only the defaults that were actually set."""
        return self.model_dump(exclude_none=True)


class RunConfig(BaseModel):
    """Root of a YAML/JSON run configuration file.

    Example:
        defaults:
          warm_up_iterations: 10
          iterations: 100
          tear_down_iterations: 0
    """

    model_config = ConfigDict(extra="forbid")

    defaults: RunDefaults = Field(default_factory=RunDefaults)


class BenchmarkInstance(BaseModel):
    """Result of benchmarking one callable.

    Instances are ordered by ``tested_method`` so that reports list results
    deterministically.
    """

    model_config = ConfigDict(frozen=True)

    tested_method: str = Field(..., description="Identity of the benchmarked callable")
    test_started_at: datetime = Field(..., description="When the measurement began")
    test_ended_at: datetime = Field(..., description="When the measurement ended")
    warm_up_iterations: int = Field(..., ge=0)
    iterations: int = Field(..., ge=1)
    tear_down_iterations: int = Field(..., ge=0)
    fastest_execution_ns: int = Field(..., ge=0)
    slowest_execution_ns: int = Field(..., ge=0)
    average_execution_ns: int = Field(..., ge=0)
    comment: str | None = None

    @model_validator(mode="after")
    def _check_statistics_order(self) -> "BenchmarkInstance":
        if not (
            self.fastest_execution_ns
            <= self.average_execution_ns
            <= self.slowest_execution_ns
        ):
            raise ValueError(
                "statistics must satisfy fastest <= average <= slowest, got "
                f"{self.fastest_execution_ns}/{self.average_execution_ns}/"
                f"{self.slowest_execution_ns}"
            )
        return self

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, BenchmarkInstance):
            return NotImplemented
        return self.tested_method < other.tested_method

    def report_fields(self) -> list[tuple[str, Any]]:
        """Return (label, value) pairs for every field that has a value."""
        return [
            (humanize_identifier(name), value)
            for name, value in self
            if value is not None
        ]

    def __str__(self) -> str:
        lines = [f"{label}: {value}" for label, value in self.report_fields()]
        return "BENCHMARK SUMMARY\n\t" + "\n\t".join(lines) + "\n"
