"""Tests for the benchmark Pydantic models."""

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from microbench.models.benchmark_models import (
    BenchmarkConfig,
    BenchmarkInstance,
    RunConfig,
)

NOW = datetime(2026, 1, 1, tzinfo=UTC)


def make_instance(**overrides):
    fields = {
        "tested_method": "pkg.mod.func()",
        "test_started_at": NOW,
        "test_ended_at": NOW,
        "warm_up_iterations": 1,
        "iterations": 2,
        "tear_down_iterations": 3,
        "fastest_execution_ns": 10,
        "slowest_execution_ns": 30,
        "average_execution_ns": 20,
    }
    fields.update(overrides)
    return BenchmarkInstance(**fields)


@pytest.mark.parametrize(
    "field", ["warm_up_iterations", "iterations", "tear_down_iterations"]
)
def test_config_rejects_negative_iterations(field):
    """Test that negative iteration counts are a validation error."""
    with pytest.raises(ValidationError):
        BenchmarkConfig(**{field: -1})


def test_config_requires_a_measured_iteration():
    """Test that zero measured iterations is rejected."""
    with pytest.raises(ValidationError):
        BenchmarkConfig(iterations=0)


def test_config_accepts_zero_warm_up_and_tear_down():
    """Test that only the measured window must be non-empty."""
    config = BenchmarkConfig(warm_up_iterations=0, iterations=1, tear_down_iterations=0)
    assert config.total_iterations == 1


def test_config_blank_strings_mean_absent():
    """Test that empty hook names and comments are treated as unset."""
    config = BenchmarkConfig(before_each="", after_each="  ", comment="")
    assert config.before_each is None
    assert config.after_each is None
    assert config.comment is None


def test_config_is_frozen():
    """Test that a resolved config cannot be changed."""
    config = BenchmarkConfig()
    with pytest.raises(ValidationError):
        config.iterations = 5


def test_run_config_defaults():
    """Test run-wide defaults only report what was set."""
    config = RunConfig.model_validate({"defaults": {"iterations": 10}})
    assert config.defaults.as_options() == {"iterations": 10}
    assert RunConfig().defaults.as_options() == {}

    with pytest.raises(ValidationError):
        RunConfig.model_validate({"defaults": {"iterations": -1}})
    with pytest.raises(ValidationError):
        RunConfig.model_validate({"defaults": {"unknown": 1}})


def test_instance_statistics_order_is_enforced():
    """Test fastest <= average <= slowest."""
    with pytest.raises(ValidationError):
        make_instance(fastest_execution_ns=50)
    with pytest.raises(ValidationError):
        make_instance(average_execution_ns=40)


def test_instances_are_ordered_by_tested_method():
    """Test the ordering used to sort reports."""
    first = make_instance(tested_method="a.module.func()")
    second = make_instance(tested_method="b.module.func()")

    assert first < second
    assert sorted([second, first]) == [first, second]


def test_report_fields_omit_absent_values():
    """Test that fields without a value are not listed."""
    labels = [label for label, _ in make_instance().report_fields()]

    assert labels == [
        "Tested method",
        "Test started at",
        "Test ended at",
        "Warm up iterations",
        "Iterations",
        "Tear down iterations",
        "Fastest execution ns",
        "Slowest execution ns",
        "Average execution ns",
    ]

    with_comment = make_instance(comment="hello").report_fields()
    assert ("Comment", "hello") in with_comment


def test_instance_str_has_one_line_per_field():
    """Test the text rendering of a single result."""
    instance = make_instance(comment="hello")
    text = str(instance)
    lines = text.splitlines()

    assert lines[0] == "BENCHMARK SUMMARY"
    assert len(lines) == 1 + len(BenchmarkInstance.model_fields)
    assert "\tTested method: pkg.mod.func()" in lines
    assert "\tComment: hello" in lines
    assert text.endswith("\n")
