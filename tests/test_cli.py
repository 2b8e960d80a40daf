"""Tests for the microbench command line."""

import sys
from io import StringIO

import pytest
from click.testing import CliRunner
from dummy_benchmarks import shapes
from helpers import DUMMY_DIR, TESTS_DIR, TMP_MODULE_PREFIX

from microbench.benchmarks.runner import NOT_STATIC_MESSAGE
from microbench.cli import microbench
from microbench.utils.logger import Logger
from microbench.version import MICROBENCH_VERSION

BARE_MODULE = """\
from microbench import benchmark


@benchmark
def bare():
    pass
"""


@pytest.fixture(autouse=True)
def quiet_logger():
    """Keep CLI log output away from the captured streams."""
    Logger.configure(level="WARNING", output=StringIO())


@pytest.fixture
def bare_module(tmp_modules, monkeypatch):
    """A scan root holding one module with a bare @benchmark function."""
    monkeypatch.setattr(sys, "path", list(sys.path))
    name = f"{TMP_MODULE_PREFIX}cli"
    (tmp_modules / f"{name}.py").write_text(BARE_MODULE)
    return tmp_modules, name


def invoke(*args, env=None):
    return CliRunner().invoke(microbench, list(args), env=env)


def test_version():
    """Test the short version output."""
    result = invoke("version")

    assert result.exit_code == 0
    assert result.output == f"microbench {MICROBENCH_VERSION}\n"


def test_version_verbose():
    """Test the detailed version output."""
    result = invoke("version", "--verbose")

    assert result.exit_code == 0
    assert MICROBENCH_VERSION.full_version() in result.output
    assert f"Package Hash:     {MICROBENCH_VERSION.hash}" in result.output


def test_run_list_does_not_execute(monkeypatch):
    """Test listing candidates without running them."""
    monkeypatch.setattr(
        "microbench.benchmarks.runner.BenchmarkRunner.run_all",
        lambda self: pytest.fail("run_all called while listing"),
    )
    result = invoke(
        "run", "--list", "-r", str(TESTS_DIR), "-p", str(DUMMY_DIR / "shapes.py")
    )

    assert result.exit_code == 0
    assert "Discovered Benchmarks:" in result.output
    for identity in shapes.ALL:
        assert identity in result.output
    assert f"Total: {len(shapes.ALL)} benchmarks discovered" in result.output


def test_run_prints_report():
    """Test a clean run: report on stdout, exit status 0."""
    result = invoke("run", "-r", str(TESTS_DIR), "-p", str(DUMMY_DIR / "counting.py"))

    assert result.exit_code == 0
    assert "BENCHMARK SUMMARY" in result.output
    assert "2 methods benchmarked" in result.output
    assert "dummy_benchmarks.counting.counted_with_named_hooks()" in result.output
    assert "this should not reach" not in result.output
    assert "Benchmarking method" not in result.output


def test_run_with_invalid_methods_exits_nonzero():
    """Test that diagnostics make the run fail."""
    result = invoke("run", "-r", str(TESTS_DIR), "-p", str(DUMMY_DIR / "shapes.py"))

    assert result.exit_code == 1
    assert NOT_STATIC_MESSAGE in result.output
    assert f"{len(shapes.VALID)} methods benchmarked" in result.output


def test_run_progress_flag():
    """Test that --progress prints each callable as it starts."""
    result = invoke(
        "run", "--progress", "-r", str(TESTS_DIR), "-p", str(DUMMY_DIR / "counting.py")
    )

    assert result.exit_code == 0
    assert "Benchmarking method counted_with_named_hooks\n" in result.output
    assert "Benchmarking method counted_with_static_method_hook\n" in result.output


def test_run_progress_from_environment():
    """Test that MICROBENCH_PROGRESS turns progress on."""
    result = invoke(
        "run",
        "-r",
        str(TESTS_DIR),
        "-p",
        str(DUMMY_DIR / "counting.py"),
        env={"MICROBENCH_PROGRESS": "1"},
    )

    assert result.exit_code == 0
    assert "Benchmarking method counted_with_named_hooks\n" in result.output


def test_run_stop_on_error():
    """Test that --stop-on-error stops after the first invalid callable."""
    result = invoke(
        "run",
        "--stop-on-error",
        "-r",
        str(TESTS_DIR),
        "-p",
        str(DUMMY_DIR / "broken.py"),
        "-p",
        str(DUMMY_DIR / "counting.py"),
    )

    assert result.exit_code == 1
    assert "0 methods benchmarked" in result.output


def test_run_with_yaml_config_and_output_file(bare_module):
    """Test run-wide defaults from YAML and writing the report to a file."""
    root, name = bare_module
    config = root / "quick.yaml"
    config.write_text(
        "defaults:\n"
        "  warm_up_iterations: 0\n"
        "  iterations: 3\n"
        "  tear_down_iterations: 0\n"
    )
    report_path = root / "report.txt"

    result = invoke(
        "run", "-r", str(root), "--config", str(config), "-o", str(report_path)
    )

    assert result.exit_code == 0
    text = report_path.read_text()
    assert f"{name}.bare()" in text
    assert "\tIterations: 3\n" in text
    assert "\tWarm up iterations: 0\n" in text
    assert text in result.output


def test_run_with_json_config(bare_module):
    """Test that JSON config files are accepted too."""
    root, name = bare_module
    config = root / "quick.json"
    config.write_text('{"defaults": {"iterations": 2, "warm_up_iterations": 0}}')

    result = invoke("run", "-r", str(root), "--config", str(config))

    assert result.exit_code == 0
    assert "\tIterations: 2\n" in result.output


@pytest.mark.parametrize(
    "content",
    [
        "defaults:\n  iterations: 0\n",
        "defaults:\n  warm_up_iterations: -1\n",
        "defaults:\n  unknown_option: 3\n",
        "- not\n- a mapping\n",
        "defaults: [unclosed\n",
    ],
)
def test_run_with_invalid_config(bare_module, content):
    """Test that a bad config file is rejected before anything runs."""
    root, _ = bare_module
    config = root / "bad.yaml"
    config.write_text(content)

    result = invoke("run", "-r", str(root), "--config", str(config))

    assert result.exit_code == 1
    assert "Error:" in result.output
    assert "BENCHMARK SUMMARY" not in result.output
