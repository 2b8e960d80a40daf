"""Run command - discovers and benchmarks every ``@benchmark`` callable.

CLI Examples:
    microbench run                          # Scan the current directory
    microbench run -p benchmarks            # Scan one directory below the root
    microbench run --list                   # List discovered callables only
    microbench run --progress               # Print each callable as it starts
    microbench run --config quick.yaml      # Override default iteration counts
    microbench run -o report.txt            # Also write the report to a file
"""

import json
import sys
from pathlib import Path

import click
import yaml  # type: ignore[import-untyped, unused-ignore]
from pydantic import ValidationError

from microbench.benchmarks import BenchmarkRunner, BenchmarkScanner
from microbench.models.benchmark_models import RunConfig
from microbench.utils.logger import Logger


def load_config(config_path: str) -> RunConfig:
    """Load run configuration from a YAML or JSON file.

    Config format:
        defaults:
          warm_up_iterations: 10
          iterations: 100
          tear_down_iterations: 0

    Exits with status 1 if the file cannot be read or is invalid.
    """
    path = Path(config_path)
    try:
        content = path.read_text()
        if path.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(content) or {}
        else:
            data = json.loads(content)
    except (OSError, yaml.YAMLError, json.JSONDecodeError) as e:
        click.echo(f"Error: Failed to parse config file {config_path}: {e}", err=True)
        sys.exit(1)

    if not isinstance(data, dict):
        click.echo(f"Error: Config file {config_path} must be a mapping", err=True)
        sys.exit(1)

    try:
        return RunConfig.model_validate(data)
    except ValidationError as e:
        click.echo(f"Error: Invalid run configuration in {config_path}:\n{e}", err=True)
        sys.exit(1)


def _make_importable(root: Path) -> None:
    """Put the scan root (and its src/ folder) on sys.path, like ``python -m``."""
    for directory in (root / "src", root):
        if directory.is_dir() and str(directory) not in sys.path:
            sys.path.insert(0, str(directory))


def list_candidates(scanner: BenchmarkScanner) -> None:
    """Print every discovered candidate without running it."""
    candidates = scanner.get_all_candidates()
    click.echo("Discovered Benchmarks:")
    click.echo("-" * 50)
    if not candidates:
        click.echo("  No benchmarks found.")
        return
    for candidate in sorted(candidates, key=str):
        click.echo(f"  {candidate}")
        click.echo(f"      {candidate.kind.value}")
    click.echo("-" * 50)
    click.echo(f"Total: {len(candidates)} benchmarks discovered")


def run_benchmarks(
    root: str | None,
    paths: tuple[str, ...],
    progress: bool,
    config: str | None,
    outputs: tuple[str, ...],
    list_only: bool,
    stop_on_error: bool,
) -> None:
    """Run benchmarks based on CLI arguments.

    Exits with status 1 if any callable could not be benchmarked.
    """
    log = Logger.get("commands.run")
    root_path = Path(root or Path.cwd()).resolve()
    _make_importable(root_path)

    scanner = BenchmarkScanner(
        root=root_path,
        search_paths=list(paths) or None,
        include_defaults=not paths,
    )

    if list_only:
        list_candidates(scanner)
        return

    defaults = load_config(config).defaults.as_options() if config else {}
    if defaults:
        log.info(f"Run defaults: {defaults}")

    runner = BenchmarkRunner(
        print_progress=progress,
        scanner=scanner,
        defaults=defaults,
        stop_on_error=stop_on_error,
    )
    report = runner.run_all()
    click.echo(report.to_text(), nl=False)

    for output in outputs:
        report.emit(output)
        log.info(f"Report written to {output}")

    if report.diagnostics:
        sys.exit(1)
