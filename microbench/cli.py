#!/usr/bin/env python3
"""Microbench CLI - Command-line interface for microbench."""

import click

from microbench.utils.env import LOG_LEVEL_VAR, PROGRESS_VAR, get_env
from microbench.utils.logger import Logger


@click.group()
def microbench():
    """Micro-benchmarking harness for @benchmark-decorated callables."""
    if not Logger.is_configured():
        Logger.configure(
            level=get_env(LOG_LEVEL_VAR, default="WARNING"),
            output="stderr",
            timestamps=True,
        )


@microbench.command()
@click.option("--verbose", "-v", is_flag=True, help="Show detailed version information")
def version(verbose):
    """Display microbench version information."""
    from microbench.commands.version_cmd import run_version

    run_version(verbose=verbose)


@microbench.command()
@click.option(
    "--root",
    "-r",
    type=click.Path(exists=True, file_okay=False),
    default=None,
    help="Directory module names are derived from (default: current directory)",
)
@click.option(
    "--path",
    "-p",
    "paths",
    multiple=True,
    type=click.Path(exists=True),
    help="Only scan this directory or file (repeatable)",
)
@click.option(
    "--list",
    "-l",
    "list_only",
    is_flag=True,
    help="List discovered benchmarks without running them",
)
@click.option(
    "--progress/--no-progress",
    default=None,
    help=f"Print each callable as it starts (default: ${PROGRESS_VAR} or off)",
)
@click.option(
    "--config",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="YAML or JSON file with run-wide iteration defaults",
)
@click.option(
    "--output",
    "-o",
    "outputs",
    multiple=True,
    help="Also write the text report to this file (repeatable)",
)
@click.option(
    "--stop-on-error",
    is_flag=True,
    help="Stop at the first callable that cannot be benchmarked",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Verbose logging",
)
def run(root, paths, list_only, progress, config, outputs, stop_on_error, verbose):
    r"""Discover and benchmark every @benchmark callable.

    \b
    Examples:
      microbench run                     # Scan the current directory
      microbench run -p benchmarks       # Scan one directory
      microbench run --list              # List what would run
      microbench run --config quick.yaml # Fewer iterations everywhere
    """
    from microbench.commands.run_cmd import run_benchmarks

    if verbose:
        Logger.set_level("DEBUG")

    if progress is None:
        progress = get_env(PROGRESS_VAR, default=False, as_type=bool)

    run_benchmarks(
        root=root,
        paths=paths,
        progress=progress,
        config=config,
        outputs=outputs,
        list_only=list_only,
        stop_on_error=stop_on_error,
    )


if __name__ == "__main__":
    microbench()
