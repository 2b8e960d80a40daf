"""
Version command - displays microbench version information
"""

import click

from microbench.version import MICROBENCH_VERSION


def run_version(verbose: bool = False) -> None:
    """
    Display microbench version information.

    Args:
        verbose: If True, show the full package hash and release date
    """
    if verbose:
        click.echo(f"microbench version {MICROBENCH_VERSION.full_version()}")
        click.echo("\nDetailed version information:")
        click.echo(f"  Semantic Version: {MICROBENCH_VERSION}")
        click.echo(f"  Release Date:     {MICROBENCH_VERSION.date.strftime('%Y-%m-%d')}")
        click.echo(f"  Package Hash:     {MICROBENCH_VERSION.hash}")
    else:
        click.echo(f"microbench {MICROBENCH_VERSION}")
