"""Helpers shared by the microbench tests."""

import inspect
from pathlib import Path

from microbench.benchmarks import BenchmarkCandidate, BenchmarkScanner

TESTS_DIR = Path(__file__).parent
DUMMY_DIR = TESTS_DIR / "dummy_benchmarks"

TMP_MODULE_PREFIX = "mbtmp_"


def candidate_for(owner, name):
    """Build the candidate for a marked attribute of a module or class."""
    in_class = inspect.isclass(owner)
    module = owner.__module__ if in_class else owner.__name__
    candidate = BenchmarkCandidate.from_declaration(vars(owner)[name], module, in_class)
    assert candidate is not None, f"{name} is not marked"
    return candidate


def dummy_scanner(*names: str) -> BenchmarkScanner:
    """Scanner over the dummy package, or only the given dummy modules."""
    paths: list[str | Path] = [DUMMY_DIR / f"{name}.py" for name in names] or [DUMMY_DIR]
    return BenchmarkScanner(root=TESTS_DIR, search_paths=paths, include_defaults=False)
