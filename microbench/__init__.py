"""Microbench - a micro-benchmarking harness for decorated callables."""

from microbench.benchmarks import (
    BenchmarkRunner,
    BenchmarkScanner,
    RunReport,
    benchmark,
    measure,
)
from microbench.models import BenchmarkConfig, BenchmarkInstance
from microbench.version.microbench_version import MICROBENCH_VERSION, Version

__version__ = str(MICROBENCH_VERSION)
__version_info__ = MICROBENCH_VERSION

__all__ = [
    "MICROBENCH_VERSION",
    "BenchmarkConfig",
    "BenchmarkInstance",
    "BenchmarkRunner",
    "BenchmarkScanner",
    "RunReport",
    "Version",
    "__version__",
    "__version_info__",
    "benchmark",
    "measure",
]
