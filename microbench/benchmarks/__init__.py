"""Benchmark subsystem for microbench.

Discovers callables marked with ``@benchmark``, measures them and renders a
summary report.
"""

from microbench.benchmarks.candidate import BenchmarkCandidate, CallableKind
from microbench.benchmarks.errors import (
    BenchmarkConfigurationError,
    BenchmarkError,
    BenchmarkInvocationError,
    CandidateNotFoundError,
    HasParametersError,
    HookResolutionError,
    IterationCountError,
    NotStaticError,
    RunNotEndedError,
    RunNotStartedError,
    RunReportError,
    ScannerError,
    UnsupportedCallableError,
)
from microbench.benchmarks.instance import measure
from microbench.benchmarks.marker import (
    BenchmarkMarker,
    benchmark,
    get_marker,
    is_marked,
)
from microbench.benchmarks.report import Diagnostic, RunReport
from microbench.benchmarks.runner import BenchmarkRunner
from microbench.benchmarks.scanner import BenchmarkScanner

__all__ = [
    "BenchmarkCandidate",
    "BenchmarkConfigurationError",
    "BenchmarkError",
    "BenchmarkInvocationError",
    "BenchmarkMarker",
    "BenchmarkRunner",
    "BenchmarkScanner",
    "CallableKind",
    "CandidateNotFoundError",
    "Diagnostic",
    "HasParametersError",
    "HookResolutionError",
    "IterationCountError",
    "NotStaticError",
    "RunNotEndedError",
    "RunNotStartedError",
    "RunReport",
    "RunReportError",
    "ScannerError",
    "UnsupportedCallableError",
    "benchmark",
    "get_marker",
    "is_marked",
    "measure",
]
