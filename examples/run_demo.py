#!/usr/bin/env python3
"""Demo script showing how to run the benchmark harness from code.

This script demonstrates:
1. Scanning a directory for @benchmark callables
2. Running them and printing the summary report
3. Printing progress while benchmarking

Run with: python examples/run_demo.py
"""

from __future__ import annotations

from pathlib import Path


def main() -> None:
    """Run the benchmark demo."""
    from microbench import BenchmarkRunner, BenchmarkScanner

    examples_dir = Path(__file__).parent

    runner = BenchmarkRunner(scanner=BenchmarkScanner(root=examples_dir))
    runner.run_all()
    print(runner)

    import demo_benchmarks

    print(f"Counter before each: {demo_benchmarks.counter_before_each}")
    print(f"Counter after each: {demo_benchmarks.counter_after_each}")

    print()
    print("=" * 83)
    print()

    runner_with_progress = BenchmarkRunner(
        print_progress=True, scanner=BenchmarkScanner(root=examples_dir)
    )
    runner_with_progress.run_all()
    print(runner_with_progress)


if __name__ == "__main__":
    main()
