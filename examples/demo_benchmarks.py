"""Sample callables showing the ways ``@benchmark`` can be declared.

Run them all with ``python examples/run_demo.py`` or, from this directory,
``microbench run``.
"""

from microbench import benchmark

# Counters used by the hook examples
counter_before_each = 0
counter_after_each = 0


@benchmark
def sum_first_10_positive_integers() -> int:
    """Compute and return 1 + 2 + ... + 10."""
    total = 0
    for i in range(1, 11):
        total += i
    return total


@benchmark
def print_the_sum_first_10_positive_integers() -> None:
    """Compute and print the sum; the output is discarded while benchmarking."""
    print(f"The sum is: {sum_first_10_positive_integers()}")


def before_each_iteration_example() -> None:
    global counter_before_each
    counter_before_each += 1


def after_each_iteration_example() -> None:
    global counter_after_each
    counter_after_each += 1


# Hooks given by dotted name; the module name comes first
@benchmark(
    before_each="demo_benchmarks.before_each_iteration_example",
    after_each="demo_benchmarks.after_each_iteration_example",
)
def sum_with_before_each_and_after_each_actions() -> None:
    sum_first_10_positive_integers()


# Hooks given directly as callables
@benchmark(before_each=before_each_iteration_example, iterations=10)
def sum_with_callable_hook() -> None:
    sum_first_10_positive_integers()


@benchmark(iterations=5)
def sum_with_5_iterations() -> None:
    sum_first_10_positive_integers()


@benchmark(warm_up_iterations=0)
def sum_without_warm_up_iterations() -> None:
    sum_first_10_positive_integers()


@benchmark(tear_down_iterations=0)
def sum_without_tear_down_iterations() -> None:
    sum_first_10_positive_integers()


@benchmark(warm_up_iterations=1, iterations=2, tear_down_iterations=3)
def sum_with_specified_number_of_iterations() -> None:
    sum_first_10_positive_integers()


@benchmark(
    warm_up_iterations=1,
    iterations=2,
    tear_down_iterations=3,
    comment="This is a comment",
)
def sum_with_specified_number_of_iterations_and_a_comment() -> None:
    sum_first_10_positive_integers()


class Collections:
    """Static methods are benchmarked like module functions."""

    @staticmethod
    @benchmark(iterations=100)
    def build_list_of_squares() -> list[int]:
        return [i * i for i in range(100)]

    @staticmethod
    @benchmark(iterations=100)
    def build_dict_of_squares() -> dict[int, int]:
        return {i: i * i for i in range(100)}
