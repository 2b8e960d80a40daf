"""Identifier formatting helpers used to build human-readable report labels.

Usage:
    from microbench.utils.strings import humanize_identifier

    humanize_identifier("fastest_execution_ns")   # "Fastest execution ns"
    humanize_identifier("durationOfFastestRun")   # "Duration of fastest run"
"""

import re

# Zero-width boundaries, evaluated left-to-right:
#   1. inside an uppercase run, before the start of a Titlecase word ("ABCd")
#   2. between a non-uppercase character and an uppercase one ("fooBar")
#   3. between a letter and a non-letter ("Foo00")
_CASE_BOUNDARY = re.compile(
    "|".join(
        (
            r"(?<=[A-Z])(?=[A-Z][a-z])",
            r"(?<=[^A-Z])(?=[A-Z])",
            r"(?<=[A-Za-z])(?=[^A-Za-z])",
        )
    )
)


def split_camel_case(camel_cased: str) -> str:
    """Split a camel-cased string into space separated words, case preserved.

    Only spaces are inserted; existing characters are never altered.

    Args:
        camel_cased: The camel-cased string.

    Returns:
        The space separated words.

    Examples:
        >>> split_camel_case("FooBar")
        'Foo Bar'
        >>> split_camel_case("FOOBar")
        'FOO Bar'
        >>> split_camel_case("Foo00")
        'Foo 00'
    """
    return _CASE_BOUNDARY.sub(" ", camel_cased)


def capitalize_first(string: str) -> str:
    """Uppercase the first character and lowercase all the others.

    Examples:
        >>> capitalize_first("FOO")
        'Foo'
        >>> capitalize_first("Foo Bar")
        'Foo bar'
    """
    if not string:
        return ""
    return string[0].upper() + string[1:].lower()


def humanize_identifier(identifier: str) -> str:
    """Turn a snake_case or camelCase identifier into a sentence-like label."""
    words = [split_camel_case(part) for part in identifier.split("_") if part]
    return capitalize_first(" ".join(words))
