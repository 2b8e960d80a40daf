"""Tests for the identifier formatting helpers."""

import pytest

from microbench.utils.strings import (
    capitalize_first,
    humanize_identifier,
    split_camel_case,
)


@pytest.mark.parametrize(
    ("camel_cased", "expected"),
    [
        ("", ""),
        ("foo", "foo"),
        ("Foo", "Foo"),
        ("FooBar", "Foo Bar"),
        ("FOO", "FOO"),
        ("FOOBar", "FOO Bar"),
        ("Foo00", "Foo 00"),
        ("0Foo", "0 Foo"),
        ("durationOfFastestRun", "duration Of Fastest Run"),
    ],
)
def test_split_camel_case(camel_cased, expected):
    """Test that spaces are inserted at case boundaries only."""
    assert split_camel_case(camel_cased) == expected


@pytest.mark.parametrize(
    ("string", "expected"),
    [
        ("", ""),
        ("f", "F"),
        ("foo", "Foo"),
        ("Foo", "Foo"),
        ("FOO", "Foo"),
        ("FooBar", "Foobar"),
        ("Foo Bar", "Foo bar"),
        ("0Foo", "0foo"),
    ],
)
def test_capitalize_first(string, expected):
    """Test that only the first character stays uppercase."""
    assert capitalize_first(string) == expected


@pytest.mark.parametrize(
    ("identifier", "expected"),
    [
        ("tested_method", "Tested method"),
        ("fastest_execution_ns", "Fastest execution ns"),
        ("durationOfFastestExecution", "Duration of fastest execution"),
        ("_private_name", "Private name"),
        ("", ""),
    ],
)
def test_humanize_identifier(identifier, expected):
    """Test report labels built from field names."""
    assert humanize_identifier(identifier) == expected
