"""Tests for amount parsing."""

import pytest

from bankit.utils.amount_parser import parse_amount


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("1000", 1000),
        (" 50000 ", 50000),
        ("1,000", 1000),
        ("1_000_000", 1000000),
        ("$1,000", 1000),
        ("€250", 250),
    ],
)
def test_parse_amount(raw, expected):
    assert parse_amount(raw) == expected


@pytest.mark.parametrize("raw", ["", "   ", "abc", "12.50", "-100", "0", "1e3"])
def test_parse_amount_rejects(raw):
    with pytest.raises(ValueError):
        parse_amount(raw)
