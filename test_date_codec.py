"""Tests for date parsing and formatting."""

from datetime import date

import pytest

from date_codec import (
    InvalidDateError,
    ParsedDate,
    describe_request_date,
    format_human_date,
    parse_date,
)


def test_one_off_keeps_year():
    assert parse_date("2025-06-15", repeat=False) == ParsedDate(year=2025, month=6, day=15)


@pytest.mark.parametrize("date_str", ["2024-03-01", "1999-03-01", "0-03-01", "abcd-03-01"])
def test_repeat_forces_year_zero(date_str):
    """Whatever the year token says, a repeating reminder stores year 0."""
    assert parse_date(date_str, repeat=True) == ParsedDate(year=0, month=3, day=1)


def test_no_calendar_validation():
    assert parse_date("2025-02-30", repeat=False) == ParsedDate(year=2025, month=2, day=30)


# Lenient parsing is the default: bad or missing tokens silently become 0.
# Such a record is stored but never matches a real day.

def test_lenient_non_numeric_tokens_become_zero():
    assert parse_date("2025-xx-15", repeat=False) == ParsedDate(year=2025, month=0, day=15)
    assert parse_date("year-06-15", repeat=False) == ParsedDate(year=0, month=6, day=15)


def test_lenient_missing_tokens_become_zero():
    assert parse_date("2025-06", repeat=False) == ParsedDate(year=2025, month=6, day=0)
    assert parse_date("", repeat=False) == ParsedDate(year=0, month=0, day=0)


def test_strict_rejects_non_numeric_tokens():
    with pytest.raises(InvalidDateError):
        parse_date("2025-xx-15", repeat=False, strict=True)


def test_strict_rejects_missing_tokens():
    with pytest.raises(InvalidDateError):
        parse_date("2025-06", repeat=False, strict=True)


def test_strict_ignores_year_token_when_repeating():
    assert parse_date("yyyy-03-01", repeat=True, strict=True) == ParsedDate(year=0, month=3, day=1)


def test_invalid_date_error_is_value_error():
    assert issubclass(InvalidDateError, ValueError)


def test_format_human_date():
    assert format_human_date(date(2024, 3, 1)) == "Friday March 01, 2024"
    assert format_human_date(date(2025, 6, 15)) == "Sunday June 15, 2025"


def test_describe_request_date_falls_back_to_raw_string():
    assert describe_request_date("2025-06-15") == "Sunday June 15, 2025"
    assert describe_request_date("2025-02-30") == "2025-02-30"
    assert describe_request_date("") == ""


@pytest.mark.parametrize("date_str", ["2025-1_2-15", "2025- 6-15", "2025-06-15 ", "2025-０６-15", "2025-٠٦-15"])
def test_lenient_only_ascii_digit_tokens_count(date_str):
    """Underscores, spaces and non-ASCII digits are not numbers here."""
    parsed = parse_date(date_str, repeat=False)
    assert 0 in (parsed.month, parsed.day)
    assert parsed.year == 2025


@pytest.mark.parametrize("date_str", ["2025-1_2-15", "2025- 6-15", "2025-٠٦-15"])
def test_strict_rejects_non_ascii_digit_tokens(date_str):
    with pytest.raises(InvalidDateError):
        parse_date(date_str, repeat=False, strict=True)
