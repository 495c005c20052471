from datetime import datetime, timezone

import pytest

from mediaprobe.common.probe.value_parsing import (
    parse_date_lenient,
    parse_int_lenient,
    parse_int_strict,
    parse_seconds_strict,
    seconds_to_ticks,
    ticks_to_seconds,
)


def test_parse_int_strict_ok():
    assert parse_int_strict("44100", "sample_rate") == 44100


@pytest.mark.parametrize("bad", ["44.1k", "128000.5", "abc", "", "44_100", "\u0664\u0664\u0661\u0660\u0660"])
def test_parse_int_strict_raises_with_field_name(bad):
    with pytest.raises(ValueError, match="bit_rate"):
        parse_int_strict(bad, "bit_rate")


def test_parse_seconds_strict():
    assert parse_seconds_strict("215.5") == 215.5
    with pytest.raises(ValueError):
        parse_seconds_strict("N/A")
    with pytest.raises(ValueError):
        parse_seconds_strict("nan")
    with pytest.raises(ValueError):
        parse_seconds_strict("inf")


@pytest.mark.parametrize(
    "seconds,ticks",
    [
        (0.0, 0),
        (1.0, 10_000_000),
        (215.5, 2_155_000_000),
        (0.0004, 0),         # rounds down to 0 ms
        (0.0005, 10_000),    # half rounds away from zero
        (1.23456, 12_350_000),
    ],
)
def test_seconds_to_ticks_rounds_to_milliseconds(seconds, ticks):
    assert seconds_to_ticks(seconds) == ticks


def test_ticks_to_seconds():
    assert ticks_to_seconds(2_155_000_000) == 215.5


@pytest.mark.parametrize(
    "value,expected",
    [
        ("7", 7),
        (" 12 ", 12),
        ("-2", -2),
        ("abc", None),
        ("3/12", None),
        ("1_0", None),       # underscores are not digit separators in tags
        ("\u0663", None),    # Arabic-Indic three
        ("", None),
        (None, None),
    ],
)
def test_parse_int_lenient(value, expected):
    assert parse_int_lenient(value) == expected


def test_parse_date_lenient_formats():
    assert parse_date_lenient("2011-04-05") == datetime(2011, 4, 5)
    assert parse_date_lenient("2011/04/05") == datetime(2011, 4, 5)
    assert parse_date_lenient("04/05/2011") == datetime(2011, 4, 5)
    assert parse_date_lenient("2011-04") == datetime(2011, 4, 1)
    assert parse_date_lenient("April 5, 2011") == datetime(2011, 4, 5)
    assert parse_date_lenient("5 Apr 2011") == datetime(2011, 4, 5)
    assert parse_date_lenient("2011-04-05T08:00:00Z") == datetime(2011, 4, 5, 8, tzinfo=timezone.utc)


@pytest.mark.parametrize("value", ["2011", "someday", "", "   ", None, "2011-13-45"])
def test_parse_date_lenient_failures_are_none(value):
    assert parse_date_lenient(value) is None
