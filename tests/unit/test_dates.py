# ============================================================================
# FILE: tests/unit/test_dates.py
# ============================================================================
"""
Unit tests for clinical date normalization
"""

from datetime import date

import pytest

from auto_centile.core import DateNormalizer, normalize_date
from auto_centile.core.context import DateFormatHint
from auto_centile.utils import CentileInputError, EmptyDateError, InvalidDateFormatError


@pytest.fixture
def normalizer():
    return DateNormalizer()


def test_iso_date_accepted_directly(normalizer):
    """Canonical dates pass through without ambiguity"""
    assert normalizer.normalize("2020-03-05") == date(2020, 3, 5)
    assert normalizer.normalize("2020-03-05", "mdy") == date(2020, 3, 5)


def test_surrounding_whitespace_ignored(normalizer):
    assert normalizer.normalize("  2020-03-05\t") == date(2020, 3, 5)


@pytest.mark.parametrize("raw", ["", "   ", None])
def test_empty_date_rejected(normalizer, raw):
    with pytest.raises(EmptyDateError) as exc:
        normalizer.normalize(raw)
    assert str(exc.value) == "Date cannot be empty"


def test_ambiguous_date_without_hint_is_day_first(normalizer):
    """Day-first is tried before month-first"""
    assert normalizer.normalize("05/03/2020") == date(2020, 3, 5)
    assert normalizer.normalize("05-03-2020") == date(2020, 3, 5)


def test_unambiguous_month_first_without_hint(normalizer):
    """13 cannot be a month, so the day-first candidate fails strictly"""
    assert normalizer.normalize("12/25/2020") == date(2020, 12, 25)


def test_mdy_hint_reads_month_first(normalizer):
    assert normalizer.normalize("05/03/2020", "mdy") == date(2020, 5, 3)
    assert normalizer.normalize("05/03/2020", DateFormatHint.MDY) == date(2020, 5, 3)


def test_dmy_hint_reads_day_first(normalizer):
    assert normalizer.normalize("25.12.2020", "dmy") == date(2020, 12, 25)


def test_hint_restricts_candidates(normalizer):
    """A month-first value does not parse under a day-first hint"""
    with pytest.raises(InvalidDateFormatError) as exc:
        normalizer.normalize("12/25/2020", "dmy")
    assert str(exc.value) == "Invalid date format: 12/25/2020 (hint: dmy)"


@pytest.mark.parametrize("hint", ["date_dmy", "datetime_dmy", "datetime_seconds_dmy", " DMY "])
def test_validation_type_hint_spellings(normalizer, hint):
    assert normalizer.normalize("05/03/2020", hint) == date(2020, 3, 5)


def test_unknown_hint_means_no_hint(normalizer):
    assert DateFormatHint.from_value("julian") is None
    assert normalizer.normalize("12/25/2020", "julian") == date(2020, 12, 25)


def test_slash_year_first(normalizer):
    assert normalizer.normalize("2020/03/05") == date(2020, 3, 5)


def test_time_of_day_discarded_without_hint(normalizer):
    assert normalizer.normalize("2020-03-05 14:30") == date(2020, 3, 5)
    assert normalizer.normalize("05/03/2020 14:30:59") == date(2020, 3, 5)


@pytest.mark.parametrize("raw", ["32/01/2020", "30/02/2020", "2020-02-30", "2021-13-01"])
def test_no_calendar_rollover(normalizer, raw):
    """Impossible dates fail instead of rolling into the next month"""
    with pytest.raises(InvalidDateFormatError):
        normalizer.normalize(raw)


def test_leap_day(normalizer):
    assert normalizer.normalize("29/02/2020") == date(2020, 2, 29)
    with pytest.raises(InvalidDateFormatError):
        normalizer.normalize("29/02/2021")


def test_garbage_rejected_with_empty_hint_label(normalizer):
    with pytest.raises(InvalidDateFormatError) as exc:
        normalizer.normalize("yesterday")
    assert str(exc.value) == "Invalid date format: yesterday (hint: )"
    assert exc.value.value == "yesterday"


def test_date_errors_are_input_errors():
    assert issubclass(EmptyDateError, CentileInputError)
    assert issubclass(InvalidDateFormatError, CentileInputError)


def test_module_level_helper():
    assert normalize_date("15-01-2020") == date(2020, 1, 15)


def test_day_above_twelve_never_read_month_first(normalizer):
    assert normalizer.normalize("25/12/2020") == date(2020, 12, 25)


@pytest.mark.parametrize("hint", [None, "dmy", "mdy", "ymd"])
def test_day_overflow_fails_under_every_hint(normalizer, hint):
    with pytest.raises(InvalidDateFormatError):
        normalizer.normalize("32/01/2020", hint)


@pytest.mark.parametrize("hint", [None, "dmy", "mdy", "ymd", "date_mdy"])
def test_iso_unchanged_under_every_hint(normalizer, hint):
    assert normalizer.normalize("2019-11-30", hint) == date(2019, 11, 30)


@pytest.mark.parametrize("raw,hint,expected", [
    ("25-12-2020 10:30", "datetime_dmy", date(2020, 12, 25)),
    ("25/12/2020 10:30:59", "datetime_seconds_dmy", date(2020, 12, 25)),
    ("12/25/2020 08:05", "datetime_mdy", date(2020, 12, 25)),
    ("2020/12/25 23:59:00", "datetime_seconds_ymd", date(2020, 12, 25)),
    ("25-12-2020", "datetime_dmy", date(2020, 12, 25)),
])
def test_datetime_hints_accept_time_of_day(normalizer, raw, hint, expected):
    assert normalizer.normalize(raw, hint) == expected


def test_date_only_hint_rejects_time_of_day(normalizer):
    with pytest.raises(InvalidDateFormatError):
        normalizer.normalize("25-12-2020 10:30", "date_dmy")
