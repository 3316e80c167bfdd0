# ============================================================================
# src/auto_centile/core/dates.py
# ============================================================================
"""
Clinical Date Normalization

Turns a date string of unknown format into a calendar date.

The form does not reliably tell us its configured date format, so
"05/03/2020" could be either day- or month-first. Strategy:
1. Canonical YYYY-MM-DD is accepted directly (no ambiguity)
2. Otherwise try an ordered list of candidate formats, chosen by the
   optional hint; the first strictly valid parse wins

Strict means no calendar overflow: 32/01/2020 or 30/02/2020 never roll
over into the next month, they fail.
"""

import logging
import re
from datetime import date, datetime
from typing import List, Optional, Union

from .context.enums import DateFormatHint
from ..utils.exceptions import EmptyDateError, InvalidDateFormatError

logger = logging.getLogger(__name__)

ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

HINTED_FORMATS = {
    DateFormatHint.DMY: ["%d-%m-%Y", "%d/%m/%Y", "%d.%m.%Y"],
    DateFormatHint.MDY: ["%m-%d-%Y", "%m/%d/%Y"],
    DateFormatHint.YMD: ["%Y-%m-%d", "%Y/%m/%d"],
}

# Year-first must come before day/month-first
DATE_FORMATS = [
    "%Y-%m-%d", "%d-%m-%Y", "%m-%d-%Y",
    "%Y/%m/%d", "%d/%m/%Y", "%m/%d/%Y",
    "%d.%m.%Y",
]

TIME_SUFFIXES = [" %H:%M:%S", " %H:%M"]

UNHINTED_FORMATS = DATE_FORMATS + [
    date_format + suffix
    for date_format in DATE_FORMATS
    for suffix in TIME_SUFFIXES
]


class DateNormalizer:
    """
    Parses clinical date strings into `datetime.date`.

    Usage:
        normalizer = DateNormalizer()
        normalizer.normalize("25/12/2020")          # date(2020, 12, 25)
        normalizer.normalize("05/03/2020", "mdy")   # date(2020, 5, 3)
    """

    def candidate_formats(self, hint: Optional[DateFormatHint], with_time: bool = False) -> List[str]:
        """Formats to try; with_time adds the time-of-day variants of a hinted order."""
        if hint is None:
            return list(UNHINTED_FORMATS)
        formats = list(HINTED_FORMATS[hint])
        if with_time:
            formats += [f + suffix for f in HINTED_FORMATS[hint] for suffix in TIME_SUFFIXES]
        return formats

    def normalize(
        self,
        raw: Optional[str],
        format_hint: Optional[Union[DateFormatHint, str]] = None
    ) -> date:
        """
        Args:
            raw: Date text as entered
            format_hint: dmy / mdy / ymd (or date_dmy style); None tries everything

        Returns:
            Calendar date, time of day discarded

        Raises:
            EmptyDateError: value is empty after trimming
            InvalidDateFormatError: no candidate format gives a valid date
        """
        value = (raw or "").strip()
        if not value:
            raise EmptyDateError()

        hint_label = format_hint.value if isinstance(format_hint, DateFormatHint) else format_hint

        if ISO_DATE_PATTERN.match(value):
            try:
                return date.fromisoformat(value)
            except ValueError:
                raise InvalidDateFormatError(value, hint_label) from None

        hint = DateFormatHint.from_value(format_hint)

        # datetime_dmy and friends name datetime fields
        with_time = isinstance(hint_label, str) and hint_label.strip().lower().startswith("datetime")

        for candidate in self.candidate_formats(hint, with_time):
            try:
                parsed = datetime.strptime(value, candidate)
            except ValueError:
                continue
            logger.debug(f"Parsed date '{value}' with format '{candidate}'")
            return parsed.date()

        raise InvalidDateFormatError(value, hint_label)


_default_normalizer = DateNormalizer()


def normalize_date(
    raw: Optional[str],
    format_hint: Optional[Union[DateFormatHint, str]] = None
) -> date:
    """Normalize with the shared DateNormalizer."""
    return _default_normalizer.normalize(raw, format_hint)
