# SPDX-License-Identifier: MIT

import datetime
import re
from typing import Optional, Union, cast

import pendulum

_DAY_FIRST_PATTERN = re.compile(r"^(\d{1,2})[/\-](\d{1,2})[/\-](\d{4})$")


def today_local() -> pendulum.Date:
    return pendulum.today("local").date()


def to_date(value: Union[datetime.date, datetime.datetime]) -> pendulum.Date:
    """Drop any time-of-day component and return a pendulum.Date."""
    return pendulum.date(value.year, value.month, value.day)


def date_from_str(date_str: str) -> pendulum.Date:
    """
    Parse a calendar date from a schedule cell.

    Accepts 'DD/MM/YYYY' (or 'DD-MM-YYYY'), 'YYYY-MM-DD' and full ISO 8601
    date-times. Any time-of-day component is discarded.

    Raises:
        ValueError: If the string is not a recognisable date
    """
    value = date_str.strip()
    if not value:
        raise ValueError("empty date")

    day_first = _DAY_FIRST_PATTERN.match(value)
    if day_first:
        day, month, year = (int(part) for part in day_first.groups())
        return pendulum.date(year, month, day)

    parsed = pendulum.parse(value, exact=True)
    if isinstance(parsed, pendulum.DateTime):
        return parsed.date()
    if isinstance(parsed, pendulum.Date):
        return parsed
    raise ValueError(f"not a calendar date: {date_str!r}")


def date_from_str_optional(date_str: Optional[str]) -> Optional[pendulum.Date]:
    """Parse a calendar date, returning None for missing or malformed input."""
    if date_str is None:
        return None
    try:
        return date_from_str(date_str)
    except ValueError:
        return None


def date_to_iso_str(date: pendulum.Date) -> str:
    return date.format("YYYY-MM-DD")


def date_to_display_str(date: pendulum.Date) -> str:
    return date.format("DD/MM/YYYY")


def first_day_of_month(date: pendulum.Date) -> pendulum.Date:
    return cast(pendulum.Date, date.start_of("month"))


def last_day_of_month(date: pendulum.Date) -> pendulum.Date:
    return cast(pendulum.Date, date.end_of("month"))


def days_between(start: pendulum.Date, end: pendulum.Date) -> int:
    """Signed number of calendar days from start to end."""
    return start.diff(end, False).in_days()


def month_label(date: pendulum.Date, locale: str) -> str:
    """
    Localized abbreviated month and year, uppercased for display.

    Some locales abbreviate with a trailing dot ("jul."); it is dropped so
    labels read "JUL 2025".
    """
    month = date.format("MMM", locale=locale).rstrip(".")
    return f"{month} {date.year}".upper()


def is_known_locale(locale: str) -> bool:
    try:
        pendulum.locale(locale)
    except ValueError:
        return False
    return True
