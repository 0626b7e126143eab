# SPDX-License-Identifier: MIT

import re
from typing import Optional

import pendulum
import typer

from lobchart.time import date_from_str, today_local


def parse_date(date_param: Optional[str | int]) -> Optional[pendulum.Date]:
    """
    Parse a date given on the command line.

    Accepts YYYY-MM-DD, DD/MM/YYYY, DD-MM-YYYY, a relative day offset
    ("-7", "30") and the shortcuts today/t, yesterday/y and tomorrow/o.
    """
    if date_param is None:
        return None

    date = str(date_param).strip()

    # Match numeric input for relative days (e.g., "1", "-1", "365")
    if re.match(r"^-?\d+$", date):
        try:
            return today_local().add(days=int(date))
        except (OverflowError, ValueError):
            raise typer.BadParameter(f"Day offset out of range: {date}")

    if date == "today" or date == "t":
        return today_local()
    if date == "yesterday" or date == "y":
        return today_local().subtract(days=1)
    if date == "tomorrow" or date == "o":
        return today_local().add(days=1)

    try:
        return date_from_str(date)
    except ValueError:
        raise typer.BadParameter(f"Incorrect date format: {date}")
