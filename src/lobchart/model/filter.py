# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum


class ScheduleFilter(TypedDict):
    services: list[str]
    stages: list[str]
    date_from: Optional[pendulum.Date]
    date_to: Optional[pendulum.Date]


def empty_filter() -> ScheduleFilter:
    return {"services": [], "stages": [], "date_from": None, "date_to": None}
