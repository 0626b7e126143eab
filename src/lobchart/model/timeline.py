# SPDX-License-Identifier: MIT

from typing import TypeAlias, TypedDict

import pendulum

from lobchart.model.task import LegendEntry, Task


class DayGrid(TypedDict):
    start: pendulum.Date
    end: pendulum.Date
    days: list[pendulum.Date]


class MonthSegment(TypedDict):
    start_index: int
    span_days: int
    label: str
    segment_index: int


Track: TypeAlias = list[Task]


class Timeline(TypedDict):
    day_grid: DayGrid
    month_segments: list[MonthSegment]
    tracks_by_stage: dict[str, list[Track]]
    stages: list[str]
    tasks: list[Task]
    legend: list[LegendEntry]
