# SPDX-License-Identifier: MIT

from typing import TypedDict

from lobchart.model.entity_id import EntityId


class LayoutConfig(TypedDict):
    day_width: float
    bar_height: float
    bar_gap: float
    label_column_width: float
    scale: float
    compact: bool


class HeaderCell(TypedDict):
    label: str
    segment_index: int
    start_index: int
    span_days: int
    x: float
    width: float
    shaded: bool


class DayCell(TypedDict):
    index: int
    day_of_month: int
    segment_index: int
    x: float
    width: float
    shaded: bool


class BarGeometry(TypedDict):
    task_id: EntityId
    stage: str
    service: str
    color: str
    text_color: str
    track_index: int
    start_index: int
    end_index: int
    x: float
    y: float
    width: float
    height: float


class StageGeometry(TypedDict):
    stage: str
    row_index: int
    y: float
    height: float
    track_count: int
    task_count: int
    bars: list[BarGeometry]


class TimelineGeometry(TypedDict):
    scale: float
    compact: bool
    day_width: float
    label_column_width: float
    timeline_width: float
    total_width: float
    total_height: float
    header_row_height: float
    month_header: list[HeaderCell]
    day_header: list[DayCell]
    stages: list[StageGeometry]
