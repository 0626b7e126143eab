# SPDX-License-Identifier: MIT

from typing import Literal, Optional, TypedDict, Union

ExportRowKind = Literal[
    "month_header",
    "day_header",
    "track",
    "spacer",
    "footer_day",
    "footer_month",
]

BorderStyle = Literal["thin", "hair"]


class ExportCell(TypedDict):
    column: int
    value: Optional[Union[str, int]]
    fill: str
    font_color: Optional[str]
    bold: bool
    size: Optional[int]
    horizontal: Optional[str]
    border: Optional[BorderStyle]


class ExportRow(TypedDict):
    kind: ExportRowKind
    stage: Optional[str]
    height: float
    cells: list[ExportCell]


class MergeRange(TypedDict):
    start_row: int
    start_column: int
    end_row: int
    end_column: int


class ExportSheet(TypedDict):
    title: str
    file_name: str
    column_widths: list[float]
    rows: list[ExportRow]
    merges: list[MergeRange]
    freeze_cell: str


class ExportResult(TypedDict):
    ok: bool
    path: Optional[str]
    error: Optional[str]
