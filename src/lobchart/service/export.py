# SPDX-License-Identifier: MIT

from concurrent.futures import Future, ThreadPoolExecutor
from io import BytesIO
from pathlib import Path
from typing import Optional, Union

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from lobchart.color import (
    BLANK_FILL,
    GRID_LINE_COLOR,
    LABEL_HEADER_FILL,
    MONTH_DAY_FILLS,
    MONTH_HEADER_FILLS,
    STAGE_LABEL_FILL,
    hex_to_excel_argb,
    text_color_for_background,
)
from lobchart.logging_config import get_logger
from lobchart.model.export import (
    BorderStyle,
    ExportCell,
    ExportResult,
    ExportRow,
    ExportRowKind,
    ExportSheet,
    MergeRange,
)
from lobchart.model.geometry import LayoutConfig
from lobchart.model.timeline import Timeline
from lobchart.service.day_grid import segment_for_day, task_day_range
from lobchart.service.layout import layout_config
from lobchart.service.text import slugify

logger = get_logger(__name__)

SHEET_TITLE = "L.O.B."
FREEZE_CELL = "B3"
# Spreadsheet column width units per screen pixel
PIXELS_PER_WIDTH_UNIT = 6.5
FOOTER_DAY_ROW_HEIGHT = 18
FOOTER_MONTH_ROW_HEIGHT = 20
MIN_SPACER_HEIGHT = 4

_EXPORT_EXECUTOR = ThreadPoolExecutor(max_workers=1, thread_name_prefix="export-")


def export_file_name(obra_name: Optional[str]) -> str:
    """File name for the exported chart, e.g. "lob-Residencial-Aurora.xlsx"."""
    return f"lob-{slugify(obra_name or '')}.xlsx"


def _argb(color: str) -> str:
    return hex_to_excel_argb(color)


def _cell(
    column: int,
    value: Optional[Union[str, int]] = None,
    fill: str = BLANK_FILL,
    font_color: Optional[str] = None,
    bold: bool = False,
    size: Optional[int] = None,
    horizontal: Optional[str] = None,
    border: Optional[BorderStyle] = "hair",
) -> ExportCell:
    return {
        "column": column,
        "value": value,
        "fill": _argb(fill),
        "font_color": _argb(font_color) if font_color is not None else None,
        "bold": bold,
        "size": size,
        "horizontal": horizontal,
        "border": border,
    }


def build_export_sheet(
    timeline: Optional[Timeline],
    obra_name: Optional[str] = None,
    config: Optional[LayoutConfig] = None,
) -> Optional[ExportSheet]:
    """
    Project the timeline onto a spreadsheet cell matrix.

    Column 1 holds the stage labels and every following column is one day of
    the grid. Each task becomes a horizontal merge spanning exactly the day
    range used by the screen layout.

    Args:
        timeline: Result of compute_timeline
        obra_name: Project name, used for the file name
        config: Layout configuration; only the unscaled sizes are used

    Returns:
        The sheet model, or None when there is nothing to export
    """
    if timeline is None or not timeline["tasks"] or not timeline["day_grid"]["days"]:
        return None

    config = config if config is not None else layout_config()
    day_width = config["day_width"]
    bar_height = config["bar_height"]
    bar_gap = config["bar_gap"]

    day_grid = timeline["day_grid"]
    segments = timeline["month_segments"]
    total_days = len(day_grid["days"])
    last_column = total_days + 1

    column_widths = [round(config["label_column_width"] / PIXELS_PER_WIDTH_UNIT, 2)]
    column_widths.extend(
        [round(day_width / PIXELS_PER_WIDTH_UNIT, 2)] * total_days
    )

    # Month label and banding for every day column
    day_infos: list[tuple[str, int, str, str]] = []
    for index, day in enumerate(day_grid["days"]):
        segment = segment_for_day(segments, index)
        segment_index = segment["segment_index"] if segment is not None else 0
        label = segment["label"] if segment is not None else ""
        day_infos.append(
            (
                label,
                day.day,
                MONTH_HEADER_FILLS[segment_index % 2],
                MONTH_DAY_FILLS[segment_index % 2],
            )
        )

    rows: list[ExportRow] = []
    merges: list[MergeRange] = []

    def month_row(kind: ExportRowKind, label: Optional[str], height: float) -> ExportRow:
        cells = [
            _cell(1, label, LABEL_HEADER_FILL, bold=True, horizontal="center", border="thin")
        ]
        for index, (month_label, _, header_fill, _) in enumerate(day_infos):
            cells.append(
                _cell(
                    index + 2,
                    month_label,
                    header_fill,
                    bold=True,
                    horizontal="center",
                    border="thin",
                )
            )
        return {"kind": kind, "stage": None, "height": height, "cells": cells}

    def day_row(kind: ExportRowKind, label: Optional[str], height: float) -> ExportRow:
        cells = [
            _cell(1, label, LABEL_HEADER_FILL, bold=True, horizontal="center", border="thin")
        ]
        for index, (_, day_of_month, _, day_fill) in enumerate(day_infos):
            cells.append(
                _cell(
                    index + 2,
                    day_of_month,
                    day_fill,
                    bold=True,
                    size=9,
                    horizontal="center",
                    border="thin",
                )
            )
        return {"kind": kind, "stage": None, "height": height, "cells": cells}

    def merge_months(row_number: int) -> None:
        for segment in segments:
            if segment["span_days"] > 1:
                merges.append(
                    {
                        "start_row": row_number,
                        "start_column": segment["start_index"] + 2,
                        "end_row": row_number,
                        "end_column": segment["start_index"] + segment["span_days"] + 1,
                    }
                )

    # Header: month band, then day numbers; the label column spans both rows
    header_month = month_row("month_header", "Etapa", bar_height + bar_gap)
    rows.append(header_month)
    merge_months(1)
    rows.append(day_row("day_header", None, bar_height))
    merges.append({"start_row": 1, "start_column": 1, "end_row": 2, "end_column": 1})

    stages = timeline["stages"]
    for stage_index, stage in enumerate(stages):
        tracks = timeline["tracks_by_stage"].get(stage) or [[]]
        for track_index, track in enumerate(tracks):
            is_first = track_index == 0
            row_number = len(rows) + 1
            cells = [
                _cell(
                    1,
                    stage if is_first else "",
                    STAGE_LABEL_FILL if is_first else BLANK_FILL,
                    bold=is_first,
                    horizontal="left",
                    border="thin" if is_first else "hair",
                )
            ]
            cells.extend(
                _cell(index + 2, None, day_fill)
                for index, (_, _, _, day_fill) in enumerate(day_infos)
            )

            for task in track:
                start_index, end_index = task_day_range(day_grid, task)
                start_column = start_index + 2
                end_column = end_index + 2
                for column in range(start_column, end_column + 1):
                    cells[column - 1] = _cell(
                        column,
                        task["service"] if column == start_column else None,
                        task["color"],
                        font_color=text_color_for_background(task["color"]),
                        bold=True,
                        size=9,
                        horizontal="center",
                    )
                if end_column > start_column:
                    merges.append(
                        {
                            "start_row": row_number,
                            "start_column": start_column,
                            "end_row": row_number,
                            "end_column": end_column,
                        }
                    )

            rows.append(
                {
                    "kind": "track",
                    "stage": stage,
                    "height": bar_height + bar_gap,
                    "cells": cells,
                }
            )

        if stage_index < len(stages) - 1:
            spacer_cells = [_cell(1, None, BLANK_FILL, border=None)]
            spacer_cells.extend(
                _cell(index + 2, None, day_fill, border=None)
                for index, (_, _, _, day_fill) in enumerate(day_infos)
            )
            rows.append(
                {
                    "kind": "spacer",
                    "stage": stage,
                    "height": max(MIN_SPACER_HEIGHT, bar_gap),
                    "cells": spacer_cells,
                }
            )

    # Footer mirrors the header so the axis stays readable at the bottom
    rows.append(day_row("footer_day", "Dia", FOOTER_DAY_ROW_HEIGHT))
    rows.append(month_row("footer_month", "Mês", FOOTER_MONTH_ROW_HEIGHT))
    merge_months(len(rows))

    logger.debug(
        "Export sheet built",
        rows=len(rows),
        columns=last_column,
        merges=len(merges),
    )

    return {
        "title": SHEET_TITLE,
        "file_name": export_file_name(obra_name),
        "column_widths": column_widths,
        "rows": rows,
        "merges": merges,
        "freeze_cell": FREEZE_CELL,
    }


def _border(style: Optional[BorderStyle]) -> Border:
    if style is None:
        return Border()
    side = Side(style=style, color=_argb(GRID_LINE_COLOR))
    return Border(top=side, left=side, bottom=side)


def build_workbook(sheet: ExportSheet) -> Workbook:
    """Render a sheet model into an openpyxl workbook."""
    workbook = Workbook()
    worksheet = workbook.active
    worksheet.title = sheet["title"]
    worksheet.sheet_view.showGridLines = False

    for column, width in enumerate(sheet["column_widths"], start=1):
        worksheet.column_dimensions[get_column_letter(column)].width = width

    for row_number, row in enumerate(sheet["rows"], start=1):
        worksheet.row_dimensions[row_number].height = row["height"]
        for export_cell in row["cells"]:
            cell = worksheet.cell(row=row_number, column=export_cell["column"])
            if export_cell["value"] is not None:
                cell.value = export_cell["value"]
            cell.fill = PatternFill(
                fill_type="solid",
                start_color=export_cell["fill"],
                end_color=export_cell["fill"],
            )
            cell.font = Font(
                bold=export_cell["bold"],
                size=export_cell["size"],
                color=export_cell["font_color"],
            )
            cell.alignment = Alignment(
                horizontal=export_cell["horizontal"],
                vertical="center",
                wrap_text=row["kind"] == "track",
            )
            cell.border = _border(export_cell["border"])

    for merge in sheet["merges"]:
        worksheet.merge_cells(
            start_row=merge["start_row"],
            start_column=merge["start_column"],
            end_row=merge["end_row"],
            end_column=merge["end_column"],
        )

    worksheet.freeze_panes = sheet["freeze_cell"]
    return workbook


def export_to_bytes(sheet: ExportSheet) -> bytes:
    buffer = BytesIO()
    build_workbook(sheet).save(buffer)
    return buffer.getvalue()


def write_export_sheet(sheet: ExportSheet, directory: Union[str, Path]) -> ExportResult:
    """
    Serialize a sheet model to disk.

    Failures are reported through the result, never raised, and leave the
    timeline model untouched.
    """
    path = Path(directory) / sheet["file_name"]
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(export_to_bytes(sheet))
    except Exception as e:
        logger.error("Spreadsheet export failed", path=str(path), error=str(e))
        return {"ok": False, "path": str(path), "error": str(e)}

    logger.info("Spreadsheet exported", path=str(path))
    return {"ok": True, "path": str(path), "error": None}


def export_to_spreadsheet(
    timeline: Optional[Timeline],
    obra_name: Optional[str],
    directory: Union[str, Path],
    config: Optional[LayoutConfig] = None,
) -> Optional[ExportResult]:
    """
    Export the timeline as lob-<obra>.xlsx inside directory.

    Returns:
        None when there is nothing to export, otherwise the outcome of the write
    """
    sheet = build_export_sheet(timeline, obra_name, config)
    if sheet is None:
        return None
    return write_export_sheet(sheet, directory)


def submit_export(
    timeline: Optional[Timeline],
    obra_name: Optional[str],
    directory: Union[str, Path],
    config: Optional[LayoutConfig] = None,
) -> Future[Optional[ExportResult]]:
    """
    Export in the background.

    The sheet model is projected immediately, so later schedule edits do not
    leak into a running export; only the write happens on the worker thread.
    """
    sheet = build_export_sheet(timeline, obra_name, config)
    if sheet is None:
        future: Future[Optional[ExportResult]] = Future()
        future.set_result(None)
        return future
    return _EXPORT_EXECUTOR.submit(write_export_sheet, sheet, directory)


def shutdown_export_executor() -> None:
    _EXPORT_EXECUTOR.shutdown(wait=True)
