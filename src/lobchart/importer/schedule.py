# SPDX-License-Identifier: MIT

import csv
import datetime
from pathlib import Path
from typing import Any, Optional

from openpyxl import load_workbook
from openpyxl.utils.datetime import from_excel

from lobchart.logging_config import get_logger
from lobchart.model.entity_id import generate_entity_id
from lobchart.model.schedule import DEFAULT_ITEM, DEFAULT_SERVICE, ScheduleRow
from lobchart.service.text import collation_key
from lobchart.time import date_from_str_optional, date_to_iso_str, to_date

logger = get_logger(__name__)

# Accepted header spellings per schedule field, compared without accents or case
HEADER_ALIASES: dict[str, list[str]] = {
    "id": ["id", "codigo"],
    "item": ["item", "macro", "disciplina", "macroitem"],
    "service": ["servico", "service"],
    "stage": ["etapa", "pavimento", "atividade", "fase"],
    "start_date": ["inicio", "data inicio", "start"],
    "end_date": ["termino", "data termino", "end"],
}

MIN_RECOGNISED_HEADERS = 3


class ScheduleImportError(ValueError):
    pass


def detect_header_index(headers: list[Any]) -> dict[str, int]:
    """
    Map schedule fields to column positions.

    Args:
        headers: Header row cells

    Returns:
        Field name to zero-based column index for every recognised header
    """
    normalized = [collation_key(str(header)) if header is not None else "" for header in headers]
    index: dict[str, int] = {}
    for field, aliases in HEADER_ALIASES.items():
        for position, header in enumerate(normalized):
            if header in aliases:
                index[field] = position
                break
    return index


def cell_to_str(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def cell_to_iso_date(value: Any) -> str:
    """
    Normalize a date cell to 'YYYY-MM-DD', or '' when it cannot be read.

    Handles spreadsheet dates, spreadsheet serial numbers, 'DD/MM/YYYY' and ISO
    strings.
    """
    if value is None or value == "":
        return ""
    if isinstance(value, (datetime.datetime, datetime.date)):
        return date_to_iso_str(to_date(value))
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            converted = from_excel(value)
        except (ValueError, OverflowError, TypeError):
            return ""
        if isinstance(converted, (datetime.datetime, datetime.date)):
            return date_to_iso_str(to_date(converted))
        return ""
    parsed = date_from_str_optional(str(value))
    return date_to_iso_str(parsed) if parsed is not None else ""


def row_to_schedule_row(cells: list[Any], header_index: dict[str, int]) -> ScheduleRow:
    def value_of(field: str) -> Any:
        position = header_index.get(field)
        if position is None or position >= len(cells):
            return None
        return cells[position]

    stage = cell_to_str(value_of("stage"))
    item = cell_to_str(value_of("item")) or stage
    service = cell_to_str(value_of("service"))

    return {
        "id": cell_to_str(value_of("id")) or generate_entity_id(),
        "item": item or DEFAULT_ITEM,
        "service": service or DEFAULT_SERVICE,
        "stage": stage,
        "start_date": cell_to_iso_date(value_of("start_date")),
        "end_date": cell_to_iso_date(value_of("end_date")),
    }


def rows_from_table(table: list[list[Any]], source: str) -> list[ScheduleRow]:
    if not table or not table[0]:
        raise ScheduleImportError(f"no header row found in {source}")

    headers, *data = table
    header_index = detect_header_index(headers)
    if len(header_index) < MIN_RECOGNISED_HEADERS:
        raise ScheduleImportError(
            "not enough recognised headers in "
            f"{source}: expected columns for stage, service, start and end dates"
        )

    rows = [
        row_to_schedule_row(cells, header_index)
        for cells in data
        if any(cell not in (None, "") for cell in cells)
    ]
    logger.info("Schedule imported", source=source, rows=len(rows))
    return rows


def parse_csv(path: Path) -> list[ScheduleRow]:
    text = path.read_text(encoding="utf-8-sig")
    dialect: Any = csv.excel
    try:
        dialect = csv.Sniffer().sniff(text[:4096], delimiters=",;\t")
    except csv.Error:
        pass
    table = [row for row in csv.reader(text.splitlines(), dialect) if row]
    return rows_from_table(table, path.name)


def parse_xlsx(path: Path) -> list[ScheduleRow]:
    workbook = load_workbook(path, read_only=True, data_only=True)
    try:
        if not workbook.sheetnames:
            raise ScheduleImportError(f"no worksheet found in {path.name}")
        worksheet = workbook[workbook.sheetnames[0]]
        table = [list(row) for row in worksheet.iter_rows(values_only=True)]
    finally:
        workbook.close()
    return rows_from_table(table, path.name)


def parse_schedule_file(path: Path, extension: Optional[str] = None) -> list[ScheduleRow]:
    """
    Read schedule rows from a CSV or XLSX file.

    Args:
        path: File to read
        extension: Override for the file extension (without the dot)

    Raises:
        ScheduleImportError: If the file has no usable header row
    """
    suffix = (extension or path.suffix.lstrip(".")).lower()
    if suffix == "csv":
        return parse_csv(path)
    if suffix in ("xlsx", "xlsm"):
        return parse_xlsx(path)
    raise ScheduleImportError(f"unsupported schedule file: {path.name}")
