# SPDX-License-Identifier: MIT

import datetime
from pathlib import Path
from typing import Any, Optional

from yaml import load

try:
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Loader  # type: ignore[assignment]

from lobchart.importer.schedule import cell_to_iso_date, cell_to_str
from lobchart.model.entity_id import generate_entity_id
from lobchart.model.schedule import (
    DEFAULT_ITEM,
    DEFAULT_SERVICE,
    ScheduleRow,
    ServiceColor,
    StageRecord,
)


class ObraFileRepository:
    """
    Read-only schedule source backed by a single YAML document.

    Expected layout:

        name: Residencial Aurora
        stages:
          - {name: Cobertura, order: 1}
        services:
          - {name: Estrutura, color: "#F97316"}
        schedule:
          - {id: "1", item: Torre A, service: Estrutura, stage: Cobertura,
             start: 2025-07-04, end: 2025-07-31}

    The obra id passed to the list methods is ignored: a file holds one obra.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        self._document: Optional[dict[str, Any]] = None

    @property
    def document(self) -> dict[str, Any]:
        if self._document is None:
            self.__load_data()
        if self._document is None:
            raise ValueError(f"empty obra file: {self.path}")
        return self._document

    def __load_data(self) -> None:
        raw = load(self.path.read_text(encoding="utf-8"), Loader=Loader)
        if raw is None:
            return
        if not isinstance(raw, dict):
            raise ValueError(f"obra file must be a mapping: {self.path}")
        self._document = raw

    @property
    def obra_id(self) -> str:
        return cell_to_str(self.document.get("id")) or self.path.stem

    @property
    def obra_name(self) -> str:
        return cell_to_str(self.document.get("name")) or self.path.stem

    def __list(self, key: str) -> list[dict[str, Any]]:
        entries = self.document.get(key) or []
        if not isinstance(entries, list):
            raise ValueError(f"'{key}' must be a list in {self.path}")
        return [entry for entry in entries if isinstance(entry, dict)]

    def list_schedule(self, obra_id: Optional[str] = None) -> list[ScheduleRow]:
        rows: list[ScheduleRow] = []
        for entry in self.__list("schedule"):
            stage = cell_to_str(entry.get("stage"))
            rows.append(
                {
                    "id": cell_to_str(entry.get("id")) or generate_entity_id(),
                    "item": cell_to_str(entry.get("item")) or stage or DEFAULT_ITEM,
                    "service": cell_to_str(entry.get("service")) or DEFAULT_SERVICE,
                    "stage": stage,
                    "start_date": _date_value(entry.get("start")),
                    "end_date": _date_value(entry.get("end")),
                }
            )
        return rows

    def list_stages(self, obra_id: Optional[str] = None) -> list[StageRecord]:
        stages: list[StageRecord] = []
        for position, entry in enumerate(self.__list("stages"), start=1):
            name = cell_to_str(entry.get("name"))
            if not name:
                continue
            order = entry.get("order")
            if isinstance(order, bool) or not isinstance(order, int):
                order = position
            stages.append({"name": name, "order": order})
        return stages

    def list_service_colors(self, obra_id: Optional[str] = None) -> list[ServiceColor]:
        colors: list[ServiceColor] = []
        for entry in self.__list("services"):
            name = cell_to_str(entry.get("name"))
            if not name:
                continue
            color = entry.get("color")
            colors.append(
                {"name": name, "color_hex": str(color) if color is not None else None}
            )
        return colors


def _date_value(value: Any) -> str:
    # YAML turns unquoted ISO dates into datetime.date already
    if isinstance(value, (datetime.date, datetime.datetime)):
        return cell_to_iso_date(value)
    if value is None:
        return ""
    # Keep malformed text as-is; invalid rows are dropped when tasks are built
    text = str(value).strip()
    parsed = cell_to_iso_date(text)
    return parsed or text
