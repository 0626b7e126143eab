# SPDX-License-Identifier: MIT

import hashlib
import json
from typing import Any, Optional

from lobchart.configuration import DEFAULT_LOCALE
from lobchart.logging_config import get_logger
from lobchart.model.filter import ScheduleFilter
from lobchart.model.schedule import ScheduleRow, ServiceColor, StageRecord
from lobchart.model.task import Task
from lobchart.model.timeline import Timeline
from lobchart.repository.source import ScheduleSource
from lobchart.service.day_grid import build_day_grid, build_month_segments
from lobchart.service.stages import order_stages
from lobchart.service.tasks import build_legend, build_tasks
from lobchart.service.tracks import assign_tracks_by_stage
from lobchart.time import date_to_iso_str

logger = get_logger(__name__)


def compute_timeline(
    tasks: list[Task],
    stages: Optional[list[str]] = None,
    locale: str = DEFAULT_LOCALE,
) -> Optional[Timeline]:
    """
    Build the layout model: day grid, month segments and tracks per stage.

    Args:
        tasks: Validated tasks (see build_tasks)
        stages: Stage names in display order; inferred from the tasks when omitted
        locale: Locale for the month labels

    Returns:
        The timeline, or None when there is nothing to draw
    """
    day_grid = build_day_grid(tasks)
    if day_grid is None:
        return None

    stage_order = stages if stages is not None else order_stages(tasks)

    return {
        "day_grid": day_grid,
        "month_segments": build_month_segments(day_grid, locale),
        "tracks_by_stage": assign_tracks_by_stage(tasks, stage_order),
        "stages": list(stage_order),
        "tasks": list(tasks),
        "legend": build_legend(tasks),
    }


def timeline_from_schedule(
    rows: list[ScheduleRow],
    stage_records: Optional[list[StageRecord]] = None,
    service_colors: Optional[list[ServiceColor]] = None,
    filters: Optional[ScheduleFilter] = None,
    locale: str = DEFAULT_LOCALE,
) -> Optional[Timeline]:
    """Run the whole pipeline from raw schedule rows to the layout model."""
    tasks = build_tasks(rows, service_colors, filters)
    stages = order_stages(tasks, stage_records)
    return compute_timeline(tasks, stages, locale)


def timeline_from_source(
    source: ScheduleSource,
    obra_id: str,
    filters: Optional[ScheduleFilter] = None,
    locale: str = DEFAULT_LOCALE,
) -> Optional[Timeline]:
    """Load one obra from a storage collaborator and build its timeline."""
    return timeline_from_schedule(
        source.list_schedule(obra_id),
        source.list_stages(obra_id),
        source.list_service_colors(obra_id),
        filters,
        locale,
    )


def timeline_key(
    rows: list[ScheduleRow],
    stage_records: Optional[list[StageRecord]] = None,
    service_colors: Optional[list[ServiceColor]] = None,
    filters: Optional[ScheduleFilter] = None,
    locale: str = DEFAULT_LOCALE,
) -> str:
    """Content hash of every input that influences the timeline."""
    payload: dict[str, Any] = {
        "rows": [
            [
                row["id"],
                row["service"],
                row["stage"],
                row["start_date"],
                row["end_date"],
            ]
            for row in rows
        ],
        "stages": [[record["name"], record["order"]] for record in stage_records or []],
        "colors": [
            [color["name"], color["color_hex"]] for color in service_colors or []
        ],
        "filters": None,
        "locale": locale,
    }
    if filters is not None:
        payload["filters"] = {
            "services": sorted(filters["services"]),
            "stages": sorted(filters["stages"]),
            "date_from": date_to_iso_str(filters["date_from"])
            if filters["date_from"] is not None
            else None,
            "date_to": date_to_iso_str(filters["date_to"])
            if filters["date_to"] is not None
            else None,
        }
    raw = json.dumps(payload, ensure_ascii=False, sort_keys=True)
    return hashlib.sha256(raw.encode("utf-8")).hexdigest()


class TimelineCache:
    """
    Remembers the last computed timeline and the hash of the inputs behind it.

    Any change to rows, stage registry, service colors, filters or locale
    produces a new key and forces a recomputation.
    """

    def __init__(self) -> None:
        self._key: Optional[str] = None
        self._timeline: Optional[Timeline] = None
        self.hits = 0
        self.misses = 0

    def get(
        self,
        rows: list[ScheduleRow],
        stage_records: Optional[list[StageRecord]] = None,
        service_colors: Optional[list[ServiceColor]] = None,
        filters: Optional[ScheduleFilter] = None,
        locale: str = DEFAULT_LOCALE,
    ) -> Optional[Timeline]:
        key = timeline_key(rows, stage_records, service_colors, filters, locale)
        if key == self._key:
            self.hits += 1
            return self._timeline

        self.misses += 1
        self._timeline = timeline_from_schedule(
            rows, stage_records, service_colors, filters, locale
        )
        self._key = key
        logger.debug("Timeline recomputed", key=key[:12], rows=len(rows))
        return self._timeline

    def invalidate(self) -> None:
        self._key = None
        self._timeline = None
