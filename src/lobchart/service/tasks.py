# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum

from lobchart.color import resolve_service_color
from lobchart.logging_config import get_logger
from lobchart.model.filter import ScheduleFilter
from lobchart.model.schedule import (
    DEFAULT_SERVICE,
    DEFAULT_STAGE,
    ScheduleRow,
    ServiceColor,
)
from lobchart.model.task import LegendEntry, Task
from lobchart.service.text import collation_key, natural_key, normalize_name
from lobchart.time import date_from_str_optional

logger = get_logger(__name__)


def build_tasks(
    rows: list[ScheduleRow],
    service_colors: Optional[list[ServiceColor]] = None,
    filters: Optional[ScheduleFilter] = None,
    palette: Optional[list[str]] = None,
) -> list[Task]:
    """
    Turn raw schedule rows into validated timeline tasks.

    Rows with a missing or malformed date, or whose end precedes the start, are
    dropped; they never abort the build for their siblings.

    Args:
        rows: Schedule rows as delivered by storage or the importer
        service_colors: Registered service colors (matched case-insensitively)
        filters: Optional service/stage/date filters applied after validation
        palette: Fallback palette override

    Returns:
        Tasks in row order
    """
    registered: dict[str, Optional[str]] = {}
    for service_color in service_colors or []:
        key = normalize_name(service_color["name"])
        if key not in registered:
            registered[key] = service_color["color_hex"]

    tasks: list[Task] = []
    skipped = 0
    for row in rows:
        stage = (row["stage"] or "").strip() or DEFAULT_STAGE
        service = (row["service"] or "").strip() or DEFAULT_SERVICE
        start = date_from_str_optional(row["start_date"])
        end = date_from_str_optional(row["end_date"])
        if start is None or end is None or end < start:
            skipped += 1
            continue

        tasks.append(
            {
                "id": row["id"],
                "stage": stage,
                "service": service,
                "start": start,
                "end": end,
                "color": resolve_service_color(
                    service, registered.get(normalize_name(service)), palette
                ),
            }
        )

    if skipped:
        logger.debug("Skipped invalid schedule rows", skipped=skipped, kept=len(tasks))

    if filters is not None:
        tasks = filter_tasks(tasks, filters)

    return tasks


def filter_tasks(tasks: list[Task], filters: ScheduleFilter) -> list[Task]:
    """
    Apply service, stage and date filters.

    Services and stages are compared trimmed and case-insensitively. A task is
    kept by the date filter when it overlaps [date_from, date_to]; an inverted
    range is swapped.
    """
    services = {normalize_name(service) for service in filters["services"]}
    stages = {normalize_name(stage) for stage in filters["stages"]}
    date_from = filters["date_from"]
    date_to = filters["date_to"]
    if date_from is not None and date_to is not None and date_from > date_to:
        date_from, date_to = date_to, date_from

    filtered: list[Task] = []
    for task in tasks:
        if services and normalize_name(task["service"]) not in services:
            continue
        if stages and normalize_name(task["stage"]) not in stages:
            continue
        if date_from is not None and task["end"] < date_from:
            continue
        if date_to is not None and task["start"] > date_to:
            continue
        filtered.append(task)
    return filtered


def available_services(tasks: list[Task]) -> list[str]:
    """Distinct service names in alphabetical order."""
    return sorted(dict.fromkeys(task["service"] for task in tasks), key=collation_key)


def available_stages(tasks: list[Task]) -> list[str]:
    """Distinct stage names, highest first ("Pavimento 10" before "Pavimento 2")."""
    return sorted(
        dict.fromkeys(task["stage"] for task in tasks), key=natural_key, reverse=True
    )


def build_legend(tasks: list[Task]) -> list[LegendEntry]:
    """One entry per service, keeping the color of its first task."""
    legend: dict[str, str] = {}
    for task in tasks:
        if task["service"] not in legend:
            legend[task["service"]] = task["color"]
    return [{"service": service, "color": color} for service, color in legend.items()]


def task_date_bounds(
    tasks: list[Task],
) -> Optional[tuple[pendulum.Date, pendulum.Date]]:
    """Earliest start and latest end, found with a single pass."""
    if not tasks:
        return None
    earliest = tasks[0]["start"]
    latest = tasks[0]["end"]
    for task in tasks[1:]:
        if task["start"] < earliest:
            earliest = task["start"]
        if task["end"] > latest:
            latest = task["end"]
    return earliest, latest
