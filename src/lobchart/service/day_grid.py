# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum

from lobchart.configuration import DEFAULT_LOCALE
from lobchart.model.task import Task
from lobchart.model.timeline import DayGrid, MonthSegment
from lobchart.service.tasks import task_date_bounds
from lobchart.logging_config import get_logger
from lobchart.time import (
    days_between,
    first_day_of_month,
    is_known_locale,
    last_day_of_month,
    month_label,
)

logger = get_logger(__name__)


def build_day_grid(tasks: list[Task]) -> Optional[DayGrid]:
    """
    Build the inclusive day axis covering every task, padded to whole months.

    The grid starts on the first day of the month holding the earliest start and
    ends on the last day of the month holding the latest end.

    Args:
        tasks: Validated tasks

    Returns:
        The day grid, or None when there are no tasks
    """
    bounds = task_date_bounds(tasks)
    if bounds is None:
        return None

    earliest, latest = bounds
    start = first_day_of_month(earliest)
    end = last_day_of_month(latest)

    days: list[pendulum.Date] = []
    current = start
    while current <= end:
        days.append(current)
        current = current.add(days=1)

    return {"start": start, "end": end, "days": days}


def build_month_segments(
    day_grid: Optional[DayGrid], locale: str = DEFAULT_LOCALE
) -> list[MonthSegment]:
    """
    Split the day axis into runs of days sharing a month label.

    Segments partition the grid exactly and are numbered chronologically; the
    number drives alternating month bands and month paging.
    """
    if day_grid is None or not day_grid["days"]:
        return []

    if not is_known_locale(locale):
        logger.warning(
            "Unknown locale, using default", locale=locale, default=DEFAULT_LOCALE
        )
        locale = DEFAULT_LOCALE

    days = day_grid["days"]
    segments: list[MonthSegment] = []
    segment_start = 0
    current_label = month_label(days[0], locale)

    for i in range(1, len(days)):
        label = month_label(days[i], locale)
        if label != current_label:
            segments.append(
                {
                    "start_index": segment_start,
                    "span_days": i - segment_start,
                    "label": current_label,
                    "segment_index": len(segments),
                }
            )
            segment_start = i
            current_label = label

    segments.append(
        {
            "start_index": segment_start,
            "span_days": len(days) - segment_start,
            "label": current_label,
            "segment_index": len(segments),
        }
    )
    return segments


def day_index(day_grid: DayGrid, date: pendulum.Date) -> int:
    """Number of days from the start of the grid to date."""
    return days_between(day_grid["start"], date)


def task_day_range(day_grid: DayGrid, task: Task) -> tuple[int, int]:
    """
    First and last day index occupied by a task, clamped to the grid.

    Both the screen layout and the spreadsheet export place bars with this range.
    """
    last = len(day_grid["days"]) - 1
    start_index = min(max(day_index(day_grid, task["start"]), 0), last)
    end_index = min(max(day_index(day_grid, task["end"]), start_index), last)
    return start_index, end_index


def segment_for_day(segments: list[MonthSegment], index: int) -> Optional[MonthSegment]:
    for segment in segments:
        if segment["start_index"] <= index < segment["start_index"] + segment["span_days"]:
            return segment
    return None
