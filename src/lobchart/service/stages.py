# SPDX-License-Identifier: MIT

from typing import Optional

from lobchart.model.schedule import StageRecord
from lobchart.model.task import Task
from lobchart.service.text import natural_key


def order_stages(
    tasks: list[Task],
    stage_records: Optional[list[StageRecord]] = None,
    include_empty: bool = False,
) -> list[str]:
    """
    Decide the top-to-bottom order of the stage rows.

    With a stage registry the registered order wins. Registered stages without
    tasks are left out unless include_empty is set, and stages that only appear
    in the schedule are appended after the registered ones. Without a registry
    the stage names are ordered highest first, comparing digit runs numerically,
    so upper floors sit above lower ones.

    Args:
        tasks: Tasks to be displayed
        stage_records: Optional stage registry entries with explicit order
        include_empty: Keep registered stages that have no tasks

    Returns:
        Stage names in display order
    """
    used = list(dict.fromkeys(task["stage"] for task in tasks))
    fallback = sorted(used, key=natural_key, reverse=True)

    if not stage_records:
        return fallback

    registered = [
        record["name"]
        for record in sorted(stage_records, key=lambda record: record["order"])
    ]
    used_set = set(used)
    ordered = [
        name
        for name in dict.fromkeys(registered)
        if include_empty or name in used_set
    ]
    registered_set = set(registered)
    ordered.extend(name for name in fallback if name not in registered_set)
    return ordered
