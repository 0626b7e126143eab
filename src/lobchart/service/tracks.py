# SPDX-License-Identifier: MIT

from lobchart.model.task import Task
from lobchart.model.timeline import Track


def assign_tracks(tasks: list[Task]) -> list[Track]:
    """
    Spread the tasks of one stage over horizontal tracks so none overlap.

    Tasks are taken in (start, end) order and placed on the first track whose
    last task ends strictly before the new start; a new track is opened when no
    track qualifies. Two tasks never share a day on the same track.

    Args:
        tasks: Tasks of a single stage

    Returns:
        Tracks in index order, each sorted by start
    """
    ordered = sorted(tasks, key=lambda task: (task["start"], task["end"]))

    tracks: list[Track] = []
    for task in ordered:
        for track in tracks:
            if track[-1]["end"] < task["start"]:
                track.append(task)
                break
        else:
            tracks.append([task])

    return tracks


def assign_tracks_by_stage(
    tasks: list[Task], stages: list[str]
) -> dict[str, list[Track]]:
    """
    Track assignment for every stage row.

    A stage without tasks still gets one empty track so its row keeps a height.
    """
    grouped: dict[str, list[Task]] = {stage: [] for stage in stages}
    for task in tasks:
        if task["stage"] in grouped:
            grouped[task["stage"]].append(task)

    tracks_by_stage: dict[str, list[Track]] = {}
    for stage, stage_tasks in grouped.items():
        tracks = assign_tracks(stage_tasks)
        tracks_by_stage[stage] = tracks if tracks else [[]]
    return tracks_by_stage
