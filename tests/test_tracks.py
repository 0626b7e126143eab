# tests/test_tracks.py
"""
Tests for first-fit track assignment inside a stage.
"""
import random

from lobchart.service.tracks import assign_tracks, assign_tracks_by_stage


def _overlaps(first, second):
    return first["start"] <= second["end"] and second["start"] <= first["end"]


def test_overlapping_tasks_get_separate_tracks(terreo_tasks):
    tracks = assign_tracks(terreo_tasks)

    assert len(tracks) == 2
    assert [task["id"] for task in tracks[0]] == ["t1"]
    assert [task["id"] for task in tracks[1]] == ["t2"]


def test_adjacent_tasks_share_a_track(make_task):
    """07-10 ends strictly before 07-11, so both fit on track 0."""
    tasks = [
        make_task("Térreo", "A", "2025-07-01", "2025-07-10"),
        make_task("Térreo", "B", "2025-07-11", "2025-07-20"),
    ]

    tracks = assign_tracks(tasks)

    assert len(tracks) == 1
    assert len(tracks[0]) == 2


def test_tasks_sharing_a_day_do_not_share_a_track(make_task):
    tasks = [
        make_task("Térreo", "A", "2025-07-01", "2025-07-10"),
        make_task("Térreo", "B", "2025-07-10", "2025-07-20"),
    ]

    assert len(assign_tracks(tasks)) == 2


def test_first_fit_reuses_lowest_free_track(make_task):
    tasks = [
        make_task("Térreo", "A", "2025-07-01", "2025-07-05"),
        make_task("Térreo", "B", "2025-07-03", "2025-07-20"),
        make_task("Térreo", "C", "2025-07-06", "2025-07-08"),
    ]

    tracks = assign_tracks(tasks)

    assert [[task["service"] for task in track] for track in tracks] == [["A", "C"], ["B"]]


def test_assignment_ignores_input_order(make_task):
    tasks = [
        make_task("Térreo", str(i), f"2025-07-{day:02d}", f"2025-07-{day + length:02d}")
        for i, (day, length) in enumerate([(1, 5), (3, 2), (6, 10), (8, 1), (12, 3), (20, 4)])
    ]
    expected = [[task["id"] for task in track] for track in assign_tracks(tasks)]

    shuffled = list(tasks)
    random.Random(7).shuffle(shuffled)

    assert [[task["id"] for task in track] for track in assign_tracks(shuffled)] == expected


def test_no_two_tasks_on_a_track_overlap(make_task):
    rng = random.Random(42)
    tasks = []
    for i in range(40):
        start = rng.randint(1, 25)
        tasks.append(
            make_task("Térreo", f"S{i}", f"2025-07-{start:02d}", f"2025-07-{start + rng.randint(0, 5):02d}")
        )

    tracks = assign_tracks(tasks)

    assert sum(len(track) for track in tracks) == len(tasks)
    for track in tracks:
        for i, first in enumerate(track):
            for second in track[i + 1:]:
                assert not _overlaps(first, second)


def test_stage_without_tasks_keeps_one_empty_track(terreo_tasks):
    tracks_by_stage = assign_tracks_by_stage(terreo_tasks, ["Cobertura", "Térreo"])

    assert tracks_by_stage["Cobertura"] == [[]]
    assert len(tracks_by_stage["Térreo"]) == 2
    assert list(tracks_by_stage) == ["Cobertura", "Térreo"]
