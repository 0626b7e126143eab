# SPDX-License-Identifier: MIT

from typing import Optional

from lobchart.color import text_color_for_background
from lobchart.configuration import (
    BAR_GAP,
    BAR_HEIGHT,
    BAR_INSET,
    DAY_WIDTH,
    FIT_SCALE_FLOOR,
    FIT_SCALE_MAX,
    LABEL_COLUMN_WIDTH,
    ZOOM_MAX,
    ZOOM_MIN,
)
from lobchart.model.geometry import (
    BarGeometry,
    DayCell,
    HeaderCell,
    LayoutConfig,
    StageGeometry,
    TimelineGeometry,
)
from lobchart.model.timeline import Timeline
from lobchart.service.day_grid import segment_for_day, task_day_range

MIN_SCALE = FIT_SCALE_FLOOR * ZOOM_MIN
MAX_SCALE = FIT_SCALE_MAX * ZOOM_MAX


def layout_config(
    day_width: float = DAY_WIDTH,
    bar_height: float = BAR_HEIGHT,
    bar_gap: float = BAR_GAP,
    label_column_width: float = LABEL_COLUMN_WIDTH,
    scale: float = 1.0,
    compact: bool = False,
) -> LayoutConfig:
    """Build a layout configuration, clamping values the UI may push out of range."""
    return {
        "day_width": max(day_width, 1),
        "bar_height": max(bar_height, 1),
        "bar_gap": max(bar_gap, 0),
        "label_column_width": max(label_column_width, 0),
        "scale": min(max(scale, MIN_SCALE), MAX_SCALE),
        "compact": compact,
    }


def stage_block_height(track_count: int, bar_height: float, bar_gap: float) -> float:
    """Height of one stage row block; never lower than a single track."""
    return max(
        track_count * (bar_height + bar_gap) + bar_gap,
        bar_height + bar_gap * 2,
    )


def project(
    timeline: Optional[Timeline], config: Optional[LayoutConfig] = None
) -> Optional[TimelineGeometry]:
    """
    Convert the timeline model into pixel geometry for a screen renderer.

    Bars are positioned relative to their stage row block; stage blocks are
    stacked below the month and day header rows. Every length is multiplied by
    the configured scale.

    Args:
        timeline: Result of compute_timeline
        config: Layout configuration (see layout_config)

    Returns:
        The geometry, or None when the timeline is empty
    """
    if timeline is None:
        return None

    # Re-clamp in case the caller built the dict by hand
    config = layout_config(
        **(config if config is not None else layout_config())  # type: ignore[arg-type]
    )
    scale = config["scale"]
    day_width = config["day_width"]
    bar_height = config["bar_height"]
    bar_gap = config["bar_gap"]
    compact = config["compact"]

    day_grid = timeline["day_grid"]
    segments = timeline["month_segments"]
    total_days = len(day_grid["days"])
    timeline_width = total_days * day_width

    month_header: list[HeaderCell] = [
        {
            "label": segment["label"],
            "segment_index": segment["segment_index"],
            "start_index": segment["start_index"],
            "span_days": segment["span_days"],
            "x": segment["start_index"] * day_width * scale,
            "width": segment["span_days"] * day_width * scale,
            "shaded": segment["segment_index"] % 2 == 0,
        }
        for segment in segments
    ]

    day_header: list[DayCell] = []
    for index, day in enumerate(day_grid["days"]):
        segment = segment_for_day(segments, index)
        segment_index = segment["segment_index"] if segment is not None else 0
        day_header.append(
            {
                "index": index,
                "day_of_month": day.day,
                "segment_index": segment_index,
                "x": index * day_width * scale,
                "width": day_width * scale,
                "shaded": segment_index % 2 == 0,
            }
        )

    header_row_height = (bar_height + bar_gap) * scale
    # Month row and day row
    y_offset = header_row_height * 2

    stages: list[StageGeometry] = []
    for row_index, stage in enumerate(timeline["stages"]):
        tracks = timeline["tracks_by_stage"].get(stage) or [[]]
        bars: list[BarGeometry] = []
        for track_index, track in enumerate(tracks):
            # Compact rows draw a single full-width bar per track
            for task in track[:1] if compact else track:
                start_index, end_index = task_day_range(day_grid, task)
                span = max(end_index - start_index + 1, 1)
                if compact:
                    x = 0.0
                    width = timeline_width
                else:
                    x = start_index * day_width
                    width = max(span * day_width - BAR_INSET, day_width)
                bars.append(
                    {
                        "task_id": task["id"],
                        "stage": stage,
                        "service": task["service"],
                        "color": task["color"],
                        "text_color": f"#{text_color_for_background(task['color'])}",
                        "track_index": track_index,
                        "start_index": start_index,
                        "end_index": end_index,
                        "x": x * scale,
                        "y": (track_index * (bar_height + bar_gap) + bar_gap) * scale,
                        "width": width * scale,
                        "height": bar_height * scale,
                    }
                )

        height = stage_block_height(len(tracks), bar_height, bar_gap) * scale
        stages.append(
            {
                "stage": stage,
                "row_index": row_index,
                "y": y_offset,
                "height": height,
                "track_count": len(tracks),
                "task_count": sum(len(track) for track in tracks),
                "bars": bars,
            }
        )
        y_offset += height

    # Footer rows mirror the header
    total_height = y_offset + header_row_height * 2
    label_column_width = config["label_column_width"] * scale

    return {
        "scale": scale,
        "compact": compact,
        "day_width": day_width * scale,
        "label_column_width": label_column_width,
        "timeline_width": timeline_width * scale,
        "total_width": label_column_width + timeline_width * scale,
        "total_height": total_height,
        "header_row_height": header_row_height,
        "month_header": month_header,
        "day_header": day_header,
        "stages": stages,
    }
