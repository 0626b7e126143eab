# SPDX-License-Identifier: MIT

import math
from typing import Callable, Optional, TypedDict

from lobchart.configuration import (
    BUTTON_ZOOM_STEP,
    FIT_SCALE_FLOOR,
    FIT_SCALE_MAX,
    WHEEL_ZOOM_STEP,
    ZOOM_DEFAULT,
    ZOOM_MAX,
    ZOOM_MIN,
)
from lobchart.model.timeline import MonthSegment


class Measurement(TypedDict):
    content_width: float
    content_height: float
    viewport_width: float
    viewport_height: float


MeasureCallback = Callable[[], Measurement]


def clamp_zoom(value: float) -> float:
    """Clamp a zoom level to its bounds, rounded half up to one decimal."""
    return min(ZOOM_MAX, max(ZOOM_MIN, math.floor(value * 10 + 0.5) / 10))


def fit_scale_for(measurement: Measurement) -> float:
    """
    Scale that fits the unscaled content inside the viewport.

    The result never drops below the floor; content that still overflows is
    scrolled instead of shrunk further.
    """
    content_width = measurement["content_width"]
    content_height = measurement["content_height"]
    viewport_width = measurement["viewport_width"]
    viewport_height = measurement["viewport_height"]
    if (
        content_width <= 0
        or content_height <= 0
        or viewport_width <= 0
        or viewport_height <= 0
    ):
        return FIT_SCALE_MAX

    scale = min(
        viewport_width / content_width, viewport_height / content_height, FIT_SCALE_MAX
    )
    return max(FIT_SCALE_FLOOR, min(scale, FIT_SCALE_MAX))


class ViewportController:
    """
    Paging and zoom state for a rendered timeline.

    The controller only reads the month segments and produces scroll offsets
    and scale factors; it never changes the timeline model.
    """

    def __init__(self, segments: Optional[list[MonthSegment]] = None) -> None:
        self._segments: list[MonthSegment] = []
        self.current_month_index = 0
        self.zoom_level = ZOOM_DEFAULT
        self.fit_scale = FIT_SCALE_MAX
        self._content_key: Optional[tuple[int, int, int]] = None
        if segments is not None:
            self.set_segments(segments)

    @property
    def segments(self) -> list[MonthSegment]:
        return self._segments

    @property
    def applied_scale(self) -> float:
        return self.fit_scale * self.zoom_level

    @property
    def current_segment(self) -> Optional[MonthSegment]:
        if not self._segments:
            return None
        return self._segments[self.current_month_index]

    def set_segments(self, segments: list[MonthSegment]) -> None:
        """Adopt a recomputed segmentation, keeping the current month in range."""
        self._segments = list(segments)
        if not self._segments:
            self.current_month_index = 0
            return
        self.current_month_index = min(
            self.current_month_index, len(self._segments) - 1
        )

    def go_to_month(self, index: int) -> int:
        if not self._segments:
            return self.current_month_index
        self.current_month_index = max(0, min(len(self._segments) - 1, index))
        return self.current_month_index

    def next_month(self) -> int:
        return self.go_to_month(self.current_month_index + 1)

    def previous_month(self) -> int:
        return self.go_to_month(self.current_month_index - 1)

    def scroll_offset(self, day_width: float) -> float:
        """Horizontal offset that brings the current month to the left edge."""
        segment = self.current_segment
        if segment is None:
            return 0.0
        return segment["start_index"] * day_width

    def visible_day_range(
        self, day_width: float, viewport_width: float, total_days: int
    ) -> tuple[int, int]:
        """
        Day indices [first, last) visible from the current scroll offset.

        Args:
            day_width: Width of one day column in viewport units
            viewport_width: Width available to the day columns
            total_days: Length of the day grid

        Returns:
            Half-open range of day indices
        """
        if total_days <= 0:
            return 0, 0
        day_width = max(day_width, 1)
        first = int(self.scroll_offset(day_width) // day_width)
        visible = max(int(viewport_width // day_width), 1)
        return first, min(first + visible, total_days)

    def zoom(self, step: float) -> float:
        self.zoom_level = clamp_zoom(self.zoom_level + step)
        return self.zoom_level

    def zoom_in(self, step: float = BUTTON_ZOOM_STEP) -> float:
        return self.zoom(abs(step))

    def zoom_out(self, step: float = BUTTON_ZOOM_STEP) -> float:
        return self.zoom(-abs(step))

    def wheel(self, delta_y: float) -> float:
        """Scrolling down zooms out, scrolling up zooms in."""
        if delta_y == 0:
            return self.zoom_level
        return self.zoom(-WHEEL_ZOOM_STEP if delta_y > 0 else WHEEL_ZOOM_STEP)

    def recompute_fit(self, measure: MeasureCallback) -> float:
        """Measure content against the viewport and update the fit scale."""
        self.fit_scale = fit_scale_for(measure())
        return self.fit_scale

    def refit_if_changed(
        self,
        total_days: int,
        stage_count: int,
        task_count: int,
        measure: MeasureCallback,
    ) -> float:
        """Recompute the fit only when the size of the content has changed."""
        key = (total_days, stage_count, task_count)
        if key != self._content_key:
            self._content_key = key
            self.recompute_fit(measure)
        return self.fit_scale

    def reset(self) -> None:
        """Leave the expanded view: fit and zoom return to their defaults."""
        self.fit_scale = FIT_SCALE_MAX
        self.zoom_level = ZOOM_DEFAULT
        self._content_key = None
