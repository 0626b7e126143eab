# tests/test_viewport.py
"""
Tests for month paging, zoom and fit-to-viewport scaling.
"""
import pytest

from lobchart.service.day_grid import build_day_grid, build_month_segments
from lobchart.service.viewport import ViewportController, clamp_zoom, fit_scale_for


@pytest.fixture
def segments(make_task):
    tasks = [make_task("Térreo", "A", "2025-07-04", "2025-09-10")]
    return build_month_segments(build_day_grid(tasks), "en")


def _measurement(content_width, content_height, viewport_width, viewport_height):
    return {
        "content_width": content_width,
        "content_height": content_height,
        "viewport_width": viewport_width,
        "viewport_height": viewport_height,
    }


def test_paging_is_clamped_to_available_months(segments):
    viewport = ViewportController(segments)

    assert viewport.previous_month() == 0
    assert viewport.next_month() == 1
    assert viewport.next_month() == 2
    assert viewport.next_month() == 2
    assert viewport.go_to_month(-5) == 0
    assert viewport.go_to_month(99) == 2


def test_scroll_offset_brings_month_to_left_edge(segments):
    viewport = ViewportController(segments)
    viewport.go_to_month(2)

    assert viewport.current_segment["label"] == "SEP 2025"
    assert viewport.scroll_offset(28) == 62 * 28


def test_visible_day_range_starts_at_current_month(segments):
    viewport = ViewportController(segments)
    viewport.go_to_month(1)

    assert viewport.visible_day_range(3, 30, 92) == (31, 41)
    assert viewport.visible_day_range(3, 3000, 92) == (31, 92)


def test_set_segments_keeps_index_in_range(segments):
    viewport = ViewportController(segments)
    viewport.go_to_month(2)

    viewport.set_segments(segments[:1])

    assert viewport.current_month_index == 0


def test_empty_viewport_has_no_current_month():
    viewport = ViewportController()

    assert viewport.current_segment is None
    assert viewport.next_month() == 0
    assert viewport.scroll_offset(28) == 0
    assert viewport.visible_day_range(28, 500, 0) == (0, 0)


def test_zoom_is_rounded_and_bounded():
    viewport = ViewportController()

    assert viewport.zoom_in() == pytest.approx(1.2)
    assert viewport.zoom_out() == pytest.approx(1.0)
    for _ in range(100):
        viewport.zoom_out()
    assert viewport.zoom_level == pytest.approx(0.2)
    for _ in range(100):
        viewport.zoom_in()
    assert viewport.zoom_level == pytest.approx(6.0)
    assert clamp_zoom(1.04) == pytest.approx(1.0)


def test_zoom_rounds_half_up():
    assert clamp_zoom(1.25) == pytest.approx(1.3)
    assert clamp_zoom(0.35) == pytest.approx(0.4)
    assert clamp_zoom(2.45) == pytest.approx(2.5)


def test_wheel_down_zooms_out_and_up_zooms_in():
    viewport = ViewportController()

    assert viewport.wheel(120) == pytest.approx(0.9)
    assert viewport.wheel(-120) == pytest.approx(1.0)
    assert viewport.wheel(0) == pytest.approx(1.0)


def test_fit_scale_shrinks_but_never_below_floor():
    assert fit_scale_for(_measurement(1000, 500, 900, 500)) == pytest.approx(0.9)
    assert fit_scale_for(_measurement(4000, 500, 900, 500)) == pytest.approx(0.8)
    assert fit_scale_for(_measurement(500, 200, 900, 500)) == pytest.approx(1.0)
    assert fit_scale_for(_measurement(0, 0, 900, 500)) == pytest.approx(1.0)


def test_applied_scale_combines_fit_and_zoom():
    viewport = ViewportController()
    viewport.recompute_fit(lambda: _measurement(1000, 500, 900, 500))
    viewport.zoom_in()

    assert viewport.applied_scale == pytest.approx(0.9 * 1.2)


def test_refit_only_when_content_size_changes():
    viewport = ViewportController()
    calls = []

    def measure():
        calls.append(1)
        return _measurement(1000, 500, 900, 500)

    viewport.refit_if_changed(61, 2, 3, measure)
    viewport.refit_if_changed(61, 2, 3, measure)
    viewport.refit_if_changed(92, 2, 3, measure)

    assert len(calls) == 2


def test_reset_restores_defaults():
    viewport = ViewportController()
    viewport.recompute_fit(lambda: _measurement(4000, 500, 900, 500))
    viewport.zoom_in()

    viewport.reset()

    assert viewport.fit_scale == 1.0
    assert viewport.zoom_level == 1.0
