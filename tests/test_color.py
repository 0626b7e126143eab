# tests/test_color.py
"""
Tests for service color resolution and contrast text.
"""
from lobchart.color import (
    DARK_TEXT_COLOR,
    DEFAULT_COLOR,
    FALLBACK_COLORS,
    LIGHT_TEXT_COLOR,
    fallback_color,
    hex_to_excel_argb,
    normalize_hex_color,
    resolve_service_color,
    text_color_for_background,
)


def test_normalize_strips_hash_and_uppercases():
    assert normalize_hex_color("#2563eb") == "2563EB"
    assert normalize_hex_color("f97316") == "F97316"


def test_normalize_expands_short_form():
    assert normalize_hex_color("#abc") == "AABBCC"


def test_normalize_malformed_uses_fallback():
    assert normalize_hex_color("not-a-color") == "2563EB"
    assert normalize_hex_color("", fallback="#22C55E") == "22C55E"
    assert normalize_hex_color(None) == "2563EB"


def test_registered_color_wins_over_palette():
    """A registered color is used as-is, normalized to #RRGGBB."""
    assert resolve_service_color("Estrutura", "#f97316") == "#F97316"


def test_unparseable_registered_color_falls_back_to_default_blue():
    assert resolve_service_color("Estrutura", "#zzzzzz") == DEFAULT_COLOR


def test_unregistered_service_gets_deterministic_palette_color():
    first = resolve_service_color("Alvenaria")
    second = resolve_service_color("Alvenaria")

    assert first == second
    assert first in FALLBACK_COLORS


def test_fallback_color_is_sum_of_code_points_modulo_palette():
    name = "Pintura"
    expected = FALLBACK_COLORS[sum(ord(char) for char in name) % len(FALLBACK_COLORS)]
    assert fallback_color(name) == expected


def test_fallback_color_uses_custom_palette():
    assert fallback_color("anything", ["#111111"]) == "#111111"


def test_blank_registered_color_uses_palette():
    assert resolve_service_color("Pintura", "   ") == fallback_color("Pintura")


def test_text_color_dark_on_light_background():
    assert text_color_for_background("#FACC15") == DARK_TEXT_COLOR
    assert text_color_for_background("#FFFFFF") == DARK_TEXT_COLOR


def test_text_color_light_on_dark_background():
    assert text_color_for_background("#2563EB") == LIGHT_TEXT_COLOR
    assert text_color_for_background("#000000") == LIGHT_TEXT_COLOR


def test_excel_argb_has_opaque_alpha():
    assert hex_to_excel_argb("#2563eb") == "FF2563EB"
