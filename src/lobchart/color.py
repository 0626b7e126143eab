# SPDX-License-Identifier: MIT

import re
from typing import Optional

# Default bar color, also used when a registered color cannot be parsed
DEFAULT_COLOR = "#2563EB"

# Colors handed out to services without a registered color
FALLBACK_COLORS = [
    "#2563EB",
    "#0EA5E9",
    "#22C55E",
    "#F97316",
    "#D946EF",
    "#FACC15",
    "#14B8A6",
    "#FB7185",
    "#9CA3AF",
]

# Text colors for labels drawn on top of a bar
DARK_TEXT_COLOR = "0F172A"
LIGHT_TEXT_COLOR = "FFFFFF"
LUMA_THRESHOLD = 180

# Month banding, shared by the terminal view and the spreadsheet export
MONTH_HEADER_FILLS = ("E5E7EB", "D1D5DB")
MONTH_DAY_FILLS = ("F1F5F9", "E2E8F0")
LABEL_HEADER_FILL = "EDF2FF"
STAGE_LABEL_FILL = "F8FAFC"
BLANK_FILL = "FFFFFF"
GRID_LINE_COLOR = "E2E8F0"

_HEX_PATTERN = re.compile(r"^[0-9A-F]{6}$")


def normalize_hex_color(value: Optional[str], fallback: str = DEFAULT_COLOR) -> str:
    """
    Normalize a hex color to six uppercase digits without the leading '#'.

    Three digit colors are expanded ("#abc" -> "AABBCC"). Empty or malformed
    values resolve to the fallback.

    Args:
        value: A color such as "#2563eb", "2563EB" or "#abc"
        fallback: Color used when value cannot be parsed

    Returns:
        Six hex digits, e.g. "2563EB"
    """
    candidate = value.strip() if isinstance(value, str) and value.strip() else fallback
    normalized = candidate.replace("#", "").upper()
    if len(normalized) == 3:
        normalized = "".join(char * 2 for char in normalized)
    if not _HEX_PATTERN.match(normalized):
        normalized = fallback.replace("#", "").upper()
    return normalized


def fallback_color(service_name: str, palette: Optional[list[str]] = None) -> str:
    """Deterministic palette color for a service without a registered color."""
    colors = palette if palette else FALLBACK_COLORS
    index = sum(ord(char) for char in service_name) % len(colors)
    return colors[index]


def resolve_service_color(
    service_name: str,
    registered_color: Optional[str] = None,
    palette: Optional[list[str]] = None,
) -> str:
    """
    Resolve the display color of a service.

    A registered color always wins over the palette fallback.

    Returns:
        Color in "#RRGGBB" form
    """
    if registered_color is not None and registered_color.strip():
        return f"#{normalize_hex_color(registered_color)}"
    return f"#{normalize_hex_color(fallback_color(service_name, palette))}"


def text_color_for_background(color: str) -> str:
    """Return dark text for light backgrounds and light text otherwise."""
    normalized = normalize_hex_color(color)
    r = int(normalized[0:2], 16)
    g = int(normalized[2:4], 16)
    b = int(normalized[4:6], 16)
    luma = 0.299 * r + 0.587 * g + 0.114 * b
    return DARK_TEXT_COLOR if luma > LUMA_THRESHOLD else LIGHT_TEXT_COLOR


def hex_to_excel_argb(color: str) -> str:
    return f"FF{normalize_hex_color(color)}"


def hex_to_rich(color: str) -> str:
    return f"#{normalize_hex_color(color)}"
