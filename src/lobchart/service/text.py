# SPDX-License-Identifier: MIT

import re
import unicodedata

_DIGITS = re.compile(r"(\d+)")


def normalize_name(value: str) -> str:
    """Trimmed, case-folded form used to compare service and stage names."""
    return value.strip().casefold()


def strip_accents(value: str) -> str:
    decomposed = unicodedata.normalize("NFD", value)
    return "".join(char for char in decomposed if not unicodedata.combining(char))


def collation_key(value: str) -> str:
    """Case and accent insensitive key for alphabetical ordering."""
    return strip_accents(value).casefold().strip()


def natural_key(value: str) -> tuple[tuple[int, int, str], ...]:
    """
    Case and accent insensitive key that compares digit runs numerically.

    "Pavimento 10" sorts after "Pavimento 9".
    """
    parts = _DIGITS.split(collation_key(value))
    key: list[tuple[int, int, str]] = []
    for part in parts:
        if not part:
            continue
        if part.isdigit():
            key.append((0, int(part), ""))
        else:
            key.append((1, 0, part))
    return tuple(key)


def slugify(value: str, default: str = "timeline") -> str:
    """
    File-name safe slug: accents removed, punctuation dropped, spaces to hyphens.

    "Edifício Aurora / Torre B" -> "Edificio-Aurora-Torre-B"
    """
    stripped = strip_accents(value)
    cleaned = re.sub(r"[^\w\s-]", "", stripped).strip()
    slug = re.sub(r"\s+", "-", cleaned)
    return slug or default
