"""Theme catalog.

The position of a theme in THEME_LIST is written into every hash, so new
themes go at the end and existing ones are never reordered.
"""

from dataclasses import dataclass
from typing import Dict, List, Tuple

BLACK = "#000000"


@dataclass(frozen=True)
class Theme:
    id: str
    name: str
    colors: Tuple[str, ...]


THEME_LIST: Tuple[Theme, ...] = (
    Theme("olives", "olives", ("#606c38", "#283618", "#fefae0", "#dda15e", "#bc6c25")),
    Theme("oceanFire", "ocean fire", ("#780000", "#c1121f", "#fdf0d5", "#003049", "#669bbc")),
    Theme("summerVibes", "summer vibes", ("#8ecae6", "#219ebc", "#023047", "#ffb703", "#fb8500")),
    Theme("sticky-pastell", "sticky pastell", ("#f6bd60", "#f7ede2", "#f5cac3", "#84a59d", "#f28482")),
    Theme("autumnIsh", "autumn-ish", ("#003049", "#d62828", "#f77f00", "#fcbf49", "#eae2b7")),
    Theme("beachDay", "beach day", ("#0b1320", "#ffd166", "#06d6a0", "#118ab2", "#ef476f")),
    Theme("francoPhile", "francophile", ("#0d1b2a", "#1b263b", "#415a77", "#E63946", "#e0e1dd")),
)

THEMES_BY_ID: Dict[str, Theme] = {t.id: t for t in THEME_LIST}

DEFAULT_THEME_ID = "olives"


def same_color(a: str | None, b: str | None) -> bool:
    if a is None or b is None:
        return False
    return a.lower() == b.lower()


def is_black(color: str | None) -> bool:
    return same_color(color, BLACK)


def theme_index(theme_id: str) -> int:
    """Position of theme_id in the catalog, 0 for unknown ids."""
    for idx, theme in enumerate(THEME_LIST):
        if theme.id == theme_id:
            return idx
    return 0


def theme_by_index(idx: int) -> Theme:
    idx = max(0, min(len(THEME_LIST) - 1, int(idx)))
    return THEME_LIST[idx]


def theme_colors(theme_id: str) -> Tuple[str, ...]:
    theme = THEMES_BY_ID.get(theme_id, THEME_LIST[0])
    return theme.colors


def background_palette(theme_id: str) -> List[str]:
    # Black first + theme colors
    return [BLACK, *theme_colors(theme_id)]


def signature_palette(theme_id: str) -> List[str]:
    return background_palette(theme_id)


def palette_index(palette: List[str], color: str | None) -> int:
    """Index of color in palette (case-insensitive), -1 if absent."""
    for idx, candidate in enumerate(palette):
        if same_color(candidate, color):
            return idx
    return -1
