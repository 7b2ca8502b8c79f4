"""Hash encoding of the visible parameter set.

Format: ``seed-theme-complexity-aspect-bg[-sig]``, every field base 36.
``sig`` is the literal ``a`` for the automatic signature color. Hashes from
older versions stop after three or five fields and still decode.
"""

import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from geogrid.themes import (
    THEME_LIST,
    background_palette,
    palette_index,
    signature_palette,
    theme_index,
)

if TYPE_CHECKING:
    from geogrid.state import Configuration

logger = logging.getLogger(__name__)

ASPECT_MODES = ("square", "landscape", "portrait")
AUTO_TOKEN = "a"
MIN_COMPLEXITY = 1
MAX_COMPLEXITY = 5

_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"
_BASE36_RE = re.compile(r"^[0-9a-z]+$", re.IGNORECASE)


@dataclass(frozen=True)
class DecodedHash:
    seed: int
    theme_index: int
    complexity: int
    aspect_mode: str
    bg_index: int
    sig_index: int | None  # None = auto


def to_base36(value: int) -> str:
    if value < 0:
        raise ValueError(f"base36 fields are non-negative, got {value}")
    if value == 0:
        return "0"
    out = []
    while value:
        value, rem = divmod(value, 36)
        out.append(_DIGITS[rem])
    return "".join(reversed(out))


def parse_base36(text: str) -> int | None:
    """Strict base-36 parse; None for anything that is not all digits/letters."""
    if not _BASE36_RE.match(text):
        return None
    return int(text, 36)


def aspect_index(aspect_mode: str) -> int:
    if aspect_mode == "landscape":
        return 1
    if aspect_mode == "portrait":
        return 2
    return 0


def aspect_from_index(idx: int | None) -> str:
    if idx == 1:
        return "landscape"
    if idx == 2:
        return "portrait"
    return "square"


def _clamp(value: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, value))


def encode(config: "Configuration") -> str:
    bg_idx = palette_index(background_palette(config.theme_id), config.bg_color)
    if bg_idx < 0:
        bg_idx = 0

    if config.sig_color is None:
        sig_part = AUTO_TOKEN
    else:
        sig_idx = palette_index(signature_palette(config.theme_id), config.sig_color)
        sig_part = AUTO_TOKEN if sig_idx < 0 else to_base36(sig_idx)

    fields = [
        to_base36(config.seed),
        to_base36(theme_index(config.theme_id)),
        to_base36(config.complexity),
        to_base36(aspect_index(config.aspect_mode)),
        to_base36(bg_idx),
    ]
    return "-".join(fields + [sig_part])


def _decode(text: str) -> DecodedHash | None:
    parts = text.split("-")
    if len(parts) < 3:
        return None

    seed = parse_base36(parts[0])
    theme_idx = parse_base36(parts[1])
    complexity = parse_base36(parts[2])
    if seed is None or theme_idx is None or complexity is None:
        return None
    if not MIN_COMPLEXITY <= complexity <= MAX_COMPLEXITY:
        return None
    if not 0 <= theme_idx < len(THEME_LIST):
        return None

    aspect_mode = aspect_from_index(parse_base36(parts[3]) if len(parts) >= 4 else 0)

    # Palettes come from the decoded theme, not whatever is active now.
    theme_id = THEME_LIST[theme_idx].id
    bg_palette = background_palette(theme_id)
    raw_bg = parse_base36(parts[4]) if len(parts) >= 5 else 0
    bg_index = _clamp(raw_bg or 0, 0, len(bg_palette) - 1)

    sig_index = None
    if len(parts) >= 6 and parts[5] != AUTO_TOKEN:
        raw_sig = parse_base36(parts[5])
        if raw_sig is not None:
            sig_index = _clamp(raw_sig, 0, len(signature_palette(theme_id)) - 1)

    return DecodedHash(
        seed=seed,
        theme_index=theme_idx,
        complexity=complexity,
        aspect_mode=aspect_mode,
        bg_index=bg_index,
        sig_index=sig_index,
    )


def decode(text: str) -> DecodedHash | None:
    """Parse a hash; None when it is malformed or out of range."""
    try:
        return _decode(text.strip())
    except (AttributeError, TypeError, ValueError) as e:
        logger.error("Invalid hash %r: %s", text, e)
        return None
