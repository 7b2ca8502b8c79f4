"""Session state: the parameter set, its derived grid and the current pattern.

Everything that used to be a page global lives on a ``Session`` that callers
own and pass around. Setters validate first and only then write, so a
rejected value never leaves the configuration half changed.
"""

import logging
import math
import random
from dataclasses import dataclass, replace
from typing import List, Tuple

from geogrid import codec
from geogrid.modes import DEFAULT_MODE, MODES, Pattern, generate_pattern
from geogrid.rng import SeededRandom
from geogrid.themes import (
    BLACK,
    DEFAULT_THEME_ID,
    THEME_LIST,
    THEMES_BY_ID,
    background_palette,
    is_black,
    palette_index,
    signature_palette,
    theme_colors,
    theme_index,
)

logger = logging.getLogger(__name__)

MAX_SEED = 999999999
MIN_GRID_SIZE = 2
ELONGATION = 1.5

DEFAULT_CANVAS_HEIGHT = 700

AUTO_SIG_ON_BLACK = "#888888"
AUTO_SIG_ON_COLOR = "#000000"


def _round_half_up(value: float) -> int:
    # Math.round semantics; Python's round() would turn 4.5 into 4.
    return math.floor(value + 0.5)


def grid_dims(aspect_mode: str, grid_size: int) -> Tuple[int, int]:
    """(cols, rows) for an aspect mode; the long axis gets 1.5x the tiles."""
    long_side = _round_half_up(grid_size * ELONGATION)
    if aspect_mode == "landscape":
        cols, rows = long_side, grid_size
    elif aspect_mode == "portrait":
        cols, rows = grid_size, long_side
    else:
        cols, rows = grid_size, grid_size
    return max(MIN_GRID_SIZE, cols), max(MIN_GRID_SIZE, rows)


def canvas_size_for_aspect(aspect_mode: str, base_height: int) -> Tuple[int, int]:
    """Canvas (width, height) for an aspect mode at a given height."""
    if aspect_mode == "landscape":
        # 3:2
        return math.floor(base_height * 1.5), base_height
    if aspect_mode == "portrait":
        # 2:3
        return math.floor(base_height * (2 / 3)), base_height
    return base_height, base_height


def random_seed(rng: random.Random | None = None) -> int:
    rng = rng or random.Random()
    return rng.randrange(MAX_SEED)


@dataclass
class Configuration:
    seed: int = 0
    theme_id: str = DEFAULT_THEME_ID
    complexity: int = 2
    aspect_mode: str = "square"
    grid_size: int = 10
    bg_color: str = BLACK
    sig_color: str | None = None  # None = auto
    mode: str = DEFAULT_MODE
    show_grid: bool = True

    @property
    def grid_cols(self) -> int:
        return grid_dims(self.aspect_mode, self.grid_size)[0]

    @property
    def grid_rows(self) -> int:
        return grid_dims(self.aspect_mode, self.grid_size)[1]


def effective_sig_color(config: Configuration) -> str:
    """Signature color, resolving auto against the background."""
    if config.sig_color is not None:
        return config.sig_color
    return AUTO_SIG_ON_BLACK if is_black(config.bg_color) else AUTO_SIG_ON_COLOR


class Session:
    """One user's configuration plus the pattern generated from it."""

    def __init__(self, config: Configuration | None = None) -> None:
        self.config = replace(config) if config is not None else Configuration(seed=random_seed())
        self._check(self.config)
        self.base_height = DEFAULT_CANVAS_HEIGHT
        self.canvas_override: Tuple[int, int] | None = None
        self.pattern: Pattern = self._generate()

    # -------------------------
    # Derived values
    # -------------------------

    @property
    def colors(self) -> Tuple[str, ...]:
        return theme_colors(self.config.theme_id)

    @property
    def background_palette(self) -> List[str]:
        return background_palette(self.config.theme_id)

    @property
    def signature_palette(self) -> List[str]:
        return signature_palette(self.config.theme_id)

    @property
    def sig_color(self) -> str:
        return effective_sig_color(self.config)

    @property
    def canvas_size(self) -> Tuple[int, int]:
        if self.canvas_override is not None:
            return self.canvas_override
        return canvas_size_for_aspect(self.config.aspect_mode, self.base_height)

    @property
    def hash(self) -> str:
        return codec.encode(self.config)

    def snapshot(self) -> Configuration:
        return replace(self.config)

    # -------------------------
    # Setters
    # -------------------------

    def set_theme(self, theme_id: str) -> None:
        if theme_id not in THEMES_BY_ID:
            raise ValueError(f"Unknown theme: {theme_id!r}")
        cfg = self.config
        cfg.theme_id = theme_id

        # Colors from the old palette fall back to their defaults.
        if palette_index(self.background_palette, cfg.bg_color) < 0:
            cfg.bg_color = BLACK
        if cfg.sig_color is not None and palette_index(self.signature_palette, cfg.sig_color) < 0:
            cfg.sig_color = None
        logger.debug("Theme -> %s", theme_id)

    def next_theme(self) -> None:
        idx = (theme_index(self.config.theme_id) + 1) % len(THEME_LIST)
        self.set_theme(THEME_LIST[idx].id)

    def random_theme(self, rng: random.Random | None = None) -> None:
        rng = rng or random.Random()
        self.set_theme(rng.choice(THEME_LIST).id)

    def set_aspect(self, aspect_mode: str) -> None:
        if aspect_mode not in codec.ASPECT_MODES:
            raise ValueError(f"Unknown aspect mode: {aspect_mode!r}")
        self.config.aspect_mode = aspect_mode

    def set_grid_size(self, grid_size: int) -> None:
        if int(grid_size) < MIN_GRID_SIZE:
            raise ValueError(f"grid_size must be >= {MIN_GRID_SIZE}, got {grid_size}")
        self.config.grid_size = int(grid_size)

    def set_show_grid(self, show: bool) -> None:
        self.config.show_grid = bool(show)

    def set_bg_color(self, color: str) -> None:
        idx = palette_index(self.background_palette, color)
        if idx < 0:
            raise ValueError(f"{color!r} is not in the background palette")
        self.config.bg_color = self.background_palette[idx]

    def set_sig_color(self, color: str | None) -> None:
        """Pick a signature color from the palette, or None for auto."""
        if color is None:
            self.config.sig_color = None
            return
        idx = palette_index(self.signature_palette, color)
        if idx < 0:
            raise ValueError(f"{color!r} is not in the signature palette")
        self.config.sig_color = self.signature_palette[idx]

    def set_seed(self, seed: int) -> None:
        if int(seed) < 0:
            raise ValueError(f"seed must be non-negative, got {seed}")
        self.config.seed = int(seed)
        self.regenerate()

    def new_seed(self, rng: random.Random | None = None) -> int:
        self.set_seed(random_seed(rng))
        return self.config.seed

    def set_complexity(self, complexity: int) -> None:
        if not codec.MIN_COMPLEXITY <= int(complexity) <= codec.MAX_COMPLEXITY:
            raise ValueError(f"complexity must be in 1..5, got {complexity}")
        self.config.complexity = int(complexity)
        self.regenerate()

    def set_mode(self, mode: str) -> None:
        if mode not in MODES:
            raise ValueError(f"Unknown mode: {mode!r}")
        self.config.mode = mode
        self.regenerate()

    def regenerate(self) -> Pattern:
        self.pattern = self._generate()
        return self.pattern

    def load_hash(self, text: str) -> bool:
        """Apply a hash. Returns False and changes nothing if it is invalid."""
        decoded = codec.decode(text)
        if decoded is None:
            logger.warning("Rejected hash %r", text)
            return False

        theme_id = THEME_LIST[decoded.theme_index].id
        palette = background_palette(theme_id)
        sig_palette = signature_palette(theme_id)
        self.config = replace(
            self.config,
            seed=decoded.seed,
            theme_id=theme_id,
            complexity=decoded.complexity,
            aspect_mode=decoded.aspect_mode,
            bg_color=palette[decoded.bg_index],
            sig_color=None if decoded.sig_index is None else sig_palette[decoded.sig_index],
        )
        self.regenerate()
        return True

    # -------------------------
    # Internals
    # -------------------------

    def _generate(self) -> Pattern:
        cfg = self.config
        return generate_pattern(cfg.mode, cfg.complexity, SeededRandom(cfg.seed))

    @staticmethod
    def _check(cfg: Configuration) -> None:
        if cfg.theme_id not in THEMES_BY_ID:
            raise ValueError(f"Unknown theme: {cfg.theme_id!r}")
        if cfg.aspect_mode not in codec.ASPECT_MODES:
            raise ValueError(f"Unknown aspect mode: {cfg.aspect_mode!r}")
        if cfg.mode not in MODES:
            raise ValueError(f"Unknown mode: {cfg.mode!r}")
        if not codec.MIN_COMPLEXITY <= cfg.complexity <= codec.MAX_COMPLEXITY:
            raise ValueError(f"complexity must be in 1..5, got {cfg.complexity}")
        if cfg.grid_size < MIN_GRID_SIZE:
            raise ValueError(f"grid_size must be >= {MIN_GRID_SIZE}, got {cfg.grid_size}")
        if cfg.seed < 0:
            raise ValueError(f"seed must be non-negative, got {cfg.seed}")
        palette = background_palette(cfg.theme_id)
        if palette_index(palette, cfg.bg_color) < 0:
            raise ValueError(f"{cfg.bg_color!r} is not in the background palette")
        if cfg.sig_color is not None and palette_index(palette, cfg.sig_color) < 0:
            raise ValueError(f"{cfg.sig_color!r} is not in the signature palette")
