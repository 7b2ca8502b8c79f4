"""Drawing modes and pattern generation.

A pattern describes one repeatable grid cell in unit coordinates. The
renderer stamps the same cell over the whole grid.

Random values are consumed row by row, column by column inside each
sub-cell, and in a fixed order per sub-cell:

- triangle: diagonal flag, color 1, color 2
- circle:   corner, background color, arc color

Changing that order changes every saved artwork.
"""

from dataclasses import dataclass
from typing import Tuple, Union

from geogrid.rng import SeededRandom

MODES = ("triangle", "circle")
DEFAULT_MODE = "triangle"

# Color slots drawn per shape; resolved against the palette with a modulo.
COLOR_SLOTS = 8


# -------------------------
# Pattern data
# -------------------------


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class Triangle:
    vertices: Tuple[Point, Point, Point]
    color_index: int


@dataclass(frozen=True)
class TrianglePattern:
    grid_res: int
    triangles: Tuple[Triangle, ...]
    mode: str = "triangle"


@dataclass(frozen=True)
class ArcCell:
    x: float
    y: float
    w: float
    h: float
    corner: int  # 0 top-left, 1 top-right, 2 bottom-right, 3 bottom-left
    bg_color_index: int
    arc_color_index: int


@dataclass(frozen=True)
class CirclePattern:
    grid_res: int
    cells: Tuple[ArcCell, ...]
    mode: str = "circle"


Pattern = Union[TrianglePattern, CirclePattern]


# -------------------------
# Generators
# -------------------------


def _triangle_pattern(grid_res: int, rng: SeededRandom) -> TrianglePattern:
    triangles = []
    steps = grid_res - 1

    for row in range(steps):
        for col in range(steps):
            x0 = col / steps
            y0 = row / steps
            x1 = (col + 1) / steps
            y1 = (row + 1) / steps

            tl = Point(x0, y0)
            tr = Point(x1, y0)
            bl = Point(x0, y1)
            br = Point(x1, y1)

            diagonal = rng.random() > 0.5
            color1 = rng.floor(COLOR_SLOTS)
            color2 = rng.floor(COLOR_SLOTS)

            if diagonal:
                triangles.append(Triangle((tl, tr, br), color1))
                triangles.append(Triangle((tl, br, bl), color2))
            else:
                triangles.append(Triangle((tl, tr, bl), color1))
                triangles.append(Triangle((tr, br, bl), color2))

    return TrianglePattern(grid_res, tuple(triangles))


def _circle_pattern(grid_res: int, rng: SeededRandom) -> CirclePattern:
    cells = []
    steps = grid_res - 1
    size = 1 / steps

    for row in range(steps):
        for col in range(steps):
            corner = rng.floor(4)
            bg_idx = rng.floor(COLOR_SLOTS)
            arc_idx = rng.floor(COLOR_SLOTS)
            cells.append(
                ArcCell(
                    x=col / steps,
                    y=row / steps,
                    w=size,
                    h=size,
                    corner=corner,
                    bg_color_index=bg_idx,
                    arc_color_index=arc_idx,
                )
            )

    return CirclePattern(grid_res, tuple(cells))


def generate_pattern(mode: str, complexity: int, rng: SeededRandom) -> Pattern:
    """Build the cell for ``mode``; unknown modes draw triangles.

    ``complexity`` is trusted: callers keep it within 1..5.
    """
    grid_res = complexity + 1
    if mode == "circle":
        return _circle_pattern(grid_res, rng)
    return _triangle_pattern(grid_res, rng)


def generate_for_seed(seed: int, mode: str, complexity: int) -> Pattern:
    return generate_pattern(mode, complexity, SeededRandom(seed))


def shape_count(pattern: Pattern) -> int:
    if isinstance(pattern, CirclePattern):
        return len(pattern.cells)
    return len(pattern.triangles)
