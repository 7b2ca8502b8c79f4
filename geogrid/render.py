"""Draw patterns with svgwrite.

``draw_cell`` paints one pattern cell at the origin of ``parent``;
``render_artwork`` tiles it over the grid, centred on the canvas.
"""

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence, Tuple

import svgwrite

from geogrid.modes import CirclePattern, Pattern, TrianglePattern

if TYPE_CHECKING:
    from geogrid.state import Session

# Overlay lines are skipped on dense grids.
GRID_OVERLAY_MAX = 40
GRID_OVERLAY_OPACITY = 15 / 255
GRID_OVERLAY_WIDTH = 0.5


@dataclass(frozen=True)
class GridLayout:
    cell_size: float
    offset_x: float
    offset_y: float
    grid_w: float
    grid_h: float


def grid_layout(width: float, height: float, cols: int, rows: int) -> GridLayout:
    # Square cells that fit both axes, block centred for symmetric margins
    cell = min(width / cols, height / rows)
    grid_w = cell * cols
    grid_h = cell * rows
    return GridLayout(
        cell_size=cell,
        offset_x=(width - grid_w) / 2,
        offset_y=(height - grid_h) / 2,
        grid_w=grid_w,
        grid_h=grid_h,
    )


def _color(colors: Sequence[str], index: int) -> str:
    return colors[index % len(colors)]


def _pt(value: float) -> float:
    return round(value, 4)


# -------------------------
# Arc geometry
# -------------------------


def pie_geometry(
    corner: int, x: float, y: float, w: float, h: float
) -> Tuple[float, float, float, float]:
    """(cx, cy, start, end) in degrees for the wedge anchored at ``corner``.

    Angles run clockwise from +x, as on screen with y pointing down.
    """
    if corner == 0:
        return x, y, 0.0, 90.0
    if corner == 1:
        return x + w, y, 90.0, 180.0
    if corner == 2:
        return x + w, y + h, 180.0, 270.0
    if corner == 3:
        return x, y + h, 270.0, 360.0
    raise ValueError(f"corner must be 0..3, got {corner}")


def pie_path(cx: float, cy: float, r: float, start: float, end: float) -> str:
    """SVG path data for a filled pie slice (end - start <= 180)."""
    a0 = math.radians(start)
    a1 = math.radians(end)
    sx, sy = cx + r * math.cos(a0), cy + r * math.sin(a0)
    ex, ey = cx + r * math.cos(a1), cy + r * math.sin(a1)
    return (
        f"M {_pt(cx)} {_pt(cy)} "
        f"L {_pt(sx)} {_pt(sy)} "
        f"A {_pt(r)} {_pt(r)} 0 0 1 {_pt(ex)} {_pt(ey)} Z"
    )


# -------------------------
# Cell drawing
# -------------------------


def _draw_triangles(dwg, parent, pattern: TrianglePattern, size: float, colors):
    for tri in pattern.triangles:
        points = [(_pt(v.x * size), _pt(v.y * size)) for v in tri.vertices]
        parent.add(dwg.polygon(points, fill=_color(colors, tri.color_index), stroke="none"))


def _draw_arcs(dwg, parent, pattern: CirclePattern, size: float, colors):
    for cell in pattern.cells:
        x = cell.x * size
        y = cell.y * size
        w = cell.w * size
        h = cell.h * size

        parent.add(
            dwg.rect(
                insert=(_pt(x), _pt(y)),
                size=(_pt(w), _pt(h)),
                fill=_color(colors, cell.bg_color_index),
                stroke="none",
            )
        )

        cx, cy, start, end = pie_geometry(cell.corner, x, y, w, h)
        parent.add(
            dwg.path(
                d=pie_path(cx, cy, w, start, end),
                fill=_color(colors, cell.arc_color_index),
                stroke="none",
            )
        )


def draw_cell(dwg, parent, pattern: Pattern, size: float, colors: Sequence[str]) -> None:
    if isinstance(pattern, CirclePattern):
        _draw_arcs(dwg, parent, pattern, size, colors)
    elif isinstance(pattern, TrianglePattern):
        _draw_triangles(dwg, parent, pattern, size, colors)
    else:
        raise TypeError(f"Unsupported pattern: {type(pattern).__name__}")


# -------------------------
# Artwork
# -------------------------


def _draw_grid_overlay(dwg, parent, layout: GridLayout, cols: int, rows: int) -> None:
    overlay = dwg.g(
        stroke="#ffffff",
        stroke_opacity=round(GRID_OVERLAY_OPACITY, 4),
        stroke_width=GRID_OVERLAY_WIDTH,
        fill="none",
    )
    x0, y0 = layout.offset_x, layout.offset_y
    for r in range(rows + 1):
        y = _pt(y0 + r * layout.cell_size)
        overlay.add(dwg.line(start=(_pt(x0), y), end=(_pt(x0 + layout.grid_w), y)))
    for c in range(cols + 1):
        x = _pt(x0 + c * layout.cell_size)
        overlay.add(dwg.line(start=(x, _pt(y0)), end=(x, _pt(y0 + layout.grid_h))))
    parent.add(overlay)


def render_artwork(
    dwg,
    parent,
    session: "Session",
    origin: Tuple[float, float] = (0, 0),
) -> GridLayout:
    """Background, tiled pattern and optional grid overlay on the session canvas."""
    cfg = session.config
    width, height = session.canvas_size
    cols, rows = cfg.grid_cols, cfg.grid_rows
    colors = session.colors

    art = dwg.g(transform=f"translate({_pt(origin[0])},{_pt(origin[1])})")
    art.add(dwg.rect(insert=(0, 0), size=(_pt(width), _pt(height)), fill=cfg.bg_color))

    layout = grid_layout(width, height, cols, rows)
    for row in range(rows):
        for col in range(cols):
            tx = layout.offset_x + col * layout.cell_size
            ty = layout.offset_y + row * layout.cell_size
            tile = dwg.g(transform=f"translate({_pt(tx)},{_pt(ty)})")
            draw_cell(dwg, tile, session.pattern, layout.cell_size, colors)
            art.add(tile)

    if cfg.show_grid and max(cols, rows) <= GRID_OVERLAY_MAX:
        _draw_grid_overlay(dwg, art, layout, cols, rows)

    parent.add(art)
    return layout


def render_svg(session: "Session", out_file: str) -> svgwrite.Drawing:
    width, height = session.canvas_size
    dwg = svgwrite.Drawing(out_file, size=(width, height))
    render_artwork(dwg, dwg, session)
    dwg.save()
    return dwg
