"""High resolution PNG export.

The artwork is laid out on a frame of the requested size: padding around,
the canvas fitted to the aspect ratio, and a signature row (hash on the left,
theme swatches on the right) centred in the space under the canvas.
"""

import logging
import math
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

import svgwrite

from geogrid.file_utils import rename_file, svg_to_png
from geogrid.render import render_artwork
from geogrid.state import Session

logger = logging.getLogger(__name__)

DEFAULT_RESOLUTION = 2048

PAD_X = 0.06
PAD_TOP = 0.06
PAD_BOTTOM = 0.10
CANVAS_SHARE = 0.78
MIN_CANVAS = 100
MIN_SIG_GAP = 18

ASPECT_RATIOS = {"square": 1.0, "landscape": 3 / 2, "portrait": 2 / 3}


def _round(value: float) -> int:
    return math.floor(value + 0.5)


@dataclass(frozen=True)
class ExportLayout:
    width: int
    height: int
    canvas_x: float
    canvas_y: float
    canvas_w: int
    canvas_h: int
    sig_y: float
    sig_size: int


def export_layout(width: int, height: int, aspect_mode: str) -> ExportLayout:
    pad_x = _round(width * PAD_X)
    pad_top = _round(height * PAD_TOP)
    pad_bottom = _round(height * PAD_BOTTOM)

    available_w = width - pad_x * 2
    available_h = height - pad_top - pad_bottom
    container_h = max(MIN_CANVAS, _round(available_h * CANVAS_SHARE))

    ratio = ASPECT_RATIOS.get(aspect_mode, 1.0)
    cw = available_w
    ch = _round(cw / ratio)
    if ch > container_h:
        ch = container_h
        cw = _round(ch * ratio)

    canvas_x = (width - cw) / 2
    canvas_y = pad_top + (container_h - ch) / 2

    # Signature sits halfway between canvas bottom and frame bottom
    sig_size = max(10, _round(height * 0.018))
    canvas_bottom = canvas_y + ch
    gap = max(MIN_SIG_GAP, (height - canvas_bottom - sig_size) / 2)

    return ExportLayout(
        width=width,
        height=height,
        canvas_x=canvas_x,
        canvas_y=canvas_y,
        canvas_w=cw,
        canvas_h=ch,
        sig_y=canvas_bottom + gap,
        sig_size=sig_size,
    )


def export_filename(hash_: str, width: int, height: int) -> str:
    return f"geogrid-{hash_}-{width}x{height}.png"


@contextmanager
def export_canvas(session: Session, width: int, height: int) -> Iterator[Session]:
    """Resize the session canvas for the duration of an export."""
    previous = session.canvas_override
    session.canvas_override = (width, height)
    try:
        yield session
    finally:
        session.canvas_override = previous


def _draw_signature(dwg, session: Session, layout: ExportLayout) -> None:
    color = session.sig_color
    size = layout.sig_size
    x0 = layout.canvas_x
    x1 = layout.canvas_x + layout.canvas_w

    sig = dwg.g(id="signature")
    sig.add(
        dwg.text(
            session.hash,
            insert=(round(x0, 2), round(layout.sig_y + size * 0.8, 2)),
            fill=color,
            font_size=size,
            font_family="monospace",
        )
    )

    swatch_gap = size * 0.4
    x = x1 - size
    for swatch_color in reversed(session.colors):
        sig.add(
            dwg.rect(
                insert=(round(x, 2), round(layout.sig_y, 2)),
                size=(size, size),
                fill=swatch_color,
                stroke=color,
                stroke_width=max(1, size // 12),
            )
        )
        x -= size + swatch_gap
    dwg.add(sig)


def build_export_drawing(
    session: Session, width: int, height: int, out_file: str = "export.svg"
) -> svgwrite.Drawing:
    layout = export_layout(width, height, session.config.aspect_mode)
    dwg = svgwrite.Drawing(out_file, size=(width, height))
    dwg.add(dwg.rect(insert=(0, 0), size=("100%", "100%"), fill=session.config.bg_color))

    with export_canvas(session, layout.canvas_w, layout.canvas_h):
        render_artwork(dwg, dwg, session, origin=(layout.canvas_x, layout.canvas_y))

    _draw_signature(dwg, session, layout)
    return dwg


def export_high_res(
    session: Session, width: int, height: int, output_dir: Path
) -> Path | None:
    """Write ``geogrid-<hash>-<w>x<h>.png``; None if rasterising failed."""
    if width <= 0 or height <= 0:
        raise ValueError(f"Export size must be positive, got {width}x{height}")

    output_dir.mkdir(parents=True, exist_ok=True)
    tmp_svg = output_dir / "tmp.svg"
    tmp_png = output_dir / "tmp.png"
    name = export_filename(session.hash, width, height)

    try:
        dwg = build_export_drawing(session, width, height, str(tmp_svg))
        dwg.save()
        png_path = svg_to_png(tmp_svg, tmp_png, width=width, height=height)
        out = rename_file(png_path, name)
    except (ModuleNotFoundError, OSError, ValueError) as e:
        logger.error("Export failed: %s", e)
        tmp_png.unlink(missing_ok=True)
        return None
    finally:
        tmp_svg.unlink(missing_ok=True)

    logger.info("Exported %s", out)
    return out
