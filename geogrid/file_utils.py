"""Rasterise export SVGs and move finished files into place."""

import os
import sys
from pathlib import Path


def rename_file(source: Path, new_name: str) -> Path:
    """
    Move source to new_name in the same directory, replacing any old file.
    Example: rename_file(Path("output/tmp.png"), "geogrid-x-64x64.png") -> output/geogrid-x-64x64.png
    """
    if not source.exists():
        raise FileNotFoundError(source)
    if not new_name or Path(new_name).name != new_name:
        raise ValueError(f"Expected a bare file name, got {new_name!r}")
    return source.replace(source.with_name(new_name))


def svg_to_png(source: Path, target: Path, width: int, height: int) -> Path:
    """Rasterise source into a width x height PNG at target."""
    if not source.exists():
        raise FileNotFoundError(source)
    if width <= 0 or height <= 0:
        raise ValueError(f"PNG size must be positive, got {width}x{height}")

    if sys.platform == "darwin":
        _ensure_macos_cairo_path()

    try:
        import cairosvg
    except ModuleNotFoundError as exc:
        raise ModuleNotFoundError("cairosvg is required for PNG export") from exc

    cairosvg.svg2png(
        url=str(source),
        write_to=str(target),
        output_width=width,
        output_height=height,
    )
    return target


def _ensure_macos_cairo_path() -> None:
    # Homebrew's libcairo is not on the default dyld path
    if os.environ.get("DYLD_FALLBACK_LIBRARY_PATH"):
        return
    existing = [p for p in ("/opt/homebrew/lib", "/usr/local/lib") if Path(p).is_dir()]
    if existing:
        os.environ["DYLD_FALLBACK_LIBRARY_PATH"] = ":".join(existing)
