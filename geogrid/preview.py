"""Thumbnails for saved hashes and a gallery sheet of all favorites."""

import logging
from typing import Tuple

import svgwrite

from geogrid import codec
from geogrid.favorites import FavoritesStore
from geogrid.modes import DEFAULT_MODE, generate_for_seed
from geogrid.render import draw_cell
from geogrid.themes import THEME_LIST, background_palette

logger = logging.getLogger(__name__)

PREVIEW_SIZE = 60
PREVIEW_TILES = 3

ROW_HEIGHT = 80
TEXT_X = 90


def _draw_preview(dwg, parent, decoded: codec.DecodedHash, size: float, tiles: int, origin: Tuple[float, float]):
    theme = THEME_LIST[decoded.theme_index]
    bg = background_palette(theme.id)[decoded.bg_index]

    # Mode is not in the hash; thumbnails use the default one.
    pattern = generate_for_seed(decoded.seed, DEFAULT_MODE, decoded.complexity)

    ox, oy = origin
    box = dwg.g(transform=f"translate({ox},{oy})")
    box.add(dwg.rect(insert=(0, 0), size=(size, size), fill=bg))
    cell = size / tiles
    for ty in range(tiles):
        for tx in range(tiles):
            tile = dwg.g(transform=f"translate({round(tx * cell, 4)},{round(ty * cell, 4)})")
            draw_cell(dwg, tile, pattern, cell, theme.colors)
            box.add(tile)
    parent.add(box)


def render_preview(
    hash_: str, size: int = PREVIEW_SIZE, tiles: int = PREVIEW_TILES, out_file: str = "preview.svg"
) -> svgwrite.Drawing | None:
    decoded = codec.decode(hash_)
    if decoded is None:
        return None
    dwg = svgwrite.Drawing(out_file, size=(size, size))
    _draw_preview(dwg, dwg, decoded, size, tiles, (0, 0))
    return dwg


def write_gallery(store: FavoritesStore, out_file: str, current_hash: str | None = None) -> int:
    """One row per favorite: thumbnail, name, date, hash. Returns rows written."""
    favorites = store.all()
    height = max(ROW_HEIGHT, ROW_HEIGHT * len(favorites))
    dwg = svgwrite.Drawing(out_file, size=(480, height))
    dwg.add(dwg.rect(insert=(0, 0), size=("100%", "100%"), fill="#111111"))

    if not favorites:
        dwg.add(dwg.text("No favorites yet.", insert=(10, 40), fill="#cccccc", font_size=14))

    rows = 0
    for i, fav in enumerate(favorites):
        y = i * ROW_HEIGHT
        decoded = codec.decode(fav.hash)
        if decoded is None:
            logger.warning("Skipping favorite with invalid hash %r", fav.hash)
            continue
        if fav.hash == current_hash:
            dwg.add(dwg.rect(insert=(0, y), size=("100%", ROW_HEIGHT), fill="#2a2a2a"))
        _draw_preview(dwg, dwg, decoded, PREVIEW_SIZE, PREVIEW_TILES, (10, y + 10))
        dwg.add(dwg.text(fav.name, insert=(TEXT_X, y + 30), fill="#eeeeee", font_size=14))
        dwg.add(dwg.text(f"{fav.date}  {fav.hash}", insert=(TEXT_X, y + 52), fill="#999999", font_size=11))
        rows += 1

    dwg.save()
    return rows
