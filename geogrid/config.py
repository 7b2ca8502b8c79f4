"""Read and write config.toml and build a Session from it.

Expected layout::

    [style]
    seed = 123            # or seedlist = [..]; GEN_SEED overrides both
    theme = "olives"
    complexity = 2
    aspect = "square"
    grid_size = 10
    mode = "triangle"
    show_grid = true
    bg = "#000000"
    sig = "auto"
    hash = "..."          # optional, wins over the fields above

    [output]
    dir = "output"
    width = 2048
    height = 2048
    canvas_height = 700

    [favorites]
    path = "favorites.json"
"""

import logging
import os
import tomllib
from pathlib import Path
from typing import Dict, Iterable

from geogrid.state import DEFAULT_CANVAS_HEIGHT, Configuration, Session, random_seed
from geogrid.themes import DEFAULT_THEME_ID

logger = logging.getLogger(__name__)


def load_toml_config(path: Path) -> Dict:
    with Path(path).open("rb") as f:
        return tomllib.load(f)


def _table(config: Dict, name: str) -> Dict:
    table = config.get(name)
    if table is None:
        return {}
    if not isinstance(table, dict):
        raise TypeError(f"[{name}] must be a table in config.toml")
    return table


def resolve_seed(config: Dict) -> int:
    env_seed = os.getenv("GEN_SEED")
    if env_seed:
        return int(env_seed)
    style = _table(config, "style")
    if style.get("seed") is not None:
        return int(style["seed"])
    seed_list = style.get("seedlist")
    if isinstance(seed_list, list) and seed_list:
        return int(seed_list[0])
    return random_seed()


def session_from_config(config: Dict) -> Session:
    style = _table(config, "style")
    output = _table(config, "output")

    sig = style.get("sig", "auto")
    cfg = Configuration(
        seed=resolve_seed(config),
        theme_id=str(style.get("theme", DEFAULT_THEME_ID)),
        complexity=int(style.get("complexity", 2)),
        aspect_mode=str(style.get("aspect", "square")),
        grid_size=int(style.get("grid_size", 10)),
        mode=str(style.get("mode", "triangle")),
        show_grid=bool(style.get("show_grid", True)),
        bg_color=str(style.get("bg", "#000000")),
        sig_color=None if sig in (None, "auto") else str(sig),
    )
    session = Session(cfg)
    session.base_height = int(output.get("canvas_height", DEFAULT_CANVAS_HEIGHT))

    hash_ = style.get("hash")
    if hash_ and not session.load_hash(str(hash_)):
        raise ValueError(f"Invalid [style].hash in config.toml: {hash_!r}")
    return session


def output_dir(config: Dict, root: Path) -> Path:
    return root / str(_table(config, "output").get("dir", "output"))


# -------------------------
# TOML writing
# -------------------------


# Tables in the order config.toml documents them; unknown ones follow.
SECTION_ORDER = ("style", "output", "favorites")


def format_value(value) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        escaped = value.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(format_value(item) for item in value) + "]"
    raise TypeError(f"Unsupported TOML value: {type(value).__name__}")


def _section_names(data: Dict) -> list[str]:
    tables = [k for k, v in data.items() if isinstance(v, dict)]
    known = [name for name in SECTION_ORDER if name in tables]
    return known + [name for name in tables if name not in SECTION_ORDER]


def _style_keys(table: Dict) -> list[str]:
    # A stored hash overrides every other [style] field, so it goes first.
    keys = sorted(table.keys())
    if "hash" in table:
        keys.remove("hash")
        keys.insert(0, "hash")
    return keys


def write_toml(data: Dict, path: Path) -> None:
    lines: list[str] = []

    root_items = [(k, v) for k, v in data.items() if not isinstance(v, dict)]
    for key, value in root_items:
        lines.append(f"{key} = {format_value(value)}")
    if root_items:
        lines.append("")

    for section in _section_names(data):
        table = data[section]
        lines.append(f"[{section}]")
        keys = _style_keys(table) if section == "style" else sorted(table.keys())
        for key in keys:
            lines.append(f"    {key} = {format_value(table[key])}")
        lines.append("")

    Path(path).write_text("\n".join(lines).rstrip() + "\n", encoding="utf-8")


def store_seedlist(path: Path, seeds: Iterable[int]) -> Dict:
    """Replace [style].seedlist in the config file, creating it if needed."""
    path = Path(path)
    config = load_toml_config(path) if path.exists() else {}
    style = _table(config, "style")
    style["seedlist"] = [int(s) for s in seeds]
    config["style"] = style
    write_toml(config, path)
    logger.debug("Stored %d seeds in %s", len(style["seedlist"]), path)
    return config
