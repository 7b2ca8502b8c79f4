#!/usr/bin/env uv run
"""GeoGrid command line: render, export, hashes, seed lists and favorites."""

import argparse
import logging
import random
import sys
from pathlib import Path

from geogrid import codec, variables
from geogrid.config import (
    load_toml_config,
    output_dir,
    session_from_config,
    store_seedlist,
)
from geogrid.export import DEFAULT_RESOLUTION, export_high_res
from geogrid.favorites import FavoritesStore
from geogrid.preview import write_gallery
from geogrid.render import render_svg
from geogrid.state import Session
from geogrid.themes import THEME_LIST, background_palette, signature_palette

logger = logging.getLogger(__name__)


def parse_size(text: str) -> tuple[int, int]:
    """'2048x1365' -> (2048, 1365); unparsable or non-positive sides fall back to 2048."""
    w, _, h = text.lower().partition("x")
    try:
        width = int(w)
    except ValueError:
        width = DEFAULT_RESOLUTION
    try:
        height = int(h)
    except ValueError:
        height = DEFAULT_RESOLUTION
    return (
        width if width > 0 else DEFAULT_RESOLUTION,
        height if height > 0 else DEFAULT_RESOLUTION,
    )


def _load_config(args) -> dict:
    path = Path(args.config)
    if not path.exists():
        logger.debug("No config at %s, using defaults", path)
        return {}
    return load_toml_config(path)


def _session(args, config: dict) -> Session | None:
    session = session_from_config(config)
    if getattr(args, "hash", None) and not session.load_hash(args.hash):
        return None
    if getattr(args, "no_grid", False):
        session.set_show_grid(False)
    return session


def _store(args, config: dict) -> FavoritesStore:
    root = Path(args.config).resolve().parent
    path = config.get("favorites", {}).get("path", variables.FAVORITES)
    return FavoritesStore(root / path, root / variables.DEFAULT_FAVORITES)


# -------------------------
# Commands
# -------------------------


def cmd_render(args, config: dict) -> int:
    session = _session(args, config)
    if session is None:
        return 1
    if args.out:
        out = Path(args.out)
    else:
        out = output_dir(config, Path(args.config).resolve().parent) / f"geogrid-{session.hash}.svg"
    out.parent.mkdir(parents=True, exist_ok=True)
    render_svg(session, str(out))
    print(f"Wrote {out} (hash={session.hash})")
    return 0


def cmd_export(args, config: dict) -> int:
    session = _session(args, config)
    if session is None:
        return 1
    if args.size:
        width, height = parse_size(args.size)
    else:
        out_cfg = config.get("output", {})
        width = int(out_cfg.get("width", DEFAULT_RESOLUTION))
        height = int(out_cfg.get("height", DEFAULT_RESOLUTION))
    out = export_high_res(session, width, height, output_dir(config, Path(args.config).resolve().parent))
    if out is None:
        return 1
    print(f"Wrote {out}")
    return 0


def cmd_hash(args, config: dict) -> int:
    session = _session(args, config)
    if session is None:
        return 1
    print(session.hash)
    return 0


def cmd_decode(args, config: dict) -> int:
    decoded = codec.decode(args.value)
    if decoded is None:
        logger.warning("Invalid hash: %s", args.value)
        return 1
    theme = THEME_LIST[decoded.theme_index]
    sig = "auto" if decoded.sig_index is None else signature_palette(theme.id)[decoded.sig_index]
    print(f"seed        {decoded.seed}")
    print(f"theme       {theme.id} ({theme.name})")
    print(f"complexity  {decoded.complexity}")
    print(f"aspect      {decoded.aspect_mode}")
    print(f"background  {background_palette(theme.id)[decoded.bg_index]}")
    print(f"signature   {sig}")
    return 0


def cmd_seedlist(args, config: dict) -> int:
    if args.count <= 0:
        raise ValueError("count must be a positive integer")
    if args.min_value < 0:
        raise ValueError("--min must be >= 0")
    if args.min_value > args.max_value:
        raise ValueError("--min must be <= --max")

    rng = random.Random()
    seeds = [rng.randint(args.min_value, args.max_value) for _ in range(args.count)]
    store_seedlist(Path(args.config), seeds)
    print(f"Stored {len(seeds)} seeds in {args.config}")
    return 0


def cmd_batch(args, config: dict) -> int:
    seed_list = config.get("style", {}).get("seedlist")
    if not isinstance(seed_list, list) or not seed_list:
        raise ValueError("[style].seedlist must be a non-empty list in config.toml")

    session = session_from_config(config)
    out_cfg = config.get("output", {})
    width = int(out_cfg.get("width", DEFAULT_RESOLUTION))
    height = int(out_cfg.get("height", DEFAULT_RESOLUTION))
    target = output_dir(config, Path(args.config).resolve().parent)

    failures = 0
    for seed in seed_list:
        session.set_seed(int(seed))
        out = export_high_res(session, width, height, target)
        if out is None:
            failures += 1
            continue
        print(f"Wrote {out}")
    return 1 if failures else 0


def cmd_fav(args, config: dict) -> int:
    store = _store(args, config)

    if args.action == "list":
        for fav in store.all():
            print(f"{fav.hash}\t{fav.date}\t{fav.name}")
        return 0

    if args.action == "random":
        fav = store.random_favorite()
        if fav is None:
            logger.warning("No favorites saved")
            return 1
        print(fav.hash)
        return 0

    if args.action == "gallery":
        out = Path(args.out or "gallery.svg")
        rows = write_gallery(store, str(out))
        print(f"Wrote {out} ({rows} favorites)")
        return 0

    if args.action == "add":
        session = _session(args, config)
        if session is None:
            return 1
        if not store.add(session.hash, args.name or ""):
            print(f"{session.hash} is already a favorite")
            return 0
        print(f"Added {session.hash}")
        return 0

    if not args.hash:
        logger.error("fav %s needs --hash", args.action)
        return 1
    if args.action == "remove":
        ok = store.remove(args.hash)
    else:
        ok = store.rename(args.hash, args.name or "")
    if not ok:
        logger.warning("No favorite with hash %s", args.hash)
        return 1
    return 0


# -------------------------
# Entry point
# -------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Seeded geometric grid patterns.")
    parser.add_argument("--config", default=variables.CONFIG, help="Path to config.toml.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging.")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("render", help="Write the current artwork as SVG.")
    p.add_argument("--hash", help="Render this hash instead of the config.")
    p.add_argument("--out", help="Output SVG path.")
    p.add_argument("--no-grid", action="store_true", help="Leave out the grid overlay.")
    p.set_defaults(func=cmd_render)

    p = sub.add_parser("export", help="Export a framed PNG.")
    p.add_argument("size", nargs="?", help="WIDTHxHEIGHT, default from [output].")
    p.add_argument("--hash", help="Export this hash instead of the config.")
    p.add_argument("--no-grid", action="store_true", help="Leave out the grid overlay.")
    p.set_defaults(func=cmd_export)

    p = sub.add_parser("hash", help="Print the hash of the configured artwork.")
    p.set_defaults(func=cmd_hash)

    p = sub.add_parser("decode", help="Show the parameters stored in a hash.")
    p.add_argument("value")
    p.set_defaults(func=cmd_decode)

    p = sub.add_parser("seedlist", help="Create a random seed list in config.toml.")
    p.add_argument("count", type=int, help="How many seeds to generate.")
    p.add_argument("--min", dest="min_value", type=int, default=0, help="Minimum random value (inclusive).")
    p.add_argument("--max", dest="max_value", type=int, default=9999, help="Maximum random value (inclusive).")
    p.set_defaults(func=cmd_seedlist)

    p = sub.add_parser("batch", help="Export one PNG per seed in [style].seedlist.")
    p.set_defaults(func=cmd_batch)

    p = sub.add_parser("fav", help="Manage favorites.")
    p.add_argument("action", choices=["list", "add", "remove", "rename", "random", "gallery"])
    p.add_argument("--hash")
    p.add_argument("--name")
    p.add_argument("--out")
    p.set_defaults(func=cmd_fav)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )
    try:
        config = _load_config(args)
        return args.func(args, config)
    except (ValueError, TypeError) as e:
        logger.error("%s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
