"""Favorites: named hashes kept in a JSON file."""

import datetime
import json
import logging
import random
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import List

logger = logging.getLogger(__name__)


@dataclass
class Favorite:
    hash: str
    name: str
    date: str  # YYYY-MM-DD


def _today() -> str:
    return datetime.date.today().isoformat()


def _parse_records(raw) -> List[Favorite]:
    if not isinstance(raw, list):
        raise TypeError("favorites file must hold a JSON list")
    return [
        Favorite(hash=str(item["hash"]), name=str(item.get("name", "")), date=str(item.get("date", "")))
        for item in raw
    ]


class FavoritesStore:
    """Favorites keyed by hash, persisted after every change."""

    def __init__(self, path: Path, defaults: Path | None = None) -> None:
        self.path = Path(path)
        self.defaults = Path(defaults) if defaults else None
        self._items: List[Favorite] | None = None

    def load(self) -> List[Favorite]:
        if self.path.exists():
            try:
                self._items = _parse_records(json.loads(self.path.read_text(encoding="utf-8")))
                return self._items
            except (ValueError, TypeError, KeyError) as e:
                logger.error("Failed to parse stored favorites %s: %s", self.path, e)

        # Fall back to the bundled starter list
        if self.defaults is not None and self.defaults.exists():
            try:
                self._items = _parse_records(json.loads(self.defaults.read_text(encoding="utf-8")))
                self.save()
                return self._items
            except (ValueError, TypeError, KeyError) as e:
                logger.error("Failed to load default favorites %s: %s", self.defaults, e)

        self._items = []
        return self._items

    @property
    def items(self) -> List[Favorite]:
        if self._items is None:
            return self.load()
        return self._items

    def all(self) -> List[Favorite]:
        return list(self.items)

    def save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        data = [asdict(f) for f in self._items or []]
        self.path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")

    def find(self, hash_: str) -> Favorite | None:
        for fav in self.items:
            if fav.hash == hash_:
                return fav
        return None

    def is_favorite(self, hash_: str) -> bool:
        return self.find(hash_) is not None

    def add(self, hash_: str, name: str = "") -> bool:
        """False when the hash is already saved."""
        if self.is_favorite(hash_):
            return False
        items = self.items
        items.append(Favorite(hash=hash_, name=name or f"Untitled {len(items) + 1}", date=_today()))
        self.save()
        return True

    def remove(self, hash_: str) -> bool:
        fav = self.find(hash_)
        if fav is None:
            return False
        self.items.remove(fav)
        self.save()
        return True

    def rename(self, hash_: str, name: str) -> bool:
        fav = self.find(hash_)
        if fav is None:
            return False
        fav.name = name
        self.save()
        return True

    def toggle(self, hash_: str) -> bool:
        """Add or remove; returns whether the hash is a favorite afterwards."""
        if self.remove(hash_):
            return False
        self.add(hash_)
        return True

    def random_favorite(self, rng: random.Random | None = None) -> Favorite | None:
        items = self.items
        if not items:
            return None
        rng = rng or random.Random()
        return rng.choice(items)
