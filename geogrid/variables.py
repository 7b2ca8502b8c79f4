"""Shared file and directory names, relative to the project root."""

CONFIG = "config.toml"
OUTPUT = "output"
FAVORITES = "favorites.json"
DEFAULT_FAVORITES = "default_favorites.json"
