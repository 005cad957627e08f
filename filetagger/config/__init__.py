"""Configuration for filetagger: the key-to-tag mapping file."""

from .key_map import (
    DEFAULT_KEY_MAP_CONTENT,
    KEY_MAP_FILENAME,
    KeyMap,
    default_key_map_path,
)

__all__ = [
    "DEFAULT_KEY_MAP_CONTENT",
    "KEY_MAP_FILENAME",
    "KeyMap",
    "default_key_map_path",
]
