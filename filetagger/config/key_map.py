"""Key-to-tag mapping loaded from ``tagkeys.json``.

The mapping file is a flat JSON object of key name to tag name::

    {
        "Q": "nature",
        "W": "architecture",
        "E": "painting"
    }

When the file does not exist a default one is written and loading fails,
so the operator can edit it before the first session.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Iterator, Mapping, Optional, Tuple

from filetagger.codec import validate_tag
from filetagger.exceptions import ConfigError, InvalidTagError

logger = logging.getLogger(__name__)

KEY_MAP_FILENAME = "tagkeys.json"
DEFAULT_KEY_MAP_CONTENT = '{\n\t"Q": "nature",\n\t"W": "architecture",\n\t"E": "painting"\n}'


class KeyMap:
    """Maps input keys to the tags they toggle.

    Keys are compared case-insensitively. Every tag is checked when the map
    is built, so an unusable tag stops the program before any file changes.

    Example:
        >>> keys = KeyMap({"Q": "nature"})
        >>> keys.tag_for("q")
        'nature'
    """

    def __init__(self, mapping: Mapping[str, str]) -> None:
        """Build a key map.

        Raises:
            ConfigError: If a key is empty or two keys differ only by case.
            InvalidTagError: If a tag cannot be encoded in a file name.
        """
        self._tags: Dict[str, str] = {}
        self._display: Dict[str, str] = {}
        for key, tag in mapping.items():
            normalized = self.normalize_key(key)
            if not normalized:
                raise ConfigError("Key names must not be empty")
            if normalized in self._tags:
                raise ConfigError(f"Key {key!r} is defined more than once")
            validate_tag(tag)
            self._tags[normalized] = tag
            self._display[normalized] = key

    @staticmethod
    def normalize_key(key: str) -> str:
        return key.strip().lower()

    @classmethod
    def load(cls, path: Path) -> "KeyMap":
        """Read a key map from a JSON file.

        Args:
            path: Path to the mapping file.

        Returns:
            The loaded KeyMap.

        Raises:
            ConfigError: If the file is missing (a default one is written
                first), unreadable, not valid JSON, or not a flat object of
                strings.
        """
        path = Path(path)
        if not path.exists():
            cls.write_default(path)
            raise ConfigError(
                f"Could not find key-actions configuration. Generated a new one at "
                f"{path}. Please fill it out and re-run the program.",
                path=path,
            )

        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigError(f"Cannot read {path}: {e}", path=path)

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ConfigError(
                f"Malformed JSON in {path} at line {e.lineno}, column {e.colno}: {e.msg}",
                path=path,
                line=e.lineno,
                column=e.colno,
            )

        if not isinstance(data, dict):
            raise ConfigError(f"{path} must contain a JSON object of key to tag", path=path)
        for key, value in data.items():
            if not isinstance(value, str):
                raise ConfigError(
                    f"Tag for key {key!r} in {path} must be a string, got {type(value).__name__}",
                    path=path,
                )

        try:
            key_map = cls(data)
        except InvalidTagError:
            raise
        except ConfigError as e:
            raise ConfigError(f"{path}: {e}", path=path)

        logger.info(f"Loaded {len(key_map)} tag keys from {path}")
        for key, tag in key_map.items():
            logger.debug(f"  {key}: {tag}")
        return key_map

    @staticmethod
    def write_default(path: Path) -> None:
        """Write the example mapping to path.

        Raises:
            ConfigError: If the file cannot be written.
        """
        try:
            Path(path).write_text(DEFAULT_KEY_MAP_CONTENT, encoding="utf-8")
        except OSError as e:
            raise ConfigError(
                f"Failed to save default configuration to '{path}', reason: {e}",
                path=Path(path),
            )

    def tag_for(self, key: str) -> Optional[str]:
        """Return the tag bound to key, or None if the key is unbound."""
        return self._tags.get(self.normalize_key(key))

    def items(self) -> Iterator[Tuple[str, str]]:
        """Iterate (key, tag) pairs with keys as written in the file."""
        for normalized, tag in self._tags.items():
            yield self._display[normalized], tag

    def __contains__(self, key: str) -> bool:
        return self.normalize_key(key) in self._tags

    def __len__(self) -> int:
        return len(self._tags)


def default_key_map_path(directory: Optional[Path] = None) -> Path:
    """Location of the mapping file in directory, or in the working directory."""
    return Path(directory or Path.cwd()) / KEY_MAP_FILENAME
