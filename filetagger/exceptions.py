"""Exception hierarchy for filetagger.

Every failure raised by the core derives from TaggerError so the CLI can
turn it into a single-line message and an exit code:

- ConfigError: missing or malformed key mapping, invalid tag names
- ScanError: a directory could not be listed during the scan
- TagFileError: a copy or rename in the output directory failed
- CatalogError: navigation or toggle requested in an invalid state
"""

from pathlib import Path
from typing import Optional


class TaggerError(Exception):
    """Base class for all filetagger errors."""


class ConfigError(TaggerError):
    """Raised when the key/tag mapping cannot be used.

    Attributes:
        path: Configuration file involved, if any.
        line: 1-based line of a parse error, if known.
        column: 1-based column of a parse error, if known.
    """

    def __init__(
        self,
        message: str,
        path: Optional[Path] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.path = path
        self.line = line
        self.column = column


class InvalidTagError(ConfigError):
    """Raised when a tag name cannot be encoded into a file name."""

    def __init__(self, tag: str, reason: str) -> None:
        super().__init__(f"Invalid tag {tag!r}: {reason}")
        self.tag = tag
        self.reason = reason


class ScanError(TaggerError):
    """Raised when a directory cannot be read during the scan."""

    def __init__(self, message: str, path: Path) -> None:
        super().__init__(message)
        self.path = path


class TagFileError(TaggerError):
    """Raised when copying or renaming a file in the output directory fails.

    Attributes:
        operation: Short name of the failed operation ("copy" or "rename").
        path: The file the operation was applied to.
    """

    def __init__(self, operation: str, path: Path, reason: str) -> None:
        super().__init__(f"Could not {operation} {path}: {reason}")
        self.operation = operation
        self.path = path
        self.reason = reason


class CatalogError(TaggerError):
    """Raised when the catalog is used in a state that does not allow it."""


class EmptyCatalogError(CatalogError):
    """Raised when navigating a catalog that holds no files."""


class ConcurrentAccessError(CatalogError):
    """Raised when a second caller enters the catalog while it is busy."""
