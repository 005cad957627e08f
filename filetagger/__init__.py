"""File Tagger - tag media files by encoding tags into their names.

Scans an input directory for media files, keeps a working copy of each in
a flat output directory, and records every file's tags in the copy's name
so a later session can resume where the last one stopped.
"""

__version__ = "0.1.0"

from .catalog import Catalog, TagRecord
from .codec import decode, encode
from .config import KeyMap
from .exceptions import (
    CatalogError,
    ConfigError,
    InvalidTagError,
    ScanError,
    TagFileError,
    TaggerError,
)
from .models import ScanSummary, SessionCommand, SessionSummary, TagChange

__all__ = [
    "__version__",
    "Catalog",
    "TagRecord",
    "KeyMap",
    "decode",
    "encode",
    "TaggerError",
    "ConfigError",
    "InvalidTagError",
    "ScanError",
    "TagFileError",
    "CatalogError",
    "ScanSummary",
    "SessionCommand",
    "SessionSummary",
    "TagChange",
]


def main() -> None:
    """Entry point for the filetagger CLI application."""
    from filetagger.cli import app
    app()
