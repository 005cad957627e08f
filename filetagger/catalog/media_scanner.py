"""Recursive, extension-filtered media discovery.

This module provides the MediaScanner class, which walks an input directory
depth-first and returns every file whose lowercase extension is accepted.
The returned order is the traversal order and becomes the navigation order
of the catalog.

Example:
    >>> from filetagger.catalog import MediaScanner
    >>> scanner = MediaScanner(["jpg", "png"])
    >>> files = scanner.scan(Path("/photos"))
    >>> print(f"Found {len(files)} media files")
"""

import logging
import os
from pathlib import Path
from typing import Iterable, List, Optional, Set, Tuple

from filetagger.exceptions import ScanError

logger = logging.getLogger(__name__)


def normalize_extension(extension: str) -> str:
    """Normalize a user supplied extension to lowercase without a dot.

    Example:
        >>> normalize_extension(".JPG")
        'jpg'
    """
    return extension.strip().lstrip(".").lower()


class MediaScanner:
    """Finds media files below a root directory.

    Directories are entered in sorted name order as they are met, so a
    subdirectory's files are listed before the siblings that sort after it.
    Symlinked directories are followed once; a link pointing back at a
    directory already visited is skipped to avoid cycles.

    Attributes:
        extensions: Accepted extensions, lowercase and without the dot.
    """

    def __init__(
        self,
        extensions: Iterable[str],
        excluded_dirs: Optional[Iterable[Path]] = None,
    ) -> None:
        """Initialize the MediaScanner.

        Args:
            extensions: Accepted extensions. Leading dots and case are ignored.
            excluded_dirs: Directories never descended into, such as an
                output directory nested inside the input root.
        """
        self.extensions: Set[str] = {
            normalize_extension(ext) for ext in extensions if normalize_extension(ext)
        }
        self._excluded: Set[Path] = {Path(d).resolve() for d in (excluded_dirs or [])}
        self._visited: Set[Tuple[int, int]] = set()

    def accepts(self, file_name: str) -> bool:
        """Return True if the file name carries an accepted extension.

        Names without a dot have no extension and are never accepted.
        """
        if "." not in file_name:
            return False
        return file_name.rsplit(".", 1)[1].lower() in self.extensions

    def scan(self, root: Path) -> List[Path]:
        """Collect accepted files below root in traversal order.

        Args:
            root: Directory to scan.

        Returns:
            Absolute paths of accepted files.

        Raises:
            ScanError: If root or any directory below it cannot be listed.
        """
        root = Path(os.path.abspath(root))
        if not root.is_dir():
            raise ScanError(f"Input path is not a directory: {root}", root)

        self._visited.clear()
        found: List[Path] = []
        self._scan_directory(root, found)
        logger.debug(f"Scanned {root}: {len(found)} accepted files")
        return found

    def _scan_directory(self, directory: Path, found: List[Path]) -> None:
        try:
            dir_stat = directory.stat()
        except OSError as e:
            raise ScanError(f"Cannot access directory {directory}: {e}", directory)

        dir_id = (dir_stat.st_dev, dir_stat.st_ino)
        if dir_id in self._visited:
            logger.debug(f"Skipping already visited directory: {directory}")
            return
        self._visited.add(dir_id)

        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda entry: entry.name)
        except PermissionError as e:
            raise ScanError(f"Permission denied listing {directory}: {e}", directory)
        except OSError as e:
            raise ScanError(f"Cannot list directory {directory}: {e}", directory)

        for entry in entries:
            path = directory / entry.name
            try:
                is_dir = entry.is_dir()
            except OSError:
                # Broken symlink or vanished entry
                continue

            if is_dir:
                if path.resolve() in self._excluded:
                    continue
                self._scan_directory(path, found)
            elif self.accepts(entry.name):
                found.append(path)
