"""Catalog of tagged media files.

This module provides the Catalog class, which owns every TagRecord of a
session. It discovers input files, resumes tags left in the output
directory by an earlier session, copies untouched files, and keeps the
navigation cursor used by the terminal session.

Example:
    >>> from filetagger.catalog import Catalog
    >>> catalog = Catalog(Path("photos"), Path("tagged"))
    >>> catalog.populate(["jpg", "png"])
    >>> catalog.reconcile_with_existing_output()
    >>> catalog.materialize_pending()
    >>> locator = catalog.next()
    >>> catalog.toggle("nature")
    >>> print(catalog.current_tag_summary())
"""

import functools
import logging
import os
import threading
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional

from filetagger.codec import decode, split_extension
from filetagger.exceptions import (
    CatalogError,
    ConcurrentAccessError,
    EmptyCatalogError,
    ScanError,
)
from filetagger.models import TagChange

from .media_scanner import MediaScanner
from .tag_record import TagRecord

logger = logging.getLogger(__name__)


def _exclusive(method):
    """Reject a call made while another catalog operation is running."""

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        if not self._lock.acquire(blocking=False):
            raise ConcurrentAccessError(
                f"Catalog is busy; {method.__name__}() must not be called concurrently"
            )
        try:
            return method(self, *args, **kwargs)
        finally:
            self._lock.release()

    return wrapper


class Catalog:
    """Inventory of input files, their tag records and a navigation cursor.

    Files keep the order in which the scan discovered them. The cursor
    starts one position before the first file, so the first call to
    ``next()`` selects index 0.

    Attributes:
        input_dir: Root directory scanned for media files.
        output_dir: Flat directory holding the tagged copies.
        orphaned_outputs: Output file names with no matching input file,
            filled by ``reconcile_with_existing_output``.
        duplicate_outputs: Output file names matching an input that had
            already been resumed from another output file.
        name_collisions: Input file names found more than once in the tree.
            Every input after the first gets a numbered output name such as
            ``x (2).jpg`` so each record owns its own output file.
    """

    def __init__(self, input_dir: Path, output_dir: Path) -> None:
        self.input_dir = Path(os.path.abspath(input_dir))
        self.output_dir = Path(os.path.abspath(output_dir))
        self._files: List[Path] = []
        self._records: Dict[Path, TagRecord] = {}
        self._by_name: Dict[str, TagRecord] = {}
        self._index = -1
        self._lock = threading.Lock()
        self.orphaned_outputs: List[str] = []
        self.duplicate_outputs: List[str] = []
        self.name_collisions: List[str] = []

    def __len__(self) -> int:
        return len(self._files)

    @property
    def index(self) -> int:
        """Cursor position, -1 before the first navigation step."""
        return self._index

    @property
    def current_record(self) -> TagRecord:
        """Record under the cursor.

        Raises:
            EmptyCatalogError: If the catalog holds no files.
            CatalogError: If navigation has not started yet.
        """
        if not self._files:
            raise EmptyCatalogError("No files in catalog")
        if self._index < 0:
            raise CatalogError("No current file; call next() first")
        return self._records[self._files[self._index]]

    def records(self) -> Iterator[TagRecord]:
        """Iterate records in navigation order."""
        for path in self._files:
            yield self._records[path]

    def get(self, original_path: Path) -> Optional[TagRecord]:
        """Look up a record by its input path."""
        return self._records.get(Path(os.path.abspath(original_path)))

    @_exclusive
    def populate(self, extensions: Iterable[str]) -> int:
        """Register every accepted file below the input directory.

        Args:
            extensions: Accepted extensions; case and leading dots are ignored.

        Returns:
            Number of files registered by this call.

        Raises:
            ScanError: If a directory cannot be listed.
        """
        scanner = MediaScanner(extensions, excluded_dirs=[self.output_dir])
        added = 0
        for path in scanner.scan(self.input_dir):
            if path in self._records:
                continue
            output_name = self._unique_output_name(path.name)
            record = TagRecord(path, self.output_dir, output_name)
            self._files.append(path)
            self._records[path] = record
            if output_name != path.name:
                self.name_collisions.append(path.name)
                logger.warning(
                    f"Input name collision: {path} has the same name as "
                    f"{self._by_name[path.name].original_path}; "
                    f"its copy is stored as {output_name}"
                )
            self._by_name[output_name] = record
            added += 1

        logger.info(f"Registered {added} files from {self.input_dir}")
        return added

    @_exclusive
    def reconcile_with_existing_output(self) -> int:
        """Resume tags from files already present in the output directory.

        Each output file name is decoded back to its untagged output name and
        tags, and matched against the output name of every record. A match
        adopts the file and its tags and will not be copied again. Output
        files with no matching input are ignored.

        Returns:
            Number of records resumed.

        Raises:
            ScanError: If the output directory cannot be listed.
        """
        self.orphaned_outputs.clear()
        self.duplicate_outputs.clear()
        if not self.output_dir.exists():
            return 0

        try:
            with os.scandir(self.output_dir) as it:
                entries = sorted(
                    (entry for entry in it if entry.is_file()),
                    key=lambda entry: entry.name,
                )
        except OSError as e:
            raise ScanError(
                f"Cannot list output directory {self.output_dir}: {e}", self.output_dir
            )

        resumed = 0
        for entry in entries:
            if "." not in entry.name:
                self.orphaned_outputs.append(entry.name)
                continue
            decoded = decode(entry.name)
            record = self._by_name.get(decoded.base_name + decoded.extension)
            if record is None:
                self.orphaned_outputs.append(entry.name)
                logger.debug(f"Ignoring orphaned output file: {entry.name}")
                continue
            if not record.pending_copy:
                self.duplicate_outputs.append(entry.name)
                logger.warning(
                    f"Ignoring {entry.name}: {record.file_name} was already "
                    f"resumed from {record.current_path.name}"
                )
                continue
            record.adopt(self.output_dir / entry.name, decoded.tags)
            resumed += 1
            logger.debug(f"Resumed {record.tag_summary()}")

        logger.info(f"Resumed {resumed} files from {self.output_dir}")
        return resumed

    @_exclusive
    def materialize_pending(self) -> int:
        """Copy every input file that has no output file yet.

        Returns:
            Number of files copied. A second call copies nothing.

        Raises:
            TagFileError: If a copy fails.
        """
        copied = 0
        for record in self.records():
            if record.initial_copy():
                copied += 1
            record.pending_copy = False
        logger.info(f"Copied {copied} files into {self.output_dir}")
        return copied

    @_exclusive
    def next(self) -> str:
        """Advance the cursor, wrapping to the first file after the last.

        Returns:
            Locator of the file now under the cursor.

        Raises:
            EmptyCatalogError: If the catalog holds no files.
        """
        if not self._files:
            raise EmptyCatalogError("No files in catalog")
        self._index = (self._index + 1) % len(self._files)
        return self._locator(self._index)

    @_exclusive
    def previous(self) -> str:
        """Step the cursor back, wrapping to the last file before the first.

        Raises:
            EmptyCatalogError: If the catalog holds no files.
        """
        if not self._files:
            raise EmptyCatalogError("No files in catalog")
        self._index -= 1
        if self._index < 0:
            self._index = len(self._files) - 1
        return self._locator(self._index)

    @_exclusive
    def toggle(self, tag: Optional[str]) -> Optional[TagChange]:
        """Toggle a tag on the file under the cursor.

        A tag of None is ignored, so unbound keys can be passed straight through.

        Raises:
            CatalogError: If there is no current file.
            InvalidTagError: If the tag cannot be encoded in a file name.
            TagFileError: If the rename fails; the record is left unchanged.
        """
        if tag is None:
            return None
        return self.current_record.toggle(tag)

    def current_tag_summary(self) -> str:
        """Human-readable name and tags of the file under the cursor."""
        return self.current_record.tag_summary()

    def _unique_output_name(self, file_name: str) -> str:
        """Output name for an input, numbered when the name is already taken."""
        if file_name not in self._by_name:
            return file_name
        base_name, extension = split_extension(file_name)
        counter = 2
        while f"{base_name} ({counter}){extension}" in self._by_name:
            counter += 1
        return f"{base_name} ({counter}){extension}"

    def _locator(self, index: int) -> str:
        return self._files[index].as_uri()
