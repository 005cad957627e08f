"""TagOrchestrator for coordinating catalog building and tagging sessions.

This module provides the TagOrchestrator class that runs both workflows of
the tool. It coordinates Catalog, TaggerTUI and SessionLogger:

- scan(): read-only; discovers input files and resumes tags from the output
  directory, then shows the catalog without copying anything.
- run_session(): builds the catalog, copies untouched files, then reads
  keys until the operator exits, toggling tags and moving the cursor.

Example:
    from filetagger.orchestration import TagOrchestrator
    from pathlib import Path

    orchestrator = TagOrchestrator(
        input_dir=Path("photos"),
        output_dir=Path("tagged"),
        extensions=["jpg", "png"],
        key_map=KeyMap.load(Path("tagkeys.json")),
    )
    summary = orchestrator.run_session()
"""

import logging
import time
from pathlib import Path
from typing import Iterable, List, Optional, Set

from filetagger.catalog import Catalog, normalize_extension
from filetagger.config import KeyMap
from filetagger.exceptions import InvalidTagError, ScanError, TagFileError
from filetagger.models import ScanSummary, SessionCommand, SessionSummary
from filetagger.orchestration.session_logger import SessionLogger
from filetagger.ui import TaggerTUI

logger = logging.getLogger(__name__)


class TagOrchestrator:
    """Orchestrates catalog building and interactive tagging.

    Attributes:
        input_dir: Root directory scanned for media files.
        output_dir: Flat directory holding the tagged copies.
        extensions: Accepted extensions, lowercase without the dot.
        key_map: Key-to-tag mapping used by the session.
        log_file_path: Optional path for the structured session log.
        verbose: Whether to display additional details.
    """

    def __init__(
        self,
        input_dir: Path,
        output_dir: Path,
        extensions: Iterable[str],
        key_map: Optional[KeyMap] = None,
        log_file_path: Optional[Path] = None,
        verbose: bool = False,
        tui: Optional[TaggerTUI] = None,
    ) -> None:
        """Initialize the TagOrchestrator.

        Raises:
            ValueError: If no usable extension is given.
        """
        normalized: List[str] = []
        for ext in extensions:
            ext = normalize_extension(ext)
            if ext and ext not in normalized:
                normalized.append(ext)
        if not normalized:
            raise ValueError("At least one file extension is required")

        self.input_dir = Path(input_dir).resolve()
        self.output_dir = Path(output_dir).resolve()
        self.extensions = normalized
        self.key_map = key_map
        self.log_file_path = log_file_path
        self.verbose = verbose
        self._tui = tui or TaggerTUI()
        self.catalog: Optional[Catalog] = None

    @property
    def tui(self) -> TaggerTUI:
        return self._tui

    def ensure_directories(self) -> None:
        """Create the input and output directories if they are missing.

        Raises:
            ScanError: If a directory cannot be created.
        """
        for directory in (self.input_dir, self.output_dir):
            try:
                directory.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise ScanError(f"Cannot create directory {directory}: {e}", directory)

    def build_catalog(self, materialize: bool = True) -> ScanSummary:
        """Scan the input, resume earlier tags, and optionally copy new files.

        Args:
            materialize: Copy every input file without an output file. When
                False the file system is left untouched.

        Returns:
            ScanSummary describing the catalog.

        Raises:
            ScanError: If a directory cannot be listed.
            TagFileError: If an initial copy fails.
        """
        catalog = Catalog(self.input_dir, self.output_dir)
        summary = ScanSummary(
            input_dir=self.input_dir,
            output_dir=self.output_dir,
            extensions=list(self.extensions),
        )

        summary.files_found = catalog.populate(self.extensions)
        summary.files_resumed = catalog.reconcile_with_existing_output()
        if materialize:
            summary.files_copied = catalog.materialize_pending()

        summary.orphaned_outputs = list(catalog.orphaned_outputs)
        summary.duplicate_outputs = list(catalog.duplicate_outputs)
        summary.name_collisions = list(catalog.name_collisions)
        self.catalog = catalog
        return summary

    def scan(self) -> ScanSummary:
        """Execute the read-only scan workflow.

        No media file is copied or renamed. When a log path was given, a
        "SCAN ONLY" log with the scan phase is written.

        Raises:
            ScanError: If the input directory is missing or unreadable.
        """
        if not self.input_dir.is_dir():
            raise ScanError(f"Input directory does not exist: {self.input_dir}", self.input_dir)

        scan = self.build_catalog(materialize=False)
        self._tui.display_scan_summary(scan)
        self._tui.display_catalog(self.catalog)

        session_log = self._open_session_log("SCAN ONLY")
        if session_log is not None:
            with session_log:
                session_log.log_header()
                session_log.log_scan_phase(scan)
            if self.verbose:
                self._tui.console.print(f"[dim]Log file: {session_log.get_log_path()}[/dim]")
        return scan

    def _open_session_log(self, mode: str) -> Optional[SessionLogger]:
        """Create the session log if a path was given; warn and skip on failure."""
        if self.log_file_path is None:
            return None
        try:
            return SessionLogger(self.log_file_path, mode=mode)
        except OSError as e:
            self._tui.console.print(
                f"[yellow]Warning:[/yellow] Could not create log file: {e}. "
                "Continuing without logging."
            )
            return None

    def run_session(self) -> SessionSummary:
        """Execute the interactive tagging workflow.

        Returns:
            SessionSummary with the changes made.

        Raises:
            ValueError: If no key map was given.
            ScanError: If a directory cannot be created or listed.
            TagFileError: If an initial copy fails.
        """
        if self.key_map is None:
            raise ValueError("A key map is required for a tagging session")

        start_time = time.time()
        self.ensure_directories()
        scan = self.build_catalog(materialize=True)

        self._tui.display_scan_summary(scan)
        summary = SessionSummary()
        if not len(self.catalog):
            self._tui.console.print("[yellow]No matching files found. Nothing to tag.[/yellow]")
            summary.duration_seconds = time.time() - start_time
            return summary

        self._tui.display_key_map(self.key_map)

        session_log = self._open_session_log("TAG SESSION")
        if session_log is not None:
            with session_log:
                session_log.log_header()
                session_log.log_scan_phase(scan)
                self._tag_loop(summary, session_log)
                summary.duration_seconds = time.time() - start_time
                session_log.log_summary(summary)
                if self.verbose:
                    self._tui.console.print(f"[dim]Log file: {session_log.get_log_path()}[/dim]")
        else:
            self._tag_loop(summary, None)
            summary.duration_seconds = time.time() - start_time

        self._tui.display_session_summary(summary)
        return summary

    def _tag_loop(self, summary: SessionSummary, session_log: Optional[SessionLogger]) -> None:
        """Read keys and apply them until the operator exits."""
        catalog = self.catalog
        tagged: Set[Path] = set()

        locator = catalog.next()
        summary.files_visited += 1

        while True:
            self._tui.display_current(
                locator, catalog.current_tag_summary(), catalog.index, len(catalog)
            )
            try:
                command, tag, key = self._tui.read_command(self.key_map)
            except (KeyboardInterrupt, EOFError):
                self._tui.console.print("\n[yellow]Session interrupted by user.[/yellow]")
                summary.interrupted = True
                break

            if command is SessionCommand.EXIT:
                logger.debug("Session ended by operator")
                break
            if command is SessionCommand.NEXT:
                locator = catalog.next()
                summary.files_visited += 1
            elif command is SessionCommand.PREVIOUS:
                locator = catalog.previous()
                summary.files_visited += 1
            elif command is SessionCommand.TOGGLE:
                try:
                    change = catalog.toggle(tag)
                except (TagFileError, InvalidTagError) as e:
                    error_msg = str(e)
                    summary.errors.append(error_msg)
                    self._tui.display_error(error_msg)
                    if session_log is not None:
                        session_log.log_error(error_msg)
                    continue
                if change is None:
                    continue
                summary.tag_changes.append(change)
                tagged.add(change.original_path)
                summary.files_tagged = len(tagged)
                self._tui.display_tag_change(change)
                if session_log is not None:
                    session_log.log_tag_change(change)
            else:
                self._tui.display_unknown_key(key)
