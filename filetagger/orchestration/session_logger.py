"""SessionLogger for recording tagging sessions in a structured log file.

The log has a header, a scan phase section describing how the catalog was
built, one line per tag change, and a closing summary.
"""

import sys
from datetime import datetime
from pathlib import Path
from typing import Optional, TextIO

from filetagger.models import ScanSummary, SessionSummary, TagChange


class SessionLogger:
    """Logger for tagging sessions with structured output format.

    Usage:
        with SessionLogger(log_path, mode="TAG SESSION") as session_log:
            session_log.log_header()
            session_log.log_scan_phase(scan_summary)
            for change in changes:
                session_log.log_tag_change(change)
            session_log.log_summary(summary)

    Attributes:
        SEPARATOR: The 65-character separator line used between sections.
    """

    SEPARATOR = "=" * 65

    def __init__(
        self,
        log_file_path: Optional[Path] = None,
        mode: str = "TAG SESSION",
    ) -> None:
        """Initialize the SessionLogger.

        Args:
            log_file_path: Optional path for the log file. If not provided,
                generates a timestamped filename in the current directory.
            mode: Label written in the header, e.g. "TAG SESSION" or "SCAN ONLY".

        Raises:
            OSError: If the log file path is not writable.
        """
        self._mode = mode
        self._start_timestamp = datetime.now()
        self._file_handle: Optional[TextIO] = None
        self._change_counter = 0

        if log_file_path is None:
            timestamp_str = self._start_timestamp.strftime("%Y-%m-%d_%H-%M-%S")
            self._log_file_path = Path.cwd() / f"tag_log_{timestamp_str}.log"
        else:
            self._log_file_path = Path(log_file_path)

        self._validate_path()

    def _validate_path(self) -> None:
        """Validate that the log file path is writable.

        Raises:
            OSError: If the parent directory doesn't exist or is not writable.
        """
        parent = self._log_file_path.parent
        if not parent.exists():
            raise OSError(f"Parent directory does not exist: {parent}")
        if not parent.is_dir():
            raise OSError(f"Parent path is not a directory: {parent}")
        try:
            test_file = parent / f".filetagger_test_{id(self)}"
            test_file.touch()
            test_file.unlink()
        except PermissionError:
            raise OSError(f"Permission denied: cannot write to {parent}")

    def __enter__(self) -> "SessionLogger":
        try:
            self._file_handle = open(self._log_file_path, "w", encoding="utf-8")
        except OSError as e:
            raise OSError(f"Cannot open log file for writing: {e}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        """Close the log file if it is open."""
        if self._file_handle is not None:
            try:
                self._file_handle.close()
            except OSError as e:
                print(f"Warning: Error closing log file: {e}", file=sys.stderr)
            finally:
                self._file_handle = None

    def get_log_path(self) -> Path:
        return self._log_file_path

    def log_header(self) -> None:
        """Write the title, timestamp and mode."""
        self._write_separator()
        self._write_line("File Tagger - Session Log")
        self._write_separator()
        self._write_line(f"Timestamp: {self._format_timestamp(self._start_timestamp)}")
        self._write_line(f"Mode: {self._mode}")
        self._write_line("")

    def log_scan_phase(self, scan: ScanSummary) -> None:
        """Write how the catalog was built.

        Args:
            scan: Results of populate, reconcile and materialize.
        """
        self._write_separator()
        self._write_line("SCAN PHASE")
        self._write_separator()
        self._write_line(f"Input directory: {scan.input_dir}")
        self._write_line(f"Output directory: {scan.output_dir}")
        self._write_line(f"Extensions: {', '.join(scan.extensions)}")
        self._write_line(f"Files found: {scan.files_found}")
        self._write_line(f"Files resumed from previous session: {scan.files_resumed}")
        self._write_line(f"Files copied: {scan.files_copied}")

        if scan.orphaned_outputs:
            self._write_line(f"Orphaned output files: {len(scan.orphaned_outputs)}")
            for name in scan.orphaned_outputs:
                self._write_line(f"- {name}", indent=2)
        if scan.duplicate_outputs:
            self._write_line(f"Duplicate output files: {len(scan.duplicate_outputs)}")
            for name in scan.duplicate_outputs:
                self._write_line(f"- {name}", indent=2)
        if scan.name_collisions:
            self._write_line(f"Input name collisions: {len(scan.name_collisions)}")
            for name in scan.name_collisions:
                self._write_line(f"! {name}", indent=2)
        self._write_line("")

    def log_tag_change(self, change: TagChange) -> None:
        """Write one tag change and the rename it caused."""
        if self._change_counter == 0:
            self._write_separator()
            self._write_line("TAG CHANGES")
            self._write_separator()

        self._change_counter += 1
        sign = "+" if change.added else "-"
        self._write_line(
            f"[{self._format_timestamp(change.timestamp)}] {sign}{change.tag}: "
            f"{change.old_name} -> {change.new_name}"
        )

    def log_error(self, message: str) -> None:
        """Write a recoverable error raised during the session."""
        self._write_line(f"[{self._format_timestamp(datetime.now())}] ! {message}")

    def log_summary(self, summary: SessionSummary) -> None:
        """Write the summary section."""
        if self._change_counter:
            self._write_line("")
        self._write_separator()
        self._write_line("SUMMARY")
        self._write_separator()
        self._write_line(f"Files visited: {summary.files_visited}")
        self._write_line(f"Files tagged: {summary.files_tagged}")
        self._write_line(f"Tag changes: {len(summary.tag_changes)}")

        if summary.errors:
            self._write_line(f"Total errors: {len(summary.errors)}")
            self._write_line("Errors:")
            for error in summary.errors:
                self._write_line(f"- {error}", indent=2)

        if summary.interrupted:
            self._write_line("Session interrupted by user")
        self._write_line(f"Duration: {summary.formatted_duration()}")
        self._write_line("")
        self._write_line(f"Log file: {self._log_file_path}")
        self._write_separator()

    def _format_timestamp(self, dt: datetime) -> str:
        return dt.strftime("%Y-%m-%d %H:%M:%S")

    def _write_separator(self) -> None:
        self._write_line(self.SEPARATOR)

    def _write_line(self, text: str, indent: int = 0) -> None:
        """Write a line to the log file with optional indentation."""
        if self._file_handle is None:
            print(
                f"Warning: Attempted to write to closed log file: {text}",
                file=sys.stderr,
            )
            return

        try:
            self._file_handle.write(" " * indent + text + "\n")
            self._file_handle.flush()
        except OSError as e:
            print(f"Warning: Error writing to log file: {e}", file=sys.stderr)
