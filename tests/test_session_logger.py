"""Unit tests for SessionLogger."""

import re
from datetime import datetime
from pathlib import Path

import pytest

from filetagger.models import ScanSummary, SessionSummary, TagChange
from filetagger.orchestration import SessionLogger


def make_scan(**overrides) -> ScanSummary:
    scan = ScanSummary(
        input_dir=Path("/photos"),
        output_dir=Path("/tagged"),
        extensions=["jpg", "png"],
        files_found=3,
        files_resumed=1,
        files_copied=2,
    )
    for name, value in overrides.items():
        setattr(scan, name, value)
    return scan


def make_change(tag: str = "nature", added: bool = True) -> TagChange:
    return TagChange(
        original_path=Path("/photos/a.jpg"),
        tag=tag,
        added=added,
        old_name="a.jpg",
        new_name=f"a__{tag}.jpg",
        timestamp=datetime(2024, 5, 1, 12, 30, 0),
    )


class TestSessionLoggerBasic:
    """Test file handling."""

    def test_auto_generated_filename(self, temp_dir: Path, monkeypatch):
        monkeypatch.chdir(temp_dir)
        with SessionLogger() as session_log:
            log_path = session_log.get_log_path()
        assert log_path.parent == temp_dir
        assert re.match(r"tag_log_\d{4}-\d{2}-\d{2}_\d{2}-\d{2}-\d{2}\.log", log_path.name)
        assert log_path.exists()

    def test_custom_path(self, temp_dir: Path):
        custom = temp_dir / "session.log"
        with SessionLogger(log_file_path=custom) as session_log:
            session_log.log_header()
        assert "File Tagger - Session Log" in custom.read_text()

    def test_missing_parent_directory(self, temp_dir: Path):
        with pytest.raises(OSError, match="does not exist"):
            SessionLogger(log_file_path=temp_dir / "nope" / "session.log")

    def test_write_after_close_does_not_raise(self, temp_dir: Path, capsys):
        session_log = SessionLogger(log_file_path=temp_dir / "session.log")
        with session_log:
            pass
        session_log.log_header()
        assert "closed log file" in capsys.readouterr().err


class TestSessionLoggerSections:
    """Test the content of each section."""

    def test_header_contains_mode(self, temp_dir: Path):
        path = temp_dir / "session.log"
        with SessionLogger(log_file_path=path, mode="SCAN ONLY") as session_log:
            session_log.log_header()
        content = path.read_text()
        assert SessionLogger.SEPARATOR in content
        assert "Mode: SCAN ONLY" in content
        assert re.search(r"Timestamp: \d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}", content)

    def test_scan_phase(self, temp_dir: Path):
        path = temp_dir / "session.log"
        scan = make_scan(
            orphaned_outputs=["gone.jpg"],
            duplicate_outputs=["a__x.jpg"],
            name_collisions=["b.png"],
        )
        with SessionLogger(log_file_path=path) as session_log:
            session_log.log_scan_phase(scan)
        content = path.read_text()

        assert "SCAN PHASE" in content
        assert "Extensions: jpg, png" in content
        assert "Files found: 3" in content
        assert "Files resumed from previous session: 1" in content
        assert "Files copied: 2" in content
        assert "Orphaned output files: 1" in content
        assert "  - gone.jpg" in content
        assert "Duplicate output files: 1" in content
        assert "Input name collisions: 1" in content
        assert "  ! b.png" in content

    def test_scan_phase_without_warnings(self, temp_dir: Path):
        path = temp_dir / "session.log"
        with SessionLogger(log_file_path=path) as session_log:
            session_log.log_scan_phase(make_scan())
        content = path.read_text()
        assert "Orphaned" not in content
        assert "collisions" not in content

    def test_tag_changes_section_written_once(self, temp_dir: Path):
        path = temp_dir / "session.log"
        with SessionLogger(log_file_path=path) as session_log:
            session_log.log_tag_change(make_change("nature"))
            session_log.log_tag_change(make_change("sky", added=False))
        content = path.read_text()

        assert content.count("TAG CHANGES") == 1
        assert "[2024-05-01 12:30:00] +nature: a.jpg -> a__nature.jpg" in content
        assert "[2024-05-01 12:30:00] -sky: a.jpg -> a__sky.jpg" in content

    def test_error_line(self, temp_dir: Path):
        path = temp_dir / "session.log"
        with SessionLogger(log_file_path=path) as session_log:
            session_log.log_error("Could not rename a.jpg: busy")
        assert "! Could not rename a.jpg: busy" in path.read_text()

    def test_summary(self, temp_dir: Path):
        path = temp_dir / "session.log"
        summary = SessionSummary(
            files_tagged=1,
            files_visited=4,
            tag_changes=[make_change()],
            errors=["Could not rename a.jpg: busy"],
            duration_seconds=323,
            interrupted=True,
        )
        with SessionLogger(log_file_path=path) as session_log:
            session_log.log_summary(summary)
        content = path.read_text()

        assert "SUMMARY" in content
        assert "Files visited: 4" in content
        assert "Files tagged: 1" in content
        assert "Tag changes: 1" in content
        assert "Total errors: 1" in content
        assert "Session interrupted by user" in content
        assert "Duration: 5m 23s" in content
        assert f"Log file: {path}" in content

