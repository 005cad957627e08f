"""
Unit tests for TagRecord.

Tests cover:
- Initial state of a record
- Toggle adds, removes and renames the output file
- Toggling the same tag twice restores the original name
- Failed renames leave tags and file name untouched
- Initial copy preserves contents and respects the pending flag
- Adopting an output file left by an earlier session
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from filetagger.catalog import TagRecord
from filetagger.exceptions import InvalidTagError, TagFileError


@pytest.fixture
def record(input_dir: Path, output_dir: Path) -> TagRecord:
    """Record for input/photo.jpg whose copy already exists in output/."""
    source = input_dir / "photo.jpg"
    source.write_bytes(b"photo bytes")
    rec = TagRecord(source, output_dir)
    rec.initial_copy()
    rec.pending_copy = False
    return rec


class TestTagRecordInit:
    """Tests for a freshly created record."""

    def test_initial_state(self, input_dir, output_dir):
        rec = TagRecord(input_dir / "photo.jpg", output_dir)
        assert rec.base_name == "photo"
        assert rec.extension == ".jpg"
        assert rec.tags == []
        assert rec.pending_copy is True
        assert rec.current_path == output_dir / "photo.jpg"
        assert rec.file_name == "photo.jpg"

    def test_output_name_overrides_copy_name(self, input_dir, output_dir):
        rec = TagRecord(input_dir / "x.jpg", output_dir, output_name="x (2).jpg")
        assert rec.file_name == "x.jpg"
        assert rec.base_name == "x (2)"
        assert rec.current_path == output_dir / "x (2).jpg"
        assert rec.target_path(["sky"]) == output_dir / "x (2)__sky.jpg"

    def test_name_without_extension_rejected(self, input_dir, output_dir):
        with pytest.raises(ValueError):
            TagRecord(input_dir / "README", output_dir)

    def test_tags_property_is_a_copy(self, record):
        record.tags.append("sneaky")
        assert record.tags == []


class TestToggle:
    """Tests for TagRecord.toggle()."""

    def test_add_tag_renames_file(self, record, output_dir):
        change = record.toggle("nature")

        assert record.tags == ["nature"]
        assert record.current_path == output_dir / "photo__nature.jpg"
        assert record.current_path.exists()
        assert not (output_dir / "photo.jpg").exists()
        assert change.added is True
        assert change.tag == "nature"
        assert change.old_name == "photo.jpg"
        assert change.new_name == "photo__nature.jpg"

    def test_tags_encoded_in_insertion_order(self, record, output_dir):
        record.toggle("nature")
        record.toggle("architecture")
        assert record.current_path.name == "photo__nature-architecture.jpg"

    def test_remove_tag(self, record, output_dir):
        record.toggle("nature")
        record.toggle("architecture")
        change = record.toggle("nature")

        assert change.added is False
        assert record.tags == ["architecture"]
        assert record.current_path.name == "photo__architecture.jpg"

    def test_toggle_twice_restores_name(self, record, output_dir):
        record.toggle("nature")
        record.toggle("nature")

        assert record.tags == []
        assert record.current_path == output_dir / "photo.jpg"
        assert record.current_path.read_bytes() == b"photo bytes"

    def test_output_path_matches_tags_after_every_toggle(self, record):
        for tag in ["a", "b", "a", "c", "b"]:
            record.toggle(tag)
            assert record.current_path == record.target_path()
            assert record.current_path.exists()

    def test_none_is_ignored(self, record, output_dir):
        assert record.toggle(None) is None
        assert record.current_path == output_dir / "photo.jpg"

    def test_invalid_tag_rejected_before_rename(self, record, output_dir):
        with pytest.raises(InvalidTagError):
            record.toggle("bad-tag")
        assert record.tags == []
        assert (output_dir / "photo.jpg").exists()

    def test_failed_rename_rolls_back(self, record, output_dir):
        with patch("filetagger.catalog.tag_record.os.replace", side_effect=OSError("disk gone")):
            with pytest.raises(TagFileError) as exc_info:
                record.toggle("nature")

        assert record.tags == []
        assert record.current_path == output_dir / "photo.jpg"
        assert (output_dir / "photo.jpg").exists()
        assert exc_info.value.operation == "rename"
        assert "disk gone" in str(exc_info.value)

    def test_missing_output_file_raises(self, record):
        record.current_path.unlink()
        with pytest.raises(TagFileError):
            record.toggle("nature")
        assert record.tags == []


class TestInitialCopy:
    """Tests for TagRecord.initial_copy()."""

    def test_copies_contents(self, input_dir, output_dir):
        source = input_dir / "photo.jpg"
        source.write_bytes(b"original")
        rec = TagRecord(source, output_dir)

        assert rec.initial_copy() is True
        assert (output_dir / "photo.jpg").read_bytes() == b"original"
        assert source.exists()

    def test_preserves_modification_time(self, input_dir, output_dir):
        source = input_dir / "photo.jpg"
        source.write_bytes(b"original")
        os.utime(source, (1_000_000_000, 1_000_000_000))
        rec = TagRecord(source, output_dir)
        rec.initial_copy()

        assert int((output_dir / "photo.jpg").stat().st_mtime) == 1_000_000_000

    def test_replaces_existing_file(self, input_dir, output_dir):
        source = input_dir / "photo.jpg"
        source.write_bytes(b"new")
        (output_dir / "photo.jpg").write_bytes(b"stale")
        TagRecord(source, output_dir).initial_copy()
        assert (output_dir / "photo.jpg").read_bytes() == b"new"

    def test_not_pending_copies_nothing(self, input_dir, output_dir):
        source = input_dir / "photo.jpg"
        source.write_bytes(b"original")
        rec = TagRecord(source, output_dir)
        rec.pending_copy = False

        assert rec.initial_copy() is False
        assert not (output_dir / "photo.jpg").exists()

    def test_copy_failure_raises(self, input_dir, temp_dir):
        source = input_dir / "photo.jpg"
        source.write_bytes(b"original")
        rec = TagRecord(source, temp_dir / "missing")

        with pytest.raises(TagFileError) as exc_info:
            rec.initial_copy()
        assert exc_info.value.operation == "copy"


class TestAdopt:
    """Tests for TagRecord.adopt()."""

    def test_adopt_takes_path_and_tags(self, input_dir, output_dir):
        rec = TagRecord(input_dir / "photo.jpg", output_dir)
        existing = output_dir / "photo__nature-architecture.jpg"
        existing.write_bytes(b"tagged")

        rec.adopt(existing, ["nature", "architecture"])

        assert rec.tags == ["nature", "architecture"]
        assert rec.current_path == existing
        assert rec.pending_copy is False

    def test_toggle_after_adopt(self, input_dir, output_dir):
        rec = TagRecord(input_dir / "photo.jpg", output_dir)
        existing = output_dir / "photo__nature.jpg"
        existing.write_bytes(b"tagged")
        rec.adopt(existing, ["nature"])

        rec.toggle("nature")

        assert (output_dir / "photo.jpg").read_bytes() == b"tagged"
        assert not existing.exists()


class TestTagSummary:
    def test_no_tags(self, input_dir, output_dir):
        rec = TagRecord(input_dir / "photo.jpg", output_dir)
        assert rec.tag_summary() == "photo.jpg: (no tags)"

    def test_with_tags(self, record):
        record.toggle("nature")
        record.toggle("sky")
        assert record.tag_summary() == "photo.jpg: nature, sky"
