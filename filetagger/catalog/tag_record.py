"""
Per-file tag state for filetagger.

This module contains the TagRecord class, which tracks one input file's
tags and the output file that stores them in its name.
"""

import logging
import os
import shutil
from pathlib import Path
from typing import Iterable, List, Optional

from filetagger.codec import build_file_name, split_extension, validate_tag
from filetagger.exceptions import TagFileError
from filetagger.models import TagChange

logger = logging.getLogger(__name__)


class TagRecord:
    """Tag state of a single input file and its tagged output copy.

    The output path always equals
    ``output_dir / (base_name + encode(tags) + extension)``. Only the
    constructor, ``toggle`` and ``adopt`` write it.

    Attributes:
        original_path: Absolute input path, the record's stable identity.
        output_dir: Flat directory holding the tagged copy.
        output_name: Untagged output file name. Equal to the input file name
            unless another input already claimed that name.
        base_name: Output file name without its extension.
        extension: File extension, including the leading dot.
        pending_copy: True until the input has been copied to the output
            directory or an existing output file has been adopted.
    """

    def __init__(
        self,
        original_path: Path,
        output_dir: Path,
        output_name: Optional[str] = None,
    ) -> None:
        """Create a record for an input file with no tags.

        Args:
            original_path: Path to the input file. Its name must have an extension.
            output_dir: Directory where the tagged copy lives.
            output_name: Untagged name of the copy, defaults to the input name.
        """
        self.original_path = Path(os.path.abspath(original_path))
        self.output_dir = Path(output_dir)
        self.output_name = output_name or self.original_path.name
        self.base_name, self.extension = split_extension(self.output_name)
        self.pending_copy = True
        self._tags: List[str] = []
        self._current_path = self.output_dir / self.output_name

    @property
    def current_path(self) -> Path:
        """Location of the output file that currently stores the tags."""
        return self._current_path

    @property
    def tags(self) -> List[str]:
        """Tags in the order they were added."""
        return list(self._tags)

    @property
    def file_name(self) -> str:
        """Input file name."""
        return self.original_path.name

    def has_tag(self, tag: str) -> bool:
        return tag in self._tags

    def target_path(self, tags: Optional[Iterable[str]] = None) -> Path:
        """Output path for the given tags, or for the current tags."""
        if tags is None:
            tags = self._tags
        return self.output_dir / build_file_name(self.base_name, tags, self.extension)

    def toggle(self, tag: Optional[str]) -> Optional[TagChange]:
        """Add the tag if absent, remove it if present, and rename the file.

        The tag change and the rename happen together: if the rename fails
        the tag list is restored and the file keeps its old name.

        Args:
            tag: Tag to toggle. None is ignored.

        Returns:
            TagChange describing the rename, or None when tag is None.

        Raises:
            InvalidTagError: If the tag cannot be encoded in a file name.
            TagFileError: If the rename fails. The record is left unchanged.
        """
        if tag is None:
            return None
        validate_tag(tag)

        previous_tags = list(self._tags)
        added = tag not in self._tags
        if added:
            self._tags.append(tag)
        else:
            self._tags.remove(tag)

        source = self._current_path
        target = self.target_path()
        try:
            os.replace(source, target)
        except OSError as e:
            self._tags = previous_tags
            logger.warning(f"Rename failed, tags restored for {self.file_name}: {e}")
            raise TagFileError("rename", source, str(e)) from e

        self._current_path = target
        logger.debug(f"Renamed {source.name} -> {target.name}")
        return TagChange(
            original_path=self.original_path,
            tag=tag,
            added=added,
            old_name=source.name,
            new_name=target.name,
        )

    def initial_copy(self) -> bool:
        """Copy the input file into the output directory if still pending.

        Contents and metadata are copied, replacing any file already at the
        current path. The pending flag is left for the caller to clear.

        Returns:
            True if a copy was made, False if nothing was pending.

        Raises:
            TagFileError: If the copy fails.
        """
        if not self.pending_copy:
            return False
        try:
            shutil.copy2(self.original_path, self._current_path)
        except OSError as e:
            raise TagFileError("copy", self.original_path, str(e)) from e
        logger.debug(f"Copied {self.original_path} -> {self._current_path}")
        return True

    def adopt(self, output_path: Path, tags: Iterable[str]) -> None:
        """Take over an output file left by a previous session.

        The file is already named for its tags, so no rename happens; its
        tags are merged into the record and no initial copy will be made.
        """
        for tag in tags:
            if tag not in self._tags:
                self._tags.append(tag)
        self._current_path = Path(output_path)
        self.pending_copy = False

    def tag_summary(self) -> str:
        """Human-readable line naming the file and its tags."""
        if not self._tags:
            return f"{self.file_name}: (no tags)"
        return f"{self.file_name}: {', '.join(self._tags)}"

    def __repr__(self) -> str:
        return (
            f"TagRecord({str(self.original_path)!r}, tags={self._tags!r}, "
            f"pending_copy={self.pending_copy})"
        )
