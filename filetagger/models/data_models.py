"""
Core data models for filetagger.

This module contains the following dataclasses:
- ScanSummary: Results of scanning, reconciling and materializing a catalog
- TagChange: A single tag toggle and the rename it caused
- SessionSummary: Summary of an interactive tagging session
"""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import List


@dataclass
class ScanSummary:
    """Results of building a catalog from the input and output directories."""
    input_dir: Path                   # Root scanned for media files
    output_dir: Path                  # Flat working copy directory
    extensions: List[str]             # Accepted lowercase extensions (no dot)
    files_found: int = 0              # Input files registered in the catalog
    files_resumed: int = 0            # Records adopted from a previous session
    files_copied: int = 0             # Initial copies performed
    orphaned_outputs: List[str] = field(default_factory=list)  # Output names with no input
    duplicate_outputs: List[str] = field(default_factory=list)  # Extra outputs for a resumed input
    name_collisions: List[str] = field(default_factory=list)   # Input names seen more than once


@dataclass
class TagChange:
    """A tag toggle applied to one file."""
    original_path: Path               # Stable identity of the record
    tag: str                          # Tag that was toggled
    added: bool                       # True if added, False if removed
    old_name: str                     # Output file name before the rename
    new_name: str                     # Output file name after the rename
    timestamp: datetime = field(default_factory=datetime.now)


@dataclass
class SessionSummary:
    """Summary of an interactive tagging session returned by TagOrchestrator."""
    files_tagged: int = 0             # Distinct files whose tags changed
    files_visited: int = 0            # Navigation steps taken
    tag_changes: List[TagChange] = field(default_factory=list)  # Changes in order
    errors: List[str] = field(default_factory=list)             # Recoverable errors
    duration_seconds: float = 0.0     # Total session duration
    interrupted: bool = False         # Whether the session ended with Ctrl+C

    def formatted_duration(self) -> str:
        """Duration as "45s", "5m 23s" or "1h 5m 30s"."""
        total_seconds = max(int(self.duration_seconds), 0)

        if total_seconds < 60:
            return f"{total_seconds}s"

        hours = total_seconds // 3600
        minutes = (total_seconds % 3600) // 60
        secs = total_seconds % 60

        if hours > 0:
            return f"{hours}h {minutes}m {secs}s"
        return f"{minutes}m {secs}s"
