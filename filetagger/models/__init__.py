"""
Models package for filetagger.

This package provides convenient imports for all data models:
- SessionCommand: Enum of commands the tagging loop dispatches on
- ScanSummary: Catalog build results
- TagChange: A single tag toggle
- SessionSummary: Tagging session results
"""

from .session_command import SessionCommand
from .data_models import (
    ScanSummary,
    SessionSummary,
    TagChange,
)

__all__ = [
    "SessionCommand",
    "ScanSummary",
    "SessionSummary",
    "TagChange",
]
