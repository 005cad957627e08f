"""Workflow orchestration package for filetagger.

This package contains orchestration components for tagging sessions:
- SessionLogger: Structured logging of a session to a timestamped log file.
- TagOrchestrator: Central coordinator for scan and tagging workflows.
"""

from filetagger.orchestration.session_logger import SessionLogger
from filetagger.orchestration.tag_orchestrator import TagOrchestrator

__all__ = ["SessionLogger", "TagOrchestrator"]
