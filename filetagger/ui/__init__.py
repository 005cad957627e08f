"""Terminal user interface for filetagger."""

from .tagger_tui import EXIT_KEYS, NEXT_KEYS, PREVIOUS_KEYS, TaggerTUI

__all__ = ["TaggerTUI", "NEXT_KEYS", "PREVIOUS_KEYS", "EXIT_KEYS"]
