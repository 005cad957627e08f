"""
SessionCommand enum for the interactive tagging loop.

Each key read by the terminal session resolves to one of these commands:
1. NEXT - advance the cursor, wrapping past the last file
2. PREVIOUS - step the cursor back, wrapping before the first file
3. EXIT - end the session
4. TOGGLE - the key is bound to a tag in the key map
5. UNKNOWN - the key is neither a navigation key nor bound to a tag
"""

from enum import Enum


class SessionCommand(Enum):
    """Commands the tagging session dispatches on."""
    NEXT = "next"
    PREVIOUS = "previous"
    EXIT = "exit"
    TOGGLE = "toggle"
    UNKNOWN = "unknown"
