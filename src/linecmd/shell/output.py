"""Output sinks for user-facing shell text.

Everything the shell shows the user (prompts, help, command feedback and
error reports) goes through a single writer, so it can be swapped for
capture in tests or redirection.
"""

from __future__ import annotations

import sys
from typing import Any, List, Optional, Protocol, TextIO


def format_message(format_string: str, *args: Any) -> str:
    """Apply printf-style formatting.

    Args:
        format_string: Format string (e.g., "Executing: %s")
        *args: Positional values for the format string

    Returns:
        Formatted text; the format string is returned as-is without args
    """
    if not args:
        return format_string
    return format_string % args


class Writer(Protocol):
    """Destination for formatted shell output."""

    def log(self, format_string: str, *args: Any, end: str = "\n") -> None:
        ...


class StreamWriter:
    """Writer that prints to a text stream.

    When no stream is given, the current ``sys.stdout`` is looked up on
    every write.
    """

    def __init__(self, stream: Optional[TextIO] = None):
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def log(self, format_string: str, *args: Any, end: str = "\n") -> None:
        """Write a formatted message followed by ``end``."""
        stream = self.stream
        stream.write(format_message(format_string, *args) + end)
        stream.flush()


class StringWriter:
    """Writer that accumulates output in memory."""

    def __init__(self):
        self._chunks: List[str] = []

    def log(self, format_string: str, *args: Any, end: str = "\n") -> None:
        self._chunks.append(format_message(format_string, *args) + end)

    def get(self) -> str:
        """Get everything written since the last reset."""
        return ''.join(self._chunks)

    def reset(self) -> None:
        """Discard captured output."""
        self._chunks.clear()
