"""Exceptions raised by the shell library."""

from __future__ import annotations


class ShellError(Exception):
    """Base error for the shell library."""
    pass


class CommandTableError(ShellError):
    """Raised when a command entry cannot be registered."""
    pass


class ScriptError(ShellError):
    """Raised when a startup script cannot be read."""
    pass
