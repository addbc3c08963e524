"""linecmd library modules.

Supporting functionality for the interactive shell.
"""

__all__ = [
    "config_parser",
]
