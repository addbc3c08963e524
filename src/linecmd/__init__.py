"""linecmd - Minimal interactive command-line shell.

A small library for building interactive command interpreters: register a
table of commands, and linecmd reads lines, splits them respecting double
quotes, checks argument counts and calls the matching handler.

Features:
- Quote-aware tokenizer
- Built-in help generated from the command table
- Startup script replay
- Swappable output writer for capture and testing
"""

__version__ = "1.0.0"
__license__ = "MIT"

from linecmd.shell import (
    CommandSpec,
    CommandTable,
    StringWriter,
    StreamWriter,
    destroy,
    execute_commander,
    handle_error,
    initialize,
    not_implemented,
    print_name,
    prompt,
    set_writer,
    show_config,
    show_help,
    tokenize_line,
)
from linecmd.cli import main

__all__ = [
    "CommandSpec",
    "CommandTable",
    "StringWriter",
    "StreamWriter",
    "initialize",
    "destroy",
    "prompt",
    "set_writer",
    "handle_error",
    "execute_commander",
    "show_help",
    "show_config",
    "print_name",
    "not_implemented",
    "tokenize_line",
    "main",
    "__version__",
]
