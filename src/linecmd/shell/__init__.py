"""Shell module for the interactive command line.

Provides the tokenizer, the command table and dispatcher, output writers and
the interactive session with startup script replay.
"""

from __future__ import annotations

from linecmd.shell.builtins import (
    CommandSpec,
    CommandTable,
    not_implemented,
    print_name,
    show_config,
    show_help,
)
from linecmd.shell.errors import CommandTableError, ScriptError, ShellError
from linecmd.shell.interpreter import CommandDispatcher, DispatchResult, execute_commander
from linecmd.shell.output import StreamWriter, StringWriter, Writer
from linecmd.shell.parser import LineTokenizer, tokenize_line
from linecmd.shell.repl import (
    LineSource,
    Session,
    SessionState,
    destroy,
    get_session,
    handle_error,
    initialize,
    prompt,
    set_writer,
)

__all__ = [
    "CommandSpec",
    "CommandTable",
    "CommandDispatcher",
    "DispatchResult",
    "LineSource",
    "LineTokenizer",
    "Session",
    "SessionState",
    "StreamWriter",
    "StringWriter",
    "Writer",
    "ShellError",
    "CommandTableError",
    "ScriptError",
    "initialize",
    "destroy",
    "prompt",
    "set_writer",
    "handle_error",
    "get_session",
    "execute_commander",
    "show_help",
    "show_config",
    "print_name",
    "not_implemented",
    "tokenize_line",
]
