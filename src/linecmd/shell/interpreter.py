"""Command dispatcher.

Routes a tokenized line to the matching command of a CommandTable after
validating its argument count.
"""

from __future__ import annotations

import json
import logging
from enum import Enum
from typing import List, Optional, Sequence

from linecmd.shell.builtins import HELP_COMMAND, CommandTable, show_help
from linecmd.shell.output import StreamWriter, Writer

logger = logging.getLogger(__name__)


class DispatchResult(Enum):
    """Which branch a dispatched line took."""
    EMPTY = "empty"
    HELP = "help"
    HANDLED = "handled"
    WRONG_ARITY = "wrong_arity"
    UNRECOGNIZED = "unrecognized"


class CommandDispatcher:
    """Dispatches parsed lines against a command table.

    At most one handler is invoked per line. Commands are matched by exact
    name only; ``help`` is always handled by the built-in help.
    """

    def __init__(self, table: CommandTable, writer: Optional[Writer] = None):
        """Initialize dispatcher.

        Args:
            table: Commands available for dispatch
            writer: Output sink (defaults to standard output)
        """
        self.table = table
        self.writer = writer or StreamWriter()

    def dispatch(self, tokens: Optional[Sequence[str]]) -> DispatchResult:
        """Dispatch one parsed line.

        Args:
            tokens: Tokens of the line; the first one is the command name

        Returns:
            The branch taken
        """
        if not tokens or tokens[0] == '':
            self.writer.log('')
            return DispatchResult.EMPTY

        name = tokens[0]
        if name == HELP_COMMAND:
            show_help(self.table, self.writer)
            return DispatchResult.HELP

        spec = self.table.get(name)
        if spec is None:
            logger.debug(f"Unrecognized command: {name}")
            self.writer.log('Unrecognized command')
            return DispatchResult.UNRECOGNIZED

        args: List[str] = list(tokens[1:])
        if len(args) != spec.arity:
            logger.debug(f"Command '{name}' expects {spec.arity} parameters, got {len(args)}")
            self.writer.log(
                'Wrong number of parameters. Expected: %s',
                json.dumps(list(spec.parameters), separators=(',', ':'))
            )
            return DispatchResult.WRONG_ARITY

        logger.debug(f"Executing command: {name} {args!r}")
        spec.handler(args)
        return DispatchResult.HANDLED


def execute_commander(
    tokens: Optional[Sequence[str]],
    table: CommandTable,
    writer: Optional[Writer] = None
) -> DispatchResult:
    """Execute a parsed line against a command table.

    Convenience function that creates a dispatcher for a single line.

    Args:
        tokens: Tokens parsed from the user input
        table: Commands available for dispatch
        writer: Output sink (defaults to standard output)

    Returns:
        The branch taken
    """
    dispatcher = CommandDispatcher(table, writer)
    return dispatcher.dispatch(tokens)
