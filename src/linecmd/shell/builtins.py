"""Command table and built-in display helpers for the shell.

Provides the CommandSpec/CommandTable types, the reserved ``help`` command
rendering, error display and a few ready-made handler factories.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

from pydantic import BaseModel

from linecmd.shell.errors import CommandTableError
from linecmd.shell.output import Writer

logger = logging.getLogger(__name__)

HELP_COMMAND = "help"
RULE = "--------------------------------"

Handler = Callable[[List[str]], Any]


@dataclass(frozen=True)
class CommandSpec:
    """A dispatchable command: its parameters, help text and handler."""

    name: str
    parameters: Tuple[str, ...]
    description: str
    handler: Handler

    @property
    def arity(self) -> int:
        """Number of positional arguments the command expects."""
        return len(self.parameters)

    def usage(self) -> str:
        """Usage line, e.g. 'create <objectUri> <objectValue>'."""
        placeholders = ' '.join(f'<{p}>' for p in self.parameters)
        return f"{self.name} {placeholders}".rstrip()

    @classmethod
    def from_entry(cls, name: str, entry: Union[Mapping[str, Any], "CommandSpec"]) -> "CommandSpec":
        """Build a spec from a table entry.

        Args:
            name: Command name
            entry: Either a CommandSpec or a mapping with 'parameters',
                'description' and 'handler' keys

        Returns:
            CommandSpec instance

        Raises:
            CommandTableError: If the entry is malformed
        """
        if isinstance(entry, CommandSpec):
            if entry.name != name:
                return cls(name, entry.parameters, entry.description, entry.handler)
            return entry

        if not isinstance(entry, Mapping):
            raise CommandTableError(f"Command '{name}' must be a mapping, got {type(entry).__name__}")

        handler = entry.get('handler')
        if handler is None:
            raise CommandTableError(f"Command '{name}' has no handler")
        if not callable(handler):
            raise CommandTableError(f"Handler for command '{name}' is not callable")

        parameters = entry.get('parameters', [])
        if not isinstance(parameters, (list, tuple)) or not all(isinstance(p, str) for p in parameters):
            raise CommandTableError(f"Parameters for command '{name}' must be a list of names")

        return cls(
            name=name,
            parameters=tuple(parameters),
            description=str(entry.get('description', '')),
            handler=handler,
        )


class CommandTable:
    """Ordered, name-indexed collection of commands.

    Iteration follows registration order, which is also the order used when
    rendering help.
    """

    def __init__(self, commands: Optional[Mapping[str, Any]] = None):
        """Initialize table.

        Args:
            commands: Mapping of command name to entry (see CommandSpec.from_entry)
        """
        self._commands: Dict[str, CommandSpec] = {}
        for name, entry in (commands or {}).items():
            self.add(CommandSpec.from_entry(name, entry))

    def add(self, spec: CommandSpec) -> None:
        """Register a command.

        Args:
            spec: Command to register
        """
        if spec.name == HELP_COMMAND:
            logger.warning(f"Ignoring command '{HELP_COMMAND}': the name is reserved for the built-in help")
            return
        if spec.name in self._commands:
            logger.debug(f"Replacing command: {spec.name}")
        self._commands[spec.name] = spec
        logger.debug(f"Registered command: {spec.name} ({spec.arity} parameters)")

    def command(self, name: str, parameters: Sequence[str] = (), description: str = "") -> Callable:
        """Decorator to register a function as a command handler.

        Args:
            name: Command name
            parameters: Parameter names
            description: Help text

        Returns:
            Decorator function
        """
        def decorator(func: Handler) -> Handler:
            self.add(CommandSpec(name, tuple(parameters), description, func))
            return func
        return decorator

    def get(self, name: str) -> Optional[CommandSpec]:
        """Get a command by exact name."""
        return self._commands.get(name)

    def names(self) -> List[str]:
        return list(self._commands)

    def __contains__(self, name: object) -> bool:
        return name in self._commands

    def __iter__(self) -> Iterator[CommandSpec]:
        return iter(self._commands.values())

    def __len__(self) -> int:
        return len(self._commands)


def show_help(table: CommandTable, writer: Writer) -> None:
    """Show the usage line and description of every command.

    Args:
        table: Commands to describe
        writer: Output sink
    """
    writer.log('')
    for spec in table:
        writer.log('%s\n\n%s\n', spec.usage(), spec.description)


def handle_error(error: BaseException, writer: Writer) -> None:
    """Show the information of an error.

    Args:
        error: Exception to display
        writer: Output sink
    """
    writer.log('\nError:\n%s\nCode: %s\nMessage: %s\n', RULE, type(error).__name__, error)


def _active_writer() -> Writer:
    from linecmd.shell.repl import get_writer
    return get_writer()


def show_config(config: Union[Mapping[str, Any], BaseModel], branch: str) -> Handler:
    """Create a handler that shows one section of a configuration.

    Args:
        config: Configuration mapping or pydantic model
        branch: Name of the section to show

    Returns:
        Handler printing the section as indented JSON
    """
    def handler(args: Optional[List[str]] = None) -> None:
        data = config.model_dump(mode='json') if isinstance(config, BaseModel) else config
        section = data[branch]
        _active_writer().log('\nConfig:\n%s\n\n%s', RULE, json.dumps(section, indent=4, default=str))
    return handler


def print_name(name: str) -> Handler:
    """Create a handler that only announces the command being executed."""
    def handler(args: Optional[List[str]] = None) -> None:
        _active_writer().log('Executing: %s', name)
    return handler


def not_implemented(args: Optional[List[str]] = None) -> None:
    """Placeholder handler for unfinished commands."""
    _active_writer().log('This feature has not been fully implemented yet.')
