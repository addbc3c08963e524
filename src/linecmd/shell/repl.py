"""Interactive session for the command shell.

Reads lines from an input stream, dispatches them against a command table
and re-prompts after every line. Lines of a startup script can be replayed
into the session as if they had been typed.
"""

from __future__ import annotations

import logging
import sys
from collections import deque
from enum import Enum
from pathlib import Path
from typing import Any, Deque, Iterable, Iterator, List, Mapping, Optional, TextIO, Union

from linecmd.lib.config_parser import ShellConfig
from linecmd.shell.builtins import CommandTable, handle_error as show_error
from linecmd.shell.errors import ScriptError
from linecmd.shell.interpreter import CommandDispatcher, DispatchResult
from linecmd.shell.output import StreamWriter, Writer
from linecmd.shell.parser import tokenize_line

logger = logging.getLogger(__name__)

try:
    import readline
    HAS_READLINE = True
except ImportError:
    HAS_READLINE = False
    logger.debug("readline not available - command history disabled")


class SessionState(Enum):
    """Lifecycle of a session."""
    UNINITIALIZED = "uninitialized"
    ACTIVE = "active"
    DESTROYED = "destroyed"


def read_script_lines(script_path: Union[str, Path]) -> List[str]:
    """Read the non-empty lines of a script file.

    Args:
        script_path: Path to script file

    Returns:
        Lines in file order, without line terminators

    Raises:
        ScriptError: If the file cannot be read
    """
    try:
        content = Path(script_path).read_text(encoding='utf-8')
    except OSError as e:
        raise ScriptError(f"Cannot read script {script_path}: {e}") from e

    lines = [line.rstrip('\r') for line in content.split('\n')]
    return [line for line in lines if line]


class LineSource:
    """Lazy sequence of raw input lines.

    Lines pushed with ``push`` (e.g. from a startup script) are delivered
    before anything read from the stream. The sequence ends at end of input
    or once the source is closed.
    """

    def __init__(self, stream: Optional[TextIO] = None):
        """Initialize line source.

        Args:
            stream: Input stream (defaults to the current sys.stdin)
        """
        self._stream = stream
        self._pending: Deque[str] = deque()
        self.closed = False

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdin

    def push(self, line: str) -> None:
        """Queue a line to be delivered as if it had been typed."""
        self._pending.append(line)

    def drain(self) -> Iterator[str]:
        """Yield queued lines until the queue is empty or the source closes."""
        while self._pending and not self.closed:
            yield self._pending.popleft()

    @property
    def interactive(self) -> bool:
        """Whether lines are typed at a terminal on standard input."""
        stream = self.stream
        return stream is sys.stdin and stream.isatty()

    def read_line(self, prompt: str = '') -> Optional[str]:
        """Read the next line.

        Args:
            prompt: Prompt handed to input() when reading from a terminal

        Returns:
            Line without its terminator, or None at end of input
        """
        if self.closed:
            return None
        if self._pending:
            return self._pending.popleft()

        if self.interactive:
            try:
                return input(prompt)
            except EOFError:
                return None

        line = self.stream.readline()
        if not line:
            return None
        return line.rstrip('\r\n')

    def __iter__(self) -> Iterator[str]:
        while True:
            line = self.read_line()
            if line is None:
                return
            yield line

    def close(self) -> None:
        """Stop delivering lines."""
        self.closed = True
        self._pending.clear()


class Session:
    """Interactive command session.

    Owns the command dispatcher, the prompt, the output writer and the
    line source. A session starts UNINITIALIZED, becomes ACTIVE on
    ``start()`` and ends DESTROYED after ``destroy()``.
    """

    def __init__(
        self,
        commands: Union[CommandTable, Mapping[str, Any]],
        prompt: Optional[str] = None,
        stdin: Optional[TextIO] = None,
        writer: Optional[Writer] = None,
        config: Optional[ShellConfig] = None
    ):
        """Initialize session.

        Args:
            commands: Command table, or a mapping of command entries
            prompt: Prompt string (overrides the configured prompt)
            stdin: Input stream (defaults to standard input)
            writer: Output sink (defaults to standard output)
            config: Shell configuration
        """
        self.config = config or ShellConfig()
        self.table = commands if isinstance(commands, CommandTable) else CommandTable(commands)
        self.prompt_string = prompt if prompt is not None else self.config.prompt
        self.dispatcher = CommandDispatcher(self.table, writer or StreamWriter())
        self.source = LineSource(stdin)
        self.state = SessionState.UNINITIALIZED
        self._history_loaded = False
        self._input_prompt = ''

    @property
    def writer(self) -> Writer:
        return self.dispatcher.writer

    @property
    def active(self) -> bool:
        return self.state is SessionState.ACTIVE

    def set_writer(self, writer: Writer) -> None:
        """Replace the output sink for all subsequent output."""
        self.dispatcher.writer = writer

    def start(self, script_lines: Iterable[str] = ()) -> None:
        """Activate the session, emit the first prompt and replay a script.

        Args:
            script_lines: Lines fed into the session before interactive input
        """
        if self.state is not SessionState.UNINITIALIZED:
            logger.warning(f"Session cannot be started from state '{self.state.value}'")
            return

        self.state = SessionState.ACTIVE
        logger.debug(f"Session started with {len(self.table)} commands")
        self._setup_readline()

        for line in script_lines:
            self.source.push(line)

        if self.config.prompt_on_replay:
            self.prompt()
            self.replay_pending()
        else:
            self.replay_pending()
            if self.active:
                self.prompt()

    def _setup_readline(self) -> None:
        """Setup readline for command history."""
        if not HAS_READLINE or self.config.history_file is None:
            return

        history_file = self.config.history_file
        try:
            readline.read_history_file(str(history_file))
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"Could not read history file {history_file}: {e}")

        readline.set_history_length(self.config.history_length)
        self._history_loaded = True

    def _save_history(self) -> None:
        if not self._history_loaded:
            return
        try:
            readline.write_history_file(str(self.config.history_file))
        except OSError as e:
            logger.warning(f"Could not write history file {self.config.history_file}: {e}")

    def _prompt_via_input(self) -> bool:
        writer = self.writer
        return (
            self.source.interactive
            and isinstance(writer, StreamWriter)
            and writer.stream is sys.stdout
        )

    def prompt(self) -> None:
        """Show the prompt.

        At a terminal the prompt is handed to input() with the next read so
        readline can redraw it.
        """
        if self._prompt_via_input():
            self._input_prompt = self.prompt_string
            return
        self.writer.log(self.prompt_string, end='')

    def _flush_prompt(self) -> None:
        if self._input_prompt:
            self.writer.log(self._input_prompt, end='')
            self._input_prompt = ''

    def _take_prompt(self) -> str:
        prompt, self._input_prompt = self._input_prompt, ''
        return prompt

    def handle_error(self, error: BaseException) -> None:
        """Show the information of an error through the session writer."""
        show_error(error, self.writer)

    def replay_pending(self) -> None:
        """Feed every queued line into the session, in order."""
        for line in self.source.drain():
            logger.debug(f"Replaying: {line}")
            try:
                self.feed(line, replayed=True)
            except SystemExit:
                logger.debug("Exit requested during replay")
                self.destroy()
                return

    def feed(self, line: str, replayed: bool = False) -> Optional[DispatchResult]:
        """Process one raw line as if it had been typed.

        Args:
            line: Raw input line, without terminator
            replayed: Whether the line comes from a startup script

        Returns:
            The dispatch branch taken, or None when nothing was dispatched
        """
        if not self.active:
            logger.debug(f"Ignoring line, session is {self.state.value}: {line!r}")
            return None

        show_prompt = not replayed or self.config.prompt_on_replay
        if replayed and show_prompt:
            self._flush_prompt()
            self.writer.log(line)

        tokens = tokenize_line(line)
        if tokens is None and line == '':
            tokens = ['']

        result = None
        if tokens is not None:
            try:
                result = self.dispatcher.dispatch(tokens)
            except Exception as e:
                logger.exception(f"Command failed: {line}")
                self.handle_error(e)
                result = DispatchResult.HANDLED

        if show_prompt and self.active:
            self.prompt()
        return result

    def run(self) -> None:
        """Read and process lines until end of input or destroy()."""
        if self.state is SessionState.UNINITIALIZED:
            self.start()

        self.replay_pending()
        while self.active:
            try:
                line = self.source.read_line(self._take_prompt())
                if line is None:
                    # Ctrl+D
                    self.writer.log('')
                    break
                self.feed(line)
            except KeyboardInterrupt:
                # Ctrl+C
                self.writer.log('')
                self.prompt()
                continue
            except SystemExit:
                break
        self.destroy()

    def destroy(self) -> None:
        """Close the session; no further lines are processed."""
        if self.state is not SessionState.ACTIVE:
            logger.debug(f"Session already {self.state.value}, nothing to destroy")
            return
        self.source.close()
        self._save_history()
        self.state = SessionState.DESTROYED
        logger.debug("Session destroyed")


_session: Optional[Session] = None
_default_writer: Optional[Writer] = None


def get_session() -> Optional[Session]:
    """Get the active session, if any.

    Returns:
        The session created by the last initialize(), or None
    """
    return _session


def get_writer() -> Writer:
    """Get the writer that shell output currently goes to.

    Returns:
        Active session writer, or the default writer
    """
    if _session is not None and _session.active:
        return _session.writer
    return _default_writer or StreamWriter()


def initialize(
    commands: Union[CommandTable, Mapping[str, Any]],
    prompt_string: Optional[str] = None,
    *,
    script: Optional[Union[str, Path]] = None,
    stdin: Optional[TextIO] = None,
    writer: Optional[Writer] = None,
    config: Optional[ShellConfig] = None
) -> Session:
    """Initialize the shell with the given commands and prompt.

    Each command entry has the following structure:

        'create': {
            'parameters': ['objectUri'],
            'description': 'Create a new object.',
            'handler': create,
        }

    where ``parameters`` lists the parameter names (a call with a different
    number of arguments is reported as an error), ``description`` is shown
    in the help and ``handler`` is called with the list of arguments.

    Args:
        commands: Command table, or a mapping of command entries
        prompt_string: Prompt shown before each line
        script: Optional script whose lines are replayed at startup
        stdin: Input stream (defaults to standard input)
        writer: Output sink (defaults to the last set_writer() or stdout)
        config: Shell configuration

    Returns:
        The new active session

    Raises:
        ScriptError: If the script cannot be read
        CommandTableError: If a command entry is malformed
    """
    global _session

    config = config or ShellConfig()
    script = script if script is not None else config.script
    script_lines = read_script_lines(script) if script is not None else []

    session = Session(commands, prompt_string, stdin, writer or _default_writer, config)

    if _session is not None and _session.active:
        logger.warning("Replacing the active session")
        _session.destroy()
    _session = session

    session.start(script_lines)
    return session


def destroy() -> None:
    """Destroy the active session. Safe to call more than once."""
    if _session is None:
        logger.debug("No session to destroy")
        return
    _session.destroy()


def prompt() -> None:
    """Show the prompt of the active session."""
    if _session is None or not _session.active:
        logger.debug("No active session to prompt")
        return
    _session.prompt()


def set_writer(writer: Writer) -> None:
    """Replace the output sink of the active session and of later sessions."""
    global _default_writer
    _default_writer = writer
    if _session is not None and _session.active:
        _session.set_writer(writer)


def handle_error(error: BaseException) -> None:
    """Show the information of an error through the current writer."""
    show_error(error, get_writer())
