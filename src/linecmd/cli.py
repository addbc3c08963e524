"""Command-line entry point for the linecmd demonstration shell."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import ValidationError

from linecmd import __version__
from linecmd.lib.config_parser import Config, load_config
from linecmd.shell import CommandTable, ScriptError, destroy, initialize, not_implemented, show_config
from linecmd.shell.repl import get_writer

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Configure logging.

    Args:
        verbose: Enable debug logging
        quiet: Suppress info logging
    """
    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )


def build_commands(config: Config) -> CommandTable:
    """Build the demonstration command table.

    Args:
        config: Loaded configuration, shown by the 'config' command

    Returns:
        Command table
    """
    table = CommandTable()
    sections: Dict[str, Any] = config.model_dump(mode='json')

    @table.command('echo', ['text'], '\tPrint the given text. Quote it to include spaces.')
    def echo(args: List[str]) -> None:
        get_writer().log('%s', args[0])

    @table.command('config', ['section'], '\tShow a section of the configuration as JSON.')
    def config_command(args: List[str]) -> None:
        section = args[0]
        if section not in sections:
            get_writer().log('Unknown config section: %s. Available: %s', section, ', '.join(sections))
            return
        show_config(sections, section)(args)

    @table.command('history', [], '\tShow the command history.')
    def history(args: List[str]) -> None:
        not_implemented(args)

    @table.command('quit', [], '\tExit the shell.')
    def quit_command(args: List[str]) -> None:
        get_writer().log('Goodbye!')
        destroy()

    return table


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point.

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = argparse.ArgumentParser(
        description="Minimal interactive command shell",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument(
        'script',
        nargs='?',
        type=Path,
        help='Script file whose lines are replayed at startup'
    )
    parser.add_argument(
        '--config', '-c',
        type=Path,
        default=None,
        help='Path to YAML configuration file'
    )
    parser.add_argument(
        '--prompt', '-p',
        default=None,
        help='Prompt string (overrides the configuration)'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose (debug) logging'
    )
    parser.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Suppress informational output'
    )
    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    args = parser.parse_args(argv)
    setup_logging(args.verbose, args.quiet)

    if args.config is not None:
        try:
            config = load_config(args.config).config
        except (FileNotFoundError, ValueError, yaml.YAMLError, ValidationError) as e:
            logger.error(f"Invalid configuration: {e}")
            return 1
    else:
        config = Config()

    try:
        session = initialize(
            build_commands(config),
            args.prompt,
            script=args.script,
            config=config.shell,
        )
    except ScriptError as e:
        logger.error(str(e))
        return 1

    session.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
