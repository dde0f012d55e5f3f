"""
CLI — Command interface over a Launchpad root

    launchpad [--root DIR] [--json] [--verbose] <command> ...

Human output uses the configured symbol set and renderers. --json prints
each operation's result dict unchanged, for scripts. The exit status is
1 whenever the operation reported an error.

Logs go to stderr so stdout stays clean for JSON.
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from .api import Launchpad
from .commands.assistant_cmd import AssistantCommand
from .commands.audits_cmd import AuditsCommand
from .commands.call_cmd import CallCommand
from .commands.config_cmd import ConfigCommand
from .commands.ideas_cmd import IdeasCommand
from .commands.sops_cmd import SOPsCommand
from .commands.vault_cmd import VaultCommand
from .config import ConfigManager
from .presentation.symbols import get_symbols
from .services.providers import LLMProvider
from . import __version__

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def configure_logging(verbose: bool = False):
    """Root handler on stderr: DEBUG with --verbose, else LAUNCHPAD_LOG_LEVEL or WARNING."""
    if verbose:
        level = logging.DEBUG
    else:
        name = os.environ.get("LAUNCHPAD_LOG_LEVEL", "WARNING").upper()
        level = getattr(logging, name, None)
        if not isinstance(level, int):
            level = logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr, force=True)


class LaunchpadCLI:
    """Command-line interface for the Launchpad vault."""

    def __init__(
        self,
        root: Path,
        json_output: bool = False,
        config_manager: Optional[ConfigManager] = None,
        provider: Optional[LLMProvider] = None
    ):
        self.root = Path(root)
        self.json_output = json_output

        self.config_manager = config_manager or ConfigManager(self.root)
        self.config = self.config_manager.load()

        # Initialize symbols based on config
        self.symbols = get_symbols(self.config.display.symbols)

        self.launchpad = Launchpad(self.root, config=self.config, provider=provider)

        # Command handlers
        self._ideas_cmd = IdeasCommand(self)
        self._audits_cmd = AuditsCommand(self)
        self._sops_cmd = SOPsCommand(self)
        self._vault_cmd = VaultCommand(self)
        self._assistant_cmd = AssistantCommand(self)
        self._config_cmd = ConfigCommand(self)
        self._call_cmd = CallCommand(self)

    def render(self, spec) -> str:
        """Render an OutputSpec with the configured symbols and width."""
        from .output import render as output_render
        return output_render(spec, symbols=self.symbols, width=self.config.display.width)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="launchpad",
        description="Launchpad -- idea vault, audits and SOPs",
        epilog="Ideas move backlog -> active -> shipped (or killed). SOPs say how."
    )

    parser.add_argument(
        '--root', '-r',
        default=os.environ.get("LAUNCHPAD_ROOT", "."),
        help='Launchpad root directory (default: LAUNCHPAD_ROOT or current)'
    )
    parser.add_argument('--json', action='store_true', dest='json_output',
                        help='Print raw JSON results')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Debug logging on stderr')
    parser.add_argument(
        '--version', '-V',
        action='version',
        version=f'launchpad {__version__}'
    )

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    from .commands import register_all
    register_all(subparsers)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the Launchpad CLI.

    Parser definitions and dispatch logic are in individual command modules.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    configure_logging(args.verbose)

    cli = LaunchpadCLI(Path(args.root), json_output=args.json_output)

    from .commands import dispatch
    try:
        return dispatch(args.command, cli, args) or 0
    except KeyError as e:
        print(f"Error: {e}")
        parser.print_help()
        return 1


if __name__ == '__main__':
    sys.exit(main())
