"""
ConfigCommand — Show and change configuration
"""

from ..commands.base import BaseCommand
from ..presentation.symbols import safe_print


class ConfigCommand(BaseCommand):
    """Display the merged configuration, or set one key."""

    def show_config(self) -> int:
        safe_print(self._cli.config_manager.display())
        return 0

    def set_config(self, key: str, value: str, scope: str = "project") -> int:
        manager = self._cli.config_manager
        error = manager.set(key, value, scope)
        if error:
            safe_print(f"{self.symbols.check_fail} {error}")
            return 1

        path = manager.project_config_path if scope == "project" else manager.user_config_path
        safe_print(f"{self.symbols.check_pass} Set {key} = {value}")
        safe_print(f"  Saved to {path}")
        return 0


# =============================================================================
# Command Registration (Self-Registration Pattern)
# =============================================================================

COMMAND_NAME = 'config'


def register_parser(subparsers):
    """Register config command parser."""
    p = subparsers.add_parser('config', help='View or set configuration')
    p.add_argument('--set', nargs=2, metavar=('KEY', 'VALUE'),
                   help='Set config value (e.g., --set llm.provider openai)')
    p.add_argument('--user', action='store_true',
                   help='Apply to user config instead of project')
    return p


def handle(cli, args):
    """Show config, or set one value."""
    if args.set:
        key, value = args.set
        return cli._config_cmd.set_config(key, value, "user" if args.user else "project")
    return cli._config_cmd.show_config()
