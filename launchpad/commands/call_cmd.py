"""
CallCommand — Invoke any operation by name, JSON in and JSON out

    launchpad call move_idea '{"slug": "invoice-chaser", "to_status": "active"}'

The raw dispatcher used by scripts and tool integrations.
"""

import orjson

from ..api import is_error
from ..commands.base import BaseCommand
from ..output import dumps
from ..presentation.symbols import safe_print


class CallCommand(BaseCommand):

    def call(self, operation: str, raw_arguments: str = None) -> int:
        if raw_arguments:
            try:
                arguments = orjson.loads(raw_arguments)
            except orjson.JSONDecodeError as e:
                safe_print(dumps({"error": f"Invalid JSON arguments: {e}", "kind": "invalid"}))
                return 1
        else:
            arguments = {}

        data = self.launchpad.call(operation, arguments)
        safe_print(dumps(data))
        return 1 if is_error(data) else 0


# =============================================================================
# Command Registration (Self-Registration Pattern)
# =============================================================================

COMMAND_NAME = 'call'


def register_parser(subparsers):
    """Register call command parser."""
    from ..api import OPERATIONS

    p = subparsers.add_parser('call', help='Invoke an operation by name (JSON output)')
    p.add_argument('operation', help=f"One of: {', '.join(OPERATIONS)}")
    p.add_argument('arguments', nargs='?', help='Keyword arguments as a JSON object')
    return p


def handle(cli, args):
    return cli._call_cmd.call(args.operation, args.arguments)
