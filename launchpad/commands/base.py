"""
BaseCommand — Shared foundation for all CLI commands

Provides access to CLI resources via composition.
Commands receive the CLI instance and access its resources through properties.
Every command method returns an exit status: 0 on success, 1 when the
operation reported an error.
"""

from typing import Any, Callable, Dict, TYPE_CHECKING

from ..api import is_error
from ..output import OutputSpec, dumps
from ..presentation.symbols import safe_print

if TYPE_CHECKING:
    from ..cli import LaunchpadCLI


# Error context keys worth showing a human, with their labels
CONTEXT_LABELS = (
    ("suggestions", "Did you mean"),
    ("valid_statuses", "Valid statuses"),
    ("valid_verdicts", "Valid verdicts"),
    ("available", "Available"),
    ("searched", "Searched"),
    ("suggestion", "Hint"),
)


class BaseCommand:
    """
    Base class for CLI commands with access to shared resources.

    Commands don't reinitialize resources; they use the CLI instance's.
    """

    def __init__(self, cli: 'LaunchpadCLI'):
        self._cli = cli

    # -------------------------------------------------------------------------
    # Core resources
    # -------------------------------------------------------------------------

    @property
    def root(self):
        """Launchpad root directory."""
        return self._cli.root

    @property
    def config(self):
        return self._cli.config

    @property
    def symbols(self):
        """Symbol set for display (Unicode/ASCII)."""
        return self._cli.symbols

    @property
    def launchpad(self):
        """Operation surface (launchpad.api.Launchpad)."""
        return self._cli.launchpad

    @property
    def json_output(self) -> bool:
        return self._cli.json_output

    # -------------------------------------------------------------------------
    # Output helpers
    # -------------------------------------------------------------------------

    def print_error(self, data: Dict[str, Any]):
        s = self.symbols
        safe_print(f"{s.check_fail} {data['error']}")
        for key, label in CONTEXT_LABELS:
            value = data.get(key)
            if not value:
                continue
            if isinstance(value, list):
                value = ", ".join(str(v) for v in value)
            safe_print(f"  {label}: {value}")

    def emit(self, data: Dict[str, Any], build: Callable[[Dict[str, Any]], Any]) -> int:
        """
        Print an operation's result and return the exit status.

        Args:
            data: Dict returned by a Launchpad operation
            build: Turns a successful result into an OutputSpec or a string
        """
        if self.json_output:
            safe_print(dumps(data))
            return 1 if is_error(data) else 0

        if is_error(data):
            self.print_error(data)
            return 1

        view = build(data)
        if isinstance(view, OutputSpec):
            view = self._cli.render(view)
        safe_print(view)
        return 0
