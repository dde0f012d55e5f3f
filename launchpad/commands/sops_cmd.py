"""
SOPsCommand — Browse and search the SOP catalog

Commands:
- sops            catalog grouped by phase
- sop NUMBER      print one SOP document
- search QUERY    line matches across all SOPs
"""

from ..commands.base import BaseCommand
from ..output import OutputSpec
from ..vault.sops import PHASES


class SOPsCommand(BaseCommand):
    """Command for the SOP catalog."""

    def list_sops(self) -> int:
        return self.emit(self.launchpad.list_sops(), self._catalog_view)

    def _catalog_view(self, data) -> str:
        s = self.symbols
        lines = [f"{s.sop} SOPs ({data['total']})"]
        for key, label in PHASES.items():
            entries = data["phases"].get(key) or []
            if not entries:
                continue
            lines.append("")
            lines.append(label)
            for entry in entries:
                lines.append(f"  {s.bullet} {entry['number']:<4} {entry['title']}")
        return "\n".join(lines)

    def show_sop(self, number: str) -> int:
        data = self.launchpad.get_sop(number)

        def view(result):
            header = f"{self.symbols.sop} SOP {result['number']}: {result['title']} ({result['phase']})"
            return f"{header}\n{result['path']}\n\n{result['content']}"

        return self.emit(data, view)

    def search(self, query: str) -> int:
        return self.emit(self.launchpad.search_sops(query), self._results_view)

    def _results_view(self, data) -> str:
        s = self.symbols
        if not data["results"]:
            return f"No SOP mentions '{data['query']}'."

        lines = [
            f"{data['total_matches']} match(es) in {data['sops_with_matches']} SOP(s) for '{data['query']}'"
        ]
        for result in data["results"]:
            lines.append("")
            lines.append(f"{s.sop} {result['number']} {result['title']} ({result['phase']})")
            lines.append(self._cli.render(OutputSpec(data=result["matches"], shape="list")))
        return "\n".join(lines)


# =============================================================================
# Command Registration (Self-Registration Pattern)
# =============================================================================

COMMAND_NAMES = ['sops', 'sop', 'search']


def register_parser(subparsers):
    """Register sops, sop and search command parsers."""
    p1 = subparsers.add_parser('sops', help='List the SOP catalog by phase')

    p2 = subparsers.add_parser('sop', help='Show one SOP')
    p2.add_argument('number', help="SOP number: 0-12, or 01a for the rigorous audit")

    p3 = subparsers.add_parser('search', help='Search SOP text (case-insensitive)')
    p3.add_argument('query', help='Text to look for')

    return p1, p2, p3


def handle(cli, args):
    """Dispatch sops, sop or search."""
    if args.command == 'sops':
        return cli._sops_cmd.list_sops()
    if args.command == 'sop':
        return cli._sops_cmd.show_sop(args.number)
    return cli._sops_cmd.search(args.query)
