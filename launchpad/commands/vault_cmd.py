"""
VaultCommand — Pipeline overview and local projects

Commands:
- stats              counts per status and audit coverage
- projects [NAME]    list project directories, or show one
"""

from typing import Optional

from ..commands.base import BaseCommand
from ..core.paths import STATUSES
from ..output import Column, OutputSpec
from ..presentation.symbols import format_status

PROJECT_COLUMNS = [
    Column("Name", "name"),
    Column("Phase", "phase"),
    Column("Created", "created"),
    Column("CLAUDE.md", "has_context"),
]


class VaultCommand(BaseCommand):
    """Command for vault statistics and projects."""

    def stats(self) -> int:
        return self.emit(self.launchpad.get_vault_stats(), self._stats_view)

    def _stats_view(self, data) -> str:
        s = self.symbols
        counts = data["counts"]
        lines = ["Vault", ""]
        for status in STATUSES:
            lines.append(f"  {format_status(s, status):<14} {counts[status]:>4}")
        lines.append(f"  {'total':<14} {data['total']:>4}")
        lines.append("")
        lines.append(f"  {s.audit} audits        {counts['audits']:>4}")
        lines.append(f"  coverage        {data['audit_coverage']:>3}%")
        if data["pending_audit"]:
            lines.append("")
            lines.append(f"{s.arrow} {data['pending_audit']} backlog idea(s) may need an audit (SOP 01a)")
        return "\n".join(lines)

    def projects(self, name: Optional[str] = None) -> int:
        if name:
            return self.emit(self.launchpad.get_project(name), self._project_view)
        return self.emit(self.launchpad.list_projects(), self._projects_view)

    def _projects_view(self, data) -> OutputSpec:
        return OutputSpec(
            data=data["projects"],
            shape="table",
            title=f"{self.symbols.project} PROJECTS ({data['count']})",
            columns=PROJECT_COLUMNS,
            empty_message="No projects found.",
        )

    def _project_view(self, data) -> OutputSpec:
        package = data.get("package") or {}
        fields = {"Path": data["path"]}
        if package:
            fields["Package"] = f"{package.get('name') or '?'} {package.get('version') or ''}".strip()
        if not data.get("context"):
            fields["Context"] = "no CLAUDE.md"
        return OutputSpec(
            data=fields,
            shape="detail",
            title=f"{self.symbols.project} {data['name']}",
            body=data.get("context"),
        )


# =============================================================================
# Command Registration (Self-Registration Pattern)
# =============================================================================

COMMAND_NAMES = ['stats', 'projects']


def register_parser(subparsers):
    """Register stats and projects command parsers."""
    p1 = subparsers.add_parser('stats', help='Vault counts and audit coverage')

    p2 = subparsers.add_parser('projects', help='List projects, or show one')
    p2.add_argument('name', nargs='?', help='Project directory name')

    return p1, p2


def handle(cli, args):
    """Dispatch stats or projects."""
    if args.command == 'stats':
        return cli._vault_cmd.stats()
    return cli._vault_cmd.projects(args.name)
