"""
IdeasCommand — Idea lifecycle from the command line

Commands:
- ideas [STATUS]      list one status folder (default: all four)
- idea SLUG           show one idea
- new SLUG NAME       create an idea in backlog
- move SLUG STATUS    move an idea to another status
"""

from typing import Optional

from ..commands.base import BaseCommand
from ..core.paths import STATUSES
from ..output import Column, OutputSpec
from ..presentation.symbols import symbol_for_status, format_status, safe_print

IDEA_COLUMNS = [Column("Slug", "slug"), Column("Name", "name"), Column("Created", "created")]


class IdeasCommand(BaseCommand):
    """Command for listing, showing, creating and moving ideas."""

    def list_ideas(self, status: Optional[str] = None) -> int:
        """List ideas in one status, or every status in lifecycle order."""
        if status is not None:
            return self.emit(self.launchpad.list_ideas(status), self._listing_view)

        results = [self.launchpad.list_ideas(s) for s in STATUSES]
        if self.json_output:
            return self.emit({"statuses": results}, self._listing_view)

        for data in results:
            code = self.emit(data, self._listing_view)
            if code:
                return code
        return 0

    def _listing_view(self, data) -> OutputSpec:
        marker = symbol_for_status(self.symbols, data["status"])
        return OutputSpec(
            data=data["ideas"],
            shape="table",
            title=f"{marker} {data['status'].upper()} ({data['count']})",
            columns=IDEA_COLUMNS,
            empty_message="No ideas.",
        )

    def show_idea(self, slug: str) -> int:
        return self.emit(self.launchpad.get_idea(slug), self._detail_view)

    def _detail_view(self, data) -> OutputSpec:
        s = self.symbols
        if data["has_audit"]:
            audit = f"{s.check_pass} {data['audit_path']}"
            action = f"launchpad audit {data['slug']}"
        else:
            audit = f"{s.check_warn} none"
            action = "Run SOP 01a (Rigorous Idea Audit)"
        return OutputSpec(
            data={
                "Status": format_status(s, data["status"]),
                "Created": data["created"],
                "Source": data["source"],
                "Audit": audit,
                "Path": data["path"],
                "Problem": data["problem"],
                "Solution": data["solution"],
            },
            shape="detail",
            title=f"{s.idea} {data['name']} [{data['slug']}]",
            actions=[action],
        )

    def create_idea(
        self,
        slug: str,
        name: str,
        problem: str,
        solution: str,
        source: Optional[str] = None
    ) -> int:
        data = self.launchpad.create_idea(slug, name, problem, solution, source)

        def view(result):
            s = self.symbols
            return "\n".join([
                f"{s.check_pass} Created {result['slug']} in {format_status(s, result['status'])}",
                f"  {result['path']}",
                f"  {s.arrow} {result['next_step']}",
            ])

        return self.emit(data, view)

    def move_idea(self, slug: str, to_status: str, reason: Optional[str] = None) -> int:
        data = self.launchpad.move_idea(slug, to_status, reason)

        def view(result):
            s = self.symbols
            lines = [
                f"{s.check_pass} Moved {result['slug']}: "
                f"{format_status(s, result['from_status'])} {s.arrow} {format_status(s, result['to_status'])}",
                f"  {result['new_path']}",
            ]
            if result.get("reason"):
                lines.append(f"  Reason: {result['reason']}")
            if result.get("annotation_error"):
                lines.append(f"  {s.check_warn} Move note not written: {result['annotation_error']}")
            return "\n".join(lines)

        return self.emit(data, view)


# =============================================================================
# Command Registration (Self-Registration Pattern)
# =============================================================================

COMMAND_NAMES = ['ideas', 'idea', 'new', 'move']


def register_parser(subparsers):
    """Register ideas, idea, new and move command parsers."""
    p1 = subparsers.add_parser('ideas', help='List ideas by status')
    p1.add_argument('status', nargs='?', choices=STATUSES,
                    help='Status folder to list (default: all)')

    p2 = subparsers.add_parser('idea', help='Show one idea')
    p2.add_argument('slug', help='Idea slug (kebab-case)')

    p3 = subparsers.add_parser('new', help='Create an idea in backlog')
    p3.add_argument('slug', help='Idea slug (lowercase letters, digits, hyphens)')
    p3.add_argument('name', help='Display name')
    p3.add_argument('--problem', required=True, help='Problem statement')
    p3.add_argument('--solution', required=True, help='Proposed solution')
    p3.add_argument('--source', help='Where the idea came from (default: Manual entry)')

    p4 = subparsers.add_parser('move', help='Move an idea to another status')
    p4.add_argument('slug', help='Idea slug')
    p4.add_argument('status', help=f"Target status ({', '.join(STATUSES)})")
    p4.add_argument('--reason', help='Reason recorded in the move note')

    return p1, p2, p3, p4


def handle(cli, args):
    """Dispatch ideas, idea, new or move."""
    cmd = cli._ideas_cmd
    if args.command == 'ideas':
        return cmd.list_ideas(args.status)
    if args.command == 'idea':
        return cmd.show_idea(args.slug)
    if args.command == 'new':
        return cmd.create_idea(args.slug, args.name, args.problem, args.solution, args.source)
    if args.command == 'move':
        return cmd.move_idea(args.slug, args.status, args.reason)
    safe_print(f"Unknown idea command: {args.command}")
    return 1
