"""
AuditsCommand — Read audit evaluations

Commands:
- audit SLUG                               one audit with its criteria
- audits [--verdict V] [--min-score N]     ranked listing with summary
"""

from typing import Optional

from ..commands.base import BaseCommand
from ..core.extractors import VERDICTS, MAX_SCORE, CRITERION_MAX
from ..output import Column, OutputSpec

AUDIT_COLUMNS = [
    Column("Slug", "slug"),
    Column("Score", "score", align="right"),
    Column("", "marker"),
    Column("Verdict", "verdict"),
    Column("Date", "date"),
    Column("AI", "ai_assisted"),
]


def _score_text(score: Optional[int]) -> str:
    return f"{score}/{MAX_SCORE}" if score is not None else "?"


class AuditsCommand(BaseCommand):
    """Command for showing and ranking audits."""

    def verdict_marker(self, verdict: Optional[str]) -> str:
        s = self.symbols
        if verdict in ("STRONG GO", "GO"):
            return s.check_pass
        if verdict == "KILL":
            return s.check_fail
        return s.check_warn

    def show_audit(self, slug: str) -> int:
        return self.emit(self.launchpad.get_audit(slug), self._detail_view)

    def _detail_view(self, data) -> OutputSpec:
        s = self.symbols
        fields = {
            "Score": _score_text(data["score"]),
            "Verdict": f"{self.verdict_marker(data['verdict'])} {data['verdict'] or 'unknown'}",
            "Audit date": data["audit_date"],
            "AI-assisted": data["ai_assisted"],
            "Path": data["path"],
        }
        if data.get("criteria"):
            fields["Criteria"] = {
                name: f"{entry['score']}/{CRITERION_MAX} {s.check_pass if entry['pass'] else s.check_fail}"
                for name, entry in data["criteria"].items()
            }
        return OutputSpec(data=fields, shape="detail", title=f"{s.audit} Audit: {data['slug']}")

    def list_audits(self, verdict: Optional[str] = None, min_score: Optional[int] = None) -> int:
        return self.emit(self.launchpad.list_audits(verdict=verdict, min_score=min_score), self._listing_view)

    def _listing_view(self, data) -> str:
        rows = [
            dict(audit, score=_score_text(audit["score"]), marker=self.verdict_marker(audit["verdict"]))
            for audit in data["audits"]
        ]
        table = self._cli.render(OutputSpec(
            data=rows,
            shape="table",
            title=f"{self.symbols.audit} AUDITS ({data['count']} of {data['total']})",
            columns=AUDIT_COLUMNS,
            empty_message="No audits match.",
        ))

        summary = data["summary"]
        counts = ", ".join(f"{v}: {n}" for v, n in summary["verdict_counts"].items()) or "none"
        average = summary["average_score"]
        return "\n".join([
            table,
            "",
            f"Verdicts: {counts}",
            f"Average score: {_score_text(average)}",
        ])


# =============================================================================
# Command Registration (Self-Registration Pattern)
# =============================================================================

COMMAND_NAMES = ['audit', 'audits']


def register_parser(subparsers):
    """Register audit and audits command parsers."""
    p1 = subparsers.add_parser('audit', help='Show the audit for an idea')
    p1.add_argument('slug', help='Idea slug')

    p2 = subparsers.add_parser('audits', help='List audits, highest score first')
    p2.add_argument('--verdict', choices=VERDICTS, help='Only audits with this verdict')
    p2.add_argument('--min-score', type=int, dest='min_score',
                    help='Only audits with a known score of at least N')

    return p1, p2


def handle(cli, args):
    """Dispatch audit or audits."""
    if args.command == 'audit':
        return cli._audits_cmd.show_audit(args.slug)
    return cli._audits_cmd.list_audits(verdict=args.verdict, min_score=args.min_score)
