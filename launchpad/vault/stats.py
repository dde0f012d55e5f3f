"""
VaultAggregator — Cross-cutting counts over ideas and audits.
"""

from typing import Dict, Any

from ..core.paths import STATUSES
from ..core.results import Result
from .audits import AuditStore, round_half_up
from .ideas import IdeaStore


def audit_coverage(audits: int, total: int) -> int:
    """Audits per idea as a rounded percentage; 0 for an empty vault."""
    if total <= 0:
        return 0
    return round_half_up(audits / total * 100)


class VaultAggregator:
    """Counts only; files are never opened."""

    def __init__(self, ideas: IdeaStore, audits: AuditStore):
        self.ideas = ideas
        self.audits = audits

    def counts(self) -> Dict[str, int]:
        counts = {status: len(self.ideas.idea_files(status)) for status in STATUSES}
        counts["audits"] = len(self.audits.audit_files())
        return counts

    def stats(self) -> Result:
        counts = self.counts()
        total = sum(counts[status] for status in STATUSES)
        data: Dict[str, Any] = {
            "counts": counts,
            "total": total,
            # Backlog ideas are the ones awaiting an audit
            "pending_audit": counts["backlog"],
            "pipeline": {
                "stage1_backlog": counts["backlog"],
                "stage2_active": counts["active"],
                "stage3_shipped": counts["shipped"],
                "killed": counts["killed"],
            },
            "audit_coverage": audit_coverage(counts["audits"], total),
        }
        return Result.success(data)
