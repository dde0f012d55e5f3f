"""
Vault stores: ideas, audits, SOPs, projects and aggregate statistics.
"""

from .ideas import IdeaStore, Idea, IdeaSummary, IdeaListing, IdeaLocation, move_note, format_timestamp
from .audits import AuditStore, Audit, AuditSummary, AuditListing, round_half_up
from .sops import SOPCatalog, SOPEntry, CATALOG, PHASES
from .projects import ProjectRegistry
from .stats import VaultAggregator, audit_coverage

__all__ = [
    "IdeaStore", "Idea", "IdeaSummary", "IdeaListing", "IdeaLocation",
    "move_note", "format_timestamp",
    "AuditStore", "Audit", "AuditSummary", "AuditListing", "round_half_up",
    "SOPCatalog", "SOPEntry", "CATALOG", "PHASES",
    "ProjectRegistry",
    "VaultAggregator", "audit_coverage",
]
