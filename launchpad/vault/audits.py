"""
AuditStore — Read-only access to audit evaluations

Audits are written by an external process (SOP 01a); this store only
parses, filters and aggregates them. Derived fields (score, verdict,
criteria) come from the text extractors and may be None. None is never
coerced to zero in aggregates, but sorts as zero.
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from pathlib import Path
from typing import Dict, List, Optional, Any

from ..core.markdown import Record, read_record
from ..core.paths import AUDIT_PREFIX, VaultPaths, is_safe_name, slug_from_filename
from ..core.extractors import (
    VERDICTS, CriterionScore,
    extract_score, extract_verdict, extract_criteria,
)
from ..core.results import Result
from ..utils.parallel import map_parallel
from ..utils.fuzzy import suggest

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round .5 away from zero (Python's round() is banker's rounding)."""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


@dataclass
class Audit:
    """A parsed audit document."""
    slug: str
    path: Path
    record: Record
    score: Optional[int] = None
    verdict: Optional[str] = None
    criteria: Optional[Dict[str, CriterionScore]] = None

    @property
    def ai_assisted(self) -> bool:
        return self.record.frontmatter.get("ai_assisted") == "true"

    @property
    def audit_date(self) -> Optional[str]:
        return self.record.get("audit_date")

    def to_dict(self) -> Dict[str, Any]:
        criteria = None
        if self.criteria is not None:
            criteria = {name: c.to_dict() for name, c in self.criteria.items()}
        return {
            "slug": self.slug,
            "path": str(self.path),
            "frontmatter": dict(self.record.frontmatter),
            "score": self.score,
            "verdict": self.verdict,
            "criteria": criteria,
            "content": self.record.raw,
            "ai_assisted": self.ai_assisted,
            "audit_date": self.audit_date,
        }


@dataclass
class AuditSummary:
    """Listing entry. All derived fields are None when the file failed to parse."""
    slug: str
    path: Path
    score: Optional[int] = None
    verdict: Optional[str] = None
    date: Optional[str] = None
    ai_assisted: Optional[bool] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "slug": self.slug,
            "score": self.score,
            "verdict": self.verdict,
            "date": self.date,
            "ai_assisted": self.ai_assisted,
            "path": str(self.path),
        }


@dataclass
class AuditListing:
    audits: List[AuditSummary]
    total: int
    filters: Dict[str, Any] = field(default_factory=dict)
    verdict_counts: Dict[str, int] = field(default_factory=dict)
    average_score: Optional[int] = None

    @property
    def count(self) -> int:
        return len(self.audits)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "audits": [a.to_dict() for a in self.audits],
            "count": self.count,
            "total": self.total,
            "filters": dict(self.filters),
            "summary": {
                "verdict_counts": dict(self.verdict_counts),
                "average_score": self.average_score,
            },
        }


def parse_audit(slug: str, path: Path) -> Audit:
    record = read_record(path)
    return Audit(
        slug=slug,
        path=path,
        record=record,
        score=extract_score(record.raw),
        verdict=extract_verdict(record.raw),
        criteria=extract_criteria(record.raw),
    )


def average_score(summaries: List[AuditSummary]) -> Optional[int]:
    """Half-up rounded mean of known scores; None when no score is known."""
    known = [s.score for s in summaries if s.score is not None]
    if not known:
        return None
    return round_half_up(sum(known) / len(known))


class AuditStore:
    """
    Parse and aggregate AUDIT-<slug>.md files.

    Listing parses each file independently on a thread pool; one bad
    file never aborts the listing.
    """

    def __init__(self, paths: VaultPaths, workers: int = 4):
        self.paths = paths
        self.workers = workers

    def audit_files(self) -> List[Path]:
        folder = self.paths.audits
        if not folder.is_dir():
            return []
        return sorted(
            p for p in folder.glob(f"{AUDIT_PREFIX}*.md")
            if p.is_file() and slug_from_filename(p.name, AUDIT_PREFIX)
        )

    def slugs(self) -> List[str]:
        return [slug_from_filename(p.name, AUDIT_PREFIX) for p in self.audit_files()]

    def exists(self, slug: str) -> bool:
        return is_safe_name(slug) and self.paths.audit_path(slug).is_file()

    def get(self, slug: str) -> Result:
        """Full audit with extracted score, verdict and criteria."""
        if not is_safe_name(slug):
            return Result.invalid(f"Invalid audit slug '{slug}'", slug=slug)

        path = self.paths.audit_path(slug)
        if not path.is_file():
            return Result.not_found(
                f"Audit for '{slug}' not found",
                expected_path=str(path),
                suggestion="Run SOP 01a (Rigorous Idea Audit) to create one",
                suggestions=suggest(slug, self.slugs()),
            )

        return Result.success(parse_audit(slug, path))

    def _summarize(self, path: Path) -> AuditSummary:
        slug = slug_from_filename(path.name, AUDIT_PREFIX)
        try:
            audit = parse_audit(slug, path)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Could not parse audit %s: %s", path, e)
            return AuditSummary(slug=slug, path=path)
        return AuditSummary(
            slug=slug,
            path=path,
            score=audit.score,
            verdict=audit.verdict,
            date=audit.audit_date,
            ai_assisted=audit.ai_assisted,
        )

    def summaries(self) -> List[AuditSummary]:
        """Every audit, unfiltered, in filename order."""
        files = self.audit_files()
        logger.debug("Scanning %d audit file(s)", len(files))
        return map_parallel(self._summarize, files, workers=self.workers)

    def list_audits(self, verdict: Optional[str] = None, min_score: Optional[int] = None) -> Result:
        """
        Filtered audits sorted by score, highest first.

        Args:
            verdict: Keep only audits with exactly this verdict
            min_score: Keep only audits with a KNOWN score >= min_score

        The summary (verdict counts, average) covers the unfiltered set.
        """
        if verdict is not None and verdict not in VERDICTS:
            return Result.invalid(
                f"Unknown verdict '{verdict}'",
                valid_verdicts=list(VERDICTS)
            )

        everything = self.summaries()

        verdict_counts: Dict[str, int] = {}
        for summary in everything:
            if summary.verdict:
                verdict_counts[summary.verdict] = verdict_counts.get(summary.verdict, 0) + 1

        selected = everything
        if verdict is not None:
            selected = [a for a in selected if a.verdict == verdict]
        if min_score is not None:
            selected = [a for a in selected if a.score is not None and a.score >= min_score]

        # Stable sort: equal scores keep filename order
        selected = sorted(selected, key=lambda a: a.score or 0, reverse=True)

        return Result.success(AuditListing(
            audits=selected,
            total=len(everything),
            filters={"verdict": verdict, "min_score": min_score},
            verdict_counts=verdict_counts,
            average_score=average_score(everything),
        ))
