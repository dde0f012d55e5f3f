"""
IdeaStore — Lifecycle state machine over idea files

An idea's status IS the folder its file sits in:

    backlog/ ──move──> active/ ──move──> shipped/
        │                 │
        └──────move───────┴────────────> killed/

There is no status field to keep in sync. `create` is the only way into
backlog, `move` is the only way to change status, and a move relocates
the one file that represents the idea. Nothing here deletes an idea.

Each move appends an audit-trail note to the file body AFTER the rename
succeeds. If that append fails the idea is still moved; the failure is
reported alongside the successful result.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Dict, List, Optional, Any

from ..core.markdown import Record, read_record, extract_section
from ..core.paths import (
    STATUSES, IDEA_PREFIX, VaultPaths,
    is_valid_slug, is_safe_name, idea_filename, slug_from_filename,
)
from ..core.results import Result
from ..utils.parallel import map_parallel
from ..utils.fuzzy import suggest

logger = logging.getLogger(__name__)

DEFAULT_SOURCE = "Manual entry"
SLUG_RULE = "Invalid slug format. Use kebab-case (lowercase letters, numbers, hyphens)"

IDEA_TEMPLATE = """---
name: "{name}"
slug: "{slug}"
created: "{created}"
source: "{source}"
status: "backlog"
---

# {name}

## Problem Statement

{problem}

## Proposed Solution

{solution}

## Initial Signals

- [ ] Would you pay for this? (Gut check)
- [ ] Have you searched for solutions? (Active need)
- [ ] Do you know someone with this problem? (Market validation)

## Next Steps

1. Complete SOP 00-idea-intake.md checklist
2. Run quick validation (SOP 01)
3. If promising, run rigorous audit (SOP 01a)

---

*Created via Launchpad*
"""


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(moment: datetime) -> str:
    """UTC ISO-8601 with milliseconds and a Z suffix (2026-03-01T09:15:00.000Z)."""
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def move_note(from_status: str, to_status: str, moment: datetime, reason: Optional[str] = None) -> str:
    """Audit-trail line appended to an idea's body on every move."""
    suffix = f": {reason}" if reason else ""
    return f"\n\n---\n*Moved from {from_status} to {to_status} on {format_timestamp(moment)}{suffix}*\n"


@dataclass
class IdeaSummary:
    """Listing entry: frontmatter-only view of an idea file."""
    slug: str
    name: str
    created: Optional[str]
    path: Path

    def to_dict(self) -> Dict[str, Any]:
        return {
            "slug": self.slug,
            "name": self.name,
            "created": self.created,
            "path": str(self.path),
        }


@dataclass
class IdeaListing:
    status: str
    ideas: List[IdeaSummary] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.ideas)

    @property
    def slugs(self) -> List[str]:
        return [idea.slug for idea in self.ideas]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status,
            "ideas": [idea.to_dict() for idea in self.ideas],
            "count": self.count,
        }


@dataclass
class IdeaLocation:
    """Where an idea currently lives."""
    slug: str
    status: str
    path: Path


@dataclass
class Idea:
    """A fully parsed idea with its derived status and audit pointer."""
    slug: str
    status: str
    path: Path
    record: Record
    audit_path: Optional[Path] = None

    @property
    def has_audit(self) -> bool:
        return self.audit_path is not None

    @property
    def name(self) -> str:
        return self.record.get("name", self.slug)

    @property
    def created(self) -> Optional[str]:
        return self.record.get("created")

    @property
    def source(self) -> Optional[str]:
        return self.record.get("source")

    @property
    def problem(self) -> Optional[str]:
        return extract_section(self.record.body, "Problem Statement", until="Proposed Solution")

    @property
    def solution(self) -> Optional[str]:
        return extract_section(self.record.body, "Proposed Solution", until="Initial Signals")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "slug": self.slug,
            "status": self.status,
            "path": str(self.path),
            "name": self.name,
            "problem": self.problem,
            "solution": self.solution,
            "source": self.source,
            "created": self.created,
            "frontmatter": dict(self.record.frontmatter),
            "content": self.record.raw,
            "has_audit": self.has_audit,
            "audit_path": str(self.audit_path) if self.audit_path else None,
        }


class IdeaStore:
    """
    CRUD and state transitions for idea records.

    Key methods:
    - list_ideas: frontmatter summaries for one status folder
    - find / get: locate an idea across all folders (fixed search order)
    - create: new idea in backlog
    - move: relocate to another status, then annotate
    """

    def __init__(
        self,
        paths: VaultPaths,
        workers: int = 4,
        clock: Optional[Callable[[], datetime]] = None
    ):
        """
        Args:
            paths: Vault layout
            workers: Thread pool size for per-file reads during listing
            clock: Returns "now" (UTC); injectable for deterministic tests
        """
        self.paths = paths
        self.workers = workers
        self._clock = clock or _utc_now

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def idea_files(self, status: str) -> List[Path]:
        """IDEA-*.md files in a status folder, sorted by name."""
        folder = self.paths.status_dir(status)
        if not folder.is_dir():
            return []
        return sorted(
            p for p in folder.glob(f"{IDEA_PREFIX}*.md")
            if p.is_file() and slug_from_filename(p.name, IDEA_PREFIX)
        )

    def list_ideas(self, status: str) -> Result:
        """
        Summaries of every idea in one status folder.

        A missing folder is an empty listing. A file that cannot be read
        is still listed, with its slug as name and no creation date.
        """
        if status not in STATUSES:
            return Result.invalid(
                f"Unknown status '{status}'",
                valid_statuses=list(STATUSES)
            )

        files = self.idea_files(status)
        logger.debug("Listing %d idea file(s) in %s", len(files), status)
        ideas = map_parallel(self._summarize, files, workers=self.workers)
        return Result.success(IdeaListing(status=status, ideas=ideas))

    def _summarize(self, path: Path) -> IdeaSummary:
        slug = slug_from_filename(path.name, IDEA_PREFIX)
        try:
            record = read_record(path)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Could not read %s: %s", path, e)
            return IdeaSummary(slug=slug, name=slug, created=None, path=path)
        return IdeaSummary(
            slug=slug,
            name=record.get("name", slug),
            created=record.get("created"),
            path=path,
        )

    def all_slugs(self) -> List[str]:
        slugs = []
        for status in STATUSES:
            slugs.extend(slug_from_filename(p.name, IDEA_PREFIX) for p in self.idea_files(status))
        return slugs

    def find(self, slug: str) -> Optional[IdeaLocation]:
        """First folder (in lifecycle order) holding IDEA-<slug>.md, or None."""
        if not is_safe_name(slug):
            return None
        for status in STATUSES:
            path = self.paths.idea_path(slug, status)
            if path.is_file():
                return IdeaLocation(slug=slug, status=status, path=path)
        return None

    def _not_found(self, slug: str) -> Result:
        return Result.not_found(
            f"Idea '{slug}' not found in any vault folder",
            searched=list(STATUSES),
            suggestions=suggest(slug, self.all_slugs()),
        )

    def get(self, slug: str) -> Result:
        """Full record, resolved status and audit pointer for one idea."""
        location = self.find(slug)
        if location is None:
            return self._not_found(slug)

        record = read_record(location.path)
        audit_path = self.paths.audit_path(slug)
        return Result.success(Idea(
            slug=slug,
            status=location.status,
            path=location.path,
            record=record,
            audit_path=audit_path if audit_path.is_file() else None,
        ))

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def create(
        self,
        slug: str,
        name: str,
        problem: str,
        solution: str,
        source: Optional[str] = None
    ) -> Result:
        """
        Write a new idea into backlog.

        Fails without writing when the slug is malformed or already used
        in any status folder.
        """
        if not is_valid_slug(slug):
            return Result.invalid(SLUG_RULE, slug=slug)

        existing = self.find(slug)
        if existing is not None:
            return Result.conflict(
                f"Idea '{slug}' already exists in {existing.status}",
                status=existing.status,
                path=str(existing.path),
            )

        content = IDEA_TEMPLATE.format(
            name=name,
            slug=slug,
            created=self._clock().astimezone(timezone.utc).date().isoformat(),
            source=source or DEFAULT_SOURCE,
            problem=problem,
            solution=solution,
        )

        folder = self.paths.status_dir("backlog")
        folder.mkdir(parents=True, exist_ok=True)
        path = folder / idea_filename(slug)

        try:
            # 'x' refuses to clobber a file that appeared since find()
            with open(path, "x", encoding="utf-8") as f:
                f.write(content)
        except FileExistsError:
            return Result.conflict(
                f"Idea '{slug}' already exists in backlog",
                status="backlog",
                path=str(path),
            )

        logger.info("Created idea %s in backlog", slug)
        return Result.success({
            "success": True,
            "slug": slug,
            "status": "backlog",
            "path": str(path),
            "next_step": "Run quick validation (SOP 01) or rigorous audit (SOP 01a)",
        })

    def move(self, slug: str, to_status: str, reason: Optional[str] = None) -> Result:
        """
        Relocate an idea to another status folder, then annotate it.

        Moving to the current status is reported as a conflict and
        changes nothing.
        """
        if to_status not in STATUSES:
            return Result.invalid(
                f"Unknown status '{to_status}'",
                valid_statuses=list(STATUSES)
            )

        location = self.find(slug)
        if location is None:
            return self._not_found(slug)

        if location.status == to_status:
            return Result.conflict(
                f"Idea '{slug}' is already in {to_status}",
                path=str(location.path),
            )

        target = self.paths.idea_path(slug, to_status)
        if target.exists():
            return Result.conflict(
                f"Idea '{slug}' also exists in {to_status}; resolve the duplicate by hand",
                path=str(target),
            )

        target.parent.mkdir(parents=True, exist_ok=True)
        location.path.rename(target)
        logger.info("Moved idea %s from %s to %s", slug, location.status, to_status)

        receipt = {
            "success": True,
            "slug": slug,
            "from_status": location.status,
            "to_status": to_status,
            "old_path": str(location.path),
            "new_path": str(target),
            "reason": reason or None,
        }

        note = move_note(location.status, to_status, self._clock(), reason)
        try:
            content = target.read_text(encoding="utf-8")
            target.write_text(content + note, encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Moved %s but could not append the move note: %s", slug, e)
            receipt["annotation_error"] = str(e)

        return Result.success(receipt)
