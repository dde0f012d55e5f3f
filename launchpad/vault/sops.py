"""
SOPCatalog — Fixed catalog of Standard Operating Procedures

Fourteen numbered procedures, grouped into six phases. The catalog is
static; only the documents' contents live on disk.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple, Any, Union

from ..core.markdown import read_record
from ..core.paths import SOP_FILES, VaultPaths, normalize_sop_number
from ..core.results import Result

logger = logging.getLogger(__name__)

MAX_MATCHES_PER_SOP = 5
MATCH_LINE_LENGTH = 100


@dataclass(frozen=True)
class SOPEntry:
    number: str
    phase: str
    title: str
    file: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "number": self.number,
            "phase": self.phase,
            "title": self.title,
            "file": self.file,
        }


CATALOG: Tuple[SOPEntry, ...] = (
    SOPEntry("00", "Ideation", "Idea Intake", SOP_FILES["00"]),
    SOPEntry("01", "Ideation", "Quick Validation", SOP_FILES["01"]),
    SOPEntry("01a", "Ideation", "Rigorous Idea Audit", SOP_FILES["01a"]),
    SOPEntry("02", "Ideation", "MVP Scope Contract", SOP_FILES["02"]),
    SOPEntry("03", "Ideation", "Revenue Model Lock", SOP_FILES["03"]),
    SOPEntry("04", "Design", "Design Brief", SOP_FILES["04"]),
    SOPEntry("05", "Setup", "Project Setup", SOP_FILES["05"]),
    SOPEntry("06", "Setup", "Infrastructure Provisioning", SOP_FILES["06"]),
    SOPEntry("07", "Build", "Development Protocol", SOP_FILES["07"]),
    SOPEntry("08", "Build", "Testing & QA Checklist", SOP_FILES["08"]),
    SOPEntry("09", "Launch", "Pre-Ship Checklist", SOP_FILES["09"]),
    SOPEntry("10", "Launch", "Launch Day Protocol", SOP_FILES["10"]),
    SOPEntry("11", "Post-Launch", "Post-Launch Monitoring", SOP_FILES["11"]),
    SOPEntry("12", "Post-Launch", "Marketing Activation", SOP_FILES["12"]),
)

# Output key -> phase label, in lifecycle order
PHASES: Dict[str, str] = {
    "ideation": "Ideation",
    "design": "Design",
    "setup": "Setup",
    "build": "Build",
    "launch": "Launch",
    "post_launch": "Post-Launch",
}

_BY_NUMBER: Dict[str, SOPEntry] = {entry.number: entry for entry in CATALOG}


def lookup(number: Union[str, int]) -> Optional[SOPEntry]:
    """Catalog entry for user-supplied number ("1", "01", "1a"...), or None."""
    return _BY_NUMBER.get(normalize_sop_number(number))


def numbers() -> List[str]:
    return [entry.number for entry in CATALOG]


def format_match(line_number: int, line: str) -> str:
    """Line N: <trimmed line, cut at 100 chars, '...' if the line was longer>"""
    # measured on the raw line: indentation counts, so an indented line can get "..." uncut
    marker = "..." if len(line) > MATCH_LINE_LENGTH else ""
    return f"Line {line_number}: {line.strip()[:MATCH_LINE_LENGTH]}{marker}"


def matching_lines(text: str, query: str, limit: int = MAX_MATCHES_PER_SOP) -> List[str]:
    """Case-insensitive substring matches, one entry per matching line."""
    needle = query.lower()
    matches = []
    for i, line in enumerate(text.split("\n"), start=1):
        if needle in line.lower():
            matches.append(format_match(i, line))
            if len(matches) == limit:
                break
    return matches


class SOPCatalog:
    """Read, list and search SOP documents."""

    def __init__(self, paths: VaultPaths):
        self.paths = paths

    def get(self, number: Union[str, int]) -> Result:
        entry = lookup(number)
        if entry is None:
            return Result.not_found(f"SOP {number} not found", available=numbers())

        path = self.paths.sop_path(entry.number)
        if not path.is_file():
            return Result.not_found(
                f"SOP {entry.number} not found",
                path=str(path),
                available=numbers(),
            )

        record = read_record(path)
        return Result.success({
            "number": entry.number,
            "title": entry.title,
            "phase": entry.phase,
            "path": str(path),
            "frontmatter": dict(record.frontmatter),
            "content": record.raw,
        })

    def list_sops(self) -> Result:
        sops = [entry.to_dict() for entry in CATALOG]
        phases = {
            key: [entry.to_dict() for entry in CATALOG if entry.phase == label]
            for key, label in PHASES.items()
        }
        return Result.success({"sops": sops, "total": len(sops), "phases": phases})

    def search(self, query: str) -> Result:
        """
        Per-line search across every SOP on disk.

        SOPs with no matching line are omitted; files missing on disk are
        skipped silently.
        """
        if not query or not query.strip():
            return Result.invalid("Search query must not be empty")

        results: List[Dict[str, Any]] = []
        for entry in CATALOG:
            path = self.paths.sop_path(entry.number)
            if not path.is_file():
                logger.debug("SOP file missing, skipped: %s", path)
                continue

            matches = matching_lines(path.read_text(encoding="utf-8"), query)
            if matches:
                results.append({
                    "number": entry.number,
                    "title": entry.title,
                    "phase": entry.phase,
                    "matches": matches,
                })

        return Result.success({
            "query": query,
            "total_matches": sum(len(r["matches"]) for r in results),
            "sops_with_matches": len(results),
            "results": results,
        })
