"""
Record Parser — Markdown files with a simple frontmatter block

Every vault file (idea, audit, SOP) is a Record:

    ---
    name: "Invoice Chaser"
    created: "2026-01-12"
    ---

    # Invoice Chaser
    ...

Frontmatter is deliberately NOT full YAML: one `key: value` per line,
split on the first colon, matching quotes stripped. Other tools write
these files by hand, so parsing never fails. A block that is opened
but never closed means "no frontmatter" and the whole text is body.
"""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

logger = logging.getLogger(__name__)

DELIMITER = "---"

_TITLE_RE = re.compile(r"^#\s+(.+)$", re.MULTILINE)


@dataclass
class Record:
    """A parsed vault file."""
    frontmatter: Dict[str, str] = field(default_factory=dict)
    body: str = ""
    raw: str = ""

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Frontmatter lookup that treats empty values as missing."""
        value = self.frontmatter.get(key)
        return value if value else default


def _strip_quotes(value: str) -> str:
    if (value.startswith('"') and value.endswith('"')) or \
       (value.startswith("'") and value.endswith("'")):
        return value[1:-1]
    return value


def parse_record(raw: str) -> Record:
    """
    Split raw text into frontmatter and body.

    Args:
        raw: Full file contents

    Returns:
        Record with frontmatter map, trimmed body, and the untouched raw text
    """
    if not raw.startswith(DELIMITER):
        return Record(frontmatter={}, body=raw, raw=raw)

    end = raw.find(DELIMITER, len(DELIMITER))
    if end == -1:
        return Record(frontmatter={}, body=raw, raw=raw)

    frontmatter: Dict[str, str] = {}
    block = raw[len(DELIMITER):end].strip()
    for line in block.split("\n"):
        key, sep, value = line.partition(":")
        if not sep:
            continue
        frontmatter[key.strip()] = _strip_quotes(value.strip())

    body = raw[end + len(DELIMITER):].strip()
    return Record(frontmatter=frontmatter, body=body, raw=raw)


def read_record(path: Path) -> Record:
    """Read and parse a file. I/O errors propagate to the caller."""
    logger.debug("Reading %s", path)
    return parse_record(Path(path).read_text(encoding="utf-8"))


def extract_title(body: str) -> Optional[str]:
    """First level-1 heading, or None."""
    match = _TITLE_RE.search(body)
    return match.group(1).strip() if match else None


def extract_summary(body: str) -> Optional[str]:
    """First plain line after the first heading (skips quotes and headings)."""
    found_heading = False
    for line in body.split("\n"):
        if line.startswith("#"):
            found_heading = True
            continue
        if found_heading and line.strip() and not line.startswith(">"):
            return line.strip()
    return None


def extract_section(body: str, heading: str, until: Optional[str] = None) -> Optional[str]:
    """
    Text under a `## heading`.

    With `until`, the section runs to the `## until` heading so that
    headings and rules written inside the section are kept. Without it,
    or when that heading is missing, the section ends at the next `## `
    heading or rule.

    Args:
        body: Markdown body
        heading: Section heading text without the hashes
        until: Heading text that closes the section

    Returns:
        Section text without surrounding blank lines, or None when the
        heading is absent
    """
    lines = body.split("\n")
    target = f"## {heading}".strip()

    start = None
    for index, line in enumerate(lines):
        if line.strip() == target:
            start = index + 1
            break
    if start is None:
        return None

    collected = lines[start:]
    end = None
    if until is not None:
        closing = f"## {until}".strip()
        end = next((i for i, line in enumerate(collected) if line.strip() == closing), None)
    if end is None:
        end = next(
            (i for i, line in enumerate(collected)
             if line.strip().startswith("## ") or line.strip() == DELIMITER),
            len(collected),
        )
    collected = collected[:end]

    while collected and not collected[0].strip():
        collected.pop(0)
    while collected and not collected[-1].strip():
        collected.pop()
    return "\n".join(collected)
