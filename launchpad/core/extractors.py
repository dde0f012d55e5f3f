"""
Text Extractors — Best-effort score, verdict and criteria parsing

Audit documents exist in two historical formats:

  A) frontmatter fields        final_score: "350/500"
                               verdict: "GO"
  B) markdown report body      | **TOTAL** | **350/500** |
                               ## Verdict: GO

Each extractor is an ordered chain of (pattern, convert) pairs tried
until the first match. No match is None, never 0 or "", because a
score of zero is a legitimate result and must stay distinguishable
from "not found". Extractors never raise on unmatched text.
"""

import logging
import re
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Pattern, Tuple, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

VERDICTS: Tuple[str, ...] = ("STRONG GO", "GO", "CONDITIONAL", "WEAK", "KILL")

MAX_SCORE = 500
CRITERION_MAX = 100


@dataclass(frozen=True)
class CriterionScore:
    """Score for one named audit criterion (a 'pillar')."""
    score: int
    passed: bool

    def to_dict(self) -> Dict[str, object]:
        return {"score": self.score, "pass": self.passed}


Chain = List[Tuple[Pattern, Callable[[re.Match], T]]]


def _first_match(text: str, chain: Chain) -> Optional[T]:
    for pattern, convert in chain:
        match = pattern.search(text)
        if match:
            return convert(match)
    return None


SCORE_CHAIN: Chain = [
    (re.compile(r'final_score:\s*"?(\d+)/500"?'), lambda m: int(m.group(1))),
    (re.compile(r'\*\*TOTAL\*\*\s*\|\s*\*\*(\d+)/500\*\*'), lambda m: int(m.group(1))),
]

VERDICT_CHAIN: Chain = [
    (re.compile(r'verdict:\s*"?([^"\n]+)"?'), lambda m: m.group(1).strip()),
    (re.compile(r'## Verdict:\s*(.+)'), lambda m: m.group(1).strip()),
]

# | 1. Problem Evidence | 72/100 | 3 | Yes |
CRITERION_ROW = re.compile(
    r'\|\s*(\d+)\.\s*([^|]+)\s*\|\s*(\d+)/100\s*\|\s*\d+\s*\|\s*(Yes|No)\s*\|'
)


def extract_score(text: str) -> Optional[int]:
    """Total audit score out of 500, or None when neither format matches."""
    score = _first_match(text, SCORE_CHAIN)
    if score is None:
        logger.debug("No score found")
    return score


def extract_verdict(text: str) -> Optional[str]:
    """Verdict label as written (e.g. "STRONG GO"), or None."""
    verdict = _first_match(text, VERDICT_CHAIN)
    return verdict or None


def extract_criteria(text: str) -> Optional[Dict[str, CriterionScore]]:
    """
    Per-criterion scores from the audit's scoring table.

    Returns:
        Map of criterion name to CriterionScore, or None when no row
        matches (no table is different from an empty table).
    """
    criteria: Dict[str, CriterionScore] = {}
    for match in CRITERION_ROW.finditer(text):
        name = match.group(2).strip()
        criteria[name] = CriterionScore(
            score=int(match.group(3)),
            passed=match.group(4) == "Yes",
        )
    return criteria or None
