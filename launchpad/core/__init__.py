"""
Core — Data layer: records, paths, extractors, results

No store logic lives here; every function is either pure or a single
file read.
"""

from .errors import LaunchpadError, UnknownStatusError, UnknownSOPError
from .results import Outcome, Result
from .markdown import Record, parse_record, read_record, extract_title, extract_summary, extract_section
from .paths import (
    STATUSES, SOP_FILES, VaultPaths,
    is_valid_slug, is_safe_name, normalize_sop_number, slug_from_filename,
)
from .extractors import (
    VERDICTS, CriterionScore,
    extract_score, extract_verdict, extract_criteria,
)

__all__ = [
    'LaunchpadError', 'UnknownStatusError', 'UnknownSOPError',
    'Outcome', 'Result',
    'Record', 'parse_record', 'read_record', 'extract_title', 'extract_summary', 'extract_section',
    'STATUSES', 'SOP_FILES', 'VaultPaths',
    'is_valid_slug', 'is_safe_name', 'normalize_sop_number', 'slug_from_filename',
    'VERDICTS', 'CriterionScore',
    'extract_score', 'extract_verdict', 'extract_criteria',
]
