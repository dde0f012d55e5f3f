"""
Symbols — Markers for idea statuses, verdicts and record kinds

Two sets ship: UNICODE and ASCII. The display.symbols setting picks one,
"auto" looks at the stdout encoding. LAUNCHPAD_ASCII_ONLY=1 forces ASCII
(useful in CI logs).

Vault files are hand-written and assistant replies come from a model, so
anything printed from them goes through safe_print() and, for model
text, sanitize_control_chars().
"""

import codecs
import os
import re
import sys
from dataclasses import dataclass
from typing import Optional

from ..core.paths import STATUSES

TRUTHY = ("1", "true", "yes")

# C0 controls except tab, newline and carriage return
_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f]")

# Applied when the console cannot encode the text as-is
ASCII_FALLBACKS = str.maketrans({
    "→": "->",
    "…": "...",
    "•": "*",
    "–": "-",
    "—": "--",
    "“": '"',
    "”": '"',
    "‘": "'",
    "’": "'",
    "✓": "[OK]",
    "✗": "[ERR]",
    "⚠": "[!]",
})


def sanitize_control_chars(text: str) -> str:
    """Drop terminal control characters (escape sequences, bells), keep whitespace."""
    if not text:
        return text
    return _CONTROL_RE.sub("", text)


def safe_print(text: str, file=None) -> None:
    """
    print() that degrades instead of raising on a narrow console encoding.

    Known punctuation is mapped to ASCII first; whatever is still not
    encodable becomes '?'.
    """
    stream = file or sys.stdout
    try:
        print(text, file=stream)
    except UnicodeEncodeError:
        encoding = getattr(stream, "encoding", None) or "ascii"
        fallback = text.translate(ASCII_FALLBACKS).encode(encoding, errors="replace")
        print(fallback.decode(encoding), file=stream)


@dataclass(frozen=True)
class SymbolSet:
    """Every marker the CLI prints."""
    # Idea statuses (one per status folder)
    backlog: str
    active: str
    shipped: str
    killed: str

    # Record kinds, used in view titles
    idea: str
    audit: str
    sop: str
    project: str

    # Outcome markers
    check_pass: str
    check_warn: str
    check_fail: str

    arrow: str
    bullet: str
    rule: str
    ellipsis: str

    # Assistant: waiting on the model / its answer
    asking: str
    answer: str


UNICODE = SymbolSet(
    backlog="○",
    active="◐",
    shipped="●",
    killed="⊘",
    idea="◇",
    audit="▣",
    sop="§",
    project="◎",
    check_pass="✓",
    check_warn="⚠",
    check_fail="✗",
    arrow="→",
    bullet="•",
    rule="─",
    ellipsis="…",
    asking="◌",
    answer="●",
)

ASCII = SymbolSet(
    backlog="[ ]",
    active="[~]",
    shipped="[*]",
    killed="[x]",
    idea="[>]",
    audit="[#]",
    sop="[S]",
    project="[P]",
    check_pass="[OK]",
    check_warn="[!]",
    check_fail="[ERR]",
    arrow="->",
    bullet="*",
    rule="-",
    ellipsis="...",
    asking="...",
    answer="[*]",
)


def supports_unicode(stream=None) -> bool:
    """True when stdout (or stream) encodes as UTF; unknown encodings mean ASCII."""
    if os.environ.get("LAUNCHPAD_ASCII_ONLY", "").lower() in TRUTHY:
        return False
    encoding = getattr(stream or sys.stdout, "encoding", None)
    if not encoding:
        return False
    try:
        return codecs.lookup(encoding).name.startswith("utf")
    except LookupError:
        return False


def get_symbols(preference: Optional[str] = None) -> SymbolSet:
    """Symbol set for a display.symbols value ("unicode", "ascii", "auto"/None)."""
    if preference == "unicode":
        return UNICODE
    if preference == "ascii":
        return ASCII
    return UNICODE if supports_unicode() else ASCII


def symbol_for_status(symbols: SymbolSet, status: str) -> str:
    """Marker for a status folder; anything else gets the warning marker."""
    if status in STATUSES:
        return getattr(symbols, status)
    return symbols.check_warn


def format_status(symbols: SymbolSet, status: str) -> str:
    """'[*] shipped' / '● shipped'"""
    return f"{symbol_for_status(symbols, status)} {status}"
