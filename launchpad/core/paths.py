"""
Path Resolver — Logical keys to filesystem locations

Pure string computation, no I/O. The file naming here is shared with
every other tool that reads the vault, so it is bit-exact:

    <vault>/backlog/IDEA-<slug>.md     (also active/, shipped/, killed/)
    <vault>/audits/AUDIT-<slug>.md
    <sops>/<NN>-<name>.md

Unknown statuses and SOP numbers are programmer errors and raise.
"""

import re
from pathlib import Path
from typing import Optional, Tuple, Union

from .errors import UnknownStatusError, UnknownSOPError


# Lifecycle order doubles as the search order for slug lookup
STATUSES: Tuple[str, ...] = ("backlog", "active", "shipped", "killed")

AUDITS_DIR = "audits"
IDEA_PREFIX = "IDEA-"
AUDIT_PREFIX = "AUDIT-"
SUFFIX = ".md"

SLUG_PATTERN = re.compile(r"[a-z0-9-]+")

SOP_ALIAS = "01a"
SOP_FILES = {
    "00": "00-idea-intake.md",
    "01": "01-quick-validation.md",
    "01a": "01a-rigorous-idea-audit.md",
    "02": "02-mvp-scope-contract.md",
    "03": "03-revenue-model-lock.md",
    "04": "04-design-brief.md",
    "05": "05-project-setup.md",
    "06": "06-infrastructure-provisioning.md",
    "07": "07-development-protocol.md",
    "08": "08-testing-qa-checklist.md",
    "09": "09-pre-ship-checklist.md",
    "10": "10-launch-day-protocol.md",
    "11": "11-post-launch-monitoring.md",
    "12": "12-marketing-activation.md",
}


def is_valid_slug(slug: str) -> bool:
    """Kebab-case check: lowercase letters, digits, hyphens."""
    return bool(slug) and SLUG_PATTERN.fullmatch(slug) is not None


def normalize_sop_number(number: Union[str, int]) -> str:
    """
    Canonical catalog key for user input.

    "1" -> "01", 7 -> "07", "1a" -> "01a", " 12 " -> "12".
    Anything else is returned stripped and left for the lookup to reject.
    """
    text = str(number).strip().lower()
    if text in ("1a", SOP_ALIAS):
        return SOP_ALIAS
    if text.isdigit():
        return text.zfill(2)
    return text


def idea_filename(slug: str) -> str:
    return f"{IDEA_PREFIX}{slug}{SUFFIX}"


def audit_filename(slug: str) -> str:
    return f"{AUDIT_PREFIX}{slug}{SUFFIX}"


def slug_from_filename(filename: str, prefix: str) -> Optional[str]:
    """Recover the slug from IDEA-<slug>.md / AUDIT-<slug>.md, else None."""
    if not (filename.startswith(prefix) and filename.endswith(SUFFIX)):
        return None
    slug = filename[len(prefix):-len(SUFFIX)]
    return slug or None


class VaultPaths:
    """
    Directory layout of a Launchpad root.

    All locations derive from the root plus the configured sub-directory
    names; absolute sub-directory names override the root.
    """

    def __init__(
        self,
        root: Path,
        vault_dir: str = "_vault",
        sops_dir: str = "_sops",
        projects_dir: str = "projects",
        stack_dir: str = "_stack",
        prompts_dir: str = "_agents/prompts",
    ):
        self.root = Path(root)
        self.vault = self.root / vault_dir
        self.sops = self.root / sops_dir
        self.projects = self.root / projects_dir
        self.stack = self.root / stack_dir
        self.prompts = self.root / prompts_dir

    @classmethod
    def from_config(cls, root: Path, config) -> 'VaultPaths':
        """Build from a Config's `paths` section."""
        p = config.paths
        return cls(
            root,
            vault_dir=p.vault,
            sops_dir=p.sops,
            projects_dir=p.projects,
            stack_dir=p.stack,
            prompts_dir=p.prompts,
        )

    @property
    def audits(self) -> Path:
        return self.vault / AUDITS_DIR

    @property
    def ideas_index(self) -> Path:
        return self.vault / "IDEAS.md"

    @property
    def stack_doc(self) -> Path:
        return self.stack / "STACK.md"

    @property
    def assistant_prompt(self) -> Path:
        return self.prompts / "sop-assistant.md"

    def status_dir(self, status: str) -> Path:
        """Directory holding ideas in the given status."""
        if status not in STATUSES:
            raise UnknownStatusError(status)
        return self.vault / status

    def idea_path(self, slug: str, status: str) -> Path:
        return self.status_dir(status) / idea_filename(slug)

    def audit_path(self, slug: str) -> Path:
        return self.audits / audit_filename(slug)

    def sop_path(self, number: Union[str, int]) -> Path:
        key = normalize_sop_number(number)
        filename = SOP_FILES.get(key)
        if filename is None:
            raise UnknownSOPError(str(number))
        return self.sops / filename

    def project_path(self, name: str) -> Path:
        return self.projects / name


def is_safe_name(name: str) -> bool:
    """True when name is a single path component (no separators, no '..')."""
    if not name or name in (".", ".."):
        return False
    return "/" not in name and "\\" not in name and ".." not in name
