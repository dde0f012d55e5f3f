"""
ProjectRegistry — Read-only view of local project directories

A project is any immediate sub-directory of the projects root. Phase
and creation date are scraped from its CLAUDE.md context document.
"""

import json
import logging
import re
from pathlib import Path
from typing import Dict, List, Optional, Any

from ..core.paths import VaultPaths, is_safe_name
from ..core.results import Result

logger = logging.getLogger(__name__)

CONTEXT_FILE = "CLAUDE.md"
MANIFEST_FILE = "package.json"

PHASE_RE = re.compile(r"Current Phase:\*\*\s*(.+)")
CREATED_RE = re.compile(r"Created:\*\*\s*(\d{4}-\d{2}-\d{2})")


def read_context(project_dir: Path) -> Optional[str]:
    path = project_dir / CONTEXT_FILE
    if not path.is_file():
        return None
    return path.read_text(encoding="utf-8")


def read_manifest(project_dir: Path) -> Optional[Dict[str, Any]]:
    """{name, version} from package.json, or None if absent or not valid JSON."""
    path = project_dir / MANIFEST_FILE
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (ValueError, OSError) as e:
        logger.warning("Ignoring unreadable %s: %s", path, e)
        return None
    if not isinstance(data, dict):
        return None
    return {"name": data.get("name"), "version": data.get("version")}


class ProjectRegistry:

    def __init__(self, paths: VaultPaths):
        self.paths = paths

    def _describe(self, project_dir: Path) -> Dict[str, Any]:
        phase = created = None
        has_context = (project_dir / CONTEXT_FILE).is_file()
        if has_context:
            try:
                text = read_context(project_dir)
            except (OSError, UnicodeDecodeError) as e:
                logger.warning("Could not read context for %s: %s", project_dir.name, e)
                text = ""
            phase_match = PHASE_RE.search(text)
            created_match = CREATED_RE.search(text)
            phase = phase_match.group(1).strip() if phase_match else None
            created = created_match.group(1) if created_match else None

        return {
            "name": project_dir.name,
            "path": str(project_dir),
            "phase": phase,
            "created": created,
            "has_context": has_context,
        }

    def list_projects(self) -> Result:
        root = self.paths.projects
        if not root.is_dir():
            return Result.success({"projects": [], "count": 0})

        dirs = sorted((p for p in root.iterdir() if p.is_dir()), key=lambda p: p.name)
        projects: List[Dict[str, Any]] = [self._describe(d) for d in dirs]
        return Result.success({"projects": projects, "count": len(projects)})

    def get(self, name: str) -> Result:
        if not is_safe_name(name):
            return Result.invalid(
                f"Invalid project name '{name}'",
                rule="A project name is a single directory name"
            )

        project_dir = self.paths.project_path(name)
        if not project_dir.is_dir():
            return Result.not_found(f"Project '{name}' not found", path=str(project_dir))

        return Result.success({
            "name": name,
            "path": str(project_dir),
            "context": read_context(project_dir),
            "package": read_manifest(project_dir),
        })
