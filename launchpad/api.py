"""
Launchpad API — The operation surface over one Launchpad root

Every public operation returns a JSON-serialisable dict, in success and
in failure. Reported failures look like

    {"error": "<message>", "kind": "invalid" | "not_found" | "conflict" | "error", ...context}

Unexpected exceptions from lower layers are logged and converted by the
`reported` decorator, so a caller never sees this layer raise.

`Launchpad.call(name, arguments)` routes by operation name and is the
seam a tool-invocation server would sit on.
"""

import functools
import inspect
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from .config import Config, ConfigManager
from .core.paths import VaultPaths
from .core.results import Result
from .services.assistant import SOPAssistant
from .services.providers import LLMProvider, get_provider
from .vault.audits import AuditStore
from .vault.ideas import IdeaStore
from .vault.projects import ProjectRegistry
from .vault.sops import SOPCatalog
from .vault.stats import VaultAggregator

logger = logging.getLogger(__name__)

MARKDOWN = "text/markdown"

RESOURCES: List[Dict[str, str]] = [
    {
        "uri": "launchpad://ideas/index",
        "name": "Ideas Index",
        "description": "Master index of all ideas (IDEAS.md)",
        "mime_type": MARKDOWN,
    },
    {
        "uri": "launchpad://stack",
        "name": "Tech Stack",
        "description": "Locked technology decisions (STACK.md)",
        "mime_type": MARKDOWN,
    },
]

PLACEHOLDERS = {
    "launchpad://ideas/index": "# Ideas Index\n\nNo IDEAS.md found.",
    "launchpad://stack": "# Stack\n\nNo STACK.md found.",
}

OPERATIONS = (
    "list_ideas", "get_idea", "create_idea", "move_idea",
    "get_audit", "list_audits",
    "list_sops", "get_sop", "search_sops",
    "get_vault_stats",
    "list_projects", "get_project",
    "ask_sop_assistant", "suggest_next_sop",
    "list_resources", "read_resource",
)


def is_error(data: Dict[str, Any]) -> bool:
    """True when an operation's dict is a reported failure."""
    return "error" in data


def reported(prefix: str) -> Callable:
    """
    Convert an operation's Result to a dict and any exception to an error dict.

    Args:
        prefix: Shown before the exception message ("Failed to get idea: ...")
    """
    def decorator(fn: Callable) -> Callable:
        @functools.wraps(fn)
        def wrapper(self, *args, **kwargs) -> Dict[str, Any]:
            try:
                result = fn(self, *args, **kwargs)
            except Exception as e:
                logger.exception("%s", prefix)
                return {"error": f"{prefix}: {e}", "kind": "error"}
            if isinstance(result, Result):
                return result.to_dict()
            return result
        return wrapper
    return decorator


class Launchpad:
    """
    Facade over the vault stores, SOP catalog, projects and assistant.

    Usage:
        lp = Launchpad(Path("~/launchpad").expanduser())
        lp.create_idea("invoice-chaser", "Invoice Chaser", "...", "...")
        lp.move_idea("invoice-chaser", "active", reason="Audit passed")
    """

    def __init__(
        self,
        root: Path,
        config: Optional[Config] = None,
        provider: Optional[LLMProvider] = None,
        clock: Optional[Callable[[], datetime]] = None
    ):
        """
        Args:
            root: Launchpad root directory
            config: Loaded configuration (defaults to ConfigManager(root).load())
            provider: Assistant provider override (tests pass a MockProvider)
            clock: "Now" for idea timestamps (tests pass a fixed clock)
        """
        self.root = Path(root)
        self.config = config or ConfigManager(self.root).load()
        self.paths = VaultPaths.from_config(self.root, self.config)

        workers = self.config.parallel.io_workers
        self.ideas = IdeaStore(self.paths, workers=workers, clock=clock)
        self.audits = AuditStore(self.paths, workers=workers)
        self.sops = SOPCatalog(self.paths)
        self.projects = ProjectRegistry(self.paths)
        self.aggregator = VaultAggregator(self.ideas, self.audits)

        self._provider = provider
        self._assistant: Optional[SOPAssistant] = None

    @property
    def assistant(self) -> SOPAssistant:
        """Built on first use so the SDK is only imported when needed."""
        if self._assistant is None:
            provider = self._provider or get_provider(self.config.llm)
            self._assistant = SOPAssistant(
                provider, self.ideas, self.audits, self.paths.assistant_prompt
            )
        return self._assistant

    # -------------------------------------------------------------------------
    # Ideas
    # -------------------------------------------------------------------------

    @reported("Failed to list ideas")
    def list_ideas(self, status: str) -> Result:
        return self.ideas.list_ideas(status)

    @reported("Failed to get idea")
    def get_idea(self, slug: str) -> Result:
        return self.ideas.get(slug)

    @reported("Failed to create idea")
    def create_idea(
        self,
        slug: str,
        name: str,
        problem: str,
        solution: str,
        source: Optional[str] = None
    ) -> Result:
        return self.ideas.create(slug, name, problem, solution, source)

    @reported("Failed to move idea")
    def move_idea(self, slug: str, to_status: str, reason: Optional[str] = None) -> Result:
        return self.ideas.move(slug, to_status, reason)

    # -------------------------------------------------------------------------
    # Audits
    # -------------------------------------------------------------------------

    @reported("Failed to get audit")
    def get_audit(self, slug: str) -> Result:
        return self.audits.get(slug)

    @reported("Failed to list audits")
    def list_audits(self, verdict: Optional[str] = None, min_score: Optional[int] = None) -> Result:
        return self.audits.list_audits(verdict=verdict, min_score=min_score)

    # -------------------------------------------------------------------------
    # SOPs
    # -------------------------------------------------------------------------

    @reported("Failed to list SOPs")
    def list_sops(self) -> Result:
        return self.sops.list_sops()

    @reported("Failed to get SOP")
    def get_sop(self, number: str) -> Result:
        return self.sops.get(number)

    @reported("Search failed")
    def search_sops(self, query: str) -> Result:
        return self.sops.search(query)

    # -------------------------------------------------------------------------
    # Vault, projects
    # -------------------------------------------------------------------------

    @reported("Failed to get vault stats")
    def get_vault_stats(self) -> Result:
        return self.aggregator.stats()

    @reported("Failed to list projects")
    def list_projects(self) -> Result:
        return self.projects.list_projects()

    @reported("Failed to get project")
    def get_project(self, name: str) -> Result:
        return self.projects.get(name)

    # -------------------------------------------------------------------------
    # Assistant
    # -------------------------------------------------------------------------

    @reported("SOP Assistant error")
    def ask_sop_assistant(self, question: str, context: Optional[str] = None) -> Result:
        return self.assistant.ask(question, context)

    @reported("SOP suggestion error")
    def suggest_next_sop(self, current_situation: str, idea_slug: Optional[str] = None) -> Result:
        return self.assistant.suggest_next(current_situation, idea_slug)

    # -------------------------------------------------------------------------
    # Resources
    # -------------------------------------------------------------------------

    def _resource_path(self, uri: str) -> Optional[Path]:
        return {
            "launchpad://ideas/index": self.paths.ideas_index,
            "launchpad://stack": self.paths.stack_doc,
        }.get(uri)

    @reported("Failed to list resources")
    def list_resources(self) -> Result:
        return Result.success({"resources": [dict(r) for r in RESOURCES]})

    @reported("Error reading resource")
    def read_resource(self, uri: str) -> Result:
        path = self._resource_path(uri)
        if path is None:
            return Result.not_found(
                f"Resource not found: {uri}",
                available=[r["uri"] for r in RESOURCES]
            )
        text = path.read_text(encoding="utf-8") if path.is_file() else PLACEHOLDERS[uri]
        return Result.success({"uri": uri, "mime_type": MARKDOWN, "text": text})

    # -------------------------------------------------------------------------
    # Dispatch
    # -------------------------------------------------------------------------

    def call(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Invoke an operation by name with keyword arguments.

        Unknown operations and arguments that do not fit the operation's
        signature are reported as invalid; nothing raises.
        """
        if name not in OPERATIONS:
            return Result.invalid(
                f"Unknown operation: {name}",
                available=list(OPERATIONS)
            ).to_dict()

        arguments = arguments if arguments is not None else {}
        if not isinstance(arguments, dict):
            return Result.invalid(f"Arguments for {name} must be an object").to_dict()

        operation = getattr(self, name)
        try:
            inspect.signature(operation).bind(**arguments)
        except TypeError as e:
            return Result.invalid(f"Invalid arguments for {name}: {e}").to_dict()

        logger.debug("Dispatching %s(%s)", name, ", ".join(sorted(arguments)))
        return operation(**arguments)
