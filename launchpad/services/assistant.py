"""
SOPAssistant — Model-backed guidance over the SOP catalog

The model is opaque: this module only assembles a system prompt and a
user message, hands them to a provider and returns the text it gets
back. Everything it adds to the message (vault counts, the idea's
status) comes from the stores.
"""

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Dict, Any

from ..content.prompts import (
    SOP_ASSISTANT_SYSTEM_PROMPT, SOP_ASSISTANT_USER_TEMPLATE,
    QUESTION_PLACEHOLDER, CONTEXT_PLACEHOLDER,
)
from ..core.markdown import parse_record
from ..core.paths import STATUSES
from ..core.results import Result
from ..vault.ideas import IdeaStore
from ..vault.audits import AuditStore
from .providers import LLMProvider

logger = logging.getLogger(__name__)

_SYSTEM_SECTION = re.compile(r"# System Prompt\n(.*?)# User Message Template", re.DOTALL)
_USER_SECTION = re.compile(r"# User Message Template\n(.*)$", re.DOTALL)

MAX_TOKENS = 2048


@dataclass
class PromptTemplate:
    system: str
    user: str

    def render(self, question: str, context: Optional[str] = None) -> str:
        # First occurrence only, as the template authors expect
        message = self.user.replace(QUESTION_PLACEHOLDER, question, 1)
        return message.replace(CONTEXT_PLACEHOLDER, f"\nContext: {context}" if context else "", 1)


DEFAULT_TEMPLATE = PromptTemplate(SOP_ASSISTANT_SYSTEM_PROMPT, SOP_ASSISTANT_USER_TEMPLATE)


def parse_template(text: str) -> PromptTemplate:
    """
    Split a prompt document into system prompt and user template.

    Frontmatter is dropped. Without a `# System Prompt` section the whole
    document is the system prompt; without a `# User Message Template`
    section the question is sent as-is.
    """
    content = parse_record(text).body

    system_match = _SYSTEM_SECTION.search(content)
    user_match = _USER_SECTION.search(content)
    return PromptTemplate(
        system=system_match.group(1).strip() if system_match else content,
        user=user_match.group(1).strip() if user_match else QUESTION_PLACEHOLDER,
    )


def load_template(path: Path) -> PromptTemplate:
    if not path.is_file():
        logger.debug("No prompt template at %s, using bundled prompt", path)
        return DEFAULT_TEMPLATE
    return parse_template(path.read_text(encoding="utf-8"))


class SOPAssistant:
    """
    Ask questions about the SOPs; get a next-SOP recommendation.

    Both operations refuse to run (validation result) when the provider
    has no API key or SDK, and name what is missing.
    """

    def __init__(self, provider: LLMProvider, ideas: IdeaStore, audits: AuditStore, template_path: Path):
        self.provider = provider
        self.ideas = ideas
        self.audits = audits
        self.template_path = template_path

    def vault_status(self) -> str:
        counts = {status: len(self.ideas.idea_files(status)) for status in STATUSES}
        return (
            f"Vault status: {counts['backlog']} backlog, {counts['active']} active, "
            f"{counts['shipped']} shipped, {counts['killed']} killed"
        )

    def _unavailable(self) -> Optional[Result]:
        if self.provider.is_available:
            return None
        reason = self.provider.unavailable_reason or "Assistant provider unavailable"
        return Result.invalid(
            reason,
            suggestion="Set the provider's API key environment variable to enable AI assistance",
        )

    def _complete(self, system: str, user: str) -> str:
        logger.debug("Asking %s (%d chars)", self.provider.name, len(user))
        response = self.provider.complete(system, user, max_tokens=MAX_TOKENS)
        logger.debug("Assistant replied: %s", response.format_tokens())
        return response.text

    def ask(self, question: str, context: Optional[str] = None) -> Result:
        if not question or not question.strip():
            return Result.invalid("Question must not be empty")
        unavailable = self._unavailable()
        if unavailable:
            return unavailable

        template = load_template(self.template_path)
        message = template.render(question, context) + f"\n\n{self.vault_status()}"
        answer = self._complete(template.system, message)
        return Result.success({
            "question": question,
            "context": context or None,
            "response": answer,
        })

    def idea_line(self, slug: str) -> Optional[str]:
        location = self.ideas.find(slug)
        if location is None:
            return None
        audit = "(audit exists)" if self.audits.exists(slug) else "(no audit yet)"
        return f"Idea '{slug}' is currently in: {location.status} {audit}"

    def suggest_next(self, situation: str, idea_slug: Optional[str] = None) -> Result:
        if not situation or not situation.strip():
            return Result.invalid("Current situation must not be empty")
        unavailable = self._unavailable()
        if unavailable:
            return unavailable

        parts = [
            "Based on this situation, which SOP should I execute next?",
            f"Current situation: {situation}",
        ]
        if idea_slug:
            line = self.idea_line(idea_slug)
            if line:
                parts.append(line)
        parts.append(self.vault_status())
        parts.append("Provide a specific recommendation: which SOP number and why. Be direct.")

        template = load_template(self.template_path)
        answer = self._complete(template.system, "\n\n".join(parts))
        data: Dict[str, Any] = {
            "situation": situation,
            "idea_slug": idea_slug or None,
            "recommendation": answer,
        }
        return Result.success(data)
