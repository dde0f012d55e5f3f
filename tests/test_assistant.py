"""
Tests for SOPAssistant — prompt assembly around an opaque provider

All tests use MockProvider. No SDKs or API keys required.
"""

from launchpad.content.prompts import SOP_ASSISTANT_SYSTEM_PROMPT
from launchpad.core.results import Outcome
from launchpad.services.assistant import (
    DEFAULT_TEMPLATE, PromptTemplate, SOPAssistant, load_template, parse_template,
)
from launchpad.services.providers import MockProvider
from launchpad.vault.audits import AuditStore
from launchpad.vault.ideas import IdeaStore


def make_assistant(vault, provider=None) -> SOPAssistant:
    return SOPAssistant(
        provider or MockProvider(),
        IdeaStore(vault.paths),
        AuditStore(vault.paths),
        vault.paths.assistant_prompt,
    )


PROMPT_DOC = """---
version: 2
---

# System Prompt
You are terse.

# User Message Template
Q: {{USER_QUESTION}}{{CONTEXT}}
"""


class TestPromptTemplate:
    """Template parsing and placeholder substitution."""

    def test_parse_sections(self):
        template = parse_template(PROMPT_DOC)
        assert template.system == "You are terse."
        assert template.user == "Q: {{USER_QUESTION}}{{CONTEXT}}"

    def test_whole_document_is_system_without_sections(self):
        template = parse_template("Just be helpful.")
        assert template.system == "Just be helpful."
        assert template.user == "{{USER_QUESTION}}"

    def test_render_with_context(self):
        template = PromptTemplate("s", "Q: {{USER_QUESTION}}{{CONTEXT}}")
        assert template.render("What next?", "SOP 04") == "Q: What next?\nContext: SOP 04"

    def test_render_without_context(self):
        template = PromptTemplate("s", "Q: {{USER_QUESTION}}{{CONTEXT}}")
        assert template.render("What next?") == "Q: What next?"

    def test_first_occurrence_only(self):
        template = PromptTemplate("s", "{{USER_QUESTION}} / {{USER_QUESTION}}")
        assert template.render("x") == "x / {{USER_QUESTION}}"

    def test_load_falls_back_to_bundled(self, tmp_path):
        assert load_template(tmp_path / "missing.md") is DEFAULT_TEMPLATE
        assert DEFAULT_TEMPLATE.system == SOP_ASSISTANT_SYSTEM_PROMPT


class TestAsk:
    """Free-form questions."""

    def test_sends_question_and_vault_status(self, sample_vault):
        provider = MockProvider(reply="Use SOP 02.")

        data = make_assistant(sample_vault, provider).ask("What after audit?", "idea a").to_dict()

        assert data == {"question": "What after audit?", "context": "idea a", "response": "Use SOP 02."}
        system, user = provider.calls[0]
        assert system == SOP_ASSISTANT_SYSTEM_PROMPT
        assert user == (
            "What after audit?\nContext: idea a\n\n"
            "Vault status: 1 backlog, 1 active, 1 shipped, 0 killed"
        )

    def test_uses_prompt_file(self, vault):
        vault.add_prompt(PROMPT_DOC)
        provider = MockProvider()

        make_assistant(vault, provider).ask("Why?")

        system, user = provider.calls[0]
        assert system == "You are terse."
        assert user.startswith("Q: Why?\n\nVault status:")

    def test_empty_question(self, vault):
        provider = MockProvider()
        result = make_assistant(vault, provider).ask("   ")

        assert result.outcome == Outcome.INVALID
        assert provider.calls == []

    def test_unavailable_provider(self, vault):
        provider = MockProvider(available=False)

        result = make_assistant(vault, provider).ask("Why?")

        assert result.outcome == Outcome.INVALID
        assert result.message == "Mock provider disabled"
        assert "API key" in result.details["suggestion"]
        assert provider.calls == []


class TestSuggestNext:
    """Next-SOP recommendation."""

    def test_includes_idea_line(self, sample_vault):
        provider = MockProvider(reply="SOP 02, the audit passed.")

        data = make_assistant(sample_vault, provider).suggest_next("audit done", idea_slug="a").to_dict()

        assert data == {
            "situation": "audit done",
            "idea_slug": "a",
            "recommendation": "SOP 02, the audit passed.",
        }
        _, user = provider.calls[0]
        assert user.split("\n\n") == [
            "Based on this situation, which SOP should I execute next?",
            "Current situation: audit done",
            "Idea 'a' is currently in: backlog (audit exists)",
            "Vault status: 1 backlog, 1 active, 1 shipped, 0 killed",
            "Provide a specific recommendation: which SOP number and why. Be direct.",
        ]

    def test_idea_without_audit(self, sample_vault):
        assistant = make_assistant(sample_vault)
        assert assistant.idea_line("b") == "Idea 'b' is currently in: active (no audit yet)"

    def test_unknown_idea_line_omitted(self, vault):
        provider = MockProvider()
        make_assistant(vault, provider).suggest_next("starting out", idea_slug="ghost")

        _, user = provider.calls[0]
        assert "ghost" not in user

    def test_empty_situation(self, vault):
        assert make_assistant(vault).suggest_next("").outcome == Outcome.INVALID
