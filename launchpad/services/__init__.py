"""
Services — External integration layer

Contains integrations with external systems:
- Providers: LLM backend providers (Claude, OpenAI)
- Assistant: SOP guidance built on a provider
"""

from .providers import LLMProvider, LLMResponse, MockProvider, get_provider, get_provider_status
from .assistant import SOPAssistant, PromptTemplate, parse_template, load_template

__all__ = [
    # Providers
    "LLMProvider", "LLMResponse", "MockProvider", "get_provider", "get_provider_status",
    # Assistant
    "SOPAssistant", "PromptTemplate", "parse_template", "load_template",
]
