"""
LLM Providers — Abstraction for the SOP assistant's model

Supports: Claude, OpenAI
All providers implement the same interface; SDKs are imported lazily so
the vault tools work without either installed.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..config import LLMConfig

logger = logging.getLogger(__name__)


@dataclass
class LLMResponse:
    """Response from LLM including token usage."""
    text: str
    input_tokens: int = 0
    output_tokens: int = 0

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens

    def format_tokens(self) -> str:
        return f"in:{self.input_tokens} out:{self.output_tokens} total:{self.total_tokens}"


class LLMProvider(ABC):
    """Abstract base for LLM providers."""

    name = "abstract"

    @abstractmethod
    def complete(self, system: str, user: str, max_tokens: int = 2048) -> LLMResponse:
        """
        Get completion from LLM.

        Args:
            system: System prompt
            user: User message
            max_tokens: Maximum tokens in response

        Returns:
            LLMResponse with text and token usage
        """
        pass

    @property
    @abstractmethod
    def is_available(self) -> bool:
        """Check if provider is configured and ready."""
        pass

    @property
    def unavailable_reason(self) -> Optional[str]:
        """Why the provider cannot be used, or None when it can."""
        return None


class _SDKProvider(LLMProvider):
    """Shared client setup: API key from env, SDK imported on first use."""

    package = ""

    def __init__(self, config: LLMConfig):
        self.config = config
        self._client = None
        self._reason: Optional[str] = None
        self._init_client()

    def _init_client(self):
        if not self.config.api_key:
            self._reason = f"{self.config.api_key_env} not set"
            return
        try:
            self._client = self._make_client(self.config.api_key)
        except ImportError:
            self._reason = (
                f"The '{self.package}' package is not installed "
                f"(pip install launchpad-vault[llm])"
            )
            logger.debug("SDK for %s not importable", self.name)

    def _make_client(self, api_key: str):
        raise NotImplementedError

    @property
    def is_available(self) -> bool:
        return self._client is not None

    @property
    def unavailable_reason(self) -> Optional[str]:
        return None if self.is_available else self._reason


class ClaudeProvider(_SDKProvider):
    """Anthropic Claude provider."""

    name = "claude"
    package = "anthropic"

    def _make_client(self, api_key: str):
        import anthropic
        return anthropic.Anthropic(api_key=api_key)

    def complete(self, system: str, user: str, max_tokens: int = 2048) -> LLMResponse:
        if not self._client:
            raise RuntimeError("Claude client not initialized")

        message = self._client.messages.create(
            model=self.config.effective_model,
            max_tokens=max_tokens,
            system=system,
            messages=[{"role": "user", "content": user}]
        )

        text = next(
            (block.text for block in message.content if getattr(block, "type", "text") == "text"),
            None
        )
        if text is None:
            raise RuntimeError("No text content in response")

        return LLMResponse(
            text=text,
            input_tokens=getattr(message.usage, 'input_tokens', 0),
            output_tokens=getattr(message.usage, 'output_tokens', 0)
        )


class OpenAIProvider(_SDKProvider):
    """OpenAI GPT provider."""

    name = "openai"
    package = "openai"

    def _make_client(self, api_key: str):
        import openai
        return openai.OpenAI(api_key=api_key)

    def complete(self, system: str, user: str, max_tokens: int = 2048) -> LLMResponse:
        if not self._client:
            raise RuntimeError("OpenAI client not initialized")

        response = self._client.chat.completions.create(
            model=self.config.effective_model,
            max_completion_tokens=max_tokens,
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": user}
            ]
        )

        usage = getattr(response, 'usage', None)
        return LLMResponse(
            text=response.choices[0].message.content or "",
            input_tokens=getattr(usage, 'prompt_tokens', 0) if usage else 0,
            output_tokens=getattr(usage, 'completion_tokens', 0) if usage else 0
        )


class MockProvider(LLMProvider):
    """
    Canned-response provider for tests.

    Records every (system, user) pair it receives in `calls`.
    """

    name = "mock"

    def __init__(self, reply: str = "Run SOP 00 (Idea Intake).", available: bool = True):
        self.reply = reply
        self._available = available
        self.calls: List[Tuple[str, str]] = []

    @property
    def is_available(self) -> bool:
        return self._available

    @property
    def unavailable_reason(self) -> Optional[str]:
        return None if self._available else "Mock provider disabled"

    def complete(self, system: str, user: str, max_tokens: int = 2048) -> LLMResponse:
        self.calls.append((system, user))
        return LLMResponse(text=self.reply)


PROVIDER_CLASSES = {
    "claude": ClaudeProvider,
    "openai": OpenAIProvider,
}


def get_provider(config: LLMConfig) -> LLMProvider:
    """
    Provider for the configured name.

    Always returns an instance; check `is_available` before calling
    `complete`, since a missing key or SDK leaves the client unset.
    """
    provider_class = PROVIDER_CLASSES.get(config.provider)
    if provider_class is None:
        raise ValueError(f"Unknown provider '{config.provider}'")
    return provider_class(config)


def get_provider_status(config: LLMConfig) -> str:
    """Human-readable provider status line."""
    provider = get_provider(config)
    if provider.is_available:
        return f"{config.provider.title()}: {config.effective_model}"
    return f"{config.provider.title()}: unavailable ({provider.unavailable_reason})"
