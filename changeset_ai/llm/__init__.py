"""LLM Client Package"""

from changeset_ai.llm.base import LLMClient, LLMResponse, LLMError, LLMAuthError, SYSTEM_PROMPT
from changeset_ai.llm.claude import ClaudeClient
from changeset_ai.llm.gemini import GeminiClient

PROVIDERS = {
    "gemini": GeminiClient,
    "claude": ClaudeClient,
}

DEFAULT_PROVIDER = "gemini"


def get_client(provider: str = DEFAULT_PROVIDER, model: str | None = None, timeout: int | None = None) -> LLMClient:
    """Get an LLM client. Provider can be 'gemini' or 'claude'."""
    if provider in PROVIDERS:
        return PROVIDERS[provider](model=model, timeout=timeout)

    raise LLMError(f"Unknown provider: {provider}. Use 'gemini' or 'claude'.")


__all__ = [
    "LLMClient",
    "LLMResponse",
    "LLMError",
    "LLMAuthError",
    "ClaudeClient",
    "GeminiClient",
    "get_client",
    "PROVIDERS",
    "DEFAULT_PROVIDER",
    "SYSTEM_PROMPT",
]
