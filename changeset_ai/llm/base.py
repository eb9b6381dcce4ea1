"""LLM Base Classes and Shared Code"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass

from changeset_ai.validators import GEMINI_KEY_PATTERN


SYSTEM_PROMPT = """You are an expert in semantic versioning and in writing changelog entries for software packages.

Your standards:
- Only packages whose code actually changed get a bump
- major for breaking changes, minor for new backwards compatible features, patch for fixes
- The summary is one concise sentence a user of the package can understand
- You reply with machine-readable JSON and nothing else"""


@dataclass
class LLMResponse:
    """Structured response from any LLM provider."""
    content: str
    model: str = ""
    tokens_used: int = 0


class LLMError(Exception):
    """Raised when LLM operations fail."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class LLMAuthError(LLMError):
    """Raised when the provider rejects the API key."""
    pass


class LLMClient(ABC):
    """Abstract base for LLM clients.

    Clients never hold the API key; it is passed to generate() for a single request.
    """

    credential_key: str = "api_key"
    key_pattern: re.Pattern = GEMINI_KEY_PATTERN

    @abstractmethod
    def generate(self, prompt: str, api_key: str) -> LLMResponse:
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        pass
