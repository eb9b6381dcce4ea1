"""Claude (Anthropic) LLM Client"""

from changeset_ai.llm.base import LLMAuthError, LLMClient, LLMError, LLMResponse, SYSTEM_PROMPT
from changeset_ai.validators import CLAUDE_KEY_PATTERN


class ClaudeClient(LLMClient):
    """Claude API client."""

    DEFAULT_MODEL = "claude-sonnet-4-20250514"
    MAX_TOKENS = 1000
    TEMPERATURE = 0.2
    DEFAULT_TIMEOUT = 120

    credential_key = "anthropic_api_key"
    key_pattern = CLAUDE_KEY_PATTERN

    def __init__(self, model: str | None = None, timeout: int | None = None):
        self.model = model or self.DEFAULT_MODEL
        self.timeout = timeout or self.DEFAULT_TIMEOUT

        try:
            import anthropic  # noqa: F401
        except ImportError:
            raise LLMError(
                "Anthropic SDK not installed. Run:\n"
                "  pip install anthropic"
            )

    @property
    def name(self) -> str:
        return f"Claude ({self.model})"

    def generate(self, prompt: str, api_key: str) -> LLMResponse:
        from anthropic import Anthropic, APIConnectionError, APIStatusError, AuthenticationError, PermissionDeniedError

        # One request, no SDK-level retries either
        client = Anthropic(api_key=api_key.strip(), max_retries=0, timeout=self.timeout)
        try:
            response = client.messages.create(
                model=self.model,
                max_tokens=self.MAX_TOKENS,
                temperature=self.TEMPERATURE,
                system=SYSTEM_PROMPT,
                messages=[{"role": "user", "content": prompt}]
            )
        except (AuthenticationError, PermissionDeniedError) as e:
            raise LLMAuthError(
                f"API request failed with status {e.status_code}. Your API key might be invalid. "
                "It has been cleared, please try again.",
                status_code=e.status_code,
            )
        except APIStatusError as e:
            raise LLMError(f"API request failed with status {e.status_code}", status_code=e.status_code)
        except APIConnectionError as e:
            raise LLMError(f"Claude request failed: {e}")

        content = ""
        for block in response.content:
            if block.type == "text":
                content = block.text.strip()
                break

        if not content:
            raise LLMError("Invalid response structure from AI.")

        return LLMResponse(
            content=content,
            model=self.model,
            tokens_used=response.usage.input_tokens + response.usage.output_tokens
        )
