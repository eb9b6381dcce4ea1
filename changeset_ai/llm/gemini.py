"""Google Gemini LLM Client"""

import http.client
import json
import socket
import urllib.error
import urllib.request

from loguru import logger

from changeset_ai.llm.base import LLMAuthError, LLMClient, LLMError, LLMResponse
from changeset_ai.validators import GEMINI_KEY_PATTERN

# Gemini answers a bad key with 400 as well as 401/403
AUTH_STATUS_CODES = {400, 401, 403}


class GeminiClient(LLMClient):
    """Gemini generateContent client. The key travels in a header, never in the URL."""

    DEFAULT_MODEL = "gemini-2.0-flash"
    DEFAULT_HOST = "https://generativelanguage.googleapis.com"
    DEFAULT_TIMEOUT = 120

    credential_key = "gemini_api_key"
    key_pattern = GEMINI_KEY_PATTERN

    def __init__(self, model: str | None = None, host: str | None = None, timeout: int | None = None):
        self.model = model or self.DEFAULT_MODEL
        self.host = host or self.DEFAULT_HOST
        self.timeout = timeout or self.DEFAULT_TIMEOUT

        if not self.host.startswith("https://"):
            raise LLMError(f"Refusing to send API key over a non-HTTPS connection: {self.host}")

    @property
    def name(self) -> str:
        return f"Gemini ({self.model})"

    @property
    def url(self) -> str:
        return f"{self.host}/v1beta/models/{self.model}:generateContent"

    def _call_api(self, prompt: str, api_key: str) -> dict:
        """Make a single API call to Gemini."""
        payload = {"contents": [{"role": "user", "parts": [{"text": prompt}]}]}
        data = json.dumps(payload).encode('utf-8')
        req = urllib.request.Request(
            self.url,
            data=data,
            method="POST",
            headers={
                "Content-Type": "application/json",
                "x-goog-api-key": api_key.strip(),
            },
        )

        with urllib.request.urlopen(req, timeout=self.timeout) as response:
            logger.debug("Gemini responded with status {}", response.status)
            return json.loads(response.read().decode('utf-8'))

    @staticmethod
    def _extract_text(result: dict) -> str:
        try:
            return result["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError):
            raise LLMError("Invalid response structure from AI.")

    def generate(self, prompt: str, api_key: str) -> LLMResponse:
        """Send the prompt once. Failures are reported, not retried."""
        try:
            result = self._call_api(prompt, api_key)
        except urllib.error.HTTPError as e:
            logger.debug("Gemini responded with status {}", e.code)
            if e.code in AUTH_STATUS_CODES:
                raise LLMAuthError(
                    f"API request failed with status {e.code}. Your API key might be invalid. "
                    "It has been cleared, please try again.",
                    status_code=e.code,
                )
            raise LLMError(f"API request failed with status {e.code}", status_code=e.code)
        except urllib.error.URLError as e:
            if isinstance(e.reason, socket.timeout):
                raise LLMError(f"Request timed out after {self.timeout}s")
            raise LLMError(f"Gemini request failed: {e.reason}")
        except socket.timeout:
            raise LLMError(f"Request timed out after {self.timeout}s")
        except json.JSONDecodeError:
            raise LLMError("Invalid response from Gemini: body is not JSON")
        except http.client.HTTPException as e:
            raise LLMError(f"Incomplete response from Gemini: {e}")

        text = self._extract_text(result)
        usage = result.get("usageMetadata") or {}
        return LLMResponse(
            content=text,
            model=self.model,
            tokens_used=usage.get("totalTokenCount", 0),
        )
