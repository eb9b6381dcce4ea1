"""Suggestion Engine - Ask the model for bumps and a summary, then validate the reply."""

import threading

from loguru import logger

from changeset_ai.credentials import CredentialStore
from changeset_ai.llm.base import LLMAuthError, LLMClient, LLMError, LLMResponse
from changeset_ai.prompts import PromptBuilder
from changeset_ai.suggestion.cancel import CancellationToken
from changeset_ai.suggestion.parser import Suggestion, parse_suggestion


class SuggestionEngine:
    """Sends one request per suggest() call. Failed or malformed replies are never retried."""

    POLL_INTERVAL = 0.05

    def __init__(self, client: LLMClient, credentials: CredentialStore, builder: PromptBuilder | None = None):
        self.client = client
        self.credentials = credentials
        self.builder = builder or PromptBuilder()

    def suggest(
        self,
        diff_text: str,
        package_names: list[str],
        cancel: CancellationToken | None = None,
    ) -> Suggestion | None:
        """Return a validated Suggestion, or None if cancelled before a reply arrived.

        Raises LLMError (including SuggestionRejected) on any failure. An
        authorization failure removes the stored key before re-raising.
        """
        cancel = cancel or CancellationToken()
        prompt = self.builder.build(diff_text, package_names)
        logger.debug("Prompt is {} characters for {} packages", len(prompt), len(package_names))

        if cancel.is_cancelled:
            return None

        api_key = self.credentials.get(self.client.credential_key)
        if not api_key:
            raise LLMError("API key is required for the AI feature. Run: changeset --set-key")

        response = self._generate(prompt, api_key, cancel)
        if response is None:
            logger.debug("Suggestion request cancelled")
            return None

        logger.debug("Model replied with {} characters ({} tokens)", len(response.content), response.tokens_used)
        return parse_suggestion(response.content)

    def _generate(self, prompt: str, api_key: str, cancel: CancellationToken) -> LLMResponse | None:
        """Run the request in a worker thread so the caller can stop waiting."""
        outcome = {}
        done = threading.Event()

        def _worker():
            try:
                outcome['response'] = self.client.generate(prompt, api_key)
            except Exception as e:  # re-raised on the caller's thread
                outcome['error'] = e
            finally:
                done.set()

        threading.Thread(target=_worker, name="changeset-llm", daemon=True).start()

        while not done.is_set():
            if cancel.wait(self.POLL_INTERVAL):
                return None

        error = outcome.get('error')
        if isinstance(error, LLMAuthError):
            self.credentials.delete(self.client.credential_key)
            logger.warning("Stored API key was rejected and has been removed")
            raise error
        if error is not None:
            raise error
        return outcome['response']
