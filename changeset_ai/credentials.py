"""Credential Storage

API keys live only in a credential store. Callers read a key for a single
request and never log it. The default store is a JSON file readable only by
the current user:

    ~/.changeset-ai/credentials.json
"""

import json
import os
import re
from abc import ABC, abstractmethod
from pathlib import Path

from loguru import logger

from changeset_ai.validators import GEMINI_KEY_PATTERN, ValidationError, is_valid_api_key_format


class CredentialStore(ABC):
    """get/store/delete over opaque secret strings."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        pass

    @abstractmethod
    def store(self, key: str, value: str) -> None:
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove key. Deleting a missing key is not an error."""
        pass


class MemoryCredentialStore(CredentialStore):
    """In-process store, for tests and embedding."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._secrets = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._secrets.get(key)

    def store(self, key: str, value: str) -> None:
        self._secrets[key] = value

    def delete(self, key: str) -> None:
        self._secrets.pop(key, None)


class FileCredentialStore(CredentialStore):
    """JSON file store created with 0600 permissions."""

    DEFAULT_DIR = ".changeset-ai"
    FILENAME = "credentials.json"

    def __init__(self, path: Path | None = None):
        self.path = path or Path.home() / self.DEFAULT_DIR / self.FILENAME

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Could not read credential store {}: {}", self.path, e.__class__.__name__)
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)} if isinstance(data, dict) else {}

    def _save(self, secrets: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True, mode=0o700)
        fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            json.dump(secrets, f, indent=2)
        os.chmod(self.path, 0o600)

    def get(self, key: str) -> str | None:
        return self._load().get(key)

    def store(self, key: str, value: str) -> None:
        secrets = self._load()
        secrets[key] = value
        self._save(secrets)

    def delete(self, key: str) -> None:
        secrets = self._load()
        if secrets.pop(key, None) is not None:
            self._save(secrets)


def store_api_key(store: CredentialStore, key: str, value, pattern: re.Pattern = GEMINI_KEY_PATTERN) -> None:
    """Validate the key's format, then store it trimmed."""
    if not is_valid_api_key_format(value, pattern):
        raise ValidationError("API key format is invalid. Check that you copied the whole key.")
    store.store(key, value.strip())
