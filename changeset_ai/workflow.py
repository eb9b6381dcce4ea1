"""Changeset Workflow

Runs one changeset creation from start to finish:

    discover packages -> collect bumps and summary -> validate -> write

The three workflow kinds differ only in how bumps and summary are collected:

- manual: the user picks packages, a bump for each, and a summary
- ai:     the staged diff is sent to the model and the user accepts its suggestion
- empty:  no packages, the user may enter a summary (which can be empty)

User interaction goes through a Prompter so the same workflow runs in a
terminal, in tests, or behind any other front end.
"""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Iterator, Optional

from loguru import logger

from changeset_ai.changeset import write_changeset
from changeset_ai.config import Config
from changeset_ai.credentials import CredentialStore, store_api_key
from changeset_ai.discovery import Package, discover_packages
from changeset_ai.git import GitError, get_staged_diff
from changeset_ai.llm import LLMClient, LLMError, get_client
from changeset_ai.paths import PathError, confine
from changeset_ai.suggestion import CancellationToken, Suggestion, SuggestionEngine
from changeset_ai.validators import ValidationError, is_valid_bump_type, validate_summary


class WorkflowKind(str, Enum):
    MANUAL = "manual"
    AI = "ai"
    EMPTY = "empty"


class Status(str, Enum):
    CREATED = "created"
    CANCELLED = "cancelled"
    FAILED = "failed"


@dataclass
class WorkflowResult:
    status: Status
    message: str
    path: Optional[Path] = None

    @property
    def ok(self) -> bool:
        return self.status != Status.FAILED


class Prompter(ABC):
    """User interaction needed by the workflow. Returning None means the user cancelled."""

    @abstractmethod
    def select_packages(self, packages: list[Package]) -> Optional[list[Package]]:
        pass

    @abstractmethod
    def select_bump(self, package_name: str) -> Optional[str]:
        pass

    @abstractmethod
    def ask_summary(self, allow_empty: bool = False) -> Optional[str]:
        pass

    @abstractmethod
    def confirm_suggestion(self, suggestion: Suggestion) -> bool:
        pass

    @abstractmethod
    def ask_api_key(self, provider_name: str) -> Optional[str]:
        pass

    @abstractmethod
    def notify(self, message: str) -> None:
        pass

    @contextmanager
    def progress(self, label: str) -> Iterator[None]:
        """Shown while waiting on the model. No-op by default."""
        yield


class _Cancelled(Exception):
    """Internal signal: the user backed out at a prompt."""


def _cancelled() -> WorkflowResult:
    return WorkflowResult(Status.CANCELLED, "Changeset creation cancelled.")


class ChangesetWorkflow:
    """One workflow run per run() call. Holds no state between runs."""

    def __init__(
        self,
        root,
        prompter: Prompter,
        credentials: CredentialStore,
        config: Config | None = None,
        client_factory: Callable[[], LLMClient] | None = None,
    ):
        self.root = root
        self.prompter = prompter
        self.credentials = credentials
        self.config = config or Config()
        self.client_factory = client_factory or self._default_client

    def _default_client(self) -> LLMClient:
        return get_client(self.config.provider, self.config.model, self.config.request_timeout)

    def run(self, kind: WorkflowKind, cancel: CancellationToken | None = None) -> WorkflowResult:
        """Run the workflow. Never raises; every outcome is a WorkflowResult."""
        try:
            root = confine(self.root, self.root)
            packages = discover_packages(root, self.config.max_manifests)
            if not packages:
                return WorkflowResult(
                    Status.FAILED,
                    "No packages found. Make sure your project has package.json files.",
                )

            if kind == WorkflowKind.AI:
                suggestion = self._collect_ai(root, packages, cancel or CancellationToken())
                if suggestion is None:
                    return WorkflowResult(Status.CANCELLED, "No suggestion was made. Nothing was written.")
                path = write_changeset(root, suggestion.bumps, suggestion.summary)
            elif kind == WorkflowKind.EMPTY:
                summary = self._collect_empty()
                path = write_changeset(root, {}, summary, allow_empty=True)
            else:
                bumps, summary = self._collect_manual(packages)
                path = write_changeset(root, bumps, summary)

        except _Cancelled:
            return _cancelled()
        except (ValidationError, PathError, GitError) as e:
            return WorkflowResult(Status.FAILED, str(e))
        except LLMError as e:
            return WorkflowResult(Status.FAILED, f"Changesets AI Error: {e}")
        except Exception:
            logger.exception("Unexpected error during {} workflow", kind.value)
            return WorkflowResult(Status.FAILED, "An unexpected error occurred. Run with --verbose for details.")

        return WorkflowResult(Status.CREATED, "Changeset created successfully!", path)

    def _collect_manual(self, packages: list[Package]) -> tuple[dict[str, str], str]:
        if len(packages) == 1:
            selected = packages
        else:
            selected = self.prompter.select_packages(packages)
        if not selected:
            raise _Cancelled()

        bumps: dict[str, str] = {}
        for package in selected:
            bump = self.prompter.select_bump(package.name)
            if not bump:
                raise _Cancelled()
            if not is_valid_bump_type(bump):
                raise ValidationError(f"Invalid bump type for {package.name}: {bump!r}")
            bumps[package.name] = bump

        summary = self.prompter.ask_summary(allow_empty=False)
        if not summary:
            raise _Cancelled()
        return bumps, validate_summary(summary)

    def _collect_empty(self) -> str:
        summary = self.prompter.ask_summary(allow_empty=True)
        if summary is None:
            raise _Cancelled()
        return validate_summary(summary, allow_empty=True)

    def _collect_ai(self, root: Path, packages: list[Package], cancel: CancellationToken) -> Suggestion | None:
        client = self.client_factory()
        self._ensure_api_key(client)

        diff = get_staged_diff(
            root, root,
            timeout=self.config.diff_timeout,
            max_bytes=self.config.max_diff_bytes,
        )
        if not diff:
            raise GitError("No staged changes found. Please `git add` your changes first.")

        engine = SuggestionEngine(client, self.credentials)
        try:
            with self.prompter.progress(f"{client.name} is analyzing your changes..."):
                suggestion = engine.suggest(diff, [p.name for p in packages], cancel)
        except KeyboardInterrupt:
            cancel.cancel()
            return None

        if suggestion is None:
            return None
        if not self.prompter.confirm_suggestion(suggestion):
            raise _Cancelled()
        return suggestion

    def _ensure_api_key(self, client: LLMClient) -> None:
        if self.credentials.get(client.credential_key):
            return
        value = self.prompter.ask_api_key(client.name)
        if not value:
            raise LLMError("API Key is required for the AI feature.")
        store_api_key(self.credentials, client.credential_key, value, client.key_pattern)
        self.prompter.notify("API key stored securely.")
