"""Shared fakes for the LLM client and the user prompter."""

import threading

import pytest

from changeset_ai.llm import LLMClient, LLMResponse
from changeset_ai.workflow import Prompter

VALID_KEY = "AIzaSyDummyKey0123456789abcdef"


class FakeClient(LLMClient):
    """Records calls; replies with a canned response or raises a canned error."""

    credential_key = "gemini_api_key"

    def __init__(self, reply: str = "", error: Exception | None = None, block: threading.Event | None = None):
        self.reply = reply
        self.error = error
        self.block = block
        self.calls = []

    @property
    def name(self) -> str:
        return "Fake"

    def generate(self, prompt: str, api_key: str) -> LLMResponse:
        self.calls.append((prompt, api_key))
        if self.block is not None:
            self.block.wait(5)
        if self.error is not None:
            raise self.error
        return LLMResponse(content=self.reply, model="fake")


class ScriptedPrompter(Prompter):
    """Answers prompts from preset values and records what was shown."""

    def __init__(self, packages=None, bumps=None, summary=None, confirm=True, api_key=None):
        self.packages = packages
        self.bumps = list(bumps or [])
        self.summary = summary
        self.confirm = confirm
        self.api_key = api_key
        self.asked = []
        self.notices = []
        self.progress_labels = []

    def select_packages(self, packages):
        self.asked.append("packages")
        if self.packages is None:
            return None
        return [p for p in packages if p.name in self.packages]

    def select_bump(self, package_name):
        self.asked.append(f"bump:{package_name}")
        return self.bumps.pop(0) if self.bumps else None

    def ask_summary(self, allow_empty=False):
        self.asked.append(f"summary:{allow_empty}")
        return self.summary

    def confirm_suggestion(self, suggestion):
        self.asked.append("confirm")
        self.suggestion = suggestion
        return self.confirm

    def ask_api_key(self, provider_name):
        self.asked.append("api_key")
        return self.api_key

    def notify(self, message):
        self.notices.append(message)

    def progress(self, label):
        self.progress_labels.append(label)
        return super().progress(label)


@pytest.fixture
def fake_client():
    return FakeClient


@pytest.fixture
def scripted_prompter():
    return ScriptedPrompter


@pytest.fixture
def api_key():
    return VALID_KEY
