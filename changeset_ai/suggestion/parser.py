"""Suggestion Parser - Turn a model reply into a validated Suggestion."""

import json
import re
from dataclasses import dataclass, field
from enum import Enum

from changeset_ai.llm.base import LLMError
from changeset_ai.validators import MAX_SUMMARY_LENGTH, is_valid_bump_type, is_valid_package_name

# Greedy body: backticks inside the JSON must not end the block
WRAPPING_FENCE = re.compile(r'^```[A-Za-z]*[ \t]*\n(.*)\n?[ \t]*```$', re.DOTALL)


class RejectReason(Enum):
    """Why a model reply was rejected."""
    EMPTY_REPLY = "empty reply"
    INVALID_JSON = "invalid structured reply"
    INVALID_SHAPE = "reply is not an object of the expected shape"
    MISSING_KEYS = "reply is missing 'bumps' or 'summary'"
    INVALID_PACKAGE = "invalid package name"
    INVALID_BUMP = "invalid bump type"
    SUMMARY_TOO_LONG = "summary too long"


class SuggestionRejected(LLMError):
    """Raised when a model reply fails validation. Nothing from it is used."""

    def __init__(self, reason: RejectReason, detail: str = ""):
        message = f"AI suggestion rejected: {reason.value}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)
        self.reason = reason


@dataclass(frozen=True)
class Suggestion:
    """A validated package -> bump mapping plus changelog summary."""
    bumps: dict[str, str] = field(default_factory=dict)
    summary: str = ""


def strip_code_fences(text: str) -> str:
    """Return the JSON payload from a reply that may wrap it in ``` fences.

    A reply that is exactly one fenced block loses its opening and closing
    fence lines. Anything else is cut to the outermost braces, which drops
    chatter around the object along with any fences in it.
    """
    text = text.strip()
    match = WRAPPING_FENCE.match(text)
    if match:
        return match.group(1).strip()

    start, end = text.find('{'), text.rfind('}')
    if start != -1 and end > start:
        return text[start:end + 1]
    return text


def parse_suggestion(text: str) -> Suggestion:
    """Parse then validate, in order: keys, package names, bump types, summary length."""
    if not text or not text.strip():
        raise SuggestionRejected(RejectReason.EMPTY_REPLY)

    try:
        data = json.loads(strip_code_fences(text))
    except json.JSONDecodeError as e:
        raise SuggestionRejected(RejectReason.INVALID_JSON, e.msg)

    if not isinstance(data, dict):
        raise SuggestionRejected(RejectReason.INVALID_SHAPE)
    if 'bumps' not in data or 'summary' not in data:
        raise SuggestionRejected(RejectReason.MISSING_KEYS)

    bumps, summary = data['bumps'], data['summary']
    if not isinstance(bumps, dict) or not isinstance(summary, str):
        raise SuggestionRejected(RejectReason.INVALID_SHAPE)

    for name in bumps:
        if not is_valid_package_name(name):
            raise SuggestionRejected(RejectReason.INVALID_PACKAGE, repr(name[:80]))
    for name, bump in bumps.items():
        if not is_valid_bump_type(bump):
            raise SuggestionRejected(RejectReason.INVALID_BUMP, f"{name}: {str(bump)[:20]!r}")

    if len(summary) > MAX_SUMMARY_LENGTH:
        raise SuggestionRejected(
            RejectReason.SUMMARY_TOO_LONG, f"{len(summary)} > {MAX_SUMMARY_LENGTH} characters"
        )

    return Suggestion(bumps=dict(bumps), summary=summary)
