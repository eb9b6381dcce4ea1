"""AI Suggestion Package"""

from changeset_ai.suggestion.cancel import CancellationToken
from changeset_ai.suggestion.engine import SuggestionEngine
from changeset_ai.suggestion.parser import (
    RejectReason,
    Suggestion,
    SuggestionRejected,
    parse_suggestion,
    strip_code_fences,
)

__all__ = [
    "CancellationToken",
    "SuggestionEngine",
    "RejectReason",
    "Suggestion",
    "SuggestionRejected",
    "parse_suggestion",
    "strip_code_fences",
]
