"""Input Validators - Checks for anything that ends up inside a changeset file."""

import re

from changeset_ai import BUMP_TYPES

MAX_PACKAGE_NAME_LENGTH = 214
MAX_SUMMARY_LENGTH = 1000

# Optional @scope/ segment, then a name that cannot start with '.', '-' or '_'
PACKAGE_NAME_PATTERN = re.compile(
    r'^(?:@[A-Za-z0-9][A-Za-z0-9._-]*/)?[A-Za-z0-9][A-Za-z0-9._-]*$'
)

# Format checks only; a key can still be revoked or wrong
GEMINI_KEY_PATTERN = re.compile(r'^[A-Za-z0-9]{20,100}$')
CLAUDE_KEY_PATTERN = re.compile(r'^sk-ant-[A-Za-z0-9_-]{20,200}$')

_ESCAPES = {
    '\\': '\\\\',
    '"': '\\"',
    '\n': '\\n',
    '\r': '\\r',
}


class ValidationError(ValueError):
    """Raised when user or AI supplied input fails validation."""
    pass


def is_valid_package_name(name) -> bool:
    if not isinstance(name, str) or not name:
        return False
    if len(name) > MAX_PACKAGE_NAME_LENGTH:
        return False
    return PACKAGE_NAME_PATTERN.match(name) is not None


def is_valid_bump_type(bump) -> bool:
    return isinstance(bump, str) and bump in BUMP_TYPES


def is_valid_api_key_format(key, pattern: re.Pattern = GEMINI_KEY_PATTERN) -> bool:
    if not isinstance(key, str):
        return False
    return pattern.match(key.strip()) is not None


def escape_for_embedding(text: str) -> str:
    """Escape text so it stays on one line and cannot close a quoted value."""
    return ''.join(_ESCAPES.get(ch, ch) for ch in text)


def validate_summary(summary, allow_empty: bool = False) -> str:
    """Return the summary unchanged or raise ValidationError."""
    if not isinstance(summary, str):
        raise ValidationError("Summary must be text")
    if len(summary) > MAX_SUMMARY_LENGTH:
        raise ValidationError(
            f"Summary is too long ({len(summary)} characters, max {MAX_SUMMARY_LENGTH})"
        )
    if not allow_empty and not summary.strip():
        raise ValidationError("Summary must not be empty")
    return summary


def validate_bumps(bumps, allow_empty: bool = False) -> dict[str, str]:
    """Check every (package, bump) pair. Returns a copy in the same order."""
    if not isinstance(bumps, dict):
        raise ValidationError("Bumps must be a mapping of package name to bump type")
    if not bumps and not allow_empty:
        raise ValidationError("No packages selected")

    for name, bump in bumps.items():
        if not is_valid_package_name(name):
            raise ValidationError(f"Invalid package name: {name!r}")
        if not is_valid_bump_type(bump):
            raise ValidationError(f"Invalid bump type for {name}: {bump!r}")
    return dict(bumps)
