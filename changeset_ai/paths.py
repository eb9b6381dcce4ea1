"""Path Guard - Keep every filesystem path inside the workspace root."""

import os
from pathlib import Path


class PathError(ValueError):
    """Raised when a path is malformed or escapes its confinement root."""
    pass


def _as_text(value, label: str) -> str:
    if value is None:
        raise PathError(f"{label} is required")
    if isinstance(value, os.PathLike):
        value = os.fspath(value)
    if not isinstance(value, str):
        raise PathError(f"{label} must be a path, got {type(value).__name__}")
    if not value.strip():
        raise PathError(f"{label} must not be empty")
    if '\x00' in value:
        raise PathError(f"{label} contains a null byte")
    return value


def confine(candidate, base) -> Path:
    """Resolve candidate relative to base and return it if it stays inside base.

    Relative candidates are joined onto base; '.' and '..' segments and
    symlinks are resolved before the check. The result is either base itself
    or one of its descendants, otherwise PathError is raised.
    """
    base_path = Path(_as_text(base, "Base path")).resolve()
    candidate_path = Path(_as_text(candidate, "Path"))

    if not candidate_path.is_absolute():
        candidate_path = base_path / candidate_path
    resolved = candidate_path.resolve()

    # Component-wise check: /work must not admit /workspace
    if resolved != base_path and base_path not in resolved.parents:
        raise PathError(f"Path escapes workspace: {candidate}")
    return resolved
