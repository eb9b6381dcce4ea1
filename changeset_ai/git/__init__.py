"""Git Operations Package"""

from changeset_ai.git.diff_source import (
    CommandResult,
    DiffTooLargeError,
    GitError,
    get_staged_diff,
    run_command,
)

__all__ = [
    "CommandResult",
    "DiffTooLargeError",
    "GitError",
    "get_staged_diff",
    "run_command",
]
