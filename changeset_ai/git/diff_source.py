"""Diff Source - Read the staged diff from git with time and size bounds."""

import subprocess
import threading
from dataclasses import dataclass
from pathlib import Path

from loguru import logger

from changeset_ai.paths import confine

STAGED_DIFF_COMMAND = ('git', 'diff', '--staged')
DEFAULT_TIMEOUT = 30
DEFAULT_MAX_BYTES = 10 * 1024 * 1024
MAX_STDERR_BYTES = 64 * 1024
_CHUNK_SIZE = 64 * 1024


class GitError(Exception):
    """Raised when git operations fail."""
    pass


class DiffTooLargeError(GitError):
    """Raised when the staged diff exceeds the output ceiling."""
    pass


@dataclass
class CommandResult:
    """Exit status and captured output of a bounded command run."""
    returncode: int
    stdout: str
    stderr: str


def run_command(args, cwd: Path, timeout: float, max_bytes: int) -> CommandResult:
    """Run a fixed argv (never through a shell) with a timeout and stdout cap.

    The process is killed as soon as stdout grows past max_bytes, so a huge
    diff is never buffered in full.
    """
    try:
        proc = subprocess.Popen(
            list(args),
            cwd=str(cwd),
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
        )
    except FileNotFoundError:
        raise GitError("Git is not installed or not in PATH")
    except OSError as e:
        raise GitError(f"Failed to run {args[0]}: {e}")

    stdout_chunks: list[bytes] = []
    stderr_chunks: list[bytes] = []
    overflow = threading.Event()

    def _drain_stdout():
        size = 0
        for chunk in iter(lambda: proc.stdout.read(_CHUNK_SIZE), b''):
            size += len(chunk)
            if size > max_bytes:
                overflow.set()
                proc.kill()
                break
            stdout_chunks.append(chunk)

    def _drain_stderr():
        size = 0
        for chunk in iter(lambda: proc.stderr.read(_CHUNK_SIZE), b''):
            if size < MAX_STDERR_BYTES:
                stderr_chunks.append(chunk)
            size += len(chunk)

    readers = [
        threading.Thread(target=_drain_stdout, daemon=True),
        threading.Thread(target=_drain_stderr, daemon=True),
    ]
    for reader in readers:
        reader.start()

    try:
        returncode = proc.wait(timeout=timeout)
    except subprocess.TimeoutExpired:
        proc.kill()
        proc.wait()
        raise GitError(f"{' '.join(args)} timed out after {timeout}s")
    finally:
        for reader in readers:
            reader.join()
        proc.stdout.close()
        proc.stderr.close()

    if overflow.is_set():
        raise DiffTooLargeError(
            f"Staged diff is larger than {max_bytes // (1024 * 1024)}MB. "
            "Split your changes into smaller commits."
        )

    return CommandResult(
        returncode=returncode,
        stdout=b''.join(stdout_chunks).decode('utf-8', errors='replace'),
        stderr=b''.join(stderr_chunks).decode('utf-8', errors='replace'),
    )


def get_staged_diff(
    work_dir,
    root,
    timeout: float = DEFAULT_TIMEOUT,
    max_bytes: int = DEFAULT_MAX_BYTES,
) -> str | None:
    """Return the staged diff for work_dir, or None when nothing is staged."""
    cwd = confine(work_dir, root)
    logger.debug("Running {} in {}", ' '.join(STAGED_DIFF_COMMAND), cwd)
    result = run_command(STAGED_DIFF_COMMAND, cwd, timeout, max_bytes)

    if result.returncode != 0:
        if not result.stdout:
            logger.debug("git stderr: {}", result.stderr.strip())
            message = result.stderr.strip().splitlines()[0] if result.stderr.strip() else "unknown error"
            raise GitError(f"git diff --staged failed: {message}")
        # Warnings with a usable diff are fine
        logger.debug("git exited with {} but produced output; using it", result.returncode)

    logger.debug("Staged diff is {} characters", len(result.stdout))
    if not result.stdout.strip():
        return None
    return result.stdout
