"""Changeset Writer - Validate and write a changeset file under the workspace root."""

import secrets
from pathlib import Path

from loguru import logger

from changeset_ai import CHANGESET_DIR
from changeset_ai.changeset.serializer import serialize_changeset
from changeset_ai.paths import confine
from changeset_ai.validators import validate_bumps, validate_summary

FILE_PREFIX = "changeset-"
FILE_SUFFIX = ".md"
RANDOM_ID_BYTES = 8


def new_changeset_name() -> str:
    return f"{FILE_PREFIX}{secrets.token_hex(RANDOM_ID_BYTES)}{FILE_SUFFIX}"


def write_changeset(root, bumps: dict[str, str], summary: str, allow_empty: bool = False) -> Path:
    """Write a new changeset file and return its path.

    Bumps and summary are validated again here, whatever the caller already
    checked. allow_empty permits an empty bump map and empty summary.
    """
    root_path = confine(root, root)
    changeset_dir = confine(CHANGESET_DIR, root_path)

    bumps = validate_bumps(bumps, allow_empty=allow_empty)
    summary = validate_summary(summary, allow_empty=allow_empty)
    content = serialize_changeset(bumps, summary)

    changeset_dir.mkdir(parents=True, exist_ok=True)
    file_path = confine(new_changeset_name(), changeset_dir)

    # 'x' refuses to overwrite on the off chance of a name collision
    with open(file_path, 'x', encoding='utf-8', newline='\n') as f:
        f.write(content)

    logger.debug("Wrote {} ({} packages)", file_path, len(bumps))
    return file_path
