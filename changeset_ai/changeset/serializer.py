"""Changeset Serializer - Render bumps and summary into the changeset file format.

    ---
    "<package-name>": <major|minor|patch>
    ---

    <summary>
"""

from changeset_ai.validators import escape_for_embedding

DELIMITER = "---"


def serialize_changeset(bumps: dict[str, str], summary: str) -> str:
    """Pure rendering step. Callers validate bumps and summary first."""
    lines = [DELIMITER]
    for name, bump in bumps.items():
        lines.append(f'"{escape_for_embedding(name)}": {escape_for_embedding(bump)}')
    lines.append(DELIMITER)
    lines.append("")
    lines.append(escape_for_embedding(summary))
    return "\n".join(lines) + "\n"
