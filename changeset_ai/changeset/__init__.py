"""Changeset File Package"""

from changeset_ai.changeset.serializer import DELIMITER, serialize_changeset
from changeset_ai.changeset.writer import new_changeset_name, write_changeset

__all__ = [
    "DELIMITER",
    "serialize_changeset",
    "new_changeset_name",
    "write_changeset",
]
