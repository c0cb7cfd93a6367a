"""Identifier and slot primitives.

Identifiers are plain strings. The empty string is the null reference and
strings starting with ``#`` are reserved sentinels that never name an entity.
"""

from __future__ import annotations

Identifier = str
SlotId = int

# Maximum supported identifier length. Advisory only, the Model does not check it.
IDENT_LENGTH = 15

ID_NULL: Identifier = ""
ID_INVALID: Identifier = "#invalid"

SLOT_INVALID: SlotId = 255


def is_id(value: str) -> bool:
    """Return True if value is a valid, non-null identifier."""
    return bool(value) and value[0] != "#"


def is_id_or_null(value: str) -> bool:
    """Return True if value is a valid identifier or ID_NULL."""
    return value == ID_NULL or is_id(value)


def format_id(value: str) -> str:
    """Render an identifier for human-readable output."""
    if value == ID_NULL:
        return "#null"
    return value
