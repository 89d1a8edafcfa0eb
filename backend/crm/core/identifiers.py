"""Identifier Parsing — syntactic validation of entity ids.

Invariants:
    - PURE: no IO; a malformed id fails here, before any repository is touched
    - Accepts UUID instances unchanged and any string uuid.UUID() accepts
"""

from typing import Any
from uuid import UUID

from crm.core.errors import InvalidIdentifierError


def is_valid_identifier(raw: Any) -> bool:
    if isinstance(raw, UUID):
        return True
    if not isinstance(raw, str) or not raw.strip():
        return False
    try:
        UUID(raw.strip())
    except ValueError:
        return False
    return True


def parse_identifier(raw: Any, resource_type: str) -> UUID:
    """Return the UUID for `raw` or raise InvalidIdentifierError."""
    if isinstance(raw, UUID):
        return raw
    if not is_valid_identifier(raw):
        raise InvalidIdentifierError(resource_type, raw)
    return UUID(raw.strip())
