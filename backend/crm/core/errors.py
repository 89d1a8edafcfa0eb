"""Error Hierarchy — typed exceptions for every CRM failure mode.

Invariants:
    - Every error has a code (str) and an http_status
    - to_response() produces the wire envelope {error, details?, errors?}
    - 400-level errors describe the caller's input; 500-level errors never
      carry driver messages into `details`

Design Decisions:
    - Single hierarchy with CrmError base: the global handler catches all
    - Field violations carry a kind (MissingField / FormatInvalid) so callers can
      branch on it; the envelope only exposes {param, msg, value}
"""

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any


class ViolationKind(str, Enum):
    MISSING_FIELD = "MissingField"
    FORMAT_INVALID = "FormatInvalid"


@dataclass(frozen=True)
class FieldViolation:
    """One rejected field of an input record."""
    kind: ViolationKind
    param: str
    msg: str
    value: Any = None

    def to_dict(self) -> dict:
        data = asdict(self)
        data.pop("kind")
        return data


class CrmError(Exception):
    """Base exception for all CRM errors."""

    def __init__(
        self,
        message: str,
        code: str,
        http_status: int = 500,
        details: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.http_status = http_status
        self.details = details

    def to_response(self) -> dict:
        """Convert to the REST failure envelope."""
        body: dict[str, Any] = {"error": self.message}
        if self.details:
            body["details"] = self.details
        return body


# ─── Input Errors (400) ──────────────────────────────────────────

class RecordValidationError(CrmError):
    """Input record rejected; lists every violation, not just the first."""

    def __init__(self, violations: list[FieldViolation]):
        super().__init__("Validation failed", "VALIDATION_ERROR", 400)
        self.violations = violations

    @property
    def missing_fields(self) -> list[str]:
        return [
            v.param for v in self.violations
            if v.kind is ViolationKind.MISSING_FIELD
        ]

    def to_response(self) -> dict:
        body = super().to_response()
        body["errors"] = [v.to_dict() for v in self.violations]
        return body


class InvalidIdentifierError(CrmError):
    """Identifier is not syntactically valid; raised before any storage access."""

    def __init__(self, resource_type: str, raw_id: Any):
        super().__init__(
            f"Invalid {resource_type} ID format", "INVALID_IDENTIFIER", 400,
        )
        self.resource_type = resource_type
        self.raw_id = raw_id


class ReferenceNotFoundError(CrmError):
    """A referenced entity does not exist."""

    def __init__(self, resource_type: str, resource_id: Any):
        super().__init__(
            f"{resource_type} not found", "REFERENCE_NOT_FOUND", 400,
            details=f"No {resource_type.lower()} with id '{resource_id}'",
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class DuplicateNameError(CrmError):
    """Name conflicts with an existing entity (checked before writing)."""

    def __init__(self, message: str):
        super().__init__(message, "DUPLICATE_NAME", 400)


class DuplicateKeyError(CrmError):
    """Storage-level unique constraint rejected the write."""

    def __init__(self, resource_type: str = "Record"):
        super().__init__(
            f"{resource_type} already exists", "DUPLICATE_KEY", 400,
        )


class ConstraintViolationError(CrmError):
    """Storage rejected the write for breaking a reference or required column."""

    def __init__(self, resource_type: str = "Record"):
        super().__init__(
            f"{resource_type} conflicts with related records",
            "CONSTRAINT_VIOLATION", 400,
        )


class HasDependentsError(CrmError):
    """Entity still referenced elsewhere; deletion refused."""

    def __init__(self, message: str, dependents: int):
        super().__init__(message, "HAS_DEPENDENTS", 400)
        self.dependents = dependents


class UnauthorizedError(CrmError):
    """Missing, invalid or expired credential, or bad login."""

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message, "UNAUTHORIZED", 401)


class ResourceNotFoundError(CrmError):
    """Requested resource does not exist."""

    def __init__(self, resource_type: str, resource_id: Any):
        super().__init__(f"{resource_type} not found", "RESOURCE_NOT_FOUND", 404)
        self.resource_type = resource_type
        self.resource_id = resource_id


# ─── Infrastructure Errors (500) ─────────────────────────────────

class StorageError(CrmError):
    """Database operation failed."""

    def __init__(self, operation: str):
        super().__init__(
            f"Database {operation} failed", "STORAGE_ERROR", 500,
        )
        self.operation = operation
