"""Normalization Primitives — reusable field coercions for the input schemas.

Invariants:
    - Strings are trimmed; blank after trim is treated as absent
    - Required fields that are absent or blank fail with error type "missing"
    - fees and enumerated fields never fail: bad input falls back to the default
    - validate_record() reports EVERY violation of a payload, not just the first,
      as a RecordValidationError (core/errors.py)

Design Decisions:
    - Coercions live in BeforeValidators so pydantic collects all field errors in one
      pass; model_validator(mode="after") would be skipped once any field fails
    - Custom error types (phone_format, reference_format, ...) carry the exact
      user-facing message; pydantic's built-in types keep pydantic's wording
"""

import math
import re
from datetime import date, datetime, timezone
from enum import Enum
from typing import Annotated, Any, Callable, TypeVar
from uuid import UUID

from pydantic import AfterValidator, BaseModel, BeforeValidator, ValidationError
from pydantic_core import PydanticCustomError

from crm.core.domain_types import EMAIL_PATTERN, ENUM_DEFAULTS, PHONE_PATTERN
from crm.core.errors import FieldViolation, RecordValidationError, ViolationKind

ModelT = TypeVar("ModelT", bound=BaseModel)

_PHONE_RE = re.compile(PHONE_PATTERN)
_EMAIL_RE = re.compile(EMAIL_PATTERN)


# --- Strings ------------------------------------------------------------------

def clean_text(value: Any) -> Any:
    """Trim strings; blank becomes None. Numbers are accepted as their text."""
    if value is None:
        return None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        value = str(value)
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


def require_text(value: Any) -> Any:
    value = clean_text(value)
    if value is None:
        raise PydanticCustomError("missing", "Field required")
    return value


def blank_to_empty(value: Any) -> Any:
    """Optional text stored as "" rather than NULL (category url, description)."""
    value = clean_text(value)
    return "" if value is None else value


def check_phone(value: str | None) -> str | None:
    if value is not None and not _PHONE_RE.match(value):
        raise PydanticCustomError(
            "phone_format", "Please enter a valid 10-digit phone number",
        )
    return value


def check_email(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.lower()
    if not _EMAIL_RE.match(value):
        raise PydanticCustomError(
            "email_format", "Please enter a valid email address",
        )
    return value


OptionalText = Annotated[str | None, BeforeValidator(clean_text)]
RequiredText = Annotated[str, BeforeValidator(require_text)]
DefaultedText = Annotated[str, BeforeValidator(blank_to_empty)]
RequiredPhone = Annotated[str, BeforeValidator(require_text), AfterValidator(check_phone)]
OptionalPhone = Annotated[str | None, BeforeValidator(clean_text), AfterValidator(check_phone)]
OptionalEmail = Annotated[str | None, BeforeValidator(clean_text), AfterValidator(check_email)]


# --- References ---------------------------------------------------------------

def _parse_reference(value: Any, label: str, required: bool) -> UUID | None:
    if isinstance(value, UUID):
        return value
    value = clean_text(value)
    if value is None:
        if required:
            raise PydanticCustomError("missing", "Field required")
        return None
    try:
        return UUID(str(value))
    except ValueError:
        raise PydanticCustomError(
            "reference_format", "Invalid {label} ID format", {"label": label},
        )


def reference(label: str, required: bool = True) -> BeforeValidator:
    return BeforeValidator(lambda v: _parse_reference(v, label, required))


# --- Numbers ------------------------------------------------------------------

def coerce_fees(value: Any) -> float:
    """Coerce to a non-negative number; anything else silently becomes 0."""
    if isinstance(value, bool) or value is None:
        return 0.0
    try:
        number = float(value.strip() if isinstance(value, str) else value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number) or math.isinf(number) or number < 0:
        return 0.0
    return number


Fees = Annotated[float, BeforeValidator(coerce_fees)]


# --- Enumerations -------------------------------------------------------------

EnumT = TypeVar("EnumT", bound=Enum)


def enum_or_default(enum_cls: type[EnumT]) -> Callable[[Any], EnumT]:
    """Validator returning the matching member, or the enum's default otherwise."""
    default = ENUM_DEFAULTS[enum_cls]
    by_value = {member.value: member for member in enum_cls}

    def _coerce(value: Any) -> EnumT:
        if isinstance(value, enum_cls):
            return value
        if isinstance(value, str):
            return by_value.get(value.strip(), default)
        return default

    return _coerce


# --- Dates --------------------------------------------------------------------

def parse_datetime(value: Any) -> datetime | None:
    """ISO-8601 date or datetime; naive values are taken as UTC."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    else:
        value = clean_text(value)
        if value is None:
            return None
        if not isinstance(value, str):
            raise PydanticCustomError("date_format", "Invalid date")
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            raise PydanticCustomError("date_format", "Invalid date")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def not_in_future(value: datetime | None) -> datetime | None:
    if value is not None and value > datetime.now(timezone.utc):
        raise PydanticCustomError(
            "date_in_future", "Date of birth cannot be in the future",
        )
    return value


OptionalDate = Annotated[datetime | None, BeforeValidator(parse_datetime)]
BirthDate = Annotated[
    datetime | None, BeforeValidator(parse_datetime), AfterValidator(not_in_future),
]


# --- Pipeline entry point -----------------------------------------------------

def _param(loc: tuple) -> str:
    return ".".join(str(part) for part in loc) or "body"


def violations_from(exc: ValidationError) -> list[FieldViolation]:
    """Convert pydantic errors to FieldViolations (one per failing field)."""
    violations = []
    for error in exc.errors():
        param = _param(error["loc"])
        if error["type"] == "missing":
            violations.append(FieldViolation(
                ViolationKind.MISSING_FIELD, param, f"{param} is required",
            ))
        else:
            violations.append(FieldViolation(
                ViolationKind.FORMAT_INVALID, param, error["msg"],
                error.get("input"),
            ))
    return violations


def validate_record(model_cls: type[ModelT], raw: Any) -> ModelT:
    """Run a raw payload through an input schema or raise RecordValidationError."""
    if not isinstance(raw, dict):
        raise RecordValidationError([FieldViolation(
            ViolationKind.FORMAT_INVALID, "body",
            "Request body must be a JSON object", None,
        )])
    try:
        return model_cls.model_validate(raw)
    except ValidationError as exc:
        raise RecordValidationError(violations_from(exc))
