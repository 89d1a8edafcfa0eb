"""Auth Schemas — login payload and credential response.

Invariants:
    - username is trimmed; password is taken verbatim (whitespace is significant)
    - Both are required and non-empty; absence reports a MissingField violation
"""

from typing import Annotated, Any
from uuid import UUID

from pydantic import BaseModel, BeforeValidator
from pydantic_core import PydanticCustomError

from crm.schemas.normalize import RequiredText


def _require_secret(value: Any) -> Any:
    if value is None or value == "":
        raise PydanticCustomError("missing", "Field required")
    return value


Secret = Annotated[str, BeforeValidator(_require_secret)]


class LoginRequest(BaseModel):
    username: RequiredText
    password: Secret


class UserOut(BaseModel):
    id: UUID
    username: str


class LoginResponse(BaseModel):
    token: str
    user: UserOut
