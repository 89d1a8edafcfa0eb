"""Auth Service — login, current-user lookup and user provisioning.

Invariants:
    - Unknown username and wrong password fail identically (UnauthorizedError)
    - A credential expires credential_ttl after issuance
    - Password hashes never leave this service
"""

import logging
from datetime import timedelta
from uuid import UUID

from crm.core.credentials import (
    hash_password, issue_credential, verify_credential, verify_password,
)
from crm.core.errors import DuplicateNameError, UnauthorizedError
from crm.core.repository_protocols import UserRepository
from crm.schemas.auth import LoginRequest
from crm.schemas.normalize import validate_record

logger = logging.getLogger(__name__)


def _public(user: dict) -> dict:
    return {"id": user["id"], "username": user["username"]}


class AuthService:
    """Issues and checks login credentials."""

    def __init__(
        self,
        users: UserRepository,
        secret: str,
        algorithm: str = "HS256",
        credential_ttl: timedelta = timedelta(days=1),
    ):
        self.users = users
        self.secret = secret
        self.algorithm = algorithm
        self.credential_ttl = credential_ttl

    async def login(self, payload) -> dict:
        request = validate_record(LoginRequest, payload)
        user = await self.users.get_by_username(request.username)
        if user is None or not verify_password(user["password_hash"], request.password):
            logger.warning("Login rejected", extra={"resource": "user"})
            raise UnauthorizedError()

        credential = issue_credential(
            user["id"], user["username"], self.secret,
            algorithm=self.algorithm, ttl=self.credential_ttl,
        )
        logger.info(
            "Login succeeded",
            extra={"resource": "user", "resource_id": str(user["id"])},
        )
        return {"token": credential.token, "user": _public(user)}

    async def current_user(self, token: str) -> dict:
        """Resolve a bearer token to the user it was issued for."""
        claims = verify_credential(token, self.secret, self.algorithm)
        try:
            user_id = UUID(str(claims.get("userId")))
        except ValueError:
            raise UnauthorizedError("Invalid token")
        user = await self.users.get_by_id(user_id)
        if user is None:
            raise UnauthorizedError("Invalid token")
        return _public(user)

    async def create_user(self, username: str, password: str) -> dict:
        username = username.strip()
        if not username:
            raise ValueError("Username must be a non-empty string.")
        if await self.users.get_by_username(username) is not None:
            raise DuplicateNameError("User with this username already exists")
        user = await self.users.insert({
            "username": username,
            "password_hash": hash_password(password),
        })
        logger.info(
            "User created",
            extra={"resource": "user", "resource_id": str(user["id"])},
        )
        return _public(user)
