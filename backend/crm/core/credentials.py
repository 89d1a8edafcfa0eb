"""Credentials — password hashing and signed, time-bound login tokens.

Invariants:
    - Passwords are stored only as one-way salted hashes (werkzeug scrypt)
    - A credential carries {userId, username, iat, exp}; exp = iat + ttl
    - verify_credential checks signature and expiry only — no session lookup

Design Decisions:
    - Stateless JWT (HS256): no refresh tokens, no revocation list
    - `now` injectable so expiry arithmetic is testable without freezing time
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt
from jose.exceptions import ExpiredSignatureError
from werkzeug.security import check_password_hash, generate_password_hash

from crm.core.errors import UnauthorizedError


@dataclass(frozen=True)
class IssuedCredential:
    token: str
    issued_at: datetime
    expires_at: datetime


def hash_password(plain_password: str) -> str:
    if not isinstance(plain_password, str) or not plain_password.strip():
        raise ValueError("Password must be a non-empty string.")
    return generate_password_hash(plain_password, method="scrypt")


def verify_password(password_hash: str | None, plain_password: str | None) -> bool:
    if not password_hash or not plain_password:
        return False
    return check_password_hash(password_hash, plain_password)


def issue_credential(
    user_id: str,
    username: str,
    secret: str,
    algorithm: str = "HS256",
    ttl: timedelta = timedelta(days=1),
    now: datetime | None = None,
) -> IssuedCredential:
    """Sign a credential bound to the user's id and username."""
    issued_at = (now or datetime.now(timezone.utc)).replace(microsecond=0)
    expires_at = issued_at + ttl
    claims = {
        "userId": str(user_id),
        "username": username,
        "iat": int(issued_at.timestamp()),
        "exp": int(expires_at.timestamp()),
    }
    token = jwt.encode(claims, secret, algorithm=algorithm)
    return IssuedCredential(token=token, issued_at=issued_at, expires_at=expires_at)


def verify_credential(token: str, secret: str, algorithm: str = "HS256") -> dict:
    """Return the claims of a valid credential or raise UnauthorizedError."""
    try:
        return jwt.decode(token, secret, algorithms=[algorithm])
    except ExpiredSignatureError:
        raise UnauthorizedError("Token has expired")
    except JWTError:
        raise UnauthorizedError("Invalid token")
