"""Password hashing (bcrypt) and the signed session token carried in the auth cookie."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import bcrypt
import jwt

from lms.core.config import settings
from lms.core.errors import InvalidTokenError

NAME_MIN_LEN = 2
NAME_MAX_LEN = 100
PASSWORD_MIN_LEN = 6
PASSWORD_MAX_LEN = 128

# bcrypt only looks at the first 72 bytes.
_BCRYPT_MAX_BYTES = 72
_REQUIRED_CLAIMS = ["sub", "role", "exp", "iat"]


@dataclass(frozen=True)
class TokenClaims:
    user_id: int
    role: str
    issued_at: datetime
    expires_at: datetime


def _password_bytes(plain_password: str) -> bytes:
    return plain_password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def hash_password(plain_password: str) -> str:
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(_password_bytes(plain_password), salt).decode("utf-8")


def verify_password(plain_password: str, hashed: str | None) -> bool:
    """False for a wrong password and for a missing or malformed stored hash."""
    if not hashed:
        return False
    try:
        return bcrypt.checkpw(_password_bytes(plain_password), hashed.encode("utf-8"))
    except ValueError:
        return False


def token_max_age_seconds() -> int:
    """Cookie max_age; matches the token's exp."""
    return settings.JWT_EXPIRE_MINUTES * 60


def create_access_token(user_id: int, role: str) -> str:
    now = datetime.now(UTC)
    return jwt.encode(
        {
            "sub": str(user_id),
            "role": role,
            "iat": now,
            "exp": now + timedelta(seconds=token_max_age_seconds()),
        },
        settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
    )


def read_access_token(token: str) -> TokenClaims:
    """
    Verify signature and expiry and return the claims.

    Any failure (bad signature, expired, missing claim, non-numeric subject)
    raises InvalidTokenError; the reason is not exposed to the client.
    """
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET.get_secret_value(),
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": _REQUIRED_CLAIMS},
        )
        user_id = int(payload["sub"])
    except jwt.ExpiredSignatureError as e:
        raise InvalidTokenError("Token has expired") from e
    except (jwt.PyJWTError, ValueError) as e:
        raise InvalidTokenError("Invalid token") from e
    return TokenClaims(
        user_id=user_id,
        role=str(payload["role"]),
        issued_at=datetime.fromtimestamp(payload["iat"], UTC),
        expires_at=datetime.fromtimestamp(payload["exp"], UTC),
    )
