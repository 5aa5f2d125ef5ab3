# storefront/core/security.py
"""
Password hashing and token issuance.

Access tokens:
  - claims: id, email, role
  - signed with JWT_SECRET, 15 minute lifetime

Refresh tokens:
  - claims: id (+ a random jti so tokens issued in the same second differ)
  - signed with JWT_REFRESH_SECRET, 7 day lifetime
  - tracked server-side per user so they can be revoked on logout
"""
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any

import bcrypt
from jose import jwt

from storefront.core.config import get_settings
from storefront.models.user import User

settings = get_settings()


# ----- Passwords -----


# bcrypt only reads the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(_password_bytes(password), salt).decode("utf-8")


def verify_password(password: str, password_hash: str | None) -> bool:
    """
    Compare a plain password against a stored bcrypt hash.

    Accounts created through the Google flow have no hash and never match.
    """
    if not password_hash:
        return False
    return bcrypt.checkpw(_password_bytes(password), password_hash.encode("utf-8"))


# ----- Tokens -----


def _expiry(delta: timedelta) -> datetime:
    return datetime.now(timezone.utc) + delta


def issue_access_token(user: User) -> str:
    """
    Create a short-lived access token for the user.

    Raises:
        RuntimeError: if JWT_SECRET is not configured.
    """
    if not settings.JWT_SECRET:
        raise RuntimeError("JWT_SECRET is not configured")

    claims = {
        "id": str(user.id),
        "email": user.email,
        "role": user.role,
        "exp": _expiry(timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)),
    }
    return jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALG)


def issue_refresh_token(user: User) -> str:
    """
    Create a long-lived refresh token for the user.

    Raises:
        RuntimeError: if JWT_REFRESH_SECRET is not configured.
    """
    if not settings.JWT_REFRESH_SECRET:
        raise RuntimeError("JWT_REFRESH_SECRET is not configured")

    claims = {
        "id": str(user.id),
        "jti": uuid.uuid4().hex,
        "exp": _expiry(timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS)),
    }
    return jwt.encode(claims, settings.JWT_REFRESH_SECRET, algorithm=settings.JWT_ALG)


def decode_access_token(token: str) -> dict[str, Any]:
    """Verify signature + expiry. Raises jose.JWTError on failure."""
    return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALG])


def decode_refresh_token(token: str) -> dict[str, Any]:
    """Verify signature + expiry. Raises jose.JWTError on failure."""
    return jwt.decode(token, settings.JWT_REFRESH_SECRET, algorithms=[settings.JWT_ALG])


def is_well_formed(token: Any) -> bool:
    """
    Shape check only: a non-empty string made of three dot-separated
    segments (header.payload.signature). Not a cryptographic verification.
    """
    if not token or not isinstance(token, str):
        return False
    return len(token.split(".")) == 3
