# storefront/models/user.py
import uuid
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(SQLModel, table=True):
    """
    Persistent user account.

    Role:
      - "user" | "admin"

    Email is stored stripped and lower-cased; uniqueness is enforced by
    the index, so two signups differing only in case collide.

    password_hash is NULL for accounts created through the Google flow.
    """

    __tablename__ = "users"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    email: str = Field(
        unique=True,
        index=True,
        description="Normalized (lower-case) email",
    )

    password_hash: str | None = Field(
        default=None,
        description="bcrypt hash; never returned to clients",
    )

    # Application role
    role: str = Field(
        default="user",
        index=True,
        description="Application role: user | admin",
    )

    created_at: datetime = Field(
        default_factory=_utcnow,
        description="Creation timestamp (UTC)",
    )

    updated_at: datetime = Field(
        default_factory=_utcnow,
        description="Last modification timestamp (UTC)",
    )


class RefreshToken(SQLModel, table=True):
    """
    A currently valid refresh token for a user.

    A user may hold several at once (one per device / login).
    Logout deletes the row, which revokes the token.
    """

    __tablename__ = "refresh_tokens"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
    )

    user_id: uuid.UUID = Field(
        foreign_key="users.id",
        index=True,
    )

    token: str = Field(index=True)

    created_at: datetime = Field(default_factory=_utcnow)
