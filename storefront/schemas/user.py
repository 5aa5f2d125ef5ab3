# storefront/schemas/user.py
import uuid
from typing import Literal

from pydantic import EmailStr, ConfigDict, field_validator
from sqlmodel import SQLModel, Field

# Roles stored on a user account.
Role = Literal["user", "admin"]


def normalize_email(v: str) -> str:
    """Emails are compared and stored stripped + lower-cased."""
    return v.strip().lower()


class Credentials(SQLModel):
    """
    Payload for signup and login.

    Validation rules:
      - email must be a valid EmailStr, normalized to lower case
      - password cannot be empty; any length is accepted (hashing reads
        the first 72 bytes)
    """

    email: EmailStr
    password: str = Field(min_length=1)

    @field_validator("email", mode="before")
    @classmethod
    def normalize(cls, v):
        if isinstance(v, str):
            return normalize_email(v)
        return v


class GoogleAuthRequest(SQLModel):
    """
    Payload for the Google flows.

    The email is trusted as already verified by the identity provider.
    """

    email: EmailStr

    @field_validator("email", mode="before")
    @classmethod
    def normalize(cls, v):
        if isinstance(v, str):
            return normalize_email(v)
        return v


class RefreshTokenRequest(SQLModel):
    """
    Payload for /token and /logout.

    Optional at the schema level: a missing token maps to 401 on /token
    and 400 on /logout, so the service checks it.
    """

    model_config = ConfigDict(populate_by_name=True)

    refresh_token: str | None = Field(default=None, alias="refreshToken")


class ChangePasswordRequest(SQLModel):
    model_config = ConfigDict(populate_by_name=True)

    email: EmailStr
    old_password: str = Field(min_length=1, alias="oldPassword")
    new_password: str = Field(min_length=1, alias="newPassword")

    @field_validator("email", mode="before")
    @classmethod
    def normalize(cls, v):
        if isinstance(v, str):
            return normalize_email(v)
        return v


class UpdateEmailRequest(SQLModel):
    model_config = ConfigDict(populate_by_name=True)

    old_email: EmailStr = Field(alias="oldEmail")
    new_email: EmailStr = Field(alias="newEmail")

    @field_validator("old_email", "new_email", mode="before")
    @classmethod
    def normalize(cls, v):
        if isinstance(v, str):
            return normalize_email(v)
        return v


class UserPublic(SQLModel):
    """Public user fields returned to clients (never the hash)."""

    id: uuid.UUID
    email: str
    role: Role


class AuthResponse(SQLModel):
    """Tokens issued on signup / login."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    message: str
    access_token: str = Field(alias="accessToken")
    refresh_token: str = Field(alias="refreshToken")
    user: UserPublic


class AccessTokenResponse(SQLModel):
    model_config = ConfigDict(populate_by_name=True)

    access_token: str = Field(alias="accessToken")


class UpdateEmailResponse(SQLModel):
    message: str
    email: str


class GoogleSignupResponse(SQLModel):
    success: bool
    message: str


class MessageResponse(SQLModel):
    message: str
