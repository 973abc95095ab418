"""
Auth Schemas.

Sign-up, sign-in and profile payloads.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class Credentials(BaseModel):
    """Email and password pair used for both sign-up and sign-in."""

    email: str = Field(
        ...,
        max_length=320,
        pattern=EMAIL_PATTERN,
        examples=["cook@example.com"],
    )
    password: str = Field(..., min_length=1, max_length=128)

    model_config = ConfigDict(str_strip_whitespace=True)


class UserResponse(BaseModel):
    """Public view of a user account."""

    id: str
    email: str
    username: str | None
    avatar_url: str | None
    is_verified: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class SignUpResponse(BaseModel):
    """Result of a sign-up."""

    user: UserResponse
    pending_verification: bool = Field(
        description="True when the account must confirm its email before signing in",
    )


class SessionResponse(BaseModel):
    """Authenticated session returned by sign-in."""

    access_token: str
    token_type: str = "bearer"
    user: UserResponse


class ProfileUpdate(BaseModel):
    """Profile fields a user may change."""

    username: str | None = Field(default=None, max_length=100)
    avatar_url: str | None = Field(default=None, max_length=2048)

    model_config = ConfigDict(str_strip_whitespace=True)
