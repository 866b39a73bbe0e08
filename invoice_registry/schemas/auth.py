"""Request/response schemas for auth endpoints."""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.networks import validate_email

from invoice_registry.core.security import (
    EMAIL_MAX_LEN,
    NAME_MAX_LEN,
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
)


class RegisterRequest(BaseModel):
    """New account details."""

    name: str = Field(..., min_length=1, max_length=NAME_MAX_LEN, description="Display name")
    username: str = Field(
        ..., min_length=USERNAME_MIN_LEN, max_length=USERNAME_MAX_LEN, description="Username"
    )
    email: str = Field(..., max_length=EMAIL_MAX_LEN, description="Email address")
    password: str = Field(
        ..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN, description="Password"
    )

    @field_validator("email")
    @classmethod
    def validate_email_address(cls, v: str) -> str:
        # Validated, but kept exactly as submitted: login matches it verbatim.
        _, normalized = validate_email(v)
        if normalized.casefold() != v.casefold():
            raise ValueError("value is not a bare email address")
        return v


class RegisterResponse(BaseModel):
    """Confirmation returned after successful registration."""

    message: str


class LoginRequest(BaseModel):
    """Credentials for login; the identifier may be a username or an email."""

    model_config = ConfigDict(populate_by_name=True)

    username_or_email: str = Field(
        ...,
        alias="usernameOrEmail",
        min_length=1,
        max_length=EMAIL_MAX_LEN,
        description="Username or email",
    )
    password: str = Field(
        ..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN, description="Password"
    )


class TokenResponse(BaseModel):
    """JWT access token returned after successful login."""

    model_config = ConfigDict(populate_by_name=True)

    access_token: str = Field(..., alias="accessToken", description="JWT access token")
    token_type: str = Field(default="Bearer", alias="tokenType", description="Token type")
    role: str | None = Field(default=None, description="One role held by the user")


class PrincipalResponse(BaseModel):
    """The authenticated principal of the current request."""

    subject: str
    username: str
    roles: list[str]
