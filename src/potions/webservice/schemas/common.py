"""Shared request/response schemas for webservice endpoints."""

from pydantic import BaseModel, ConfigDict, Field

USERNAME_PATTERN = r"^[A-Za-z0-9_.-]+$"


class Credentials(BaseModel):
    """Username/password payload."""

    model_config = ConfigDict(str_strip_whitespace=True)

    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class RegisterRequest(Credentials):
    """Registration payload with account rules."""

    username: str = Field(..., min_length=3, max_length=30, pattern=USERNAME_PATTERN)
    password: str = Field(..., min_length=6, max_length=72)


class MessageResponse(BaseModel):
    """Plain message envelope."""

    message: str


class LoginResponse(MessageResponse):
    """Login result naming the cookie that carries the token."""

    cookie_name: str

