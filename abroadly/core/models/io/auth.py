"""
Authentication I/O models for API requests and responses.

Request fields are optional at the schema level so that missing values are
reported with the account-specific messages raised by the auth service
instead of generic validation errors.
"""

from __future__ import annotations

from typing import Optional

from pydantic import Field

from .common import CamelModel


class RegisterRequest(CamelModel):
    """Schema for registering a new account."""

    full_name: Optional[str] = Field(default=None, description="Display name")
    email: Optional[str] = Field(default=None, description="Login e-mail")
    password: Optional[str] = Field(default=None, description="Plain text password, at least 6 characters")


class LoginRequest(CamelModel):
    """Schema for logging in."""

    email: Optional[str] = None
    password: Optional[str] = None


class UserSummary(CamelModel):
    """Public view of an account."""

    id: int
    full_name: str
    email: str


class AuthResponse(CamelModel):
    """Result of a successful registration or login."""

    message: str
    user: UserSummary
    token: str = Field(description="Bearer token (JWT)")


class MeResponse(CamelModel):
    """Account of the authenticated caller."""

    user: UserSummary
