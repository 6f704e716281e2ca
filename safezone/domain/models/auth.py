from __future__ import annotations

"""Request and response models for the ``/auth`` endpoints."""

import re
from typing import Any, Dict, Literal, Optional

from pydantic import ConfigDict, field_validator

from .base import ApiModel

VerificationPurpose = Literal["signup", "reset_password"]


def digits_only(value: Any) -> str:
    return re.sub(r"\D", "", str(value or ""))


class RegisterRequest(ApiModel):
    """Payload expected by ``POST /auth/register``."""

    name: str
    nickname: str
    email: str
    phone: str
    password: str
    confirm_password: str

    @field_validator("name", "nickname", "email", mode="before")
    @classmethod
    def strip_text(cls, v: Any) -> str:
        return str(v or "").strip()

    @field_validator("phone", mode="before")
    @classmethod
    def clean_phone(cls, v: Any) -> str:
        return digits_only(v)


class LoginRequest(ApiModel):
    """Payload expected by ``POST /auth/login``."""

    email: str
    password: str


class EmailVerificationRequest(ApiModel):
    """Payload expected by ``POST /auth/email/verify``."""

    email: str
    code: str
    purpose: VerificationPurpose


class ResetPasswordRequest(ApiModel):
    """Payload expected by ``POST /auth/reset-password``."""

    email: str
    code: str
    new_password: str
    confirm_password: str


class TokenPayload(ApiModel):
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None


class AuthResult(ApiModel):
    """Response of login and registration.

    Unknown keys are kept so callers can read backend additions.
    """

    model_config = ConfigDict(extra="allow")

    tokens: Optional[TokenPayload] = None
    user: Optional[Dict[str, Any]] = None
    message: Optional[str] = None
