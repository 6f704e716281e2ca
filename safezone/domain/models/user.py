from typing import Any, Optional

from pydantic import field_validator

from .auth import digits_only
from .base import ApiModel


class UserProfile(ApiModel):
    id: int
    name: str = ""
    nickname: str = ""
    email: str = ""
    phone: str = ""
    created_at: Optional[str] = None


class UpdateProfileRequest(ApiModel):
    """Only nickname and phone can be changed; unset fields are not sent."""

    nickname: Optional[str] = None
    phone: Optional[str] = None

    @field_validator("nickname", mode="before")
    @classmethod
    def strip_nickname(cls, v: Any) -> Optional[str]:
        return None if v is None else str(v).strip()

    @field_validator("phone", mode="before")
    @classmethod
    def clean_phone(cls, v: Any) -> Optional[str]:
        return None if v is None else digits_only(v)
