"""Account DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2, immutable
(``frozen=True``).  Partial-update DTOs record which fields the caller
actually sent in ``model_fields_set``; ``changes()`` returns exactly
those, so an omitted field is never confused with an explicit ``None``.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, field_validator


class PartialUpdateDTO(BaseModel):
    """Base for DTOs where only supplied fields are written."""

    model_config = ConfigDict(frozen=True)

    def changes(self) -> Dict[str, Any]:
        return {field: getattr(self, field) for field in self.model_fields_set}


class RegisterUserDTO(BaseModel):
    """Immutable DTO for any new account (customer, admin or seller owner)."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    name: str
    email: EmailStr
    password: str
    phone_number: str
    address: str = ""

    @field_validator("name", "phone_number")
    @classmethod
    def must_not_be_blank(cls, v: str) -> str:
        if not v:
            raise ValueError("Field must not be blank.")
        return v

    @field_validator("password")
    @classmethod
    def password_min_length(cls, v: str) -> str:
        if len(v) < 6:
            raise ValueError("Password must be at least 6 characters long.")
        return v

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v: str) -> str:
        return v.lower()


class UpdateProfileDTO(PartialUpdateDTO):
    name: Optional[str] = None
    address: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("Name must not be blank.")
        return v
