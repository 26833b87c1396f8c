"""Pydantic schemas for patron input."""

from typing import Optional

from pydantic import BaseModel, Field, field_validator


class PatronCreate(BaseModel):
    """Schema for registering a patron."""

    patron_id: str = Field(..., min_length=1, max_length=50)
    name: str = Field(..., min_length=1, max_length=255)
    email: Optional[str] = Field(None, max_length=255)

    @field_validator("patron_id", "name")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v.strip()

    @field_validator("email")
    @classmethod
    def looks_like_email(cls, v: Optional[str]) -> Optional[str]:
        """Accept empty as no email; otherwise require an @."""
        if v is None or not v.strip():
            return None
        if "@" not in v:
            raise ValueError("email must contain '@'")
        return v.strip()
