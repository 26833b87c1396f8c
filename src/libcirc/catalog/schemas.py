"""Pydantic schemas for catalog input."""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .models import ItemCategory


class ItemCreate(BaseModel):
    """Schema for cataloguing a new item."""

    item_id: str = Field(..., min_length=1, max_length=50)
    title: str = Field(..., min_length=1, max_length=255)
    category: ItemCategory
    creator: Optional[str] = Field(None, max_length=255)
    quantity: Optional[int] = Field(None, ge=0)

    @field_validator("item_id", "title")
    @classmethod
    def not_blank(cls, v: str) -> str:
        """Reject whitespace-only keys and titles."""
        if not v.strip():
            raise ValueError("must not be blank")
        return v.strip()

    @field_validator("quantity")
    @classmethod
    def quantity_for_books_only(cls, v, info):
        """Only books carry a quantity."""
        category = info.data.get("category")
        if v is not None and category is not None and category != ItemCategory.BOOK:
            raise ValueError("quantity applies to books only")
        return v
