"""Pydantic models for lost and found items."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from models.types import CATEGORIES, ItemID, ItemStatus, ItemType, UserID


class ItemBase(BaseModel):
    """Item fields shared across contexts."""

    model_config = ConfigDict(
        str_strip_whitespace=True,
        validate_assignment=True,
    )

    title: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    contact_info: str = Field(..., min_length=1)
    description: str | None = None
    location: str | None = None
    image_url: str | None = None


class ItemCreate(ItemBase):
    """Item data for database insertion (before ID assignment)."""

    @field_validator("category")
    @classmethod
    def _known_category(cls, value: str) -> str:
        if value not in CATEGORIES:
            raise ValueError(f"Unknown category: {value}")
        return value


class Item(ItemBase):
    """Complete item record from database."""

    id: ItemID
    user_id: UserID
    type: ItemType
    status: ItemStatus = "active"
    created_at: datetime | None = None


class CandidateItem(BaseModel):
    """Lost-item row used for notification matching (minimal fields)."""

    user_id: UserID
    type: str
    category: str
    contact_info: str | None = None
