"""Pydantic models for data validation and type checking."""

from models.item import CandidateItem, Item, ItemBase, ItemCreate
from models.notification import (
    NotificationMessage,
    NotificationRequest,
    NotificationResult,
)
from models.types import CATEGORIES

__all__ = [
    "CATEGORIES",
    "CandidateItem",
    "Item",
    "ItemBase",
    "ItemCreate",
    "NotificationMessage",
    "NotificationRequest",
    "NotificationResult",
]
