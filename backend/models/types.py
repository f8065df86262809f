"""Shared type definitions for type checking.

Uses NewType for IDs to provide compile-time type safety - prevents mixing
different ID types (e.g., passing UserID where ItemID expected).

Uses TypeAlias for simple structural types.
"""

from typing import Literal, NewType, TypeAlias

# ID types using NewType for type safety
ItemID = NewType("ItemID", str)
UserID = NewType("UserID", str)

# Structural aliases
ItemType: TypeAlias = Literal["lost", "found"]
ItemStatus: TypeAlias = Literal["active", "resolved"]
Category: TypeAlias = str  # case-sensitive, compared byte-for-byte
EmailAddress: TypeAlias = str

CATEGORIES: tuple[Category, ...] = (
    "Electronics",
    "Books & Stationery",
    "Clothing & Accessories",
    "ID Cards & Documents",
    "Keys",
    "Bags & Backpacks",
    "Sports Equipment",
    "Other",
)
