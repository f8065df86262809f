"""
Item repository over the Supabase ``items`` table.

Reporting a found item triggers the match-and-notify pipeline on a
best-effort basis: a notification failure never fails the report.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional, Set

from models import Item, ItemCreate, NotificationRequest
from models.types import ItemID, ItemType, UserID
from notifications.pipeline import notify_lost_users
from shared.config import NotifyConfig
from shared.exceptions import NotificationError, UpstreamFailure

logger = logging.getLogger(__name__)

ALL_TYPES = "all"
ALL_CATEGORIES = "All Categories"

# Strong references to notifications scheduled on a running loop
_pending_notifications: Set[asyncio.Task] = set()


def _execute(query: Any, action: str) -> List[Dict[str, Any]]:
    try:
        response = query.execute()
    except Exception as e:
        logger.error("Error %s: %s", action, e)
        raise UpstreamFailure(f"Failed {action}") from e
    return response.data or []


def list_active_items(
    supabase: Any,
    item_type: Optional[str] = None,
    category: Optional[str] = None,
) -> List[Item]:
    """
    Get the shared feed: active items, newest first.

    Args:
        supabase: Supabase client
        item_type: 'lost' or 'found'; None or 'all' for both
        category: Exact category; None or 'All Categories' for every category

    Returns:
        List of Item records
    """
    query = (
        supabase.table("items")
        .select("*")
        .eq("status", "active")
        .order("created_at", desc=True)
    )

    if item_type and item_type != ALL_TYPES:
        query = query.eq("type", item_type)
    if category and category != ALL_CATEGORIES:
        query = query.eq("category", category)

    rows = _execute(query, "loading items")

    # Same exact-match rule as notification matching
    return [
        Item.model_validate(row)
        for row in rows
        if (not item_type or item_type == ALL_TYPES or row.get("type") == item_type)
        and (not category or category == ALL_CATEGORIES or row.get("category") == category)
    ]


def get_item(supabase: Any, item_id: ItemID) -> Optional[Item]:
    """Get a single item by id, or None if it doesn't exist."""
    rows = _execute(
        supabase.table("items").select("*").eq("id", item_id).limit(1),
        "loading item",
    )
    return Item.model_validate(rows[0]) if rows else None


def list_user_items(supabase: Any, user_id: UserID) -> List[Item]:
    """Get every item a user has posted (any status), newest first."""
    rows = _execute(
        supabase.table("items")
        .select("*")
        .eq("user_id", user_id)
        .order("created_at", desc=True),
        "loading your items",
    )
    return [Item.model_validate(row) for row in rows]


def report_item(
    supabase: Any,
    user_id: UserID,
    item_type: ItemType,
    item: ItemCreate | Dict[str, Any],
    config: Optional[NotifyConfig] = None,
) -> Item:
    """
    Report a lost or found item.

    Args:
        supabase: Supabase client
        user_id: Reporting user
        item_type: 'lost' or 'found'
        item: Item fields (validated against ItemCreate)
        config: When given, found items notify matching lost-item owners.
            Called from a running event loop, the notification is scheduled
            on that loop instead of run inline.

    Returns:
        The created Item

    Raises:
        pydantic.ValidationError: Missing required fields or unknown category
        ValueError: Unknown item type
        UpstreamFailure: Insert failed
    """
    if item_type not in ("lost", "found"):
        raise ValueError(f"Unknown item type: {item_type}")

    fields = item if isinstance(item, ItemCreate) else ItemCreate.model_validate(item)

    row = {
        **fields.model_dump(),
        "user_id": user_id,
        "type": item_type,
        "status": "active",
    }
    rows = _execute(supabase.table("items").insert(row), "reporting item")
    created = Item.model_validate(rows[0])

    logger.info("Item %s reported as %s", created.id, item_type)

    if item_type == "found" and config is not None:
        _notify_best_effort(supabase, created, config)

    return created


def _notify_best_effort(supabase: Any, item: Item, config: NotifyConfig) -> None:
    """
    Run the pipeline for a new found item.

    From synchronous code the pipeline runs to completion before returning.
    Inside a running event loop (e.g. an async route) it is scheduled as a
    task on that loop and the report returns immediately.
    """
    request = NotificationRequest(
        category=item.category,
        found_item_id=item.id,
        found_by_user_id=item.user_id,
        found_item_title=item.title,
    )
    notification = _notify_and_log(supabase, item.id, request, config)

    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        asyncio.run(notification)
        return

    task = loop.create_task(notification)
    _pending_notifications.add(task)
    task.add_done_callback(_pending_notifications.discard)


async def _notify_and_log(
    supabase: Any, item_id: ItemID, request: NotificationRequest, config: NotifyConfig
) -> None:
    """Await the pipeline, logging (not raising) any failure."""
    try:
        result = await notify_lost_users(request, config=config, supabase=supabase)
        logger.info("Found item %s: %s", item_id, result.message)
    except NotificationError as e:
        logger.warning("Notification not sent for item %s: %s", item_id, e.message)
    except Exception:
        logger.exception("Unexpected error notifying for item %s", item_id)


def mark_resolved(supabase: Any, user_id: UserID, item_id: ItemID) -> bool:
    """Mark one of the user's items as resolved. Returns False if nothing matched."""
    rows = _execute(
        supabase.table("items")
        .update({"status": "resolved"})
        .eq("id", item_id)
        .eq("user_id", user_id),
        "updating item",
    )
    return bool(rows)


def delete_item(supabase: Any, user_id: UserID, item_id: ItemID) -> bool:
    """Delete one of the user's items. Returns False if nothing matched."""
    rows = _execute(
        supabase.table("items").delete().eq("id", item_id).eq("user_id", user_id),
        "deleting item",
    )
    return bool(rows)
