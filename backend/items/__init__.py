"""Item reporting, browsing and owner management against the items table."""

from .repository import (
    delete_item,
    get_item,
    list_active_items,
    list_user_items,
    mark_resolved,
    report_item,
)

__all__ = [
    'delete_item',
    'get_item',
    'list_active_items',
    'list_user_items',
    'mark_resolved',
    'report_item',
]
