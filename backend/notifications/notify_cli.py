"""
CLI script for sending found-item notifications by hand.

Usage:
    # Notify owners of active lost items in a category
    uv run python -m notifications.notify_cli --category Electronics

    # Include the found item details and exclude its poster
    uv run python -m notifications.notify_cli --category Keys \
        --found-item-id 42 --found-by-user-id <uuid> --found-item-title "Blue keyring"

    # Dry run (resolve recipients, don't send)
    uv run python -m notifications.notify_cli --category Keys --dry-run
"""

import argparse
import asyncio
import sys

from models import NotificationRequest
from notifications.pipeline import notify_lost_users
from shared.config import load_config
from shared.exceptions import NotificationError
from shared.utils import print_summary


def run(args: argparse.Namespace) -> int:
    """Run the pipeline once and print a summary. Returns a process exit code."""
    config = load_config()
    request = NotificationRequest(
        category=args.category,
        found_item_id=args.found_item_id,
        found_by_user_id=args.found_by_user_id,
        found_item_title=args.found_item_title,
    )

    print(f"Notifying lost-item owners in category: {args.category}")
    if args.dry_run:
        print("  [DRY RUN] Emails will not be sent")

    try:
        result = asyncio.run(
            notify_lost_users(request, config=config, dry_run=args.dry_run)
        )
    except NotificationError as e:
        print(f"  ✗ {e.message}")
        details = getattr(e, "details", None)
        if details:
            print(f"    Details: {details}")
        return 1

    print_summary(
        category=args.category,
        outcome=result.message,
        recipients=result.recipients,
        dry_run=args.dry_run,
    )
    return 0


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Email owners of lost items about a newly found item"
    )

    parser.add_argument("--category", required=True, help="Exact item category")
    parser.add_argument("--found-item-id", help="Reference id of the found item")
    parser.add_argument(
        "--found-by-user-id", help="User who posted the found item (never notified)"
    )
    parser.add_argument("--found-item-title", help="Title shown in the email")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Dry run mode (don't actually send emails)",
    )

    args = parser.parse_args()
    sys.exit(run(args))


if __name__ == "__main__":
    main()
