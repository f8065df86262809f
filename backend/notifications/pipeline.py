"""
Match-and-notify pipeline.

When a found item is posted, emails everyone with an active lost item in the
same category, except the person who posted the found item.
"""

import asyncio
import logging
from typing import Any, Optional

from models import NotificationRequest, NotificationResult
from notifications.email_sender import build_notification_message, send_notification
from notifications.error_logger import log_notification_error
from notifications.matcher import find_candidates
from notifications.recipients import build_recipient_set, lookup_user_email
from shared.config import NotifyConfig
from shared.db import get_supabase_client
from shared.exceptions import (
    DispatchFailure,
    InvalidRequest,
    UpstreamFailure,
)

logger = logging.getLogger(__name__)

NO_MATCHES = "No matching lost items"
NO_RECIPIENTS = "No recipients"
SENT = "Notifications sent"
DRY_RUN = "Dry run: notifications not sent"


def validate_request(request: NotificationRequest) -> str:
    """Return the category or raise InvalidRequest."""
    if not request.category:
        raise InvalidRequest("Missing category")
    return request.category


async def notify_lost_users(
    request: NotificationRequest,
    *,
    config: NotifyConfig,
    supabase: Optional[Any] = None,
    dry_run: bool = False,
) -> NotificationResult:
    """
    Notify owners of matching lost items about a newly posted found item.

    Makes at most one dispatch call; nothing is retried.

    Args:
        request: Trigger payload (category required)
        config: Runtime configuration
        supabase: Supabase client; created from config when omitted
        dry_run: Resolve recipients but skip the dispatch call

    Returns:
        NotificationResult with the recipient count and Resend payload

    Raises:
        InvalidRequest: Missing category
        ConfigurationMissing: Missing Supabase credentials or Resend key
        UpstreamFailure: Item query or identity lookup failed
        DispatchFailure: Resend rejected the send
    """
    category = validate_request(request)

    if supabase is None:
        supabase = get_supabase_client(config)
    api_key = config.require_resend_key() if not dry_run else None

    try:
        # The Supabase client is synchronous; keep the event loop free
        candidates = await asyncio.to_thread(find_candidates, supabase, category)

        if not candidates:
            logger.info("No active lost items in category %r", category)
            return NotificationResult(message=NO_MATCHES)

        excluded_email = None
        if request.found_by_user_id:
            excluded_email = await asyncio.to_thread(
                lookup_user_email, supabase, request.found_by_user_id
            )

        recipients = await build_recipient_set(supabase, candidates, excluded_email)
    except UpstreamFailure as e:
        log_notification_error(
            error_type="lookup",
            error_message=f"{e.message}: {e.__cause__}",
            context=_error_context(request),
        )
        raise

    if not recipients:
        logger.info("No recipients left for category %r after exclusion", category)
        return NotificationResult(message=NO_RECIPIENTS)

    message = build_notification_message(
        config,
        recipients.to_list(),
        category,
        found_item_title=request.found_item_title,
        found_item_id=request.found_item_id,
    )

    if dry_run:
        logger.info("[DRY RUN] Would notify %d recipients", len(message.to))
        return NotificationResult(message=DRY_RUN, recipients=len(message.to))

    try:
        resend_response = send_notification(message, api_key)
    except DispatchFailure as e:
        logger.error("Resend API error: %s", e.details)
        log_notification_error(
            error_type="sending",
            error_message=str(e.details),
            context={**_error_context(request), "recipient_count": len(message.to)},
        )
        raise

    logger.info("Notified %d recipients for category %r", len(message.to), category)
    return NotificationResult(
        message=SENT, recipients=len(message.to), resend=resend_response
    )


def _error_context(request: NotificationRequest) -> dict[str, Any]:
    return {
        "category": request.category,
        "found_item_id": request.found_item_id,
        "found_by_user_id": request.found_by_user_id,
    }
