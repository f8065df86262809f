"""
Recipient resolution for found-item notifications.

Builds the deduplicated recipient set from two sources: contact fields that
look like emails, and the account email of each distinct item owner.
"""

import asyncio
import logging
from typing import Any, Iterable, Iterator, Optional

from supabase import AuthApiError

from models import CandidateItem
from models.types import EmailAddress, UserID
from shared.exceptions import UpstreamFailure
from shared.utils import email_key, looks_like_email

logger = logging.getLogger(__name__)


class RecipientSet:
    """
    Ordered set of email addresses keyed case-insensitively.

    The first spelling seen for an address is the one kept. The excluded
    address (the found-item poster) is never added.
    """

    def __init__(self, excluded: Optional[EmailAddress] = None):
        self._excluded = email_key(excluded) if excluded else None
        self._emails: dict[str, EmailAddress] = {}

    def add(self, email: Optional[EmailAddress]) -> bool:
        """Add an address; returns True if it was new and not excluded."""
        if not email:
            return False
        cleaned = email.strip()
        if not cleaned:
            return False
        key = email_key(cleaned)
        if key == self._excluded or key in self._emails:
            return False
        self._emails[key] = cleaned
        return True

    def __len__(self) -> int:
        return len(self._emails)

    def __iter__(self) -> Iterator[EmailAddress]:
        return iter(self._emails.values())

    def __contains__(self, email: object) -> bool:
        return isinstance(email, str) and email_key(email) in self._emails

    def to_list(self) -> list[EmailAddress]:
        return list(self._emails.values())


def lookup_user_email(supabase: Any, user_id: UserID) -> Optional[EmailAddress]:
    """
    Resolve a user id to its account email via the auth admin API.

    A deleted account (404) or a malformed id resolves to None so one stale
    owner does not block the others.

    Raises:
        UpstreamFailure: If the identity provider call fails
    """
    try:
        response = supabase.auth.admin.get_user_by_id(user_id)
    except AuthApiError as e:
        if e.status == 404:
            logger.info("No account for user %s, skipping", user_id)
            return None
        logger.error("Error looking up user %s: %s", user_id, e)
        raise UpstreamFailure("Identity lookup failed") from e
    except ValueError:
        logger.info("Invalid user id %r, skipping", user_id)
        return None
    except Exception as e:
        logger.error("Error looking up user %s: %s", user_id, e)
        raise UpstreamFailure("Identity lookup failed") from e

    user = getattr(response, "user", None)
    return getattr(user, "email", None) if user else None


def unique_owner_ids(candidates: Iterable[CandidateItem]) -> list[UserID]:
    """Distinct owner ids in first-seen order."""
    return list(dict.fromkeys(item.user_id for item in candidates))


async def resolve_owner_emails(
    supabase: Any, owner_ids: list[UserID]
) -> list[Optional[EmailAddress]]:
    """Look up every owner concurrently; one call per id, results in input order."""
    return await asyncio.gather(
        *[asyncio.to_thread(lookup_user_email, supabase, uid) for uid in owner_ids]
    )


async def build_recipient_set(
    supabase: Any,
    candidates: list[CandidateItem],
    excluded_email: Optional[EmailAddress] = None,
) -> RecipientSet:
    """
    Collect recipients for a list of candidate lost items.

    Args:
        supabase: Supabase client (for owner lookups)
        candidates: Strictly matched lost items
        excluded_email: The found-item poster's email, never notified

    Returns:
        RecipientSet with contact emails first, then owner account emails
    """
    recipients = RecipientSet(excluded=excluded_email)

    for item in candidates:
        if looks_like_email(item.contact_info):
            recipients.add(item.contact_info)

    # Merge only after every lookup has completed
    owner_emails = await resolve_owner_emails(supabase, unique_owner_ids(candidates))
    for email in owner_emails:
        recipients.add(email)

    return recipients
