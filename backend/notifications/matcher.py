"""
Candidate matching for found-item notifications.

Queries active lost items in a category and applies an exact-match
post-filter so store-level collation never widens the match.
"""

import logging
from typing import Any, Dict, List

from models import CandidateItem
from shared.exceptions import UpstreamFailure

logger = logging.getLogger(__name__)

CANDIDATE_COLUMNS = "user_id, contact_info, category, type"


def fetch_candidate_rows(supabase: Any, category: str) -> List[Dict[str, Any]]:
    """
    Query active lost items in a category.

    Args:
        supabase: Supabase client
        category: Category of the found item

    Returns:
        Raw rows from the items table (may be empty)

    Raises:
        UpstreamFailure: If the query fails
    """
    try:
        response = (
            supabase.table("items")
            .select(CANDIDATE_COLUMNS)
            .eq("type", "lost")
            .eq("category", category)
            .eq("status", "active")
            .execute()
        )
    except Exception as e:
        logger.error("Error querying lost items: %s", e)
        raise UpstreamFailure("Query failed") from e

    return response.data or []


def filter_strict_matches(
    rows: List[Dict[str, Any]], category: str
) -> List[CandidateItem]:
    """
    Keep only lost items whose category equals ``category`` exactly.

    "Keys" does not match "keys" or "Keys " regardless of how the store
    compared them.

    Args:
        rows: Rows returned by the candidate query
        category: Requested category

    Returns:
        Candidate items in query order
    """
    matches = []
    for row in rows:
        if not row:
            continue
        if row.get("type") != "lost" or row.get("category") != category:
            continue
        matches.append(CandidateItem.model_validate(row))
    return matches


def find_candidates(supabase: Any, category: str) -> List[CandidateItem]:
    """Query and strictly filter lost items for a category."""
    rows = fetch_candidate_rows(supabase, category)
    candidates = filter_strict_matches(rows, category)
    if len(candidates) != len(rows):
        logger.info(
            "Dropped %d non-exact category matches for %r",
            len(rows) - len(candidates),
            category,
        )
    return candidates
