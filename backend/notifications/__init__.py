"""
Found-item notification system for Campus Finder.

This module handles:
- Matching a found item against active lost items in the same category
- Resolving and deduplicating recipient emails
- Sending the notification email via Resend
"""

from .matcher import filter_strict_matches, find_candidates
from .pipeline import notify_lost_users
from .recipients import RecipientSet, build_recipient_set

__all__ = [
    'filter_strict_matches',
    'find_candidates',
    'notify_lost_users',
    'RecipientSet',
    'build_recipient_set',
]
