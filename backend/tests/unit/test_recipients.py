"""
Unit tests for notifications/recipients.py

Tests recipient deduplication, self-exclusion and owner email lookups.
"""

import unittest
from unittest.mock import Mock

from supabase import AuthApiError

from models import CandidateItem
from notifications.recipients import (
    RecipientSet,
    build_recipient_set,
    lookup_user_email,
    resolve_owner_emails,
    unique_owner_ids,
)
from shared.exceptions import UpstreamFailure
from tests.fixtures.mock_helpers import create_mock_supabase


def _candidate(user_id: str, contact_info=None) -> CandidateItem:
    return CandidateItem(
        user_id=user_id, type="lost", category="Electronics", contact_info=contact_info
    )


class TestRecipientSet(unittest.TestCase):
    """Tests for RecipientSet."""

    def test_dedupes_case_insensitively(self):
        """Same address in different case is stored once (first spelling kept)."""
        recipients = RecipientSet()

        self.assertTrue(recipients.add("Alice@Example.com"))
        self.assertFalse(recipients.add("alice@example.com"))

        self.assertEqual(recipients.to_list(), ["Alice@Example.com"])

    def test_trims_whitespace(self):
        recipients = RecipientSet()

        recipients.add("  bob@example.com \n")
        recipients.add("bob@example.com")

        self.assertEqual(recipients.to_list(), ["bob@example.com"])

    def test_excluded_email_never_added(self):
        """Excluded address rejected regardless of case."""
        recipients = RecipientSet(excluded="b@x.com")

        self.assertFalse(recipients.add("B@X.com"))
        self.assertFalse(recipients.add(" b@x.com "))
        self.assertEqual(len(recipients), 0)

    def test_ignores_empty_values(self):
        recipients = RecipientSet()

        self.assertFalse(recipients.add(None))
        self.assertFalse(recipients.add(""))
        self.assertFalse(recipients.add("   "))
        self.assertEqual(len(recipients), 0)

    def test_contains_is_case_insensitive(self):
        recipients = RecipientSet()
        recipients.add("a@x.com")

        self.assertIn("A@X.COM", recipients)
        self.assertNotIn("c@x.com", recipients)

    def test_preserves_insertion_order(self):
        recipients = RecipientSet()
        for email in ["c@x.com", "a@x.com", "b@x.com"]:
            recipients.add(email)

        self.assertEqual(list(recipients), ["c@x.com", "a@x.com", "b@x.com"])


class TestLookupUserEmail(unittest.TestCase):
    """Tests for lookup_user_email()."""

    def test_returns_account_email(self):
        mock_supabase = create_mock_supabase(user_emails={"u1": "u1@x.com"})

        self.assertEqual(lookup_user_email(mock_supabase, "u1"), "u1@x.com")

    def test_missing_user_returns_none(self):
        mock_supabase = create_mock_supabase(user_emails={})

        self.assertIsNone(lookup_user_email(mock_supabase, "ghost"))

    def test_deleted_account_returns_none(self):
        """A 404 from the auth admin API means no account, not an outage."""
        mock_supabase = Mock()
        mock_supabase.auth.admin.get_user_by_id.side_effect = AuthApiError(
            "User not found", 404, "user_not_found"
        )

        self.assertIsNone(lookup_user_email(mock_supabase, "gone"))

    def test_malformed_user_id_returns_none(self):
        mock_supabase = Mock()
        mock_supabase.auth.admin.get_user_by_id.side_effect = ValueError(
            "Invalid id, 'not-a-uuid' is not a valid UUID"
        )

        self.assertIsNone(lookup_user_email(mock_supabase, "not-a-uuid"))

    def test_server_error_raises_upstream_failure(self):
        mock_supabase = Mock()
        mock_supabase.auth.admin.get_user_by_id.side_effect = AuthApiError(
            "Internal error", 500, "unexpected_failure"
        )

        with self.assertRaises(UpstreamFailure):
            lookup_user_email(mock_supabase, "u1")

    def test_provider_error_raises_upstream_failure(self):
        mock_supabase = Mock()
        mock_supabase.auth.admin.get_user_by_id.side_effect = Exception("503")

        with self.assertRaises(UpstreamFailure) as ctx:
            lookup_user_email(mock_supabase, "u1")

        self.assertEqual(ctx.exception.message, "Identity lookup failed")


class TestUniqueOwnerIds(unittest.TestCase):
    def test_distinct_in_first_seen_order(self):
        candidates = [_candidate("u2"), _candidate("u1"), _candidate("u2")]

        self.assertEqual(unique_owner_ids(candidates), ["u2", "u1"])


class TestResolveOwnerEmails(unittest.IsolatedAsyncioTestCase):
    """Tests for resolve_owner_emails() concurrent fan-out."""

    async def test_one_lookup_per_id_in_order(self):
        mock_supabase = create_mock_supabase(
            user_emails={"u1": "one@x.com", "u2": None, "u3": "three@x.com"}
        )

        emails = await resolve_owner_emails(mock_supabase, ["u1", "u2", "u3"])

        self.assertEqual(emails, ["one@x.com", None, "three@x.com"])
        self.assertEqual(mock_supabase.auth.admin.get_user_by_id.call_count, 3)

    async def test_no_ids_no_lookups(self):
        mock_supabase = create_mock_supabase()

        self.assertEqual(await resolve_owner_emails(mock_supabase, []), [])
        mock_supabase.auth.admin.get_user_by_id.assert_not_called()

    async def test_any_failure_fails_the_whole_fan_out(self):
        mock_supabase = Mock()
        mock_supabase.auth.admin.get_user_by_id.side_effect = Exception("timeout")

        with self.assertRaises(UpstreamFailure):
            await resolve_owner_emails(mock_supabase, ["u1", "u2"])


class TestBuildRecipientSet(unittest.IsolatedAsyncioTestCase):
    """Tests for build_recipient_set()."""

    async def test_merges_contact_and_account_emails(self):
        """Contact emails and owner account emails are combined."""
        mock_supabase = create_mock_supabase(
            user_emails={"u1": "u1-account@x.com", "u2": "u2@x.com"}
        )
        candidates = [
            _candidate("u1", "a@x.com"),
            _candidate("u2", "phone:555-1234"),
        ]

        recipients = await build_recipient_set(mock_supabase, candidates)

        self.assertEqual(
            recipients.to_list(), ["a@x.com", "u1-account@x.com", "u2@x.com"]
        )

    async def test_contact_without_at_sign_ignored(self):
        mock_supabase = create_mock_supabase(user_emails={})
        candidates = [_candidate("u1", "call 555-1234")]

        recipients = await build_recipient_set(mock_supabase, candidates)

        self.assertEqual(len(recipients), 0)

    async def test_same_address_from_both_sources_counted_once(self):
        """Contact 'A@x.com' and account 'a@x.com' produce one recipient."""
        mock_supabase = create_mock_supabase(user_emails={"u1": "a@x.com"})
        candidates = [_candidate("u1", "A@x.com")]

        recipients = await build_recipient_set(mock_supabase, candidates)

        self.assertEqual(recipients.to_list(), ["A@x.com"])

    async def test_excluded_email_removed_from_both_sources(self):
        mock_supabase = create_mock_supabase(user_emails={"u1": "b@x.com"})
        candidates = [_candidate("u1", "B@X.com")]

        recipients = await build_recipient_set(
            mock_supabase, candidates, excluded_email="b@x.com"
        )

        self.assertEqual(len(recipients), 0)

    async def test_deleted_owner_does_not_block_others(self):
        """One owner without an account still lets the other owners be notified."""
        emails = {"u1": "u1@x.com"}

        def get_user_by_id(user_id):
            if user_id not in emails:
                raise AuthApiError("User not found", 404, "user_not_found")
            return Mock(user=Mock(email=emails[user_id]))

        mock_supabase = Mock()
        mock_supabase.auth.admin.get_user_by_id.side_effect = get_user_by_id
        candidates = [_candidate("u1", "a@x.com"), _candidate("u2", "b@x.com")]

        recipients = await build_recipient_set(mock_supabase, candidates)

        self.assertEqual(recipients.to_list(), ["a@x.com", "b@x.com", "u1@x.com"])

    async def test_shared_owner_looked_up_once(self):
        """Two items with the same owner cause one identity lookup."""
        mock_supabase = create_mock_supabase(user_emails={"u1": "u1@x.com"})
        candidates = [_candidate("u1", "first@x.com"), _candidate("u1", "second@x.com")]

        await build_recipient_set(mock_supabase, candidates)

        mock_supabase.auth.admin.get_user_by_id.assert_called_once_with("u1")


if __name__ == "__main__":
    unittest.main()
