from datetime import datetime

from models.types import EmailAddress


def looks_like_email(value: str | None) -> bool:
    """Contact fields are free text; anything containing '@' is treated as an email."""
    return value is not None and "@" in value


def email_key(email: EmailAddress) -> str:
    """Case-insensitive comparison key for an email address."""
    return email.strip().lower()


def print_summary(category: str, outcome: str, recipients: int, dry_run: bool) -> None:
    """Print notification run summary."""
    print(f"\n{'=' * 60}")
    print(f"[{datetime.now()}] Notification Run Complete")
    print(f"{'=' * 60}")
    print(f"Category:   {category}")
    print(f"Outcome:    {outcome}{' (dry run)' if dry_run else ''}")
    print(f"Recipients: {recipients}")
    print(f"{'=' * 60}\n")
