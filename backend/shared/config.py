"""Runtime configuration loaded once from the environment."""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

from shared.exceptions import ConfigurationMissing

DEFAULT_EMAIL_FROM = "Campus Finder <onboarding@resend.dev>"
DEFAULT_SITE_URL = "https://"


class NotifyConfig(BaseModel):
    """Secrets and endpoints for the item store, identity lookups and Resend."""

    model_config = ConfigDict(frozen=True)

    supabase_url: str | None = None
    supabase_service_key: str | None = None
    resend_api_key: str | None = None
    email_from: str = DEFAULT_EMAIL_FROM
    site_url: str = DEFAULT_SITE_URL

    def require_service_credentials(self) -> tuple[str, str]:
        """Return (url, key) or raise if either is missing."""
        if not self.supabase_url or not self.supabase_service_key:
            raise ConfigurationMissing("Missing Supabase service credentials")
        return self.supabase_url, self.supabase_service_key

    def require_resend_key(self) -> str:
        if not self.resend_api_key:
            raise ConfigurationMissing("Missing RESEND_API_KEY")
        return self.resend_api_key


def load_config() -> NotifyConfig:
    """Build configuration from environment variables (and .env if present)."""
    load_dotenv()

    return NotifyConfig(
        supabase_url=os.getenv("SUPABASE_URL") or None,
        supabase_service_key=(
            os.getenv("SUPABASE_SERVICE_ROLE_KEY")
            or os.getenv("SUPABASE_SERVICE_KEY")
            or None
        ),
        resend_api_key=os.getenv("RESEND_API_KEY") or None,
        email_from=os.getenv("EMAIL_FROM") or DEFAULT_EMAIL_FROM,
        site_url=os.getenv("SITE_URL") or DEFAULT_SITE_URL,
    )
