from supabase import Client, ClientOptions, create_client

from shared.config import NotifyConfig


def get_supabase_client(config: NotifyConfig) -> Client:
    """Get initialized Supabase client with the service role key."""
    url, key = config.require_service_credentials()

    # Server-side use only: no session persistence or token refresh
    options = ClientOptions(auto_refresh_token=False, persist_session=False)
    return create_client(url, key, options=options)
