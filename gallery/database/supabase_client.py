from supabase import create_client, Client
from supabase.client import ClientOptions
from gallery.config import settings


class SupabaseClient:
    _client: Client = None

    @classmethod
    def get_client(cls) -> Client:
        if cls._client is None:
            cls._client = create_client(settings.supabase_url, settings.supabase_key)
        return cls._client


def get_supabase() -> Client:
    return SupabaseClient.get_client()


def get_auth_client() -> Client:
    """Fresh client for one sign-in, sign-up or OAuth redirect.

    Adopting a session rewrites the client's Authorization header, so sessions
    are only ever adopted here and never on the shared client.
    """
    return create_client(
        settings.supabase_url,
        settings.supabase_key,
        options=ClientOptions(auto_refresh_token=False, persist_session=False)
    )
