"""
Process-wide Supabase clients.

The anon-key client serves token verification, the ownership reads behind
every authorization decision and the resource services. The service-role
client is only for writing a user's app_metadata.role; it bypasses RLS.
"""

from supabase import create_client, Client
from salon_backend.config.settings import settings


class SupabaseClient:
    _client: Client = None
    _service_client: Client = None

    @classmethod
    def get_client(cls) -> Client:
        """Shared client for auth and ownership lookups (anon key, RLS applies)."""
        if cls._client is None:
            cls._client = create_client(settings.supabase_url, settings.supabase_key)
        return cls._client

    @classmethod
    def get_service_client(cls) -> Client:
        """Role assignment client; falls back to the shared client when no service key is set."""
        if cls._service_client is None and settings.supabase_service_role_key:
            cls._service_client = create_client(
                settings.supabase_url, settings.supabase_service_role_key
            )
        return cls._service_client or cls.get_client()


def get_supabase() -> Client:
    """FastAPI dependency; overridden in tests."""
    return SupabaseClient.get_client()
