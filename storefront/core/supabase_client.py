# storefront/core/supabase_client.py
from functools import lru_cache

from supabase import Client, create_client

from storefront.core.config import get_settings

settings = get_settings()


@lru_cache
def supabase_admin() -> Client:
    """
    Service-role client for the product image bucket.

    Built on first upload or delete, so the API starts without storage
    settings; raises RuntimeError if they are still missing then.
    """
    if not (settings.SUPABASE_URL and settings.SUPABASE_SERVICE_ROLE_KEY):
        raise RuntimeError("SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must be set for image storage")
    return create_client(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_ROLE_KEY)
