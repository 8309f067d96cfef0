from functools import lru_cache

from supabase import create_client
from supabase.client import Client

from site_images.core.exceptions import FetchError
from site_images.core.settings import settings


@lru_cache(maxsize=1)
def get_supabase() -> Client:
    if not settings.SUPABASE_URL or not settings.SUPABASE_ANON_KEY:
        raise FetchError("SUPABASE_URL and SUPABASE_ANON_KEY must be set")
    return create_client(
        settings.SUPABASE_URL,
        settings.SUPABASE_ANON_KEY,
    )
