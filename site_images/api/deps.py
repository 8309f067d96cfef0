from functools import lru_cache

from site_images.core.settings import settings
from site_images.db.queries import fetch_overrides
from site_images.delivery.cache import OverrideCache
from site_images.delivery.policy import SiteAssetService


@lru_cache(maxsize=1)
def get_site_asset_service() -> SiteAssetService:
    cache = OverrideCache(
        fetch_overrides,
        ttl_seconds=settings.OVERRIDES_CACHE_TTL_SECONDS,
        error_retry_seconds=settings.OVERRIDES_ERROR_RETRY_SECONDS,
    )
    return SiteAssetService(cache)
