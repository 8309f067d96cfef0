"""Public URL resolution for bucket objects and gallery records."""

from __future__ import annotations

import re
from typing import Optional

from site_images.assets.registry import get_asset
from site_images.core.settings import settings
from site_images.storage.transform import STORAGE_OBJECT_SEGMENT

# Gallery rows created before uploads moved to the bucket point at bundled files.
_LEGACY_EDITORIAL_PATH = re.compile(r"^/src/assets/(editorial-\d+)\.jpg$")
DEFAULT_GALLERY_ASSET_ID = "editorial-1"


def resolve_public_url(object_key: str, bucket: Optional[str] = None) -> str:
    """Resolve the public bucket URL for the given object key.

    Absolute URLs are returned as they are. Without a configured project URL
    the key itself is returned.
    """
    if not object_key:
        return ""
    if object_key.startswith(("http://", "https://")):
        return object_key
    base_url = settings.SUPABASE_URL
    if not base_url:
        return object_key
    bucket_name = (bucket or settings.STORAGE_BUCKET).strip("/")
    return f"{base_url.rstrip('/')}{STORAGE_OBJECT_SEGMENT}{bucket_name}/{object_key.lstrip('/')}"


def default_gallery_url() -> str:
    return get_asset(DEFAULT_GALLERY_ASSET_ID).built_in_url


def resolve_gallery_url(url: Optional[str]) -> str:
    if not url:
        return default_gallery_url()
    legacy = _LEGACY_EDITORIAL_PATH.match(url)
    if legacy:
        entry = get_asset(legacy.group(1))
        return entry.built_in_url if entry else default_gallery_url()
    if url.startswith("http"):
        return url
    # Bare object keys of uploads in the gallery bucket.
    if settings.SUPABASE_URL and not url.startswith("/"):
        return resolve_public_url(url)
    return default_gallery_url()
