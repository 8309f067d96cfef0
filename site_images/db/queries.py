from __future__ import annotations

import logging
from typing import Optional

import httpx
from supabase import PostgrestAPIError
from supabase.client import Client

from site_images.assets.overrides import OverrideRecord, parse_override_records
from site_images.core.exceptions import FetchError
from site_images.core.settings import settings
from site_images.db.supabase_client import get_supabase

logger = logging.getLogger(__name__)


def fetch_overrides(client: Optional[Client] = None) -> list[OverrideRecord]:
    """Read every image override row, ordered by original path.

    Raises FetchError on any provider or transport failure.
    """
    client = client or get_supabase()
    try:
        response = (
            client.table(settings.OVERRIDES_TABLE)
            .select("*")
            .order("original_path")
            .execute()
        )
    except PostgrestAPIError as exc:
        raise FetchError(f"Image override query failed: {exc.message}") from exc
    except httpx.HTTPStatusError as exc:
        raise FetchError(
            f"Image override query failed ({exc.response.status_code})",
            status_code=exc.response.status_code,
        ) from exc
    except httpx.HTTPError as exc:
        raise FetchError(f"Image override query failed: {exc}") from exc

    records = parse_override_records(response.data or [])
    logger.info(
        "Fetched image overrides.",
        extra={"override_count": len(records), "row_count": len(response.data or [])},
    )
    return records
