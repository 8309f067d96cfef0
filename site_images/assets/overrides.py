from __future__ import annotations

import logging
from typing import Any, Iterable, Optional, Sequence
from urllib.parse import quote, urlsplit

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from site_images.assets.registry import AssetEntry

logger = logging.getLogger(__name__)

# Characters encodeURIComponent leaves alone, beyond what quote() already keeps.
_URI_COMPONENT_SAFE = "!*'()"


class OverrideRecord(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str
    original_path: str
    override_url: str = Field(..., min_length=1)
    updated_at: Optional[str] = None


def parse_override_records(rows: Iterable[Any]) -> list[OverrideRecord]:
    records = []
    for row in rows or []:
        try:
            records.append(OverrideRecord.model_validate(row))
        except ValidationError as exc:
            logger.warning(
                "Skipping malformed image override row.",
                extra={"row": row, "errors": exc.errors(include_url=False)},
            )
    return records


def with_cache_bust(url: str, updated_at: Optional[str]) -> str:
    """Append ``v=<updated_at>`` so a replaced image at the same URL misses caches."""
    if not updated_at:
        return url
    version = f"v={quote(str(updated_at), safe=_URI_COMPONENT_SAFE)}"
    # Only the query changes; scheme, host and path stay byte-for-byte.
    base, hash_mark, fragment = url.partition("#")
    try:
        has_query = bool(urlsplit(base).query)
    except ValueError:
        has_query = "?" in base
    if has_query:
        separator = "&"
    elif base.endswith("?"):
        separator = ""
    else:
        separator = "?"
    return f"{base}{separator}{version}{hash_mark}{fragment}"


def find_override(
    path: str, overrides: Sequence[OverrideRecord]
) -> Optional[OverrideRecord]:
    # Duplicate rows for one path are possible; the first in fetch order wins.
    for override in overrides:
        if override.original_path == path:
            return override
    return None


def resolve_one(
    entry: AssetEntry, overrides: Optional[Sequence[OverrideRecord]]
) -> str:
    if overrides is None:
        return entry.built_in_url
    override = find_override(entry.path, overrides)
    if override is None:
        return entry.built_in_url
    return with_cache_bust(override.override_url, override.updated_at)


def resolve_all(
    entries: Iterable[AssetEntry], overrides: Optional[Sequence[OverrideRecord]]
) -> dict[str, str]:
    return {entry.id: resolve_one(entry, overrides) for entry in entries}
