from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from site_images.assets.overrides import find_override, resolve_all
from site_images.assets.registry import SITE_ASSETS, AssetEntry, category_label
from site_images.delivery.cache import (
    OverrideCache,
    OverridesFailed,
    OverridesLoading,
    OverridesReady,
    OverrideState,
)


class LoadingPolicy(str, Enum):
    # Render nothing until overrides are known, so a replaced image never flashes.
    DEFERRED = "deferred"
    # Render the built-in image at once; used for above-the-fold assets.
    STATIC_FIRST = "static_first"


@dataclass(frozen=True)
class ResolvedAssets:
    assets: dict[str, str]
    ready: bool


@dataclass(frozen=True)
class CatalogItem:
    id: str
    path: str
    label: str
    built_in_url: str
    url: str
    has_override: bool


@dataclass(frozen=True)
class CatalogGroup:
    category: str
    label: str
    items: list[CatalogItem]


@dataclass(frozen=True)
class Catalog:
    ready: bool
    groups: list[CatalogGroup]


def resolve_for_state(
    entries: Sequence[AssetEntry],
    state: OverrideState,
    policy: LoadingPolicy = LoadingPolicy.DEFERRED,
) -> ResolvedAssets:
    if isinstance(state, OverridesReady):
        return ResolvedAssets(assets=resolve_all(entries, state.records), ready=True)
    if isinstance(state, OverridesFailed):
        return ResolvedAssets(assets=resolve_all(entries, None), ready=True)
    if isinstance(state, OverridesLoading):
        if policy is LoadingPolicy.STATIC_FIRST:
            return ResolvedAssets(assets=resolve_all(entries, None), ready=False)
        return ResolvedAssets(assets={entry.id: "" for entry in entries}, ready=False)
    raise TypeError(f"Unhandled override state: {state!r}")


class SiteAssetService:
    """Resolved site image URLs for rendering components."""

    def __init__(
        self, cache: OverrideCache, entries: Sequence[AssetEntry] = SITE_ASSETS
    ) -> None:
        self.cache = cache
        self.entries = tuple(entries)
        self._entries_by_id = {entry.id: entry for entry in self.entries}

    def get_all_resolved_assets(
        self, policy: LoadingPolicy = LoadingPolicy.DEFERRED
    ) -> ResolvedAssets:
        return resolve_for_state(self.entries, self.cache.get_state(), policy)

    def get_resolved_asset(
        self, asset_id: str, policy: LoadingPolicy = LoadingPolicy.DEFERRED
    ) -> Optional[str]:
        if asset_id not in self._entries_by_id:
            return None
        resolved = self.get_all_resolved_assets(policy)
        return resolved.assets.get(asset_id) or None

    def has_asset(self, asset_id: str) -> bool:
        return asset_id in self._entries_by_id

    def catalog(self) -> Catalog:
        state = self.cache.get_state()
        records = state.records if isinstance(state, OverridesReady) else ()
        resolved = resolve_for_state(self.entries, state, LoadingPolicy.STATIC_FIRST)

        groups: dict[str, CatalogGroup] = {}
        for entry in self.entries:
            key = entry.category.value
            if key not in groups:
                groups[key] = CatalogGroup(
                    category=key, label=category_label(entry.category), items=[]
                )
            groups[key].items.append(
                CatalogItem(
                    id=entry.id,
                    path=entry.path,
                    label=entry.label,
                    built_in_url=entry.built_in_url,
                    url=resolved.assets[entry.id],
                    has_override=find_override(entry.path, records) is not None,
                )
            )
        return Catalog(ready=resolved.ready, groups=list(groups.values()))
