"""Built-in site image registry.

Every image slot on the marketing site has a stable logical id and an
original ``path``. Admins can replace any slot at runtime by storing an
override keyed on that path; see :mod:`site_images.assets.overrides`.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from site_images.core.exceptions import ConfigError


class AssetCategory(str, Enum):
    HERO = "hero"
    LOGO = "logo"
    EDITORIAL = "editorial"
    LIFESTAGE = "lifestage"
    LIFESTYLE = "lifestyle"
    SERVICE = "service"


CATEGORY_LABELS = {
    AssetCategory.HERO: "Hero",
    AssetCategory.LOGO: "Logo",
    AssetCategory.EDITORIAL: "Editorial / Gallery",
    AssetCategory.LIFESTAGE: "Life Stages",
    AssetCategory.LIFESTYLE: "Lifestyle",
    AssetCategory.SERVICE: "Services",
}


@dataclass(frozen=True)
class AssetEntry:
    id: str
    path: str
    built_in_url: str
    label: str
    category: AssetCategory


def _bundled(name: str, label: str, category: AssetCategory) -> AssetEntry:
    return AssetEntry(
        id=name,
        path=f"{name}.jpg",
        built_in_url=f"/assets/{name}.webp",
        label=label,
        category=category,
    )


SITE_ASSETS: tuple[AssetEntry, ...] = (
    AssetEntry("hero-bg", "hero-bg.jpg", "/hero-bg.webp", "Hero Background", AssetCategory.HERO),
    AssetEntry("logo", "logo.webp", "/assets/logo.webp", "Site Logo", AssetCategory.LOGO),
    *(
        _bundled(f"editorial-{n}", f"Editorial {n}", AssetCategory.EDITORIAL)
        for n in range(1, 11)
    ),
    _bundled("lifestage-forever", "Forever Home", AssetCategory.LIFESTAGE),
    _bundled("lifestage-future", "Future Ready", AssetCategory.LIFESTAGE),
    _bundled("lifestage-growing", "Growing Family", AssetCategory.LIFESTAGE),
    _bundled("lifestage-wellness", "Wellness Focus", AssetCategory.LIFESTAGE),
    _bundled("lifestyle-bathroom", "Bathroom Lifestyle", AssetCategory.LIFESTYLE),
    _bundled("lifestyle-calm", "Calm Atmosphere", AssetCategory.LIFESTYLE),
    _bundled("lifestyle-morning", "Morning Routine", AssetCategory.LIFESTYLE),
    _bundled("lifestyle-movement", "Movement Space", AssetCategory.LIFESTYLE),
    _bundled("lifestyle-storage", "Storage Solutions", AssetCategory.LIFESTYLE),
    _bundled("service-bathroom", "Bathroom Service", AssetCategory.SERVICE),
    _bundled("service-bg-bathroom", "Bathroom Background", AssetCategory.SERVICE),
    _bundled("service-bg-extensions", "Extensions Background", AssetCategory.SERVICE),
    _bundled("service-bg-kitchen", "Kitchen Background", AssetCategory.SERVICE),
    _bundled("service-bg-living", "Living Background", AssetCategory.SERVICE),
    _bundled("service-bg-whole-home", "Whole Home Background", AssetCategory.SERVICE),
    _bundled("service-extensions", "Extensions Service", AssetCategory.SERVICE),
    _bundled("service-kitchen", "Kitchen Service", AssetCategory.SERVICE),
    _bundled("service-living", "Living Service", AssetCategory.SERVICE),
    _bundled("service-whole-home", "Whole Home Service", AssetCategory.SERVICE),
)

_ASSETS_BY_ID = {entry.id: entry for entry in SITE_ASSETS}


def list_assets() -> tuple[AssetEntry, ...]:
    return SITE_ASSETS


def get_asset(asset_id: str) -> Optional[AssetEntry]:
    return _ASSETS_BY_ID.get(asset_id)


def category_label(category: AssetCategory | str) -> str:
    try:
        return CATEGORY_LABELS[AssetCategory(category)]
    except (ValueError, KeyError) as exc:
        raise ConfigError(f"Unknown asset category: {category!r}") from exc


def validate_registry(entries: Iterable[AssetEntry]) -> None:
    """Raise ConfigError if ids or paths repeat, or a category has no label."""
    entries = list(entries)
    for field in ("id", "path"):
        counts = Counter(getattr(entry, field) for entry in entries)
        duplicates = sorted(value for value, count in counts.items() if count > 1)
        if duplicates:
            raise ConfigError(f"Duplicate asset {field}s: {', '.join(duplicates)}")
    for entry in entries:
        category_label(entry.category)


validate_registry(SITE_ASSETS)
