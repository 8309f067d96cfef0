from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field


class ResolvedAssetsOut(BaseModel):
    assets: dict[str, str]
    ready: bool


class ResolvedAssetOut(BaseModel):
    asset_id: str
    url: Optional[str] = None
    ready: bool


class CatalogItemOut(BaseModel):
    id: str
    path: str
    label: str
    built_in_url: str
    url: str
    has_override: bool


class CatalogGroupOut(BaseModel):
    category: str
    label: str
    items: list[CatalogItemOut]


class CatalogOut(BaseModel):
    ready: bool
    groups: list[CatalogGroupOut]


class VariantOut(BaseModel):
    url: str
    srcset: Optional[str] = None
    transformable: bool


class ImageSourceOut(BaseModel):
    type: str
    srcset: str


class ResponsiveSourcesOut(BaseModel):
    src: str
    srcset: Optional[str] = None
    sources: list[ImageSourceOut] = Field(default_factory=list)


class HealthOut(BaseModel):
    status: Literal["ok"] = "ok"
    overrides: Literal["loading", "ready", "error"]
    override_count: int = 0
