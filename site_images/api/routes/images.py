from dataclasses import asdict
from typing import Literal, Optional

from fastapi import APIRouter, HTTPException, Query

from site_images.api.schemas import ResponsiveSourcesOut, VariantOut
from site_images.core.settings import settings
from site_images.storage.resolver import resolve_gallery_url
from site_images.storage.transform import (
    DEFAULT_QUALITY,
    DEFAULT_RESPONSIVE_WIDTHS,
    build_responsive_sources,
    build_variant_set,
    build_variant_url,
    is_transformable_url,
)


router = APIRouter(prefix="/images", tags=["images"])


def _parse_widths(widths: Optional[str]) -> tuple[int, ...]:
    if not widths:
        return DEFAULT_RESPONSIVE_WIDTHS
    try:
        return tuple(int(value) for value in widths.split(",") if value.strip())
    except ValueError:
        raise HTTPException(status_code=422, detail="widths must be comma-separated integers")


@router.get("/variant", response_model=VariantOut)
def image_variant(
    url: str = Query(..., min_length=1),
    width: Optional[float] = None,
    quality: Optional[float] = None,
    format: Optional[Literal["avif", "webp"]] = None,
    widths: Optional[str] = None,
) -> VariantOut:
    render_endpoint = settings.IMAGE_RENDER_ENDPOINT
    return VariantOut(
        url=build_variant_url(
            url, width=width, quality=quality, format=format, render_endpoint=render_endpoint
        ),
        srcset=build_variant_set(
            url, _parse_widths(widths), quality=quality, format=format, render_endpoint=render_endpoint
        ),
        transformable=is_transformable_url(url),
    )


@router.get("/responsive", response_model=ResponsiveSourcesOut)
def responsive_sources(
    url: str = Query(..., min_length=1),
    widths: Optional[str] = None,
    quality: float = DEFAULT_QUALITY,
) -> ResponsiveSourcesOut:
    sources = build_responsive_sources(
        url,
        _parse_widths(widths),
        quality=quality,
        render_endpoint=settings.IMAGE_RENDER_ENDPOINT,
    )
    return ResponsiveSourcesOut(**asdict(sources))


@router.get("/gallery", response_model=ResponsiveSourcesOut)
def gallery_image(
    url: Optional[str] = None,
    widths: Optional[str] = None,
    quality: float = DEFAULT_QUALITY,
) -> ResponsiveSourcesOut:
    sources = build_responsive_sources(
        resolve_gallery_url(url),
        _parse_widths(widths),
        quality=quality,
        render_endpoint=settings.IMAGE_RENDER_ENDPOINT,
    )
    return ResponsiveSourcesOut(**asdict(sources))
