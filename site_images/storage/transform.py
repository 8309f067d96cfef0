"""Width/quality/format variants for object-storage image URLs.

Only URLs served from the storage provider's public bucket understand the
``width``, ``quality`` and ``format`` query parameters. Anything else is
passed through untouched, and so is anything we fail to parse: a slightly
oversized image beats a broken one.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

STORAGE_OBJECT_SEGMENT = "/storage/v1/object/public/"
STORAGE_RENDER_SEGMENT = "/storage/v1/render/image/public/"
RENDER_HOST_SUFFIX = ".supabase.co"

DEFAULT_RESPONSIVE_WIDTHS: tuple[int, ...] = (320, 480, 640, 768, 960, 1200)
MODERN_FORMATS: tuple[str, ...] = ("avif", "webp")
DEFAULT_QUALITY = 72


@dataclass(frozen=True)
class ImageSource:
    type: str
    srcset: str


@dataclass(frozen=True)
class ResponsiveSources:
    src: str
    srcset: Optional[str] = None
    sources: list[ImageSource] = field(default_factory=list)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _as_number(value: object) -> Optional[float]:
    if isinstance(value, bool):
        return None
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def normalize_quality(quality: object) -> Optional[int]:
    number = _as_number(quality)
    if number is None:
        return None
    rounded = _round_half_up(number)
    if rounded < 1:
        return None
    return min(rounded, 100)


def normalize_widths(widths: Iterable[object]) -> list[int]:
    normalized = set()
    for width in widths:
        number = _as_number(width)
        if number is None:
            continue
        rounded = _round_half_up(number)
        if rounded > 0:
            normalized.add(rounded)
    return sorted(normalized)


def is_transformable_url(url: Optional[str]) -> bool:
    if not url:
        return False
    return STORAGE_OBJECT_SEGMENT in url or STORAGE_RENDER_SEGMENT in url


def _set_param(params: list[tuple[str, str]], key: str, value: str) -> list[tuple[str, str]]:
    updated = []
    replaced = False
    for name, current in params:
        if name != key:
            updated.append((name, current))
        elif not replaced:
            updated.append((key, value))
            replaced = True
    if not replaced:
        updated.append((key, value))
    return updated


def build_variant_url(
    url: str,
    width: Optional[float] = None,
    quality: Optional[float] = None,
    format: Optional[str] = None,
    render_endpoint: bool = False,
) -> str:
    if not is_transformable_url(url):
        return url

    base, hash_mark, fragment = url.partition("#")
    try:
        parts = urlsplit(base)
        params = parse_qsl(parts.query, keep_blank_values=True)
        hostname = parts.hostname or ""
    except ValueError:
        return url

    path = parts.path
    if (
        render_endpoint
        and hostname.endswith(RENDER_HOST_SUFFIX)
        and STORAGE_OBJECT_SEGMENT in path
    ):
        path = path.replace(STORAGE_OBJECT_SEGMENT, STORAGE_RENDER_SEGMENT, 1)

    width_value = _as_number(width) if width else None
    if width_value:
        params = _set_param(params, "width", str(max(1, _round_half_up(width_value))))

    normalized_quality = normalize_quality(quality)
    if normalized_quality is not None:
        params = _set_param(params, "quality", str(normalized_quality))

    if format in MODERN_FORMATS:
        params = _set_param(params, "format", format)

    rebuilt = urlunsplit((parts.scheme, parts.netloc, path, urlencode(params), ""))
    return f"{rebuilt}{hash_mark}{fragment}"


def build_variant_set(
    url: str,
    widths: Sequence[float] = DEFAULT_RESPONSIVE_WIDTHS,
    quality: Optional[float] = None,
    format: Optional[str] = None,
    render_endpoint: bool = False,
) -> Optional[str]:
    if not is_transformable_url(url):
        return None

    normalized = normalize_widths(widths)
    if not normalized:
        return None

    return ", ".join(
        f"{build_variant_url(url, width=width, quality=quality, format=format, render_endpoint=render_endpoint)} {width}w"
        for width in normalized
    )


def build_responsive_sources(
    url: str,
    widths: Sequence[float] = DEFAULT_RESPONSIVE_WIDTHS,
    quality: Optional[float] = DEFAULT_QUALITY,
    render_endpoint: bool = False,
) -> ResponsiveSources:
    """Everything a ``<picture>`` element needs for one image.

    Non-bucket URLs come back as a bare ``src`` with no srcset or sources.
    """
    if not is_transformable_url(url):
        return ResponsiveSources(src=url)

    normalized = normalize_widths(widths) or list(DEFAULT_RESPONSIVE_WIDTHS)
    sources = []
    for image_format in MODERN_FORMATS:
        srcset = build_variant_set(
            url, normalized, quality=quality, format=image_format, render_endpoint=render_endpoint
        )
        if srcset:
            sources.append(ImageSource(type=f"image/{image_format}", srcset=srcset))

    return ResponsiveSources(
        src=build_variant_url(
            url, width=normalized[0], quality=quality, render_endpoint=render_endpoint
        ),
        srcset=build_variant_set(url, normalized, quality=quality, render_endpoint=render_endpoint),
        sources=sources,
    )
