from __future__ import annotations

import threading

import pytest
from fastapi.testclient import TestClient

from site_images.api.deps import get_site_asset_service
from site_images.assets.overrides import OverrideRecord
from site_images.delivery.cache import OverrideCache
from site_images.delivery.policy import SiteAssetService
from site_images.main import app

BUCKET_URL = "https://proj.supabase.co/storage/v1/object/public/gallery-images/kitchen.webp"
HERO_OVERRIDE = OverrideRecord(
    id="1",
    original_path="hero-bg.jpg",
    override_url="https://cdn/new-hero.jpg",
    updated_at="2025-01-01T00:00:00.000Z",
)


def _use_service(service: SiteAssetService) -> TestClient:
    app.dependency_overrides[get_site_asset_service] = lambda: service
    return TestClient(app)


@pytest.fixture(autouse=True)
def clear_overrides():
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def ready_client() -> TestClient:
    service = SiteAssetService(OverrideCache(lambda: [HERO_OVERRIDE]))
    service.cache.refresh()
    return _use_service(service)


def test_site_assets_ready(ready_client: TestClient) -> None:
    response = ready_client.get("/api/v1/site-assets")
    assert response.status_code == 200
    body = response.json()
    assert body["ready"] is True
    assert body["assets"]["hero-bg"] == "https://cdn/new-hero.jpg?v=2025-01-01T00%3A00%3A00.000Z"
    assert body["assets"]["logo"] == "/assets/logo.webp"
    assert len(body["assets"]) == 31


def test_single_asset_and_unknown_asset(ready_client: TestClient) -> None:
    response = ready_client.get("/api/v1/site-assets/logo", params={"policy": "static_first"})
    assert response.json() == {"asset_id": "logo", "url": "/assets/logo.webp", "ready": True}

    assert ready_client.get("/api/v1/site-assets/banner").status_code == 404
    assert ready_client.get("/api/v1/site-assets", params={"policy": "eager"}).status_code == 422


def test_site_assets_while_loading() -> None:
    release = threading.Event()

    def fetcher():
        release.wait(timeout=5)
        return [HERO_OVERRIDE]

    service = SiteAssetService(OverrideCache(fetcher))
    client = _use_service(service)
    try:
        deferred = client.get("/api/v1/site-assets/hero-bg").json()
        assert deferred == {"asset_id": "hero-bg", "url": None, "ready": False}

        static_first = client.get("/api/v1/site-assets", params={"policy": "static_first"}).json()
        assert static_first["ready"] is False
        assert static_first["assets"]["hero-bg"] == "/hero-bg.webp"

        assert client.get("/api/v1/health").json()["overrides"] == "loading"
    finally:
        release.set()
        service.cache.wait(timeout=5)


def test_catalog(ready_client: TestClient) -> None:
    body = ready_client.get("/api/v1/site-assets/catalog").json()
    assert body["ready"] is True
    assert body["groups"][0]["label"] == "Hero"
    assert body["groups"][0]["items"][0]["has_override"] is True


def test_variant_endpoint() -> None:
    client = TestClient(app)
    body = client.get(
        "/api/v1/images/variant",
        params={"url": BUCKET_URL, "width": 400, "quality": 150, "format": "webp", "widths": "640,320"},
    ).json()
    assert body["url"] == f"{BUCKET_URL}?width=400&quality=100&format=webp"
    assert body["srcset"].endswith("640w")
    assert body["transformable"] is True

    plain = client.get("/api/v1/images/variant", params={"url": "https://example.com/a.jpg", "width": 400}).json()
    assert plain == {"url": "https://example.com/a.jpg", "srcset": None, "transformable": False}

    assert client.get("/api/v1/images/variant", params={"url": BUCKET_URL, "widths": "a,b"}).status_code == 422


def test_responsive_and_gallery_endpoints() -> None:
    client = TestClient(app)
    body = client.get("/api/v1/images/responsive", params={"url": BUCKET_URL, "widths": "320"}).json()
    assert body["src"] == f"{BUCKET_URL}?width=320&quality=72"
    assert [source["type"] for source in body["sources"]] == ["image/avif", "image/webp"]

    gallery = client.get("/api/v1/images/gallery", params={"url": "/src/assets/editorial-3.jpg"}).json()
    assert gallery == {"src": "/assets/editorial-3.webp", "srcset": None, "sources": []}


def test_health_and_request_id(ready_client: TestClient) -> None:
    response = ready_client.get("/api/v1/health", headers={"X-Request-ID": "abc123"})
    assert response.json() == {"status": "ok", "overrides": "ready", "override_count": 1}
    assert response.headers["X-Request-ID"] == "abc123"
