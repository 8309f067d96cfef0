from __future__ import annotations

from site_images.assets.overrides import (
    OverrideRecord,
    parse_override_records,
    resolve_all,
    resolve_one,
    with_cache_bust,
)
from site_images.assets.registry import SITE_ASSETS, AssetCategory, AssetEntry

HERO = AssetEntry("hero-bg", "hero-bg.jpg", "built-in://hero", "Hero Background", AssetCategory.HERO)


def _override(path: str, url: str, updated_at: str | None = None, id: str = "1") -> OverrideRecord:
    return OverrideRecord(id=id, original_path=path, override_url=url, updated_at=updated_at)


def test_missing_overrides_fall_back_to_built_in() -> None:
    assert resolve_one(HERO, None) == "built-in://hero"
    assert resolve_one(HERO, []) == "built-in://hero"
    assert resolve_one(HERO, [_override("logo.webp", "https://x/logo.png")]) == "built-in://hero"


def test_matching_override_takes_precedence() -> None:
    result = resolve_one(HERO, [_override("hero-bg.jpg", "https://cdn/new-hero.jpg")])
    assert result == "https://cdn/new-hero.jpg"


def test_cache_bust_uses_encoded_updated_at() -> None:
    override = _override("hero-bg.jpg", "https://x/y.jpg", "2024-06-01T00:00:00.000Z")
    assert resolve_one(HERO, [override]) == "https://x/y.jpg?v=2024-06-01T00%3A00%3A00.000Z"


def test_cache_bust_appends_to_existing_query() -> None:
    override = _override("hero-bg.jpg", "https://x/y.jpg?a=1", "2024-06-01T00:00:00.000Z")
    assert resolve_one(HERO, [override]) == "https://x/y.jpg?a=1&v=2024-06-01T00%3A00%3A00.000Z"


def test_empty_updated_at_leaves_url_verbatim() -> None:
    assert resolve_one(HERO, [_override("hero-bg.jpg", "https://x/y.jpg", "")]) == "https://x/y.jpg"


def test_cache_bust_matches_uri_component_encoding() -> None:
    assert with_cache_bust("https://x/y.jpg", "2024-06-01 10:00+10:00") == (
        "https://x/y.jpg?v=2024-06-01%2010%3A00%2B10%3A00"
    )
    assert with_cache_bust("https://x/y.jpg#top", "now") == "https://x/y.jpg?v=now#top"


def test_malformed_updated_at_is_passed_through() -> None:
    assert with_cache_bust("https://x/y.jpg", "not-a-date") == "https://x/y.jpg?v=not-a-date"


def test_first_matching_override_wins() -> None:
    overrides = [
        _override("hero-bg.jpg", "https://cdn/first.jpg", id="1"),
        _override("hero-bg.jpg", "https://cdn/second.jpg", id="2"),
    ]
    assert resolve_one(HERO, overrides) == "https://cdn/first.jpg"


def test_path_match_is_exact() -> None:
    overrides = [_override("/hero-bg.jpg", "https://cdn/a.jpg"), _override("HERO-BG.JPG", "https://cdn/b.jpg")]
    assert resolve_one(HERO, overrides) == "built-in://hero"


def test_resolve_all_has_one_key_per_entry() -> None:
    overrides = [
        _override("hero-bg.jpg", "https://cdn/hero.jpg"),
        _override("logo.webp", "https://cdn/logo.png"),
        _override("not-registered.jpg", "https://cdn/other.jpg"),
    ]
    for snapshot in (None, [], overrides):
        resolved = resolve_all(SITE_ASSETS, snapshot)
        assert list(resolved) == [entry.id for entry in SITE_ASSETS]

    resolved = resolve_all(SITE_ASSETS, overrides)
    assert resolved["hero-bg"] == "https://cdn/hero.jpg"
    assert resolved["logo"] == "https://cdn/logo.png"
    assert resolved["editorial-1"] == "/assets/editorial-1.webp"


def test_parse_override_records_ignores_extra_fields_and_bad_rows() -> None:
    rows = [
        {
            "id": "abc",
            "original_path": "hero-bg.jpg",
            "override_url": "https://cdn/hero.jpg",
            "updated_at": "2025-01-01T00:00:00.000Z",
            "created_by": "admin",
        },
        {"id": "def", "original_path": "logo.webp"},
        {"id": "ghi", "original_path": "logo.webp", "override_url": "https://cdn/logo.png", "updated_at": None},
    ]
    records = parse_override_records(rows)
    assert [record.id for record in records] == ["abc", "ghi"]
    assert records[1].updated_at is None


def test_blank_override_url_rows_are_dropped() -> None:
    rows = [
        {"id": "1", "original_path": "hero-bg.jpg", "override_url": ""},
        {"id": "2", "original_path": "hero-bg.jpg", "override_url": "https://cdn/hero.jpg"},
    ]
    records = parse_override_records(rows)
    assert [record.id for record in records] == ["2"]
    assert resolve_one(HERO, records) == "https://cdn/hero.jpg"


def test_cache_bust_leaves_rest_of_url_untouched() -> None:
    assert with_cache_bust("HTTPS://Cdn.Example/y.jpg", "t") == "HTTPS://Cdn.Example/y.jpg?v=t"
    assert with_cache_bust("https://x/y.jpg#", "t") == "https://x/y.jpg?v=t#"
    assert with_cache_bust("https://x/y.jpg?", "t") == "https://x/y.jpg?v=t"
    assert with_cache_bust("https://x/a%20b.jpg?a=1#top", "t") == "https://x/a%20b.jpg?a=1&v=t#top"
