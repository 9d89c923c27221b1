# tests/test_routing/test_catalog.py
from concurrent.futures import ThreadPoolExecutor

import pytest
from pydantic import ValidationError

from edge_origins.core.config import Settings
from edge_origins.core.exceptions import CatalogConfigurationError
from edge_origins.schemas.enums import Category, Region
from edge_origins.schemas.origin import Origin
from edge_origins.services import catalog as catalog_module
from edge_origins.services.catalog import BUCKETS, OriginCatalog, build_catalog, build_rows, get_catalog
from edge_origins.services.classifier import classify
from edge_origins.services.pops import known_pops, region_for_host_token, region_for_pop, region_from_bucket_host
from edge_origins.services.resolver import resolve


EU_HOST = "s3.eu-central-003.backblazeb2.com"
US_HOST = "s3.us-west-004.backblazeb2.com"


# ─────────────────────────────────────────────────────────────
# Completeness & shape
# ─────────────────────────────────────────────────────────────

def test_catalog_covers_every_category_and_region(catalog):
    assert len(catalog) == 14
    for category in Category:
        for region in Region:
            origin = catalog.lookup(category, region)
            assert origin.backend_name and origin.bucket_name and origin.bucket_host
            assert (category, region) in catalog


def test_backend_follows_region(catalog):
    for category, region, origin in catalog.entries():
        expected = "eu_origin" if region is Region.EU else "us_origin"
        assert origin.backend_name == expected


def test_bucket_hosts_are_consistent_with_region(catalog):
    for _, region, origin in catalog.entries():
        token = region_from_bucket_host(origin.bucket_host)
        assert token is not None
        assert region_for_host_token(token) is region


def test_known_buckets(catalog):
    assert catalog.lookup(Category.GAMES, Region.EU) == Origin(
        backend_name="eu_origin", bucket_name="games-shobl", bucket_host=EU_HOST
    )
    assert catalog.lookup(Category.VIDEO, Region.US).bucket_name == "videos-shobl-us"
    assert catalog.lookup(Category.PUBLIC_IMAGES, Region.EU).bucket_name == "images-public-seo"
    assert catalog.lookup(Category.IMAGES, Region.US) == Origin(
        backend_name="us_origin", bucket_name="images-shobl-cache-us", bucket_host=US_HOST
    )


def test_entries_are_in_stable_order(catalog):
    keys = [(c, r) for c, r, _ in catalog.entries()]
    assert keys == [(c, r) for c in Category for r in Region]


def test_bucket_names_are_unique():
    names = [name for pair in BUCKETS.values() for name in pair]
    assert len(names) == len(set(names)) == 14


# ─────────────────────────────────────────────────────────────
# Defaults & legacy POP view
# ─────────────────────────────────────────────────────────────

def test_default_origin_is_the_images_entry(catalog):
    for region in Region:
        assert catalog.default_origin(region) == catalog.lookup(Category.IMAGES, region)


def test_legacy_pop_table_is_derived_from_images_entries(catalog):
    table = catalog.pop_origin_table()
    assert set(table) == set(known_pops())
    for pop, origin in table.items():
        assert origin == catalog.lookup(Category.IMAGES, region_for_pop(pop))
    assert table["AMS"].backend_name == "eu_origin"
    assert table["SJC"].backend_name == "us_origin"


def test_origin_for_pop_handles_unknown_and_blank(catalog):
    assert catalog.origin_for_pop("ZZZ") == catalog.default_origin(Region.US)
    assert catalog.origin_for_pop(None) == catalog.origin_for_pop("SJC")
    assert catalog.origin_for_pop("fra") == catalog.default_origin(Region.EU)


# ─────────────────────────────────────────────────────────────
# Build-time validation (fail fast)
# ─────────────────────────────────────────────────────────────

def test_missing_entry_fails_at_construction():
    rows = build_rows()
    del rows[(Category.ART, Region.EU)]
    with pytest.raises(CatalogConfigurationError) as exc:
        OriginCatalog(rows)
    assert exc.value.missing == [(Category.ART, Region.EU)]
    assert "art×eu" in str(exc.value)
    assert exc.value.to_dict()["missing"] == [["art", "eu"]]


def test_empty_catalog_reports_every_pair():
    with pytest.raises(CatalogConfigurationError) as exc:
        OriginCatalog({})
    assert len(exc.value.missing) == 14


def test_backend_region_mismatch_fails_at_construction():
    rows = build_rows()
    rows[(Category.MUSIC, Region.EU)] = Origin(
        backend_name="us_origin", bucket_name="music-shobl", bucket_host=EU_HOST
    )
    with pytest.raises(CatalogConfigurationError) as exc:
        OriginCatalog(rows)
    assert exc.value.missing == []
    assert len(exc.value.inconsistent) == 1
    assert "music×eu" in exc.value.inconsistent[0]


def test_host_region_mismatch_fails_at_construction():
    rows = build_rows()
    rows[(Category.COMICS, Region.US)] = Origin(
        backend_name="us_origin", bucket_name="comics-shobl-us", bucket_host=EU_HOST
    )
    with pytest.raises(CatalogConfigurationError, match="comics×us"):
        OriginCatalog(rows)


def test_unrecognized_storage_host_fails_at_construction():
    with pytest.raises(CatalogConfigurationError):
        OriginCatalog(build_rows(Settings(EU_BUCKET_HOST="storage.example.com")))


def test_storage_hosts_come_from_settings():
    cfg = Settings(EU_BUCKET_HOST="https://S3.eu-central-005.backblazeb2.com/")
    rows = build_rows(cfg)
    catalog = OriginCatalog(rows)
    assert catalog.lookup(Category.ART, Region.EU).bucket_host == "s3.eu-central-005.backblazeb2.com"
    assert catalog.lookup(Category.ART, Region.US).bucket_host == US_HOST


# ─────────────────────────────────────────────────────────────
# Origin record invariants
# ─────────────────────────────────────────────────────────────

def test_origin_rejects_unknown_backend():
    with pytest.raises(ValidationError):
        Origin(backend_name="ap_origin", bucket_name="b", bucket_host=EU_HOST)


@pytest.mark.parametrize("field", ["backend_name", "bucket_name", "bucket_host"])
def test_origin_rejects_empty_fields(field):
    values = {"backend_name": "eu_origin", "bucket_name": "b", "bucket_host": EU_HOST}
    values[field] = "  "
    with pytest.raises(ValidationError):
        Origin(**values)


def test_origin_is_immutable_and_hashable(catalog):
    origin = catalog.lookup(Category.GAMES, Region.US)
    with pytest.raises(ValidationError):
        origin.bucket_name = "other"
    assert len({origin, catalog.lookup(Category.GAMES, Region.US)}) == 1


# ─────────────────────────────────────────────────────────────
# Process-wide instance
# ─────────────────────────────────────────────────────────────

def test_get_catalog_returns_the_import_time_instance():
    assert get_catalog() is catalog_module.catalog
    assert get_catalog() is get_catalog()
    assert len(get_catalog()) == 14


def test_build_catalog_validates_given_settings():
    built = build_catalog(Settings(US_BUCKET_HOST="s3.us-east-005.backblazeb2.com"))
    assert built is not get_catalog()
    assert built.lookup(Category.GAMES, Region.US).bucket_host == "s3.us-east-005.backblazeb2.com"
    with pytest.raises(CatalogConfigurationError):
        build_catalog(Settings(US_BUCKET_HOST="storage.example.com"))


def test_misconfigured_catalog_fails_the_import(import_in_subprocess):
    proc = import_in_subprocess("edge_origins.services.catalog", EU_BUCKET_HOST="s3.us-west-004.backblazeb2.com")
    assert proc.returncode != 0
    assert "CatalogConfigurationError" in proc.stderr


def test_concurrent_resolution_never_builds_a_catalog(monkeypatch):
    def _no_build(self, rows):
        raise AssertionError("catalog rebuilt during lookup")

    monkeypatch.setattr(OriginCatalog, "__init__", _no_build)

    signals = ["AMS", "SJC", "eu", Region.US, None, "ZZZ", "fra"]
    paths = ["games/a.png", "/art/b.jpg", "audio/c.mp3", "videos/d.mp4", "other/e"]
    cases = [(p, s) for p in paths for s in signals] * 20

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(lambda case: resolve(*case), cases))

    process_catalog = get_catalog()
    for (path, signal), origin in zip(cases, results):
        region = Region.parse(signal) or region_for_pop(signal)
        assert origin == process_catalog.lookup(classify(path), region)
