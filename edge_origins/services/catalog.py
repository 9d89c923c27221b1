from __future__ import annotations

"""
Edge Origins • Origin Catalog
=============================

Typed registry of (category × region) → Origin, built once per process when
this module is imported.

Bucket layout (one storage host per region, one bucket per category):

    Category       EU bucket              US bucket
    ─────────────  ─────────────────────  ───────────────────────
    images         images-shobl-cache     images-shobl-cache-us
    games          games-shobl            games-shobl-us
    music          music-shobl            music-shobl-us
    video          videos-shobl           videos-shobl-us
    comics         comics-shobl           comics-shobl-us
    art            art-shobl              art-shobl-us
    public_images  images-public-seo      images-public-seo-us

Invariants (checked at build time)
----------------------------------
- Every (category, region) pair has an entry.
- An entry's backend is the one owned by its region.
- An entry's storage host carries a region token of the same region.

The legacy "default origin" for a region is the Images entry, and the legacy
POP → origin view is derived from it; neither is stored separately.
"""

import logging
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Tuple

from edge_origins.core.config import Settings, settings as default_settings
from edge_origins.core.exceptions import CatalogConfigurationError
from edge_origins.schemas.enums import DEFAULT_CATEGORY, Category, Region
from edge_origins.schemas.origin import Origin
from edge_origins.services.pops import (
    known_pops,
    region_for_host_token,
    region_for_pop,
    region_from_bucket_host,
)

logger = logging.getLogger(__name__)

CatalogKey = Tuple[Category, Region]

# Bucket names per category: (EU, US)
BUCKETS: Mapping[Category, Tuple[str, str]] = MappingProxyType({
    Category.IMAGES: ("images-shobl-cache", "images-shobl-cache-us"),
    Category.GAMES: ("games-shobl", "games-shobl-us"),
    Category.MUSIC: ("music-shobl", "music-shobl-us"),
    Category.VIDEO: ("videos-shobl", "videos-shobl-us"),
    Category.COMICS: ("comics-shobl", "comics-shobl-us"),
    Category.ART: ("art-shobl", "art-shobl-us"),
    Category.PUBLIC_IMAGES: ("images-public-seo", "images-public-seo-us"),
})


def build_rows(cfg: Optional[Settings] = None) -> Dict[CatalogKey, Origin]:
    """Expand `BUCKETS` into catalog rows using the configured storage hosts."""
    cfg = cfg or default_settings
    rows: Dict[CatalogKey, Origin] = {}
    for category, (eu_bucket, us_bucket) in BUCKETS.items():
        for region, bucket in ((Region.EU, eu_bucket), (Region.US, us_bucket)):
            rows[(category, region)] = Origin(
                backend_name=region.backend.value,
                bucket_name=bucket,
                bucket_host=cfg.bucket_host_for(region),
            )
    return rows


def _describe_inconsistency(key: CatalogKey, origin: Origin) -> Optional[str]:
    category, region = key
    label = f"{category.value}×{region.value}"
    if origin.backend_name != region.backend.value:
        return f"{label}: backend {origin.backend_name!r} does not serve region {region.value!r}"
    token = region_from_bucket_host(origin.bucket_host)
    if token is None:
        return f"{label}: bucket host {origin.bucket_host!r} is not a recognized storage host"
    if region_for_host_token(token) is not region:
        return f"{label}: bucket host region {token!r} does not match region {region.value!r}"
    return None


class OriginCatalog:
    """Read-only (category, region) → Origin registry.

    Raises `CatalogConfigurationError` from the constructor when a pair is
    missing or an entry contradicts its region. After construction every
    lookup succeeds.
    """

    def __init__(self, rows: Mapping[CatalogKey, Origin]) -> None:
        missing = [(c, r) for c in Category for r in Region if (c, r) not in rows]
        inconsistent: List[str] = []
        for key, origin in rows.items():
            problem = _describe_inconsistency(key, origin)
            if problem:
                inconsistent.append(problem)
        if missing or inconsistent:
            err = CatalogConfigurationError(
                "Origin catalog failed validation",
                missing=missing,
                inconsistent=inconsistent,
            )
            logger.error("Origin catalog rejected: %s", err.to_dict())
            raise err

        # Stable order: category declaration order, then region
        self._rows: Mapping[CatalogKey, Origin] = MappingProxyType(
            {(c, r): rows[(c, r)] for c in Category for r in Region}
        )

    def __len__(self) -> int:
        return len(self._rows)

    def __contains__(self, key: object) -> bool:
        return key in self._rows

    def lookup(self, category: Category, region: Region) -> Origin:
        return self._rows[(category, region)]

    def default_origin(self, region: Region) -> Origin:
        """Origin used when no category applies: the Images entry."""
        return self.lookup(DEFAULT_CATEGORY, region)

    def origin_for_pop(self, pop: Optional[str]) -> Origin:
        """Legacy POP → default origin, for callers without category routing."""
        return self.default_origin(region_for_pop(pop))

    def pop_origin_table(self) -> Mapping[str, Origin]:
        """Legacy POP → origin table, derived from the POP table and Images entries."""
        return MappingProxyType(
            {pop: self.default_origin(region) for pop, region in known_pops().items()}
        )

    def entries(self) -> Iterator[Tuple[Category, Region, Origin]]:
        for (category, region), origin in self._rows.items():
            yield category, region, origin


def build_catalog(cfg: Optional[Settings] = None) -> OriginCatalog:
    """Build and validate a catalog from `cfg` (the process settings by default)."""
    cfg = cfg or default_settings
    built = OriginCatalog(build_rows(cfg))
    logger.info(
        "Origin catalog built: %d entries (EU host=%s, US host=%s)",
        len(built),
        cfg.EU_BUCKET_HOST,
        cfg.US_BUCKET_HOST,
    )
    return built


# Singleton instance. Built on import, so a configuration defect stops the
# process before the first lookup.
catalog = build_catalog()


def get_catalog() -> OriginCatalog:
    """Process-wide catalog built when this module was imported."""
    return catalog


__all__ = [
    "BUCKETS",
    "CatalogKey",
    "OriginCatalog",
    "build_catalog",
    "build_rows",
    "catalog",
    "get_catalog",
]
