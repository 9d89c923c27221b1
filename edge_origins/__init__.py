"""Edge Origins: pick the storage origin for a CDN edge request.

    from edge_origins import resolve, Region

    origin = resolve("games/cover.png", "AMS")
    origin.backend_name, origin.bucket_name, origin.bucket_host
"""

from edge_origins.core.exceptions import CatalogConfigurationError
from edge_origins.schemas.enums import BackendName, Category, Region
from edge_origins.schemas.origin import Origin, OriginRoute
from edge_origins.services.catalog import OriginCatalog, build_catalog, get_catalog
from edge_origins.services.classifier import classify
from edge_origins.services.pops import region_for_pop, region_from_bucket_host
from edge_origins.services.resolver import (
    resolve,
    resolve_for_pop,
    resolve_for_region,
    resolve_route,
)

__all__ = [
    "BackendName",
    "CatalogConfigurationError",
    "Category",
    "Origin",
    "OriginCatalog",
    "OriginRoute",
    "Region",
    "build_catalog",
    "classify",
    "get_catalog",
    "region_for_pop",
    "region_from_bucket_host",
    "resolve",
    "resolve_for_pop",
    "resolve_for_region",
    "resolve_route",
]
