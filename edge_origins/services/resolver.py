from __future__ import annotations

"""
Origin resolution for edge requests.

    path ──classify──▶ Category ─┐
                                 ├─▶ catalog.lookup ─▶ Origin
    POP | Region ──────▶ Region ─┘

Every input resolves. An unmatched path is served as Images; a blank POP uses
the default POP; an unknown POP or region string uses the unknown-POP region.
The result is a frozen value, so repeated calls with the same input compare
equal.
"""

import logging
from typing import Optional, Tuple, Union

from edge_origins.core.config import settings
from edge_origins.schemas.enums import DEFAULT_CATEGORY, Region
from edge_origins.schemas.origin import Origin, OriginRoute
from edge_origins.services.catalog import OriginCatalog, get_catalog
from edge_origins.services.classifier import match_category
from edge_origins.services.pops import is_known_pop, normalize_pop, region_for_pop

logger = logging.getLogger(__name__)

PopOrRegion = Union[Region, str, None]


def _region_for_pop_signal(pop: object) -> Tuple[Region, Optional[str], bool]:
    """Return (region, normalized_pop, used_fallback) for a POP code."""
    if pop is not None and not isinstance(pop, str):
        # Not text: nothing to look up
        return settings.UNKNOWN_POP_REGION, None, True
    blank = not (pop or "").strip()
    code = normalize_pop(pop)
    return region_for_pop(code), code, blank or not is_known_pop(code)


def _resolve_region(pop_or_region: PopOrRegion) -> Tuple[Region, Optional[str], bool]:
    """Return (region, normalized_pop, used_fallback)."""
    region = Region.parse(pop_or_region)
    if region is not None:
        return region, None, False
    return _region_for_pop_signal(pop_or_region)


def _route(
    path: Optional[str],
    signal: object,
    region_signal: Tuple[Region, Optional[str], bool],
    catalog: Optional[OriginCatalog],
) -> OriginRoute:
    if catalog is None:
        catalog = get_catalog()

    matched = match_category(path)
    category = matched or DEFAULT_CATEGORY
    region, pop, region_fallback = region_signal

    route = OriginRoute(
        origin=catalog.lookup(category, region),
        category=category,
        region=region,
        pop=pop,
        category_fallback=matched is None,
        region_fallback=region_fallback,
    )
    if route.region_fallback:
        logger.debug("Region fallback for %r → %s", signal, region.value)
    return route


def resolve_route(
    path: Optional[str],
    pop_or_region: PopOrRegion = None,
    *,
    catalog: Optional[OriginCatalog] = None,
) -> OriginRoute:
    """Resolve `path` for an edge node identified by a POP code or a region.

    Args:
        path: Request path, relative or with a leading slash.
        pop_or_region: A `Region`, a region name (`"eu"`), a POP code
            (`"AMS"`), or None for the default POP.
        catalog: Override for tests; defaults to the process-wide catalog.

    Returns:
        OriginRoute with the chosen origin and the signals behind it.
    """
    return _route(path, pop_or_region, _resolve_region(pop_or_region), catalog)


def resolve(
    path: Optional[str],
    pop_or_region: PopOrRegion = None,
    *,
    catalog: Optional[OriginCatalog] = None,
) -> Origin:
    """Origin serving `path` at the given POP or region. Never raises."""
    return resolve_route(path, pop_or_region, catalog=catalog).origin


def resolve_for_pop(
    path: Optional[str],
    pop: Optional[str],
    *,
    catalog: Optional[OriginCatalog] = None,
) -> Origin:
    """Resolve with a POP code; a code that happens to spell a region is still a POP."""
    return _route(path, pop, _region_for_pop_signal(pop), catalog).origin


def resolve_for_region(
    path: Optional[str],
    region: Region,
    *,
    catalog: Optional[OriginCatalog] = None,
) -> Origin:
    return resolve(path, region, catalog=catalog)


__all__ = [
    "PopOrRegion",
    "resolve",
    "resolve_route",
    "resolve_for_pop",
    "resolve_for_region",
]
