from __future__ import annotations

"""
Edge Origins • POP → Region
===========================

Simple mapping from point-of-presence code to serving region:

    North America, South America, Asia/Pacific, Middle East  => US
    Europe, Africa                                           => EU

Fallbacks
---------
- Blank POP (local test server, missing header) → region of `DEFAULT_POP`.
- POP not in the table → `UNKNOWN_POP_REGION` (US unless configured).

The storage-host helpers at the bottom are for catalog consistency checks and
tests; they are not on the resolution path.
"""

import logging
import re
from types import MappingProxyType
from typing import Mapping, Optional

from edge_origins.core.config import settings
from edge_origins.schemas.enums import Region

logger = logging.getLogger(__name__)

EU, US = Region.EU, Region.US

POP_REGIONS: Mapping[str, Region] = MappingProxyType({
    "AMS": EU,  # Amsterdam
    "WDC": US,  # Washington DC
    "IAD": US,
    "BWI": US,
    "DCA": US,
    "ATL": US,  # Atlanta
    "FTY": US,
    "PDK": US,
    "AKL": US,  # Auckland
    "BOG": US,  # Bogota
    "BOS": US,  # Boston
    "BNE": US,  # Brisbane
    "EZE": US,  # Buenos Aires
    "CPT": EU,  # Cape Town
    "MAA": US,  # Chennai
    "ORD": US,  # Chicago
    "LOT": US,
    "CHI": US,
    "MDW": US,
    "PWK": US,
    "CMH": US,  # Columbus
    "LCK": US,
    "CPH": EU,  # Copenhagen
    "CWB": US,  # Curitiba
    "DFW": US,  # Dallas
    "DAL": US,
    "DEL": US,  # Delhi
    "DEN": US,  # Denver
    "DTW": US,  # Detroit
    "DXB": US,  # Dubai
    "DUB": EU,  # Dublin
    "FOR": US,  # Fortaleza
    "FRA": EU,  # Frankfurt
    "HHN": EU,
    "FJR": US,  # Fujairah
    "GNV": US,  # Gainesville
    "ACC": EU,  # Accra
    "HEL": EU,  # Helsinki
    "HKG": US,  # Hong Kong
    "HNL": US,  # Honolulu
    "IAH": US,  # Houston
    "HYD": US,  # Hyderabad
    "JAX": US,  # Jacksonville
    "JNB": EU,  # Johannesburg
    "MCI": US,  # Kansas City
    "CCU": US,  # Kolkata
    "KUL": US,  # Kuala Lumpur
    "LIM": US,  # Lima
    "LCY": EU,  # London
    "LHR": EU,
    "LON": EU,
    "LGB": US,  # Los Angeles
    "SMO": US,
    "BUR": US,
    "MAD": EU,  # Madrid
    "MAN": EU,  # Manchester
    "MNL": US,  # Manila
    "MRS": EU,  # Marseille
    "MEL": US,  # Melbourne
    "MIA": US,  # Miami
    "MXP": EU,  # Milan
    "LIN": EU,
    "MSP": US,  # Minneapolis
    "STP": US,
    "YUL": US,  # Montreal
    "BOM": US,  # Mumbai
    "MUC": EU,  # Munich
    "LGA": US,  # New York
    "EWR": US,
    "ITM": US,  # Osaka
    "OSL": EU,  # Oslo
    "PAO": US,  # Palo Alto
    "CDG": EU,  # Paris
    "PER": US,  # Perth
    "PHX": US,  # Phoenix
    "PDX": US,  # Portland
    "GIG": US,  # Rio de Janeiro
    "FCO": EU,  # Rome
    "SJC": US,  # San Jose
    "SCL": US,  # Santiago
    "CGH": US,  # Sao Paulo
    "GRU": US,
    "SEA": US,  # Seattle
    "BFI": US,
    "ICN": US,  # Seoul
    "QPG": US,  # Singapore
    "SOF": EU,  # Sofia
    "STL": US,  # St. Louis
    "BMA": EU,  # Stockholm
    "SYD": US,  # Sydney
    "TYO": US,  # Tokyo
    "HND": US,
    "NRT": US,
    "YYZ": US,  # Toronto
    "YVR": US,  # Vancouver
    "VIE": EU,  # Vienna
    "WLG": US,  # Wellington
})


# ─────────────────────────────────────────────────────────────
# POP lookups
# ─────────────────────────────────────────────────────────────
def normalize_pop(pop: Optional[str]) -> str:
    """Canonical POP code: trimmed, upper-case; blank → `DEFAULT_POP`."""
    code = pop.strip().upper() if isinstance(pop, str) else ""
    return code or settings.DEFAULT_POP


def is_known_pop(pop: Optional[str]) -> bool:
    """True when the normalized code is in the POP table."""
    return normalize_pop(pop) in POP_REGIONS


def region_for_pop(pop: Optional[str]) -> Region:
    """
    Region serving `pop`. Total: never raises.

    Steps
    -----
    1) Blank input → `DEFAULT_POP`.
    2) Known code → table region.
    3) Unknown code → `UNKNOWN_POP_REGION`.
    """
    code = normalize_pop(pop)
    region = POP_REGIONS.get(code)
    if region is None:
        logger.debug("Unknown POP %r; using %s", code, settings.UNKNOWN_POP_REGION.value)
        return settings.UNKNOWN_POP_REGION
    return region


def known_pops() -> Mapping[str, Region]:
    """Read-only view of the POP → Region table."""
    return POP_REGIONS


# ─────────────────────────────────────────────────────────────
# Storage host → region token
# ─────────────────────────────────────────────────────────────
BUCKET_HOST_RE = re.compile(r"^s3\.([A-Za-z0-9\-]+)\.backblazeb2\.com$")


def region_from_bucket_host(host: Optional[str]) -> Optional[str]:
    """
    Extract the provider region token from `s3.<token>.backblazeb2.com`.

    Examples
    --------
    >>> region_from_bucket_host("s3.eu-central-003.backblazeb2.com")
    'eu-central-003'
    >>> region_from_bucket_host("cdn.example.com") is None
    True
    """
    if not isinstance(host, str):
        return None
    m = BUCKET_HOST_RE.fullmatch(host)
    return m.group(1) if m else None


def region_for_host_token(token: Optional[str]) -> Optional[Region]:
    """Map a provider token (`eu-central-003`) to a Region by its first segment."""
    if not token:
        return None
    return Region.parse(token.split("-", 1)[0])


__all__ = [
    "POP_REGIONS",
    "BUCKET_HOST_RE",
    "normalize_pop",
    "is_known_pop",
    "region_for_pop",
    "known_pops",
    "region_from_bucket_host",
    "region_for_host_token",
]
