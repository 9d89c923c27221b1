from __future__ import annotations

"""
Central enum definitions used across Edge Origins.

Design notes
------------
• All enums subclass `str, PyEnum` for JSON-friendly serialization.
• VALUE STRINGS are **stable** once deployed (ops dashboards key on them).
• Keep `__all__` in sync when adding new enums.
"""

from enum import Enum as PyEnum
from typing import Optional


# ──────────────────────────────────────────────────────────────
# Geography
# ──────────────────────────────────────────────────────────────
class Region(str, PyEnum):
    """Serving region of an edge node."""
    EU = "eu"  # Europe, Africa
    US = "us"  # North/South America, Asia/Pacific, Middle East

    @classmethod
    def parse(cls, value: object) -> Optional["Region"]:
        """Normalize free text (`" EU "`, `"us"`) to a Region, or None if unrecognized."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None

    @property
    def backend(self) -> "BackendName":
        """The pre-provisioned network backend owned by this region."""
        return BackendName.EU_ORIGIN if self is Region.EU else BackendName.US_ORIGIN


class BackendName(str, PyEnum):
    """Pre-provisioned network backends; bucket-level routing varies beneath them."""
    EU_ORIGIN = "eu_origin"
    US_ORIGIN = "us_origin"


# ──────────────────────────────────────────────────────────────
# Content
# ──────────────────────────────────────────────────────────────
class Category(str, PyEnum):
    """Semantic content type inferred from the request path prefix."""
    IMAGES = "images"                # default / fallback
    GAMES = "games"
    MUSIC = "music"
    VIDEO = "video"
    COMICS = "comics"
    ART = "art"
    PUBLIC_IMAGES = "public_images"  # public SEO images


DEFAULT_CATEGORY = Category.IMAGES


__all__ = [
    "Region",
    "BackendName",
    "Category",
    "DEFAULT_CATEGORY",
]
