from __future__ import annotations

"""
Path classifier: request path → content category.

Ordered, first-match, case-sensitive prefix test. A prefix includes its
trailing slash, so `gamesX/...` is not a games path. Anything unmatched is
served from the images cache.
"""

from typing import Optional, Tuple

from edge_origins.schemas.enums import DEFAULT_CATEGORY, Category

# Evaluated top to bottom; first match wins.
CATEGORY_PREFIXES: Tuple[Tuple[str, Category], ...] = (
    ("games/", Category.GAMES),
    ("art/", Category.ART),
    ("music/", Category.MUSIC),
    ("audio/", Category.MUSIC),
    ("videos/", Category.VIDEO),
    ("video/", Category.VIDEO),
    ("comics/", Category.COMICS),
    ("images-public/", Category.PUBLIC_IMAGES),
)


def match_category(path: Optional[str]) -> Optional[Category]:
    """Return the category whose prefix matches `path`, or None if none does."""
    if not isinstance(path, str):
        return None
    relative = path.lstrip("/")
    for prefix, category in CATEGORY_PREFIXES:
        if relative.startswith(prefix):
            return category
    return None


def classify(path: Optional[str]) -> Category:
    """Classify a request path; never fails, defaults to Images."""
    return match_category(path) or DEFAULT_CATEGORY


def category_prefixes() -> Tuple[Tuple[str, Category], ...]:
    """Ordered (prefix, category) table; first match wins."""
    return CATEGORY_PREFIXES


__all__ = ["CATEGORY_PREFIXES", "classify", "match_category", "category_prefixes"]
