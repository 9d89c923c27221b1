# edge_origins/core/exceptions.py
from __future__ import annotations

"""
Edge Origins · Application Exceptions
=====================================
The resolution path is total and never raises. The only failure this package
signals is a *configuration defect* in the origin catalog, which is raised
while the catalog is being built (process startup), never per request.

Usage
-----
    raise CatalogConfigurationError(
        "Origin catalog is incomplete",
        missing=[(Category.ART, Region.EU)],
    )
"""

from typing import Any, Dict, Iterable, List, Optional, Tuple

__all__ = [
    "EdgeOriginsError",
    "CatalogConfigurationError",
]


class EdgeOriginsError(Exception):
    """Base class for errors raised by this package."""


class CatalogConfigurationError(EdgeOriginsError):
    """Raised when the origin catalog cannot be built from its rows.

    Attributes
    -----------
    missing : list[tuple]
        (category, region) pairs with no entry.
    inconsistent : list[str]
        Human-readable descriptions of entries that contradict their region.
    """

    def __init__(
        self,
        message: str,
        *,
        missing: Optional[Iterable[Tuple[Any, Any]]] = None,
        inconsistent: Optional[Iterable[str]] = None,
    ) -> None:
        self.missing: List[Tuple[Any, Any]] = list(missing or [])
        self.inconsistent: List[str] = list(inconsistent or [])
        super().__init__(self._render(message))

    def _render(self, message: str) -> str:
        parts = [message]
        if self.missing:
            pairs = ", ".join(f"{_label(c)}×{_label(r)}" for c, r in self.missing)
            parts.append(f"missing: {pairs}")
        if self.inconsistent:
            parts.append("inconsistent: " + "; ".join(self.inconsistent))
        return " | ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Machine-readable shape for startup logs."""
        return {
            "missing": [[_label(c), _label(r)] for c, r in self.missing],
            "inconsistent": list(self.inconsistent),
        }


def _label(value: Any) -> str:
    return str(getattr(value, "value", value))
