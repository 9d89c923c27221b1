from __future__ import annotations

"""
Origin records and resolution results.

`Origin` is the value handed to the edge request handler: it picks the
network backend by `backend_name` and builds the storage request from
`bucket_name` / `bucket_host`. Instances are frozen, so equality and hashing
are by value.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from edge_origins.schemas.enums import BackendName, Category, Region


class Origin(BaseModel):
    """Storage backend serving one content category in one region."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    backend_name: str = Field(..., min_length=1, description="eu_origin|us_origin")
    bucket_name: str = Field(..., min_length=1)
    bucket_host: str = Field(..., min_length=1, description="DNS host of the storage provider")

    @field_validator("backend_name")
    @classmethod
    def _known_backend(cls, v: str) -> str:
        allowed = {b.value for b in BackendName}
        if v not in allowed:
            raise ValueError(f"backend_name must be one of {sorted(allowed)}, got {v!r}")
        return v


class OriginRoute(BaseModel):
    """Full resolution decision: the origin plus the signals that selected it.

    - category_fallback: the path matched no known prefix (served as Images).
    - region_fallback: the region came from a default (blank/unknown POP or
      an unrecognized region string) rather than a recognized signal.
    - pop: the normalized POP code, when the region was derived from one.
    """

    model_config = ConfigDict(frozen=True)

    origin: Origin
    category: Category
    region: Region
    pop: Optional[str] = None
    category_fallback: bool = False
    region_fallback: bool = False


class CatalogEntry(BaseModel):
    """One row of the origin catalog, as exposed to operators."""

    category: Category
    region: Region
    origin: Origin


class PopEntry(BaseModel):
    """One row of the POP table with its legacy default origin."""

    pop: str
    region: Region
    origin: Origin


__all__ = ["Origin", "OriginRoute", "CatalogEntry", "PopEntry"]
