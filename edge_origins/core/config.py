# edge_origins/core/config.py
from __future__ import annotations

"""
# Edge Origins · Centralized Configuration (Pydantic v2)

Single `settings` object with strongly-typed, environment-driven config.

## Goals
- Safe defaults so the resolver works with no environment at all.
- Region and POP values are normalized and validated at load time, so a bad
  deployment fails on startup instead of on a request.

## Usage
    from edge_origins.core.config import settings
"""

from typing import Literal

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from edge_origins.schemas.enums import Region

load_dotenv()  # harmless in prod; convenient in dev


# ─────────────────────────────────────────────────────────────
# Small helpers
# ─────────────────────────────────────────────────────────────
def _normalize_host(v: str | None) -> str:
    """Lower-case a bare DNS host; drop any scheme and trailing slash."""
    s = (v or "").strip().lower()
    for scheme in ("https://", "http://"):
        if s.startswith(scheme):
            s = s[len(scheme):]
    return s.rstrip("/")


# ─────────────────────────────────────────────────────────────
# Settings
# ─────────────────────────────────────────────────────────────
class Settings(BaseSettings):
    """
    Global application settings sourced from environment.

    Routing:
        - `DEFAULT_POP` is used when no POP code is known (local test server).
        - `UNKNOWN_POP_REGION` is where POP codes missing from the table go.

    Storage:
        - One storage host per region; bucket names live in the catalog.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # don't crash on unknown keys
    )

    # ── App meta ──────────────────────────────────────────────
    PROJECT_NAME: str = "Edge Origins"
    VERSION: str = "1.0.0"
    API_V1_STR: str = "/api/v1"
    ENV: Literal["development", "staging", "production"] = "development"
    ENABLE_DOCS: bool = True

    # ── Edge routing ──────────────────────────────────────────
    DEFAULT_POP: str = Field("SJC", min_length=3, max_length=4)
    UNKNOWN_POP_REGION: Region = Region.US

    # ── Storage hosts (one per region) ────────────────────────
    EU_BUCKET_HOST: str = "s3.eu-central-003.backblazeb2.com"
    US_BUCKET_HOST: str = "s3.us-west-004.backblazeb2.com"

    # ── Validators / normalizers ──────────────────────────────
    @field_validator("DEFAULT_POP", mode="before")
    @classmethod
    def _normalize_pop(cls, v) -> str:
        return str(v or "").strip().upper()

    @field_validator("UNKNOWN_POP_REGION", mode="before")
    @classmethod
    def _normalize_region(cls, v):
        if isinstance(v, Region):
            return v
        region = Region.parse(v)
        if region is None:
            raise ValueError(f"unknown region {v!r}; expected one of {[r.value for r in Region]}")
        return region

    @field_validator("EU_BUCKET_HOST", "US_BUCKET_HOST", mode="before")
    @classmethod
    def _normalize_bucket_host(cls, v) -> str:
        s = _normalize_host(v)
        if not s:
            raise ValueError("bucket host must not be empty")
        return s

    # ── Derived / convenience properties ─────────────────────
    def bucket_host_for(self, region: Region) -> str:
        """Storage host serving every bucket of `region`."""
        return self.EU_BUCKET_HOST if region is Region.EU else self.US_BUCKET_HOST


# Singleton instance
settings = Settings()
