# edge_origins/api/v1/routers/ops/origins.py
# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ 🧭 Edge Origins · Routing inspection                                       ║
# ║                                                                            ║
# ║ Endpoints                                                                  ║
# ║  - GET /origins/resolve   → Origin + signals for a path at a POP/region    ║
# ║  - GET /origins/catalog   → Every (category × region) origin               ║
# ║  - GET /origins/pops      → POP table with region and legacy origin        ║
# ╠────────────────────────────────────────────────────────────────────────────╣
# ║ Read-only views over the static routing tables, for operators. Edge        ║
# ║ request handling does not go through here.                                 ║
# ║  - Cache-Control: no-store on every response.                              ║
# ║  - X-Request-Id echoed back when present.                                  ║
# ╚════════════════════════════════════════════════════════════════════════════╝

from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Query, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from edge_origins.schemas.origin import CatalogEntry, OriginRoute, PopEntry
from edge_origins.services.catalog import get_catalog
from edge_origins.services.pops import known_pops
from edge_origins.services.resolver import resolve_route

router = APIRouter(prefix="/origins", tags=["Origins"])


# ─────────────────────────────────────────────────────────────────────────────
# 🧰 Utilities
# ─────────────────────────────────────────────────────────────────────────────

def _no_store_json(payload: Any, request: Optional[Request] = None) -> JSONResponse:
    """Return a JSONResponse with strict no-store caching and correlation header."""
    resp = JSONResponse(jsonable_encoder(payload))
    resp.headers["Cache-Control"] = "no-store, max-age=0"
    resp.headers["Pragma"] = "no-cache"
    if request is not None and "x-request-id" in request.headers:
        resp.headers["x-request-id"] = request.headers["x-request-id"]
    return resp


# ─────────────────────────────────────────────────────────────────────────────
# 🔎 Resolution preview
# ─────────────────────────────────────────────────────────────────────────────

@router.get("/resolve", response_model=OriginRoute)
def resolve_origin(
    request: Request,
    path: str = Query("", max_length=2048, description="Request path, e.g. games/foo.png"),
    pop: Optional[str] = Query(None, max_length=8, description="POP code, e.g. AMS"),
    region: Optional[str] = Query(None, max_length=16, description="eu|us (wins over pop)"),
):
    """
    🔎 Show which origin would serve `path`.

    Steps
    -----
    1) Use `region` when given, otherwise `pop` (blank → default POP).
    2) Classify the path and look up the catalog.
    3) Return the origin with the fallback flags that were taken.
    """
    signal = region if region not in (None, "") else pop
    route = resolve_route(path, signal)
    return _no_store_json(route, request)


# ─────────────────────────────────────────────────────────────────────────────
# 📚 Tables
# ─────────────────────────────────────────────────────────────────────────────

@router.get("/catalog", response_model=list[CatalogEntry])
def list_catalog(request: Request):
    """All catalog entries in category order, EU before US."""
    entries = [
        CatalogEntry(category=c, region=r, origin=o)
        for c, r, o in get_catalog().entries()
    ]
    return _no_store_json(entries, request)


@router.get("/pops", response_model=list[PopEntry])
def list_pops(request: Request):
    """Known POP codes (sorted) with their region and legacy default origin."""
    legacy = get_catalog().pop_origin_table()
    rows = [
        PopEntry(pop=code, region=region, origin=legacy[code])
        for code, region in sorted(known_pops().items())
    ]
    return _no_store_json(rows, request)
