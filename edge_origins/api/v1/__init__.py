"""Versioned API (v1). Routers live in `edge_origins.api.v1.routers`."""
