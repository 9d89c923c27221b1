# tests/conftest.py
"""
Global test bootstrap
- Keeps logging on stdout only (no log files from test runs)
- Runs import-time checks in a child interpreter
- Exposes catalog / app / client fixtures
"""

from __future__ import annotations

import os

import pytest

# ──────────────────────────────────────────────────────────────────────────────
# 🌱 Test env (set BEFORE importing the package so import-time config sees it)
# ──────────────────────────────────────────────────────────────────────────────
os.environ.setdefault("LOG_TO_FILE", "0")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from fastapi.testclient import TestClient  # noqa: E402

from edge_origins.services.catalog import OriginCatalog, build_rows  # noqa: E402

from tests.fixtures.process import *  # noqa: F401,F403,E402
from tests.fixtures.settings import *  # noqa: F401,F403,E402


@pytest.fixture()
def catalog() -> OriginCatalog:
    """A catalog built from the default rows, separate from the process-wide one."""
    return OriginCatalog(build_rows())


@pytest.fixture()
def client():
    """
    ✅ TestClient for the ops app. Entering the context runs the lifespan,
    so readiness is reported exactly as on a real startup.
    """
    from edge_origins.main import create_app

    with TestClient(create_app()) as c:
        yield c
