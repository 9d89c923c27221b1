# tests/test_ops/test_app.py
import uuid

from fastapi.testclient import TestClient

from edge_origins.main import create_app


def test_healthz(client):
    resp = client.get("/healthz")
    assert resp.status_code == 200
    assert resp.json() == {"ok": True}


def test_readyz_after_startup(client):
    resp = client.get("/readyz")
    assert resp.status_code == 200
    assert resp.json() == {"ready": True, "checks": {"catalog": True}}


def test_readyz_before_startup():
    # No context manager → lifespan never runs
    client = TestClient(create_app())
    assert client.get("/readyz").json()["ready"] is False


def test_root_points_to_docs(client):
    data = client.get("/").json()
    assert data["name"] == "Edge Origins"
    assert data["docs"] == "/docs"


def test_v1_router_is_mounted(client):
    resp = client.get("/api/v1/origins/resolve", params={"path": "music/a.mp3", "region": "eu"})
    assert resp.status_code == 200
    assert resp.json()["origin"]["bucket_name"] == "music-shobl"


# ─────────────────────────────────────────────────────────────
# Request ID middleware
# ─────────────────────────────────────────────────────────────

def test_request_id_generated_when_absent(client):
    resp = client.get("/healthz")
    rid = resp.headers.get("X-Request-ID")
    assert rid
    assert uuid.UUID(rid).version == 4


def test_valid_client_request_id_is_reused(client):
    rid = str(uuid.uuid4())
    resp = client.get("/healthz", headers={"X-Request-ID": rid})
    assert resp.headers.get("X-Request-ID") == rid


def test_invalid_client_request_id_is_replaced(client):
    resp = client.get("/healthz", headers={"X-Request-ID": "not-a-uuid"})
    rid = resp.headers.get("X-Request-ID")
    assert rid != "not-a-uuid"
    assert uuid.UUID(rid).version == 4


# ─────────────────────────────────────────────────────────────
# Problem+JSON errors
# ─────────────────────────────────────────────────────────────

def test_unknown_route_is_problem_json(client):
    resp = client.get("/nope")
    assert resp.status_code == 404
    assert resp.headers["content-type"].startswith("application/problem+json")
    body = resp.json()
    assert body["status"] == 404
    assert body["request_id"] == resp.headers.get("X-Request-ID")


def test_validation_error_is_problem_json(client):
    resp = client.get("/api/v1/origins/resolve", params={"region": "x" * 40})
    assert resp.status_code == 422
    body = resp.json()
    assert body["title"] == "Validation error"
    assert body["errors"]


# ─────────────────────────────────────────────────────────────
# Startup with a broken catalog
# ─────────────────────────────────────────────────────────────

def test_startup_fails_on_catalog_defect(import_in_subprocess):
    proc = import_in_subprocess("edge_origins.main", US_BUCKET_HOST="storage.example.com")
    assert proc.returncode != 0
    assert "CatalogConfigurationError" in proc.stderr
    assert "storage.example.com" in proc.stderr


def test_startup_succeeds_with_default_settings(import_in_subprocess):
    proc = import_in_subprocess("edge_origins.main")
    assert proc.returncode == 0, proc.stderr
