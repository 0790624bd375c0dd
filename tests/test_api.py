# tests/test_api.py
import asyncio

import httpx
from fastapi.testclient import TestClient

from config.http import get_http_client
from main import app
from tests.fake_aps import BUCKET
from util.functions import urnify


def test_healthz(api):
    r = api.get("/healthz")
    assert r.status_code == 200
    assert r.json() == {"ok": True}


def test_viewer_token(api):
    r = api.get("/api/auth/token")
    assert r.status_code == 200
    assert r.json() == {
        "access_token": "tok:viewables:read",
        "token_type": "Bearer",
        "expires_in": 3599,
    }


def test_list_models_shape(fake_aps, api):
    fake_aps.seed_objects(BUCKET, 2)

    r = api.get("/api/models")

    assert r.status_code == 200
    body = r.json()
    assert [m["name"] for m in body] == ["model-000.dwg", "model-001.dwg"]
    first = body[0]
    assert first["urn"] == urnify(f"urn:adsk.objects:os.object:{BUCKET}/model-000.dwg")
    assert first["o"]["objectKey"] == "model-000.dwg"
    assert first["o"]["size"] == 0


def test_status_for_unknown_model_is_exactly_na(api):
    r = api.get("/api/models/bm9wZQ/status")
    assert r.status_code == 200
    assert r.json() == {"status": "n/a"}


def test_status_for_urn_with_slash(fake_aps, api):
    urn = "YWJj/ZGVm"
    fake_aps.manifests[urn] = {"status": "success", "progress": "complete", "derivatives": []}

    r = api.get(f"/api/models/{urn}/status")

    assert r.status_code == 200
    assert r.json() == {"status": "success", "progress": "complete", "messages": []}


def test_upload_without_model_file_is_rejected_before_any_upstream_call(fake_aps, api):
    r = api.post("/api/models", data={"model-zip-entrypoint": "main.rvt"})

    assert r.status_code == 400
    assert r.headers["content-type"].startswith("text/plain")
    assert r.text == 'The required field ("model-file") is missing.'
    assert fake_aps.calls == []


def test_upload_stores_file_and_starts_conversion(fake_aps, api):
    r = api.post(
        "/api/models",
        files={"model-file": ("house.zip", b"PK\x03\x04 archive", "application/zip")},
        data={"model-zip-entrypoint": "house/main.rvt"},
    )

    assert r.status_code == 200
    urn = urnify(f"urn:adsk.objects:os.object:{BUCKET}/house.zip")
    assert r.json() == {"name": "house.zip", "urn": urn}
    assert fake_aps.contents[(BUCKET, "house.zip")] == b"PK\x03\x04 archive"
    assert fake_aps.jobs[0]["input"] == {
        "urn": urn,
        "compressedUrn": True,
        "rootFilename": "house/main.rvt",
    }

    status = api.get(f"/api/models/{urn}/status")
    assert status.json()["status"] == "pending"


def test_upload_with_empty_entrypoint_is_a_plain_file(fake_aps, api):
    r = api.post(
        "/api/models",
        files={"model-file": ("plan.dwg", b"AC1032", "application/octet-stream")},
        data={"model-zip-entrypoint": ""},
    )

    assert r.status_code == 200
    assert fake_aps.jobs[0]["input"]["compressedUrn"] is False
    assert "rootFilename" not in fake_aps.jobs[0]["input"]


def test_upload_over_size_cap_is_rejected(fake_aps, api):
    r = api.post(
        "/api/models",
        files={"model-file": ("big.dwg", b"x" * (1024 * 1024 + 1), "application/octet-stream")},
    )

    assert r.status_code == 413
    assert fake_aps.keys(BUCKET) == []


def test_delete_derivatives(fake_aps, api):
    fake_aps.manifests["dXJu"] = {"status": "success", "derivatives": []}

    assert api.delete("/api/models/dXJu/derivatives").json() == {"urn": "dXJu", "deleted": True}
    assert api.delete("/api/models/dXJu/derivatives").json() == {"urn": "dXJu", "deleted": False}


def test_upstream_failure_maps_to_bad_gateway(fake_aps, api):
    fake_aps.seed_objects(BUCKET, 0)
    fake_aps.fail("GET", f"/{BUCKET}/objects", 500)

    r = api.get("/api/models")

    assert r.status_code == 502
    assert r.json() == {
        "ok": False,
        "error": "upstream_error",
        "upstreamStatus": 500,
        "message": "forced 500",
    }


def test_unreachable_upstream_maps_to_bad_gateway():
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = httpx.AsyncClient(
        transport=httpx.MockTransport(refuse), base_url="https://developer.api.autodesk.com"
    )
    app.dependency_overrides[get_http_client] = lambda: client
    try:
        r = TestClient(app).get("/api/auth/token")
    finally:
        app.dependency_overrides.clear()
        asyncio.run(client.aclose())

    assert r.status_code == 502
    assert r.json()["error"] == "upstream_unreachable"


def test_upload_with_text_model_file_field_is_rejected(fake_aps, api):
    r = api.post("/api/models", data={"model-file": "not-a-file"})

    assert r.status_code == 400
    assert r.text == 'The required field ("model-file") is missing.'
    assert fake_aps.calls == []
