import base64
import os
import re

import pytest
from fastapi.testclient import TestClient

from garage.main import create_app

PNG_1X1 = (
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)


def build(motorcycle_id="vespa-1", **overrides):
    data = {
        "id": motorcycle_id,
        "name": "Vespa PX Resto",
        "category": "Piaggio",
        "year": 1983,
        "description": "Frame-off restoration",
        "modifications": "Polini 177 kit, SIP exhaust, LED headlight",
        "image": "/uploads/placeholder.jpg",
        "specs": {
            "engine": "177cc two-stroke",
            "power": "14 hp",
            "torque": "15 Nm",
            "weight": "110 kg",
            "topSpeed": "110 km/h",
        },
    }
    data.update(overrides)
    return data


def test_create_then_list_reconstitutes_specs(client):
    resp = client.post("/api/motorcycles", json=build())
    assert resp.status_code == 201
    assert resp.json() == build()

    resp = client.get("/api/motorcycles")
    assert resp.status_code == 200
    assert resp.json() == [build()]


def test_create_without_specs_lists_null_specs(client):
    payload = build()
    del payload["specs"]
    assert client.post("/api/motorcycles", json=payload).status_code == 201
    [stored] = client.get("/api/motorcycles").json()
    assert stored["specs"] == {"engine": None, "power": None, "torque": None, "weight": None, "topSpeed": None}


def test_duplicate_id_is_conflict(client):
    client.post("/api/motorcycles", json=build(name="First"))
    resp = client.post("/api/motorcycles", json=build(name="Second"))
    assert resp.status_code == 409
    assert "error" in resp.json()
    assert [m["name"] for m in client.get("/api/motorcycles").json()] == ["First"]


@pytest.mark.parametrize("field", ["id", "name", "category", "year"])
def test_missing_required_field_is_400(client, field):
    payload = build()
    del payload[field]
    resp = client.post("/api/motorcycles", json=payload)
    assert resp.status_code == 400
    assert field in resp.json()["error"]


def test_update_replaces_all_fields(client):
    client.post("/api/motorcycles", json=build())
    replacement = {"name": "Vespa PX Bobber", "category": "Piaggio", "year": 1984, "specs": {"engine": "200cc"}}

    resp = client.put("/api/motorcycles/vespa-1", json=replacement)
    assert resp.status_code == 200
    assert resp.json()["id"] == "vespa-1"

    [stored] = client.get("/api/motorcycles").json()
    assert stored["name"] == "Vespa PX Bobber"
    assert stored["description"] is None
    assert stored["modifications"] is None
    assert stored["image"] is None
    assert stored["specs"] == {"engine": "200cc", "power": None, "torque": None, "weight": None, "topSpeed": None}


def test_update_unknown_is_404(client):
    resp = client.put("/api/motorcycles/ghost", json=build("ghost"))
    assert resp.status_code == 404
    assert client.get("/api/motorcycles").json() == []


def test_delete_routes(client):
    client.post("/api/motorcycles", json=build("a"))
    client.post("/api/motorcycles", json=build("b"))

    resp = client.delete("/api/motorcycles/a")
    assert resp.status_code == 204
    assert resp.content == b""
    resp = client.delete("/api/motorcycles/a")
    assert resp.status_code == 404
    assert "error" in resp.json()

    resp = client.post("/api/motorcycles/b/delete")
    assert resp.status_code == 200
    assert resp.json() == {"success": True}
    resp = client.post("/api/motorcycles/b/delete")
    assert resp.status_code == 404
    assert resp.json()["error"] == "Motorcycle with ID b not found"

    assert client.get("/api/motorcycles").json() == []


def test_upload_base64_then_fetch(client):
    resp = client.post("/api/upload", json={"image": f"data:image/png;base64,{PNG_1X1}", "fileName": "x.png"})
    assert resp.status_code == 200
    image_url = resp.json()["imageUrl"]
    assert re.match(r"^/uploads/[^/]+\.png$", image_url)

    fetched = client.get(image_url)
    assert fetched.status_code == 200
    assert fetched.content == base64.b64decode(PNG_1X1)


def test_upload_missing_fields_is_400(client):
    resp = client.post("/api/upload", json={"fileName": "x.png"})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Missing image data or file name"}


def test_upload_multipart_file(client):
    data = base64.b64decode(PNG_1X1)
    resp = client.post("/api/upload/file", files={"file": ("photo.png", data, "image/png")})
    assert resp.status_code == 200
    image_url = resp.json()["imageUrl"]
    assert image_url.endswith(".png")
    assert client.get(image_url).content == data


def test_upload_size_ceiling(settings):
    settings.MAX_FILE_SIZE = 16
    with TestClient(create_app(settings)) as client:
        exact = base64.b64encode(b"a" * 16).decode()
        over = base64.b64encode(b"a" * 17).decode()
        assert client.post("/api/upload", json={"image": exact, "fileName": "a.png"}).status_code == 200
        assert client.post("/api/upload", json={"image": over, "fileName": "a.png"}).status_code == 413
        resp = client.post("/api/upload/file", files={"file": ("big.png", b"a" * 17, "image/png")})
        assert resp.status_code == 413


def test_oversize_request_body_is_rejected(settings):
    settings.MAX_REQUEST_SIZE = 64
    with TestClient(create_app(settings)) as client:
        resp = client.post("/api/upload", json={"image": "A" * 200, "fileName": "a.png"})
        assert resp.status_code == 413


def test_unknown_upload_is_404(client):
    assert client.get("/uploads/does-not-exist.png").status_code == 404


def test_categories_and_health(client):
    assert client.get("/api/categories").json() == ["Yamaha", "Suzuki", "Honda", "Piaggio"]
    health = client.get("/health").json()
    assert health["status"] == "healthy"
    assert health["database"]["ok"] is True


def test_upload_header_without_payload_is_400(client):
    resp = client.post("/api/upload", json={"image": "data:image/png;base64,", "fileName": "x.png"})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Missing image data or file name"}


def test_storage_failure_is_generic_500(client):
    with client.app.state.engine.begin() as conn:
        conn.exec_driver_sql("DROP TABLE motorcycles")

    resp = client.get("/api/motorcycles")
    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to fetch motorcycles"}

    resp = client.post("/api/motorcycles", json=build())
    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to add motorcycle"}


def test_oversize_rejection_carries_security_headers(settings):
    settings.MAX_REQUEST_SIZE = 64
    with TestClient(create_app(settings)) as client:
        resp = client.post("/api/upload", json={"image": "A" * 200, "fileName": "a.png"})
        assert resp.status_code == 413
        assert resp.headers["X-Content-Type-Options"] == "nosniff"


def test_upload_dir_is_created_at_startup_not_construction(settings):
    app = create_app(settings)
    assert not os.path.exists(settings.UPLOAD_DIR)
    with TestClient(app):
        assert os.path.isdir(settings.UPLOAD_DIR)


def test_error_body_is_documented(client):
    schema = client.get("/openapi.json").json()
    assert "ErrorResponse" in schema["components"]["schemas"]
    delete_responses = schema["paths"]["/api/motorcycles/{motorcycle_id}"]["delete"]["responses"]
    assert delete_responses["404"]["content"]["application/json"]["schema"]["$ref"].endswith("/ErrorResponse")
