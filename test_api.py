"""
Tests for the FastAPI server.
"""

from fastapi.testclient import TestClient

from biomegrid import TABLE_A
from biomegrid.inference import create_app

client = TestClient(create_app())


def test_health():
    response = client.get("/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["presets"] == ["classic", "wide"]


def test_presets():
    response = client.get("/presets")
    assert response.status_code == 200
    body = response.json()
    assert body["classic"]["width"] == 100
    assert body["wide"]["height"] == 100
    assert body["classic"]["biomes"][0]["max"] == 0.35


def test_generate_colors():
    response = client.post("/generate", json={"seed": 1, "width": 4, "height": 3})
    assert response.status_code == 200
    body = response.json()

    assert body["shape"] == [3, 4]
    assert len(body["grid"]) == 3 and all(len(row) == 4 for row in body["grid"])
    colors = {b.color for b in TABLE_A}
    assert all(cell in colors for row in body["grid"] for cell in row)
    assert abs(sum(body["coverage"].values()) - 1.0) < 1e-9


def test_generate_elevation_matches_reference():
    response = client.post("/generate", json={
        "seed": 1, "width": 4, "height": 1,
        "seed_strategy": "hashed", "output": "elevation", "include_stats": False
    })
    assert response.status_code == 200
    body = response.json()
    assert body["stats"] is None
    row = body["grid"][0]
    assert abs(row[0] - 0.72314747810660940) < 1e-12
    assert all(0.0 <= v <= 1.0 for v in row)


def test_generate_is_deterministic():
    payload = {"seed": 99, "width": 6, "height": 5, "preset": "wide", "output": "biomes"}
    first = client.post("/generate", json=payload).json()
    second = client.post("/generate", json=payload).json()
    assert first["grid"] == second["grid"]


def test_generate_uses_preset_dimensions():
    body = client.post("/generate", json={"seed": 3, "preset": "wide", "include_stats": False}).json()
    assert body["shape"] == [100, 160]


def test_generate_rejects_bad_input():
    assert client.post("/generate", json={"width": 0, "height": 4}).status_code == 400
    assert client.post("/generate", json={"preset": "tall"}).status_code == 400
    assert client.post("/generate", json={"width": 2, "height": 2, "octaves": 0}).status_code == 400
    assert client.post("/generate", json={"width": 2, "height": 2, "output": "png"}).status_code == 400
    assert client.post("/generate", json={"width": 5000, "height": 2}).status_code == 422
    assert client.post("/generate", json={"width": 2, "height": 2, "octaves": 10 ** 7}).status_code == 422
    assert client.post("/generate", json={"width": 2, "height": 2, "scale": 1e20}).status_code == 400
