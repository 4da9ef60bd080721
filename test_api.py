"""
Tests for the FastAPI service and the command-line interface.
"""

import json

from fastapi.testclient import TestClient

from procscene.api import create_app
from procscene.cli import main as cli_main


client = TestClient(create_app())


def test_health():
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_scene_defaults():
    response = client.post("/scene", json={"seed": 5})

    assert response.status_code == 200
    data = response.json()
    assert data["layout"]["config"] == {
        "forest_size": 10, "forest_spread": 1.5, "pyramid_base_size": 6, "seed": 5
    }
    assert data["stats"]["trees_placed"] == 10
    assert data["stats"]["pyramid_levels"] == 6
    assert data["stats"]["pyramid_cubes"] == 91
    assert data["scene_graph"] is None


def test_scene_normalizes_invalid_config():
    response = client.post("/scene", json={"forest_size": 0, "pyramid_base_size": 50, "seed": 1})

    assert response.status_code == 200
    stats = response.json()["stats"]
    assert stats["trees_requested"] == 10
    assert stats["pyramid_levels"] == 10


def test_scene_graph_export():
    response = client.post("/scene", json={"forest_size": 2, "pyramid_base_size": 3, "seed": 2, "include_scene_graph": True})

    nodes = response.json()["scene_graph"]["nodes"]
    assert [node["name"] for node in nodes] == ["Ground", "Forest", "Pyramid", "Celestial"]
    assert len(nodes[2]["children"]) == 14


def test_simulate_transitions():
    response = client.post("/simulate", json={"seed": 0, "ticks": 30, "delta": 0.5})

    assert response.status_code == 200
    data = response.json()
    assert [t["time"] for t in data["transitions"]] == [6.0, 12.0]
    assert [t["is_night"] for t in data["transitions"]] == [True, False]
    assert data["is_night"] is False
    assert data["timer"] == 3.0
    assert data["sun_intensity"] == 1.0
    assert data["celestial_angle"] == 15.0


def test_simulate_without_sun():
    response = client.post("/simulate", json={"seed": 0, "ticks": 12, "delta": 0.5, "include_sun": False})

    data = response.json()
    assert data["sun_intensity"] is None
    assert data["is_night"] is True


def test_simulate_rejects_bad_tick_count():
    response = client.post("/simulate", json={"ticks": 0})
    assert response.status_code == 422


def test_cli_generate_writes_json(tmp_path):
    output = tmp_path / "scene.json"
    code = cli_main(["generate", "--forest-size", "4", "--pyramid-base-size", "3", "--seed", "1", "--output", str(output)])

    assert code == 0
    data = json.loads(output.read_text())
    assert len(data["layout"]["forest"]["trees"]) == 4
    assert data["layout"]["pyramid"]["base_size"] == 3


def test_cli_simulate(capsys):
    code = cli_main(["simulate", "--ticks", "24", "--delta", "0.5", "--seed", "0", "--quiet"])

    assert code == 0
    out = capsys.readouterr().out
    assert "night" in out
    assert "2 transitions" in out
