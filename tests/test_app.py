"""
Tests for the Flask app, driven through the test client.
"""

import pytest

from main import create_app


def post(client, url, data=None):
    return client.post(url, json=data or {})


# ==================== Factory & pages ====================

def test_index_renders(client):
    res = client.get("/")
    assert res.status_code == 200
    body = res.get_data(as_text=True)
    assert "<svg" in body
    assert 'id="btn-run"' in body
    assert 'id="source-selector"' in body


def test_state_before_run(client):
    data = client.get("/api/state").get_json()
    assert data["current_step"] == -1
    assert data["total_steps"] == 0
    assert data["step"] is None
    assert data["graph"]["start"] == "0"
    assert len(data["graph"]["nodes"]) == 10


def test_config_overrides_canvas_size():
    app = create_app({"TESTING": True, "LOG_LEVEL": "WARNING", "CANVAS_WIDTH": 640})
    data = app.test_client().get("/api/state").get_json()
    assert 'width="640"' in data["svg"]


def test_unknown_speed_rejected():
    with pytest.raises(ValueError):
        create_app({"TESTING": True, "PLAYBACK_SPEED": "ludicrous"})


def test_each_app_owns_its_recorder():
    a = create_app({"TESTING": True, "LOG_LEVEL": "WARNING"})
    b = create_app({"TESTING": True, "LOG_LEVEL": "WARNING"})
    assert a.extensions["recorder"] is not b.extensions["recorder"]


# ==================== Running ====================

def test_instant_run_lands_on_final_step(client):
    data = post(client, "/api/run", {"mode": "instant"}).get_json()
    assert data["current_step"] == data["total_steps"] - 1
    assert data["step"]["is_final"] is True
    assert data["step"]["description"] == "shortest distance to 9: 4.00"
    assert 'class="edge path"' in data["svg"]
    assert "Nodes Visited" in data["analytics"]


def test_step_mode_walks_the_log(client):
    data = post(client, "/api/run", {"mode": "step"}).get_json()
    assert data["current_step"] == -1
    assert data["total_steps"] > 0

    data = post(client, "/api/step/next").get_json()
    assert data["current_step"] == 0
    assert data["step"]["description"] == "starting from 0"
    assert 'class="edge path"' not in data["svg"]

    data = post(client, "/api/step/next").get_json()
    assert data["step"]["description"] == "visiting 0"

    data = post(client, "/api/step/prev").get_json()
    assert data["current_step"] == 0

    last = data["total_steps"] - 1
    data = post(client, "/api/step/goto", {"index": last}).get_json()
    assert data["step"]["is_final"] is True

    data = post(client, "/api/step/next").get_json()
    assert data["finished"] is True
    assert data["current_step"] == last


def test_goto_out_of_range(client):
    post(client, "/api/run", {"mode": "step"})
    res = post(client, "/api/step/goto", {"index": 10_000})
    assert res.status_code == 400
    assert res.get_json()["kind"] == "BadRequest"


def test_unknown_mode_rejected(client):
    res = post(client, "/api/run", {"mode": "sideways"})
    assert res.status_code == 400


@pytest.mark.parametrize("url", ["/api/step/next", "/api/step/prev", "/api/step/goto"])
def test_navigation_requires_a_run(client, url):
    res = post(client, url)
    assert res.status_code == 400
    assert res.get_json()["error"] == "Run the algorithm first"


def test_path_endpoint(client):
    assert client.get("/api/path").status_code == 400
    post(client, "/api/run")
    data = client.get("/api/path").get_json()
    assert data["found"] is True
    assert data["distance"] == 4.0
    assert [e["id"] for e in data["path"]] == ["0-9"]


def test_reset_clears_log(client):
    post(client, "/api/run")
    data = post(client, "/api/reset").get_json()
    assert data["total_steps"] == 0
    assert data["current_step"] == -1
    assert data["analytics"].count("Run the algorithm") == 1


# ==================== Graph building ====================

def test_duplicate_edge_rejected_and_graph_unchanged(client):
    res = post(client, "/api/graph/edge", {"source": "0", "target": "1", "weight": 3})
    assert res.status_code == 400
    assert res.get_json()["kind"] == "DuplicateEdge"
    assert len(client.get("/api/state").get_json()["graph"]["edges"]) == 45


def test_self_loop_rejected(client):
    res = post(client, "/api/graph/edge", {"source": "3", "target": "3", "weight": 1})
    assert res.status_code == 400
    assert res.get_json()["kind"] == "SelfLoopEdge"


@pytest.mark.parametrize("weight", [-2, "abc", None, True])
def test_bad_weight_rejected(client, weight):
    res = post(client, "/api/graph/edge", {"source": "0", "target": "new", "weight": weight})
    assert res.status_code == 400
    assert res.get_json()["kind"] == "InvalidWeight"
    assert "new" not in [n["id"] for n in client.get("/api/state").get_json()["graph"]["nodes"]]


def test_add_node_and_edge(client):
    data = post(client, "/api/graph/node", {"id": "X"}).get_json()
    assert "X" in data["node_ids"]

    data = post(client, "/api/graph/edge", {"source": "X", "target": "9", "weight": 0.5}).get_json()
    assert data["edge"] == {"id": "X-9", "source": "X", "target": "9", "weight": 0.5}

    post(client, "/api/endpoints", {"source": "0", "target": "X"})
    post(client, "/api/run")
    assert client.get("/api/path").get_json()["distance"] == 4.5


def test_add_existing_node_rejected(client):
    res = post(client, "/api/graph/node", {"id": "0"})
    assert res.status_code == 400


def test_graph_change_discards_log(client):
    post(client, "/api/run")
    post(client, "/api/graph/node", {"id": "late"})
    assert client.get("/api/state").get_json()["total_steps"] == 0


def test_bad_endpoints_rejected(client):
    res = post(client, "/api/endpoints", {"source": "0", "target": "nowhere"})
    assert res.status_code == 400
    assert res.get_json()["kind"] == "InvalidNodeReference"
    assert client.get("/api/state").get_json()["graph"]["target"] == "9"


def test_generate_random_graph(client):
    data = post(client, "/api/graph/generate", {"nodes": 6, "prob": 0.5, "seed": 11}).get_json()
    assert data["node_ids"] == [str(i) for i in range(6)]
    assert client.get("/api/state").get_json()["graph"]["target"] == "5"


@pytest.mark.parametrize("body", [{"nodes": 1}, {"nodes": 99}, {"nodes": "many"}])
def test_generate_rejects_bad_sizes(client, body):
    assert post(client, "/api/graph/generate", body).status_code == 400


def test_import_adjacency_list(client):
    data = post(client, "/api/graph/import", {"text": "S: A(2) B(5)\nA: B(1) T(7)\nB: T(3)"}).get_json()
    assert data["node_ids"] == ["S", "A", "B", "T"]
    post(client, "/api/run")
    path = client.get("/api/path").get_json()
    assert path["distance"] == 6.0
    assert [e["id"] for e in path["path"]] == ["S-A", "A-B", "B-T"]


def test_import_requires_text(client):
    assert post(client, "/api/graph/import", {"text": "  "}).status_code == 400


def test_unreadable_import_keeps_current_graph(client):
    res = post(client, "/api/graph/import", {"text": "this is not an adjacency list"})
    assert res.status_code == 400
    assert res.get_json()["kind"] == "MalformedAdjacencyList"
    assert len(client.get("/api/state").get_json()["graph"]["nodes"]) == 10


def test_demo_restores_demonstration_graph(client):
    post(client, "/api/graph/generate", {"nodes": 4, "seed": 1})
    data = post(client, "/api/graph/demo").get_json()
    assert data["node_ids"] == [str(i) for i in range(10)]


def test_non_object_body_rejected(client):
    res = client.post("/api/run", json=[1, 2, 3])
    assert res.status_code == 400
    assert res.get_json()["error"] == "Request body must be a JSON object"


def test_malformed_json_rejected(client):
    res = client.post("/api/run", data="{not json", content_type="application/json")
    assert res.status_code == 400
    assert res.get_json()["kind"] == "BadRequest"
    assert client.get("/api/state").get_json()["total_steps"] == 0


def test_empty_body_uses_defaults(client):
    res = client.post("/api/run")
    assert res.status_code == 200
    assert res.get_json()["step"]["is_final"] is True


# ==================== Export ====================

def test_export_before_and_after_run(client):
    data = client.get("/api/export").get_json()
    assert data["steps"] == []
    assert data["metrics"] == {}

    post(client, "/api/run")
    data = client.get("/api/export").get_json()
    assert data["steps"][-1]["description"] == "shortest distance to 9: 4.00"
    assert [e["id"] for e in data["path"]] == ["0-9"]
    assert data["metrics"]["path_found"] is True
    assert data["graph"]["target"] == "9"


def test_endpoint_change_discards_log(client):
    post(client, "/api/run")
    data = post(client, "/api/endpoints", {"source": "0", "target": "5"}).get_json()
    assert data["total_steps"] == 0
    assert data["target"] == "5"
