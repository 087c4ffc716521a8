# tests/test_app.py
import pytest

from jump_checker.app import app

WALL_LEVEL = [[[-10, 0], [110, 0]], [[50, -50], [50, 50]]]


@pytest.fixture
def client():
    app.config["TESTING"] = True
    with app.test_client() as c:
        yield c


def _check_body(**over):
    body = {
        "polygons": WALL_LEVEL,
        "start": {"position": [0, 0], "polygon": 0, "edges": [0]},
        "goal": {"position": [100, 0], "polygon": 0, "edges": [0]},
        "gravity": [0, -0.5],
        "v_max": 8.0,
        "radius": 10.0,
    }
    body.update(over)
    return body


# ---- /jump/check ----
def test_root_lists_routes(client):
    r = client.get("/")
    assert r.status_code == 200
    assert r.get_json()["ok"] is True


def test_check_reports_blocking_wall(client):
    r = client.post("/jump/check", json=_check_body())
    assert r.status_code == 200
    data = r.get_json()
    assert data["feasible"] is False
    assert data["hit"]["point"][0] == pytest.approx(50.0)
    assert r.headers["Access-Control-Allow-Origin"] == "*"


def test_check_open_level(client):
    r = client.post("/jump/check", json=_check_body(polygons=[WALL_LEVEL[0]]))
    data = r.get_json()
    assert data["feasible"] is True
    assert data["trajectory"]["flight_time"] == pytest.approx(20.0)


def test_bad_anchor_is_unprocessable(client):
    body = _check_body()
    body["start"]["edges"] = [4]
    r = client.post("/jump/check", json=body)
    assert r.status_code == 422


def test_missing_fields_are_bad_requests(client):
    assert client.post("/jump/check", json={"start": {}}).status_code == 400
    body = _check_body()
    del body["goal"]
    assert client.post("/jump/check", json=body).status_code == 400
    assert client.post("/jump/check", json=_check_body(radius=-3)).status_code == 400


# ---- /jump/edges ----
def test_edges_and_route(client):
    body = {
        "polygons": [[[-50, 0], [250, 0]]],
        "nodes": [
            {"position": [0, 0], "polygon": 0, "edges": [0]},
            {"position": [100, 0], "polygon": 0, "edges": [0]},
            {"position": [200, 0], "polygon": 0, "edges": [0]},
        ],
        "params": {"v_max": 8.0, "radius": 0.0},
        "route": [0, 2],
    }
    r = client.post("/jump/edges", json=body)
    assert r.status_code == 200
    data = r.get_json()
    assert [e["to"] for e in data["edges"]["0"]] == [1]
    assert data["route"]["path"] == [0, 1, 2]


def test_edges_route_out_of_range(client):
    body = {"polygons": [[[0, 0], [10, 0]]], "nodes": [], "route": [0, 1]}
    assert client.post("/jump/edges", json=body).status_code == 400


# ---- malformed bodies ----
@pytest.mark.parametrize("path", ["/jump/check", "/jump/edges"])
def test_non_object_body_is_bad_request(client, path):
    r = client.post(path, json=[1, 2])
    assert r.status_code == 400
    assert r.get_json()["error"] == "JSON object required"


def test_non_object_nodes_are_bad_requests(client):
    assert client.post("/jump/check", json=_check_body(start=5)).status_code == 400
    assert client.post("/jump/check", json=_check_body(goal=[100, 0])).status_code == 400
    assert client.post("/jump/check", json=_check_body(params=[8.0])).status_code == 400

    body = {"polygons": WALL_LEVEL, "nodes": [3]}
    assert client.post("/jump/edges", json=body).status_code == 400
    body = {"polygons": WALL_LEVEL, "nodes": [], "params": "fast"}
    assert client.post("/jump/edges", json=body).status_code == 400


def test_route_given_as_object_is_bad_request(client):
    body = {"polygons": [[[0, 0], [10, 0]]], "nodes": [], "route": {"from": 0}}
    assert client.post("/jump/edges", json=body).status_code == 400
