# app.py - Flask API around the jump reachability check
# deps: pip install flask numpy

from __future__ import annotations
from typing import Any, Dict, List
from flask import Flask, request, jsonify

from jump_checker.exceptions import JumpCheckError, MissingAnchorError
from jump_checker.graph import build_jump_edges, find_jump_route
from jump_checker.models import GraphNode, JumpParams, Level
from jump_checker.reachability import check_jump

app = Flask(__name__)

# ======= CORS =======
@app.after_request
def _cors(resp):
    resp.headers["Access-Control-Allow-Origin"]  = "*"
    resp.headers["Access-Control-Allow-Headers"] = "*"
    resp.headers["Access-Control-Allow-Methods"] = "GET,POST,OPTIONS"
    return resp

# ======= request parsing =======
def _level(data: Dict[str, Any]) -> Level:
    polys = data.get("polygons")
    if polys is None:
        raise ValueError("polygons required")
    return Level.from_points(polys, grid_size=float(data.get("grid_size", 32.0)))


def _json_object():
    data = request.get_json(force=True, silent=True)
    return {} if data is None else data


def _node(level: Level, raw: Dict[str, Any]) -> GraphNode:
    if not isinstance(raw, dict):
        raise ValueError("node must be a JSON object")
    return level.make_node(raw["position"], raw.get("polygon", 0), raw.get("edges") or [])


def _params(data: Dict[str, Any], nested_only: bool = False) -> JumpParams:
    raw = data.get("params")
    if not raw and not nested_only:
        raw = data
    if raw is not None and not isinstance(raw, dict):
        raise ValueError("params must be a JSON object")
    return JumpParams.from_dict(raw)


def _error(e: Exception):
    if isinstance(e, MissingAnchorError):
        return jsonify({"error": str(e)}), 422
    if isinstance(e, KeyError):
        return jsonify({"error": f"missing field {e}"}), 400
    return jsonify({"error": str(e)}), 400

# ======= endpoints =======
@app.route("/", methods=["GET"])
def root():
    return {"ok": True, "jump": "/jump/check (POST JSON)", "edges": "/jump/edges (POST JSON)"}

@app.route("/jump/check", methods=["POST"])
def jump_check():
    """
    JSON body:
    {
      "polygons": [[[x,y], ...], ...],
      "start": {"position":[x,y], "polygon":0, "edges":[2]},
      "goal":  {"position":[x,y], "polygon":1, "edges":[0,1]},
      "gravity": [0,-0.5], "v_max": 8.0, "radius": 10.0,
      "arc_segments": 10, "extra_arcs": 0
    }
    """
    data = _json_object()
    if not isinstance(data, dict):
        return jsonify({"error": "JSON object required"}), 400
    try:
        level = _level(data)
        start = _node(level, data["start"])
        goal = _node(level, data["goal"])
        params = _params(data)
    except (JumpCheckError, KeyError, TypeError, ValueError) as e:
        return _error(e)

    result = check_jump(start, goal, level, params)
    app.logger.info("jump check: feasible=%s arcs=%d", result.feasible, result.arcs_tested)
    return jsonify(result.to_dict())

@app.route("/jump/edges", methods=["POST"])
def jump_edges():
    """
    JSON body:
    {
      "polygons": [...],
      "nodes": [{"position":[x,y], "polygon":0, "edges":[1]}, ...],
      "params": {"v_max": 8.0, ...},
      "max_distance": null,
      "route": [from_index, to_index]     // optional
    }
    """
    data = _json_object()
    if not isinstance(data, dict):
        return jsonify({"error": "JSON object required"}), 400
    try:
        level = _level(data)
        nodes: List[GraphNode] = [_node(level, n) for n in data.get("nodes") or []]
        params = _params(data, nested_only=True)
        max_distance = data.get("max_distance")
        max_distance = None if max_distance in (None, "", "null") else float(max_distance)
    except (JumpCheckError, KeyError, TypeError, ValueError) as e:
        return _error(e)

    edges = build_jump_edges(nodes, level, params, max_distance=max_distance)
    resp: Dict[str, Any] = {
        "edges": {str(i): [{"to": j, "cost": c} for j, c in out] for i, out in edges.items()},
    }

    route = data.get("route")
    if route:
        try:
            s, g = int(route[0]), int(route[1])
        except (TypeError, ValueError, IndexError, KeyError):
            return jsonify({"error": "route must be [from_index, to_index]"}), 400
        if not (0 <= s < len(nodes) and 0 <= g < len(nodes)):
            return jsonify({"error": "route index out of range"}), 400
        path, cost = find_jump_route(s, g, nodes, edges)
        resp["route"] = None if path is None else {"path": path, "cost": float(cost)}

    return jsonify(resp)


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=8081, threaded=True)
