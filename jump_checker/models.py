# models.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional, Sequence
import numpy as np

from jump_checker.config import AGENT_RADIUS, ARC_SEGMENTS, GRAVITY_STRENGTH, JUMP_V_MAX
from jump_checker.exceptions import InvalidGeometryError, InvalidParamsError, MissingAnchorError
from jump_checker.geometry import as_point


@dataclass(eq=False)
class Polygon:
    points: np.ndarray        # (N,2); edge k joins points[k] and points[k+1]

    def __post_init__(self):
        pts = np.asarray(self.points, dtype=np.float64)
        if pts.size == 0:
            pts = pts.reshape(0, 2)
        if pts.ndim != 2 or pts.shape[1] != 2:
            raise InvalidGeometryError(f"polygon points must be (N,2), got {pts.shape}")
        self.points = pts

    @property
    def edge_count(self) -> int:
        return max(0, len(self.points) - 1)

    def edge(self, k: int):
        if not 0 <= k < self.edge_count:
            raise InvalidGeometryError(f"edge {k} out of range for {self.edge_count} edges")
        return self.points[k], self.points[k + 1]


@dataclass(frozen=True, eq=False)
class GraphNode:
    position: np.ndarray
    polygon_index: int
    edge_indices: FrozenSet[int]


@dataclass
class Level:
    polygons: List[Polygon]
    grid_size: float = 32.0
    size: Optional[np.ndarray] = None
    half_size: Optional[np.ndarray] = None

    @classmethod
    def from_points(cls, polygons: Iterable[Sequence[Sequence[float]]], **kw) -> "Level":
        return cls(polygons=[Polygon(np.asarray(p, dtype=np.float64)) for p in polygons], **kw)

    def validate_node(self, node: GraphNode) -> GraphNode:
        if not 0 <= node.polygon_index < len(self.polygons):
            raise MissingAnchorError(
                f"node references polygon {node.polygon_index}, level has {len(self.polygons)}"
            )
        n_edges = self.polygons[node.polygon_index].edge_count
        bad = sorted(k for k in node.edge_indices if not 0 <= k < n_edges)
        if bad:
            raise MissingAnchorError(
                f"edges {bad} out of range for polygon {node.polygon_index} ({n_edges} edges)"
            )
        return node

    def make_node(self, position, polygon_index: int, edge_indices: Iterable[int]) -> GraphNode:
        node = GraphNode(
            position=as_point(position),
            polygon_index=int(polygon_index),
            edge_indices=frozenset(int(k) for k in edge_indices),
        )
        return self.validate_node(node)


@dataclass(eq=False)
class JumpParams:
    gravity: np.ndarray = field(default_factory=lambda: np.array([0.0, -GRAVITY_STRENGTH]))
    v_max: float = JUMP_V_MAX
    radius: float = AGENT_RADIUS
    arc_segments: int = ARC_SEGMENTS
    extra_arcs: int = 0

    def __post_init__(self):
        self.gravity = as_point(self.gravity)
        self.v_max = abs(float(self.v_max))
        self.radius = float(self.radius)
        self.arc_segments = int(self.arc_segments)
        self.extra_arcs = int(self.extra_arcs)

        if not np.all(np.isfinite(self.gravity)) or not np.isfinite(self.v_max):
            raise InvalidParamsError("gravity and v_max must be finite")
        if not np.isfinite(self.radius) or self.radius < 0.0:
            raise InvalidParamsError(f"radius must be >= 0, got {self.radius}")
        if self.arc_segments < 1:
            raise InvalidParamsError(f"arc_segments must be >= 1, got {self.arc_segments}")
        if self.extra_arcs < 0:
            raise InvalidParamsError(f"extra_arcs must be >= 0, got {self.extra_arcs}")

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "JumpParams":
        data = data or {}
        kw: Dict[str, Any] = {}
        for key in ("gravity", "v_max", "radius", "arc_segments", "extra_arcs"):
            if data.get(key) is not None:
                kw[key] = data[key]
        return cls(**kw)


@dataclass(frozen=True, eq=False)
class Trajectory:
    start: np.ndarray
    goal: np.ndarray
    launch_velocity: np.ndarray
    acceleration: np.ndarray
    flight_time: float
    segments: int = ARC_SEGMENTS

    @property
    def timestep(self) -> float:
        return self.flight_time / self.segments

    @property
    def launch_speed(self) -> float:
        return float(np.hypot(*self.launch_velocity))

    def position(self, t) -> np.ndarray:
        # t may be a scalar or a (K,1) column of times
        return self.start + self.launch_velocity * t + 0.5 * self.acceleration * t * t

    def sample(self) -> np.ndarray:
        """Arc points at every timestep, shape (segments+1, 2); last row is goal."""
        ts = self.timestep * np.arange(1, self.segments, dtype=np.float64)
        return np.vstack([self.start, self.position(ts[:, None]), self.goal])


@dataclass(eq=False)
class ReachabilityResult:
    feasible: bool
    speed_feasible: bool
    discriminant: float
    trajectory: Optional[Trajectory] = None
    hit_point: Optional[np.ndarray] = None
    hit_polygon: Optional[int] = None
    hit_edge: Optional[int] = None
    arcs_tested: int = 0

    def __bool__(self) -> bool:
        return self.feasible

    def to_dict(self) -> Dict[str, Any]:
        traj = self.trajectory
        return {
            "feasible": bool(self.feasible),
            "speed_feasible": bool(self.speed_feasible),
            "discriminant": float(self.discriminant),
            "arcs_tested": int(self.arcs_tested),
            "hit": None if self.hit_point is None else {
                "point": [float(v) for v in self.hit_point],
                "polygon": self.hit_polygon,
                "edge": self.hit_edge,
            },
            "trajectory": None if traj is None else {
                "launch_velocity": [float(v) for v in traj.launch_velocity],
                "flight_time": float(traj.flight_time),
                "points": traj.sample().tolist(),
            },
        }
