"""Binary space partitioning tree over triangles, queried with segments."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from bsptri.geometry import (
    EPSILON,
    Plane,
    Point3D,
    Segment,
    Triangle,
    TriangleClassification,
)

_FRONT = 1
_BACK = -1
_ON_PLANE = 0


@dataclass
class BSPConfig:
    """Limits that decide when a node becomes a leaf."""

    max_triangles_per_leaf: int = 10
    max_depth: int = 20
    splitting_tolerance: float = EPSILON


@dataclass
class BSPNode:
    """A node of the tree: a leaf, or an internal node with a splitting plane."""

    plane: Plane = field(default_factory=Plane)
    triangles: list[Triangle] = field(default_factory=list)
    front: BSPNode | None = None
    back: BSPNode | None = None
    is_leaf: bool = True

    def add_triangle(self, triangle: Triangle) -> None:
        """Store a triangle; only leaves accept new triangles."""
        if self.is_leaf:
            self.triangles.append(triangle)

    def make_internal(self, plane: Plane) -> None:
        """Turn this node into an internal node with two empty children."""
        self.plane = plane
        self.is_leaf = False
        self.front = BSPNode()
        self.back = BSPNode()

    def has_children(self) -> bool:
        return not self.is_leaf and self.front is not None and self.back is not None

    def _children(self) -> list[BSPNode]:
        return [child for child in (self.front, self.back) if child is not None]


def _classify_vertex(plane: Plane, point: Point3D) -> int:
    value = plane.classify_point(point)
    if value > EPSILON:
        return _FRONT
    if value < -EPSILON:
        return _BACK
    return _ON_PLANE


def _edge_plane_intersection(p1: Point3D, p2: Point3D, plane: Plane) -> Point3D | None:
    """Where the edge p1-p2 crosses the plane, or None if it does not."""
    direction = p2 - p1
    denominator = plane.a * direction.x + plane.b * direction.y + plane.c * direction.z
    if abs(denominator) < EPSILON:
        return None
    t = -plane.classify_point(p1) / denominator
    if t < 0 or t > 1:
        return None
    return p1 + direction * t


def _split_one_two(
    triangle: Triangle, plane: Plane, sides: list[int], one_front: bool
) -> tuple[list[Triangle], list[Triangle]]:
    target = _FRONT if one_front else _BACK
    vertices = triangle.vertices
    isolated = [v for v, side in zip(vertices, sides) if side == target]
    others = [v for v, side in zip(vertices, sides) if side == -target]
    if len(isolated) != 1 or len(others) != 2:
        return [], []
    lone = isolated[0]
    first, second = others

    cut1 = _edge_plane_intersection(lone, first, plane)
    cut2 = _edge_plane_intersection(lone, second, plane)
    if cut1 is None or cut2 is None:
        return [], []

    single = [Triangle(lone, cut1, cut2, triangle.id)]
    pair = [
        Triangle(first, second, cut1, triangle.id),
        Triangle(second, cut2, cut1, triangle.id),
    ]
    return (single, pair) if one_front else (pair, single)


def _split_with_vertex_on_plane(
    triangle: Triangle, plane: Plane, sides: list[int]
) -> tuple[list[Triangle], list[Triangle]]:
    vertices = triangle.vertices
    front = [v for v, side in zip(vertices, sides) if side == _FRONT]
    back = [v for v, side in zip(vertices, sides) if side == _BACK]
    on_plane = [v for v, side in zip(vertices, sides) if side == _ON_PLANE]

    if len(on_plane) == 1 and len(front) == 1 and len(back) == 1:
        cut = _edge_plane_intersection(front[0], back[0], plane)
        if cut is None:
            return [], []
        return (
            [Triangle(front[0], on_plane[0], cut, triangle.id)],
            [Triangle(back[0], on_plane[0], cut, triangle.id)],
        )
    if len(on_plane) == 2:
        if len(front) == 1:
            return [triangle], []
        if len(back) == 1:
            return [], [triangle]
    return [], []


def split_triangle(
    triangle: Triangle, plane: Plane
) -> tuple[list[Triangle], list[Triangle]]:
    """Cut a triangle that spans a plane into front and back pieces.

    Every piece keeps the identifier of the original triangle.
    """
    sides = [_classify_vertex(plane, v) for v in triangle.vertices]
    front_count = sides.count(_FRONT)
    back_count = sides.count(_BACK)
    on_plane_count = sides.count(_ON_PLANE)

    if on_plane_count == 3 or (front_count == 0 and back_count == 0):
        return [], []
    if front_count == 1 and back_count == 2:
        return _split_one_two(triangle, plane, sides, one_front=True)
    if front_count == 2 and back_count == 1:
        return _split_one_two(triangle, plane, sides, one_front=False)
    if on_plane_count > 0:
        return _split_with_vertex_on_plane(triangle, plane, sides)
    return [], []


def ray_intersects_triangle(
    ray_origin: Point3D, ray_direction: Point3D, triangle: Triangle
) -> float | None:
    """Ray parameter of the hit with the triangle (Moller-Trumbore), or None."""
    v0, v1, v2 = triangle.vertices
    edge1 = v1 - v0
    edge2 = v2 - v0

    h = ray_direction.cross(edge2)
    a = edge1.dot(h)
    if abs(a) < EPSILON:
        return None

    f = 1.0 / a
    s = ray_origin - v0
    u = f * s.dot(h)
    if u < 0.0 or u > 1.0:
        return None

    q = s.cross(edge1)
    v = f * ray_direction.dot(q)
    if v < 0.0 or u + v > 1.0:
        return None

    t = f * edge2.dot(q)
    return t if t > EPSILON else None


def segment_intersects_triangle(segment: Segment, triangle: Triangle) -> bool:
    """True when the segment crosses the triangle between its end points."""
    direction = segment.direction()
    segment_length = direction.length()
    if segment_length < EPSILON:
        return False
    direction = direction * (1.0 / segment_length)
    t = ray_intersects_triangle(segment.start, direction, triangle)
    return t is not None and 0 <= t <= segment_length


class BSPTree:
    """A BSP tree that answers which triangles a segment crosses."""

    def __init__(self, config: BSPConfig | None = None) -> None:
        self.config = config if config is not None else BSPConfig()
        self.root = BSPNode()

    def build(self, triangles: Iterable[Triangle]) -> None:
        """Build the tree from the given triangles, replacing any earlier content."""
        triangles = list(triangles)
        self.root = BSPNode()
        if triangles:
            self._build_node(self.root, triangles, 0)

    def _build_node(self, node: BSPNode, triangles: list[Triangle], depth: int) -> None:
        if (
            len(triangles) <= self.config.max_triangles_per_leaf
            or depth >= self.config.max_depth
        ):
            node.is_leaf = True
            node.triangles = triangles
            return

        plane = triangles[0].plane()
        if plane.is_degenerate():
            node.is_leaf = True
            node.triangles = triangles
            return

        front, back, coplanar = self._partition(triangles, plane)
        node.make_internal(plane)
        node.triangles = coplanar

        if front and node.front is not None:
            self._build_node(node.front, front, depth + 1)
        if back and node.back is not None:
            self._build_node(node.back, back, depth + 1)

    @staticmethod
    def _partition(
        triangles: list[Triangle], plane: Plane
    ) -> tuple[list[Triangle], list[Triangle], list[Triangle]]:
        front: list[Triangle] = []
        back: list[Triangle] = []
        coplanar: list[Triangle] = []
        for triangle in triangles:
            position = plane.classify_triangle(triangle)
            if position is TriangleClassification.FRONT:
                front.append(triangle)
            elif position is TriangleClassification.BACK:
                back.append(triangle)
            elif position is TriangleClassification.COPLANAR:
                coplanar.append(triangle)
            else:
                front_parts, back_parts = split_triangle(triangle, plane)
                front.extend(front_parts)
                back.extend(back_parts)
        return front, back, coplanar

    def query_segment(self, segment: Segment) -> list[int]:
        """Sorted, distinct identifiers of the triangles the segment crosses."""
        found: set[int] = set()
        self._query_node(self.root, segment, found)
        return sorted(found)

    def _query_node(self, node: BSPNode | None, segment: Segment, found: set[int]) -> None:
        if node is None:
            return
        found.update(
            t.id for t in node.triangles if segment_intersects_triangle(segment, t)
        )
        if node.is_leaf:
            return

        start = node.plane.classify_point(segment.start)
        end = node.plane.classify_point(segment.end)
        if start > EPSILON and end > EPSILON:
            self._query_node(node.front, segment, found)
        elif start < -EPSILON and end < -EPSILON:
            self._query_node(node.back, segment, found)
        else:
            self._query_node(node.front, segment, found)
            self._query_node(node.back, segment, found)

    def _nodes(self) -> Iterable[tuple[BSPNode, int]]:
        stack = [(self.root, 0)]
        while stack:
            node, depth = stack.pop()
            yield node, depth
            stack.extend((child, depth + 1) for child in node._children())

    def triangle_count(self) -> int:
        """Number of triangles and triangle pieces stored in the tree."""
        return sum(len(node.triangles) for node, _ in self._nodes())

    def node_count(self) -> int:
        return sum(1 for _ in self._nodes())

    def max_depth(self) -> int:
        """Depth of the deepest node; a tree that is a single leaf has depth 0."""
        return max(depth for _, depth in self._nodes())