"""Points, triangles, segments and planes in three dimensions."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

EPSILON = 1e-9


@dataclass(frozen=True)
class Point3D:
    """A point, or a vector, in three-dimensional space."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: Point3D) -> Point3D:
        return Point3D(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Point3D) -> Point3D:
        return Point3D(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> Point3D:
        return Point3D(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def dot(self, other: Point3D) -> float:
        """Scalar product."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Point3D) -> Point3D:
        """Vector product."""
        return Point3D(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def length(self) -> float:
        """Euclidean norm."""
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def normalize(self) -> Point3D:
        """Unit vector in the same direction, or the zero vector if too short."""
        size = self.length()
        if size < EPSILON:
            return Point3D(0.0, 0.0, 0.0)
        return Point3D(self.x / size, self.y / size, self.z / size)


class TriangleClassification(Enum):
    """Position of a triangle relative to a plane."""

    FRONT = "front"
    BACK = "back"
    COPLANAR = "coplanar"
    SPANNING = "spanning"


@dataclass(frozen=True)
class Plane:
    """The plane a*x + b*y + c*z + d = 0."""

    a: float = 0.0
    b: float = 0.0
    c: float = 0.0
    d: float = 0.0

    def classify_point(self, point: Point3D) -> float:
        """Signed value: positive in front, negative behind, near zero on the plane."""
        return self.a * point.x + self.b * point.y + self.c * point.z + self.d

    def classify_triangle(self, triangle: Triangle) -> TriangleClassification:
        """Tell whether a triangle lies in front, behind, on or across the plane."""
        front = back = coplanar = 0
        for vertex in triangle.vertices:
            value = self.classify_point(vertex)
            if value > EPSILON:
                front += 1
            elif value < -EPSILON:
                back += 1
            else:
                coplanar += 1
        if front == 3:
            return TriangleClassification.FRONT
        if back == 3:
            return TriangleClassification.BACK
        if coplanar == 3:
            return TriangleClassification.COPLANAR
        return TriangleClassification.SPANNING

    def is_degenerate(self) -> bool:
        """True when every coefficient is zero, so no plane is described."""
        return self.a == 0 and self.b == 0 and self.c == 0 and self.d == 0


@dataclass(frozen=True)
class Triangle:
    """A triangle with vertices a, b, c and a 1-based identifier."""

    a: Point3D
    b: Point3D
    c: Point3D
    id: int = 0

    @property
    def vertices(self) -> tuple[Point3D, Point3D, Point3D]:
        return (self.a, self.b, self.c)

    def normal(self) -> Point3D:
        """Unit normal, following the vertex order."""
        return (self.b - self.a).cross(self.c - self.a).normalize()

    def plane(self) -> Plane:
        """The plane that holds the triangle."""
        n = self.normal()
        return Plane(n.x, n.y, n.z, -n.dot(self.a))

    def is_point_in_plane(self, point: Point3D) -> bool:
        return abs(self.plane().classify_point(point)) < EPSILON


@dataclass(frozen=True)
class Segment:
    """A straight segment from start to end."""

    start: Point3D
    end: Point3D

    def direction(self) -> Point3D:
        return self.end - self.start

    def length(self) -> float:
        return self.direction().length()


def distance(a: Point3D, b: Point3D) -> float:
    """Euclidean distance between two points."""
    return (b - a).length()


def points_equal(a: Point3D, b: Point3D, tolerance: float = EPSILON) -> bool:
    """True when two points lie closer than the tolerance."""
    return distance(a, b) < tolerance


def triangle_centroid(triangle: Triangle) -> Point3D:
    return (triangle.a + triangle.b + triangle.c) * (1.0 / 3.0)


def triangle_area(triangle: Triangle) -> float:
    return (triangle.b - triangle.a).cross(triangle.c - triangle.a).length() * 0.5


def is_point_in_triangle(point: Point3D, triangle: Triangle) -> bool:
    """True when the point lies in the triangle's plane and inside its edges."""
    if not triangle.is_point_in_plane(point):
        return False
    v0 = triangle.c - triangle.a
    v1 = triangle.b - triangle.a
    v2 = point - triangle.a

    dot00 = v0.dot(v0)
    dot01 = v0.dot(v1)
    dot02 = v0.dot(v2)
    dot11 = v1.dot(v1)
    dot12 = v1.dot(v2)

    denominator = dot00 * dot11 - dot01 * dot01
    if denominator == 0:
        return False
    u = (dot11 * dot02 - dot01 * dot12) / denominator
    v = (dot00 * dot12 - dot01 * dot02) / denominator
    return u >= 0 and v >= 0 and u + v <= 1


def ray_plane_intersection(
    ray_origin: Point3D, ray_direction: Point3D, plane: Plane
) -> Point3D | None:
    """Where the ray meets the plane, or None if parallel or behind the origin."""
    denominator = (
        plane.a * ray_direction.x + plane.b * ray_direction.y + plane.c * ray_direction.z
    )
    if abs(denominator) < EPSILON:
        return None
    t = -plane.classify_point(ray_origin) / denominator
    if t < 0:
        return None
    return ray_origin + ray_direction * t


def is_point_on_segment(
    point: Point3D, segment: Segment, tolerance: float = EPSILON
) -> bool:
    """True when the point lies on the segment within the tolerance."""
    segment_vec = segment.end - segment.start
    point_vec = point - segment.start
    segment_length = segment_vec.length()
    if segment_length < tolerance:
        return points_equal(point, segment.start, tolerance)
    projection = point_vec.dot(segment_vec) / (segment_length * segment_length)
    if projection < 0 or projection > 1:
        return False
    closest = segment.start + segment_vec * projection
    return points_equal(point, closest, tolerance)