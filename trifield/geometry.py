"""Planar geometry kernel: points, segments, triangles and rigid transforms.

Every function in this module is pure.  Degenerate inputs (zero-length
segments, collinear triangles) are handled by falling back to point distances
instead of raising.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Protocol, Tuple


@dataclass(frozen=True)
class Vector:
    x: float
    y: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))

    def __add__(self, other: "Vector") -> "Vector":
        return Vector(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vector") -> "Vector":
        return Vector(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float) -> "Vector":
        return Vector(self.x * factor, self.y * factor)

    __rmul__ = __mul__

    def __neg__(self) -> "Vector":
        return Vector(-self.x, -self.y)

    def dot(self, other: "Vector") -> float:
        return self.x * other.x + self.y * other.y

    def cross(self, other: "Vector") -> float:
        return self.x * other.y - self.y * other.x

    def square_length(self) -> float:
        return self.dot(self)

    def length(self) -> float:
        return math.sqrt(self.square_length())


@dataclass(frozen=True)
class Point:
    """Immutable point in the plane."""

    x: float
    y: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))

    def to_vector(self) -> Vector:
        return Vector(self.x, self.y)

    def to_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def translate(self, offset: Vector) -> "Point":
        return Point(self.x + offset.x, self.y + offset.y)

    def vector_to(self, other: "Point") -> Vector:
        return Vector(other.x - self.x, other.y - self.y)

    def distance_to(self, other: "Point") -> float:
        return math.hypot(other.x - self.x, other.y - self.y)

    def lerp(self, other: "Point", t: float) -> "Point":
        return Point(self.x + (other.x - self.x) * t, self.y + (other.y - self.y) * t)


@dataclass(frozen=True)
class LineSegment:
    """Directed segment from ``start`` to ``end``."""

    start: Point
    end: Point

    def to_vector(self) -> Vector:
        return self.start.vector_to(self.end)

    def sample(self, t: float) -> Point:
        return self.start.lerp(self.end, t)

    def midpoint(self) -> Point:
        return Point((self.start.x + self.end.x) * 0.5, (self.start.y + self.end.y) * 0.5)


@dataclass(frozen=True)
class Triangle:
    """Three vertices; edge names follow the vertex labels."""

    a: Point
    b: Point
    c: Point

    @property
    def ab(self) -> LineSegment:
        return LineSegment(self.a, self.b)

    @property
    def ac(self) -> LineSegment:
        return LineSegment(self.a, self.c)

    @property
    def bc(self) -> LineSegment:
        return LineSegment(self.b, self.c)

    def vertices(self) -> Tuple[Point, Point, Point]:
        return (self.a, self.b, self.c)

    def edges(self) -> Tuple[LineSegment, LineSegment, LineSegment]:
        return (self.ab, self.ac, self.bc)


@dataclass(frozen=True)
class Transform:
    """2D affine map in row-vector form.

    A point ``(x, y)`` maps to ``(x*m11 + y*m21 + m31, x*m12 + y*m22 + m32)``.
    ``first.then(second)`` applies ``first`` and afterwards ``second``.
    """

    m11: float = 1.0
    m12: float = 0.0
    m21: float = 0.0
    m22: float = 1.0
    m31: float = 0.0
    m32: float = 0.0

    @classmethod
    def identity(cls) -> "Transform":
        return cls()

    @classmethod
    def translation(cls, dx: float, dy: float) -> "Transform":
        return cls(m31=dx, m32=dy)

    @classmethod
    def scale(cls, sx: float, sy: float) -> "Transform":
        return cls(m11=sx, m22=sy)

    @classmethod
    def rotation(cls, radians: float) -> "Transform":
        cos_t = math.cos(radians)
        sin_t = math.sin(radians)
        return cls(m11=cos_t, m12=sin_t, m21=-sin_t, m22=cos_t)

    def then(self, other: "Transform") -> "Transform":
        return Transform(
            m11=self.m11 * other.m11 + self.m12 * other.m21,
            m12=self.m11 * other.m12 + self.m12 * other.m22,
            m21=self.m21 * other.m11 + self.m22 * other.m21,
            m22=self.m21 * other.m12 + self.m22 * other.m22,
            m31=self.m31 * other.m11 + self.m32 * other.m21 + other.m31,
            m32=self.m31 * other.m12 + self.m32 * other.m22 + other.m32,
        )

    def apply(self, point: Point) -> Point:
        return Point(
            point.x * self.m11 + point.y * self.m21 + self.m31,
            point.x * self.m12 + point.y * self.m22 + self.m32,
        )

    def apply_triangle(self, triangle: Triangle) -> Triangle:
        return Triangle(self.apply(triangle.a), self.apply(triangle.b), self.apply(triangle.c))


class Region(Protocol):
    """Closed planar area supplied by the caller."""

    def contains_point(self, point: Point) -> bool:
        """Return ``True`` when *point* lies inside the region (boundary included)."""

    def bounding_box(self) -> Tuple[Point, Point]:
        """Return the ``(min, max)`` corners of the axis-aligned bounding box."""


def closest_point_on_segment(segment: LineSegment, point: Point) -> Point:
    """Return the point of *segment* nearest to *point*."""

    a2p = segment.start.vector_to(point)
    a2b = segment.to_vector()
    a2b2 = a2b.square_length()
    if a2b2 == 0.0:
        return segment.start
    t = min(max(a2p.dot(a2b) / a2b2, 0.0), 1.0)
    return segment.sample(t)


def distance_point_to_segment(segment: LineSegment, point: Point) -> float:
    return point.distance_to(closest_point_on_segment(segment, point))


def distance_point_to_triangle(triangle: Triangle, point: Point) -> float:
    """Distance from *point* to the boundary of *triangle*.

    Points strictly inside the triangle get the distance to the nearest edge,
    not zero.
    """

    return min(distance_point_to_segment(edge, point) for edge in triangle.edges())


def _orientation(p: Point, q: Point, r: Point) -> float:
    return p.vector_to(q).cross(p.vector_to(r))


def _within_box(point: Point, segment: LineSegment) -> bool:
    s, e = segment.start, segment.end
    return (
        min(s.x, e.x) <= point.x <= max(s.x, e.x)
        and min(s.y, e.y) <= point.y <= max(s.y, e.y)
    )


def segments_intersect(first: LineSegment, second: LineSegment) -> bool:
    """Return ``True`` when two closed segments share at least one point."""

    p1, p2 = first.start, first.end
    q1, q2 = second.start, second.end
    o1 = _orientation(p1, p2, q1)
    o2 = _orientation(p1, p2, q2)
    o3 = _orientation(q1, q2, p1)
    o4 = _orientation(q1, q2, p2)
    if o1 == 0.0 and _within_box(q1, first):
        return True
    if o2 == 0.0 and _within_box(q2, first):
        return True
    if o3 == 0.0 and _within_box(p1, second):
        return True
    if o4 == 0.0 and _within_box(p2, second):
        return True
    return (o1 > 0.0) != (o2 > 0.0) and (o3 > 0.0) != (o4 > 0.0) and 0.0 not in (o1, o2, o3, o4)


def triangle_area(triangle: Triangle) -> float:
    """Signed area, positive for counter-clockwise vertex order."""

    return 0.5 * _orientation(triangle.a, triangle.b, triangle.c)


def triangle_contains_point(triangle: Triangle, point: Point) -> bool:
    """Exact point-in-filled-triangle test; the boundary counts as inside."""

    if triangle_area(triangle) == 0.0:
        return distance_point_to_triangle(triangle, point) == 0.0
    d1 = _orientation(triangle.a, triangle.b, point)
    d2 = _orientation(triangle.b, triangle.c, point)
    d3 = _orientation(triangle.c, triangle.a, point)
    has_neg = d1 < 0.0 or d2 < 0.0 or d3 < 0.0
    has_pos = d1 > 0.0 or d2 > 0.0 or d3 > 0.0
    return not (has_neg and has_pos)


def triangles_intersect(first: Triangle, second: Triangle) -> bool:
    """Return ``True`` when the filled triangles overlap or touch."""

    for edge in first.edges():
        for other in second.edges():
            if segments_intersect(edge, other):
                return True
    if any(triangle_contains_point(second, vertex) for vertex in first.vertices()):
        return True
    return any(triangle_contains_point(first, vertex) for vertex in second.vertices())


def distance_triangle_to_triangle(first: Triangle, second: Triangle) -> float:
    """Shortest distance between two triangles, zero when they intersect."""

    if triangles_intersect(first, second):
        return 0.0
    return min(
        min(distance_point_to_triangle(first, vertex) for vertex in second.vertices()),
        min(distance_point_to_triangle(second, vertex) for vertex in first.vertices()),
    )


def triangle_center(triangle: Triangle) -> Point:
    return Point(
        (triangle.a.x + triangle.b.x + triangle.c.x) / 3.0,
        (triangle.a.y + triangle.b.y + triangle.c.y) / 3.0,
    )


def rotate_triangle_about(triangle: Triangle, pivot: Point, radians: float) -> Triangle:
    """Rotate *triangle* counter-clockwise by *radians* around *pivot*."""

    transform = (
        Transform.translation(-pivot.x, -pivot.y)
        .then(Transform.rotation(radians))
        .then(Transform.translation(pivot.x, pivot.y))
    )
    return transform.apply_triangle(triangle)


def region_contains_triangle(region: Region, triangle: Triangle) -> bool:
    """Vertex-only containment test.

    Edges are not sampled, so a triangle whose edge crosses a concave notch of
    the region between two contained vertices is still accepted.
    """

    return all(region.contains_point(vertex) for vertex in triangle.vertices())


def bounding_box_of(points: Iterable[Point]) -> Tuple[Point, Point]:
    pts = list(points)
    if not pts:
        raise ValueError("bounding box of an empty point set")
    xs = [p.x for p in pts]
    ys = [p.y for p in pts]
    return Point(min(xs), min(ys)), Point(max(xs), max(ys))


__all__ = [
    "Vector",
    "Point",
    "LineSegment",
    "Triangle",
    "Transform",
    "Region",
    "closest_point_on_segment",
    "distance_point_to_segment",
    "distance_point_to_triangle",
    "segments_intersect",
    "triangle_area",
    "triangle_contains_point",
    "triangles_intersect",
    "distance_triangle_to_triangle",
    "triangle_center",
    "rotate_triangle_about",
    "region_contains_triangle",
    "bounding_box_of",
]
