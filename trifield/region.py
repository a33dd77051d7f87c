"""Permissible regions the placement generator may fill."""

from __future__ import annotations

import logging
from typing import Iterable, List, Sequence, Tuple

import numpy as np

from .errors import RegionError
from .geometry import Point, Region, bounding_box_of

logger = logging.getLogger(__name__)

DEFAULT_TOLERANCE = 1e-6


class PolygonRegion:
    """Closed polygon tested with the non-zero winding rule.

    Points closer than ``tolerance`` to the boundary count as inside.
    """

    def __init__(self, vertices: Sequence[Point], tolerance: float = DEFAULT_TOLERANCE):
        pts = [p if isinstance(p, Point) else Point(*p) for p in vertices]
        if len(pts) >= 2 and pts[0] == pts[-1]:
            pts = pts[:-1]
        if len(pts) < 3:
            raise RegionError(f"polygon region needs at least 3 vertices, got {len(pts)}")
        if tolerance < 0:
            raise RegionError("region tolerance must be non-negative")
        coords = np.asarray([p.to_tuple() for p in pts], dtype=float)
        if not np.all(np.isfinite(coords)):
            raise RegionError("polygon region vertices must be finite")

        self.vertices: Tuple[Point, ...] = tuple(pts)
        self.tolerance = float(tolerance)
        self._starts = coords
        self._ends = np.roll(coords, -1, axis=0)
        self._edge_vecs = self._ends - self._starts
        self._edge_lengths_sq = np.sum(self._edge_vecs ** 2, axis=1)
        self._bbox = bounding_box_of(pts)

    def __repr__(self) -> str:
        return f"PolygonRegion(vertices={len(self.vertices)}, tolerance={self.tolerance!r})"

    def bounding_box(self) -> Tuple[Point, Point]:
        return self._bbox

    def _winding_numbers(self, points: np.ndarray) -> np.ndarray:
        x = points[:, 0][:, None]
        y = points[:, 1][:, None]
        x0, y0 = self._starts[:, 0], self._starts[:, 1]
        x1, y1 = self._ends[:, 0], self._ends[:, 1]
        side = (x1 - x0) * (y - y0) - (x - x0) * (y1 - y0)
        upward = (y0 <= y) & (y1 > y) & (side > 0)
        downward = (y0 > y) & (y1 <= y) & (side < 0)
        return np.sum(upward, axis=1) - np.sum(downward, axis=1)

    def _boundary_distances(self, points: np.ndarray) -> np.ndarray:
        rel = points[:, None, :] - self._starts[None, :, :]
        dots = np.sum(rel * self._edge_vecs[None, :, :], axis=2)
        with np.errstate(divide="ignore", invalid="ignore"):
            t = np.where(self._edge_lengths_sq > 0, dots / self._edge_lengths_sq, 0.0)
        t = np.clip(t, 0.0, 1.0)
        closest = self._starts[None, :, :] + t[:, :, None] * self._edge_vecs[None, :, :]
        return np.min(np.hypot(*(points[:, None, :] - closest).transpose(2, 0, 1)), axis=1)

    def contains_points(self, points: np.ndarray) -> np.ndarray:
        """Vectorised membership test for an ``(N, 2)`` array."""

        pts = np.asarray(points, dtype=float).reshape(-1, 2)
        inside = self._winding_numbers(pts) != 0
        if self.tolerance > 0:
            inside |= self._boundary_distances(pts) <= self.tolerance
        return inside

    def contains_point(self, point: Point) -> bool:
        lo, hi = self._bbox
        tol = self.tolerance
        if point.x < lo.x - tol or point.x > hi.x + tol or point.y < lo.y - tol or point.y > hi.y + tol:
            return False
        return bool(self.contains_points(np.array([[point.x, point.y]]))[0])


class RectRegion:
    """Axis-aligned rectangle, inclusive of its boundary."""

    def __init__(self, min_point: Point, max_point: Point):
        if min_point.x > max_point.x or min_point.y > max_point.y:
            raise RegionError(f"invalid rectangle corners {min_point} / {max_point}")
        self.min_point = min_point
        self.max_point = max_point

    def __repr__(self) -> str:
        return f"RectRegion({self.min_point.to_tuple()}, {self.max_point.to_tuple()})"

    def bounding_box(self) -> Tuple[Point, Point]:
        return self.min_point, self.max_point

    def contains_point(self, point: Point) -> bool:
        return (
            self.min_point.x <= point.x <= self.max_point.x
            and self.min_point.y <= point.y <= self.max_point.y
        )

    def outline(self) -> List[Point]:
        lo, hi = self.min_point, self.max_point
        return [lo, Point(hi.x, lo.y), hi, Point(lo.x, hi.y)]


def region_from_points(
    coords: Iterable[Sequence[float]], tolerance: float = DEFAULT_TOLERANCE
) -> PolygonRegion:
    """Build a :class:`PolygonRegion` from ``[x, y]`` pairs."""

    vertices: List[Point] = []
    for idx, pair in enumerate(coords):
        if not isinstance(pair, (list, tuple)) or len(pair) != 2:
            raise RegionError(f"region vertex #{idx} must be an [x, y] pair, got {pair!r}")
        try:
            vertices.append(Point(float(pair[0]), float(pair[1])))
        except (TypeError, ValueError) as exc:
            raise RegionError(f"region vertex #{idx} is not numeric: {pair!r}") from exc
    region = PolygonRegion(vertices, tolerance=tolerance)
    logger.debug("Built %r with bounding box %s", region, region.bounding_box())
    return region


def region_outline(region: Region) -> List[Point]:
    """Return the boundary vertices of a known region type, else the bounding box."""

    if isinstance(region, PolygonRegion):
        return list(region.vertices)
    if isinstance(region, RectRegion):
        return region.outline()
    lo, hi = region.bounding_box()
    return RectRegion(lo, hi).outline()


__all__ = [
    "DEFAULT_TOLERANCE",
    "PolygonRegion",
    "RectRegion",
    "Region",
    "region_from_points",
    "region_outline",
]
