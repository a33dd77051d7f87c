"""Rejection-sampling placement of triangular obstacles."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterator, List, Optional, Sequence, Tuple, Union, overload

from .geometry import (
    Point,
    Region,
    Transform,
    Triangle,
    Vector,
    distance_triangle_to_triangle,
    region_contains_triangle,
    rotate_triangle_about,
    triangle_center,
    triangle_contains_point,
)
from .logging_utils import debug_log_call
from .options import PlacementOptions, StopRule
from .random_source import RandomSource

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]


@dataclass(frozen=True)
class Placement:
    """A sampled triangle together with its spacing radius and optional marker."""

    triangle: Triangle
    personal_space: float
    marker: Optional[Point] = None
    flipped: bool = False


class PlacementSet:
    """Ordered, append-only collection of accepted placements."""

    def __init__(self, placements: Sequence[Placement] = ()):
        self._items: List[Placement] = []
        for placement in placements:
            self.append(placement)

    def append(self, placement: Placement) -> None:
        self._items.append(placement)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Placement]:
        return iter(self._items)

    @overload
    def __getitem__(self, index: int) -> Placement: ...

    @overload
    def __getitem__(self, index: slice) -> List[Placement]: ...

    def __getitem__(self, index: Union[int, slice]) -> Union[Placement, List[Placement]]:
        return self._items[index]

    def __repr__(self) -> str:
        return f"PlacementSet(len={len(self._items)})"

    def triangles(self) -> List[Triangle]:
        return [placement.triangle for placement in self._items]


class Rejection(str, Enum):
    SPACING = "spacing"
    REGION = "region"


@dataclass
class GenerationResult:
    placements: PlacementSet = field(default_factory=PlacementSet)
    attempts: int = 0
    rejections: int = 0
    rejected_by_spacing: int = 0
    rejected_by_region: int = 0
    elapsed: float = 0.0
    stop_reason: str = ""

    @property
    def accepted(self) -> int:
        return len(self.placements)


def _canonical_triangle(rng: RandomSource, options: PlacementOptions) -> Tuple[Triangle, bool]:
    # a is the left vertex, b roughly level with it to the right, c the apex
    # near the middle of ab, above it or (flipped) below it.
    a = Point(0.0, 0.0)
    b = Point(
        a.x + max(rng.uniform(options.b_horizontal_low, options.b_horizontal_high), options.b_horizontal_min),
        a.y + rng.normal(0.0, options.b_vertical_stddev),
    )
    width = abs(b.x - a.x)
    flipped = rng.bool(options.p_vertical_flip)
    c_x = (a.x + b.x) / 2.0 + rng.normal(0.0, options.c_horizontal_stddev)
    v_delta = max(rng.normal(width / 4.0, width / 4.0), options.c_vertical_min)
    c = Point(c_x, a.y - v_delta if flipped else a.y + v_delta)
    return Triangle(a, b, c), flipped


def _marker_for(triangle: Triangle, flipped: bool, offset: float) -> Point:
    if flipped:
        return triangle.ab.midpoint().translate(Vector(0.0, offset))
    return triangle.c.translate(Vector(0.0, offset))


def sample_candidate(
    rng: RandomSource,
    bounding_min: Point,
    bounding_max: Point,
    options: Optional[PlacementOptions] = None,
) -> Placement:
    """Draw one unvalidated placement inside the given bounding box."""

    opts = options or PlacementOptions()
    canonical, flipped = _canonical_triangle(rng, opts)
    rotation_stddev = opts.rotation_stddev_flipped if flipped else opts.rotation_stddev_upright

    scale = max(rng.normal(opts.scale_mean, opts.scale_stddev), 1.0)
    shift_x = rng.uniform(bounding_min.x, bounding_max.x)
    shift_y = rng.uniform(bounding_min.y, bounding_max.y)
    angle = rng.normal(0.0, rotation_stddev)

    placed = Transform.scale(scale, scale).then(Transform.translation(shift_x, shift_y))
    triangle = placed.apply_triangle(canonical)
    triangle = rotate_triangle_about(triangle, triangle_center(triangle), angle)

    personal_space = min(
        opts.personal_space_max,
        max(opts.personal_space_min, rng.uniform(opts.personal_space_low, opts.personal_space_high)),
    )

    marker = None
    if rng.bool(opts.p_marker):
        marker = _marker_for(triangle, flipped, opts.marker_offset)

    return Placement(triangle=triangle, personal_space=personal_space, marker=marker, flipped=flipped)


def clears(candidate: Placement, other: Placement) -> bool:
    """Return ``True`` when the two placements respect each other's personal space."""

    required = max(candidate.personal_space, other.personal_space)
    # The box gap never exceeds the true distance, so a wide gap settles it early.
    if _bbox_gap(candidate.triangle, other.triangle) > required:
        return True
    return distance_triangle_to_triangle(candidate.triangle, other.triangle) > required


def _bbox_gap(first: Triangle, second: Triangle) -> float:
    xs1 = (first.a.x, first.b.x, first.c.x)
    ys1 = (first.a.y, first.b.y, first.c.y)
    xs2 = (second.a.x, second.b.x, second.c.x)
    ys2 = (second.a.y, second.b.y, second.c.y)
    dx = max(min(xs2) - max(xs1), min(xs1) - max(xs2), 0.0)
    dy = max(min(ys2) - max(ys1), min(ys1) - max(ys2), 0.0)
    return max(dx, dy)


def validate_candidate(
    candidate: Placement, placements: Sequence[Placement], region: Region
) -> Optional[Rejection]:
    """Return the reason *candidate* must be rejected, or ``None`` to accept it."""

    for placement in placements:
        if not clears(candidate, placement):
            return Rejection.SPACING
    if not region_contains_triangle(region, candidate.triangle):
        return Rejection.REGION
    return None


def _should_stop(result: GenerationResult, streak: int, options: PlacementOptions) -> bool:
    if options.stop_rule is StopRule.ATTEMPTS:
        return result.attempts >= options.max_attempts
    return streak >= options.max_rejections


@debug_log_call(logger)
def generate_placements(
    region: Region,
    rng: RandomSource,
    options: Optional[PlacementOptions] = None,
    progress: Optional[ProgressCallback] = None,
) -> GenerationResult:
    """Fill *region* with placements until the configured stop rule fires."""

    opts = options or PlacementOptions()
    opts.validate()
    bounding_min, bounding_max = region.bounding_box()
    result = GenerationResult()
    start = time.perf_counter()
    streak = 0

    while not _should_stop(result, streak, opts):
        result.attempts += 1
        candidate = sample_candidate(rng, bounding_min, bounding_max, opts)
        reason = validate_candidate(candidate, result.placements, region)
        if reason is None:
            result.placements.append(candidate)
            streak = 0
            logger.debug(
                "Accepted placement #%d after %d attempt(s) (personal_space=%.3f, marker=%s)",
                len(result.placements),
                result.attempts,
                candidate.personal_space,
                candidate.marker is not None,
            )
            if progress is not None:
                progress(len(result.placements), result.attempts)
            continue

        streak += 1
        result.rejections += 1
        if reason is Rejection.SPACING:
            result.rejected_by_spacing += 1
        else:
            result.rejected_by_region += 1

    result.elapsed = time.perf_counter() - start
    if opts.stop_rule is StopRule.ATTEMPTS:
        result.stop_reason = f"reached {opts.max_attempts} attempts"
    else:
        result.stop_reason = f"reached {opts.max_rejections} consecutive rejections"
    logger.info(
        "Placement finished: placed=%d attempts=%d rejected(spacing=%d, region=%d) in %.3fs (%s)",
        result.accepted,
        result.attempts,
        result.rejected_by_spacing,
        result.rejected_by_region,
        result.elapsed,
        result.stop_reason,
    )
    return result


@debug_log_call(logger)
def resolve_markers(placements: Sequence[Placement]) -> List[Point]:
    """Return the markers that fall outside every triangle of the final set."""

    triangles = [placement.triangle for placement in placements]
    surviving: List[Point] = []
    dropped = 0
    for placement in placements:
        marker = placement.marker
        if marker is None:
            continue
        if any(triangle_contains_point(triangle, marker) for triangle in triangles):
            dropped += 1
            continue
        surviving.append(marker)
    logger.info("Marker resolution: kept=%d dropped=%d", len(surviving), dropped)
    return surviving


__all__ = [
    "Placement",
    "PlacementSet",
    "Rejection",
    "GenerationResult",
    "sample_candidate",
    "clears",
    "validate_candidate",
    "generate_placements",
    "resolve_markers",
]
