from itertools import combinations

import pytest

from trifield.geometry import (
    Point,
    Triangle,
    distance_triangle_to_triangle,
    region_contains_triangle,
    triangle_contains_point,
)
from trifield.options import PlacementOptions, StopRule
from trifield.placement import (
    Placement,
    PlacementSet,
    Rejection,
    generate_placements,
    resolve_markers,
    sample_candidate,
    validate_candidate,
)
from trifield.random_source import NumpyRandomSource
from trifield.region import RectRegion, region_from_points


class ScriptedRandom:
    """Random source replaying fixed draws per distribution."""

    def __init__(self, uniform=(), normal=(), flags=()):
        self._uniform = list(uniform)
        self._normal = list(normal)
        self._flags = list(flags)
        self.normal_calls = []

    def uniform(self, low, high):
        return self._uniform.pop(0)

    def normal(self, mean, stddev):
        self.normal_calls.append((mean, stddev))
        return self._normal.pop(0)

    def bool(self, probability):
        return self._flags.pop(0)


def tri(*coords):
    return Triangle(*(Point(x, y) for x, y in coords))


def _assert_close(point, x, y):
    assert point.x == pytest.approx(x)
    assert point.y == pytest.approx(y)


def test_sample_candidate_flat_bottom_with_marker_on_apex():
    # uniform: b width, shift x, shift y, personal space
    # normal: b vertical, c horizontal, c vertical, scale, rotation
    rng = ScriptedRandom(
        uniform=[3.0, 10.0, 20.0, 2.0],
        normal=[0.0, 0.0, 1.0, 0.5, 0.0],
        flags=[False, True],
    )

    placement = sample_candidate(rng, Point(0.0, 0.0), Point(100.0, 100.0))

    assert not placement.flipped
    _assert_close(placement.triangle.a, 10.0, 20.0)
    _assert_close(placement.triangle.b, 13.0, 20.0)
    # c vertical offset clamps to the 1.5 minimum and points upward.
    _assert_close(placement.triangle.c, 11.5, 21.5)
    assert placement.personal_space == 2.0
    _assert_close(placement.marker, 11.5, 22.3)
    # c vertical distribution is centred on a quarter of the width.
    assert rng.normal_calls[2] == (0.75, 0.75)
    assert rng.normal_calls[-1] == (0.0, PlacementOptions().rotation_stddev_upright)


def test_sample_candidate_flat_top_marker_sits_above_base_midpoint():
    rng = ScriptedRandom(
        uniform=[4.0, 0.0, 0.0, 3.5],
        normal=[0.0, 0.0, 2.0, 2.0, 0.0],
        flags=[True, True],
    )

    placement = sample_candidate(rng, Point(0.0, 0.0), Point(100.0, 100.0))

    assert placement.flipped
    _assert_close(placement.triangle.b, 8.0, 0.0)
    _assert_close(placement.triangle.c, 4.0, -4.0)
    assert placement.personal_space == 2.4
    _assert_close(placement.marker, 4.0, 0.8)
    assert rng.normal_calls[-1] == (0.0, PlacementOptions().rotation_stddev_flipped)


def test_sample_candidate_clamps_small_draws_and_skips_marker():
    rng = ScriptedRandom(
        uniform=[1.0, 0.0, 0.0, 0.2],
        normal=[0.0, 0.0, 0.0, -3.0, 0.0],
        flags=[False, False],
    )

    placement = sample_candidate(rng, Point(0.0, 0.0), Point(1.0, 1.0))

    _assert_close(placement.triangle.b, 2.5, 0.0)
    _assert_close(placement.triangle.c, 1.25, 1.5)
    assert placement.personal_space == 1.0
    assert placement.marker is None


def test_rotation_spins_triangle_in_place():
    rng = ScriptedRandom(
        uniform=[3.0, 50.0, 50.0, 2.0],
        normal=[0.0, 0.0, 1.0, 1.0, 0.5],
        flags=[False, False],
    )

    placement = sample_candidate(rng, Point(0.0, 0.0), Point(100.0, 100.0))

    cx = sum(p.x for p in placement.triangle.vertices()) / 3.0
    cy = sum(p.y for p in placement.triangle.vertices()) / 3.0
    assert cx == pytest.approx(51.5)
    assert cy == pytest.approx(50.5)
    assert placement.triangle.a.y != pytest.approx(50.0)


def test_validate_candidate_uses_larger_radius_with_strict_comparison():
    region = RectRegion(Point(-10.0, -10.0), Point(10.0, 10.0))
    accepted = [Placement(tri((0.0, 0.0), (1.0, 0.0), (0.0, 1.0)), personal_space=1.5)]
    right = tri((3.0, 0.0), (4.0, 0.0), (3.0, 1.0))

    assert validate_candidate(Placement(right, 2.0), accepted, region) is Rejection.SPACING
    assert validate_candidate(Placement(right, 1.9), accepted, region) is None

    roomy = [Placement(accepted[0].triangle, personal_space=2.0)]
    assert validate_candidate(Placement(right, 1.0), roomy, region) is Rejection.SPACING


def test_validate_candidate_rejects_outside_region():
    region = RectRegion(Point(0.0, 0.0), Point(5.0, 5.0))
    candidate = Placement(tri((4.0, 4.0), (6.0, 4.0), (5.0, 4.5)), 1.0)

    assert validate_candidate(candidate, [], region) is Rejection.REGION


def test_placement_set_is_ordered():
    first = Placement(tri((0, 0), (1, 0), (0, 1)), 1.0)
    second = Placement(tri((5, 5), (6, 5), (5, 6)), 1.0)
    placements = PlacementSet([first])
    placements.append(second)

    assert len(placements) == 2
    assert list(placements) == [first, second]
    assert placements[1] is second
    assert placements.triangles() == [first.triangle, second.triangle]


def test_resolve_markers_filters_against_final_set():
    early = Placement(tri((0, 0), (4, 0), (2, 2)), 1.0, marker=Point(10.0, 10.0))
    clear = Placement(tri((20, 20), (24, 20), (22, 22)), 1.0, marker=Point(22.0, 22.8))
    bare = Placement(tri((30, 30), (34, 30), (32, 32)), 1.0)
    # Placed after ``early`` and covering its marker.
    late = Placement(tri((9, 9), (12, 9), (10, 12)), 1.0, marker=Point(1.0, 0.5))

    markers = resolve_markers([early, clear, bare, late])

    assert markers == [Point(22.0, 22.8)]


def _assert_run_invariants(result, region):
    placements = list(result.placements)
    for first, second in combinations(placements, 2):
        distance = distance_triangle_to_triangle(first.triangle, second.triangle)
        assert distance > max(first.personal_space, second.personal_space)
    for placement in placements:
        assert region_contains_triangle(region, placement.triangle)
        assert 1.0 <= placement.personal_space <= 2.4
    for marker in resolve_markers(placements):
        assert not any(triangle_contains_point(p.triangle, marker) for p in placements)


def test_generate_placements_end_to_end_is_deterministic():
    region = region_from_points([[0, 0], [100, 0], [100, 100], [0, 100]])
    options = PlacementOptions(max_attempts=1000)

    result = generate_placements(region, NumpyRandomSource.from_seed(1234), options)
    again = generate_placements(region, NumpyRandomSource.from_seed(1234), options)

    assert result.attempts == 1000
    assert result.accepted > 0
    assert result.accepted + result.rejections == result.attempts
    assert result.rejections == result.rejected_by_spacing + result.rejected_by_region
    _assert_run_invariants(result, region)
    assert list(again.placements) == list(result.placements)


def test_generate_placements_stops_on_consecutive_rejections():
    region = RectRegion(Point(0.0, 0.0), Point(30.0, 30.0))
    options = PlacementOptions(stop_rule=StopRule.REJECTIONS, max_rejections=40)

    result = generate_placements(region, NumpyRandomSource.from_seed(9), options)

    assert result.rejections >= 40
    assert "consecutive rejections" in result.stop_reason
    _assert_run_invariants(result, region)


def test_generate_placements_reports_progress():
    region = RectRegion(Point(0.0, 0.0), Point(50.0, 50.0))
    calls = []

    result = generate_placements(
        region,
        NumpyRandomSource.from_seed(2),
        PlacementOptions(max_attempts=200),
        progress=lambda placed, attempts: calls.append((placed, attempts)),
    )

    assert len(calls) == result.accepted
    assert [placed for placed, _ in calls] == list(range(1, result.accepted + 1))
    assert all(attempts <= 200 for _, attempts in calls)
