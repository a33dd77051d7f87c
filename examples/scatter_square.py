import logging

from trifield import (
    NumpyRandomSource,
    PlacementOptions,
    Point,
    RectRegion,
    generate_placements,
    resolve_markers,
)


def run():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s:%(name)s:%(message)s")
    region = RectRegion(Point(0.0, 0.0), Point(100.0, 100.0))
    result = generate_placements(
        region,
        NumpyRandomSource.from_seed(7),
        PlacementOptions(max_attempts=2000),
    )
    markers = resolve_markers(result.placements)

    print(f"Placed {result.accepted} triangles in {result.attempts} attempts")
    for idx, placement in enumerate(result.placements[:5]):
        a, b, c = placement.triangle.vertices()
        print(
            f"  [{idx}] ({a.x:.2f}, {a.y:.2f}) ({b.x:.2f}, {b.y:.2f}) ({c.x:.2f}, {c.y:.2f})"
            f" personal_space={placement.personal_space:.2f}"
        )
    print(f"Markers kept: {len(markers)}")


if __name__ == "__main__":
    run()
