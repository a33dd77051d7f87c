from pathlib import Path

from trifield import (
    NumpyRandomSource,
    PlacementOptions,
    StopRule,
    build_level,
    generate_placements,
    generate_tikz_document,
    region_from_points,
    resolve_markers,
    save_level,
)

L_SHAPE = [[0, 0], [60, 0], [60, 20], [20, 20], [20, 60], [0, 60]]


def run(out_dir: str = "build"):
    region = region_from_points(L_SHAPE)
    options = PlacementOptions(stop_rule=StopRule.REJECTIONS, max_rejections=500)
    result = generate_placements(region, NumpyRandomSource.from_seed(123), options)
    markers = resolve_markers(result.placements)

    out = Path(out_dir)
    save_level(build_level(result.placements, markers, region=region), out / "l_shape.json")
    (out / "l_shape.tex").write_text(
        generate_tikz_document(result.placements, markers, region=region),
        encoding="utf-8",
    )
    print(f"{result.accepted} triangles, {len(markers)} markers, stop: {result.stop_reason}")


if __name__ == "__main__":
    run()
