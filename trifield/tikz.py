"""TikZ preview of a placement run."""

from __future__ import annotations

import math
from typing import Iterable, List, Optional, Sequence

from .geometry import Point, Region
from .placement import Placement
from .region import region_outline

MARKER_RADIUS_PT = 1.4

standalone_tpl = r"""\documentclass[border=2pt]{standalone}
\usepackage{tikz}
\tikzset{
  region/.style={line width=0.6pt, dash pattern=on 3pt off 2pt},
  obstacle/.style={line width=0.4pt, fill=black!15},
  marker/.style={fill=red!70!black},
}
\begin{document}
%s
\end{document}
"""


def _format_float(value: float) -> str:
    if math.isnan(value) or math.isinf(value):
        raise ValueError("Cannot format non-finite float for TikZ output")
    formatted = f"{value:.4f}"
    formatted = formatted.rstrip("0").rstrip(".")
    if formatted in ("", "-0"):
        return "0"
    return formatted


def _format_point(point: Point) -> str:
    return f"({_format_float(point.x)}, {_format_float(point.y)})"


def _closed_path(points: Iterable[Point]) -> str:
    return " -- ".join(_format_point(p) for p in points) + " -- cycle"


def generate_tikz_code(
    placements: Iterable[Placement],
    markers: Sequence[Point] = (),
    *,
    region: Optional[Region] = None,
    scale: float = 0.1,
) -> str:
    """Return a ``tikzpicture`` drawing the region, triangles and markers."""

    lines: List[str] = [f"\\begin{{tikzpicture}}[scale={_format_float(scale)}]"]
    if region is not None:
        lines.append(f"  \\draw[region] {_closed_path(region_outline(region))};")
    for placement in placements:
        lines.append(f"  \\draw[obstacle] {_closed_path(placement.triangle.vertices())};")
    for marker in markers:
        lines.append(
            f"  \\fill[marker] {_format_point(marker)} circle ({_format_float(MARKER_RADIUS_PT)}pt);"
        )
    lines.append("\\end{tikzpicture}")
    return "\n".join(lines)


def generate_tikz_document(
    placements: Iterable[Placement],
    markers: Sequence[Point] = (),
    *,
    region: Optional[Region] = None,
    scale: float = 0.1,
) -> str:
    """Render a standalone LaTeX document for the preview."""

    return standalone_tpl % generate_tikz_code(placements, markers, region=region, scale=scale)


__all__ = ["generate_tikz_code", "generate_tikz_document"]
