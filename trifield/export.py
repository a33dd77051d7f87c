"""Conversion of accepted placements into a JSON level document."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from .errors import ExportError
from .geometry import Point, Region, Triangle
from .logging_utils import debug_log_call
from .placement import Placement
from .region import region_outline

logger = logging.getLogger(__name__)

DEFAULT_TITLE_SUFFIX = "auto lev"
MARKER_OBJECT_TYPE = "apple"

Level = Dict[str, Any]


def triangle_to_polygon(triangle: Triangle) -> List[List[float]]:
    return [[p.x, p.y] for p in triangle.vertices()]


def marker_to_object(marker: Point) -> Dict[str, Any]:
    return {"type": MARKER_OBJECT_TYPE, "position": [marker.x, marker.y]}


def _empty_level() -> Level:
    return {"title": "", "polygons": [], "objects": []}


def _checked_template(template: Mapping[str, Any]) -> Level:
    level = _empty_level()
    level.update(template)
    if not isinstance(level.get("title"), str):
        raise ExportError("level template 'title' must be a string")
    for key in ("polygons", "objects"):
        if not isinstance(level.get(key), list):
            raise ExportError(f"level template '{key}' must be a list")
        level[key] = list(level[key])
    return level


@debug_log_call(logger, log_result=False)
def build_level(
    placements: Iterable[Placement],
    markers: Sequence[Point],
    *,
    template: Optional[Mapping[str, Any]] = None,
    title_suffix: str = DEFAULT_TITLE_SUFFIX,
    region: Optional[Region] = None,
) -> Level:
    """Append one polygon per placement and one object per marker to *template*.

    When *region* is given its outline is emitted as an extra polygon ahead of
    the placements.
    """

    level = _checked_template(template or {})
    if region is not None:
        level["polygons"].append([[p.x, p.y] for p in region_outline(region)])
    count = 0
    for placement in placements:
        level["polygons"].append(triangle_to_polygon(placement.triangle))
        count += 1
    for marker in markers:
        level["objects"].append(marker_to_object(marker))
    if title_suffix:
        level["title"] = f"{level['title']} {title_suffix}".strip()
    logger.info("Built level with %d triangle(s) and %d marker(s)", count, len(markers))
    return level


def load_template(path: Union[str, Path]) -> Level:
    template_path = Path(path)
    try:
        with template_path.open(encoding="utf-8") as fin:
            data = json.load(fin)
    except OSError as exc:
        raise ExportError(f"cannot read level template {template_path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ExportError(f"level template {template_path} is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise ExportError(f"level template {template_path} must contain a JSON object")
    return _checked_template(data)


def save_level(level: Mapping[str, Any], path: Union[str, Path]) -> Path:
    output_path = Path(path)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(json.dumps(level, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        raise ExportError(f"cannot write level to {output_path}: {exc}") from exc
    logger.info("Wrote level to %s", output_path)
    return output_path


__all__ = [
    "DEFAULT_TITLE_SUFFIX",
    "MARKER_OBJECT_TYPE",
    "build_level",
    "load_template",
    "marker_to_object",
    "save_level",
    "triangle_to_polygon",
]
