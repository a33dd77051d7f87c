from .errors import ConfigError, ExportError, OptionsError, RegionError, TrifieldError
from .geometry import (
    LineSegment,
    Point,
    Region,
    Transform,
    Triangle,
    Vector,
    closest_point_on_segment,
    distance_point_to_segment,
    distance_point_to_triangle,
    distance_triangle_to_triangle,
    region_contains_triangle,
    rotate_triangle_about,
    segments_intersect,
    triangle_center,
    triangle_contains_point,
    triangles_intersect,
)
from .region import PolygonRegion, RectRegion, region_from_points
from .random_source import NumpyRandomSource, RandomSource
from .options import PlacementOptions, StopRule
from .placement import (
    GenerationResult,
    Placement,
    PlacementSet,
    Rejection,
    generate_placements,
    resolve_markers,
    sample_candidate,
    validate_candidate,
)
from .export import build_level, load_template, save_level
from .tikz import generate_tikz_code, generate_tikz_document
from .config import RunConfig, load_config

__all__ = [
    'TrifieldError',
    'ConfigError',
    'ExportError',
    'OptionsError',
    'RegionError',
    'Point',
    'Vector',
    'LineSegment',
    'Triangle',
    'Transform',
    'Region',
    'closest_point_on_segment',
    'distance_point_to_segment',
    'distance_point_to_triangle',
    'distance_triangle_to_triangle',
    'region_contains_triangle',
    'rotate_triangle_about',
    'segments_intersect',
    'triangle_center',
    'triangle_contains_point',
    'triangles_intersect',
    'PolygonRegion',
    'RectRegion',
    'region_from_points',
    'RandomSource',
    'NumpyRandomSource',
    'PlacementOptions',
    'StopRule',
    'Placement',
    'PlacementSet',
    'Rejection',
    'GenerationResult',
    'sample_candidate',
    'validate_candidate',
    'generate_placements',
    'resolve_markers',
    'build_level',
    'load_template',
    'save_level',
    'generate_tikz_code',
    'generate_tikz_document',
    'RunConfig',
    'load_config',
]
