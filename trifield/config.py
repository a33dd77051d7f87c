"""JSON run configuration for the command line driver."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Mapping, Optional, Sequence, Union

from .errors import ConfigError, OptionsError, RegionError
from .logging_utils import debug_log_call
from .options import PlacementOptions
from .region import DEFAULT_TOLERANCE, PolygonRegion, region_from_points

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config_default.json"
DEFAULT_OUTPUT_PATH = "out.json"

_KNOWN_KEYS = {
    "allowed_area",
    "template",
    "output",
    "seed",
    "include_region",
    "region_tolerance",
    "placement",
}


@dataclass
class RunConfig:
    """Inputs for one generation run."""

    allowed_area: List[Sequence[float]]
    template: Optional[Path] = None
    output: Path = Path(DEFAULT_OUTPUT_PATH)
    seed: Optional[int] = None
    include_region: bool = False
    region_tolerance: float = DEFAULT_TOLERANCE
    placement: PlacementOptions = field(default_factory=PlacementOptions)

    def build_region(self) -> PolygonRegion:
        return region_from_points(self.allowed_area, tolerance=self.region_tolerance)


def _resolve(base: Path, value: Any, key: str) -> Path:
    if not isinstance(value, str) or not value:
        raise ConfigError(f"'{key}' must be a non-empty path string")
    path = Path(value)
    return path if path.is_absolute() else base / path


def config_from_mapping(data: Mapping[str, Any], base_dir: Union[str, Path] = ".") -> RunConfig:
    base = Path(base_dir)
    unknown = sorted(set(data) - _KNOWN_KEYS)
    if unknown:
        logger.warning("Ignoring unknown config key(s): %s", ", ".join(unknown))

    area = data.get("allowed_area")
    if not isinstance(area, list) or not area:
        raise ConfigError("'allowed_area' must be a non-empty list of [x, y] pairs")

    seed = data.get("seed")
    if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int)):
        raise ConfigError(f"'seed' must be an integer, got {seed!r}")

    placement_data = data.get("placement", {})
    if not isinstance(placement_data, dict):
        raise ConfigError("'placement' must be a JSON object")

    try:
        config = RunConfig(
            allowed_area=list(area),
            template=_resolve(base, data["template"], "template") if data.get("template") else None,
            output=_resolve(base, data.get("output", DEFAULT_OUTPUT_PATH), "output"),
            seed=seed,
            include_region=bool(data.get("include_region", False)),
            region_tolerance=float(data.get("region_tolerance", DEFAULT_TOLERANCE)),
            placement=PlacementOptions.from_mapping(placement_data),
        )
        config.build_region()
    except (OptionsError, RegionError) as exc:
        raise ConfigError(str(exc)) from exc
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"invalid configuration value: {exc}") from exc
    return config


@debug_log_call(logger)
def load_config(path: Union[str, Path]) -> RunConfig:
    """Read a :class:`RunConfig` from a JSON file."""

    config_path = Path(path)
    try:
        with config_path.open(encoding="utf-8") as fin:
            data = json.load(fin)
    except OSError as exc:
        raise ConfigError(f"cannot read config {config_path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"config {config_path} is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"config {config_path} must contain a JSON object")
    logger.info("Loaded config from %s", config_path)
    return config_from_mapping(data, base_dir=config_path.parent)


__all__ = [
    "DEFAULT_CONFIG_PATH",
    "DEFAULT_OUTPUT_PATH",
    "RunConfig",
    "config_from_mapping",
    "load_config",
]
