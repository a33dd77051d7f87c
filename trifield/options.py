"""Tunable distribution parameters for the placement generator."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

from .errors import OptionsError


class StopRule(str, Enum):
    """How the generation loop decides to stop."""

    ATTEMPTS = "attempts"  # total attempts reach max_attempts
    REJECTIONS = "rejections"  # consecutive rejections reach max_rejections


@dataclass
class PlacementOptions:
    """Configuration knobs for candidate sampling and the rejection loop."""

    p_vertical_flip: float = 0.75
    p_marker: float = 0.5
    b_horizontal_low: float = 2.5
    b_horizontal_high: float = 5.0
    b_horizontal_min: float = 2.5
    b_vertical_stddev: float = 0.3
    c_horizontal_stddev: float = 0.6
    c_vertical_min: float = 1.5
    scale_mean: float = 1.0
    scale_stddev: float = 1.0
    rotation_stddev_flipped: float = 0.1
    rotation_stddev_upright: float = 0.2617994
    personal_space_low: float = 1.4
    personal_space_high: float = 3.8
    personal_space_min: float = 1.0
    personal_space_max: float = 2.4
    marker_offset: float = 0.8
    stop_rule: StopRule = StopRule.ATTEMPTS
    max_attempts: int = 120_000
    max_rejections: int = 5_000

    def __post_init__(self) -> None:
        if not isinstance(self.stop_rule, StopRule):
            try:
                self.stop_rule = StopRule(self.stop_rule)
            except ValueError as exc:
                choices = ", ".join(rule.value for rule in StopRule)
                raise OptionsError(
                    f"unknown stop rule {self.stop_rule!r} (expected one of: {choices})"
                ) from exc

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "PlacementOptions":
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise OptionsError(f"unknown placement option(s): {', '.join(unknown)}")
        values = dict(data)
        for f in dataclasses.fields(cls):
            if f.name not in values or f.name == "stop_rule":
                continue
            caster = int if f.name.startswith("max_") else float
            try:
                values[f.name] = caster(values[f.name])
            except (TypeError, ValueError) as exc:
                raise OptionsError(f"{f.name} must be numeric, got {values[f.name]!r}") from exc
        options = cls(**values)
        options.validate()
        return options

    def replace(self, **changes: Any) -> "PlacementOptions":
        options = dataclasses.replace(self, **changes)
        options.validate()
        return options

    def to_dict(self) -> dict:
        data = dataclasses.asdict(self)
        data["stop_rule"] = self.stop_rule.value
        return data

    def validate(self) -> None:
        for name in ("p_vertical_flip", "p_marker"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise OptionsError(f"{name} must be within [0, 1], got {value}")
        for name in (
            "b_vertical_stddev",
            "c_horizontal_stddev",
            "scale_stddev",
            "rotation_stddev_flipped",
            "rotation_stddev_upright",
        ):
            if getattr(self, name) < 0.0:
                raise OptionsError(f"{name} must be non-negative")
        for low, high in (
            ("b_horizontal_low", "b_horizontal_high"),
            ("personal_space_low", "personal_space_high"),
            ("personal_space_min", "personal_space_max"),
        ):
            if getattr(self, low) > getattr(self, high):
                raise OptionsError(f"{low} must not exceed {high}")
        if self.personal_space_min <= 0.0:
            raise OptionsError("personal_space_min must be positive")
        if self.c_vertical_min < 0.0 or self.b_horizontal_min < 0.0:
            raise OptionsError("minimum clamps must be non-negative")
        if self.stop_rule is StopRule.ATTEMPTS and self.max_attempts <= 0:
            raise OptionsError("max_attempts must be positive")
        if self.stop_rule is StopRule.REJECTIONS and self.max_rejections <= 0:
            raise OptionsError("max_rejections must be positive")


__all__ = ["StopRule", "PlacementOptions"]
