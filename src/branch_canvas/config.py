"""Layout configuration.

All options are pure geometry. Defaults match the dashboard's branch graph.
A config file is a flat YAML mapping, e.g.::

    node_width: 180
    horizontal_gap: 40
    axis_orientation: columns
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

import yaml


class ConfigError(ValueError):
    """Raised for an unknown option or an out-of-range value."""


class AxisOrientation(str, Enum):
    """How (depth, cross) slots map onto screen axes.

    ROWS: each generation is a row (depth → y, siblings spread along x).
    COLUMNS: each generation is a column (depth → x, siblings spread along y).
    """

    ROWS = "rows"
    COLUMNS = "columns"


# Canvas size for a graph with nothing in it.
EMPTY_CANVAS: tuple[int, int] = (400, 200)
MIN_CANVAS_WIDTH: int = 400
MIN_CANVAS_HEIGHT: int = 150

_SIZES = ("node_width", "node_height", "tentative_node_height")
_SPACINGS = ("horizontal_gap", "vertical_gap", "padding")


@dataclass(frozen=True)
class LayoutConfig:
    """Geometry used to turn layout slots into pixel coordinates."""

    node_width: float = 220
    node_height: float = 68
    tentative_node_height: float = 64
    horizontal_gap: float = 60
    vertical_gap: float = 80
    padding: float = 40
    axis_orientation: AxisOrientation = AxisOrientation.ROWS

    def __post_init__(self) -> None:
        for name in _SIZES + _SPACINGS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigError(f"{name} must be a number, got {value!r}")
            if name in _SIZES and value <= 0:
                raise ConfigError(f"{name} must be positive, got {value!r}")
            if name in _SPACINGS and value < 0:
                raise ConfigError(f"{name} must not be negative, got {value!r}")
        try:
            orientation = AxisOrientation(self.axis_orientation)
        except ValueError:
            choices = ", ".join(o.value for o in AxisOrientation)
            raise ConfigError(
                f"axis_orientation must be one of {choices}, got {self.axis_orientation!r}"
            ) from None
        object.__setattr__(self, "axis_orientation", orientation)

    @property
    def depth_pitch(self) -> float:
        """Distance between two generations along the depth axis."""
        if self.axis_orientation is AxisOrientation.ROWS:
            return self.node_height + self.vertical_gap
        return self.node_width + self.horizontal_gap

    @property
    def cross_pitch(self) -> float:
        """Distance between two sibling slots along the cross axis."""
        if self.axis_orientation is AxisOrientation.ROWS:
            return self.node_width + self.horizontal_gap
        return self.node_height + self.vertical_gap

    def with_orientation(self, orientation: AxisOrientation | str) -> LayoutConfig:
        return dataclasses.replace(self, axis_orientation=AxisOrientation(orientation))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> LayoutConfig:
        """Build a config from parsed data, rejecting unknown keys."""
        if not data:
            return cls()
        if not isinstance(data, Mapping):
            raise ConfigError(f"layout config must be a mapping, got {type(data).__name__}")
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"unknown layout option(s): {', '.join(map(str, unknown))}")
        return cls(**data)


def load_config(path: Path) -> LayoutConfig:
    """Read a YAML layout config. A missing or empty file yields the defaults."""
    if not path.exists():
        return LayoutConfig()
    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as exc:
        raise ConfigError(f"{path}: invalid YAML: {exc}") from exc
    return LayoutConfig.from_mapping(data)
