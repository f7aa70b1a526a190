"""Layout, collision and view constants."""

from __future__ import annotations

import copy
from dataclasses import dataclass

from .hierarchy import NodeLevel


@dataclass
class LayoutConfig:
    """Tunable constants shared by the layout engine and the view."""

    root_radius: float = 110.0
    cause_radius: float = 62.0
    sub_radius: float = 46.0

    canvas_width: float = 2400.0
    canvas_height: float = 1000.0
    margin: float = 2.0

    root_cause_distance: float = 220.0
    cause_sub_distance: float = 165.0
    sub_spread: float = 80.0

    padding: float = 10.0
    iterations: int = 280
    epsilon: float = 0.01
    tolerance: float = 1e-9

    min_zoom: float = 0.6
    max_zoom: float = 3.0
    wheel_base: float = 1.0015
    zoom_step: float = 1.2

    def radius_for(self, level: NodeLevel) -> float:
        if level == "root":
            return self.root_radius
        if level == "cause":
            return self.cause_radius
        if level == "sub":
            return self.sub_radius
        raise ValueError(f"unknown node level {level!r}")


_LAYOUT_CONFIG = LayoutConfig()


def get_layout_config() -> LayoutConfig:
    return copy.deepcopy(_LAYOUT_CONFIG)


def set_layout_config(config: LayoutConfig) -> None:
    global _LAYOUT_CONFIG
    _LAYOUT_CONFIG = copy.deepcopy(config)
