"""Polar placement helpers used to seed a layout."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List, Tuple

from .logging_utils import apply_debug_logging

logger = logging.getLogger(__name__)

Point2D = Tuple[float, float]


@dataclass(frozen=True)
class Spoke:
    """A child placed on a spoke: its center and the spoke angle in degrees."""

    position: Point2D
    angle: float


def deg_to_rad(degrees: float) -> float:
    return degrees * math.pi / 180.0


def polar_offset(center: Point2D, radius: float, angle: float) -> Point2D:
    rad = deg_to_rad(angle)
    return center[0] + radius * math.cos(rad), center[1] + radius * math.sin(rad)


def spread_angles(angle_start: float, angle_end: float, count: int) -> List[float]:
    """Evenly spaced angles from ``angle_start`` to ``angle_end`` inclusive.

    A single child sits at ``angle_start``.
    """

    step = (angle_end - angle_start) / max(1, count - 1)
    return [angle_start + i * step for i in range(count)]


def place_root_spokes(
    center: Point2D,
    count: int,
    radius: float,
    angle_start: float,
    angle_end: float,
) -> List[Spoke]:
    return [
        Spoke(polar_offset(center, radius, angle), angle)
        for angle in spread_angles(angle_start, angle_end, count)
    ]


def place_child_spokes(
    center: Point2D,
    base_angle: float,
    count: int,
    radius: float,
    spread: float = 80.0,
) -> List[Spoke]:
    """Fan ``count`` children over a ``spread`` degree window centered on ``base_angle``."""

    start = base_angle - spread / 2.0
    return [
        Spoke(polar_offset(center, radius, angle), angle)
        for angle in spread_angles(start, start + spread, count)
    ]


def clamp_to_canvas(point: Point2D, radius: float, width: float, height: float, margin: float) -> Point2D:
    """Clamp a circle center so the circle stays ``margin`` inside the canvas."""

    x = max(radius + margin, min(width - radius - margin, point[0]))
    y = max(radius + margin, min(height - radius - margin, point[1]))
    return x, y


def within_canvas(point: Point2D, radius: float, width: float, height: float, margin: float, tol: float = 1e-9) -> bool:
    lo = radius + margin - tol
    return lo <= point[0] <= width - radius - margin + tol and lo <= point[1] <= height - radius - margin + tol


apply_debug_logging(globals(), skip={"deg_to_rad", "polar_offset", "clamp_to_canvas", "within_canvas"})
