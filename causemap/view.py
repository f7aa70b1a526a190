"""Zoom/pan transform between pointer coordinates and world coordinates."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from .config import LayoutConfig, get_layout_config

logger = logging.getLogger(__name__)

Point2D = Tuple[float, float]


@dataclass(frozen=True)
class Viewport:
    """On-screen rectangle of the canvas element, in client coordinates."""

    left: float
    top: float
    width: float
    height: float


@dataclass(frozen=True)
class ViewState:
    zoom: float
    pan: Point2D


class ViewTransform:
    """Affine map ``canvas = world * zoom + pan``.

    Client coordinates are first mapped into the logical canvas through
    ``viewport``, which is the canvas itself until the host calls
    :meth:`set_viewport`.
    """

    def __init__(self, config: Optional[LayoutConfig] = None, viewport: Optional[Viewport] = None) -> None:
        self.config = config or get_layout_config()
        self.set_viewport(viewport or Viewport(0.0, 0.0, self.config.canvas_width, self.config.canvas_height))
        self.zoom = self.clamp_zoom(1.0)
        self.pan: Point2D = (0.0, 0.0)

    @property
    def state(self) -> ViewState:
        return ViewState(self.zoom, self.pan)

    def set_viewport(self, viewport: Viewport) -> None:
        if viewport.width <= 0 or viewport.height <= 0:
            raise ValueError(f"viewport must have a positive size, got {viewport!r}")
        self.viewport = viewport

    def clamp_zoom(self, zoom: float) -> float:
        return max(self.config.min_zoom, min(self.config.max_zoom, zoom))

    def set_zoom(self, zoom: float) -> None:
        self.zoom = self.clamp_zoom(zoom)

    def client_to_canvas(self, client: Point2D) -> Point2D:
        vp = self.viewport
        return (
            (client[0] - vp.left) / vp.width * self.config.canvas_width,
            (client[1] - vp.top) / vp.height * self.config.canvas_height,
        )

    def canvas_to_world(self, canvas: Point2D) -> Point2D:
        return (canvas[0] - self.pan[0]) / self.zoom, (canvas[1] - self.pan[1]) / self.zoom

    def screen_to_world(self, client: Point2D) -> Point2D:
        return self.canvas_to_world(self.client_to_canvas(client))

    def world_to_screen(self, world: Point2D) -> Point2D:
        """World point to logical canvas coordinates."""

        return world[0] * self.zoom + self.pan[0], world[1] * self.zoom + self.pan[1]

    def zoom_at_point(self, client: Point2D, factor: float) -> None:
        """Scale by ``factor`` keeping the world point under ``client`` in place."""

        canvas = self.client_to_canvas(client)
        world = self.canvas_to_world(canvas)
        self.zoom = self.clamp_zoom(self.zoom * factor)
        self.pan = (canvas[0] - world[0] * self.zoom, canvas[1] - world[1] * self.zoom)
        logger.debug("Zoom at %s factor=%.4f -> zoom=%.4f pan=%s", client, factor, self.zoom, self.pan)

    def wheel_factor(self, delta_y: float) -> float:
        exponent = -delta_y * math.log(self.config.wheel_base)
        return math.exp(max(-700.0, min(700.0, exponent)))

    def apply_wheel(self, client: Point2D, delta_y: float) -> None:
        self.zoom_at_point(client, self.wheel_factor(delta_y))

    def _canvas_center_client(self) -> Point2D:
        vp = self.viewport
        return vp.left + vp.width / 2.0, vp.top + vp.height / 2.0

    def zoom_in(self) -> None:
        self.zoom_at_point(self._canvas_center_client(), self.config.zoom_step)

    def zoom_out(self) -> None:
        self.zoom_at_point(self._canvas_center_client(), 1.0 / self.config.zoom_step)

    def reset(self) -> None:
        self.zoom = self.clamp_zoom(1.0)
        self.pan = (0.0, 0.0)
        logger.info("View reset")

    def matrix(self) -> np.ndarray:
        """3x3 homogeneous matrix taking world coordinates to canvas coordinates."""

        return np.array(
            [
                [self.zoom, 0.0, self.pan[0]],
                [0.0, self.zoom, self.pan[1]],
                [0.0, 0.0, 1.0],
            ],
            dtype=float,
        )
