"""Pairwise circle separation with pinned anchors."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np

from .config import LayoutConfig, get_layout_config
from .logging_utils import debug_log_call

logger = logging.getLogger(__name__)

Point2D = Tuple[float, float]


@dataclass(frozen=True)
class Anchor:
    """Circle that never moves during relaxation."""

    position: Point2D
    radius: float


@dataclass(frozen=True)
class Movable:
    """Circle that relaxation may push around."""

    position: Point2D
    radius: float


Circle = Union[Anchor, Movable]


@dataclass
class CollisionResult:
    positions: np.ndarray
    passes: int
    converged: bool
    max_overlap: float

    def position(self, index: int) -> Point2D:
        return float(self.positions[index, 0]), float(self.positions[index, 1])


def pairwise_overlap(positions: np.ndarray, radii: np.ndarray, padding: float, skip: Optional[np.ndarray] = None) -> float:
    """Largest ``r_i + r_j + padding - d_ij`` over all pairs (0.0 when none overlap).

    Pairs where both entries of ``skip`` are true are ignored.
    """

    n = positions.shape[0]
    if n < 2:
        return 0.0
    diff = positions[:, None, :] - positions[None, :, :]
    dist = np.hypot(diff[..., 0], diff[..., 1])
    required = radii[:, None] + radii[None, :] + padding
    overlap = required - dist
    mask = np.triu(np.ones((n, n), dtype=bool), k=1)
    if skip is not None:
        mask &= ~(skip[:, None] & skip[None, :])
    if not mask.any():
        return 0.0
    return max(0.0, float(overlap[mask].max()))


@debug_log_call(logger, log_result=False)
def resolve_collisions(
    circles: Sequence[Circle],
    width: float,
    height: float,
    config: Optional[LayoutConfig] = None,
) -> CollisionResult:
    """Push overlapping circles apart until no pair is closer than ``r_a + r_b + padding``.

    Every pass walks all unordered pairs in input order and separates each
    overlapping pair immediately: a movable facing an anchor takes the whole
    overlap, two movables split it. Movables are then clamped into the canvas.
    The loop stops after ``config.iterations`` passes or after the first pass
    that moved nothing.
    """

    cfg = config or get_layout_config()
    n = len(circles)
    xs: List[float] = [float(c.position[0]) for c in circles]
    ys: List[float] = [float(c.position[1]) for c in circles]
    radii: List[float] = [float(c.radius) for c in circles]
    fixed: List[bool] = [isinstance(c, Anchor) for c in circles]

    passes = 0
    converged = False
    for _ in range(cfg.iterations):
        passes += 1
        moved = False
        for i in range(n):
            for j in range(i + 1, n):
                if fixed[i] and fixed[j]:
                    continue
                dx = xs[i] - xs[j]
                dy = ys[i] - ys[j]
                d = math.hypot(dx, dy)
                if d == 0.0:
                    # coincident centers: no direction to push along
                    d, dx = cfg.epsilon, cfg.epsilon
                min_dist = radii[i] + radii[j] + cfg.padding
                if d >= min_dist:
                    continue
                overlap = min_dist - d
                nx, ny = dx / d, dy / d
                push_a = overlap if fixed[j] else overlap / 2.0
                push_b = overlap if fixed[i] else overlap / 2.0
                if not fixed[i]:
                    xs[i] += nx * push_a
                    ys[i] += ny * push_a
                if not fixed[j]:
                    xs[j] -= nx * push_b
                    ys[j] -= ny * push_b
                if overlap > cfg.tolerance:
                    moved = True

        for k in range(n):
            if fixed[k]:
                continue
            r = radii[k]
            xs[k] = max(r + cfg.margin, min(width - r - cfg.margin, xs[k]))
            ys[k] = max(r + cfg.margin, min(height - r - cfg.margin, ys[k]))

        if not moved:
            converged = True
            break

    positions = np.column_stack([np.asarray(xs, dtype=float), np.asarray(ys, dtype=float)]).reshape(n, 2)
    max_overlap = pairwise_overlap(positions, np.asarray(radii, dtype=float), cfg.padding, np.asarray(fixed, dtype=bool))

    log = logger.info if n else logger.debug
    log(
        "Resolved %d circle(s) (%d movable) in %d pass(es) converged=%s max_overlap=%.3g",
        n,
        fixed.count(False),
        passes,
        converged,
        max_overlap,
    )
    return CollisionResult(positions=positions, passes=passes, converged=converged, max_overlap=max_overlap)
