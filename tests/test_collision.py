import math
from itertools import combinations

import numpy as np
import pytest

from causemap.collision import Anchor, Movable, pairwise_overlap, resolve_collisions
from causemap.config import LayoutConfig

WIDTH, HEIGHT = 2400.0, 1000.0


def test_two_coincident_circles_separate():
    circles = [Movable((500.0, 500.0), 46.0), Movable((500.0, 500.0), 46.0)]

    result = resolve_collisions(circles, WIDTH, HEIGHT, LayoutConfig())

    assert result.converged
    a, b = result.position(0), result.position(1)
    assert math.dist(a, b) == pytest.approx(102.0)
    assert a[1] == pytest.approx(500.0)


def test_movable_absorbs_full_overlap_against_anchor():
    circles = [Anchor((500.0, 500.0), 62.0), Movable((520.0, 500.0), 46.0)]

    result = resolve_collisions(circles, WIDTH, HEIGHT, LayoutConfig())

    assert result.position(0) == (500.0, 500.0)
    assert result.position(1) == pytest.approx((618.0, 500.0))
    assert result.max_overlap == pytest.approx(0.0, abs=1e-9)


def test_overlapping_cluster_converges_without_overlap():
    start = [(1000.0, 500.0), (1020.0, 510.0), (1040.0, 490.0), (1010.0, 530.0), (1030.0, 470.0)]
    circles = [Movable(p, 46.0) for p in start]
    cfg = LayoutConfig()

    result = resolve_collisions(circles, WIDTH, HEIGHT, cfg)

    assert result.converged
    assert result.passes < cfg.iterations
    for i, j in combinations(range(len(circles)), 2):
        assert math.dist(result.position(i), result.position(j)) >= 46.0 + 46.0 + cfg.padding - 1e-6


def test_empty_and_single_inputs_finish_immediately():
    empty = resolve_collisions([], WIDTH, HEIGHT)
    assert empty.converged
    assert empty.passes == 1
    assert empty.positions.shape == (0, 2)

    single = resolve_collisions([Movable((-50.0, 20.0), 46.0)], WIDTH, HEIGHT)
    assert single.converged
    assert single.position(0) == (48.0, 48.0)


def test_anchors_are_never_moved_or_clamped():
    circles = [
        Anchor((10.0, 10.0), 62.0),
        Anchor((30.0, 10.0), 62.0),
        Movable((90.0, 60.0), 46.0),
    ]

    result = resolve_collisions(circles, WIDTH, HEIGHT)

    assert result.position(0) == (10.0, 10.0)
    assert result.position(1) == (30.0, 10.0)
    x, y = result.position(2)
    assert 48.0 <= x <= WIDTH - 48.0
    assert 48.0 <= y <= HEIGHT - 48.0


def test_iteration_cap_is_respected():
    cfg = LayoutConfig(iterations=1)
    circles = [Movable((500.0, 500.0), 46.0), Movable((510.0, 500.0), 46.0), Movable((505.0, 505.0), 46.0)]

    result = resolve_collisions(circles, WIDTH, HEIGHT, cfg)

    assert result.passes == 1
    assert not result.converged


def test_pairwise_overlap_ignores_anchor_pairs():
    positions = np.array([[0.0, 0.0], [10.0, 0.0], [500.0, 0.0]])
    radii = np.array([50.0, 50.0, 10.0])

    assert pairwise_overlap(positions, radii, 10.0) == pytest.approx(100.0)
    assert pairwise_overlap(positions, radii, 10.0, np.array([True, True, False])) == 0.0
