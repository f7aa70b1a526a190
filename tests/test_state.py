import math

import pytest

from causemap.collision import pairwise_overlap
from causemap.config import LayoutConfig
from causemap.data import REFERENCE_HIERARCHY
from causemap.geometry import within_canvas
from causemap.hierarchy import CauseSpec, Hierarchy, NodeId, SubSpec, TreeSpec, UnknownNodeError
from causemap.state import LayoutState

import numpy as np


def _single_cause_hierarchy() -> Hierarchy:
    cause = CauseSpec("Cause", (SubSpec("a"), SubSpec("b"), SubSpec("c")))
    return Hierarchy((TreeSpec("Root", (1200.0, 500.0), (cause,)),))


def _assert_within_bounds(state: LayoutState) -> None:
    cfg = state.config
    for node in state.nodes():
        assert within_canvas(node.position, node.radius, cfg.canvas_width, cfg.canvas_height, cfg.margin), node


def _overlap(state: LayoutState) -> float:
    nodes = list(state.nodes())
    positions = np.array([n.position for n in nodes])
    radii = np.array([n.radius for n in nodes])
    anchors = np.array([n.level != "sub" for n in nodes])
    return pairwise_overlap(positions, radii, state.config.padding, anchors)


def test_reference_scenario_places_first_cause_at_arc_start():
    state = LayoutState(REFERENCE_HIERARCHY, LayoutConfig())

    expected = (580.0 + 220.0 * math.cos(math.radians(-160.0)), 500.0 + 220.0 * math.sin(math.radians(-160.0)))
    assert state.position(NodeId.for_cause(0, 0)) == pytest.approx(expected)
    assert state.base_angle(NodeId.for_cause(0, 0)) == pytest.approx(-160.0)
    assert state.base_angle(NodeId.for_sub(0, 0, 0)) == pytest.approx(-200.0)
    assert state.base_angle(NodeId.root(0)) is None
    assert len(state.node_ids()) == 2 + 5 + 15 + 7 + 21
    _assert_within_bounds(state)


def test_root_drag_translates_whole_tree():
    state = LayoutState(REFERENCE_HIERARCHY, LayoutConfig())
    before = state.positions()

    state.move_point_rigid(NodeId.root(0), (630.0, 550.0))

    after = state.positions()
    for node_id, (x, y) in before.items():
        if node_id.tree == 0:
            assert after[node_id] == pytest.approx((x + 50.0, y + 50.0))
        else:
            assert after[node_id] == (x, y)


def test_cause_drag_moves_only_its_subtree():
    state = LayoutState(REFERENCE_HIERARCHY, LayoutConfig())
    moved = NodeId.for_cause(0, 2)
    before = state.positions()
    cx, cy = before[moved]

    state.move_point_rigid(moved, (cx + 30.0, cy - 20.0))

    after = state.positions()
    for node_id, (x, y) in before.items():
        if node_id == moved or (node_id.level == "sub" and node_id.tree == 0 and node_id.cause == 2):
            assert after[node_id] == pytest.approx((x + 30.0, y - 20.0))
        else:
            assert after[node_id] == (x, y)


def test_leaf_move_is_isolated():
    state = LayoutState(REFERENCE_HIERARCHY, LayoutConfig())
    leaf = NodeId.for_sub(1, 3, 1)
    before = state.positions()

    state.move_leaf(leaf, (1500.0, 120.0))

    after = state.positions()
    assert after[leaf] == (1500.0, 120.0)
    for node_id, pos in before.items():
        if node_id != leaf:
            assert after[node_id] == pos


def test_moves_are_clamped_to_canvas():
    state = LayoutState(REFERENCE_HIERARCHY, LayoutConfig())

    assert state.move_point_rigid(NodeId.root(0), (-1000.0, -1000.0)) == (112.0, 112.0)
    state.move_point_rigid(NodeId.for_cause(1, 0), (5000.0, 5000.0))
    state.move_leaf(NodeId.for_sub(1, 2, 2), (-5.0, 2000.0))
    state.relax_sub_layer()

    _assert_within_bounds(state)


def test_rigid_move_clamps_descendants_individually():
    state = LayoutState(_single_cause_hierarchy(), LayoutConfig())
    cause = NodeId.for_cause(0, 0)
    sub = NodeId.for_sub(0, 0, 1)
    offset_before = np.subtract(state.position(sub), state.position(cause))

    state.move_point_rigid(NodeId.root(0), (112.0, 112.0))

    offset_after = np.subtract(state.position(sub), state.position(cause))
    assert not np.allclose(offset_before, offset_after)
    _assert_within_bounds(state)


def test_move_rejects_wrong_level_and_unknown_ids():
    state = LayoutState(_single_cause_hierarchy(), LayoutConfig())

    with pytest.raises(ValueError):
        state.move_leaf(NodeId.for_cause(0, 0), (10.0, 10.0))
    with pytest.raises(ValueError):
        state.move_point_rigid(NodeId.for_sub(0, 0, 0), (10.0, 10.0))
    with pytest.raises(ValueError):
        state.move_leaf(NodeId.for_sub(0, 0, 0), (float("nan"), 10.0))
    with pytest.raises(UnknownNodeError):
        state.move_node(NodeId.for_sub(0, 4, 0), (10.0, 10.0))
    with pytest.raises(KeyError):
        state.position(NodeId.root(3))


def test_relax_separates_dropped_leaf_and_keeps_anchors():
    state = LayoutState(_single_cause_hierarchy(), LayoutConfig())
    anchors = {n: state.position(n) for n in (NodeId.root(0), NodeId.for_cause(0, 0))}
    state.move_leaf(NodeId.for_sub(0, 0, 0), state.position(NodeId.for_sub(0, 0, 1)))

    result = state.relax_sub_layer()

    assert result.converged
    assert result.max_overlap <= 1e-6
    assert _overlap(state) <= 1e-6
    for node_id, pos in anchors.items():
        assert state.position(node_id) == pos


def test_relax_reference_layout_reduces_overlap():
    state = LayoutState(REFERENCE_HIERARCHY, LayoutConfig())
    anchors = {n: state.position(n) for n in state.node_ids() if n.level != "sub"}
    initial = _overlap(state)

    result = state.relax_sub_layer()

    assert result.max_overlap == pytest.approx(_overlap(state))
    assert result.max_overlap < initial
    for node_id, pos in anchors.items():
        assert state.position(node_id) == pos
    _assert_within_bounds(state)


def test_reset_layout_restores_seed_positions():
    state = LayoutState(REFERENCE_HIERARCHY, LayoutConfig())
    seeded = state.positions()
    state.move_point_rigid(NodeId.root(1), (1700.0, 420.0))
    state.relax_sub_layer()

    state.reset_layout()

    assert state.positions() == seeded


def test_connectors_link_children_to_parents():
    state = LayoutState(_single_cause_hierarchy(), LayoutConfig())

    connectors = list(state.connectors())

    assert len(connectors) == 4
    assert connectors[0].parent == NodeId.root(0)
    assert connectors[0].start == state.position(NodeId.root(0))
    assert all(c.parent == NodeId.for_cause(0, 0) for c in connectors[1:])


def test_snapshot_lists_every_node():
    state = LayoutState(_single_cause_hierarchy(), LayoutConfig())

    snap = state.snapshot()

    assert snap["canvas"] == {"width": 2400.0, "height": 1000.0}
    assert [n["id"] for n in snap["nodes"]] == ["t0", "t0c0", "t0c0s0", "t0c0s1", "t0c0s2"]
    assert snap["nodes"][0]["r"] == 110.0


def test_descendants_follow_hierarchy_levels():
    state = LayoutState(REFERENCE_HIERARCHY, LayoutConfig())

    root_children = state.descendants(NodeId.root(1))
    assert len(root_children) == 7 * 4
    assert root_children[:2] == [NodeId.for_cause(1, 0), NodeId.for_sub(1, 0, 0)]
    assert state.descendants(NodeId.for_cause(0, 2)) == [NodeId.for_sub(0, 2, j) for j in range(3)]
    assert state.descendants(NodeId.for_sub(0, 2, 1)) == []


def test_random_edit_sequences_stay_within_canvas():
    rng = np.random.default_rng(1234)
    state = LayoutState(REFERENCE_HIERARCHY, LayoutConfig())
    node_ids = state.node_ids()

    for step in range(200):
        if step % 10 == 9:
            state.relax_sub_layer()
        else:
            node_id = node_ids[rng.integers(len(node_ids))]
            target = (float(rng.uniform(-500.0, 2900.0)), float(rng.uniform(-500.0, 1500.0)))
            state.move_node(node_id, target)
        _assert_within_bounds(state)
