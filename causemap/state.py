"""Mutable position table for every node of a :class:`Hierarchy`."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Tuple

from .collision import Anchor, Circle, CollisionResult, Movable, resolve_collisions
from .config import LayoutConfig, get_layout_config
from .geometry import Point2D, clamp_to_canvas, place_child_spokes, place_root_spokes
from .hierarchy import Hierarchy, NodeId, NodeLevel
from .logging_utils import debug_log_call

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlacedNode:
    """Render record for one node."""

    node_id: NodeId
    label: str
    position: Point2D
    radius: float
    base_angle: Optional[float] = None

    @property
    def level(self) -> NodeLevel:
        return self.node_id.level


@dataclass(frozen=True)
class Connector:
    parent: NodeId
    child: NodeId
    start: Point2D
    end: Point2D


class LayoutState:
    """Single source of truth for node positions.

    Topology comes from the immutable ``hierarchy``; positions live in a
    table keyed by :class:`NodeId`. Every mutation clamps the touched nodes
    into the canvas.
    """

    def __init__(self, hierarchy: Hierarchy, config: Optional[LayoutConfig] = None) -> None:
        self.hierarchy = hierarchy
        self.config = config or get_layout_config()
        self._positions: Dict[NodeId, Point2D] = {}
        self._base_angles: Dict[NodeId, float] = {}
        self.reset_layout()

    # ------------------------------------------------------------------
    # seeding

    def _clamp(self, point: Point2D, level: NodeLevel) -> Point2D:
        cfg = self.config
        return clamp_to_canvas(point, cfg.radius_for(level), cfg.canvas_width, cfg.canvas_height, cfg.margin)

    def reset_layout(self) -> None:
        """Re-seed every position from the hierarchy using polar spokes."""

        cfg = self.config
        positions: Dict[NodeId, Point2D] = {}
        angles: Dict[NodeId, float] = {}
        for t, tree in enumerate(self.hierarchy.trees):
            root_id = NodeId.root(t)
            root_pos = self._clamp(tree.position, "root")
            positions[root_id] = root_pos
            spokes = place_root_spokes(root_pos, len(tree.causes), cfg.root_cause_distance, tree.arc[0], tree.arc[1])
            for i, (cause, spoke) in enumerate(zip(tree.causes, spokes)):
                cause_id = NodeId.for_cause(t, i)
                cause_pos = self._clamp(spoke.position, "cause")
                positions[cause_id] = cause_pos
                angles[cause_id] = spoke.angle
                sub_spokes = place_child_spokes(
                    cause_pos, spoke.angle, len(cause.subs), cfg.cause_sub_distance, cfg.sub_spread
                )
                for j, sub_spoke in enumerate(sub_spokes):
                    sub_id = NodeId.for_sub(t, i, j)
                    positions[sub_id] = self._clamp(sub_spoke.position, "sub")
                    angles[sub_id] = sub_spoke.angle
        self._positions = positions
        self._base_angles = angles
        logger.info("Seeded layout for %d tree(s), %d node(s)", len(self.hierarchy.trees), len(positions))

    # ------------------------------------------------------------------
    # read access

    def position(self, node_id: NodeId) -> Point2D:
        return self._positions[self.hierarchy.require(node_id)]

    def radius(self, node_id: NodeId) -> float:
        return self.config.radius_for(self.hierarchy.require(node_id).level)

    def label(self, node_id: NodeId) -> str:
        return self.hierarchy.label(node_id)

    def base_angle(self, node_id: NodeId) -> Optional[float]:
        return self._base_angles.get(self.hierarchy.require(node_id))

    def node_ids(self) -> List[NodeId]:
        return list(self.hierarchy.node_ids())

    def positions(self) -> Dict[NodeId, Point2D]:
        return dict(self._positions)

    def descendants(self, node_id: NodeId) -> List[NodeId]:
        node_id = self.hierarchy.require(node_id)
        tree = self.hierarchy.trees[node_id.tree]
        if node_id.level == "root":
            out: List[NodeId] = []
            for i, cause in enumerate(tree.causes):
                out.append(NodeId.for_cause(node_id.tree, i))
                out.extend(NodeId.for_sub(node_id.tree, i, j) for j in range(len(cause.subs)))
            return out
        if node_id.level == "cause":
            subs = tree.causes[node_id.cause].subs  # type: ignore[index]
            return [NodeId.for_sub(node_id.tree, node_id.cause, j) for j in range(len(subs))]  # type: ignore[arg-type]
        return []

    def nodes(self) -> Iterator[PlacedNode]:
        for node_id in self.hierarchy.node_ids():
            yield PlacedNode(
                node_id=node_id,
                label=self.hierarchy.label(node_id),
                position=self._positions[node_id],
                radius=self.config.radius_for(node_id.level),
                base_angle=self._base_angles.get(node_id),
            )

    def connectors(self) -> Iterator[Connector]:
        for node_id in self.hierarchy.node_ids():
            parent = node_id.parent
            if parent is None:
                continue
            yield Connector(parent, node_id, self._positions[parent], self._positions[node_id])

    # ------------------------------------------------------------------
    # mutation

    def _translate(self, node_id: NodeId, dx: float, dy: float) -> None:
        x, y = self._positions[node_id]
        self._positions[node_id] = self._clamp((x + dx, y + dy), node_id.level)

    def move_point_rigid(self, node_id: NodeId, target: Point2D) -> Point2D:
        """Move a root or cause and translate its whole subtree by the same delta.

        The delta is measured after clamping the parent; each descendant is
        clamped on its own afterwards, so offsets can shrink at the canvas edge.
        """

        node_id = self.hierarchy.require(node_id)
        if node_id.level == "sub":
            raise ValueError(f"move_point_rigid expects a root or cause, got {node_id.key}")
        _check_finite(target)
        old_x, old_y = self._positions[node_id]
        new_pos = self._clamp(target, node_id.level)
        dx, dy = new_pos[0] - old_x, new_pos[1] - old_y
        self._positions[node_id] = new_pos
        if dx or dy:
            for child in self.descendants(node_id):
                self._translate(child, dx, dy)
        logger.debug("Rigid move %s by (%.3f, %.3f)", node_id.key, dx, dy)
        return new_pos

    def move_leaf(self, node_id: NodeId, target: Point2D) -> Point2D:
        node_id = self.hierarchy.require(node_id)
        if node_id.level != "sub":
            raise ValueError(f"move_leaf expects a sub-cause, got {node_id.key}")
        _check_finite(target)
        new_pos = self._clamp(target, "sub")
        self._positions[node_id] = new_pos
        logger.debug("Leaf move %s to (%.3f, %.3f)", node_id.key, *new_pos)
        return new_pos

    def move_node(self, node_id: NodeId, target: Point2D) -> Point2D:
        if node_id.level == "sub":
            return self.move_leaf(node_id, target)
        return self.move_point_rigid(node_id, target)

    @debug_log_call(logger, log_result=False)
    def relax_sub_layer(self) -> CollisionResult:
        """De-overlap sub-causes of every tree with all roots and causes pinned."""

        cfg = self.config
        circles: List[Circle] = []
        movable_ids: List[NodeId] = []
        for node_id in self.hierarchy.node_ids():
            radius = cfg.radius_for(node_id.level)
            if node_id.level == "sub":
                circles.append(Movable(self._positions[node_id], radius))
                movable_ids.append(node_id)
            else:
                circles.append(Anchor(self._positions[node_id], radius))

        result = resolve_collisions(circles, cfg.canvas_width, cfg.canvas_height, cfg)
        offset = len(circles) - len(movable_ids)
        for k, node_id in enumerate(movable_ids):
            self._positions[node_id] = result.position(offset + k)
        return result

    # ------------------------------------------------------------------

    def snapshot(self) -> Dict[str, Any]:
        """Plain-data view of the current layout, keyed by node key."""

        return {
            "canvas": {"width": self.config.canvas_width, "height": self.config.canvas_height},
            "nodes": [
                {
                    "id": node.node_id.key,
                    "level": node.level,
                    "label": node.label,
                    "x": node.position[0],
                    "y": node.position[1],
                    "r": node.radius,
                    "angle": node.base_angle,
                }
                for node in self.nodes()
            ],
        }


def _check_finite(point: Tuple[float, float]) -> None:
    if not (math.isfinite(point[0]) and math.isfinite(point[1])):
        raise ValueError(f"target position must be finite, got {point!r}")
