"""Pointer gesture state machine: pan the view or drag one node."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from .collision import CollisionResult
from .hierarchy import NodeId, UnknownNodeError
from .state import LayoutState
from .view import ViewTransform

logger = logging.getLogger(__name__)

Point2D = Tuple[float, float]


@dataclass(frozen=True)
class PointerEvent:
    client_x: float
    client_y: float
    pointer_id: int = 1

    @property
    def client(self) -> Point2D:
        return self.client_x, self.client_y


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Panning:
    pointer_id: int
    start_client: Point2D
    start_pan: Point2D


@dataclass(frozen=True)
class DraggingNode:
    pointer_id: int
    node_id: NodeId
    offset: Point2D


DragSession = Union[Idle, Panning, DraggingNode]

IDLE = Idle()


class DragController:
    """Routes pointer events to the view (panning) or the layout (node drags).

    Only one gesture is live at a time; presses and moves from any other
    pointer are ignored until it ends.
    """

    def __init__(self, state: LayoutState, view: ViewTransform) -> None:
        self.state = state
        self.view = view
        self.session: DragSession = IDLE

    @property
    def active(self) -> bool:
        return not isinstance(self.session, Idle)

    def on_canvas_pointer_down(self, event: PointerEvent) -> bool:
        if self.active:
            logger.debug("Ignoring canvas press from pointer %d during %s", event.pointer_id, self.session)
            return False
        self.session = Panning(event.pointer_id, event.client, self.view.pan)
        logger.debug("Pan started at %s", event.client)
        return True

    def on_node_pointer_down(self, node_id: NodeId, event: PointerEvent) -> bool:
        if self.active:
            logger.debug("Ignoring node press from pointer %d during %s", event.pointer_id, self.session)
            return False
        try:
            node_x, node_y = self.state.position(node_id)
        except UnknownNodeError:
            logger.warning("Ignoring press on unknown node %r", node_id)
            return False
        world_x, world_y = self.view.screen_to_world(event.client)
        self.session = DraggingNode(event.pointer_id, node_id, (node_x - world_x, node_y - world_y))
        logger.debug("Node drag started for %s offset=%s", node_id.key, self.session.offset)
        return True

    def on_pointer_move(self, event: PointerEvent) -> bool:
        session = self.session
        if isinstance(session, Idle) or event.pointer_id != session.pointer_id:
            return False

        if isinstance(session, Panning):
            ax, ay = self.view.client_to_canvas(session.start_client)
            bx, by = self.view.client_to_canvas(event.client)
            self.view.pan = (session.start_pan[0] + (bx - ax), session.start_pan[1] + (by - ay))
            return True

        world_x, world_y = self.view.screen_to_world(event.client)
        target = (world_x + session.offset[0], world_y + session.offset[1])
        try:
            self.state.move_node(session.node_id, target)
        except UnknownNodeError:
            logger.warning("Dropping drag of unknown node %r", session.node_id)
            self.session = IDLE
            return False
        return True

    def _end(self) -> Optional[CollisionResult]:
        session = self.session
        self.session = IDLE
        if isinstance(session, DraggingNode):
            result = self.state.relax_sub_layer()
            logger.debug("Settled after dragging %s in %d pass(es)", session.node_id.key, result.passes)
            return result
        return None

    def on_pointer_up(self, event: PointerEvent) -> Optional[CollisionResult]:
        """End the live gesture; returns the settle result after a node drag."""

        if isinstance(self.session, Idle) or event.pointer_id != self.session.pointer_id:
            return None
        return self._end()

    def on_pointer_leave(self, event: Optional[PointerEvent] = None) -> Optional[CollisionResult]:
        if isinstance(self.session, Idle):
            return None
        return self._end()

    def cancel(self) -> None:
        """Drop the live gesture without a settle pass."""

        self.session = IDLE

    def on_wheel(self, event: PointerEvent, delta_y: float) -> None:
        self.view.apply_wheel(event.client, delta_y)
