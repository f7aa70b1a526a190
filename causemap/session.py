"""Session façade wiring layout, view and drag controller for a host UI."""

from __future__ import annotations

import logging
from typing import Iterator, Optional

from .collision import CollisionResult
from .config import LayoutConfig, get_layout_config
from .data import REFERENCE_HIERARCHY
from .drag import DragController, PointerEvent
from .hierarchy import Hierarchy, NodeId
from .state import Connector, LayoutState, PlacedNode
from .validate import validate_config, validate_hierarchy
from .view import ViewState, ViewTransform, Viewport

logger = logging.getLogger(__name__)


class MapSession:
    """One interactive problem/cause map.

    Hosts forward pointer and wheel events to the ``on_*`` handlers and
    redraw from :meth:`nodes`, :meth:`connectors` and :attr:`view_state`.
    """

    def __init__(
        self,
        hierarchy: Optional[Hierarchy] = None,
        config: Optional[LayoutConfig] = None,
        viewport: Optional[Viewport] = None,
    ) -> None:
        self.config = config or get_layout_config()
        self.hierarchy = hierarchy if hierarchy is not None else REFERENCE_HIERARCHY
        validate_config(self.config)
        validate_hierarchy(self.hierarchy)
        self.layout = LayoutState(self.hierarchy, self.config)
        self.view = ViewTransform(self.config, viewport)
        self.controller = DragController(self.layout, self.view)
        logger.info("Session ready with %d node(s)", len(self.layout.node_ids()))

    # rendering

    def nodes(self) -> Iterator[PlacedNode]:
        return self.layout.nodes()

    def connectors(self) -> Iterator[Connector]:
        return self.layout.connectors()

    @property
    def view_state(self) -> ViewState:
        return self.view.state

    # pointer input

    def on_canvas_pointer_down(self, event: PointerEvent) -> bool:
        return self.controller.on_canvas_pointer_down(event)

    def on_node_pointer_down(self, node_id: NodeId, event: PointerEvent) -> bool:
        return self.controller.on_node_pointer_down(node_id, event)

    def on_pointer_move(self, event: PointerEvent) -> bool:
        return self.controller.on_pointer_move(event)

    def on_pointer_up(self, event: PointerEvent) -> Optional[CollisionResult]:
        return self.controller.on_pointer_up(event)

    def on_pointer_leave(self, event: Optional[PointerEvent] = None) -> Optional[CollisionResult]:
        return self.controller.on_pointer_leave(event)

    def on_wheel(self, event: PointerEvent, delta_y: float) -> None:
        self.controller.on_wheel(event, delta_y)

    # toolbar

    def zoom_in(self) -> None:
        self.view.zoom_in()

    def zoom_out(self) -> None:
        self.view.zoom_out()

    def reset_view(self) -> None:
        self.view.reset()

    def reset_layout(self) -> None:
        self.controller.cancel()
        self.layout.reset_layout()

    def settle(self) -> CollisionResult:
        return self.layout.relax_sub_layer()
