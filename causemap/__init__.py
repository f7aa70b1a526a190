from .config import LayoutConfig, get_layout_config, set_layout_config
from .hierarchy import (
    CauseSpec,
    Hierarchy,
    NodeId,
    SubSpec,
    TreeSpec,
    UnknownNodeError,
    hierarchy_from_dict,
    hierarchy_to_dict,
    load_hierarchy,
    parse_node_id,
)
from .geometry import Spoke, clamp_to_canvas, place_child_spokes, place_root_spokes
from .collision import Anchor, CollisionResult, Movable, resolve_collisions
from .state import Connector, LayoutState, PlacedNode
from .view import ViewState, ViewTransform, Viewport
from .drag import DraggingNode, DragController, Idle, Panning, PointerEvent
from .session import MapSession
from .validate import ValidationError, parse_and_validate, validate_config, validate_hierarchy
from .data import REFERENCE_HIERARCHY
from .printer import format_layout
from .tikz_codegen import generate_tikz_code, generate_tikz_document, wrap_label

__all__ = [
    'LayoutConfig',
    'get_layout_config',
    'set_layout_config',
    'CauseSpec',
    'Hierarchy',
    'NodeId',
    'SubSpec',
    'TreeSpec',
    'UnknownNodeError',
    'hierarchy_from_dict',
    'hierarchy_to_dict',
    'load_hierarchy',
    'parse_node_id',
    'Spoke',
    'clamp_to_canvas',
    'place_child_spokes',
    'place_root_spokes',
    'Anchor',
    'CollisionResult',
    'Movable',
    'resolve_collisions',
    'Connector',
    'LayoutState',
    'PlacedNode',
    'ViewState',
    'ViewTransform',
    'Viewport',
    'DraggingNode',
    'DragController',
    'Idle',
    'Panning',
    'PointerEvent',
    'MapSession',
    'ValidationError',
    'parse_and_validate',
    'validate_config',
    'validate_hierarchy',
    'REFERENCE_HIERARCHY',
    'format_layout',
    'generate_tikz_code',
    'generate_tikz_document',
    'wrap_label',
]
