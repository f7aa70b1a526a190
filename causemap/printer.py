from typing import Optional

from .state import LayoutState, PlacedNode
from .view import ViewState

_INDENT = {"root": "", "cause": "  ", "sub": "    "}


def format_point(x: float, y: float) -> str:
    return f"({x:.1f}, {y:.1f})"


def format_node(node: PlacedNode) -> str:
    indent = _INDENT[node.level]
    angle = "" if node.base_angle is None else f" @{node.base_angle:.1f}°"
    return f'{indent}{node.node_id.key} "{node.label}" {format_point(*node.position)} r={node.radius:g}{angle}'


def format_layout(state: LayoutState, view: Optional[ViewState] = None) -> str:
    """One line per node, grouped by tree, causes followed by their sub-causes."""

    by_key = {node.node_id: node for node in state.nodes()}
    lines = []
    if view is not None:
        lines.append(f"view zoom={view.zoom:.3f} pan={format_point(*view.pan)}")
    for node_id in sorted(by_key, key=lambda n: (n.tree, -1 if n.cause is None else n.cause, -1 if n.sub is None else n.sub)):
        lines.append(format_node(by_key[node_id]))
    return "\n".join(lines) + "\n"
