"""TikZ renderer for a laid-out problem/cause map."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .utils import chars_per_line, latex_escape, wrap_label
from ..geometry import Point2D
from ..hierarchy import NodeLevel
from ..state import LayoutState, PlacedNode
from ..view import ViewState

logger = logging.getLogger(__name__)

standalone_tpl = r"""\documentclass[border=4pt]{standalone}
\usepackage[utf8]{inputenc}
\usepackage[T1]{fontenc}
\usepackage{adjustbox}
\usepackage{tikz}
\usetikzlibrary{shadows}
\tikzset{
  cm/connector/.style={draw=cmConnector, line width=%(stroke)s},
  cm/bubble/.style={draw=cmStroke, fill=white, line width=%(stroke)s, drop shadow={opacity=0.25}},
  cm/label/.style={text=cmText, align=center, inner sep=0pt},
}
\definecolor{cmStroke}{HTML}{64748B}
\definecolor{cmConnector}{HTML}{94A3B8}
\definecolor{cmText}{HTML}{0F172A}
\begin{document}
\begin{adjustbox}{max width=\linewidth, keepaspectratio}
%(body)s
\end{adjustbox}
\end{document}
"""


@dataclass
class RenderOptions:
    """Output knobs; ``unit_pt`` is the size of one canvas unit in points."""

    unit_pt: float = 0.25
    stroke_units: float = 3.0
    font_sizes: Dict[str, float] = field(default_factory=lambda: {"root": 22.0, "cause": 16.0, "sub": 13.5})
    bold_levels: tuple = ("root", "cause")
    line_height: float = 1.18
    clip: bool = True


def _fmt(value: float) -> str:
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return "0" if text in {"", "-0"} else text


def _label_lines(node: PlacedNode, options: RenderOptions) -> List[str]:
    size = options.font_sizes.get(node.level, 14.0)
    return wrap_label(node.label, chars_per_line(node.radius, size))


def _font_spec(level: NodeLevel, scale: float, options: RenderOptions) -> str:
    size = options.font_sizes.get(level, 14.0) * options.unit_pt * scale
    spec = rf"\fontsize{{{_fmt(size)}}}{{{_fmt(size * options.line_height)}}}\selectfont"
    if level in options.bold_levels:
        spec += r"\bfseries"
    return spec


def generate_tikz_code(
    state: LayoutState,
    view: Optional[ViewState] = None,
    options: Optional[RenderOptions] = None,
) -> str:
    """Render connectors, then circles with wrapped labels.

    With ``view`` the picture shows what the host canvas shows: every
    position goes through ``world * zoom + pan`` and radii scale by zoom.
    """

    opts = options or RenderOptions()
    zoom = view.zoom if view is not None else 1.0
    pan = view.pan if view is not None else (0.0, 0.0)

    def to_canvas(point: Point2D) -> str:
        return f"({_fmt(point[0] * zoom + pan[0])},{_fmt(point[1] * zoom + pan[1])})"

    unit = _fmt(opts.unit_pt)
    lines: List[str] = [rf"\begin{{tikzpicture}}[x={unit}pt, y=-{unit}pt]"]
    width, height = state.config.canvas_width, state.config.canvas_height
    if opts.clip:
        lines.append(rf"\clip (0,0) rectangle ({_fmt(width)},{_fmt(height)});")

    lines.append("% connectors")
    for connector in state.connectors():
        lines.append(rf"\draw[cm/connector] {to_canvas(connector.start)} -- {to_canvas(connector.end)};")

    lines.append("% nodes")
    count = 0
    for node in state.nodes():
        center = to_canvas(node.position)
        lines.append(rf"\draw[cm/bubble] {center} circle[radius={_fmt(node.radius * zoom)}];")
        text = r"\\".join(latex_escape(line) for line in _label_lines(node, opts))
        font = _font_spec(node.level, zoom, opts)
        lines.append(rf"\node[cm/label, font={font}] ({node.node_id.key}) at {center} {{{text}}};")
        count += 1
    lines.append(r"\end{tikzpicture}")

    logger.info("Rendered %d node(s) to TikZ (zoom=%.3f)", count, zoom)
    return "\n".join(lines)


def generate_tikz_document(
    state: LayoutState,
    view: Optional[ViewState] = None,
    options: Optional[RenderOptions] = None,
) -> str:
    opts = options or RenderOptions()
    body = generate_tikz_code(state, view, opts)
    stroke = f"{_fmt(opts.stroke_units * opts.unit_pt)}pt"
    return standalone_tpl % {"body": body, "stroke": stroke}
