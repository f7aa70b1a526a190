"""Layout → TikZ code generation helpers."""

from .generator import (
    RenderOptions,
    generate_tikz_code,
    generate_tikz_document,
)
from .utils import latex_escape, wrap_label

__all__ = [
    "RenderOptions",
    "generate_tikz_code",
    "generate_tikz_document",
    "latex_escape",
    "wrap_label",
]
