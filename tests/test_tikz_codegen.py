from __future__ import annotations

from causemap.config import LayoutConfig
from causemap.data import REFERENCE_HIERARCHY
from causemap.state import LayoutState
from causemap.tikz_codegen import RenderOptions, generate_tikz_code, generate_tikz_document, latex_escape, wrap_label
from causemap.tikz_codegen.utils import chars_per_line
from causemap.view import ViewState


def _state() -> LayoutState:
    return LayoutState(REFERENCE_HIERARCHY, LayoutConfig())


def test_wrap_label_breaks_on_words() -> None:
    assert wrap_label("Not leveraging automation (script→video)", 18) == [
        "Not leveraging",
        "automation",
        "(script→video)",
    ]
    assert wrap_label("Supercalifragilistic words", 5) == ["Supercalifragilistic", "words"]
    assert wrap_label("", 10) == []


def test_chars_per_line_scales_with_radius() -> None:
    assert chars_per_line(46.0, 13.5) == 9
    assert chars_per_line(110.0, 22.0) == 13
    assert chars_per_line(1.0, 40.0) == 1


def test_latex_escape_handles_specials() -> None:
    assert latex_escape("Perfectionism & over-editing") == r"Perfectionism \& over-editing"
    assert latex_escape("script→video") == r"script$\rightarrow$video"
    assert latex_escape("100% of_it") == r"100\% of\_it"


def test_generate_tikz_code_draws_connectors_then_nodes() -> None:
    tikz = generate_tikz_code(_state())

    assert tikz.startswith(r"\begin{tikzpicture}[x=0.25pt, y=-0.25pt]")
    assert tikz.count(r"\draw[cm/connector]") == 48
    assert tikz.count(r"\draw[cm/bubble]") == 50
    assert tikz.index("% connectors") < tikz.index("% nodes")
    assert r"\draw[cm/bubble] (580,500) circle[radius=110];" in tikz
    assert "(t0c3s0)" in tikz
    assert r"Perfectionism\\\&\\over-editing" in tikz
    assert tikz.rstrip().endswith(r"\end{tikzpicture}")


def test_generate_tikz_code_applies_view_transform() -> None:
    tikz = generate_tikz_code(_state(), ViewState(2.0, (-100.0, 10.0)), RenderOptions(clip=False))

    assert r"\draw[cm/bubble] (1060,1010) circle[radius=220];" in tikz
    assert r"\clip (0,0) rectangle" not in tikz


def test_generate_tikz_document_wraps_picture() -> None:
    document = generate_tikz_document(_state())

    assert document.startswith(r"\documentclass[border=4pt]{standalone}")
    assert r"\usetikzlibrary{shadows}" in document
    assert "line width=0.75pt" in document
    assert r"\begin{tikzpicture}" in document
    assert document.rstrip().endswith(r"\end{document}")
