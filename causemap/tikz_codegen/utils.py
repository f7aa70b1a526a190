import unicodedata
from typing import List

_TEXT_REPLACEMENTS = {
    '\\': r'\textbackslash{}',
    '&': r'\&',
    '%': r'\%',
    '$': r'\$',
    '#': r'\#',
    '_': r'\_',
    '{': r'\{',
    '}': r'\}',
    '~': r'\textasciitilde{}',
    '^': r'\textasciicircum{}',
    '→': r'$\rightarrow$',
    '←': r'$\leftarrow$',
}


def _strip_combining(text: str) -> str:
    text = unicodedata.normalize('NFC', text)
    return ''.join(ch for ch in text if unicodedata.category(ch) != 'Mn')


def latex_escape(text: str) -> str:
    """Escape a node label for use inside a TikZ node."""
    return ''.join(_TEXT_REPLACEMENTS.get(ch, ch) for ch in _strip_combining(text))


def wrap_label(label: str, max_chars: int = 18) -> List[str]:
    """Greedy word wrap; a single word longer than ``max_chars`` keeps its own line."""
    lines: List[str] = []
    current = ''
    for word in label.split():
        candidate = f'{current} {word}'.strip()
        if len(candidate) <= max_chars:
            current = candidate
        else:
            if current:
                lines.append(current)
            current = word
    if current:
        lines.append(current)
    return lines


def chars_per_line(radius: float, font_size: float) -> int:
    """Characters that fit across a circle of ``radius`` at ``font_size``."""
    return max(1, int((radius * 1.6) // (font_size * 0.6)))
