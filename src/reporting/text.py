import re
from typing import List

from reportlab.pdfbase.pdfmetrics import stringWidth

# Standard-14 fonts available to both PDF backends without embedding
FONT_REGULAR = "Helvetica"
FONT_BOLD = "Helvetica-Bold"

_SUBSTITUTIONS = (
    ("\u2013", "-"),  # en dash
    ("\u2014", "-"),  # em dash
    ("\u2192", "->"),  # rightwards arrow
)
_WHITESPACE_CONTROLS = re.compile(r"[\t\r\n\f\v]")
# Keep printable ASCII and printable Latin-1 (no C0/C1 controls)
_OUTSIDE_PRINTABLE_LATIN1 = re.compile(r"[^\x20-\x7e\xa0-\xff]")


def to_latin1_safe(text: str) -> str:
    """Makes ``text`` drawable with the core PDF fonts (WinAnsi / Latin-1)."""
    for source, replacement in _SUBSTITUTIONS:
        text = text.replace(source, replacement)
    text = _WHITESPACE_CONTROLS.sub(" ", text)
    return _OUTSIDE_PRINTABLE_LATIN1.sub("", text)


def text_width(text: str, font: str, size: float) -> float:
    return stringWidth(text, font, size)


def break_word(word: str, font: str, size: float, max_width: float) -> List[str]:
    # Every piece keeps at least one character, even when that alone is too wide
    pieces: List[str] = []
    piece = ""
    for char in word:
        if piece and text_width(piece + char, font, size) > max_width:
            pieces.append(piece)
            piece = char
        else:
            piece += char
    pieces.append(piece)
    return pieces


def wrap_text(text: str, font: str, size: float, max_width: float) -> List[str]:
    """
    Greedy word wrap of sanitized ``text``.

    A single word wider than ``max_width`` is broken across lines.
    Always returns at least one line so callers reserve space consistently.
    """
    words = to_latin1_safe(text).split()
    lines: List[str] = []
    current = ""
    for word in words:
        if text_width(word, font, size) > max_width:
            if current:
                lines.append(current)
            *full_pieces, current = break_word(word, font, size, max_width)
            lines.extend(full_pieces)
            continue
        candidate = f"{current} {word}" if current else word
        if current and text_width(candidate, font, size) > max_width:
            lines.append(current)
            current = word
        else:
            current = candidate
    if current:
        lines.append(current)
    return lines or [""]
