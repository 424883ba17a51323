"""
Text Normalizer
===============
Line preparation for side-by-side display: tab expansion, HTML escaping,
and wrapping to a column width.

Widths are counted in display characters. An escaped entity produced by
``normalize`` (``&amp;``, ``&lt;``, ``&gt;``) counts as one character and
is never split across wrapped lines.
"""

import html
import re
from typing import Iterable, List

_DISPLAY_CHAR = re.compile(r'&(?:amp|lt|gt);|.', re.DOTALL)


def split_display_chars(text: str) -> List[str]:
    """Split text into display characters, keeping escaped entities whole."""
    return _DISPLAY_CHAR.findall(text)


def normalize_line(line: str, tab_size: int = 4) -> str:
    """Expand tabs and escape markup-significant characters in one line."""
    return html.escape(line.expandtabs(tab_size), quote=False)


def normalize(lines: Iterable[str], tab_size: int = 4) -> List[str]:
    """
    Normalize lines for display.

    Args:
        lines: Raw lines
        tab_size: Tab stop width used by tab expansion

    Returns:
        New list of normalized lines (same count as the input)
    """
    return [normalize_line(line, tab_size) for line in lines]


def wrap_line(line: str, width: int) -> List[str]:
    """
    Split a line into pieces of at most ``width`` display characters.

    An empty line stays a single empty line.
    """
    if width <= 0:
        raise ValueError(f"Wrap width must be positive, got {width}")
    chars = split_display_chars(line)
    if len(chars) <= width:
        return [line]
    return [''.join(chars[i:i + width]) for i in range(0, len(chars), width)]


def wrap_per_line(lines: Iterable[str], width: int) -> List[List[str]]:
    """Wrap each line, keeping one group of pieces per input line."""
    return [wrap_line(line, width) for line in lines]


def wrap(lines: Iterable[str], width: int) -> List[str]:
    """
    Wrap lines to a column width.

    Args:
        lines: Normalized lines
        width: Maximum display characters per output line

    Returns:
        Flat list of wrapped lines; may be longer than the input
    """
    return [piece for group in wrap_per_line(lines, width) for piece in group]
