"""
Tag Wrapper
===========
Inserts highlight markup around whole lines or token ranges.

Markup is exactly ``<tag>`` or ``<tag class="css">`` followed by the
content and ``</tag>``.
"""

import re
from typing import Iterable, List, Optional, Sequence

from config_logging import ValidationError


def open_tag(tag: str, css_class: Optional[str] = None) -> str:
    """Render an opening tag with an optional class attribute."""
    if css_class is not None:
        return f'<{tag} class="{css_class}">'
    return f'<{tag}>'


def close_tag(tag: str) -> str:
    return f'</{tag}>'


def wrap_range(
    sequence: Sequence[str],
    start: int,
    end: int,
    tag: str,
    css_class: Optional[str] = None
) -> List[str]:
    """
    Wrap a range of tokens with an open/close tag pair.

    Both indices refer to the sequence as passed in. When several ranges
    of one sequence are wrapped, apply them from right to left so indices
    computed for ranges further left stay valid.

    Args:
        sequence: Tokens to wrap (not modified)
        start: Index the opening tag is inserted before
        end: Exclusive end of the range; the closing tag goes before it
        tag: Tag name without angle brackets
        css_class: Optional class attribute value

    Returns:
        New list with two extra tokens

    Raises:
        ValidationError: If not 0 <= start <= end <= len(sequence)
    """
    if not 0 <= start <= end <= len(sequence):
        raise ValidationError(
            f"Invalid wrap range [{start}, {end}) for sequence of length {len(sequence)}",
            field='range', start=start, end=end, length=len(sequence)
        )
    result = list(sequence)
    result.insert(end, close_tag(tag))
    result.insert(start, open_tag(tag, css_class))
    return result


def wrap_line(line: str, tag: str, css_class: Optional[str] = None) -> str:
    """Wrap a whole line with a single tag pair."""
    return f'{open_tag(tag, css_class)}{line}{close_tag(tag)}'


def strip_tags(line: str, tags: Iterable[str]) -> str:
    """
    Remove highlight markup for the given tag names from a line.

    Only markup in the exact form produced by this module is removed.
    """
    names = '|'.join(re.escape(tag) for tag in sorted(set(tags)))
    if not names:
        return line
    pattern = re.compile(rf'<(?:{names})(?: class="[^"]*")?>|</(?:{names})>')
    return pattern.sub('', line)
