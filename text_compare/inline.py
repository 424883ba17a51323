"""
Inline Diff Annotator v1.0.0
============================
Character-level highlighting inside changed chunks.

A changed chunk is flattened into one sequence of display characters
(lines joined by a line-break marker), diffed against its counterpart,
and the differing spans are wrapped with the configured highlight tags.
Highly fragmented changes are left unmarked.
"""

from typing import List, Optional, Sequence, Tuple, Union

from config_logging import get_logger
from .config import DiffRowConfig
from .models import Chunk, OpTag
from .normalizer import split_display_chars
from .sequence_differ import PatchDiffer, SequenceDiffer
from .tag_wrapper import wrap_range

logger = get_logger('text_compare.inline')

# Character scripts with this many change operations are not highlighted
INLINE_CHANGE_LIMIT = 3


class _LineBreak:
    """Marker joining lines of a flattened chunk; never equal to text."""

    def __repr__(self) -> str:
        return '<line-break>'


LINE_BREAK = _LineBreak()

Token = Union[str, _LineBreak]


def flatten_lines(lines: Sequence[str]) -> List[Token]:
    """Join lines into one token list separated by LINE_BREAK."""
    tokens: List[Token] = []
    for index, line in enumerate(lines):
        if index:
            tokens.append(LINE_BREAK)
        tokens.extend(split_display_chars(line))
    return tokens


def unflatten_tokens(tokens: Sequence[Token]) -> List[str]:
    """Split a token list back into lines on LINE_BREAK."""
    lines: List[List[str]] = [[]]
    for token in tokens:
        if token is LINE_BREAK:
            lines.append([])
        else:
            lines[-1].append(token)
    return [''.join(parts) for parts in lines]


def line_segments(tokens: Sequence[Token], start: int, end: int) -> List[Tuple[int, int]]:
    """
    Break ``[start, end)`` into non-empty ranges that contain no LINE_BREAK.

    Returns:
        Ranges in left-to-right order
    """
    segments = []
    seg_start = start
    for index in range(start, end):
        if tokens[index] is LINE_BREAK:
            if index > seg_start:
                segments.append((seg_start, index))
            seg_start = index + 1
    if end > seg_start:
        segments.append((seg_start, end))
    return segments


class InlineDiffAnnotator:
    """
    Highlights the differing characters of a changed chunk pair.

    Args:
        config: Row configuration supplying tag names and css classes
        differ: Character differ (diff-match-patch backed by default)
    """

    def __init__(self, config: DiffRowConfig, differ: Optional[SequenceDiffer] = None):
        self.config = config
        self.differ = differ or PatchDiffer()

    def annotate(self, original: Chunk, revised: Chunk) -> Tuple[Chunk, Chunk]:
        """
        Return copies of both chunks with inline highlight markup.

        When the character-level diff has INLINE_CHANGE_LIMIT or more change
        operations, the chunks are returned unchanged.

        Args:
            original: Changed chunk from the original side
            revised: Changed chunk from the revised side

        Returns:
            Tuple of (original, revised) chunks
        """
        orig_tokens = flatten_lines(original.lines)
        rev_tokens = flatten_lines(revised.lines)

        changes = self.differ.diff(orig_tokens, rev_tokens).changes()
        if len(changes) >= INLINE_CHANGE_LIMIT:
            logger.debug(f"Skipping inline highlight: {len(changes)} character changes "
                         f"at original line {original.position}")
            return original, revised

        # Right to left, so positions of earlier changes stay valid
        for op in reversed(changes):
            if op.tag in (OpTag.DELETE, OpTag.REPLACE):
                orig_tokens = self._wrap_span(
                    orig_tokens, op.original,
                    self.config.inline_old_tag, self.config.inline_old_css_class
                )
            if op.tag in (OpTag.INSERT, OpTag.REPLACE):
                rev_tokens = self._wrap_span(
                    rev_tokens, op.revised,
                    self.config.inline_new_tag, self.config.inline_new_css_class
                )

        return (
            original.with_lines(unflatten_tokens(orig_tokens) if original.lines else ()),
            revised.with_lines(unflatten_tokens(rev_tokens) if revised.lines else ()),
        )

    @staticmethod
    def _wrap_span(tokens: List[Token], span: Chunk, tag: str,
                   css_class: Optional[str]) -> List[Token]:
        """
        Wrap a changed span, one tag pair per line it touches.

        A span made only of line breaks gets an empty pair at the end of
        the line the first break closes.
        """
        segments = line_segments(tokens, span.position, span.end)
        if not segments and span.size:
            return wrap_range(tokens, span.position, span.position, tag, css_class)
        for start, end in reversed(segments):
            tokens = wrap_range(tokens, start, end, tag, css_class)
        return tokens
