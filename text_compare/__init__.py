"""
Text Compare Module v1.0.0
==========================
Side-by-side text comparison rows with inline diff highlighting.

Features:
- Row alignment from a line-level edit script (EQUAL/INSERT/DELETE/CHANGE)
- Tab expansion, HTML escaping and column wrapping of lines
- Character-level highlighting inside changed chunks
- Whitespace-insensitive line comparison

Author: TextCompare
"""

from .aligner import DiffRowGenerator, generate_diff_rows
from .config import DiffRowConfig, DiffRowConfigBuilder
from .inline import InlineDiffAnnotator, INLINE_CHANGE_LIMIT
from .models import (
    Chunk,
    DisplayRow,
    EditOperation,
    EditScript,
    OpTag,
    RowStats,
    RowTag,
    summarize_rows
)
from .sequence_differ import MatcherDiffer, PatchDiffer, SequenceDiffer
from .tag_wrapper import strip_tags, wrap_line, wrap_range

__version__ = "1.0.0"
__all__ = [
    'DiffRowGenerator',
    'generate_diff_rows',
    'DiffRowConfig',
    'DiffRowConfigBuilder',
    'InlineDiffAnnotator',
    'INLINE_CHANGE_LIMIT',
    'Chunk',
    'DisplayRow',
    'EditOperation',
    'EditScript',
    'OpTag',
    'RowStats',
    'RowTag',
    'summarize_rows',
    'MatcherDiffer',
    'PatchDiffer',
    'SequenceDiffer',
    'strip_tags',
    'wrap_line',
    'wrap_range'
]
