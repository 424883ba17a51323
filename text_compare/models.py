"""
Text Compare Models v1.0.0
==========================
Data classes for edit scripts and side-by-side display rows.

Chunks and operations are frozen: each processing stage (normalize,
wrap, inline annotation) returns new values instead of rewriting lines
in place.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterator, List, Sequence, Tuple


class OpTag(Enum):
    """Kinds of operations in an edit script."""
    EQUAL = "equal"               # Same elements on both sides
    INSERT = "insert"             # Elements only in the revised sequence
    DELETE = "delete"             # Elements only in the original sequence
    REPLACE = "replace"           # Elements changed between the two


class RowTag(Enum):
    """Status of a single side-by-side row."""
    EQUAL = "equal"
    INSERT = "insert"
    DELETE = "delete"
    CHANGE = "change"


@dataclass(frozen=True)
class Chunk:
    """
    A contiguous span of one side of a comparison.

    Attributes:
        position: 0-based start index in the parent sequence
        lines: Elements of the span (lines or display characters)
    """
    position: int
    lines: Tuple[Any, ...] = ()

    def __post_init__(self):
        if self.position < 0:
            raise ValueError(f"Chunk position must be >= 0, got {self.position}")
        if not isinstance(self.lines, tuple):
            object.__setattr__(self, 'lines', tuple(self.lines))

    @property
    def size(self) -> int:
        return len(self.lines)

    @property
    def last(self) -> int:
        """Index of the last element (position - 1 for an empty chunk)."""
        return self.position + self.size - 1

    @property
    def end(self) -> int:
        """Exclusive end index in the parent sequence."""
        return self.position + self.size

    def with_lines(self, lines: Sequence[Any]) -> 'Chunk':
        """Return a chunk at the same position carrying new lines."""
        return Chunk(self.position, tuple(lines))


@dataclass(frozen=True)
class EditOperation:
    """One unit of difference between two sequences."""
    tag: OpTag
    original: Chunk
    revised: Chunk

    @property
    def is_change(self) -> bool:
        return self.tag is not OpTag.EQUAL


@dataclass(frozen=True)
class EditScript:
    """
    Ordered operations covering both compared sequences.

    Operations are in document order and do not overlap. EQUAL operations
    may or may not be present; consumers rely only on the change
    operations and their positions.
    """
    operations: Tuple[EditOperation, ...] = ()

    def __post_init__(self):
        if not isinstance(self.operations, tuple):
            object.__setattr__(self, 'operations', tuple(self.operations))

    def __iter__(self) -> Iterator[EditOperation]:
        return iter(self.operations)

    def __len__(self) -> int:
        return len(self.operations)

    def changes(self) -> List[EditOperation]:
        """Non-EQUAL operations in document order."""
        return [op for op in self.operations if op.is_change]


@dataclass(frozen=True)
class DisplayRow:
    """
    A single row in the side-by-side view.

    Attributes:
        tag: Row status
        old_line: Original text ("" for inserted rows and padding)
        new_line: Revised text ("" for deleted rows and padding)
    """
    tag: RowTag
    old_line: str
    new_line: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'tag': self.tag.value,
            'old_line': self.old_line,
            'new_line': self.new_line,
        }


@dataclass
class RowStats:
    """Row counts per tag for a generated comparison."""
    total_rows: int = 0
    equal: int = 0
    inserted: int = 0
    deleted: int = 0
    changed: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            'total_rows': self.total_rows,
            'equal': self.equal,
            'inserted': self.inserted,
            'deleted': self.deleted,
            'changed': self.changed,
        }


def summarize_rows(rows: Sequence[DisplayRow]) -> RowStats:
    """Count rows per tag."""
    by_tag = {tag.value: 0 for tag in RowTag}
    for row in rows:
        by_tag[row.tag.value] += 1
    return RowStats(
        total_rows=len(rows),
        equal=by_tag[RowTag.EQUAL.value],
        inserted=by_tag[RowTag.INSERT.value],
        deleted=by_tag[RowTag.DELETE.value],
        changed=by_tag[RowTag.CHANGE.value],
    )
