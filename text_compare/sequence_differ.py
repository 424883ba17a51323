"""
Sequence Differs v1.0.0
=======================
Edit-script producers for line and character sequences.

Uses difflib.SequenceMatcher for line alignment and diff-match-patch
for character-level comparisons inside changed chunks. Both return the
same EditScript model so the row engine does not care which one ran.
"""

from abc import ABC, abstractmethod
import difflib
from typing import Any, Callable, Dict, Hashable, List, Optional, Sequence, Tuple

import diff_match_patch as dmp_module

from config_logging import get_logger
from .models import Chunk, EditOperation, EditScript, OpTag

logger = get_logger('text_compare.sequence_differ')

KeyFunc = Optional[Callable[[Any], Hashable]]

# First code point after the UTF-16 surrogate block
_SURROGATE_START = 0xD800
_SURROGATE_SKIP = 0xE000 - 0xD800


class SequenceDiffer(ABC):
    """
    Interface all sequence differs implement.

    ``diff(a, b, key)`` returns an EditScript covering both sequences in
    document order. ``key`` maps each element to the value used for
    equality, which lets callers express an equivalence relation such as
    whitespace-insensitive line comparison.
    """

    @abstractmethod
    def diff(self, a: Sequence[Any], b: Sequence[Any], key: KeyFunc = None) -> EditScript:
        """Compute the edit script turning ``a`` into ``b``."""


def _operation(tag: OpTag, a: Sequence[Any], b: Sequence[Any],
               i1: int, i2: int, j1: int, j2: int) -> EditOperation:
    return EditOperation(tag, Chunk(i1, tuple(a[i1:i2])), Chunk(j1, tuple(b[j1:j2])))


class MatcherDiffer(SequenceDiffer):
    """
    Differ backed by difflib.SequenceMatcher.

    Args:
        autojunk: Passed to SequenceMatcher; off by default so frequent
                  lines (blank lines, braces) still align
    """

    def __init__(self, autojunk: bool = False):
        self.autojunk = autojunk

    def diff(self, a: Sequence[Any], b: Sequence[Any], key: KeyFunc = None) -> EditScript:
        keys_a = [key(x) for x in a] if key else list(a)
        keys_b = [key(x) for x in b] if key else list(b)
        matcher = difflib.SequenceMatcher(None, keys_a, keys_b, autojunk=self.autojunk)

        operations = [
            _operation(OpTag(tag), a, b, i1, i2, j1, j2)
            for tag, i1, i2, j1, j2 in matcher.get_opcodes()
        ]
        return EditScript(tuple(operations))


class PatchDiffer(SequenceDiffer):
    """
    Differ backed by diff-match-patch.

    Elements are encoded one character each (the library's lines-to-chars
    technique), diffed as strings, and decoded back into positioned chunks.
    Adjacent deletions and insertions between two equal runs fold into one
    REPLACE operation.

    Args:
        timeout: Seconds diff-match-patch may spend before settling for a
                 non-minimal result (0 means no limit)
        cleanup_semantic: Run diff_cleanupSemantic on the raw diff
    """

    def __init__(self, timeout: float = 2.0, cleanup_semantic: bool = False):
        self.timeout = timeout
        self.cleanup_semantic = cleanup_semantic
        self.dmp = dmp_module.diff_match_patch()
        self.dmp.Diff_Timeout = timeout

    def diff(self, a: Sequence[Any], b: Sequence[Any], key: KeyFunc = None) -> EditScript:
        keys_a = [key(x) for x in a] if key else list(a)
        keys_b = [key(x) for x in b] if key else list(b)
        text_a, text_b = self._encode(keys_a, keys_b)

        diffs = self.dmp.diff_main(text_a, text_b, False)
        if self.cleanup_semantic:
            self.dmp.diff_cleanupSemantic(diffs)

        return EditScript(tuple(self._to_operations(diffs, a, b)))

    @staticmethod
    def _encode(keys_a: List[Hashable], keys_b: List[Hashable]) -> Tuple[str, str]:
        """Map every distinct key to its own character."""
        codes: Dict[Hashable, str] = {}

        def encode(keys: List[Hashable]) -> str:
            chars = []
            for k in keys:
                if k not in codes:
                    point = len(codes) + 1
                    if point >= _SURROGATE_START:
                        point += _SURROGATE_SKIP
                    codes[k] = chr(point)
                chars.append(codes[k])
            return ''.join(chars)

        return encode(keys_a), encode(keys_b)

    def _to_operations(self, diffs: List[Tuple[int, str]],
                       a: Sequence[Any], b: Sequence[Any]) -> List[EditOperation]:
        operations: List[EditOperation] = []
        i = j = 0
        deleted = inserted = 0

        def flush():
            nonlocal i, j, deleted, inserted
            if deleted and inserted:
                tag = OpTag.REPLACE
            elif deleted:
                tag = OpTag.DELETE
            elif inserted:
                tag = OpTag.INSERT
            else:
                return
            operations.append(_operation(tag, a, b, i, i + deleted, j, j + inserted))
            i += deleted
            j += inserted
            deleted = inserted = 0

        for op, text in diffs:
            if op == self.dmp.DIFF_DELETE:
                deleted += len(text)
            elif op == self.dmp.DIFF_INSERT:
                inserted += len(text)
            else:
                flush()
                size = len(text)
                operations.append(_operation(OpTag.EQUAL, a, b, i, i + size, j, j + size))
                i += size
                j += size
        flush()

        if i != len(a) or j != len(b):
            logger.warning(f"diff-match-patch result covered {i}/{len(a)} and {j}/{len(b)} elements")
        return operations
