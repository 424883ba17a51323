"""
Tests for Sequence Differs
==========================
difflib and diff-match-patch backed edit scripts.
"""

import pytest

from text_compare.models import Chunk, EditOperation, OpTag
from text_compare.sequence_differ import MatcherDiffer, PatchDiffer


@pytest.fixture(params=[MatcherDiffer, PatchDiffer], ids=['matcher', 'patch'])
def differ(request):
    """Each differ implementation."""
    return request.param()


def _covered(script, attr):
    """Concatenate one side of every operation in order."""
    return [item for op in script for item in getattr(op, attr).lines]


class TestCommonBehavior:
    """Behavior both differs share."""

    def test_identical_sequences(self, differ):
        """Test that identical input produces no change operations."""
        script = differ.diff(["a", "b"], ["a", "b"])
        assert script.changes() == []

    def test_empty_sequences(self, differ):
        """Test that two empty inputs give an empty script."""
        assert len(differ.diff([], [])) == 0

    def test_replace_in_middle(self, differ):
        """Test a single changed element between equal ones."""
        script = differ.diff(["a", "b", "c"], ["a", "x", "c"])
        assert script.changes() == [
            EditOperation(OpTag.REPLACE, Chunk(1, ("b",)), Chunk(1, ("x",)))
        ]

    def test_insert_at_end(self, differ):
        """Test an appended element."""
        script = differ.diff(["a"], ["a", "b"])
        assert script.changes() == [
            EditOperation(OpTag.INSERT, Chunk(1, ()), Chunk(1, ("b",)))
        ]

    def test_delete_at_start(self, differ):
        """Test a removed leading element."""
        script = differ.diff(["a", "b"], ["b"])
        assert script.changes() == [
            EditOperation(OpTag.DELETE, Chunk(0, ("a",)), Chunk(0, ()))
        ]

    def test_operations_cover_both_sides(self, differ):
        """Test that operations are exhaustive and ordered on both sides."""
        a = ["x", "a", "b", "c", "d"]
        b = ["a", "B", "c", "e", "d", "f"]
        script = differ.diff(a, b)
        assert _covered(script, 'original') == a
        assert _covered(script, 'revised') == b

    def test_key_defines_equality(self, differ):
        """Test that the key function decides which elements are equal."""
        script = differ.diff(["A", "b"], ["a", "B"], key=str.lower)
        assert script.changes() == []
        assert script.operations[0].original.lines == ("A", "b")
        assert script.operations[0].revised.lines == ("a", "B")


class TestPatchDiffer:
    """Tests specific to the diff-match-patch differ."""

    def test_character_replace(self):
        """Test that a delete+insert pair folds into one REPLACE."""
        script = PatchDiffer().diff(list("The cat"), list("The dog"))
        changes = script.changes()
        assert len(changes) == 1
        assert changes[0].tag is OpTag.REPLACE
        assert changes[0].original == Chunk(4, tuple("cat"))
        assert changes[0].revised == Chunk(4, tuple("dog"))

    def test_marker_object_tokens(self):
        """Test that non-string hashable tokens work as elements."""
        marker = object()
        script = PatchDiffer().diff(["a", marker, "b"], ["a", marker, "c"])
        assert script.changes()[0].original == Chunk(2, ("b",))

    def test_many_distinct_tokens(self):
        """Test more distinct tokens than fit below the surrogate block."""
        a = list(range(0, 60000))
        b = list(range(0, 60000))
        b[59999] = -1
        changes = PatchDiffer(timeout=0).diff(a, b).changes()
        assert changes == [
            EditOperation(OpTag.REPLACE, Chunk(59999, (59999,)), Chunk(59999, (-1,)))
        ]

    def test_semantic_cleanup_merges_fragments(self):
        """Test that semantic cleanup turns scattered edits into one REPLACE."""
        a, b = list("mouse"), list("sofas")
        assert len(PatchDiffer().diff(a, b).changes()) > 1
        changes = PatchDiffer(cleanup_semantic=True).diff(a, b).changes()
        assert changes == [
            EditOperation(OpTag.REPLACE, Chunk(0, tuple("mouse")), Chunk(0, tuple("sofas")))
        ]

    def test_semantic_cleanup_covers_both_sides(self):
        """Test that cleaned-up scripts still cover both sequences in order."""
        a = list("The quick brown fox jumps over the lazy dog")
        b = list("A quick red fox leapt over two lazy cats")
        script = PatchDiffer(cleanup_semantic=True).diff(a, b)
        assert _covered(script, 'original') == a
        assert _covered(script, 'revised') == b
        tags = [op.tag for op in script]
        assert all(
            not (left.is_change and right.is_change)
            for left, right in zip(script.operations, script.operations[1:])
        )
        assert OpTag.EQUAL in tags


class TestMatcherDiffer:
    """Tests specific to the SequenceMatcher differ."""

    def test_equal_operations_present(self):
        """Test that EQUAL operations are part of the script."""
        script = MatcherDiffer().diff(["a", "b", "c"], ["a", "x", "c"])
        assert [op.tag for op in script] == [OpTag.EQUAL, OpTag.REPLACE, OpTag.EQUAL]

    def test_frequent_lines_align_without_autojunk(self):
        """Test that repeated blank lines still align."""
        a = [""] * 250 + ["end"]
        b = [""] * 250 + ["END"]
        changes = MatcherDiffer().diff(a, b).changes()
        assert len(changes) == 1
        assert changes[0].original.position == 250
