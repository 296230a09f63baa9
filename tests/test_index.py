import pytest

from relex.data_processing import (
    RelationArgument,
    RelationIndex,
    RelationRecord,
    Span,
    SpanKey,
    DuplicateRelationWarning,
)
from tests.utils_docs import mention


class TestSpanKey:
    """Test suite for SpanKey equality and hashing."""

    def test_equal_when_all_fields_match(self):
        """Should compare equal and hash equal for identical offsets."""
        assert SpanKey(0, 5, 10, 15) == SpanKey(0, 5, 10, 15)
        assert hash(SpanKey(0, 5, 10, 15)) == hash(SpanKey(0, 5, 10, 15))

    def test_order_matters(self):
        """Should not treat swapped arguments as the same key."""
        assert SpanKey(0, 5, 10, 15) != SpanKey(10, 15, 0, 5)

    def test_value_based_for_distinct_mention_objects(self):
        """Should match mentions by their spans, not by object identity."""
        a = mention(0, 5, "first")
        b = mention(10, 15, "second")
        a_copy = mention(0, 5, "first")
        b_copy = mention(10, 15, "second")

        assert a is not a_copy
        assert SpanKey.from_arguments(a, b) == SpanKey.from_arguments(a_copy, b_copy)

    def test_usable_as_dict_key(self):
        lookup = {SpanKey(0, 5, 10, 15): "treats"}
        assert lookup[SpanKey.from_spans(Span(0, 5), Span(10, 15))] == "treats"
        assert SpanKey(10, 15, 0, 5) not in lookup

    def test_reversed(self):
        assert SpanKey(0, 5, 10, 15).reversed() == SpanKey(10, 15, 0, 5)


class TestRelationIndex:
    """Test suite for RelationIndex construction and lookups."""

    @pytest.fixture
    def mentions(self):
        return mention(0, 5, "E1"), mention(10, 15, "E2"), mention(20, 25, "E3")

    def test_exact_order_lookup(self, mentions):
        """Should find a relation only in the order it was annotated."""
        e1, e2, _ = mentions
        relation = RelationRecord.create(e1, e2, "treats")
        index = RelationIndex.build([relation])

        assert index.lookup(e1, e2) is relation
        assert index.lookup(e2, e1) is None
        assert index.lookup_category(e1, e2) == "treats"

    def test_uses_roles_not_positions(self, mentions):
        """Should key on the argument marked first by its role."""
        e1, e2, _ = mentions
        relation = RelationRecord(
            RelationArgument(e2, "Related_to"),
            RelationArgument(e1, "Argument"),
            "treats",
        )
        index = RelationIndex.build([relation])

        assert relation.first == e1
        assert index.lookup(e1, e2) is relation
        assert index.lookup(e2, e1) is None

    def test_missing_role_counts_as_first(self, mentions):
        e1, e2, _ = mentions
        relation = RelationRecord(RelationArgument(e1, None), RelationArgument(e2, None), "treats")
        assert RelationIndex.build([relation]).lookup(e1, e2) is relation

    def test_never_returns_relation_for_unrelated_pair(self, mentions):
        """Should return nothing, in either order, for a pair without gold relation."""
        e1, e2, e3 = mentions
        index = RelationIndex.build([RelationRecord.create(e1, e2, "treats")])

        for a, b in [(e1, e3), (e3, e1), (e2, e3), (e3, e2)]:
            assert index.lookup(a, b) is None

    def test_empty_index(self, mentions):
        e1, e2, _ = mentions
        index = RelationIndex.build([])
        assert len(index) == 0
        assert index.lookup(e1, e2) is None

    def test_duplicate_ordered_pair_is_flagged(self, mentions):
        """Two gold relations on the same ordered pair violate the one-relation-per-pair assumption.

        The later relation replaces the earlier one; the collision must be
        reported rather than passing silently.
        """
        e1, e2, _ = mentions
        first = RelationRecord.create(e1, e2, "treats")
        second = RelationRecord.create(e1, e2, "causes")

        with pytest.warns(DuplicateRelationWarning, match="overwrites"):
            index = RelationIndex.build([first, second])

        assert len(index) == 1
        assert index.lookup(e1, e2) is second

    def test_opposite_directions_do_not_collide(self, mentions):
        e1, e2, _ = mentions
        forward = RelationRecord.create(e1, e2, "treats")
        backward = RelationRecord.create(e2, e1, "caused_by")
        index = RelationIndex.build([forward, backward])

        assert index.lookup(e1, e2) is forward
        assert index.lookup(e2, e1) is backward
