import pytest

from relex.config import NO_RELATION_CATEGORY
from relex.data_processing import RelationLabel, NO_RELATION


class TestRelationLabel:
    """Test suite for the tagged relation label and its wire form."""

    def test_encode(self):
        assert RelationLabel.forward("treats").encode() == "treats"
        assert RelationLabel.inverted("treats").encode() == "treats-1"
        assert RelationLabel.no_relation().encode() == NO_RELATION_CATEGORY

    @pytest.mark.parametrize(
        "wire, expected",
        [
            ("treats", RelationLabel.forward("treats")),
            ("treats-1", RelationLabel.inverted("treats")),
            ("location_of-1", RelationLabel.inverted("location_of")),
            (NO_RELATION_CATEGORY, NO_RELATION),
        ],
    )
    def test_decode(self, wire, expected):
        assert RelationLabel.decode(wire) == expected

    def test_no_relation_flags(self):
        assert not NO_RELATION.is_relation
        assert RelationLabel.forward("treats").is_relation

    def test_reserved_category_rejected(self):
        """Should not allow the no-relation sentinel as a forward category."""
        with pytest.raises(ValueError):
            RelationLabel.forward(NO_RELATION_CATEGORY)

    def test_missing_relation_cannot_be_inverted(self):
        with pytest.raises(ValueError):
            RelationLabel(None, True)

    @pytest.mark.parametrize("category", ["part-1", "-1"])
    def test_category_with_inverted_suffix_rejected(self, category):
        """A forward 'part-1' would encode exactly like an inverted 'part'."""
        with pytest.raises(ValueError, match="must not end with"):
            RelationLabel.forward(category)
        with pytest.raises(ValueError):
            RelationLabel.inverted(category)

    def test_decode_bare_suffix_rejected(self):
        with pytest.raises(ValueError):
            RelationLabel.decode("-1")

    @pytest.mark.parametrize(
        "label",
        [
            RelationLabel.forward("part"),
            RelationLabel.inverted("part"),
            RelationLabel.forward("location_of"),
            RelationLabel.inverted("t-2"),
            NO_RELATION,
        ],
    )
    def test_encode_decode_is_lossless(self, label):
        assert RelationLabel.decode(label.encode()) == label
