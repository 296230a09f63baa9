import pytest

from relex.data_processing import CandidatePairGenerator


class TestCandidatePairGenerator:
    """Test suite for CandidatePairGenerator."""

    @pytest.mark.parametrize("n", [0, 1, 2, 3, 5, 8])
    def test_single_direction_count(self, n):
        """Should produce n*(n-1)/2 pairs, each with i < j."""
        args = list(range(n))
        pairs = list(CandidatePairGenerator(both_directions=False).generate(args))

        assert len(pairs) == n * (n - 1) // 2
        assert all(a < b for a, b in pairs)
        assert len(set(pairs)) == len(pairs)

    @pytest.mark.parametrize("n", [0, 1, 2, 3, 5, 8])
    def test_both_directions_count(self, n):
        """Should produce every ordered pair (i, j) with i != j exactly once."""
        args = list(range(n))
        pairs = list(CandidatePairGenerator(both_directions=True).generate(args))

        assert len(pairs) == n * (n - 1)
        assert set(pairs) == {(i, j) for i in args for j in args if i != j}

    def test_single_direction_order(self):
        """Should follow sentence order row by row."""
        pairs = list(CandidatePairGenerator(False).generate(["a", "b", "c"]))
        assert pairs == [("a", "b"), ("a", "c"), ("b", "c")]

    def test_both_directions_order(self):
        pairs = list(CandidatePairGenerator(True).generate(["a", "b", "c"]))
        assert pairs == [("a", "b"), ("a", "c"), ("b", "a"), ("b", "c"), ("c", "a"), ("c", "b")]

    @pytest.mark.parametrize("both_directions", [False, True])
    def test_count_matches_generate(self, both_directions):
        generator = CandidatePairGenerator(both_directions)
        for n in range(6):
            assert generator.count(n) == len(list(generator(list(range(n)))))
