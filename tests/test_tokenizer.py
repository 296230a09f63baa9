import pytest

from relex.utils import is_module_available
from relex.data_processing.tokenizer import WhitespaceTokenSplitter, WordsSplitter


class TestWhitespaceTokenSplitter:
    def test_offsets(self):
        tokens = list(WhitespaceTokenSplitter()("Take aspirin, twice-daily."))
        assert tokens == [
            ("Take", 0, 4),
            ("aspirin", 5, 12),
            (",", 12, 13),
            ("twice-daily", 14, 25),
            (".", 25, 26),
        ]


class TestWordsSplitter:
    def test_split_span_uses_document_offsets(self):
        text = "E1xxx     E2yyy     E3zzz"
        assert WordsSplitter().split_span(text, 5, 20) == [("E2yyy", 10, 15)]

    def test_empty_span(self):
        assert WordsSplitter().split_span("abc", 1, 1) == []

    def test_unknown_splitter(self):
        with pytest.raises(ValueError, match="not implemented"):
            WordsSplitter("stanza")

    @pytest.mark.skipif(not is_module_available("spacy"), reason="spacy is not installed")
    def test_spacy_splitter(self):
        splitter = WordsSplitter("spacy")
        assert [word for word, _, _ in splitter("Take aspirin.")] == ["Take", "aspirin", "."]
