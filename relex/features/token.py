from typing import List, Optional

from .base import Feature, RelationFeaturesExtractor
from ..data_processing.document import ArgumentMention, Document
from ..data_processing.tokenizer import WordsSplitter

NO_WORD = "<none>"


class TokenFeaturesExtractor(RelationFeaturesExtractor):
    """Surface word features of the two arguments and the text between them.

    Produces, for each argument, its lowercased text and its first and last
    words, then a bag of the words strictly between the arguments and their
    count. Arguments that overlap have nothing between them.
    """

    def __init__(self, words_splitter: Optional[WordsSplitter] = None, lowercase: bool = True):
        self.words_splitter = words_splitter if words_splitter is not None else WordsSplitter()
        self.lowercase = lowercase

    def _norm(self, word: str) -> str:
        return word.lower() if self.lowercase else word

    def _words(self, text: str, begin: int, end: int) -> List[str]:
        return [self._norm(word) for word, _, _ in self.words_splitter.split_span(text, begin, end)]

    def extract(self, document: Document, arg1: ArgumentMention, arg2: ArgumentMention) -> List[Feature]:
        features = []
        for prefix, arg in (("arg1", arg1), ("arg2", arg2)):
            words = self._words(document.text, arg.begin, arg.end)
            features.append(Feature(f"{prefix}_text", self._norm(document.covered_text(arg))))
            features.append(Feature(f"{prefix}_first_word", words[0] if words else NO_WORD))
            features.append(Feature(f"{prefix}_last_word", words[-1] if words else NO_WORD))

        left, right = (arg1, arg2) if arg1.begin <= arg2.begin else (arg2, arg1)
        between = self._words(document.text, left.end, right.begin) if left.end < right.begin else []
        for word in sorted(set(between)):
            features.append(Feature("between_word", word))
        features.append(Feature("num_words_between", len(between)))
        return features
