"""Word splitters used by the token-level relation features.

Each splitter yields ``(word, start, end)`` triples with character offsets
relative to the string it was given. :meth:`WordsSplitter.split_span` shifts
those offsets so they line up with the document.
"""

import re
from typing import Iterator, List, Tuple

from ..utils import is_module_available
from ..exceptions import MissedPackageException

Token = Tuple[str, int, int]


class TokenSplitterBase:
    """Base class for token splitters.

    Subclasses implement ``__call__`` to yield tokens with their start and
    end positions.
    """

    def __call__(self, text) -> Iterator[Token]:
        raise NotImplementedError


class WhitespaceTokenSplitter(TokenSplitterBase):
    """Splits on whitespace, keeping hyphenated and underscored words whole.

    Punctuation marks become tokens of their own.
    """

    def __init__(self):
        self.whitespace_pattern = re.compile(r"\w+(?:[-_]\w+)*|\S")

    def __call__(self, text):
        for match in self.whitespace_pattern.finditer(text):
            yield match.group(), match.start(), match.end()


class SpaCyTokenSplitter(TokenSplitterBase):
    """Tokenizes with a blank spaCy pipeline for the given language."""

    def __init__(self, lang=None):
        if not is_module_available("spacy"):
            raise MissedPackageException("Please install spacy with: `pip install spacy`")
        import spacy  # noqa: PLC0415

        if lang is None:
            lang = "en"
        self.nlp = spacy.blank(lang)

    def __call__(self, text):
        doc = self.nlp(text)
        for token in doc:
            yield token.text, token.idx, token.idx + len(token.text)


class WordsSplitter(TokenSplitterBase):
    """Token splitter that picks its backend by name.

    Args:
        splitter_type: ``'whitespace'`` (default) or ``'spacy'``.

    Raises:
        ValueError: If the specified splitter_type is not implemented.
    """

    def __init__(self, splitter_type="whitespace"):
        self.splitter_type = splitter_type
        if splitter_type == "whitespace":
            self.splitter = WhitespaceTokenSplitter()
        elif splitter_type == "spacy":
            self.splitter = SpaCyTokenSplitter()
        else:
            raise ValueError(f"{splitter_type} is not implemented, choose between 'whitespace' and 'spacy'")

    def __call__(self, text):
        yield from self.splitter(text)

    def split_span(self, text: str, begin: int, end: int) -> List[Token]:
        """Split ``text[begin:end]`` and return tokens with document offsets."""
        return [(word, begin + start, begin + stop) for word, start, stop in self(text[begin:end])]
