"""Document model consumed by the relation pipeline.

A :class:`Document` holds the raw text, the sentence boundaries and a default
annotation view. Alternate views (most importantly the manually annotated gold
view used for training) are selected by name. Everything here is produced by
upstream annotators; the pipeline only reads mentions and appends relations.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Sequence, Union
from pathlib import Path

from ..exceptions import ViewResolutionError

ARGUMENT_ROLE = "Argument"
RELATED_TO_ROLE = "Related_to"
DEFAULT_VIEW_NAME = "_InitialView"


@dataclass(frozen=True, order=True)
class Span:
    """Half-open character range ``[begin, end)``."""

    begin: int
    end: int

    def __post_init__(self):
        if self.begin < 0 or self.end < self.begin:
            raise ValueError(f"Invalid span [{self.begin}, {self.end})")

    def covers(self, other: "Span") -> bool:
        return self.begin <= other.begin and other.end <= self.end


@dataclass(frozen=True)
class ArgumentMention:
    """An entity mention that can fill either slot of a candidate relation."""

    span: Span
    text: str = ""
    entity_type: Optional[str] = None
    mention_id: Optional[str] = None

    @property
    def begin(self) -> int:
        return self.span.begin

    @property
    def end(self) -> int:
        return self.span.end


@dataclass(frozen=True)
class RelationArgument:
    argument: ArgumentMention
    role: Optional[str] = ARGUMENT_ROLE


@dataclass(frozen=True)
class RelationRecord:
    """A directional relation between two mentions.

    ``arg1``/``arg2`` are positional; which of them is the *first* argument is
    decided by the roles. An ``arg1`` whose role is ``"Argument"`` (or unset)
    is first, otherwise the arguments are read in swapped order.
    """

    arg1: RelationArgument
    arg2: RelationArgument
    category: str

    @classmethod
    def create(cls, first: ArgumentMention, second: ArgumentMention, category: str) -> "RelationRecord":
        return cls(
            RelationArgument(first, ARGUMENT_ROLE),
            RelationArgument(second, RELATED_TO_ROLE),
            category,
        )

    @property
    def first(self) -> ArgumentMention:
        if self.arg1.role is None or self.arg1.role == ARGUMENT_ROLE:
            return self.arg1.argument
        return self.arg2.argument

    @property
    def second(self) -> ArgumentMention:
        if self.arg1.role is None or self.arg1.role == ARGUMENT_ROLE:
            return self.arg2.argument
        return self.arg1.argument


@dataclass
class DocumentView:
    """A named annotation layer: mentions plus an append-only relation store."""

    name: str
    mentions: List[ArgumentMention] = field(default_factory=list)
    relations: List[RelationRecord] = field(default_factory=list)

    def select_covered(self, span: Span) -> List[ArgumentMention]:
        """Return mentions inside ``span`` in annotation-index order.

        Mentions are ordered by begin offset, longer mentions first on ties.
        """
        covered = [mention for mention in self.mentions if span.covers(mention.span)]
        return sorted(covered, key=lambda mention: (mention.begin, -mention.end))

    def add_relation(self, relation: RelationRecord) -> None:
        self.relations.append(relation)


@dataclass
class Document:
    text: str
    sentences: List[Span] = field(default_factory=list)
    default_view: DocumentView = field(default_factory=lambda: DocumentView(DEFAULT_VIEW_NAME))
    views: Dict[str, DocumentView] = field(default_factory=dict)
    doc_id: Optional[str] = None

    def covered_text(self, item: Union[Span, ArgumentMention]) -> str:
        span = item.span if isinstance(item, ArgumentMention) else item
        return self.text[span.begin : span.end]

    def get_view(self, name: Optional[str]) -> DocumentView:
        """Look up a view by name; ``None`` or the default name gives the default view.

        Raises:
            ViewResolutionError: If no view with that name exists.
        """
        if name is None or name == self.default_view.name:
            return self.default_view
        try:
            return self.views[name]
        except KeyError:
            available = ", ".join(sorted(self.views)) or "none"
            raise ViewResolutionError(f"View '{name}' not found in document (available: {available})") from None

    @property
    def mentions(self) -> List[ArgumentMention]:
        return self.default_view.mentions

    @property
    def relations(self) -> List[RelationRecord]:
        return self.default_view.relations

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Document":
        """Build a document from its JSON form.

        Expected keys: ``text``, ``sentences`` (list of ``[begin, end]``),
        ``entities`` and ``relations`` for the default view, and ``views``
        mapping a view name to its own ``entities``/``relations``. Entities are
        ``{"begin", "end", "type", "id"}``; relations refer to entities by index
        or id through ``arg1``/``arg2`` and may carry ``arg1_role``.
        """
        text = data["text"]
        sentences = [Span(int(b), int(e)) for b, e in data.get("sentences", [])]
        if not sentences and text:
            sentences = [Span(0, len(text))]

        default_view = _view_from_dict(DEFAULT_VIEW_NAME, data, text)
        views = {name: _view_from_dict(name, view_data, text) for name, view_data in data.get("views", {}).items()}
        return cls(
            text=text,
            sentences=sentences,
            default_view=default_view,
            views=views,
            doc_id=data.get("id"),
        )


def _view_from_dict(name: str, data: Dict[str, Any], text: str) -> DocumentView:
    mentions = []
    by_id = {}
    for i, ent in enumerate(data.get("entities", [])):
        span = Span(int(ent["begin"]), int(ent["end"]))
        mention = ArgumentMention(
            span=span,
            text=text[span.begin : span.end],
            entity_type=ent.get("type"),
            mention_id=ent.get("id"),
        )
        mentions.append(mention)
        by_id[i] = mention
        if mention.mention_id is not None:
            by_id[mention.mention_id] = mention

    relations = []
    for rel in data.get("relations", []):
        try:
            arg1 = by_id[rel["arg1"]]
            arg2 = by_id[rel["arg2"]]
        except KeyError as e:
            raise ValueError(f"Relation {rel} in view '{name}' refers to unknown entity {e}") from None
        arg1_role = rel.get("arg1_role", ARGUMENT_ROLE)
        arg2_role = RELATED_TO_ROLE if arg1_role in (None, ARGUMENT_ROLE) else ARGUMENT_ROLE
        relations.append(
            RelationRecord(
                RelationArgument(arg1, arg1_role),
                RelationArgument(arg2, rel.get("arg2_role", arg2_role)),
                rel["category"],
            )
        )
    return DocumentView(name=name, mentions=mentions, relations=relations)


def iter_documents(path: Union[str, Path]) -> Iterator[Document]:
    """Stream documents from a ``.json`` list or a ``.jsonl`` file."""
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        if path.suffix == ".jsonl":
            for line in f:
                line = line.strip()
                if line:
                    yield Document.from_dict(json.loads(line))
        else:
            for item in json.load(f):
                yield Document.from_dict(item)


def load_documents(path: Union[str, Path]) -> List[Document]:
    return list(iter_documents(path))


def relations_to_dicts(relations: Sequence[RelationRecord]) -> List[Dict[str, Any]]:
    """Serialize relation records with their arguments resolved to first/second."""
    return [
        {
            "arg1": [rel.first.begin, rel.first.end],
            "arg2": [rel.second.begin, rel.second.end],
            "arg1_text": rel.first.text,
            "arg2_text": rel.second.text,
            "category": rel.category,
        }
        for rel in relations
    ]
