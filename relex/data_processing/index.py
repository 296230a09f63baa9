import logging
import warnings
from dataclasses import dataclass
from typing import Dict, Iterable, Optional

from .document import ArgumentMention, RelationRecord, Span

logger = logging.getLogger(__name__)


class DuplicateRelationWarning(UserWarning):
    """Two gold relations share the same ordered argument pair."""

    pass


@dataclass(frozen=True)
class SpanKey:
    """Order-significant key over the spans of two relation arguments.

    ``SpanKey(0, 5, 10, 15) != SpanKey(10, 15, 0, 5)``: swapping the arguments
    gives a different key, which is what makes reverse-order lookups possible.
    """

    arg1_begin: int
    arg1_end: int
    arg2_begin: int
    arg2_end: int

    @classmethod
    def from_spans(cls, span1: Span, span2: Span) -> "SpanKey":
        return cls(span1.begin, span1.end, span2.begin, span2.end)

    @classmethod
    def from_arguments(cls, arg1: ArgumentMention, arg2: ArgumentMention) -> "SpanKey":
        return cls.from_spans(arg1.span, arg2.span)

    @classmethod
    def from_relation(cls, relation: RelationRecord) -> "SpanKey":
        return cls.from_arguments(relation.first, relation.second)

    def reversed(self) -> "SpanKey":
        return SpanKey(self.arg2_begin, self.arg2_end, self.arg1_begin, self.arg1_end)


class RelationIndex:
    """Lookup from ordered argument spans to the gold relation between them.

    Only one relation may occupy an ordered key. When a document has two
    relations over the same ordered pair the later one replaces the earlier
    one and a :class:`DuplicateRelationWarning` is emitted.
    """

    def __init__(self, relations: Optional[Dict[SpanKey, RelationRecord]] = None):
        self._relations: Dict[SpanKey, RelationRecord] = dict(relations or {})

    @classmethod
    def build(cls, records: Iterable[RelationRecord]) -> "RelationIndex":
        relations: Dict[SpanKey, RelationRecord] = {}
        for record in records:
            key = SpanKey.from_relation(record)
            previous = relations.get(key)
            if previous is not None:
                msg = (
                    f"Relation '{record.category}' overwrites '{previous.category}' "
                    f"for the same ordered argument pair {key}"
                )
                logger.warning(msg)
                warnings.warn(msg, DuplicateRelationWarning, stacklevel=2)
            relations[key] = record
        return cls(relations)

    def lookup(self, arg1: ArgumentMention, arg2: ArgumentMention) -> Optional[RelationRecord]:
        """Return the relation whose first argument is ``arg1`` and second is ``arg2``."""
        return self._relations.get(SpanKey.from_arguments(arg1, arg2))

    def lookup_category(self, arg1: ArgumentMention, arg2: ArgumentMention) -> Optional[str]:
        relation = self.lookup(arg1, arg2)
        return relation.category if relation is not None else None

    def __contains__(self, key: SpanKey) -> bool:
        return key in self._relations

    def __len__(self):
        return len(self._relations)
