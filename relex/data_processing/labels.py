from dataclasses import dataclass
from typing import Optional

from ..config import INVERTED_SUFFIX, NO_RELATION_CATEGORY


@dataclass(frozen=True)
class RelationLabel:
    """Tagged relation label.

    A label is one of three cases:

    - ``forward(category)``: the relation holds in the queried argument order.
    - ``inverted(category)``: the relation holds with the arguments swapped.
    - ``no_relation()``: there is no relation between the pair.

    The ``"R-1"`` suffix convention is only used at the boundary with data
    writers and classifiers, through :meth:`encode` and :meth:`decode`.

    Example:
        >>> RelationLabel.inverted("treats").encode()
        'treats-1'
        >>> RelationLabel.decode("treats-1")
        RelationLabel(category='treats', is_inverted=True)
    """

    category: Optional[str] = None
    is_inverted: bool = False

    def __post_init__(self):
        if self.category is None and self.is_inverted:
            raise ValueError("A missing relation cannot be inverted")
        if self.category == NO_RELATION_CATEGORY:
            raise ValueError(f"'{NO_RELATION_CATEGORY}' is reserved; use RelationLabel.no_relation()")
        if self.category is not None and self.category.endswith(INVERTED_SUFFIX):
            # would be indistinguishable from an inverted label on the wire
            raise ValueError(f"Relation category '{self.category}' must not end with '{INVERTED_SUFFIX}'")

    @classmethod
    def forward(cls, category: str) -> "RelationLabel":
        return cls(category, False)

    @classmethod
    def inverted(cls, category: str) -> "RelationLabel":
        return cls(category, True)

    @classmethod
    def no_relation(cls) -> "RelationLabel":
        return cls(None, False)

    @property
    def is_relation(self) -> bool:
        return self.category is not None

    def encode(self) -> str:
        if self.category is None:
            return NO_RELATION_CATEGORY
        if self.is_inverted:
            return self.category + INVERTED_SUFFIX
        return self.category

    @classmethod
    def decode(cls, value: str) -> "RelationLabel":
        if value == NO_RELATION_CATEGORY:
            return cls.no_relation()
        if value.endswith(INVERTED_SUFFIX) and len(value) > len(INVERTED_SUFFIX):
            return cls.inverted(value[: -len(INVERTED_SUFFIX)])
        return cls.forward(value)

    def __str__(self):
        return self.encode()


NO_RELATION = RelationLabel.no_relation()
