from typing import List

from .base import Feature, RelationFeaturesExtractor
from ..data_processing.document import ArgumentMention, Document

UNKNOWN_TYPE = "UNKNOWN"


def relative_position(arg1: ArgumentMention, arg2: ArgumentMention) -> str:
    """Describe where ``arg2`` sits relative to ``arg1``."""
    if arg1.span == arg2.span:
        return "same"
    if arg1.span.covers(arg2.span):
        return "contains"
    if arg2.span.covers(arg1.span):
        return "inside"
    if arg1.end <= arg2.begin:
        return "precedes"
    if arg2.end <= arg1.begin:
        return "follows"
    return "overlaps"


class NamedEntityFeaturesExtractor(RelationFeaturesExtractor):
    """Entity type and layout features for an argument pair."""

    def extract(self, document: Document, arg1: ArgumentMention, arg2: ArgumentMention) -> List[Feature]:
        type1 = arg1.entity_type or UNKNOWN_TYPE
        type2 = arg2.entity_type or UNKNOWN_TYPE
        distance = max(arg2.begin - arg1.end, arg1.begin - arg2.end, 0)
        return [
            Feature("arg1_type", type1),
            Feature("arg2_type", type2),
            Feature("type_pair", f"{type1}_{type2}"),
            Feature("relative_position", relative_position(arg1, arg2)),
            Feature("char_distance", distance),
        ]
