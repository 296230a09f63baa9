from typing import Optional, Union

from ..data_processing.labels import RelationLabel
from ..data_processing.document import ArgumentMention, RelationRecord


class RelationDecoder:
    """Turns a predicted label for a queried pair into a directional relation.

    An inverted prediction means the relation holds from ``arg2`` to ``arg1``,
    so the arguments are swapped before the record is built. The first
    argument always gets the ``"Argument"`` role and the second gets
    ``"Related_to"``.

    Example:
        >>> record = RelationDecoder().decode("treats-1", e2, e1)
        >>> (record.first, record.second, record.category) == (e1, e2, "treats")
        True
    """

    def decode(
        self,
        prediction: Union[str, RelationLabel],
        arg1: ArgumentMention,
        arg2: ArgumentMention,
    ) -> Optional[RelationRecord]:
        label = prediction if isinstance(prediction, RelationLabel) else RelationLabel.decode(prediction)
        if not label.is_relation:
            return None
        if label.is_inverted:
            arg1, arg2 = arg2, arg1
        return RelationRecord.create(arg1, arg2, label.category)
