import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, List, Sequence, Union

from ..exceptions import FeatureValidationError
from ..data_processing.document import ArgumentMention, Document
from ..data_processing.labels import RelationLabel


@dataclass(frozen=True)
class Feature:
    """A named feature value handed to the classifier."""

    name: str
    value: Any

    def is_defined(self) -> bool:
        if self.value is None:
            return False
        if isinstance(self.value, float) and math.isnan(self.value):
            return False
        return True

    def __str__(self):
        return f"{self.name}={self.value}"


@dataclass(frozen=True)
class TrainingExample:
    """Features of one candidate pair together with its label."""

    features: List[Feature]
    label: RelationLabel


class RelationFeaturesExtractor(ABC):
    """Computes features for an ordered pair of argument mentions.

    Extractors are called once per candidate pair, in the configured order,
    and their outputs are concatenated. Any callable with the signature of
    :meth:`extract` can be used in place of a subclass.
    """

    @abstractmethod
    def extract(self, document: Document, arg1: ArgumentMention, arg2: ArgumentMention) -> List[Feature]:
        pass

    def __call__(self, document: Document, arg1: ArgumentMention, arg2: ArgumentMention) -> List[Feature]:
        return self.extract(document, arg1, arg2)


FeatureExtractorLike = Union[RelationFeaturesExtractor, Callable[[Document, ArgumentMention, ArgumentMention], List[Feature]]]


def validate_features(features: Sequence[Feature]) -> None:
    """Raise if any feature is missing its value.

    Raises:
        FeatureValidationError: On the first feature whose value is None or NaN.
    """
    for feature in features:
        if not isinstance(feature, Feature) or not feature.is_defined():
            raise FeatureValidationError(f"Null value found in {feature} from {list(features)}")
