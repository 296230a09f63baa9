from .base import (
    Feature,
    TrainingExample,
    RelationFeaturesExtractor,
    FeatureExtractorLike,
    validate_features,
)
from .token import TokenFeaturesExtractor
from .entity import NamedEntityFeaturesExtractor


def default_feature_extractors(words_splitter=None):
    """Extractors used when a pipeline is built without explicit ones."""
    return [TokenFeaturesExtractor(words_splitter), NamedEntityFeaturesExtractor()]


__all__ = [
    "Feature",
    "TrainingExample",
    "RelationFeaturesExtractor",
    "FeatureExtractorLike",
    "validate_features",
    "TokenFeaturesExtractor",
    "NamedEntityFeaturesExtractor",
    "default_feature_extractors",
]
