__version__ = "0.1.0"

from .config import RelationExtractorConfig, NO_RELATION_CATEGORY, INVERTED_SUFFIX
from .exceptions import (
    RelationExtractionError,
    ConfigurationError,
    FeatureValidationError,
    ViewResolutionError,
    SinkIOError,
)
from .data_processing import (
    Span,
    ArgumentMention,
    RelationArgument,
    RelationRecord,
    Document,
    DocumentView,
    SpanKey,
    RelationIndex,
    RelationLabel,
    CandidatePairGenerator,
    NegativeSampler,
)
from .features import Feature, TrainingExample
from .model import RelationClassifier
from .pipeline import RelationExtractionPipeline

__all__ = [
    "RelationExtractorConfig",
    "NO_RELATION_CATEGORY",
    "INVERTED_SUFFIX",
    "RelationExtractionError",
    "ConfigurationError",
    "FeatureValidationError",
    "ViewResolutionError",
    "SinkIOError",
    "Span",
    "ArgumentMention",
    "RelationArgument",
    "RelationRecord",
    "Document",
    "DocumentView",
    "SpanKey",
    "RelationIndex",
    "RelationLabel",
    "CandidatePairGenerator",
    "NegativeSampler",
    "Feature",
    "TrainingExample",
    "RelationClassifier",
    "RelationExtractionPipeline",
]
