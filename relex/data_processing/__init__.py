from .document import (
    ARGUMENT_ROLE,
    RELATED_TO_ROLE,
    Span,
    ArgumentMention,
    RelationArgument,
    RelationRecord,
    DocumentView,
    Document,
    iter_documents,
    load_documents,
)
from .index import SpanKey, RelationIndex, DuplicateRelationWarning
from .labels import RelationLabel, NO_RELATION
from .candidates import CandidatePairGenerator
from .sampling import NegativeSampler
from .tokenizer import WordsSplitter
from .dataset import RelationExampleDataset, RelationDataCollator, feature_to_bucket, make_label_mapping
