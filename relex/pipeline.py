"""Relation candidate extraction pipeline.

For every sentence of a document the pipeline enumerates candidate argument
pairs, extracts their features, and then either

* (training) labels the pair against the gold relations and hands a
  :class:`~relex.features.base.TrainingExample` to a data writer, or
* (inference) asks a classifier for a label and appends the resulting
  directional :class:`~relex.data_processing.document.RelationRecord` to the
  document.

Sentences and pairs are visited strictly in order: the negative sampler and
the diagnostics counter are shared, order-sensitive state.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from tqdm import tqdm

from .config import DEFAULT_GOLD_VIEW_NAME, RelationExtractorConfig
from .exceptions import ConfigurationError, ViewResolutionError
from .features import Feature, FeatureExtractorLike, TrainingExample, default_feature_extractors, validate_features
from .decoding import RelationDecoder
from .diagnostics import DiagnosticCounter, ErrorAnalysisWriter
from .training.writers import DataWriter
from .data_processing import (
    ArgumentMention,
    CandidatePairGenerator,
    Document,
    DocumentView,
    NegativeSampler,
    RelationIndex,
    RelationLabel,
    RelationRecord,
    Span,
    WordsSplitter,
)

logger = logging.getLogger(__name__)


@dataclass
class CandidatePair:
    sentence: Span
    arg1: ArgumentMention
    arg2: ArgumentMention


class RelationExtractionPipeline:
    """Generates training examples or relation predictions for documents.

    Args:
        config: Pipeline configuration. ``config.is_training`` selects the mode.
        feature_extractors: Callables ``(document, arg1, arg2) -> List[Feature]``
            applied in order. Defaults to token and entity features.
        data_writer: Sink for training examples; required when training.
        classifier: Object with ``classify(features) -> str``; required for inference.
        sampler: Negative example sampler. Defaults to one seeded with ``config.seed``.
        counter: Id source for diagnostics records.
        error_writer: Diagnostics writer. Built from the config when omitted.

    Raises:
        ConfigurationError: If training is requested without a gold view, or
            the collaborator required by the selected mode is missing.
    """

    def __init__(
        self,
        config: RelationExtractorConfig,
        feature_extractors: Optional[Sequence[FeatureExtractorLike]] = None,
        data_writer: Optional[DataWriter] = None,
        classifier=None,
        sampler: Optional[NegativeSampler] = None,
        counter: Optional[DiagnosticCounter] = None,
        error_writer: Optional[ErrorAnalysisWriter] = None,
    ):
        config.validate_for_processing()
        if config.is_training and data_writer is None:
            raise ConfigurationError("A data writer is required during training")
        if not config.is_training and classifier is None:
            raise ConfigurationError("A classifier is required during inference")

        self.config = config
        if feature_extractors is None:
            feature_extractors = default_feature_extractors(WordsSplitter(config.words_splitter_type))
        self.feature_extractors = list(feature_extractors)
        self.data_writer = data_writer
        self.classifier = classifier
        self.sampler = sampler if sampler is not None else NegativeSampler(config.seed)
        self.counter = counter if counter is not None else DiagnosticCounter()
        self.pair_generator = CandidatePairGenerator(config.classify_both_directions)
        self.decoder = RelationDecoder()

        if error_writer is None and not config.is_training:
            error_writer = ErrorAnalysisWriter.from_config(config, counter=self.counter)
        self.error_writer = error_writer

    @property
    def is_training(self) -> bool:
        return self.config.is_training

    def iter_candidates(self, document: Document, view: DocumentView) -> Iterator[CandidatePair]:
        """Yield candidate pairs sentence by sentence, using the mentions of ``view``."""
        for sentence in document.sentences:
            args = view.select_covered(sentence)
            for arg1, arg2 in self.pair_generator.generate(args):
                yield CandidatePair(sentence, arg1, arg2)

    def extract_features(self, document: Document, arg1: ArgumentMention, arg2: ArgumentMention) -> List[Feature]:
        """Concatenate the output of every extractor and validate it.

        Raises:
            FeatureValidationError: If any feature value is undefined.
        """
        features = []
        for extractor in self.feature_extractors:
            features.extend(extractor(document, arg1, arg2))
        validate_features(features)
        return features

    def gold_label(self, index: RelationIndex, arg1: ArgumentMention, arg2: ArgumentMention) -> RelationLabel:
        """Label of the pair according to ``index``, without negative sampling.

        In both-directions mode only the queried order is consulted; the
        reverse order is its own candidate. Otherwise a relation found in the
        reverse order yields an inverted label.
        """
        category = index.lookup_category(arg1, arg2)
        if category is not None:
            return RelationLabel.forward(category)
        if not self.config.classify_both_directions:
            category = index.lookup_category(arg2, arg1)
            if category is not None:
                return RelationLabel.inverted(category)
        return RelationLabel.no_relation()

    def resolve_label(
        self, index: RelationIndex, arg1: ArgumentMention, arg2: ArgumentMention
    ) -> Optional[RelationLabel]:
        """Training label for the pair, or None when the negative is sampled away.

        A sampler draw is consumed only for pairs without a gold relation.
        """
        label = self.gold_label(index, arg1, arg2)
        if label.is_relation:
            return label
        if self.sampler.should_keep(self.config.probability_of_keeping_a_negative_example):
            return label
        return None

    def process(self, document: Document):
        """Run the pipeline over one document in the configured mode.

        Returns:
            The written training examples when training, otherwise the relation
            records added to the document.
        """
        if self.is_training:
            return self.process_training(document)
        return self.process_inference(document)

    def process_training(self, document: Document) -> List[TrainingExample]:
        gold_view = document.get_view(self.config.gold_view_name)
        index = RelationIndex.build(gold_view.relations)

        examples = []
        num_dropped = 0
        for pair in self.iter_candidates(document, gold_view):
            features = self.extract_features(document, pair.arg1, pair.arg2)
            label = self.resolve_label(index, pair.arg1, pair.arg2)
            if label is None:
                num_dropped += 1
                continue
            example = TrainingExample(features, label)
            self.data_writer.write(example)
            examples.append(example)

        logger.debug("Document %s: wrote %d examples, dropped %d negatives", document.doc_id, len(examples), num_dropped)
        return examples

    def _gold_index_for_diagnostics(self, document: Document) -> Optional[RelationIndex]:
        if self.error_writer is None:
            return None
        try:
            gold_view = document.get_view(self.config.gold_view_name or DEFAULT_GOLD_VIEW_NAME)
        except ViewResolutionError as e:
            # no gold labels to compare against; classification goes on unchanged
            logger.warning("Skipping error analysis for document %s: %s", document.doc_id, e)
            return None
        return RelationIndex.build(gold_view.relations)

    def process_inference(self, document: Document) -> List[RelationRecord]:
        view = document.default_view
        gold_index = self._gold_index_for_diagnostics(document)

        added = []
        for pair in self.iter_candidates(document, view):
            features = self.extract_features(document, pair.arg1, pair.arg2)
            predicted = RelationLabel.decode(self.classifier.classify(features))

            if gold_index is not None:
                self.error_writer.report(
                    document.covered_text(pair.sentence),
                    document.covered_text(pair.arg1),
                    document.covered_text(pair.arg2),
                    features,
                    predicted,
                    self.gold_label(gold_index, pair.arg1, pair.arg2),
                )

            relation = self.decoder.decode(predicted, pair.arg1, pair.arg2)
            if relation is not None:
                view.add_relation(relation)
                added.append(relation)

        logger.debug("Document %s: added %d relations", document.doc_id, len(added))
        return added

    def process_documents(self, documents: Iterable[Document], show_progress: bool = False) -> List[Tuple[Document, list]]:
        """Process documents one after another; a failing document aborts the run."""
        results = []
        for document in tqdm(documents, desc="Documents", disable=not show_progress):
            results.append((document, self.process(document)))
        return results

    def close(self) -> None:
        if self.error_writer is not None:
            self.error_writer.close()
        if self.data_writer is not None:
            self.data_writer.close()
