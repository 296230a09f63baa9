"""Error-analysis side channel for inference runs.

For every classified pair whose gold label is known, a human-readable record
can be written when the gold category is the one under study. Nothing here
feeds back into classification: failures to open or write the destination
are logged and the writer switches itself off.
"""

import sys
import logging
from typing import Optional, Sequence, TextIO, Union
from pathlib import Path

from .config import RelationExtractorConfig
from .exceptions import SinkIOError
from .features.base import Feature
from .data_processing.labels import RelationLabel

logger = logging.getLogger(__name__)


class DiagnosticCounter:
    """Monotonic id source for error-analysis records."""

    def __init__(self, start: int = 0):
        self.value = start

    def next(self) -> int:
        value = self.value
        self.value += 1
        return value


def open_error_stream(path: Optional[Union[str, Path]]) -> TextIO:
    """Open the diagnostics destination; ``None`` means stdout.

    Raises:
        SinkIOError: If the file cannot be opened for writing.
    """
    if path is None:
        return sys.stdout
    try:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        return open(path, "w", encoding="utf-8")
    except OSError as e:
        raise SinkIOError(f"Cannot open error output {path}: {e}") from e


class ErrorAnalysisWriter:
    """Writes one block per reported pair.

    Args:
        stream: Text stream to write to. Defaults to stdout.
        category: Gold category to report on; None reports all categories.
        errors_only: Only report pairs where the prediction differs from gold.
        counter: Shared id source; a fresh counter is created when omitted.
    """

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        category: Optional[str] = "location_of",
        errors_only: bool = True,
        counter: Optional[DiagnosticCounter] = None,
    ):
        self.stream = stream if stream is not None else sys.stdout
        self.category = category
        self.errors_only = errors_only
        self.counter = counter if counter is not None else DiagnosticCounter()
        self.enabled = True

    @classmethod
    def from_config(
        cls, config: RelationExtractorConfig, counter: Optional[DiagnosticCounter] = None
    ) -> Optional["ErrorAnalysisWriter"]:
        """Build a writer from ``print_errors``/``error_output``, or None if disabled or unusable."""
        if not config.print_errors:
            return None
        try:
            stream = open_error_stream(config.error_output)
        except SinkIOError as e:
            logger.error("Error analysis disabled: %s", e)
            return None
        return cls(stream, category=config.error_category, errors_only=config.errors_only, counter=counter)

    def should_report(self, predicted: RelationLabel, gold: RelationLabel) -> bool:
        if not self.enabled:
            return False
        if self.errors_only and predicted == gold:
            return False
        return self.category is None or gold.category == self.category

    def report(
        self,
        sentence_text: str,
        arg1_text: str,
        arg2_text: str,
        features: Sequence[Feature],
        predicted: RelationLabel,
        gold: RelationLabel,
    ) -> bool:
        """Write a record if the pair qualifies. Returns True when a record was written.

        Argument and sentence texts are the document text they cover. The
        instance id is only consumed once the record has been written.
        """
        if not self.should_report(predicted, gold):
            return False
        lines = [
            f"{'instance id:':<15}{self.counter.value}",
            f"{'prediction:':<15}{predicted.encode()}",
            f"{'gold label:':<15}{gold.encode()}",
            f"{'arg1:':<15}{arg1_text}",
            f"{'arg2:':<15}{arg2_text}",
            f"{'sentence:':<15}{sentence_text}",
            "",
            "[" + ", ".join(str(feature) for feature in features) + "]",
            "",
            "",
        ]
        try:
            self.stream.write("\n".join(lines) + "\n")
            self.stream.flush()
        except (OSError, ValueError) as e:
            # ValueError: write to a closed file
            logger.error("Error analysis disabled after write failure: %s", e)
            self.enabled = False
            return False
        self.counter.next()
        return True

    def close(self) -> None:
        if self.stream not in (sys.stdout, sys.stderr):
            try:
                self.stream.close()
            except OSError as e:
                logger.warning("Failed to close error output: %s", e)
