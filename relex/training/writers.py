"""Sinks for training examples.

A data writer receives examples in candidate order. Any failure to write is
fatal for the run and propagates to the caller.
"""

import json
import logging
from abc import ABC, abstractmethod
from typing import List, Union
from pathlib import Path

from ..features.base import Feature, TrainingExample
from ..data_processing.labels import RelationLabel

logger = logging.getLogger(__name__)


class DataWriter(ABC):
    @abstractmethod
    def write(self, example: TrainingExample) -> None:
        pass

    def close(self) -> None:
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


class InMemoryDataWriter(DataWriter):
    """Keeps every written example in :attr:`examples`."""

    def __init__(self):
        self.examples: List[TrainingExample] = []

    def write(self, example: TrainingExample) -> None:
        self.examples.append(example)

    def __len__(self):
        return len(self.examples)


class JsonlDataWriter(DataWriter):
    """Writes one JSON object per example with the label in its wire form.

    Each line looks like
    ``{"label": "treats-1", "features": [["arg1_type", "DRUG"], ...]}``.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._file = open(self.path, "w", encoding="utf-8")
        self.num_written = 0

    def write(self, example: TrainingExample) -> None:
        record = {
            "label": example.label.encode(),
            "features": [[feature.name, feature.value] for feature in example.features],
        }
        self._file.write(json.dumps(record) + "\n")
        self.num_written += 1

    def close(self) -> None:
        if not self._file.closed:
            self._file.close()
            logger.info("Wrote %d training examples to %s", self.num_written, self.path)


def read_jsonl_examples(path: Union[str, Path]) -> List[TrainingExample]:
    """Load examples written by :class:`JsonlDataWriter`."""
    examples = []
    with open(path, encoding="utf-8") as f:
        for line in f:
            if not line.strip():
                continue
            record = json.loads(line)
            features = [Feature(name, value) for name, value in record["features"]]
            examples.append(TrainingExample(features, RelationLabel.decode(record["label"])))
    return examples
