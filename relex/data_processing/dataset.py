import zlib
from typing import Any, Dict, List, Optional, Sequence, Tuple

import torch
from torch.utils.data import Dataset


def feature_to_bucket(feature, num_buckets: int) -> int:
    """Map a feature onto the hashed feature space.

    ``crc32`` is used instead of ``hash`` so that bucket ids are stable across
    interpreter runs (string hashing is salted per process).
    """
    return zlib.crc32(str(feature).encode("utf-8")) % num_buckets


def make_label_mapping(labels: Sequence[str]) -> Tuple[Dict[str, int], Dict[int, str]]:
    """Create bidirectional mappings between wire labels and class ids.

    Duplicates are removed while preserving first occurrence; ids start at 0.

    Example:
        >>> fwd, rev = make_label_mapping(["-NONE-", "treats", "treats-1", "treats"])
        >>> fwd
        {'-NONE-': 0, 'treats': 1, 'treats-1': 2}
    """
    uniq = list(dict.fromkeys(labels))
    fwd = {k: i for i, k in enumerate(uniq)}
    rev = {v: k for k, v in fwd.items()}
    return fwd, rev


class RelationExampleDataset(Dataset):
    """Torch view over training examples for the hashed-feature classifier.

    Args:
        examples: Training examples carrying ``features`` and a ``label``.
        label2id: Mapping from wire label to class id. Built from the examples
            when omitted.
        num_buckets: Size of the hashed feature space.
    """

    def __init__(self, examples: Sequence[Any], num_buckets: int, label2id: Optional[Dict[str, int]] = None):
        self._data = list(examples)
        self.num_buckets = num_buckets
        if label2id is None:
            label2id, _ = make_label_mapping([example.label.encode() for example in self._data])
        self.label2id = label2id

    def __len__(self):
        return len(self._data)

    def __getitem__(self, idx) -> Dict[str, Any]:
        example = self._data[idx]
        return {
            "input_ids": [feature_to_bucket(feature, self.num_buckets) for feature in example.features],
            "label": self.label2id[example.label.encode()],
        }


class RelationDataCollator:
    """Packs variable-length feature id lists into ``EmbeddingBag`` inputs."""

    def __call__(self, batch: List[Dict[str, Any]]) -> Dict[str, torch.Tensor]:
        lengths = [len(item["input_ids"]) for item in batch]
        offsets = torch.tensor([0] + lengths[:-1], dtype=torch.long).cumsum(dim=0)
        input_ids = torch.tensor([idx for item in batch for idx in item["input_ids"]], dtype=torch.long)
        model_input = {"input_ids": input_ids, "offsets": offsets}
        if "label" in batch[0]:
            model_input["labels"] = torch.tensor([item["label"] for item in batch], dtype=torch.long)
        return model_input
