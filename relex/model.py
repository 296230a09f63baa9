import json
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Union
from pathlib import Path

import torch
from torch import nn
from safetensors.torch import load_file, save_file
from transformers.utils import ModelOutput

from .config import NO_RELATION_CATEGORY, RelationExtractorConfig
from .features.base import Feature
from .data_processing.dataset import RelationDataCollator, feature_to_bucket, make_label_mapping

logger = logging.getLogger(__name__)

CONFIG_NAME = "relex_config.json"
WEIGHTS_NAME = "pytorch_model.bin"
SAFE_WEIGHTS_NAME = "model.safetensors"


@dataclass
class RelationClassifierOutput(ModelOutput):
    """Output of :class:`RelationClassifier`.

    Attributes:
        loss (Optional[torch.FloatTensor]): Mean cross-entropy when labels are given.
        logits (Optional[torch.FloatTensor]): Label scores. Shape: [batch_size, num_labels].
    """

    loss: Optional[torch.FloatTensor] = None
    logits: Optional[torch.FloatTensor] = None


class RelationClassifier(nn.Module):
    """Linear classifier over hashed ``name=value`` features.

    Each feature is hashed into ``config.num_buckets`` buckets and every bucket
    holds one weight per label, so a forward pass is a sparse sum followed by a
    bias. Labels are the wire strings produced by ``RelationLabel.encode`` and
    are kept in ``config.label_vocab`` so a saved model can be restored
    without the training data.
    """

    def __init__(self, config: RelationExtractorConfig):
        super().__init__()
        self.config = config
        self.label2id, self.id2label = make_label_mapping(config.label_vocab or [NO_RELATION_CATEGORY])
        num_labels = len(self.label2id)

        self.weights = nn.EmbeddingBag(config.num_buckets, num_labels, mode="sum")
        self.bias = nn.Parameter(torch.zeros(num_labels))
        nn.init.zeros_(self.weights.weight)

    @property
    def num_labels(self) -> int:
        return len(self.label2id)

    @property
    def device(self) -> torch.device:
        return self.bias.device

    def forward(
        self,
        input_ids: torch.LongTensor,
        offsets: torch.LongTensor,
        labels: Optional[torch.LongTensor] = None,
    ) -> RelationClassifierOutput:
        logits = self.weights(input_ids, offsets) + self.bias
        loss = None
        if labels is not None:
            loss = nn.functional.cross_entropy(logits, labels)
        return RelationClassifierOutput(loss=loss, logits=logits)

    def _encode(self, batch_features: Sequence[Sequence[Feature]]) -> Dict[str, torch.Tensor]:
        items = [
            {"input_ids": [feature_to_bucket(feature, self.config.num_buckets) for feature in features]}
            for features in batch_features
        ]
        model_input = RelationDataCollator()(items)
        return {k: v.to(self.device) for k, v in model_input.items()}

    @torch.no_grad()
    def predict_proba(self, batch_features: Sequence[Sequence[Feature]]) -> torch.Tensor:
        """Label probabilities for a batch of feature lists. Shape: [batch_size, num_labels]."""
        self.eval()
        output = self(**self._encode(batch_features))
        return output.logits.softmax(dim=-1)

    def classify_batch(self, batch_features: Sequence[Sequence[Feature]]) -> List[str]:
        if not batch_features:
            return []
        predictions = self.predict_proba(batch_features).argmax(dim=-1).tolist()
        return [self.id2label[idx] for idx in predictions]

    def classify(self, features: Sequence[Feature]) -> str:
        """Predict the wire label (for example ``'treats-1'`` or ``'-NONE-'``) for one pair."""
        return self.classify_batch([features])[0]

    def save_pretrained(self, save_directory: Union[str, Path], safe_serialization: bool = False) -> None:
        """Save weights and configuration to a local directory.

        Args:
            save_directory: Path to directory for saving.
            safe_serialization: Whether to use safetensors format.
        """
        save_directory = Path(save_directory)
        save_directory.mkdir(parents=True, exist_ok=True)

        state_dict = {k: v.detach().cpu().contiguous() for k, v in self.state_dict().items()}
        if safe_serialization:
            save_file(state_dict, save_directory / SAFE_WEIGHTS_NAME)
        else:
            torch.save(state_dict, save_directory / WEIGHTS_NAME)

        self.config.to_json_file(save_directory / CONFIG_NAME)
        logger.info("Saved relation classifier with %d labels to %s", self.num_labels, save_directory)

    @classmethod
    def _load_config(cls, config_file: Path, **config_overrides) -> RelationExtractorConfig:
        with open(config_file) as f:
            config_dict = json.load(f)

        config_dict.pop("model_type", None)
        config_dict.pop("transformers_version", None)

        for key, value in config_overrides.items():
            if value is not None:
                config_dict[key] = value

        return RelationExtractorConfig(**config_dict)

    @classmethod
    def from_pretrained(
        cls, model_dir: Union[str, Path], map_location: str = "cpu", **config_overrides
    ) -> "RelationClassifier":
        """Load a classifier saved with :meth:`save_pretrained`.

        Args:
            model_dir: Directory holding the weights and ``relex_config.json``.
            map_location: Device to map tensors to.
            **config_overrides: Config parameters to override, for example
                ``print_errors=True`` for an error-analysis run.

        Raises:
            FileNotFoundError: If the directory has no config or no weights.
        """
        model_dir = Path(model_dir)
        config_file = model_dir / CONFIG_NAME
        if not config_file.exists():
            raise FileNotFoundError(f"No {CONFIG_NAME} found in {model_dir}")
        config = cls._load_config(config_file, **config_overrides)

        if (model_dir / SAFE_WEIGHTS_NAME).exists():
            state_dict = load_file(model_dir / SAFE_WEIGHTS_NAME, device=map_location)
        elif (model_dir / WEIGHTS_NAME).exists():
            state_dict = torch.load(model_dir / WEIGHTS_NAME, map_location=torch.device(map_location), weights_only=True)
        else:
            raise FileNotFoundError(f"No model weights found in {model_dir}")

        model = cls(config)
        model.load_state_dict(state_dict)
        model.to(map_location)
        model.eval()
        return model
