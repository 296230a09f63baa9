"""Training loop for the reference hashed-feature relation classifier."""

import logging
from typing import Optional, Sequence

import torch
from tqdm import tqdm
from torch.utils.data import DataLoader
from transformers import set_seed

from ..config import RelationExtractorConfig
from ..model import RelationClassifier
from ..features.base import TrainingExample
from ..data_processing.dataset import RelationDataCollator, RelationExampleDataset, make_label_mapping

logger = logging.getLogger(__name__)


def train_classifier(
    examples: Sequence[TrainingExample],
    config: RelationExtractorConfig,
    device: str = "cpu",
    show_progress: bool = False,
) -> RelationClassifier:
    """Fit a :class:`RelationClassifier` on collected training examples.

    The label vocabulary is taken from the examples in order of first
    occurrence and stored on ``config.label_vocab``.

    Args:
        examples: Examples emitted by a pipeline running in training mode.
        config: Configuration providing the optimizer settings and the seed.
        device: Device to train on.
        show_progress: Display a progress bar over epochs.

    Returns:
        The trained classifier, in eval mode.

    Raises:
        ValueError: If there are no examples to train on.
    """
    if not examples:
        raise ValueError("Cannot train a relation classifier without training examples")

    set_seed(config.seed)

    label2id, _ = make_label_mapping([example.label.encode() for example in examples])
    config.label_vocab = list(label2id)
    logger.info("Training on %d examples with labels %s", len(examples), config.label_vocab)

    model = RelationClassifier(config).to(device)
    dataset = RelationExampleDataset(examples, num_buckets=config.num_buckets, label2id=label2id)
    loader = DataLoader(
        dataset,
        batch_size=config.batch_size,
        shuffle=True,
        collate_fn=RelationDataCollator(),
        generator=torch.Generator().manual_seed(config.seed),
    )
    optimizer = torch.optim.AdamW(model.parameters(), lr=config.learning_rate, weight_decay=config.weight_decay)

    model.train()
    for epoch in tqdm(range(config.num_epochs), desc="Training", disable=not show_progress):
        total_loss = 0.0
        for batch in loader:
            batch = {k: v.to(device) for k, v in batch.items()}
            optimizer.zero_grad()
            output = model(**batch)
            output.loss.backward()
            optimizer.step()
            total_loss += output.loss.item() * batch["labels"].shape[0]
        logger.info("Epoch %d: loss %.4f", epoch + 1, total_loss / len(dataset))

    model.eval()
    return model
