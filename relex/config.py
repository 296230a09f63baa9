from typing import List, Optional

from transformers import AutoConfig, PretrainedConfig

from .exceptions import ConfigurationError

NO_RELATION_CATEGORY = "-NONE-"
INVERTED_SUFFIX = "-1"
DEFAULT_GOLD_VIEW_NAME = "GoldView"


class RelationExtractorConfig(PretrainedConfig):
    """Configuration for relation candidate extraction and the reference classifier.

    The first group of options governs the pipeline itself (directionality,
    negative sampling, diagnostics). The second group is only read by the
    hashed-feature classifier shipped in ``relex.model``.
    """

    model_type = "relex"

    def __init__(
        self,
        is_training: bool = False,
        gold_view_name: Optional[str] = None,
        classify_both_directions: bool = False,
        probability_of_keeping_a_negative_example: float = 1.0,
        print_errors: bool = False,
        error_output: Optional[str] = None,
        error_category: Optional[str] = "location_of",
        errors_only: bool = True,
        seed: int = 0,
        words_splitter_type: str = "whitespace",
        num_buckets: int = 2**18,
        learning_rate: float = 0.05,
        weight_decay: float = 0.0,
        num_epochs: int = 10,
        batch_size: int = 32,
        label_vocab: Optional[List[str]] = None,
        **kwargs,
    ):
        """Initialize RelationExtractorConfig.

        Args:
            is_training (bool, optional): Emit training examples instead of predictions.
                Defaults to False.
            gold_view_name (str, optional): View holding the manual annotations.
                Required during training. Defaults to None.
            classify_both_directions (bool, optional): Classify each pair {X, Y} once as
                X-to-Y and once as Y-to-X. When False each pair is seen once and a relation
                found in reverse order is labeled 'R-1'. Defaults to False.
            probability_of_keeping_a_negative_example (float, optional): Probability that a
                negative example is retained for training. Defaults to 1.0.
            print_errors (bool, optional): Write error-analysis records during inference.
                Defaults to False.
            error_output (str, optional): File for error-analysis records; stdout when None.
                Defaults to None.
            error_category (str, optional): Gold category whose errors are reported;
                None reports every category. Defaults to "location_of".
            errors_only (bool, optional): Only report pairs whose prediction differs from
                the gold label. Defaults to True.
            seed (int, optional): Seed for negative sampling and classifier training.
                Defaults to 0.
            words_splitter_type (str, optional): Word splitter used by the token features.
                Defaults to "whitespace".
            num_buckets (int, optional): Size of the hashed feature space. Defaults to 2**18.
            learning_rate (float, optional): Classifier learning rate. Defaults to 0.05.
            weight_decay (float, optional): Classifier weight decay. Defaults to 0.0.
            num_epochs (int, optional): Classifier training epochs. Defaults to 10.
            batch_size (int, optional): Classifier batch size. Defaults to 32.
            label_vocab (List[str], optional): Wire labels known to a trained classifier.
                Defaults to None.
            **kwargs: Additional keyword arguments passed to parent class.

        Raises:
            ConfigurationError: If the negative example probability is outside [0, 1].
        """
        super().__init__(**kwargs)

        self.is_training = is_training
        self.gold_view_name = gold_view_name
        self.classify_both_directions = classify_both_directions
        self.probability_of_keeping_a_negative_example = float(probability_of_keeping_a_negative_example)
        self.print_errors = print_errors
        self.error_output = error_output
        self.error_category = error_category
        self.errors_only = errors_only
        self.seed = seed
        self.words_splitter_type = words_splitter_type
        self.num_buckets = num_buckets
        self.learning_rate = learning_rate
        self.weight_decay = weight_decay
        self.num_epochs = num_epochs
        self.batch_size = batch_size
        self.label_vocab = list(label_vocab) if label_vocab else []

        if not 0.0 <= self.probability_of_keeping_a_negative_example <= 1.0:
            raise ConfigurationError(
                "probability_of_keeping_a_negative_example must be in [0, 1], "
                f"got {self.probability_of_keeping_a_negative_example}"
            )

    def validate_for_processing(self):
        """Check the options a pipeline needs before it sees any document.

        Raises:
            ConfigurationError: If training is requested without a gold view.
        """
        if self.is_training and not self.gold_view_name:
            raise ConfigurationError("gold_view_name must be defined during training")


AutoConfig.register("relex", RelationExtractorConfig)
