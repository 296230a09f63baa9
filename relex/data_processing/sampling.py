import random
from typing import Optional


class NegativeSampler:
    """Seeded coin deciding whether a negative example is kept.

    Every call to :meth:`should_keep` consumes exactly one draw, so which
    negatives survive depends on the order in which candidates are offered.
    Two samplers with the same seed fed the same candidates in the same order
    keep the same examples.
    """

    def __init__(self, seed: int = 0, rng: Optional[random.Random] = None):
        self.seed = seed
        self.rng = rng if rng is not None else random.Random(seed)
        self.num_draws = 0

    def should_keep(self, probability: float) -> bool:
        if not 0.0 <= probability <= 1.0:
            raise ValueError(f"probability must be in [0, 1], got {probability}")
        draw = self.rng.random()
        self.num_draws += 1
        # random() is in [0, 1): p=1 always keeps, p=0 never does
        return draw < probability
