from typing import Iterator, Sequence, Tuple, TypeVar

T = TypeVar("T")


class CandidatePairGenerator:
    """Enumerates candidate argument pairs inside one sentence.

    With ``both_directions=False`` every unordered pair is produced once, with
    the argument that occurs first in the sentence in the first slot. With
    ``both_directions=True`` each unordered pair is produced twice, once per
    order. Pairs are produced row by row: all partners of ``args[0]`` first,
    then those of ``args[1]``, and so on.
    """

    def __init__(self, both_directions: bool = False):
        self.both_directions = both_directions

    def generate(self, args: Sequence[T]) -> Iterator[Tuple[T, T]]:
        for i, arg1 in enumerate(args):
            start = 0 if self.both_directions else i + 1
            for j in range(start, len(args)):
                if i == j:
                    continue
                yield arg1, args[j]

    def count(self, num_args: int) -> int:
        """Number of pairs :meth:`generate` yields for ``num_args`` arguments."""
        pairs = num_args * (num_args - 1)
        return pairs if self.both_directions else pairs // 2

    def __call__(self, args: Sequence[T]) -> Iterator[Tuple[T, T]]:
        return self.generate(args)
