"""
UESMANN - Example Sets
======================
Storage for training examples. Each example is an input vector, a target
output vector and a modulator (h) value, held contiguously in a single
float64 buffer:

    inputs (n_in) | outputs (n_out) | h (1)

Examples are reached through an array of offsets into that buffer. Shuffling
permutes the offsets, never the buffer, so a subset view can share the
buffer of its parent while keeping its own independently shuffleable order.
"""

import math
from typing import Callable, List, MutableSequence, Optional, TypeVar

import numpy as np

from ..config import ShuffleMode
from ..errors import ConfigurationError
from ..utils import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


def alternate(items: MutableSequence[T], cycle: int, level_of: Callable[[T], int]) -> None:
    """
    Rearrange items in place so that level_of(items[i]) % cycle == i % cycle.

    For each position whose item has the wrong level, scan forward for the
    first later item with the right level and swap it in. If no such item
    exists the rest of the sequence is left as it is, so the pattern only
    holds throughout when every level is equally represented.
    """
    n = len(items)
    for i in range(n):
        wanted = i % cycle
        if level_of(items[i]) % cycle == wanted:
            continue
        for j in range(i + 1, n):
            if level_of(items[j]) % cycle == wanted:
                items[i], items[j] = items[j], items[i]
                break
        else:
            return


class ExampleSet:
    """
    A set of examples, each with inputs, outputs and a modulator.

    Args:
        count: number of examples
        n_inputs: size of each input vector
        n_outputs: size of each output vector
        n_h_levels: number of discrete modulator levels the data is
            organised around (1 means no structure is assumed)
    """

    def __init__(self, count: int, n_inputs: int, n_outputs: int, n_h_levels: int = 1):
        if count < 1 or n_inputs < 1 or n_outputs < 1:
            raise ConfigurationError(
                f"Bad example set shape: {count} examples of ({n_inputs},{n_outputs})"
            )
        if n_h_levels < 1:
            raise ConfigurationError(f"Number of h-levels must be positive, got {n_h_levels}")

        self.n_inputs = n_inputs
        self.n_outputs = n_outputs
        self.n_h_levels = n_h_levels
        self.min_h = 0.0
        self.max_h = 1.0

        logger.debug(f"Allocating new set {count}*({n_inputs},{n_outputs})")

        self.example_size = n_inputs + n_outputs + 1
        self.data = np.zeros(self.example_size * count, dtype=np.float64)
        self.offsets = np.arange(count, dtype=np.int64) * self.example_size
        self.owns_data = True
        self.parent: Optional["ExampleSet"] = None

    @classmethod
    def subset(cls, parent: "ExampleSet", start: int, length: int) -> "ExampleSet":
        """
        Create a view of `length` examples of a parent, starting at `start`.

        The view shares the parent's data buffer but copies the parent's
        current ordering, so it can be shuffled without disturbing the parent.
        """
        if start < 0 or length < 1 or start + length > parent.count:
            raise ConfigurationError(
                f"Subset [{start}, {start + length}) out of range for set of {parent.count}"
            )
        view = cls.__new__(cls)
        view.n_inputs = parent.n_inputs
        view.n_outputs = parent.n_outputs
        view.n_h_levels = parent.n_h_levels
        view.min_h = parent.min_h
        view.max_h = parent.max_h
        view.example_size = parent.example_size
        view.data = parent.data
        view.offsets = parent.offsets[start:start + length].copy()
        view.owns_data = False
        view.parent = parent
        return view

    @classmethod
    def from_arrays(
        cls,
        inputs,
        outputs,
        h=None,
        n_h_levels: int = 1
    ) -> "ExampleSet":
        """
        Build a set from per-example rows.

        Args:
            inputs: (count, n_inputs) array-like
            outputs: (count, n_outputs) array-like
            h: optional sequence of modulators (default all zero)
            n_h_levels: number of modulator levels
        """
        inputs = np.atleast_2d(np.asarray(inputs, dtype=np.float64))
        outputs = np.atleast_2d(np.asarray(outputs, dtype=np.float64))
        if inputs.shape[0] != outputs.shape[0]:
            raise ConfigurationError(
                f"Input and output counts differ: {inputs.shape[0]} != {outputs.shape[0]}"
            )
        count = inputs.shape[0]
        examples = cls(count, inputs.shape[1], outputs.shape[1], n_h_levels)
        rows = examples.data.reshape(count, examples.example_size)
        rows[:, :examples.n_inputs] = inputs
        rows[:, examples.n_inputs:-1] = outputs
        if h is not None:
            rows[:, -1] = np.asarray(h, dtype=np.float64)
        return examples

    @classmethod
    def from_mnist(cls, mnist) -> "ExampleSet":
        """
        Convert loaded MNIST-format data into an example set. Pixels are
        scaled to [0,1] and labels become one-hot vectors of max_label+1.
        """
        n_pixels = mnist.rows * mnist.cols
        n_outputs = int(mnist.max_label) + 1
        examples = cls(mnist.count, n_pixels, n_outputs, 1)
        rows = examples.data.reshape(mnist.count, examples.example_size)
        rows[:, :n_pixels] = mnist.images.reshape(mnist.count, n_pixels) / 255.0
        rows[np.arange(mnist.count), n_pixels + mnist.labels.astype(np.int64)] = 1.0
        return examples

    # === Sizes ===

    @property
    def count(self) -> int:
        return len(self.offsets)

    def __len__(self) -> int:
        return self.count

    @property
    def input_count(self) -> int:
        return self.n_inputs

    @property
    def output_count(self) -> int:
        return self.n_outputs

    # === Accessors ===

    def _offset(self, example: int) -> int:
        if not 0 <= example < self.count:
            raise IndexError(f"Example {example} out of range (count={self.count})")
        return int(self.offsets[example])

    def get_inputs(self, example: int) -> np.ndarray:
        """Writeable view of an example's inputs."""
        o = self._offset(example)
        return self.data[o:o + self.n_inputs]

    def get_outputs(self, example: int) -> np.ndarray:
        """Writeable view of an example's target outputs."""
        o = self._offset(example) + self.n_inputs
        return self.data[o:o + self.n_outputs]

    def get_h(self, example: int) -> float:
        return float(self.data[self._offset(example) + self.n_inputs + self.n_outputs])

    def set_h(self, example: int, h: float):
        self.data[self._offset(example) + self.n_inputs + self.n_outputs] = h

    # === Modulator levels ===

    def set_h_range(self, min_h: float, max_h: float):
        """Set the modulator domain used to map h onto a level."""
        if max_h < min_h:
            raise ConfigurationError(f"Bad h range [{min_h}, {max_h}]")
        self.min_h = min_h
        self.max_h = max_h

    def compute_h_range(self):
        """Set the modulator domain from the values actually stored."""
        hs = self.data[self.offsets + self.n_inputs + self.n_outputs]
        self.set_h_range(float(hs.min()), float(hs.max()))

    def _level_of_offset(self, offset: int) -> int:
        if self.n_h_levels == 1 or self.max_h == self.min_h:
            return 0
        h = self.data[offset + self.n_inputs + self.n_outputs]
        return int(math.floor(((h - self.min_h) / (self.max_h - self.min_h)) * (self.n_h_levels - 1)))

    def get_h_level(self, example: int) -> int:
        """Index of the modulator level (bucket) of an example."""
        return self._level_of_offset(self._offset(example))

    # === Shuffling ===

    def shuffle(self, rng: np.random.Generator, mode: ShuffleMode = ShuffleMode.NONE, n: Optional[int] = None):
        """
        Fisher-Yates shuffle of the first n examples (default all).

        Args:
            rng: random generator owned by the caller (usually the network)
            mode: NONE for a plain shuffle; STRIDE to shuffle whole blocks of
                n_h_levels examples, keeping each block's internal order;
                ALTERNATE to shuffle and then make the h-levels cycle
                0,1,...,n_h_levels-1 along the set
            n: number of leading examples to shuffle
        """
        if n is None:
            n = self.count
        if not 0 <= n <= self.count:
            raise ConfigurationError(f"Cannot shuffle {n} of {self.count} examples")

        if mode == ShuffleMode.STRIDE:
            self._shuffle_blocks(rng, n, self.n_h_levels)
        else:
            self._shuffle_blocks(rng, n, 1)
            if mode == ShuffleMode.ALTERNATE and self.n_h_levels > 1:
                head: List[int] = self.offsets[:n].tolist()
                alternate(head, self.n_h_levels, self._level_of_offset)
                self.offsets[:n] = head

    def _shuffle_blocks(self, rng: np.random.Generator, n: int, stride: int):
        # whole blocks only; a partial trailing block stays where it is
        blocks = n // stride
        for i in range(blocks - 1, 0, -1):
            j = int(rng.integers(0, i + 1))
            if i == j:
                continue
            a = slice(i * stride, (i + 1) * stride)
            b = slice(j * stride, (j + 1) * stride)
            tmp = self.offsets[a].copy()
            self.offsets[a] = self.offsets[b]
            self.offsets[b] = tmp
