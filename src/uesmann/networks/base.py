"""
UESMANN - Base Network
======================
Abstract class defining the common interface for all network types.
"""

from abc import ABC, abstractmethod
from typing import Optional, TYPE_CHECKING

import numpy as np

from ..config import NetType

if TYPE_CHECKING:
    from ..config import SGDParams
    from ..data import ExampleSet


def sigmoid(x):
    """Logistic sigmoid, the activation function of every node."""
    with np.errstate(over="ignore"):
        return 1.0 / (1.0 + np.exp(-x))


class Net(ABC):
    """
    Base class for all network types (plain, UESMANN, output blending,
    h-as-input). Owns a random generator used for weight initialisation
    and for shuffling during training; reseed it through SGDParams.seed.
    """

    net_type: NetType = NetType.PLAIN

    def __init__(self):
        self.rng = np.random.default_rng()

    # === Modulator ===

    @abstractmethod
    def set_h(self, h: float):
        """Set the modulator used by subsequent runs."""
        pass

    @abstractmethod
    def get_h(self) -> float:
        pass

    # === Running ===

    @abstractmethod
    def set_inputs(self, inputs: np.ndarray):
        """Set the input layer, sized get_layer_size(0)."""
        pass

    @abstractmethod
    def get_outputs(self) -> np.ndarray:
        """Output layer values after update()."""
        pass

    @abstractmethod
    def update(self):
        """Run a single forward pass; the inputs must already be set."""
        pass

    def run(self, inputs) -> np.ndarray:
        """Run the network on some inputs and return the outputs."""
        self.set_inputs(np.asarray(inputs, dtype=np.float64))
        self.update()
        return self.get_outputs()

    # === Shape ===

    @abstractmethod
    def get_layer_size(self, n: int) -> int:
        pass

    @abstractmethod
    def get_layer_count(self) -> int:
        pass

    @property
    def input_count(self) -> int:
        return self.get_layer_size(0)

    @property
    def output_count(self) -> int:
        return self.get_layer_size(self.get_layer_count() - 1)

    # === Parameters ===

    @abstractmethod
    def init_weights(self, init_range: float = -1.0, rng: Optional[np.random.Generator] = None):
        """
        Set weights and biases to uniform random values in [-r, r].

        Args:
            init_range: r, or a value <= 0 for Bishop's rule
                (r = 1/sqrt(fan-in) for each layer)
            rng: generator to draw from (default: the net's own)
        """
        pass

    @abstractmethod
    def get_data_size(self) -> int:
        """Number of values produced by save()."""
        pass

    @abstractmethod
    def save(self) -> np.ndarray:
        """All parameters as a flat float64 array."""
        pass

    @abstractmethod
    def load(self, data: np.ndarray):
        """Set all parameters from an array produced by save()."""
        pass

    # === Training ===

    @abstractmethod
    def train_batch(self, examples: "ExampleSet", start: int, num: int, eta: float) -> float:
        """
        Train on num consecutive examples starting at start, applying the
        mean gradient once at the end.

        Returns:
            the sum over examples of the summed squared output errors,
            divided by num
        """
        pass

    def train_sgd(self, examples: "ExampleSet", params: "SGDParams") -> float:
        """Train by stochastic gradient descent; see SGDTrainer.train()."""
        from ..training import SGDTrainer
        return SGDTrainer(self, params).train(examples)

    def test(self, examples: "ExampleSet", start: int = 0, num: Optional[int] = None) -> float:
        """
        Mean squared error over a range of examples: the summed squared
        output differences divided by num * output count.
        """
        if num is None:
            num = examples.count - start
        total = 0.0
        for i in range(start, start + num):
            self.set_h(examples.get_h(i))
            diff = self.run(examples.get_inputs(i)) - examples.get_outputs(i)
            total += float(np.dot(diff, diff))
        return total / (num * self.output_count)
