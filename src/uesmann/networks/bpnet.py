"""
UESMANN - Back-Propagation Network
==================================
The plain logistic-sigmoid multilayer perceptron trained by
back-propagation (Rumelhart, Hinton and Williams). It is the substrate of
every other network type: UESMANN modifies its forward and backward
passes, h-as-input adds a hidden input unit, and output blending runs two
of them side by side.

Weights into layer l are held in a square block of
largest_layer_size x largest_layer_size indexed [l, to_node, from_node];
only the top-left layer_sizes[l] x layer_sizes[l-1] corner is used. Layer 0
has no incoming connections, so its weights and biases stay zero.
"""

from typing import List, Optional, Sequence

import numpy as np

from .base import Net, sigmoid
from ..config import NetType
from ..errors import ConfigurationError


class BPNet(Net):
    """
    Plain back-propagation network. Does not initialise the weights on
    construction, so that networks can be reinitialised; call
    init_weights() or load() before use.

    Args:
        layers: node count of each layer, input layer first
    """

    net_type = NetType.PLAIN

    def __init__(self, layers: Sequence[int]):
        super().__init__()
        layers = [int(n) for n in layers]
        if len(layers) < 2 or min(layers) < 1:
            raise ConfigurationError(f"Bad layer specification: {layers}")

        self.num_layers = len(layers)
        self.layer_sizes = layers
        self.largest_layer_size = max(layers)

        size = self.largest_layer_size
        self.weights = np.zeros((self.num_layers, size, size))
        self.grad_weights = np.zeros((self.num_layers, size, size))
        self.biases: List[np.ndarray] = [np.zeros(n) for n in layers]
        self.grad_biases: List[np.ndarray] = [np.zeros(n) for n in layers]

        # scratch state, recomputed on every pass
        self.outputs: List[np.ndarray] = [np.zeros(n) for n in layers]
        self.errors: List[np.ndarray] = [np.zeros(n) for n in layers]

    # === Modulator: ignored by the unmodulated network ===

    def set_h(self, h: float):
        pass

    def get_h(self) -> float:
        return 0.0

    # === Running ===

    def set_inputs(self, inputs: np.ndarray):
        n = self.layer_sizes[0]
        self.outputs[0][:] = inputs[:n]

    def _set_input(self, n: int, value: float):
        # used by HInputNet to write its hidden modulator input
        self.outputs[0][n] = value

    def get_outputs(self) -> np.ndarray:
        return self.outputs[-1]

    def get_layer_size(self, n: int) -> int:
        return self.layer_sizes[n]

    def get_layer_count(self) -> int:
        return self.num_layers

    def _w(self, layer: int) -> np.ndarray:
        """The used part of the weight block into a layer, [to, from]."""
        return self.weights[layer, :self.layer_sizes[layer], :self.layer_sizes[layer - 1]]

    def update(self):
        for l in range(1, self.num_layers):
            v = self.biases[l] + self._w(l) @ self.outputs[l - 1]
            self.outputs[l][:] = sigmoid(v)

    # === Parameters ===

    def init_weights(self, init_range: float = -1.0, rng: Optional[np.random.Generator] = None):
        rng = rng if rng is not None else self.rng
        size = self.largest_layer_size
        for l in range(1, self.num_layers):
            if init_range > 0:
                r = init_range
            else:
                r = 1.0 / np.sqrt(self.layer_sizes[l - 1])  # Bishop
            self.biases[l][:] = rng.uniform(-r, r, size=self.layer_sizes[l])
            self.weights[l] = rng.uniform(-r, r, size=(size, size))
        # the input layer has no incoming connections
        self.biases[0][:] = 0.0
        self.weights[0] = 0.0

    def get_data_size(self) -> int:
        # uses the true layer sizes, including any hidden input
        total = 0
        prev = 0
        for n in self.layer_sizes:
            total += n * (1 + prev)
            prev = n
        return total

    def save(self) -> np.ndarray:
        # layer by layer, node by node: bias then incoming weights
        blocks = [self.biases[0].copy()]
        for l in range(1, self.num_layers):
            blocks.append(np.column_stack((self.biases[l], self._w(l))).ravel())
        return np.concatenate(blocks)

    def load(self, data: np.ndarray):
        data = np.asarray(data, dtype=np.float64)
        if data.size != self.get_data_size():
            raise ConfigurationError(
                f"Parameter block has {data.size} values, network needs {self.get_data_size()}"
            )
        pos = self.layer_sizes[0]
        self.biases[0][:] = data[:pos]
        for l in range(1, self.num_layers):
            n, m = self.layer_sizes[l], self.layer_sizes[l - 1]
            block = data[pos:pos + n * (1 + m)].reshape(n, 1 + m)
            self.biases[l][:] = block[:, 0]
            self._w(l)[:] = block[:, 1:]
            pos += n * (1 + m)

    # === Training ===

    def calc_error(self, inputs: np.ndarray, targets: np.ndarray):
        """
        Run one example forwards and compute the error term of every node.

        Args:
            inputs: input vector
            targets: required outputs
        """
        self.set_inputs(inputs)
        self.update()

        o = self.outputs[-1]
        self.errors[-1][:] = o * (1 - o) * (o - targets)

        # hidden layers, from the output end back
        for l in range(self.num_layers - 2, 0, -1):
            e = self._w(l + 1).T @ self.errors[l + 1]
            self.errors[l][:] = self._hidden_error(l, e)

    def _hidden_error(self, layer: int, e: np.ndarray) -> np.ndarray:
        o = self.outputs[layer]
        return e * o * (1 - o)

    def _zero_gradients(self):
        self.grad_weights.fill(0.0)
        for g in self.grad_biases:
            g.fill(0.0)

    def _accumulate_gradients(self):
        for l in range(1, self.num_layers):
            n, m = self.layer_sizes[l], self.layer_sizes[l - 1]
            self.grad_weights[l, :n, :m] += np.outer(self.errors[l], self.outputs[l - 1])
            self.grad_biases[l] += self.errors[l]

    def _apply_gradients(self, eta: float, factor: float):
        for l in range(1, self.num_layers):
            n, m = self.layer_sizes[l], self.layer_sizes[l - 1]
            self.weights[l, :n, :m] -= eta * self.grad_weights[l, :n, :m] * factor
            self.biases[l] -= eta * self.grad_biases[l] * factor

    def train_batch(self, examples, start: int, num: int, eta: float) -> float:
        self._zero_gradients()

        total_error = 0.0
        for idx in range(start, start + num):
            self.set_h(examples.get_h(idx))
            targets = examples.get_outputs(idx)
            self.calc_error(examples.get_inputs(idx), targets)
            self._accumulate_gradients()

            diff = self.outputs[-1] - targets
            total_error += float(np.dot(diff, diff))

        factor = 1.0 / num
        self._apply_gradients(eta, factor)
        # sum over outputs of the mean squared error
        return total_error * factor
