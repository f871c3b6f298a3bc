"""
UESMANN - Modulated Network
===========================
UESMANN: the same architecture as the plain back-propagation network,
but the weighted sum into every node (not the bias) is multiplied by
(h+1). Back-propagation accounts for this by scaling the hidden-layer
error terms and the weight updates by (h+1); bias updates are unmodulated.
At h=0 every step reduces exactly to plain back-propagation.
"""

from typing import Sequence

import numpy as np

from .base import sigmoid
from .bpnet import BPNet
from ..config import NetType


class UESNet(BPNet):
    """
    UESMANN network.

    Args:
        layers: node count of each layer, input layer first
    """

    net_type = NetType.UESMANN

    def __init__(self, layers: Sequence[int]):
        super().__init__(layers)
        self.modulator = 0.0

    def set_h(self, h: float):
        self.modulator = float(h)

    def get_h(self) -> float:
        return self.modulator

    def update(self):
        hfactor = self.modulator + 1.0
        for l in range(1, self.num_layers):
            v = self._w(l) @ self.outputs[l - 1]
            self.outputs[l][:] = sigmoid(v * hfactor + self.biases[l])

    def _hidden_error(self, layer: int, e: np.ndarray) -> np.ndarray:
        o = self.outputs[layer]
        return e * (self.modulator + 1.0) * o * (1 - o)

    def _apply_gradients(self, eta: float, factor: float):
        # modulator of the last example in the batch
        hfactor = self.modulator + 1.0
        for l in range(1, self.num_layers):
            n, m = self.layer_sizes[l], self.layer_sizes[l - 1]
            self.weights[l, :n, :m] -= eta * self.grad_weights[l, :n, :m] * factor * hfactor
            # biases are not modulated
            self.biases[l] -= eta * self.grad_biases[l] * factor
