"""
UESMANN - h-as-input Network
============================
A plain back-propagation network with one extra input unit which carries
the modulator. The extra unit is hidden: get_layer_size(0) and the inputs
callers pass exclude it.
"""

from typing import Sequence

import numpy as np

from .bpnet import BPNet
from ..config import NetType
from ..errors import ConfigurationError


class HInputNet(BPNet):
    """
    h-as-input network.

    Args:
        layers: node count of each layer as seen by callers; the real input
            layer is one larger
    """

    net_type = NetType.HINPUT

    def __init__(self, layers: Sequence[int]):
        layers = [int(n) for n in layers]
        if not layers:
            raise ConfigurationError("Bad layer specification: []")
        super().__init__([layers[0] + 1] + layers[1:])
        self.modulator = 0.0

    def get_layer_size(self, n: int) -> int:
        size = self.layer_sizes[n]
        # hide the modulator input
        return size - 1 if n == 0 else size

    def set_h(self, h: float):
        self.modulator = float(h)

    def get_h(self) -> float:
        return self.modulator

    def set_inputs(self, inputs: np.ndarray):
        n = self.layer_sizes[0] - 1
        for i in range(n):
            self._set_input(i, inputs[i])
        self._set_input(n, self.modulator)
