"""
UESMANN - Output Blending Network
=================================
Two plain back-propagation networks with the same layout: one trained on
the h=0 examples and one on the h=1 examples. The output is the two
networks' outputs interpolated by h. Only two modulator levels, 0 and 1,
are meaningful.
"""

from typing import Optional, Sequence

import numpy as np

from .base import Net
from .bpnet import BPNet
from ..config import NetType
from ..errors import UnsupportedOperationError


class OutputBlendingNet(Net):
    """
    Output blending network.

    Args:
        layers: node count of each layer of both sub-networks
    """

    net_type = NetType.OUTPUTBLENDING

    def __init__(self, layers: Sequence[int]):
        super().__init__()
        self.net0 = BPNet(layers)  # trained by h<0.5 examples
        self.net1 = BPNet(layers)  # trained by h>=0.5 examples
        self.modulator = 0.0
        self.interpolated_outputs = np.zeros(self.net0.output_count)
        self.last_error: Optional[float] = None

    def set_h(self, h: float):
        self.modulator = float(h)

    def get_h(self) -> float:
        return self.modulator

    def get_layer_size(self, n: int) -> int:
        return self.net0.get_layer_size(n)

    def get_layer_count(self) -> int:
        return self.net0.get_layer_count()

    def set_inputs(self, inputs: np.ndarray):
        self.net0.set_inputs(inputs)
        self.net1.set_inputs(inputs)

    def get_outputs(self) -> np.ndarray:
        return self.interpolated_outputs

    def update(self):
        self.net0.update()
        self.net1.update()
        h = self.modulator
        self.interpolated_outputs[:] = h * self.net1.get_outputs() + (1.0 - h) * self.net0.get_outputs()

    def init_weights(self, init_range: float = -1.0, rng: Optional[np.random.Generator] = None):
        rng = rng if rng is not None else self.rng
        self.net0.init_weights(init_range, rng)
        self.net1.init_weights(init_range, rng)
        self.last_error = None

    def get_data_size(self) -> int:
        return self.net0.get_data_size() * 2

    def save(self) -> np.ndarray:
        return np.concatenate((self.net0.save(), self.net1.save()))

    def load(self, data: np.ndarray):
        data = np.asarray(data, dtype=np.float64)
        half = self.net0.get_data_size()
        self.net0.load(data[:half])
        self.net1.load(data[half:])

    def train_batch(self, examples, start: int, num: int, eta: float) -> float:
        """
        Train the sub-network matching the single example's modulator.

        The error returned changes once per h=0/h=1 pair: the first call
        returns its own error, an h=1 call returns the mean of its error
        and the previous value, and an h=0 call repeats the previous value.
        """
        if num != 1:
            raise UnsupportedOperationError(
                f"Output blending networks only train one example at a time (got {num})"
            )

        hzero = examples.get_h(start) < 0.5
        net = self.net0 if hzero else self.net1
        e = net.train_batch(examples, start, 1, eta)

        if self.last_error is None:
            self.last_error = e
            return e
        if hzero:
            return self.last_error
        self.last_error = (e + self.last_error) * 0.5
        return self.last_error
