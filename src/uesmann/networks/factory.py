"""
UESMANN - Network Factory
=========================
Factory to instantiate networks by type, and to save and load them.

Saved file layout, all in native byte order:
    int32 type tag | int32 layer count | int32 layer sizes... | float64 params...
The parameters are get_data_size() values in the order of Net.save().
Files are not portable between machines of different endianness.
"""

from pathlib import Path
from typing import Dict, Sequence, Type, Union

import numpy as np

from .base import Net
from .bpnet import BPNet
from .hinet import HInputNet
from .obnet import OutputBlendingNet
from .uesnet import UESNet
from ..config import NetType
from ..errors import ConfigurationError, LoadError
from ..utils import get_logger

logger = get_logger(__name__)

PathLike = Union[str, Path]

_HEADER_DTYPE = np.dtype("=i4")
_DATA_DTYPE = np.dtype("=f8")


class NetFactory:
    """
    Static factory to create, save and load networks.
    """

    registry: Dict[NetType, Type[Net]] = {
        NetType.PLAIN: BPNet,
        NetType.OUTPUTBLENDING: OutputBlendingNet,
        NetType.HINPUT: HInputNet,
        NetType.UESMANN: UESNet,
    }

    @staticmethod
    def make_net(net_type: Union[NetType, str], layers: Sequence[int]) -> Net:
        """
        Build an uninitialised network.

        Args:
            net_type: a NetType, or a name accepted by NetType.from_name()
            layers: node count of each layer as seen by callers
        """
        if isinstance(net_type, str):
            net_type = NetType.from_name(net_type)
        cls = NetFactory.registry.get(net_type)
        if cls is None:
            raise ConfigurationError(f"No network class registered for {net_type}")
        return cls(layers)

    @staticmethod
    def make_net_for(net_type: Union[NetType, str], examples, hidden_nodes: int) -> Net:
        """Build a single-hidden-layer network which fits an example set."""
        layers = [examples.input_count, hidden_nodes, examples.output_count]
        return NetFactory.make_net(net_type, layers)

    @staticmethod
    def save(path: PathLike, net: Net):
        """Write a network to a file."""
        layers = [net.get_layer_size(i) for i in range(net.get_layer_count())]
        header = np.array([net.net_type.value, len(layers)] + layers, dtype=_HEADER_DTYPE)
        data = net.save().astype(_DATA_DTYPE, copy=False)
        with open(path, "wb") as f:
            f.write(header.tobytes())
            f.write(data.tobytes())
        logger.debug(f"Saved {net.net_type.name} network {layers} to {path}")

    @staticmethod
    def load(path: PathLike) -> Net:
        """Read a network written by save()."""
        try:
            with open(path, "rb") as f:
                raw = f.read()
        except OSError as e:
            raise LoadError(f"Cannot open network file {path}: {e}") from e

        def ints(offset: int, count: int) -> np.ndarray:
            end = offset + count * _HEADER_DTYPE.itemsize
            if end > len(raw):
                raise LoadError(f"Truncated header in network file {path}")
            return np.frombuffer(raw[offset:end], dtype=_HEADER_DTYPE)

        tag, num_layers = (int(v) for v in ints(0, 2))
        try:
            net_type = NetType(tag)
        except ValueError:
            raise LoadError(f"Unknown network type {tag} in {path}") from None
        if not 2 <= num_layers <= 1024:
            raise LoadError(f"Bad layer count {num_layers} in {path}")

        layers = [int(v) for v in ints(2 * _HEADER_DTYPE.itemsize, num_layers)]
        try:
            net = NetFactory.make_net(net_type, layers)
        except ConfigurationError as e:
            raise LoadError(f"Bad layer sizes in {path}: {e}") from e

        offset = (2 + num_layers) * _HEADER_DTYPE.itemsize
        expected = net.get_data_size() * _DATA_DTYPE.itemsize
        if len(raw) - offset != expected:
            raise LoadError(
                f"Network file {path} has {len(raw) - offset} bytes of parameters, expected {expected}"
            )
        net.load(np.frombuffer(raw[offset:], dtype=_DATA_DTYPE))
        logger.debug(f"Loaded {net_type.name} network {layers} from {path}")
        return net
