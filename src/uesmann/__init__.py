"""
UESMANN - Modulated Neural Networks
===================================

Small feed-forward networks whose behaviour is conditioned on a scalar
modulator h, with three ways of injecting it:
- UESMANN: h scales the weighted sum into every node by (h+1)
- Output blending: two networks, outputs interpolated by h
- h-as-input: h is fed to an extra, hidden input unit

All share one logistic-sigmoid back-propagation engine and are trained
by per-example SGD with cross-validation and best-network retention.

Usage:
    from uesmann import NetFactory, NetType, SGDParams, make_boolean_set

    examples = make_boolean_set([0, 1, 1, 0], [0, 0, 0, 1])
    net = NetFactory.make_net_for(NetType.UESMANN, examples, 2)
    params = SGDParams(eta=0.1, iterations=100000).set_store_best()
    mse = net.train_sgd(examples, params)
"""

# Configuration and structures
from .config import (
    NetType,
    ShuffleMode,
    TrainingLog,
    SGDParams
)

from .errors import ConfigurationError, UnsupportedOperationError, LoadError

# Data
from .data import (
    ExampleSet,
    alternate,
    MNIST,
    FUNCTION_NAMES,
    bool_func,
    make_pairing_set,
    make_boolean_set,
    boolean_error,
    boolean_success
)

# Networks
from .networks import (
    Net,
    BPNet,
    UESNet,
    OutputBlendingNet,
    HInputNet,
    NetFactory
)

# Trainer
from .training import SGDTrainer

# Utilities
from .utils import get_logger, setup_logging


__version__ = "0.3.0"

__all__ = [
    # Structures
    "NetType",
    "ShuffleMode",
    "TrainingLog",
    "SGDParams",

    # Errors
    "ConfigurationError",
    "UnsupportedOperationError",
    "LoadError",

    # Data
    "ExampleSet",
    "alternate",
    "MNIST",
    "FUNCTION_NAMES",
    "bool_func",
    "make_pairing_set",
    "make_boolean_set",
    "boolean_error",
    "boolean_success",

    # Networks
    "Net",
    "BPNet",
    "UESNet",
    "OutputBlendingNet",
    "HInputNet",
    "NetFactory",

    # Trainer
    "SGDTrainer",

    # Utilities
    "get_logger",
    "setup_logging",
]
