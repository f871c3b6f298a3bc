"""
UESMANN - Configuration Module
==============================
Export of all structures and configurations.
"""

from .structures import (
    NetType,
    ShuffleMode,
    TrainingLog
)

from .config import SGDParams

__all__ = [
    "NetType",
    "ShuffleMode",
    "TrainingLog",
    "SGDParams",
]
