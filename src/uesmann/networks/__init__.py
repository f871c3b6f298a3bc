from .base import Net, sigmoid
from .bpnet import BPNet
from .uesnet import UESNet
from .obnet import OutputBlendingNet
from .hinet import HInputNet
from .factory import NetFactory

__all__ = ["Net", "sigmoid", "BPNet", "UESNet", "OutputBlendingNet", "HInputNet", "NetFactory"]
