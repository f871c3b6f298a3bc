"""
UESMANN - Data Structures
=========================
Enums and dataclasses shared across the package.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..errors import ConfigurationError


class NetType(Enum):
    """
    Network architectures. The value is the 32-bit tag written at the
    start of a saved network file.
    """
    PLAIN = 1000           # plain back-propagation
    OUTPUTBLENDING = 1001  # two plain nets, outputs blended by h
    HINPUT = 1002          # modulator as an extra input
    UESMANN = 1003         # modulator scales the weighted sums

    @classmethod
    def from_name(cls, name: str) -> "NetType":
        """Look up a type by its short or full (case-insensitive) name."""
        key = name.strip().lower()
        aliases = {
            "plain": cls.PLAIN,
            "bp": cls.PLAIN,
            "ob": cls.OUTPUTBLENDING,
            "outputblending": cls.OUTPUTBLENDING,
            "hin": cls.HINPUT,
            "hinput": cls.HINPUT,
            "ues": cls.UESMANN,
            "uesmann": cls.UESMANN,
        }
        if key not in aliases:
            raise ConfigurationError(f"Unknown network type: '{name}'")
        return aliases[key]


class ShuffleMode(Enum):
    """How an example set is structured after a Fisher-Yates shuffle."""
    NONE = "none"            # plain shuffle
    STRIDE = "stride"        # shuffle whole blocks of n_h_levels examples
    ALTERNATE = "alternate"  # shuffle, then force h-levels to cycle


@dataclass
class TrainingLog:
    """State of a training run at one cross-validation checkpoint."""
    iteration: int
    training_error: float
    cv_error: float
    cv_slice: int
    min_error: Optional[float] = None
    stored_best: bool = False
