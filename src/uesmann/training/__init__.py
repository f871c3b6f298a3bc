"""
UESMANN - Training Module
=========================
Export of the trainer.
"""

from .trainer import SGDTrainer

__all__ = [
    "SGDTrainer",
]
