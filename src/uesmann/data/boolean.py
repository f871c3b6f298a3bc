"""
UESMANN - Boolean Examples
==========================
Two-input boolean functions, used to test whether a modulated network can
switch between one function at h=0 and another at h=1.

A function index is its truth table: bit 3 is the output for (0,0), bit 2
for (0,1), bit 1 for (1,0) and bit 0 for (1,1).
"""

from typing import Sequence, TYPE_CHECKING

import numpy as np

from .examples import ExampleSet

if TYPE_CHECKING:
    from ..networks import Net


FUNCTION_NAMES = [
    "f", "and", "x and !y", "x", "!x and y", "y", "xor", "or",
    "nor", "xnor", "!y", "x or !y", "!x", "!x or y", "nand", "t",
]

INPUTS = [(0, 0), (0, 1), (1, 0), (1, 1)]


def bool_func(f: int, a: bool, b: bool) -> bool:
    """Evaluate boolean function number f on inputs a, b."""
    bit = 1 << ((0 if a else 2) + (0 if b else 1))
    return (f & bit) != 0


def make_pairing_set(f0: int, f1: int) -> ExampleSet:
    """
    Eight examples: f0 at h=0 and f1 at h=1 for each input pair, stored as
    h=0/h=1 pairs so a STRIDE shuffle keeps the levels alternating.
    """
    examples = ExampleSet(8, 2, 1, 2)
    for i, (a, b) in enumerate(INPUTS):
        for h, f in ((0, f0), (1, f1)):
            idx = i * 2 + h
            examples.get_inputs(idx)[:] = (a, b)
            examples.get_outputs(idx)[0] = 1.0 if bool_func(f, a != 0, b != 0) else 0.0
            examples.set_h(idx, h)
    return examples


def make_boolean_set(outs0: Sequence[float], outs1: Sequence[float]) -> ExampleSet:
    """
    Sixteen examples: the four cases of one function at h=0 interleaved
    with the four of another at h=1, repeated twice so that the identical
    second half can serve as a held-out set.

    Args:
        outs0: outputs at h=0 for inputs (0,0), (0,1), (1,0), (1,1)
        outs1: outputs at h=1 for the same inputs
    """
    examples = ExampleSet(16, 2, 1, 2)
    for copy in range(2):
        for i, (a, b) in enumerate(INPUTS):
            for h, outs in ((0, outs0), (1, outs1)):
                idx = copy * 8 + i * 2 + h
                examples.get_inputs(idx)[:] = (a, b)
                examples.get_outputs(idx)[0] = outs[i]
                examples.set_h(idx, h)
    return examples


def boolean_error(net: "Net", h: float, a: int, b: int, expected: float) -> float:
    """Squared error of the net's single output for inputs a, b at modulator h."""
    net.set_h(h)
    out = net.run(np.array([a, b], dtype=np.float64))[0]
    return (expected - out) ** 2


def boolean_success(net: "Net", f0: int, f1: int) -> bool:
    """True if the net performs f0 at h=0 and f1 at h=1, thresholding at 0.5."""
    for a, b in INPUTS:
        for h, f in ((0.0, f0), (1.0, f1)):
            net.set_h(h)
            out = net.run(np.array([a, b], dtype=np.float64))[0]
            if (out > 0.5) != bool_func(f, a != 0, b != 0):
                return False
    return True
