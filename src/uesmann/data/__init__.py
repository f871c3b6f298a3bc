"""
UESMANN - Data Module
=====================
Example sets, corpus loading and boolean test data.
"""

from .examples import ExampleSet, alternate
from .mnist import MNIST
from .boolean import (
    FUNCTION_NAMES,
    bool_func,
    make_pairing_set,
    make_boolean_set,
    boolean_error,
    boolean_success
)

__all__ = [
    "ExampleSet",
    "alternate",
    "MNIST",
    "FUNCTION_NAMES",
    "bool_func",
    "make_pairing_set",
    "make_boolean_set",
    "boolean_error",
    "boolean_success",
]
