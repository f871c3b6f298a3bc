"""
Shared fixtures and options for the UESMANN tests.
"""

import numpy as np
import pytest

from uesmann import ExampleSet


def pytest_addoption(parser):
    parser.addoption(
        "--runslow", action="store_true", default=False,
        help="run long convergence tests"
    )


def pytest_collection_modifyitems(config, items):
    if config.getoption("--runslow"):
        return
    skip_slow = pytest.mark.skip(reason="needs --runslow")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


def make_standard_set() -> ExampleSet:
    """
    10 examples, 5 inputs, 2 outputs: input j of example i is 10i+j,
    output j is 20i+j and h is 1000i.
    """
    examples = ExampleSet(10, 5, 2, 2)
    for i in range(examples.count):
        examples.get_inputs(i)[:] = [i * 10 + j for j in range(5)]
        examples.get_outputs(i)[:] = [i * 20 + j for j in range(2)]
        examples.set_h(i, i * 1000)
    return examples


@pytest.fixture
def standard_set():
    return make_standard_set()


@pytest.fixture
def rng():
    return np.random.default_rng(10)
