"""
UESMANN - SGD Trainer
=====================
Stochastic gradient descent over an example set, one example per step,
with periodic cross-validation on a held-out tail of the set and optional
retention of the best network seen.

A run:
1. SETUP: seed the network's generator, split off the held-out examples
2. INIT: randomise weights
3. TRAIN: one example per iteration, reshuffling at each epoch start
4. CROSS-VALIDATE: every cv_interval iterations, test one held-out slice
5. RESTORE: reload the best stored parameters, if any
"""

from typing import Callable, List, Optional, Tuple

import numpy as np

from ..config import SGDParams, ShuffleMode, TrainingLog
from ..data import ExampleSet
from ..errors import ConfigurationError
from ..networks import Net
from ..utils import get_logger, get_training_logger

logger = get_logger(__name__)


class SGDTrainer:
    """
    Trains a network by stochastic gradient descent.

    Args:
        net: the network to train; its parameters are overwritten
        params: training parameters
        verbose: print progress at each cross-validation
    """

    def __init__(self, net: Net, params: SGDParams, verbose: bool = False):
        self.net = net
        self.params = params
        self.verbose = verbose
        self.training_logs: List[TrainingLog] = []
        self.best_params: Optional[np.ndarray] = None
        self.min_error: Optional[float] = None

        # Optional callback
        self.on_cross_validation: Optional[Callable[[TrainingLog], None]] = None

        self._log = get_training_logger()

    def _validate(self, examples: ExampleSet) -> int:
        """Check the parameters against the examples; return the CV count."""
        p = self.params
        if p.cv_slices < 0 or p.cv_per_slice < 0:
            raise ConfigurationError(
                f"Negative cross-validation setup: {p.cv_slices} slices of {p.cv_per_slice}"
            )
        if (p.cv_slices > 0) != (p.cv_per_slice > 0):
            # only (0, 0) means no cross-validation
            raise ConfigurationError(
                f"Incomplete cross-validation setup: {p.cv_slices} slices of {p.cv_per_slice}"
            )
        n_cv = p.cv_count
        if n_cv >= examples.count:
            raise ConfigurationError(
                f"Too many cross-validation examples: {n_cv} of {examples.count}"
            )
        if p.select_best_with_cv and not n_cv:
            raise ConfigurationError("Cannot select the best network by cross-validation without cross-validation")
        if n_cv and p.cv_interval < 1:
            raise ConfigurationError(f"Cross-validation interval must be positive, got {p.cv_interval}")
        if examples.input_count != self.net.input_count or examples.output_count != self.net.output_count:
            raise ConfigurationError(
                f"Examples ({examples.input_count},{examples.output_count}) do not fit network "
                f"({self.net.input_count},{self.net.output_count})"
            )
        return n_cv

    def _store_if_best(self, error: float, iteration: int) -> bool:
        if self.min_error is not None and error >= self.min_error:
            return False
        self.min_error = error
        self.best_params = self.net.save()
        self._log.log_new_best(iteration, error)
        return True

    def train(self, examples: ExampleSet) -> float:
        """
        Train the network on a set of examples.

        The last cv_slices*cv_per_slice examples are held out for
        cross-validation and never trained on.

        Returns:
            the mean squared error of the trained network over the held-out
            examples, or over the whole set when there is no cross-validation
        """
        p = self.params
        net = self.net
        net.rng = np.random.default_rng(p.seed)
        rng = net.rng

        n_cv = self._validate(examples)
        n_training = examples.count - n_cv

        # the held-out tail; a one-example placeholder when CV is off
        if n_cv:
            cv_examples = ExampleSet.subset(examples, n_training, n_cv)
        else:
            cv_examples = ExampleSet.subset(examples, 0, 1)

        net.init_weights(p.init_range, rng)

        self.training_logs = []
        self.best_params = None
        self.min_error = None
        self._log.log_training_start(net.net_type.name, n_training, n_cv, p.iterations)

        # loop state
        cv_countdown = p.cv_interval
        cv_slice = 0

        for i in range(p.iterations):
            example_index = i % n_training
            if example_index == 0:
                examples.shuffle(rng, p.shuffle_mode, n_training)

            training_error = net.train_batch(examples, example_index, 1, p.eta)

            stored = False
            if p.store_best and not p.select_best_with_cv:
                stored = self._store_if_best(training_error, i)

            if n_cv:
                cv_countdown -= 1
                if cv_countdown == 0:
                    cv_countdown = p.cv_interval
                    cv_error = net.test(cv_examples, cv_slice * p.cv_per_slice, p.cv_per_slice)

                    if p.select_best_with_cv:
                        # compared on training error at CV checkpoints
                        stored = self._store_if_best(training_error, i)

                    log = TrainingLog(
                        iteration=i,
                        training_error=training_error,
                        cv_error=cv_error,
                        cv_slice=cv_slice,
                        min_error=self.min_error,
                        stored_best=stored
                    )
                    self.training_logs.append(log)
                    self._log.log_cross_validation(i, cv_slice, training_error, cv_error)
                    if self.verbose:
                        print(f"  Iteration {i}: train={training_error:.6f}, cv={cv_error:.6f}")
                    if self.on_cross_validation:
                        self.on_cross_validation(log)

                    cv_slice = (cv_slice + 1) % p.cv_slices
                    if cv_slice == 0 and p.cv_shuffle:
                        cv_examples.shuffle(rng, ShuffleMode.NONE)

        restored = self.best_params is not None
        if restored:
            net.load(self.best_params)

        mse = net.test(cv_examples) if n_cv else net.test(examples)
        self._log.log_training_end(mse, restored)
        return mse

    def get_training_curve(self) -> Tuple[List[int], List[float], List[float]]:
        """Return iterations, training errors and CV errors at each checkpoint."""
        iterations = [log.iteration for log in self.training_logs]
        training = [log.training_error for log in self.training_logs]
        cv = [log.cv_error for log in self.training_logs]
        return iterations, training, cv
