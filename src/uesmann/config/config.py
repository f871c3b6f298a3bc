"""
UESMANN - Training Configuration
================================
Parameters for a stochastic gradient descent run.
All hyperparameters of a single training call are centralised here.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .structures import ShuffleMode
from ..errors import ConfigurationError

if TYPE_CHECKING:
    from ..data import ExampleSet


@dataclass
class SGDParams:
    """
    Parameters for Net.train_sgd() / SGDTrainer.

    Cross-validation is enabled when both cv_slices and cv_per_slice are
    positive: the last cv_slices*cv_per_slice examples are held out and
    one slice of them is tested every cv_interval iterations.
    """
    # === Learning ===
    eta: float = 0.1                  # learning rate
    iterations: int = 1000            # single-example training steps
    shuffle_mode: ShuffleMode = ShuffleMode.STRIDE

    # === Cross-validation ===
    cv_slices: int = 0
    cv_per_slice: int = 0
    cv_interval: int = 1              # iterations between CV checks
    cv_shuffle: bool = True           # reshuffle held-out set on slice wrap

    # === Best network retention ===
    store_best: bool = False
    select_best_with_cv: bool = False

    # === Initialisation ===
    init_range: float = -1.0          # <= 0 means Bishop's rule
    seed: int = 0

    @classmethod
    def for_epochs(cls, eta: float, examples: "ExampleSet", epochs: int) -> "SGDParams":
        """Build parameters which train for a number of passes over a set."""
        return cls(eta=eta, iterations=epochs * examples.count)

    @property
    def cv_count(self) -> int:
        """Total number of held-out examples."""
        if self.cv_slices <= 0 or self.cv_per_slice <= 0:
            return 0
        return self.cv_slices * self.cv_per_slice

    @property
    def has_cross_validation(self) -> bool:
        return self.cv_count > 0

    def cross_validation(
        self,
        examples: "ExampleSet",
        prop_cv: float,
        cv_count: int,
        cv_slices: int,
        cv_shuffle: bool = True
    ) -> "SGDParams":
        """
        Set up cross-validation from proportions.

        Args:
            examples: the full example set that will be trained on
            prop_cv: proportion of examples to hold out, in (0, 1)
            cv_count: how many CV checks to run over the whole training
            cv_slices: number of slices the held-out set is divided into
            cv_shuffle: reshuffle the held-out set when the slices wrap

        Returns:
            self, for chaining
        """
        if cv_slices <= 0:
            raise ConfigurationError(f"Cross-validation slice count must be positive, got {cv_slices}")
        if cv_count <= 0:
            raise ConfigurationError(f"Cross-validation count must be positive, got {cv_count}")
        if not 0.0 < prop_cv < 1.0:
            raise ConfigurationError(f"Cross-validation proportion must be in (0,1), got {prop_cv}")

        held_out = int(examples.count * prop_cv)
        per_slice = held_out // cv_slices
        if per_slice < 1:
            raise ConfigurationError(
                f"Too few held-out examples ({held_out}) for {cv_slices} slices"
            )
        interval = self.iterations // cv_count
        if interval < 1:
            raise ConfigurationError(
                f"Cannot run {cv_count} cross-validations in {self.iterations} iterations"
            )

        self.cv_slices = cv_slices
        self.cv_per_slice = per_slice
        self.cv_interval = interval
        self.cv_shuffle = cv_shuffle
        return self

    def set_store_best(self, store: bool = True) -> "SGDParams":
        self.store_best = store
        return self

    def set_select_best_with_cv(self, select: bool = True) -> "SGDParams":
        self.select_best_with_cv = select
        return self

    def set_seed(self, seed: int) -> "SGDParams":
        self.seed = seed
        return self

    def set_shuffle(self, mode: ShuffleMode) -> "SGDParams":
        self.shuffle_mode = mode
        return self

    def set_init_range(self, init_range: float) -> "SGDParams":
        self.init_range = init_range
        return self
