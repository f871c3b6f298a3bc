"""
UESMANN - Logging Utilities
===========================
Configuration of structured logging for debugging and monitoring training.
"""

import logging
import sys
from typing import Optional


# Log format
LOG_FORMAT = "[%(asctime)s] %(levelname)-8s [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    format_string: Optional[str] = None
) -> None:
    """
    Configure the global logging system.

    Args:
        level: Log level ('DEBUG', 'INFO', 'WARNING', 'ERROR')
        log_file: Optional path to a log file
        format_string: Custom log format
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    log_format = format_string or LOG_FORMAT

    handlers = [logging.StreamHandler(sys.stdout)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format=log_format,
        datefmt=DATE_FORMAT,
        handlers=handlers,
        force=True
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a specific module.

    Args:
        name: Module name (typically __name__)

    Returns:
        Configured logger

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("Information message")
    """
    return logging.getLogger(name)


class TrainingLogger:
    """
    Logger with structured methods for the events of an SGD run.
    """

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def log_training_start(self, net_type: str, n_training: int, n_cv: int, iterations: int):
        """Log the start of a training run."""
        self.logger.info(
            f"Training {net_type}: {n_training} training examples, "
            f"{n_cv} held out, {iterations:,} iterations"
        )

    def log_cross_validation(self, iteration: int, cv_slice: int, training_error: float, cv_error: float):
        """Log a cross-validation checkpoint."""
        self.logger.debug(
            f"Iteration {iteration} - CV slice {cv_slice}: "
            f"train={training_error:.6f}, cv={cv_error:.6f}"
        )

    def log_new_best(self, iteration: int, error: float):
        """Log that a new best network was stored."""
        self.logger.debug(f"Iteration {iteration} - New best: error={error:.6f}")

    def log_training_end(self, mse: float, restored_best: bool):
        """Log the result of a training run."""
        source = "best stored network" if restored_best else "final network"
        self.logger.info(f"Training complete - MSE={mse:.6f} ({source})")

    def log_warning(self, message: str):
        """Log a warning."""
        self.logger.warning(message)


_training_logger: Optional[TrainingLogger] = None


def get_training_logger() -> TrainingLogger:
    """
    Get the global training logger.

    Returns:
        Structured training logger
    """
    global _training_logger
    if _training_logger is None:
        _training_logger = TrainingLogger("uesmann.training")
    return _training_logger
