from .logger import setup_logging, get_logger, TrainingLogger, get_training_logger

__all__ = ["setup_logging", "get_logger", "TrainingLogger", "get_training_logger"]
