"""
UESMANN - Errors
================
Exception types raised by the library. Each subclasses the builtin
exception a caller would otherwise expect, so plain ``except ValueError``
style handling keeps working.
"""


class ConfigurationError(ValueError):
    """Invalid network, example-set or training configuration."""


class UnsupportedOperationError(NotImplementedError):
    """The network type does not support the requested operation."""


class LoadError(RuntimeError):
    """A corpus or saved network could not be read."""
