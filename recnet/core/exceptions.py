# core/exceptions.py - Error taxonomy for recnet
from typing import Optional


class RecnetError(ValueError):
    """Base class for caller errors raised by recnet."""


class ConfigurationError(RecnetError):
    """Invalid network topology or hyperparameter.

    ``field`` names the offending argument (e.g. ``'recurrent_layers'``,
    ``'steps'``, ``'momentum'``).
    """

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class InputShapeError(RecnetError):
    """Input vector length does not match the input layer."""

    def __init__(self, actual: int, expected: Optional[int] = None, message: Optional[str] = None):
        if message is None:
            message = f"Invalid input vector size: {actual}, expected: {expected}"
        super().__init__(message)
        self.actual = actual
        self.expected = expected
