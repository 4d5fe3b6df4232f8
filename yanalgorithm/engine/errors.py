"""Exceptions raised by the weighting engine."""

from typing import Optional


class YanAlgorithmError(Exception):
    """Base class for engine errors."""


class InvalidConfig(YanAlgorithmError, ValueError):
    """Algorithm settings outside their valid range."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class EmptyCandidateSet(YanAlgorithmError, ValueError):
    """A weighted draw was requested over zero candidates."""
