"""Base classes and exceptions for fretdiagram.

This module provides the abstract resource base class and the exception
types used throughout the library.
"""

from __future__ import annotations

from abc import ABCMeta, abstractmethod
from typing import Any


class Closeable(metaclass=ABCMeta):
    """Abstract base class for objects that need explicit resource cleanup."""

    @abstractmethod
    def close(self) -> None:
        """Close this to free resources and deny further use."""
        raise NotImplementedError()


class FretboardError(Exception):
    """Base class for errors raised by fretdiagram."""


class ConfigError(FretboardError, ValueError):
    """Raised when fretboard options are inconsistent."""


class MatchException(Exception):
    """Exception raised when pattern matching fails."""

    def __init__(self, value: Any) -> None:
        """Initialize a MatchException with the unmatched value.

        Args:
            value: The value that failed to match any pattern.
        """
        super().__init__(f"Failed to match value: {value}")
