"""
Typed errors raised by the scheduling engine.
"""

from __future__ import annotations

from collections.abc import Iterable


class SchedulingError(Exception):
    """Base exception for scheduling engine errors"""

    def __init__(self, message: str, error_code: str | None = None):
        self.message = message
        self.error_code = error_code
        super().__init__(self.message)


class InvalidInputError(SchedulingError):
    """Raised when a work item violates the engine preconditions"""

    def __init__(self, message: str, item_id: int | None = None):
        self.item_id = item_id
        if item_id is not None:
            message = f"Work item {item_id}: {message}"
        super().__init__(message, "INVALID_INPUT")


class UnknownStrategyError(SchedulingError):
    """Raised when a strategy key is not registered"""

    def __init__(self, key: str, available: Iterable[str] = ()):
        self.key = key
        self.available = list(available)
        message = f"Unknown scheduling strategy: {key!r}"
        if self.available:
            message += f" (available: {', '.join(self.available)})"
        super().__init__(message, "UNKNOWN_STRATEGY")
