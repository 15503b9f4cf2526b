"""Exception hierarchy for tablekit.

Every error the library raises on its own derives from ``TablekitError``.
Errors raised by user callbacks are never wrapped and reach the caller
unchanged.
"""

from __future__ import annotations
from typing import Any


class TablekitError(Exception):
    """Base exception for all tablekit errors.

    Attributes:
        message: Human-readable error message
        error_code: Optional error code for programmatic handling
        context: Additional context information
    """

    def __init__(
        self, message: str, error_code: str | None = None, context: dict[str, Any] | None = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}

    def __str__(self) -> str:
        if self.error_code:
            return f"[{self.error_code}] {self.message}"
        return self.message


class NonNumericValueError(TablekitError, TypeError):
    """A numeric reduction met a value it cannot add."""

    def __init__(self, index: int, value: Any) -> None:
        super().__init__(
            f"Cannot add non-numeric value {value!r} at index {index}",
            error_code="NON_NUMERIC",
            context={"index": index, "value": value},
        )


class MissingArgumentError(TablekitError, TypeError):
    """A required argument was omitted."""

    def __init__(self, argument: str, message: str | None = None) -> None:
        super().__init__(
            message or f"Argument '{argument}' is required",
            error_code="MISSING_ARGUMENT",
            context={"argument": argument},
        )
