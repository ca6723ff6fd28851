"""Exception hierarchy for exact_bps."""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    """Classification of recoverable errors."""

    INVALID_FORMAT = "invalid_format"
    """The input text is not a plain base-10 decimal."""


class BPSError(Exception):
    """
    Base exception for all exact_bps errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


class InvalidFormatError(BPSError, ValueError):
    """
    Raised when a string cannot be parsed as a decimal value.

    Attributes:
        text: The rejected input (may be truncated for display).
        detail: What was wrong with it.
        kind: Always `ErrorKind.INVALID_FORMAT`.
    """

    kind = ErrorKind.INVALID_FORMAT

    def __init__(self, text: str, detail: str) -> None:
        self.text = text
        self.detail = detail

        text_repr = repr(text)
        if len(text_repr) > 50:
            text_repr = text_repr[:47] + "..."

        super().__init__(f"Invalid decimal {text_repr}: {detail}")


class FatalParseError(BPSError, RuntimeError):
    """
    Raised by `must_parse_from_string` when parsing fails.

    Always chained to the underlying `InvalidFormatError`. Callers that need
    to recover from bad input should use `parse_from_string` instead.
    """
