"""Error taxonomy shared by the oracle client, orchestrators and HTTP layer.

A ``ComponentFinderError`` is raised at the point its kind is known. It keeps
two messages apart: ``message`` is the internal diagnostic for logs, and
``user_message`` is the only text ever shown to an end user.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    API_ERROR = "API_ERROR"
    NOT_FOUND = "NOT_FOUND"
    PARSING_ERROR = "PARSING_ERROR"
    FILE_ERROR = "FILE_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


TERMINAL_KINDS = frozenset({ErrorKind.NOT_FOUND, ErrorKind.PARSING_ERROR})

DEFAULT_USER_MESSAGE = "An unknown error occurred. Please try again."


class ComponentFinderError(Exception):
    """Classified failure with separate internal and user-facing messages."""

    def __init__(
        self,
        message: str,
        user_message: str,
        kind: ErrorKind,
        cause: BaseException | None = None,
    ):
        self.message = message
        self.user_message = user_message
        self.kind = kind
        self.cause = cause
        super().__init__(message)

    @property
    def is_terminal(self) -> bool:
        return self.kind in TERMINAL_KINDS

    @classmethod
    def from_exception(cls, exc: BaseException) -> ComponentFinderError:
        """Wrap an unclassified exception; classified errors pass through."""
        if isinstance(exc, ComponentFinderError):
            return exc
        return cls(
            message=f"Unclassified error: {exc!r}",
            user_message=DEFAULT_USER_MESSAGE,
            kind=ErrorKind.UNKNOWN_ERROR,
            cause=exc,
        )


class ExtractionError(ValueError):
    """Raised when no usable JSON payload can be pulled out of oracle text.

    ``reason`` is one of ``"empty"``, ``"no_structure"`` or ``"invalid_json"``.
    """

    def __init__(self, reason: str, message: str, raw_text: str = ""):
        self.reason = reason
        self.raw_text = raw_text
        super().__init__(message)


class SchemaValidationError(Exception):
    """Raised when extracted JSON does not match the expected record shape."""

    def __init__(self, phase: str, raw_output: str, errors: str):
        self.phase = phase
        self.raw_output = raw_output
        self.errors = errors
        super().__init__(f"[{phase}] Schema validation failed: {errors}")
