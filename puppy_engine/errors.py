"""
Error types shared by the parsing stages of the engine.
"""

from typing import Optional


class PuppyError(Exception):
    """Base class for all errors raised by the engine."""


class InvalidResourceError(PuppyError):
    """
    Raised when a resource (HTML or CSS text) cannot be parsed.

    The parsers never recover from malformed input; the error carries the
    parser's message and, when known, the position where parsing stopped.
    """

    kind = "resource"

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        """
        Initialize the error.

        Args:
            message: Human readable description of the failure
            line: 1-based line where parsing failed, if known
            column: 1-based column where parsing failed, if known
        """
        self.message = message
        self.line = line
        self.column = column
        super().__init__(message)

    def __str__(self) -> str:
        if self.line is not None and self.column is not None:
            return f"failed to parse {self.kind} at line {self.line}, column {self.column}; {self.message}"
        return f"failed to parse {self.kind}; {self.message}"


class HTMLParseError(InvalidResourceError):
    """Malformed markup. Fatal to the navigation that produced it."""

    kind = "HTML"


class CSSParseError(InvalidResourceError):
    """Malformed stylesheet. Callers substitute an empty stylesheet."""

    kind = "CSS"


class NoDocumentError(PuppyError):
    """Rendering was requested before any document was loaded."""

    def __init__(self, message: str = "failed to render; no document exists"):
        super().__init__(message)
