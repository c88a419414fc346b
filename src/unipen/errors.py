"""
Error types for UniPen parsing, include resolution and validation.

Every failure raised by ``unipen.parse`` derives from ``ParseError``.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from .core.models import Statement


@dataclass(frozen=True)
class ErrorContext:
    """
    Source position of an error.

    Attributes:
        file: Path of the file being parsed (None for in-memory content)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        snippet: The offending source line, if known
    """

    file: Optional[Path]
    line: int
    column: int
    snippet: Optional[str] = None

    def format(self) -> str:
        """Format as ``file:line:column`` followed by the snippet and a caret"""
        location = f"{self.file or '<string>'}:{self.line}:{self.column}"
        if self.snippet is None:
            return location
        marker = " " * (self.column - 1) + "^"
        return f"{location}\n    {self.snippet}\n    {marker}"


class ParseError(Exception):
    """Base exception for all UniPen errors."""

    def __init__(self, message: str, context: Optional[ErrorContext] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class UniPenSyntaxError(ParseError):
    """
    Raised when a statement does not match its keyword's grammar.

    Examples:
    - Unknown reserved token (``.SKILL GREAT``)
    - Malformed number or component list
    - Unterminated label
    - Trailing fields after a complete statement
    """

    def __init__(self, expected: str, context: ErrorContext, found: Optional[str] = None):
        self.expected = expected
        self.found = found
        message = f"expected {expected}"
        if found is not None:
            message += f", found {found!r}"
        super().__init__(message, context)

    @property
    def line(self) -> int:
        return self.context.line

    @property
    def column(self) -> int:
        return self.context.column


@dataclass(frozen=True)
class ValidationIssue:
    """One cross-statement consistency failure"""

    statement: Optional["Statement"]
    reason: str

    def format(self) -> str:
        location = getattr(self.statement, "location", None)
        if location is None:
            return self.reason
        return f"{location.format()}: {self.reason}"


class UniPenValidationError(ParseError):
    """
    Raised when the assembled document fails cross-statement validation.

    Carries every issue found; the first one forms the headline.
    """

    def __init__(self, issues: List[ValidationIssue]):
        self.issues = list(issues)
        headline = self.issues[0].format() if self.issues else "validation failed"
        if len(self.issues) > 1:
            details = "\n".join(f"  • {issue.format()}" for issue in self.issues)
            headline = f"UniPen validation errors ({len(self.issues)}):\n{details}"
        super().__init__(headline)


class IncludeErrorKind(Enum):
    MISSING_BASE = "missing include directory"
    NOT_FOUND = "not found"
    CYCLE = "include cycle"
    DEPTH_EXCEEDED = "include depth exceeded"


class IncludeError(ParseError):
    """Raised when a ``.INCLUDE`` statement cannot be resolved"""

    def __init__(
        self,
        kind: IncludeErrorKind,
        path: Optional[Path],
        context: Optional[ErrorContext] = None,
        detail: str = "",
    ):
        self.kind = kind
        self.path = path
        message = f"{kind.value}: {path}" if path is not None else kind.value
        if detail:
            message += f" ({detail})"
        super().__init__(message, context)


class ReadError(ParseError):
    """Raised when the root file cannot be read or decoded"""

    def __init__(self, path: Path, reason: str):
        self.path = path
        super().__init__(f"cannot read {path}: {reason}")
