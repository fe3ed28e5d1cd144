"""
TINY Front-End Errors and Diagnostics
=====================================

This module defines the exceptions raised by the TINY front end and the
DiagnosticRecorder that collects syntax errors during a parse.

Exception Hierarchy
-------------------
FrontEndError (base for all front-end errors)
├── TinySyntaxError - syntax error found while parsing
│   └── UnexpectedTokenError - lookahead does not fit the grammar
└── TinyCompilationError - pre-formatted aggregate report

Syntax errors are values, not control flow: the parser builds a
TinySyntaxError for each problem, hands it to the recorder and keeps
going. Only callers that explicitly ask for it (raise_if_errors) turn the
collection into a single exception.

Error Message Format
--------------------
    sample.tny:3:9: error: unexpected token -> reserved word: then
        if (x < 10 then write x end
                   ^
    hint: expected ')'
"""

import logging
from typing import Optional, Union

from tinyc.errors import TinyError, SourceLocation

logger = logging.getLogger(__name__)


# =============================================================================
# Base Front-End Exception
# =============================================================================

class FrontEndError(TinyError):
    """
    Base exception for all front-end errors.

    Provides the common message layout: location prefix, the source line
    with a caret under the error column, and an optional hint.

    Attributes:
        message: The error description
        location: Where in the source the error occurred
        hint: A suggestion for fixing the error
        source_line: The actual source text at the error location
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    @property
    def line(self) -> int:
        """Line number of the error, or 0 when no location is known."""
        return self.location.line if self.location else 0

    def _format_message(self) -> str:
        """Format the error message with location, source context, and hint."""
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class TinyCompilationError(FrontEndError):
    """
    Aggregate error containing every diagnostic of a failed parse.

    The message is already a formatted report from DiagnosticRecorder and
    is passed through unchanged.
    """

    def _format_message(self) -> str:
        """Return message as-is - it's already a formatted aggregate report."""
        return self.message


# =============================================================================
# Syntax Errors
# =============================================================================

class TinySyntaxError(FrontEndError):
    """
    Syntax error in TINY source code.

    Recorded whenever the parser meets a token that does not fit the
    grammar. Non-fatal: the parse continues after recording it.
    """
    pass


class UnexpectedTokenError(TinySyntaxError):
    """
    Unexpected token during parsing.

    Attributes:
        found: Description of the offending token
        expected: What the grammar wanted at this point (may be None)
    """

    def __init__(
        self,
        found: str,
        expected: Optional[str] = None,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.found = found
        self.expected = expected

        hint = f"expected {expected}" if expected else None

        super().__init__(
            f"unexpected token -> {found}",
            location=location,
            hint=hint,
            source_line=source_line,
        )


# =============================================================================
# Diagnostic Recorder
# =============================================================================

class DiagnosticRecorder:
    """
    Append-only collection of syntax errors for one parse.

    The parser reports into the recorder and never raises; the caller
    checks had_error before trusting the tree for later phases.

    Example:
        recorder = DiagnosticRecorder("sample.tny")
        result = TinyParser(tokens, recorder=recorder).parse()
        if recorder.had_error:
            print(recorder.report_text())
    """

    def __init__(self, filename: str = "<input>"):
        """
        Initialize an empty recorder.

        Args:
            filename: Used for locations when report() is given a bare line
        """
        self.filename = filename
        self.errors: list[FrontEndError] = []

    def add(self, error: FrontEndError) -> None:
        """Record an already constructed error."""
        logger.debug(f"Recorded diagnostic: {error.message} (line {error.line})")
        self.errors.append(error)

    def report(
        self,
        where: Union[SourceLocation, int],
        message: str,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ) -> None:
        """
        Record a syntax error at a line or location.

        Args:
            where: A SourceLocation, or a plain line number
            message: Human-readable description
            hint: Optional suggestion for fixing
            source_line: Optional source text for the caret display
        """
        if isinstance(where, int):
            where = SourceLocation(self.filename, where, 0)
        self.add(TinySyntaxError(message, where, hint=hint, source_line=source_line))

    @property
    def had_error(self) -> bool:
        """True once any error has been recorded."""
        return len(self.errors) > 0

    def has_errors(self) -> bool:
        """Return True if any errors have been collected."""
        return self.had_error

    def error_count(self) -> int:
        """Return the number of collected errors."""
        return len(self.errors)

    def messages(self) -> list[str]:
        """Return the bare messages, without location or hint."""
        return [error.message for error in self.errors]

    def report_text(self) -> str:
        """Format all errors for display, followed by a summary line."""
        lines = []

        for error in self.errors:
            lines.append(str(error))
            lines.append("")

        error_word = "error" if len(self.errors) == 1 else "errors"
        lines.append(f"{len(self.errors)} {error_word}")

        return "\n".join(lines)

    def clear(self) -> None:
        """Forget all collected errors."""
        self.errors.clear()

    def raise_if_errors(self) -> None:
        """Raise a TinyCompilationError if any errors were collected."""
        if self.had_error:
            raise TinyCompilationError(self.report_text())
