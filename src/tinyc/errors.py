"""
tinyc Error Hierarchy
=====================

This module defines the root of the exception hierarchy for tinyc.
All exceptions inherit from TinyError, allowing callers to catch every
toolchain error with a single except clause if desired.

Exception Hierarchy
-------------------
TinyError (base)
└── FrontEndError (tinyc.frontend.errors)
    ├── TinySyntaxError - syntax errors found while parsing
    │   └── UnexpectedTokenError - lookahead does not fit the grammar
    └── TinyCompilationError - aggregate report of collected errors

Design Philosophy
-----------------
Each front-end error captures source location information (filename,
line, column) when applicable, so that messages point straight at the
offending token:

    filename:line:column: error: description
        source_line_text
        ^ (pointer to error location)
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass


# =============================================================================
# Base Exception Class
# =============================================================================

class TinyError(Exception):
    """
    Base exception for all tinyc errors.

    All exceptions in the package inherit from this class, allowing
    callers to catch all tinyc errors with a single except clause:

        try:
            front_end.parse_file("sample.tny")
        except TinyError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source code for error reporting.

    Tokens, AST nodes and diagnostics all carry one of these. The frozen
    design ensures locations cannot be accidentally modified once a
    token has been scanned.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed, 0 when unknown)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"
