"""
tinyc - Front End for the TINY Teaching Language
================================================

TINY is the small imperative language used to teach compiler
construction: integer variables, read/write, if/else, repeat-until,
assignments and arithmetic/relational expressions. This dialect adds
while, do-while and counting for loops, the mod operator and '>'.

Main Components
---------------
- **frontend**: scanner, recursive descent parser, AST and printer
    Converts TINY source (.tny) into a syntax tree plus diagnostics

- **cli**: command-line tools
    tnyparse parses a file and prints diagnostics and the tree

Quick Start
-----------
    >>> from tinyc import parse_source
    >>> result = parse_source("for i := 1 to 10 do write i enddo")
    >>> result.had_error
    False

Or use the command-line tool:
    $ tnyparse sample.tny --ast
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from tinyc.errors import TinyError, SourceLocation
from tinyc.frontend import (
    TinyFrontEnd,
    FrontEndOptions,
    FrontEndResult,
    TinyParser,
    ParseResult,
    TinyLexer,
    ASTPrinter,
    DiagnosticRecorder,
    TinySyntaxError,
    parse_source,
)

__all__ = [
    "__version__",
    "TinyError",
    "SourceLocation",
    "TinyFrontEnd",
    "FrontEndOptions",
    "FrontEndResult",
    "TinyParser",
    "ParseResult",
    "TinyLexer",
    "ASTPrinter",
    "DiagnosticRecorder",
    "TinySyntaxError",
    "parse_source",
]
