"""
TINY Front-End Driver
=====================

This module provides the main programmatic interface to the front end.
It runs the two stages in order and gathers their outputs:

    Source → Lexer → Parser → AST (+ diagnostics)

Usage
-----
Command line:
    $ tnyparse sample.tny --ast

Programmatic:
    >>> from tinyc.frontend import TinyFrontEnd
    >>> result = TinyFrontEnd().parse_source("read x; write x")
    >>> result.success
    True

Configuration
-------------
FrontEndOptions holds the tracing flags. Options may come from
defaults, the environment (FrontEndOptions.from_env) or the command line,
in increasing order of precedence.

Error Handling
--------------
Syntax errors do not raise: they are collected in the result's
DiagnosticRecorder and success is False. With strict=True the driver
raises one TinyCompilationError holding the full report instead.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import logging
import os

from tinyc.frontend.lexer import TinyLexer, Token
from tinyc.frontend.parser import TinyParser
from tinyc.frontend.ast import Statement, ASTPrinter
from tinyc.frontend.errors import DiagnosticRecorder

logger = logging.getLogger(__name__)

# Environment values accepted as "on"
_TRUE_VALUES = ("1", "true", "yes", "on")


def _env_flag(name: str) -> Optional[bool]:
    """Read a boolean environment variable; None when unset or unrecognised."""
    value = os.environ.get(name)
    if value is None:
        return None
    value = value.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in ("0", "false", "no", "off", ""):
        return False
    return None


@dataclass
class FrontEndOptions:
    """
    Front-end configuration options.

    Attributes:
        echo_source: Keep numbered source lines in the result listing
        trace_scan: Keep a one-line-per-token trace in the result listing
        trace_parse: Keep the printed tree in the result listing
        strict: Raise TinyCompilationError when the parse recorded errors
    """
    echo_source: bool = False
    trace_scan: bool = False
    trace_parse: bool = False
    strict: bool = False

    @classmethod
    def from_env(cls) -> "FrontEndOptions":
        """
        Create options from environment variables.

        Environment variables (all optional):
            TINYC_ECHO_SOURCE: echo numbered source lines
            TINYC_TRACE_SCAN: trace every scanned token
            TINYC_TRACE_PARSE: print the syntax tree
            TINYC_STRICT: raise on syntax errors

        Unrecognised values leave the default in place.
        """
        options = cls()

        if (flag := _env_flag("TINYC_ECHO_SOURCE")) is not None:
            options.echo_source = flag
        if (flag := _env_flag("TINYC_TRACE_SCAN")) is not None:
            options.trace_scan = flag
        if (flag := _env_flag("TINYC_TRACE_PARSE")) is not None:
            options.trace_parse = flag
        if (flag := _env_flag("TINYC_STRICT")) is not None:
            options.strict = flag

        return options


@dataclass
class FrontEndResult:
    """
    Result of running the front end over one source.

    Attributes:
        filename: Source filename
        success: True if no syntax error was recorded
        tree: First top-level statement (possibly partial on failure)
        tokens: Every scanned token, ending with EOF
        diagnostics: Recorder holding the syntax errors
        listing: Lines produced by the echo/trace options
    """
    filename: str = "<input>"
    success: bool = False
    tree: Optional[Statement] = None
    tokens: list[Token] = field(default_factory=list)
    diagnostics: DiagnosticRecorder = None
    listing: list[str] = field(default_factory=list)

    def __post_init__(self):
        if self.diagnostics is None:
            self.diagnostics = DiagnosticRecorder(self.filename)

    @property
    def token_count(self) -> int:
        return len(self.tokens)

    @property
    def had_error(self) -> bool:
        return self.diagnostics.had_error


class TinyFrontEnd:
    """
    Runs the scanner and the parser over TINY source.

    Example:
        front_end = TinyFrontEnd(FrontEndOptions(trace_parse=True))
        result = front_end.parse_file("sample.tny")
        print("\\n".join(result.listing))

    Attributes:
        options: Front-end configuration options
    """

    def __init__(self, options: Optional[FrontEndOptions] = None):
        self.options = options or FrontEndOptions()

    def parse_source(self, source: str, filename: str = "<input>") -> FrontEndResult:
        """
        Scan and parse a source string.

        Args:
            source: TINY source code
            filename: Source filename for error messages

        Returns:
            FrontEndResult with tokens, tree and diagnostics

        Raises:
            TinyCompilationError: If strict and any syntax error was found
        """
        result = FrontEndResult(filename=filename)
        source_lines = source.splitlines()

        if self.options.echo_source:
            result.listing.append(f"TINY SOURCE: {filename}")
            for number, text in enumerate(source_lines, start=1):
                result.listing.append(f"{number:4d}: {text}")

        logger.debug(f"Scanning {filename}")
        result.tokens = list(TinyLexer(source, filename).tokenize())

        if self.options.trace_scan:
            for token in result.tokens:
                result.listing.append(f"\t{token.line}: {token.describe()}")

        logger.debug(f"Parsing {result.token_count} tokens from {filename}")
        parser = TinyParser(result.tokens, filename, source_lines, result.diagnostics)
        parse_result = parser.parse()
        result.tree = parse_result.tree
        result.success = not parse_result.had_error

        if self.options.trace_parse:
            result.listing.append("Syntax tree:")
            result.listing.extend(ASTPrinter().print(result.tree).splitlines())

        if not result.success:
            logger.debug(f"{filename}: {result.diagnostics.error_count()} syntax errors")
            if self.options.strict:
                result.diagnostics.raise_if_errors()

        return result

    def parse_file(self, filepath: str | Path) -> FrontEndResult:
        """
        Scan and parse a TINY source file.

        Raises:
            FileNotFoundError: If the source file does not exist
            TinyCompilationError: If strict and any syntax error was found
        """
        path = Path(filepath)
        if not path.exists():
            raise FileNotFoundError(f"Source file not found: {filepath}")

        source = path.read_text(encoding="utf-8")
        return self.parse_source(source, str(filepath))
