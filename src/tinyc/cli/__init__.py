"""
tinyc Command-Line Interface
============================

This package provides the command-line tools for tinyc:

- **tnyparse**: scan and parse a TINY source file, report syntax errors
  and optionally dump tokens and the syntax tree

Each tool is implemented as a Click-based CLI application with
comprehensive help and error reporting.
"""

__all__ = ["tnyparse"]
