"""
tnyparse - TINY Parser Command-Line Interface
=============================================

This module implements the command-line interface for the TINY front
end. It scans and parses a source file, reports syntax errors and can
dump the token stream and the syntax tree.

Usage Examples
--------------
Check a program for syntax errors:
    $ tnyparse sample.tny

Print the syntax tree:
    $ tnyparse sample.tny --ast

Full listing (source, tokens, tree):
    $ tnyparse sample.tny --echo-source --trace-scan --ast

Verbose mode (debug logging):
    $ tnyparse -v sample.tny
"""

import logging
import sys
from pathlib import Path

import click

from tinyc import __version__
from tinyc.frontend import TinyFrontEnd, FrontEndOptions
from tinyc.frontend.ast import sequence_to_list
from tinyc.cli.errors import ExitCode, handle_cli_exception


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--ast",
    is_flag=True,
    help="Print the syntax tree (also enabled by TINYC_TRACE_PARSE)",
)
@click.option(
    "--trace-scan",
    is_flag=True,
    help="Print every token as it is scanned (also TINYC_TRACE_SCAN)",
)
@click.option(
    "--echo-source",
    is_flag=True,
    help="Print the numbered source first (also TINYC_ECHO_SOURCE)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output with debug logging",
)
@click.version_option(version=__version__, prog_name="tnyparse")
def main(
    input_file: Path,
    ast: bool,
    trace_scan: bool,
    echo_source: bool,
    verbose: bool,
) -> None:
    """
    Parse a TINY program and report syntax errors.

    INPUT_FILE is the TINY source file (.tny) to parse.

    The exit status is 0 for a clean parse and 1 when syntax errors were
    found. With errors, --ast still prints the best-effort tree.

    \b
    Examples:
        tnyparse sample.tny                  # Syntax check only
        tnyparse sample.tny --ast            # Print the tree
        tnyparse sample.tny --trace-scan     # Print the tokens
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    # Environment first, flags switch options on top of it
    options = FrontEndOptions.from_env()
    options.trace_parse = options.trace_parse or ast
    options.trace_scan = options.trace_scan or trace_scan
    options.echo_source = options.echo_source or echo_source
    options.strict = False

    try:
        if verbose:
            click.echo(f"Parsing {input_file}...")

        result = TinyFrontEnd(options).parse_file(input_file)

        for line in result.listing:
            click.echo(line)

        if verbose:
            click.echo(f"Scanned: {result.token_count} tokens")
            click.echo(f"Parsed: {len(sequence_to_list(result.tree))} top-level statements")

    except Exception as e:
        handle_cli_exception(e, verbose=verbose)

    if result.had_error:
        click.echo(result.diagnostics.report_text(), err=True)
        sys.exit(ExitCode.BUILD_ERROR)

    click.echo(f"Parsed {input_file}: no syntax errors")


if __name__ == "__main__":
    main()
