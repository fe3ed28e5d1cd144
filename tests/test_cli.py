"""
Tests for tnyparse - TINY Parser CLI
====================================

These tests run the tnyparse command through click's CliRunner and
check its output and exit codes.
"""

from pathlib import Path

import pytest
from click.testing import CliRunner

from tinyc import __version__
from tinyc.cli.tnyparse import main
from tinyc.cli.errors import ExitCode


EXAMPLES_DIR = Path(__file__).parent.parent / "examples"


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def write_source(tmp_path):
    """Write a TINY program to a temporary file and return its path."""
    def _write(text: str, name: str = "prog.tny") -> Path:
        path = tmp_path / name
        path.write_text(text)
        return path
    return _write


# =============================================================================
# Basic Invocation
# =============================================================================

class TestInvocation:

    def test_help(self, runner):
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "Parse a TINY program" in result.output
        assert "--ast" in result.output

    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_missing_file(self, runner, tmp_path):
        """click rejects a missing input file as a usage error."""
        result = runner.invoke(main, [str(tmp_path / "missing.tny")])
        assert result.exit_code == ExitCode.INVALID_ARGS

    def test_no_arguments(self, runner):
        result = runner.invoke(main, [])
        assert result.exit_code == ExitCode.INVALID_ARGS


# =============================================================================
# Parsing
# =============================================================================

class TestParsing:

    def test_clean_program(self, runner, write_source):
        path = write_source("read x; write x")
        result = runner.invoke(main, [str(path)])

        assert result.exit_code == ExitCode.SUCCESS
        assert "no syntax errors" in result.output

    def test_syntax_errors(self, runner, write_source):
        path = write_source("read x;\nx := ;\n")
        result = runner.invoke(main, [str(path)])

        assert result.exit_code == ExitCode.BUILD_ERROR
        assert f"{path}:2:6: error: unexpected token -> ;" in result.output
        assert "hint: expected expression" in result.output
        assert "1 error" in result.output
        assert "no syntax errors" not in result.output

    def test_ast_flag(self, runner, write_source):
        path = write_source("if (x < 10) then write x end")
        result = runner.invoke(main, [str(path), "--ast"])

        assert result.exit_code == 0
        assert "Syntax tree:" in result.output
        assert "If\n  Op: <\n    Id: x\n    Const: 10\n  Write\n    Id: x" in result.output

    def test_ast_printed_despite_errors(self, runner, write_source):
        path = write_source("write 1 +")
        result = runner.invoke(main, [str(path), "--ast"])

        assert result.exit_code == ExitCode.BUILD_ERROR
        assert "Op: +" in result.output

    def test_trace_scan(self, runner, write_source):
        path = write_source("read x")
        result = runner.invoke(main, [str(path), "--trace-scan"])

        assert result.exit_code == 0
        assert "\t1: reserved word: read" in result.output
        assert "\t1: EOF" in result.output

    def test_echo_source(self, runner, write_source):
        path = write_source("read x;\nwrite x")
        result = runner.invoke(main, [str(path), "--echo-source"])

        assert f"TINY SOURCE: {path}" in result.output
        assert "   2: write x" in result.output

    def test_ast_for_long_expression(self, runner, write_source):
        path = write_source("write " + " + ".join(["1"] * 1000))
        result = runner.invoke(main, [str(path), "--ast"])

        assert result.exit_code == ExitCode.SUCCESS
        assert result.output.count("Op: +") == 999

    def test_deep_nesting_is_a_syntax_error(self, runner, write_source):
        path = write_source("write " + "(" * 300 + "x" + ")" * 300)
        result = runner.invoke(main, [str(path), "--ast"])

        assert result.exit_code == ExitCode.BUILD_ERROR
        assert "nesting too deep" in result.output

    def test_env_enables_tree(self, runner, write_source):
        path = write_source("write 7")
        result = runner.invoke(main, [str(path)], env={"TINYC_TRACE_PARSE": "1"})

        assert result.exit_code == 0
        assert "Const: 7" in result.output

    def test_env_strict_still_reports(self, runner, write_source):
        """TINYC_STRICT does not change the CLI's report-and-exit flow."""
        path = write_source("x y")
        result = runner.invoke(main, [str(path)], env={"TINYC_STRICT": "1"})

        assert result.exit_code == ExitCode.BUILD_ERROR
        assert "1 error" in result.output

    def test_verbose(self, runner, write_source):
        path = write_source("read a; read b")
        result = runner.invoke(main, ["-v", str(path)])

        assert result.exit_code == 0
        assert "Parsing" in result.output
        assert "Parsed: 2 top-level statements" in result.output


# =============================================================================
# Bundled Examples
# =============================================================================

class TestExamples:

    @pytest.mark.parametrize("name", ["factorial.tny", "loops.tny"])
    def test_example_parses(self, runner, name):
        path = EXAMPLES_DIR / name
        if not path.exists():
            pytest.skip(f"{name} not available")

        result = runner.invoke(main, [str(path)])
        assert result.exit_code == 0, result.output
