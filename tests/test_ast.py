# =============================================================================
# test_ast.py - Syntax Tree Unit Tests
# =============================================================================
# Tests for the AST node types, sequence helpers, the visitor and the
# listing printer.
# =============================================================================

import pytest
from tinyc.errors import SourceLocation
from tinyc.frontend.parser import parse_source
from tinyc.frontend.ast import (
    ASTVisitor,
    ASTPrinter,
    ExpressionPrinter,
    AssignStatement,
    ReadStatement,
    WriteStatement,
    ForStatement,
    OpExpression,
    ConstExpression,
    IdExpression,
    Operator,
    LoopDirection,
    StatementKind,
    ExpressionKind,
    iter_sequence,
    sequence_to_list,
)


LOC = SourceLocation("<test>", 1, 1)


def tree_of(source: str):
    result = parse_source(source)
    assert not result.had_error, result.diagnostics.report_text()
    return result.tree


def listing(source: str) -> list[str]:
    return ASTPrinter().print(tree_of(source)).splitlines()


# =============================================================================
# Node Tests
# =============================================================================

class TestNodes:
    """Node kinds, slots and representations."""

    def test_statement_kinds(self):
        stmts = sequence_to_list(tree_of(
            "if (x) then read x end; repeat read x until x; x := 1; read x; "
            "write x; while x do read x endwhile; do read x while (x); "
            "for i := 1 to 2 do read x enddo"
        ))
        assert [s.kind for s in stmts] == list(StatementKind)

    def test_expression_kinds(self):
        expr = tree_of("write x + 1").value
        assert expr.kind == ExpressionKind.OP
        assert expr.left.kind == ExpressionKind.ID
        assert expr.right.kind == ExpressionKind.CONST

    def test_default_children_are_empty(self):
        assert ConstExpression(LOC, value=1).children == (None, None, None)
        assert ReadStatement(LOC, name="x").children == (None, None, None)

    def test_for_children(self):
        stmt = ForStatement(
            LOC,
            name="i",
            start=ConstExpression(LOC, value=1),
            stop=ConstExpression(LOC, value=5),
            body=ReadStatement(LOC, name="x"),
        )
        start, stop, body = stmt.children
        assert start.value == 1
        assert stop.value == 5
        assert body.name == "x"
        assert stmt.direction == LoopDirection.TO

    def test_operator_spelling(self):
        assert str(Operator.MOD) == "mod"
        assert str(Operator.LT) == "<"
        assert str(LoopDirection.DOWNTO) == "downto"

    def test_expression_repr(self):
        expr = tree_of("write (a + 1) * b").value
        assert repr(expr) == "((a + 1) * b)"

    def test_expression_repr_with_missing_operand(self):
        expr = OpExpression(LOC, operator=Operator.PLUS, left=IdExpression(LOC, name="a"))
        assert repr(expr) == "(a + <missing>)"
        assert ExpressionPrinter().format(None) == "<missing>"

    def test_sibling_not_compared(self):
        first = ReadStatement(LOC, name="x")
        second = ReadStatement(LOC, name="x")
        first.sibling = WriteStatement(LOC)
        assert first == second

    def test_line(self):
        stmt = tree_of("\n\n  read x")
        assert stmt.line == 3
        assert stmt.location.column == 3


# =============================================================================
# Sequence Helper Tests
# =============================================================================

class TestSequenceHelpers:

    def test_iter_sequence(self):
        tree = tree_of("read a; read b; read c")
        assert [s.name for s in iter_sequence(tree)] == ["a", "b", "c"]

    def test_empty_sequence(self):
        assert sequence_to_list(None) == []

    def test_long_sequence(self):
        """Long sibling chains are walked without recursion."""
        source = "; ".join(f"x := {n}" for n in range(3000))
        stmts = sequence_to_list(tree_of(source))
        assert len(stmts) == 3000
        assert stmts[-1].value.value == 2999


# =============================================================================
# Visitor Tests
# =============================================================================

class NameCollector(ASTVisitor):
    """Collects every identifier mentioned in a tree."""

    def __init__(self):
        self.names = []

    def visit_IdExpression(self, node):
        self.names.append(node.name)

    def visit_AssignStatement(self, node):
        self.names.append(node.name)
        self.visit_children(node)


class TestVisitor:

    def test_visits_in_source_order(self):
        tree = tree_of("a := b; if (c < d) then write e else e := f end")
        collector = NameCollector()
        collector.visit_sequence(tree)
        assert collector.names == ["a", "b", "c", "d", "e", "e", "f"]

    def test_visit_none(self):
        assert ASTVisitor().visit(None) is None

    def test_generic_visit_reaches_nested_nodes(self):
        tree = tree_of("for i := 1 to n do while x do write y endwhile enddo")
        collector = NameCollector()
        collector.visit(tree)
        assert collector.names == ["n", "x", "y"]

    def test_visit_skips_empty_slots(self):
        result = parse_source("write 1 +")
        collector = NameCollector()
        collector.visit(result.tree)
        assert collector.names == []

    def test_long_sequence_visit(self):
        source = "; ".join(f"write v{n}" for n in range(3000))
        collector = NameCollector()
        collector.visit_sequence(tree_of(source))
        assert len(collector.names) == 3000


# =============================================================================
# Printer Tests
# =============================================================================

class TestPrinter:
    """The indented listing format."""

    def test_if_listing(self):
        assert listing("if (x < 10) then write x end") == [
            "If",
            "  Op: <",
            "    Id: x",
            "    Const: 10",
            "  Write",
            "    Id: x",
        ]

    def test_sequence_listing(self):
        assert listing("read x; y := x mod 2") == [
            "Read: x",
            "Assign to: y",
            "  Op: mod",
            "    Id: x",
            "    Const: 2",
        ]

    def test_loop_listing(self):
        assert listing("for i := 10 downto 1 do write i enddo") == [
            "For: i downto",
            "  Const: 10",
            "  Const: 1",
            "  Write",
            "    Id: i",
        ]

    def test_nested_sequence_listing(self):
        assert listing("repeat read x; write x until x = 0") == [
            "Repeat",
            "  Read: x",
            "  Write",
            "    Id: x",
            "  Op: =",
            "    Id: x",
            "    Const: 0",
        ]

    def test_while_and_do_while_labels(self):
        lines = listing("while x do read x endwhile; do read x while (x)")
        assert lines[0] == "While"
        assert "DoWhile" in lines

    def test_empty_tree(self):
        assert ASTPrinter().print(None) == ""

    def test_custom_indent(self):
        text = ASTPrinter(indent="\t").print(tree_of("write 1"))
        assert text == "Write\n\tConst: 1"

    @pytest.mark.parametrize("source", ["x := 1", "write (1 + 2) * 3"])
    def test_printer_is_reusable(self, source):
        printer = ASTPrinter()
        tree = tree_of(source)
        assert printer.print(tree) == printer.print(tree)

    def test_long_operator_chain(self):
        """A 1000-term sum prints without exhausting the stack."""
        tree = tree_of("write " + " + ".join(["1"] * 1000))
        lines = ASTPrinter().print(tree).splitlines()

        assert lines[0] == "Write"
        assert lines[1] == "  Op: +"
        assert len(lines) == 1 + 999 + 1000
        assert lines.count("  " * 1000 + "Const: 1") == 2
        assert lines[-1] == "    Const: 1"

    def test_long_operator_chain_repr(self):
        expr = tree_of("write " + " - ".join(["x"] * 1000)).value
        text = repr(expr)

        assert text.startswith("(" * 999 + "x - x)")
        assert text.endswith(" - x)")
