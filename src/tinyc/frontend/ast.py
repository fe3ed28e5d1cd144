"""
TINY Abstract Syntax Tree (AST) Definitions
===========================================

This module defines the AST node types produced by the TINY parser.

Node Hierarchy
--------------
ASTNode (base)
├── Statements (linked into sequences through `sibling`)
│   ├── IfStatement - if (cond) then ... [else ...] end
│   ├── RepeatStatement - repeat ... until cond
│   ├── AssignStatement - name := value
│   ├── ReadStatement - read name
│   ├── WriteStatement - write value
│   ├── WhileStatement - while cond do ... endwhile
│   ├── DoWhileStatement - do ... while (cond)
│   └── ForStatement - for name := start to|downto stop do ... enddo
└── Expressions
    ├── OpExpression - binary operator
    ├── ConstExpression - integer literal
    └── IdExpression - variable reference

Design Notes
------------
- Every child slot is Optional. A parse that fails inside a subexpression
  leaves the slot empty, so consumers must handle None.
- `children` exposes the classic three-slot view of any node, derived
  from its named fields; unused slots are always None.
- A statement sequence is a singly linked list through `sibling`;
  `iter_sequence` walks it.
- Each node kind carries only the attribute it needs (name, value or
  operator); there is no shared attribute field.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterator, Optional, Union

from tinyc.errors import SourceLocation


# =============================================================================
# Kinds and Operators
# =============================================================================

class StatementKind(Enum):
    """Statement node kinds."""
    IF = auto()
    REPEAT = auto()
    ASSIGN = auto()
    READ = auto()
    WRITE = auto()
    WHILE = auto()
    DO_WHILE = auto()
    FOR = auto()


class ExpressionKind(Enum):
    """Expression node kinds."""
    OP = auto()
    CONST = auto()
    ID = auto()


class Operator(Enum):
    """Binary operators, valued by their source spelling."""
    LT = "<"
    EQ = "="
    GT = ">"
    PLUS = "+"
    MINUS = "-"
    TIMES = "*"
    OVER = "/"
    MOD = "mod"

    def __str__(self) -> str:
        return self.value


class LoopDirection(Enum):
    """Counting direction of a for loop."""
    TO = "to"
    DOWNTO = "downto"

    def __str__(self) -> str:
        return self.value


# =============================================================================
# AST Node Base Classes
# =============================================================================

@dataclass
class ASTNode:
    """
    Base class for all AST nodes.

    Attributes:
        location: Source location where this node starts
    """
    location: SourceLocation

    @property
    def line(self) -> int:
        """Source line captured when the node was created."""
        return self.location.line

    @property
    def children(self) -> tuple[Optional["ASTNode"], Optional["ASTNode"], Optional["ASTNode"]]:
        """The three child slots of this node, in grammar order."""
        return (None, None, None)

    def __repr__(self) -> str:
        """Default representation showing node type."""
        return f"{self.__class__.__name__}@{self.location.line}:{self.location.column}"


@dataclass
class Expression(ASTNode):
    """Base class for expression nodes."""

    kind = None  # overridden per subclass

    def __repr__(self) -> str:
        return ExpressionPrinter().format(self)


@dataclass
class Statement(ASTNode):
    """
    Base class for statement nodes.

    Attributes:
        sibling: The next statement of the same sequence, if any
    """
    sibling: Optional["Statement"] = field(default=None, repr=False, compare=False)

    kind = None  # overridden per subclass


# =============================================================================
# Statement Nodes
# =============================================================================

@dataclass
class IfStatement(Statement):
    """
    if '(' exp ')' then seq [else seq] end

    Attributes:
        condition: The condition expression
        then_part: First statement of the then-sequence
        else_part: First statement of the else-sequence (None without else)
    """
    condition: Optional[Expression] = None
    then_part: Optional[Statement] = None
    else_part: Optional[Statement] = None

    kind = StatementKind.IF

    @property
    def children(self):
        return (self.condition, self.then_part, self.else_part)


@dataclass
class RepeatStatement(Statement):
    """
    repeat seq until exp

    Attributes:
        body: First statement of the loop body
        condition: Exit condition, tested after the body
    """
    body: Optional[Statement] = None
    condition: Optional[Expression] = None

    kind = StatementKind.REPEAT

    @property
    def children(self):
        return (self.body, self.condition, None)


@dataclass
class AssignStatement(Statement):
    """
    id ':=' exp

    Attributes:
        name: Target variable (None if the identifier was missing)
        value: Assigned expression
    """
    name: Optional[str] = None
    value: Optional[Expression] = None

    kind = StatementKind.ASSIGN

    @property
    def children(self):
        return (self.value, None, None)


@dataclass
class ReadStatement(Statement):
    """read id"""
    name: Optional[str] = None

    kind = StatementKind.READ


@dataclass
class WriteStatement(Statement):
    """write exp"""
    value: Optional[Expression] = None

    kind = StatementKind.WRITE

    @property
    def children(self):
        return (self.value, None, None)


@dataclass
class WhileStatement(Statement):
    """
    while exp do seq endwhile

    Attributes:
        condition: Loop condition, tested before the body
        body: First statement of the loop body
    """
    condition: Optional[Expression] = None
    body: Optional[Statement] = None

    kind = StatementKind.WHILE

    @property
    def children(self):
        return (self.condition, self.body, None)


@dataclass
class DoWhileStatement(Statement):
    """
    do seq while '(' exp ')'

    Attributes:
        body: First statement of the loop body
        condition: Loop condition, tested after the body
    """
    body: Optional[Statement] = None
    condition: Optional[Expression] = None

    kind = StatementKind.DO_WHILE

    @property
    def children(self):
        return (self.body, self.condition, None)


@dataclass
class ForStatement(Statement):
    """
    for id ':=' simple-exp (to|downto) simple-exp do seq enddo

    Attributes:
        name: Loop variable (None if the identifier was missing)
        start: Initial value
        stop: Final value
        body: First statement of the loop body
        direction: Whether the loop counts up (to) or down (downto)
    """
    name: Optional[str] = None
    start: Optional[Expression] = None
    stop: Optional[Expression] = None
    body: Optional[Statement] = None
    direction: LoopDirection = LoopDirection.TO

    kind = StatementKind.FOR

    @property
    def children(self):
        return (self.start, self.stop, self.body)


# =============================================================================
# Expression Nodes
# =============================================================================

@dataclass(repr=False)
class OpExpression(Expression):
    """
    Binary operation (left op right).

    Attributes:
        operator: The binary operator
        left: Left operand
        right: Right operand
    """
    operator: Operator = None
    left: Optional[Expression] = None
    right: Optional[Expression] = None

    kind = ExpressionKind.OP

    @property
    def children(self):
        return (self.left, self.right, None)


@dataclass(repr=False)
class ConstExpression(Expression):
    """Integer literal."""
    value: int = 0

    kind = ExpressionKind.CONST


@dataclass(repr=False)
class IdExpression(Expression):
    """Variable reference."""
    name: str = ""

    kind = ExpressionKind.ID


Node = Union[Statement, Expression]


# =============================================================================
# Sequence Helpers
# =============================================================================

def iter_sequence(first: Optional[Statement]) -> Iterator[Statement]:
    """Yield a statement and every statement linked after it."""
    stmt = first
    while stmt is not None:
        yield stmt
        stmt = stmt.sibling


def sequence_to_list(first: Optional[Statement]) -> list[Statement]:
    """Return a statement sequence as a list."""
    return list(iter_sequence(first))


# =============================================================================
# AST Visitor Base Class
# =============================================================================

class ASTVisitor:
    """
    Base class for AST visitors.

    Dispatches to visit_<ClassName> methods. visit() handles one node;
    visit_children() walks every populated slot, following sibling
    chains iteratively so long sequences do not deepen the recursion.
    """

    def visit(self, node: Optional[ASTNode]):
        """Visit a node (None is ignored)."""
        if node is None:
            return None
        method_name = f"visit_{node.__class__.__name__}"
        visitor = getattr(self, method_name, self.generic_visit)
        return visitor(node)

    def visit_sequence(self, node: Optional[ASTNode]) -> None:
        """Visit a node and, for statements, every sibling after it."""
        if isinstance(node, Statement):
            for stmt in iter_sequence(node):
                self.visit(stmt)
        else:
            self.visit(node)

    def visit_children(self, node: ASTNode) -> None:
        """Visit every populated child slot in order."""
        for child in node.children:
            self.visit_sequence(child)

    def generic_visit(self, node: ASTNode):
        return self.visit_children(node)


# =============================================================================
# AST Pretty Printer
# =============================================================================

def _chain(node: Optional[ASTNode]) -> list[ASTNode]:
    """A child slot as a list: the whole sequence for statements."""
    if node is None:
        return []
    if isinstance(node, Statement):
        return sequence_to_list(node)
    return [node]


class ASTPrinter(ASTVisitor):
    """
    Pretty printer in the classic TINY listing format.

    The tree is walked with an explicit stack of (node, depth) pairs, so
    long operator chains and deep nesting print without recursion. The
    visit_* methods only supply each node's label.

    Usage:
        printer = ASTPrinter()
        output = printer.print(tree)
        print(output)

    Example output for `if (x < 10) then write x end`:
        If
          Op: <
            Id: x
            Const: 10
          Write
            Id: x
    """

    def __init__(self, indent: str = "  "):
        self.output: list[str] = []
        self.indent_level = 0
        self.indent = indent

    def print(self, node: Optional[ASTNode]) -> str:
        """Print the tree (and any siblings of the root) and return it."""
        self.output = []
        stack = [(root, 0) for root in reversed(_chain(node))]

        while stack:
            current, self.indent_level = stack.pop()
            self._emit(self.visit(current))

            pending = []
            for child in current.children:
                pending.extend((sub, self.indent_level + 1) for sub in _chain(child))
            stack.extend(reversed(pending))

        self.indent_level = 0
        return "\n".join(self.output)

    def _emit(self, text: str) -> None:
        """Emit a line with current indentation."""
        self.output.append(f"{self.indent * self.indent_level}{text}")

    def generic_visit(self, node: ASTNode) -> str:
        return node.__class__.__name__

    def visit_IfStatement(self, node: IfStatement) -> str:
        return "If"

    def visit_RepeatStatement(self, node: RepeatStatement) -> str:
        return "Repeat"

    def visit_AssignStatement(self, node: AssignStatement) -> str:
        return f"Assign to: {node.name}"

    def visit_ReadStatement(self, node: ReadStatement) -> str:
        return f"Read: {node.name}"

    def visit_WriteStatement(self, node: WriteStatement) -> str:
        return "Write"

    def visit_WhileStatement(self, node: WhileStatement) -> str:
        return "While"

    def visit_DoWhileStatement(self, node: DoWhileStatement) -> str:
        return "DoWhile"

    def visit_ForStatement(self, node: ForStatement) -> str:
        return f"For: {node.name} {node.direction}"

    def visit_OpExpression(self, node: OpExpression) -> str:
        return f"Op: {node.operator}"

    def visit_ConstExpression(self, node: ConstExpression) -> str:
        return f"Const: {node.value}"

    def visit_IdExpression(self, node: IdExpression) -> str:
        return f"Id: {node.name}"


class ExpressionPrinter:
    """Render an expression as fully parenthesized infix text."""

    def format(self, expr: Optional[Expression]) -> str:
        # Post-order walk; an Op is pushed twice, formatted on the second pop
        results: list[str] = []
        stack: list[tuple[Optional[Expression], bool]] = [(expr, False)]

        while stack:
            node, operands_done = stack.pop()
            if not isinstance(node, OpExpression):
                results.append(self._format_leaf(node))
            elif operands_done:
                right = results.pop()
                left = results.pop()
                results.append(f"({left} {node.operator} {right})")
            else:
                stack.append((node, True))
                stack.append((node.right, False))
                stack.append((node.left, False))

        return results[0]

    def _format_leaf(self, expr: Optional[Expression]) -> str:
        if expr is None:
            return "<missing>"
        if isinstance(expr, ConstExpression):
            return str(expr.value)
        if isinstance(expr, IdExpression):
            return expr.name
        return f"<{type(expr).__name__}>"
