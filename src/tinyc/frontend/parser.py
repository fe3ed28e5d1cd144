"""
TINY Recursive Descent Parser
=============================

This module implements the recursive descent parser for the TINY
language. It pulls tokens from a token source one at a time and builds
an Abstract Syntax Tree (AST), recording syntax errors as it goes.

Grammar (EBNF)
--------------
program         ::= stmt_sequence EOF
stmt_sequence   ::= statement (';' statement)*
statement       ::= if_stmt | repeat_stmt | assign_stmt | read_stmt
                  | write_stmt | while_stmt | dowhile_stmt | for_stmt

if_stmt         ::= 'if' '(' exp ')' 'then' stmt_sequence
                    ['else' stmt_sequence] 'end'
repeat_stmt     ::= 'repeat' stmt_sequence 'until' exp
assign_stmt     ::= ID ':=' exp
read_stmt       ::= 'read' ID
write_stmt      ::= 'write' exp
while_stmt      ::= 'while' exp 'do' stmt_sequence 'endwhile'
dowhile_stmt    ::= 'do' stmt_sequence 'while' '(' exp ')'
for_stmt        ::= 'for' ID ':=' simple_exp ('to' | 'downto') simple_exp
                    'do' stmt_sequence 'enddo'

exp             ::= simple_exp [('<' | '=' | '>') simple_exp]
simple_exp      ::= term (('+' | '-') term)*
term            ::= factor (('*' | '/' | 'mod') factor)*
factor          ::= NUM | ID | '(' exp ')'

A statement sequence ends (without consuming it) at one of:
EOF, end, else, until, while, endwhile, enddo.

Error Recovery
--------------
Recovery is deliberately minimal and comes in two tiers:

1. _match() reports a mismatch but does NOT advance; the same token stays
   current, so later matches against it may report again.
2. The statement dispatcher and factor report an unusable token and
   ALWAYS consume it. This guarantees forward progress.

Statements and parentheses nested deeper than MAX_NESTING_DEPTH are
reported as "nesting too deep" and the offending token is skipped, as in
tier 2.

Errors never propagate as exceptions: every parse returns a (possibly
partial) tree together with its DiagnosticRecorder.

Example Usage
-------------
>>> from tinyc.frontend.parser import parse_source
>>> result = parse_source("read x; if (x < 10) then write x end")
>>> result.had_error
False
"""

from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, Optional
import logging

from tinyc.frontend.lexer import TinyLexer, Token, TokenType, TOKEN_SPELLINGS
from tinyc.frontend.ast import (
    Statement,
    Expression,
    IfStatement,
    RepeatStatement,
    AssignStatement,
    ReadStatement,
    WriteStatement,
    WhileStatement,
    DoWhileStatement,
    ForStatement,
    OpExpression,
    ConstExpression,
    IdExpression,
    Operator,
    LoopDirection,
    sequence_to_list,
)
from tinyc.frontend.errors import (
    DiagnosticRecorder,
    FrontEndError,
    UnexpectedTokenError,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Parse Result
# =============================================================================

@dataclass
class ParseResult:
    """
    Outcome of a parse.

    Attributes:
        tree: First statement of the top-level sequence (None if nothing
              could be parsed)
        diagnostics: The recorder holding every syntax error
    """
    tree: Optional[Statement]
    diagnostics: DiagnosticRecorder

    @property
    def had_error(self) -> bool:
        """True if any syntax error was recorded; check before using the tree."""
        return self.diagnostics.had_error

    @property
    def errors(self) -> list[FrontEndError]:
        return self.diagnostics.errors

    def statements(self) -> list[Statement]:
        """Top-level statements in source order."""
        return sequence_to_list(self.tree)


# =============================================================================
# Parser
# =============================================================================

class TinyParser:
    """
    Recursive descent parser for TINY.

    One method per nonterminal. The parser keeps exactly one buffered
    lookahead token pulled from the token source. Each instance owns its
    own cursor and diagnostics, and is meant for a single parse() call.

    Attributes:
        filename: Source filename for error reporting
        source_lines: Original source lines for error context
        diagnostics: Recorder receiving every syntax error
    """

    # Lookaheads that end a statement sequence
    SEQUENCE_TERMINATORS = frozenset({
        TokenType.EOF,
        TokenType.END,
        TokenType.ELSE,
        TokenType.UNTIL,
        TokenType.WHILE,
        TokenType.ENDWHILE,
        TokenType.ENDDO,
    })

    RELATIONAL_OPERATORS = {
        TokenType.LT: Operator.LT,
        TokenType.EQ: Operator.EQ,
        TokenType.GT: Operator.GT,
    }

    ADDITIVE_OPERATORS = {
        TokenType.PLUS: Operator.PLUS,
        TokenType.MINUS: Operator.MINUS,
    }

    MULTIPLICATIVE_OPERATORS = {
        TokenType.TIMES: Operator.TIMES,
        TokenType.OVER: Operator.OVER,
        TokenType.MOD: Operator.MOD,
    }

    # Nested statements plus parentheses; keeps the recursion well inside
    # the interpreter's default limit
    MAX_NESTING_DEPTH = 100

    def __init__(
        self,
        tokens: Iterable[Token],
        filename: str = "<input>",
        source_lines: Optional[list[str]] = None,
        recorder: Optional[DiagnosticRecorder] = None,
    ):
        """
        Initialize the parser.

        Args:
            tokens: Token source (a list, or a lazy generator such as
                    TinyLexer.tokenize())
            filename: Source filename for error messages
            source_lines: Original source lines for error context
            recorder: Diagnostic recorder to report into (a fresh one is
                      created when omitted)
        """
        self._tokens: Iterator[Token] = iter(tokens)
        self.filename = filename
        self.source_lines = source_lines or []
        self.diagnostics = recorder if recorder is not None else DiagnosticRecorder(filename)

        # The single buffered lookahead token
        self._token: Optional[Token] = None

        # Current count of open statements and parentheses
        self._depth = 0

    def parse(self) -> ParseResult:
        """
        Parse the whole token stream.

        Returns:
            ParseResult with the tree and the diagnostics. The tree may be
            partial when had_error is set.
        """
        self._advance()
        tree = self._parse_sequence()

        if self._token.type != TokenType.EOF:
            self._report(
                f"code ends before file (found {self._token.describe()})",
                hint="statements must be separated by ';'",
            )

        logger.debug(
            f"Parsed {len(sequence_to_list(tree))} top-level statements "
            f"with {self.diagnostics.error_count()} errors"
        )
        return ParseResult(tree=tree, diagnostics=self.diagnostics)

    # =========================================================================
    # Token Access Methods
    # =========================================================================

    def _advance(self) -> Optional[Token]:
        """
        Pull the next token into the lookahead and return the previous one.

        Once the source is exhausted the lookahead stays on EOF.
        """
        previous = self._token
        try:
            self._token = next(self._tokens)
        except StopIteration:
            if previous is None or previous.type != TokenType.EOF:
                line = previous.line if previous is not None else 1
                self._token = Token(TokenType.EOF, None, line, 0, self.filename)
        return previous

    def _check(self, *types: TokenType) -> bool:
        """Check if the lookahead is one of the given types."""
        return self._token.type in types

    def _match(self, expected: TokenType) -> None:
        """
        Consume the lookahead if it is the expected token.

        On mismatch an error is reported and the lookahead is left in
        place, so the caller carries on with the same token.
        """
        if self._token.type == expected:
            self._advance()
        else:
            self._unexpected(TOKEN_SPELLINGS.get(expected))

    def _skip_unexpected(self, expected: Optional[str] = None) -> None:
        """Report the lookahead as unexpected and consume it."""
        skipped = self._token
        self._unexpected(expected)
        self._advance()
        logger.debug(f"Skipped {skipped!r}")

    def _nesting_too_deep(self) -> None:
        """Report the nesting limit at the lookahead and consume it."""
        skipped = self._token
        self._report(
            f"nesting too deep (found {skipped.describe()})",
            hint=f"at most {self.MAX_NESTING_DEPTH} nested statements or parentheses",
        )
        self._advance()
        logger.debug(f"Skipped {skipped!r} past nesting limit")

    # =========================================================================
    # Error Reporting
    # =========================================================================

    def _get_source_line(self, line: int) -> Optional[str]:
        """Get source line for error reporting."""
        if 0 < line <= len(self.source_lines):
            return self.source_lines[line - 1]
        return None

    def _unexpected(self, expected: Optional[str] = None) -> None:
        """Record the lookahead as an unexpected token."""
        token = self._token
        self.diagnostics.add(UnexpectedTokenError(
            token.describe(),
            expected=expected,
            location=token.location,
            source_line=self._get_source_line(token.line),
        ))

    def _report(self, message: str, hint: Optional[str] = None) -> None:
        """Record a syntax error at the lookahead."""
        self.diagnostics.report(
            self._token.location,
            message,
            hint=hint,
            source_line=self._get_source_line(self._token.line),
        )

    # =========================================================================
    # Statement Sequences and Dispatch
    # =========================================================================

    def _parse_sequence(self) -> Optional[Statement]:
        """
        Parse statements separated by ';' up to a sequence terminator.

        Statements that fail to parse are left out of the sibling chain.
        """
        first = self._parse_statement()
        last = first

        while not self._check(*self.SEQUENCE_TERMINATORS):
            self._match(TokenType.SEMI)
            stmt = self._parse_statement()
            if stmt is None:
                continue
            if first is None:
                first = last = stmt
            else:
                last.sibling = stmt
                last = stmt

        return first

    def _parse_statement(self) -> Optional[Statement]:
        """
        Parse one statement, counting it against the nesting limit.

        Past the limit the lookahead is reported and skipped, and no
        statement is built.
        """
        if self._depth >= self.MAX_NESTING_DEPTH:
            self._nesting_too_deep()
            return None

        self._depth += 1
        try:
            return self._dispatch_statement()
        finally:
            self._depth -= 1

    def _dispatch_statement(self) -> Optional[Statement]:
        """Dispatch on the lookahead to a statement production."""
        token_type = self._token.type

        if token_type == TokenType.IF:
            return self._parse_if_statement()
        if token_type == TokenType.REPEAT:
            return self._parse_repeat_statement()
        if token_type == TokenType.ID:
            return self._parse_assign_statement()
        if token_type == TokenType.READ:
            return self._parse_read_statement()
        if token_type == TokenType.WRITE:
            return self._parse_write_statement()
        if token_type == TokenType.WHILE:
            return self._parse_while_statement()
        if token_type == TokenType.DO:
            return self._parse_do_while_statement()
        if token_type == TokenType.FOR:
            return self._parse_for_statement()

        self._skip_unexpected("statement")
        return None

    # =========================================================================
    # Statement Productions
    # =========================================================================

    def _parse_if_statement(self) -> IfStatement:
        """Parse if statement."""
        location = self._token.location
        self._match(TokenType.IF)
        self._match(TokenType.LPAREN)
        condition = self._parse_expression()
        self._match(TokenType.RPAREN)
        self._match(TokenType.THEN)
        then_part = self._parse_sequence()

        else_part = None
        if self._check(TokenType.ELSE):
            self._match(TokenType.ELSE)
            else_part = self._parse_sequence()

        self._match(TokenType.END)

        return IfStatement(
            location=location,
            condition=condition,
            then_part=then_part,
            else_part=else_part,
        )

    def _parse_repeat_statement(self) -> RepeatStatement:
        """Parse repeat-until statement."""
        location = self._token.location
        self._match(TokenType.REPEAT)
        body = self._parse_sequence()
        self._match(TokenType.UNTIL)
        condition = self._parse_expression()

        return RepeatStatement(location=location, body=body, condition=condition)

    def _parse_assign_statement(self) -> AssignStatement:
        """Parse assignment statement."""
        location = self._token.location
        name = self._identifier_name()
        self._match(TokenType.ID)
        self._match(TokenType.ASSIGN)
        value = self._parse_expression()

        return AssignStatement(location=location, name=name, value=value)

    def _parse_read_statement(self) -> ReadStatement:
        """Parse read statement."""
        location = self._token.location
        self._match(TokenType.READ)
        name = self._identifier_name()
        self._match(TokenType.ID)

        return ReadStatement(location=location, name=name)

    def _parse_write_statement(self) -> WriteStatement:
        """Parse write statement."""
        location = self._token.location
        self._match(TokenType.WRITE)
        value = self._parse_expression()

        return WriteStatement(location=location, value=value)

    def _parse_while_statement(self) -> WhileStatement:
        """Parse while statement (condition is not parenthesized)."""
        location = self._token.location
        self._match(TokenType.WHILE)
        condition = self._parse_expression()
        self._match(TokenType.DO)
        body = self._parse_sequence()
        self._match(TokenType.ENDWHILE)

        return WhileStatement(location=location, condition=condition, body=body)

    def _parse_do_while_statement(self) -> DoWhileStatement:
        """Parse do-while statement (condition is parenthesized)."""
        location = self._token.location
        self._match(TokenType.DO)
        body = self._parse_sequence()
        self._match(TokenType.WHILE)
        self._match(TokenType.LPAREN)
        condition = self._parse_expression()
        self._match(TokenType.RPAREN)

        return DoWhileStatement(location=location, body=body, condition=condition)

    def _parse_for_statement(self) -> ForStatement:
        """Parse counting for statement."""
        location = self._token.location
        self._match(TokenType.FOR)
        name = self._identifier_name()
        self._match(TokenType.ID)
        self._match(TokenType.ASSIGN)
        start = self._parse_simple_expression()

        if self._check(TokenType.DOWNTO):
            self._match(TokenType.DOWNTO)
            direction = LoopDirection.DOWNTO
        else:
            # Stricter than the classic for_stmt, which accepts a missing
            # direction silently; here it is reported and counting up assumed
            self._match(TokenType.TO)
            direction = LoopDirection.TO

        stop = self._parse_simple_expression()
        self._match(TokenType.DO)
        body = self._parse_sequence()
        self._match(TokenType.ENDDO)

        return ForStatement(
            location=location,
            name=name,
            start=start,
            stop=stop,
            body=body,
            direction=direction,
        )

    def _identifier_name(self) -> Optional[str]:
        """Name of the lookahead if it is an identifier, else None."""
        if self._check(TokenType.ID):
            return self._token.value
        return None

    # =========================================================================
    # Expression Parsing
    # =========================================================================

    def _parse_expression(self) -> Optional[Expression]:
        """
        Parse exp: at most one relational operator.

        `a < b < c` stops after `a < b`; the second `<` is left for the
        caller.
        """
        left = self._parse_simple_expression()

        if self._token.type in self.RELATIONAL_OPERATORS:
            op_token = self._advance()
            right = self._parse_simple_expression()
            return OpExpression(
                location=op_token.location,
                operator=self.RELATIONAL_OPERATORS[op_token.type],
                left=left,
                right=right,
            )

        return left

    def _parse_simple_expression(self) -> Optional[Expression]:
        """Parse additive expression (+ -)."""
        return self._parse_binary(self._parse_term, self.ADDITIVE_OPERATORS)

    def _parse_term(self) -> Optional[Expression]:
        """Parse multiplicative expression (* / mod)."""
        return self._parse_binary(self._parse_factor, self.MULTIPLICATIVE_OPERATORS)

    def _parse_binary(
        self,
        operand_parser: Callable[[], Optional[Expression]],
        operators: dict[TokenType, Operator],
    ) -> Optional[Expression]:
        """
        Left-associative chain of binary operators at one precedence level.

        Args:
            operand_parser: Function to parse operands
            operators: Map of token types to operators for this level
        """
        expr = operand_parser()

        while self._token.type in operators:
            op_token = self._advance()
            right = operand_parser()
            expr = OpExpression(
                location=op_token.location,
                operator=operators[op_token.type],
                left=expr,
                right=right,
            )

        return expr

    def _parse_factor(self) -> Optional[Expression]:
        """Parse factor: number, identifier or parenthesized expression."""
        token = self._token

        if token.type == TokenType.NUM:
            self._advance()
            return ConstExpression(location=token.location, value=int(token.value))

        if token.type == TokenType.ID:
            self._advance()
            return IdExpression(location=token.location, name=token.value)

        if token.type == TokenType.LPAREN:
            if self._depth >= self.MAX_NESTING_DEPTH:
                self._nesting_too_deep()
                return None

            self._advance()
            self._depth += 1
            try:
                expr = self._parse_expression()
            finally:
                self._depth -= 1
            self._match(TokenType.RPAREN)
            return expr

        self._skip_unexpected("expression")
        return None


# =============================================================================
# Convenience Functions
# =============================================================================

def parse_tokens(tokens: Iterable[Token], filename: str = "<input>") -> ParseResult:
    """Parse an already scanned token stream."""
    return TinyParser(tokens, filename).parse()


def parse_source(source: str, filename: str = "<input>") -> ParseResult:
    """
    Parse TINY source code into an AST.

    This is a convenience function that feeds the lexer straight into
    the parser, one token at a time.

    Args:
        source: The TINY source code
        filename: Source filename for error messages

    Returns:
        ParseResult with the tree and diagnostics
    """
    lexer = TinyLexer(source, filename)
    parser = TinyParser(lexer.tokenize(), filename, source.splitlines())
    return parser.parse()
