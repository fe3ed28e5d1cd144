"""
TINY Front End
==============

This package implements the front end for the TINY teaching language
(Louden's TINY, extended with while, do-while, for, mod and '>'):

- A scanner producing tokens on demand
- A recursive descent parser producing an AST
- A diagnostic recorder collecting syntax errors without aborting
- A printer dumping trees in the classic TINY listing format

Pipeline
--------
    TINY Source → Lexer → Parser → AST (+ diagnostics)

Usage
-----
>>> from tinyc.frontend import parse_source, ASTPrinter
>>> result = parse_source("read x; if (x < 10) then write x end")
>>> print(ASTPrinter().print(result.tree))
Read: x
If
  Op: <
    Id: x
    Const: 10
  Write
    Id: x

The parser never raises on bad input. Check ``result.had_error`` before
handing the tree to any later phase.
"""

from tinyc.frontend.driver import TinyFrontEnd, FrontEndOptions, FrontEndResult
from tinyc.frontend.errors import (
    FrontEndError,
    TinySyntaxError,
    UnexpectedTokenError,
    TinyCompilationError,
    DiagnosticRecorder,
)
from tinyc.frontend.lexer import TinyLexer, TokenType, Token, tokenize
from tinyc.frontend.parser import TinyParser, ParseResult, parse_source, parse_tokens
from tinyc.frontend.ast import (
    ASTNode,
    Statement,
    Expression,
    StatementKind,
    ExpressionKind,
    Operator,
    LoopDirection,
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
    ASTVisitor,
    ASTPrinter,
    iter_sequence,
    sequence_to_list,
)

__all__ = [
    # Driver
    "TinyFrontEnd",
    "FrontEndOptions",
    "FrontEndResult",
    # Errors
    "FrontEndError",
    "TinySyntaxError",
    "UnexpectedTokenError",
    "TinyCompilationError",
    "DiagnosticRecorder",
    # Lexer
    "TinyLexer",
    "TokenType",
    "Token",
    "tokenize",
    # Parser
    "TinyParser",
    "ParseResult",
    "parse_source",
    "parse_tokens",
    # AST
    "ASTNode",
    "Statement",
    "Expression",
    "StatementKind",
    "ExpressionKind",
    "Operator",
    "LoopDirection",
    "IfStatement",
    "RepeatStatement",
    "AssignStatement",
    "ReadStatement",
    "WriteStatement",
    "WhileStatement",
    "DoWhileStatement",
    "ForStatement",
    "OpExpression",
    "ConstExpression",
    "IdExpression",
    "ASTVisitor",
    "ASTPrinter",
    "iter_sequence",
    "sequence_to_list",
]
