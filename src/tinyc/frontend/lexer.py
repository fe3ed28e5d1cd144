"""
TINY Lexer (Scanner)
====================

This module implements the scanner for the TINY teaching language.
It converts source text into a stream of tokens for the parser.

Token Categories
----------------
- Reserved words: if then else end repeat until read write
                  while endwhile do enddo for to downto mod
- Identifiers: a letter followed by letters, digits or underscores
- Numbers: decimal integer literals
- Symbols: := = < > + - * / % ( ) ;

Comments
--------
Comments are enclosed in braces and may span lines:

    { this is a comment }

Lexical Errors
--------------
The scanner never raises. Characters that do not start any token, a
lone ':' and an unterminated comment produce an ERROR token carrying the
offending text; the parser then reports it like any other token that
does not fit the grammar.

Example Usage
-------------
>>> from tinyc.frontend.lexer import TinyLexer
>>> for token in TinyLexer("read x; write x * 2", "test.tny").tokenize():
...     print(token)
Token(READ, 'read', 1:1)
Token(ID, 'x', 1:6)
Token(SEMI, ';', 1:7)
Token(WRITE, 'write', 1:9)
Token(ID, 'x', 1:15)
Token(TIMES, '*', 1:17)
Token(NUM, 2, 1:19)
Token(EOF, 1:20)
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Optional
import logging
import string

from tinyc.errors import SourceLocation

logger = logging.getLogger(__name__)


# =============================================================================
# Token Type Enumeration
# =============================================================================

class TokenType(Enum):
    """
    Token kinds for the TINY language.

    Reserved words are distinguished from identifiers so the parser can
    dispatch on a single lookahead token.
    """

    # === Book-keeping Tokens ===
    EOF = auto()            # End of input
    ERROR = auto()          # Lexical error (offending text in value)

    # === Reserved Words ===
    IF = auto()
    THEN = auto()
    ELSE = auto()
    END = auto()
    REPEAT = auto()
    UNTIL = auto()
    READ = auto()
    WRITE = auto()
    WHILE = auto()
    ENDWHILE = auto()
    DO = auto()
    ENDDO = auto()
    FOR = auto()
    TO = auto()
    DOWNTO = auto()

    # === Multicharacter Tokens ===
    ID = auto()             # Identifier
    NUM = auto()            # Integer literal

    # === Special Symbols ===
    ASSIGN = auto()         # :=
    EQ = auto()             # =
    LT = auto()             # <
    GT = auto()             # >
    PLUS = auto()           # +
    MINUS = auto()          # -
    TIMES = auto()          # *
    OVER = auto()           # /
    MOD = auto()            # mod or %
    LPAREN = auto()         # (
    RPAREN = auto()         # )
    SEMI = auto()           # ;


# =============================================================================
# Reserved Word and Symbol Tables
# =============================================================================

RESERVED_WORDS: dict[str, TokenType] = {
    "if": TokenType.IF,
    "then": TokenType.THEN,
    "else": TokenType.ELSE,
    "end": TokenType.END,
    "repeat": TokenType.REPEAT,
    "until": TokenType.UNTIL,
    "read": TokenType.READ,
    "write": TokenType.WRITE,
    "while": TokenType.WHILE,
    "endwhile": TokenType.ENDWHILE,
    "do": TokenType.DO,
    "enddo": TokenType.ENDDO,
    "for": TokenType.FOR,
    "to": TokenType.TO,
    "downto": TokenType.DOWNTO,
    "mod": TokenType.MOD,
}

SINGLE_SYMBOLS: dict[str, TokenType] = {
    "=": TokenType.EQ,
    "<": TokenType.LT,
    ">": TokenType.GT,
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.TIMES,
    "/": TokenType.OVER,
    "%": TokenType.MOD,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    ";": TokenType.SEMI,
}

# Spelling used when a token kind is named in a diagnostic ("expected ';'")
TOKEN_SPELLINGS: dict[TokenType, str] = {
    **{kind: f"'{word}'" for word, kind in RESERVED_WORDS.items()},
    **{kind: f"'{symbol}'" for symbol, kind in SINGLE_SYMBOLS.items()},
    TokenType.MOD: "'mod'",
    TokenType.ASSIGN: "':='",
    TokenType.ID: "identifier",
    TokenType.NUM: "number",
    TokenType.EOF: "end of file",
    TokenType.ERROR: "valid token",
}


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single token of TINY source.

    Attributes:
        type: The TokenType classification
        value: Lexeme text (str), integer value for NUM, None for EOF
        line: Line number in source (1-indexed)
        column: Column number in source (1-indexed)
        filename: Name of the source file
    """
    type: TokenType
    value: str | int | None
    line: int
    column: int
    filename: str = "<input>"

    def __repr__(self) -> str:
        """Format token for debugging output."""
        if self.value is not None:
            if isinstance(self.value, int):
                return f"Token({self.type.name}, {self.value}, {self.line}:{self.column})"
            return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"
        return f"Token({self.type.name}, {self.line}:{self.column})"

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation for error reporting."""
        return SourceLocation(self.filename, self.line, self.column)

    def is_reserved_word(self) -> bool:
        """Return True if this token is a reserved word."""
        return isinstance(self.value, str) and RESERVED_WORDS.get(self.value) is self.type

    def describe(self) -> str:
        """
        Describe the token in the traditional TINY listing style.

        Examples: 'reserved word: if', ':=', 'NUM, val= 10',
        'ID, name= x', 'EOF', 'ERROR: @'.
        """
        if self.type == TokenType.EOF:
            return "EOF"
        if self.type == TokenType.NUM:
            return f"NUM, val= {self.value}"
        if self.type == TokenType.ID:
            return f"ID, name= {self.value}"
        if self.type == TokenType.ERROR:
            return f"ERROR: {self.value}"
        if self.is_reserved_word():
            return f"reserved word: {self.value}"
        return str(self.value)


# =============================================================================
# Lexer Implementation
# =============================================================================

class TinyLexer:
    """
    Tokenizes TINY source code.

    Usage:
        lexer = TinyLexer(source_text, filename)
        tokens = list(lexer.tokenize())

    tokenize() is a generator, so the lexer can also serve as a lazy,
    pull-based token source for the parser.

    Attributes:
        source: The source code being tokenized
        filename: Name of the source file (for error reporting)
    """

    # Characters that can start an identifier
    IDENT_START = string.ascii_letters

    # Characters that can continue an identifier
    IDENT_CHARS = string.ascii_letters + string.digits + "_"

    def __init__(
        self,
        source: str,
        filename: str = "<input>",
        line_number: int = 1,
    ):
        """
        Initialize the lexer with source code.

        Args:
            source: The TINY source code to tokenize
            filename: Name of the source file (for error messages)
            line_number: Starting line number
        """
        self.source = source
        self.filename = filename

        self._pos = 0
        self._line = line_number
        self._column = 1

    def tokenize(self) -> Iterator[Token]:
        """
        Generate tokens from the source code.

        Yields:
            Token objects, always finishing with a single EOF token
        """
        while True:
            error = self._skip_whitespace_and_comments()
            if error is not None:
                yield error

            if self._at_end():
                break

            yield self._scan_token()

        yield self._make_token(TokenType.EOF, None)

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        """Check if we've reached the end of source."""
        return self._pos >= len(self.source)

    def _peek(self, offset: int = 0) -> str:
        """Look at a character without advancing; '' past the end."""
        pos = self._pos + offset
        if pos >= len(self.source):
            return ""
        return self.source[pos]

    def _advance(self) -> str:
        """Consume and return the current character, tracking line/column."""
        if self._at_end():
            return ""

        char = self.source[self._pos]
        self._pos += 1

        if char == "\n":
            self._line += 1
            self._column = 1
        else:
            self._column += 1

        return char

    def _make_token(
        self,
        token_type: TokenType,
        value: str | int | None,
        start_line: Optional[int] = None,
        start_column: Optional[int] = None,
    ) -> Token:
        """Create a token at the current or the given position."""
        return Token(
            type=token_type,
            value=value,
            line=start_line or self._line,
            column=start_column or self._column,
            filename=self.filename,
        )

    # =========================================================================
    # Whitespace and Comment Handling
    # =========================================================================

    def _skip_whitespace_and_comments(self) -> Optional[Token]:
        """
        Skip whitespace and { } comments.

        Returns:
            An ERROR token if a comment runs off the end of the input
        """
        while not self._at_end():
            char = self._peek()

            if char in " \t\n\r":
                self._advance()
                continue

            if char == "{":
                start_line = self._line
                start_column = self._column
                self._advance()
                while not self._at_end() and self._peek() != "}":
                    self._advance()
                if self._at_end():
                    logger.debug(f"Unterminated comment starting at line {start_line}")
                    return self._make_token(TokenType.ERROR, "{", start_line, start_column)
                self._advance()  # consume }
                continue

            break

        return None

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def _scan_token(self) -> Token:
        """Scan the next token from source."""
        start_line = self._line
        start_column = self._column

        char = self._peek()

        if char in self.IDENT_START:
            return self._scan_identifier(start_line, start_column)

        if char in string.digits:
            return self._scan_number(start_line, start_column)

        char = self._advance()

        if char == ":":
            if self._peek() == "=":
                self._advance()
                return self._make_token(TokenType.ASSIGN, ":=", start_line, start_column)
            logger.debug(f"Lone ':' at line {start_line}")
            return self._make_token(TokenType.ERROR, ":", start_line, start_column)

        if char in SINGLE_SYMBOLS:
            return self._make_token(SINGLE_SYMBOLS[char], char, start_line, start_column)

        logger.debug(f"Invalid character {char!r} at line {start_line}")
        return self._make_token(TokenType.ERROR, char, start_line, start_column)

    def _scan_identifier(self, start_line: int, start_column: int) -> Token:
        """Scan an identifier or reserved word."""
        chars = []
        while self._peek() and self._peek() in self.IDENT_CHARS:
            chars.append(self._advance())

        name = "".join(chars)

        if name in RESERVED_WORDS:
            return self._make_token(RESERVED_WORDS[name], name, start_line, start_column)

        return self._make_token(TokenType.ID, name, start_line, start_column)

    def _scan_number(self, start_line: int, start_column: int) -> Token:
        """Scan a decimal integer literal."""
        chars = []
        while self._peek() and self._peek() in string.digits:
            chars.append(self._advance())

        return self._make_token(TokenType.NUM, int("".join(chars)), start_line, start_column)


# =============================================================================
# Convenience Functions
# =============================================================================

def tokenize(source: str, filename: str = "<input>") -> list[Token]:
    """Scan a whole source string into a list of tokens (ending with EOF)."""
    return list(TinyLexer(source, filename).tokenize())
