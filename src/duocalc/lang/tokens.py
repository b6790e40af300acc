"""
Token types for the duocalc expression lexer.

Error code ranges:
- E0xx: Lexer diagnostics
- E1xx: Parser errors
- E2xx: Evaluation errors
- E3xx: Session errors
- E4xx: Storage and configuration errors
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Optional


class TokenType(Enum):
    """All token types recognized by the expression lexer."""

    # --- Literals and names ---
    NUMBER = auto()             # 42, 3.14, .5 (lexeme kept uninterpreted)
    IDENTIFIER = auto()         # x, total_2, _tmp

    # --- Arithmetic operators ---
    PLUS = auto()               # +
    MINUS = auto()              # -
    STAR = auto()               # *
    SLASH = auto()              # /

    # --- Delimiters ---
    LPAREN = auto()             # (
    RPAREN = auto()             # )

    # --- Assignment ---
    ASSIGN = auto()             # =

    # --- Special ---
    EOF = auto()                # end of input
    INVALID = auto()            # any character outside the language


@dataclass(frozen=True)
class SourceLocation:
    """Represents a position in a command line."""
    line: int           # 1-indexed line number
    column: int         # 1-indexed column number
    offset: int         # 0-indexed character offset from start
    filename: Optional[str] = None

    def __str__(self) -> str:
        if self.filename:
            return f"{self.filename}:{self.line}:{self.column}"
        return f"{self.line}:{self.column}"


@dataclass(frozen=True)
class SourceSpan:
    """Represents a range in a command line."""
    start: SourceLocation
    end: SourceLocation

    def __str__(self) -> str:
        if self.start.filename:
            return f"{self.start.filename}:{self.start.line}:{self.start.column}-{self.end.line}:{self.end.column}"
        return f"{self.start.line}:{self.start.column}-{self.end.line}:{self.end.column}"


@dataclass(frozen=True)
class Token:
    """A single token from the lexer."""
    type: TokenType
    lexeme: str             # The original source text ("" for EOF)
    span: SourceSpan        # Location in source

    def __str__(self) -> str:
        if self.type in (TokenType.NUMBER, TokenType.IDENTIFIER, TokenType.INVALID):
            return f"{self.type.name}({self.lexeme!r})"
        return self.type.name


# Single-character tokens
SINGLE_CHAR_TOKENS: dict[str, TokenType] = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.STAR,
    "/": TokenType.SLASH,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "=": TokenType.ASSIGN,
}

# Binary operator token -> operator symbol stored in the AST
OPERATOR_SYMBOLS: dict[TokenType, str] = {
    TokenType.PLUS: "+",
    TokenType.MINUS: "-",
    TokenType.STAR: "*",
    TokenType.SLASH: "/",
}
