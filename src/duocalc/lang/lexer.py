"""
Lexer for duocalc command lines.

Converts one line of input into a stream of tokens for the parser.
Supports:
- Numbers as runs of digits and decimal points (conversion happens in the parser)
- Identifiers (letters, digits, underscores; not starting with a digit)
- The operators + - * /, parentheses and '='

The lexer never fails: a character outside the language becomes an INVALID
token and the parser reports it.
"""

from typing import List, Optional, Iterator
from .tokens import Token, TokenType, SourceLocation, SourceSpan, SINGLE_CHAR_TOKENS
from .errors import Diagnostic, diagnostic_invalid_character


DIGITS = "0123456789"
LETTERS = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ_"


def is_digit(ch: str) -> bool:
    return ch != "" and ch in DIGITS


def is_letter(ch: str) -> bool:
    return ch != "" and ch in LETTERS


class Lexer:
    """
    Single-pass scanner over one command line.

    Usage:
        lexer = Lexer("x = 2 * (y + 1)")
        token = lexer.next_token()

    Or for the whole line:
        tokens = Lexer(line).tokenize()
    """

    def __init__(self, source: str, filename: Optional[str] = None):
        self.source = source
        self.filename = filename
        self.pos = 0            # Current position in source
        self.column = 1         # Current column (1-indexed)
        self.diagnostics: List[Diagnostic] = []  # E001 notes for INVALID tokens

    def _location(self) -> SourceLocation:
        """Get current source location."""
        return SourceLocation(1, self.column, self.pos, self.filename)

    def _span(self, start: SourceLocation) -> SourceSpan:
        """Create a span from start to current position."""
        return SourceSpan(start, self._location())

    def _peek(self) -> str:
        """Look at the current character without consuming it ('' at end)."""
        if self.pos >= len(self.source):
            return ""
        return self.source[self.pos]

    def _advance(self) -> str:
        """Consume and return current character."""
        if self.pos >= len(self.source):
            return ""
        ch = self.source[self.pos]
        self.pos += 1
        self.column += 1
        return ch

    def _skip_whitespace(self) -> None:
        """Skip spaces and tabs."""
        while self._peek() in (" ", "\t"):
            self._advance()

    def _make_token(self, token_type: TokenType, start: SourceLocation) -> Token:
        lexeme = self.source[start.offset:self.pos]
        return Token(token_type, lexeme, self._span(start))

    def _scan_number(self) -> Token:
        """Scan a run of digits and decimal points."""
        start = self._location()
        while is_digit(self._peek()) or self._peek() == ".":
            self._advance()
        return self._make_token(TokenType.NUMBER, start)

    def _scan_identifier(self) -> Token:
        """Scan an identifier."""
        start = self._location()
        while is_letter(self._peek()) or is_digit(self._peek()):
            self._advance()
        return self._make_token(TokenType.IDENTIFIER, start)

    def next_token(self) -> Token:
        """Scan the next token. Returns EOF on every call once input is exhausted."""
        self._skip_whitespace()

        start = self._location()
        ch = self._peek()

        if ch == "":
            return Token(TokenType.EOF, "", self._span(start))

        if is_digit(ch) or ch == ".":
            return self._scan_number()

        if is_letter(ch):
            return self._scan_identifier()

        self._advance()
        token_type = SINGLE_CHAR_TOKENS.get(ch, TokenType.INVALID)
        token = self._make_token(token_type, start)
        if token_type == TokenType.INVALID:
            self.diagnostics.append(
                diagnostic_invalid_character(ch, token.span, self.source)
            )
        return token

    def tokenize(self) -> List[Token]:
        """Tokenize the entire line, returning a list of tokens ending in EOF."""
        tokens = []
        while True:
            token = self.next_token()
            tokens.append(token)
            if token.type == TokenType.EOF:
                break
        return tokens

    def __iter__(self) -> Iterator[Token]:
        """Iterate over tokens."""
        while True:
            token = self.next_token()
            yield token
            if token.type == TokenType.EOF:
                break


def tokenize(source: str, filename: Optional[str] = None) -> List[Token]:
    """
    Convenience function to tokenize a command line.

    Args:
        source: The line to tokenize
        filename: Optional name used in diagnostics

    Returns:
        List of tokens, the last one being EOF
    """
    return Lexer(source, filename).tokenize()
