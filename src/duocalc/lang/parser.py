"""
Recursive descent parser for duocalc command lines.

Converts the lexer's token stream into a single AST node.
"""

from typing import Optional
from .lexer import Lexer
from .tokens import Token, TokenType, SourceSpan, OPERATOR_SYMBOLS
from .ast import (
    AstNode, Node, NumberLiteral, VariableReference, BinaryOperation, Assignment,
)
from .errors import (
    error_unexpected_token,
    error_invalid_numeric_literal,
    error_invalid_assignment_target,
    error_nesting_too_deep,
)


NESTED_ASSIGNMENT_HINT = "assignment cannot be chained or used inside an expression"


class Parser:
    """
    Recursive descent parser with two tokens of lookahead.

    Usage:
        parser = Parser("x = 2 * (y + 1)")
        node = parser.parse_expression()

    Grammar (lowest to highest precedence, left-associative):
        assignment     := additive ( '=' additive )? EOF
        additive       := multiplicative ( ('+'|'-') multiplicative )*
        multiplicative := unary ( ('*'|'/') unary )*
        unary          := '-' unary | primary
        primary        := NUMBER | IDENTIFIER | '(' additive ')'
    """

    def __init__(self, source: str, filename: Optional[str] = None):
        self.source = source
        self.lexer = Lexer(source, filename)
        self.current: Token = self.lexer.next_token()
        self.peek: Token = self.lexer.next_token()

    # =========================================================================
    # Token Navigation
    # =========================================================================

    def _advance(self) -> Token:
        """Consume the current token, shifting peek into its place."""
        token = self.current
        self.current = self.peek
        self.peek = self.lexer.next_token()
        return token

    def _check(self, *token_types: TokenType) -> bool:
        """Check if current token is any of given types."""
        return self.current.type in token_types

    def _consume(self, token_type: TokenType, expected: str) -> Token:
        """Consume token of expected type, or raise error."""
        if self._check(token_type):
            return self._advance()
        self._error(expected)

    def _error(self, expected: Optional[str] = None) -> None:
        """Raise an unexpected-token error at the current token."""
        token = self.current
        hints = []
        if token.type == TokenType.ASSIGN:
            hints.append(NESTED_ASSIGNMENT_HINT)
        elif token.type == TokenType.INVALID:
            hints.extend(
                d.message for d in self.lexer.diagnostics if d.span == token.span
            )
        raise error_unexpected_token(
            token.lexeme,
            token.span,
            self.source,
            expected=expected,
            hints=hints,
        )

    # =========================================================================
    # Grammar rules
    # =========================================================================

    def parse_expression(self) -> Node:
        """
        Parse a complete command: an expression or a single assignment.

        Raises:
            NestingTooDeepError: If parentheses or unary minus signs nest
                beyond the interpreter's recursion limit
        """
        try:
            return self._parse_command()
        except RecursionError:
            raise error_nesting_too_deep(self.source) from None

    def _parse_command(self) -> Node:
        node = self._parse_additive()

        if self._check(TokenType.ASSIGN):
            if not isinstance(node, VariableReference):
                raise error_invalid_assignment_target(node.span, self.source)
            self._advance()  # consume '='
            value = self._parse_additive()
            node = Assignment(
                span=SourceSpan(node.span.start, value.span.end),
                target=node.name,
                value=value,
            )

        if not self._check(TokenType.EOF):
            self._error("end of input")
        return node

    def _parse_additive(self) -> AstNode:
        left = self._parse_multiplicative()

        while self._check(TokenType.PLUS, TokenType.MINUS):
            op = self._advance()
            right = self._parse_multiplicative()
            left = BinaryOperation(
                span=SourceSpan(left.span.start, right.span.end),
                left=left,
                operator=OPERATOR_SYMBOLS[op.type],
                right=right,
            )

        return left

    def _parse_multiplicative(self) -> AstNode:
        left = self._parse_unary()

        while self._check(TokenType.STAR, TokenType.SLASH):
            op = self._advance()
            right = self._parse_unary()
            left = BinaryOperation(
                span=SourceSpan(left.span.start, right.span.end),
                left=left,
                operator=OPERATOR_SYMBOLS[op.type],
                right=right,
            )

        return left

    def _parse_unary(self) -> AstNode:
        """Unary minus is rewritten as 0 - operand."""
        if self._check(TokenType.MINUS):
            op = self._advance()
            operand = self._parse_unary()
            return BinaryOperation(
                span=SourceSpan(op.span.start, operand.span.end),
                left=NumberLiteral(span=op.span, value=0.0),
                operator="-",
                right=operand,
            )

        return self._parse_primary()

    def _parse_primary(self) -> AstNode:
        token = self.current

        if token.type == TokenType.NUMBER:
            try:
                value = float(token.lexeme)
            except ValueError:
                raise error_invalid_numeric_literal(token.lexeme, token.span, self.source)
            self._advance()
            return NumberLiteral(span=token.span, value=value)

        if token.type == TokenType.IDENTIFIER:
            self._advance()
            return VariableReference(span=token.span, name=token.lexeme)

        if token.type == TokenType.LPAREN:
            self._advance()  # consume '('
            expr = self._parse_additive()
            self._consume(TokenType.RPAREN, "')'")
            return expr

        self._error("a number, a variable or '('")


def parse_expression(line: str, filename: Optional[str] = None) -> Node:
    """
    Convenience function to parse one command line.

    Args:
        line: The command line
        filename: Optional name used in diagnostics

    Returns:
        The root AST node

    Raises:
        ParseError: If the line is not a valid expression or assignment
    """
    return Parser(line, filename).parse_expression()
