"""
duocalc expression language front-end.

This module provides:
- Lexer: Tokenizes a command line
- Parser: Builds an AST from tokens
- AST: NumberLiteral, VariableReference, BinaryOperation, Assignment
- Errors: Diagnostics and the parse/evaluation error taxonomy

Usage:
    from duocalc.lang import tokenize, parse_expression, print_ast

    tokens = tokenize('x = 2 * (y + 1)')
    node = parse_expression('x = 2 * (y + 1)')
    print(print_ast(node))
"""

from .tokens import (
    Token,
    TokenType,
    SourceLocation,
    SourceSpan,
)

from .lexer import (
    Lexer,
    tokenize,
)

from .parser import (
    Parser,
    parse_expression,
)

from .ast import (
    AstNode,
    AstVisitor,
    Node,
    NumberLiteral,
    VariableReference,
    BinaryOperation,
    Assignment,
    print_ast,
)

from .errors import (
    CalcError,
    ParseError,
    UnexpectedTokenError,
    InvalidNumericLiteralError,
    InvalidAssignmentTargetError,
    NestingTooDeepError,
    EvalError,
    UndefinedVariableError,
    TypeMismatchError,
    DivisionByZeroError,
    SessionError,
    EmptyCommandError,
    StorageError,
    ConfigError,
    Diagnostic,
    ErrorSeverity,
)

__all__ = [
    # Tokens
    'Token',
    'TokenType',
    'SourceLocation',
    'SourceSpan',
    # Lexer
    'Lexer',
    'tokenize',
    # Parser
    'Parser',
    'parse_expression',
    # AST
    'AstNode',
    'AstVisitor',
    'Node',
    'NumberLiteral',
    'VariableReference',
    'BinaryOperation',
    'Assignment',
    'print_ast',
    # Errors
    'CalcError',
    'ParseError',
    'UnexpectedTokenError',
    'InvalidNumericLiteralError',
    'InvalidAssignmentTargetError',
    'NestingTooDeepError',
    'EvalError',
    'UndefinedVariableError',
    'TypeMismatchError',
    'DivisionByZeroError',
    'SessionError',
    'EmptyCommandError',
    'StorageError',
    'ConfigError',
    'Diagnostic',
    'ErrorSeverity',
]
