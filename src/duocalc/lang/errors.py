"""
Calculator exceptions and diagnostics.

Error code ranges:
- E0xx: Lexer diagnostics (informational, the lexer never raises)
- E1xx: Parser errors
- E2xx: Evaluation errors
- E3xx: Session errors
- E4xx: Storage and configuration errors
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List
from .tokens import SourceSpan, SourceLocation


class ErrorSeverity(Enum):
    """Severity levels for diagnostics."""
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
    HINT = "hint"


@dataclass
class Diagnostic:
    """A single diagnostic message (error, warning, etc.)."""
    code: str                       # E101, E201, etc.
    message: str                    # Human-readable message
    severity: ErrorSeverity
    span: Optional[SourceSpan] = None
    source_line: Optional[str] = None   # The command line that failed
    hints: List[str] = field(default_factory=list)

    def format(self, show_source: bool = True) -> str:
        """Format the diagnostic for display."""
        parts = []

        # Header: location: severity[code]: message
        if self.span is not None:
            parts.append(f"{self.span.start}: {self.severity.value}[{self.code}]: {self.message}")
        else:
            parts.append(f"{self.severity.value}[{self.code}]: {self.message}")

        # Source line with caret
        if show_source and self.source_line is not None and self.span is not None:
            parts.append(f"  | {self.source_line}")
            col = self.span.start.column
            underline_len = max(1, self.span.end.column - col)
            parts.append(f"  | {' ' * (col - 1)}{'^' * underline_len}")

        for hint in self.hints:
            parts.append(f"  = hint: {hint}")

        return "\n".join(parts)


class CalcError(Exception):
    """Base exception for calculator errors."""

    def __init__(self, diagnostic: Diagnostic):
        self.diagnostic = diagnostic
        super().__init__(diagnostic.message)

    @property
    def code(self) -> str:
        return self.diagnostic.code

    def __str__(self) -> str:
        return self.diagnostic.message

    def format(self, show_source: bool = True) -> str:
        return self.diagnostic.format(show_source)


class ParseError(CalcError):
    """Error during parsing (E1xx)."""
    pass


class UnexpectedTokenError(ParseError):
    """E101: the grammar could not continue at a token."""

    def __init__(self, diagnostic: Diagnostic, token_text: str):
        super().__init__(diagnostic)
        self.token_text = token_text


class InvalidNumericLiteralError(ParseError):
    """E102: a digit run failed numeric conversion."""

    def __init__(self, diagnostic: Diagnostic, text: str):
        super().__init__(diagnostic)
        self.text = text


class InvalidAssignmentTargetError(ParseError):
    """E103: the left-hand side of '=' is not a bare variable name."""
    pass


class NestingTooDeepError(ParseError):
    """E104: the line is nested deeper than the parser can descend."""
    pass


class EvalError(CalcError):
    """Error during evaluation (E2xx)."""
    pass


class UndefinedVariableError(EvalError):
    """E201: a name present in neither namespace."""

    def __init__(self, diagnostic: Diagnostic, name: str):
        super().__init__(diagnostic)
        self.name = name


class TypeMismatchError(EvalError):
    """E202: arithmetic with a text operand."""
    pass


class DivisionByZeroError(EvalError):
    """E203: right operand of '/' is zero."""
    pass


class SessionError(CalcError):
    """Error in the session driver (E3xx)."""
    pass


class EmptyCommandError(SessionError):
    """E301: blank command line."""
    pass


class StorageError(CalcError):
    """E401: the state file could not be read or has the wrong shape."""
    pass


class ConfigError(CalcError):
    """E402: invalid configuration."""
    pass


# --- Lexer diagnostics ---

def diagnostic_invalid_character(char: str, span: SourceSpan, source_line: str = None) -> Diagnostic:
    """E001: Character outside the expression language."""
    return Diagnostic(
        code="E001",
        message=f"invalid character '{char}'",
        severity=ErrorSeverity.INFO,
        span=span,
        source_line=source_line,
    )


# --- Parser error codes ---

def error_unexpected_token(token_text: str, span: SourceSpan, source_line: str = None,
                           expected: Optional[str] = None,
                           hints: Optional[List[str]] = None) -> UnexpectedTokenError:
    """E101: Unexpected token. An empty token_text means end of input."""
    found = f"'{token_text}'" if token_text else "end of input"
    message = f"unexpected token: {found}"
    if expected:
        message = f"{message} (expected {expected})"
    diag = Diagnostic(
        code="E101",
        message=message,
        severity=ErrorSeverity.ERROR,
        span=span,
        source_line=source_line,
        hints=list(hints or []),
    )
    return UnexpectedTokenError(diag, token_text)


def error_invalid_numeric_literal(text: str, span: SourceSpan,
                                  source_line: str = None) -> InvalidNumericLiteralError:
    """E102: Invalid numeric literal."""
    diag = Diagnostic(
        code="E102",
        message=f"invalid number: {text}",
        severity=ErrorSeverity.ERROR,
        span=span,
        source_line=source_line,
        hints=["numbers are digits with at most one decimal point: 42, 3.14, .5"],
    )
    return InvalidNumericLiteralError(diag, text)


def error_invalid_assignment_target(span: SourceSpan,
                                    source_line: str = None) -> InvalidAssignmentTargetError:
    """E103: Left side of '=' is not a variable name."""
    diag = Diagnostic(
        code="E103",
        message="left of '=' must be a variable name",
        severity=ErrorSeverity.ERROR,
        span=span,
        source_line=source_line,
    )
    return InvalidAssignmentTargetError(diag)


def error_nesting_too_deep(source_line: str = None) -> NestingTooDeepError:
    """E104: Expression nested too deeply."""
    diag = Diagnostic(
        code="E104",
        message="expression is nested too deeply",
        severity=ErrorSeverity.ERROR,
        source_line=source_line,
        hints=["split the calculation over several assignments"],
    )
    return NestingTooDeepError(diag)


# --- Evaluation error codes ---

def error_undefined_variable(name: str, span: Optional[SourceSpan] = None) -> UndefinedVariableError:
    """E201: Undefined variable."""
    diag = Diagnostic(
        code="E201",
        message=f"undefined variable: {name}",
        severity=ErrorSeverity.ERROR,
        span=span,
    )
    return UndefinedVariableError(diag, name)


def error_type_mismatch(span: Optional[SourceSpan] = None) -> TypeMismatchError:
    """E202: Arithmetic with a non-numeric operand."""
    diag = Diagnostic(
        code="E202",
        message="arithmetic is only possible between numbers",
        severity=ErrorSeverity.ERROR,
        span=span,
    )
    return TypeMismatchError(diag)


def error_division_by_zero(span: Optional[SourceSpan] = None) -> DivisionByZeroError:
    """E203: Division by zero."""
    diag = Diagnostic(
        code="E203",
        message="division by zero",
        severity=ErrorSeverity.ERROR,
        span=span,
    )
    return DivisionByZeroError(diag)


# --- Session, storage and configuration error codes ---

def error_empty_command() -> EmptyCommandError:
    """E301: Empty command."""
    diag = Diagnostic(code="E301", message="empty command", severity=ErrorSeverity.ERROR)
    return EmptyCommandError(diag)


def error_storage(message: str, path: Optional[str] = None) -> StorageError:
    """E401: Unreadable or malformed state file."""
    span = None
    if path:
        loc = SourceLocation(1, 1, 0, path)
        span = SourceSpan(loc, loc)
    diag = Diagnostic(code="E401", message=message, severity=ErrorSeverity.ERROR, span=span)
    return StorageError(diag)


def error_config(message: str) -> ConfigError:
    """E402: Invalid configuration."""
    diag = Diagnostic(code="E402", message=message, severity=ErrorSeverity.ERROR)
    return ConfigError(diag)
