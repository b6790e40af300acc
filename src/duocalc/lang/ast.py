"""
Abstract Syntax Tree (AST) node definitions for duocalc commands.

A parsed command is exactly one root node. The node set is closed:
NumberLiteral, VariableReference, BinaryOperation and Assignment.
Nodes are immutable; a subtree belongs to its parent only.
"""

from dataclasses import dataclass
from typing import Any, Union
from .tokens import SourceSpan


# =============================================================================
# Base Classes
# =============================================================================

@dataclass(frozen=True)
class AstNode:
    """Base class for all AST nodes."""
    span: SourceSpan  # Source location for error reporting

    def accept(self, visitor: "AstVisitor") -> Any:
        """Accept a visitor for traversal."""
        method_name = f"visit_{self.__class__.__name__}"
        method = getattr(visitor, method_name, visitor.generic_visit)
        return method(self)


class AstVisitor:
    """Base class for AST visitors."""

    def generic_visit(self, node: AstNode) -> Any:
        """Default visit method."""
        raise NotImplementedError(f"No visitor for {node.__class__.__name__}")


# =============================================================================
# Expression Nodes
# =============================================================================

@dataclass(frozen=True)
class NumberLiteral(AstNode):
    """A numeric literal, already converted to float."""
    value: float


@dataclass(frozen=True)
class VariableReference(AstNode):
    """A variable name, resolved at evaluation time."""
    name: str


@dataclass(frozen=True)
class BinaryOperation(AstNode):
    """A binary arithmetic operation (e.g., a + b)."""
    left: "Node"
    operator: str  # One of + - * /
    right: "Node"


# =============================================================================
# Commands
# =============================================================================

@dataclass(frozen=True)
class Assignment(AstNode):
    """Assignment of an expression's value to a variable name."""
    target: str
    value: "Node"


Node = Union[NumberLiteral, VariableReference, BinaryOperation, Assignment]


# =============================================================================
# Helpers
# =============================================================================

class _AstPrinter(AstVisitor):
    """Render a tree as an indented outline."""

    def __init__(self):
        self.lines = []
        self.depth = 0

    def _emit(self, text: str) -> None:
        self.lines.append("  " * self.depth + text)

    def _child(self, node: AstNode) -> None:
        self.depth += 1
        node.accept(self)
        self.depth -= 1

    def visit_NumberLiteral(self, node: NumberLiteral) -> None:
        self._emit(f"Number {node.value!r}")

    def visit_VariableReference(self, node: VariableReference) -> None:
        self._emit(f"Variable {node.name}")

    def visit_BinaryOperation(self, node: BinaryOperation) -> None:
        self._emit(f"BinaryOp {node.operator}")
        self._child(node.left)
        self._child(node.right)

    def visit_Assignment(self, node: Assignment) -> None:
        self._emit(f"Assign {node.target}")
        self._child(node.value)


def print_ast(node: AstNode) -> str:
    """Return an indented, human-readable outline of a tree."""
    printer = _AstPrinter()
    node.accept(printer)
    return "\n".join(printer.lines)
