"""
Tree-walking evaluator for parsed commands.

Evaluates AST nodes against an Environment to produce a tagged Value.
"""

from typing import Dict, List, Tuple

from .values import Value, number_val
from .environment import Environment

from ..lang.ast import (
    AstNode, NumberLiteral, VariableReference, BinaryOperation, Assignment,
)
from ..lang.errors import (
    error_undefined_variable,
    error_type_mismatch,
    error_division_by_zero,
)


class Evaluator:
    """
    Tree-walking evaluator.

    Evaluates AST nodes by dispatching to type-specific methods. The only
    mutation is the write performed by an Assignment, which happens after
    its value has been fully evaluated.
    """

    def __init__(self, env: Environment):
        self.env = env

    def evaluate(self, node: AstNode) -> Value:
        """Evaluate a node to produce a Value."""
        if isinstance(node, NumberLiteral):
            return number_val(node.value)
        elif isinstance(node, VariableReference):
            return self._eval_variable(node)
        elif isinstance(node, BinaryOperation):
            return self._eval_binary_op(node)
        elif isinstance(node, Assignment):
            return self._eval_assignment(node)
        else:
            raise RuntimeError(f"Unknown node type: {type(node).__name__}")

    def _eval_variable(self, ref: VariableReference) -> Value:
        value = self.env.get(ref.name)
        if value is None:
            raise error_undefined_variable(ref.name, ref.span)
        return value

    def _eval_binary_op(self, root: BinaryOperation) -> Value:
        """
        Post-order walk of an operator tree using explicit stacks.

        A long chain such as 1+1+...+1 parses into a tree as deep as it is
        long, so recursing per node would hit the interpreter's limit.
        Operands are still evaluated left before right.
        """
        pending: List[Tuple[AstNode, bool]] = [(root, False)]
        results: List[Value] = []

        while pending:
            node, operands_done = pending.pop()
            if not isinstance(node, BinaryOperation):
                results.append(self.evaluate(node))
            elif operands_done:
                right = results.pop()
                left = results.pop()
                results.append(self._apply(node, left, right))
            else:
                pending.append((node, True))
                pending.append((node.right, False))
                pending.append((node.left, False))

        return results.pop()

    def _apply(self, op: BinaryOperation, left: Value, right: Value) -> Value:
        if not (left.is_number and right.is_number):
            raise error_type_mismatch(op.span)

        if op.operator == "+":
            return number_val(left.data + right.data)
        elif op.operator == "-":
            return number_val(left.data - right.data)
        elif op.operator == "*":
            return number_val(left.data * right.data)
        elif op.operator == "/":
            if right.data == 0.0:
                raise error_division_by_zero(op.span)
            return number_val(left.data / right.data)
        else:
            raise RuntimeError(f"Unknown binary operator: {op.operator}")

    def _eval_assignment(self, assign: Assignment) -> Value:
        value = self.evaluate(assign.value)
        self.env.set(assign.target, value)
        return value


def evaluate(node: AstNode, env: Environment) -> Value:
    """
    Evaluate a node against an environment.

    Raises:
        EvalError: On an undefined variable, a text operand in arithmetic,
            or division by zero. The environment is unchanged in that case.
    """
    return Evaluator(env).evaluate(node)


def evaluate_in(node: AstNode, numbers: Dict[str, float], strings: Dict[str, str]) -> Value:
    """
    Evaluate a node against caller-owned numeric and textual maps.

    On success the maps are updated in place; an assigned name is removed
    from the other map. On failure the maps are left untouched.
    """
    env = Environment.from_maps(numbers, strings)
    result = Evaluator(env).evaluate(node)
    env.write_maps(numbers, strings)
    return result
