"""
duocalc runtime - evaluation of parsed commands.

This module provides:
- Value: Tagged number/text results
- Environment: The dual namespace as a single mapping
- Evaluator: Tree-walking evaluation of AST nodes
- History: Bounded log of accepted commands
"""

from .values import (
    Value,
    ValueKind,
    number_val,
    text_val,
)

from .environment import (
    Environment,
)

from .evaluator import (
    Evaluator,
    evaluate,
    evaluate_in,
)

from .history import (
    History,
    HISTORY_CAPACITY,
)

__all__ = [
    # Values
    'Value',
    'ValueKind',
    'number_val',
    'text_val',
    # Environment
    'Environment',
    # Evaluator
    'Evaluator',
    'evaluate',
    'evaluate_in',
    # History
    'History',
    'HISTORY_CAPACITY',
]
