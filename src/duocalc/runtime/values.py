"""
Runtime values for the evaluator.

Every result is tagged as either a number or a text value, so arithmetic
sites can reject text explicitly instead of relying on Python's own
operator semantics.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union


class ValueKind(Enum):
    """The two value namespaces."""
    NUMBER = "number"
    TEXT = "text"


@dataclass(frozen=True)
class Value:
    """
    A runtime value with its kind.

    The `data` field holds a float for NUMBER and a str for TEXT.
    """
    data: Union[float, str]
    kind: ValueKind

    def __repr__(self) -> str:
        return f"Value({self.data!r}, {self.kind.value})"

    @property
    def is_number(self) -> bool:
        return self.kind == ValueKind.NUMBER

    @property
    def is_text(self) -> bool:
        return self.kind == ValueKind.TEXT


def number_val(x: float) -> Value:
    """Create a number value."""
    return Value(float(x), ValueKind.NUMBER)


def text_val(s: str) -> Value:
    """Create a text value."""
    return Value(str(s), ValueKind.TEXT)
