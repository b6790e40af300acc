"""
Variable environment shared by the numeric and textual namespaces.

Names live in a single mapping of tagged values, so a name can never be
bound in both namespaces at once. The two-map form (numbers and strings)
used by persistence is a projection of that mapping.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, Mapping, Optional

from .values import Value, ValueKind, number_val, text_val


@dataclass
class Environment:
    """
    Mutable name -> Value bindings for one session.

    Reads consult the single mapping; writes overwrite whatever kind the
    name had before.
    """
    variables: Dict[str, Value] = field(default_factory=dict)

    @classmethod
    def from_maps(cls, numbers: Optional[Mapping[str, float]] = None,
                  strings: Optional[Mapping[str, str]] = None) -> "Environment":
        """
        Build an environment from the two-map form.

        A name present in both maps resolves to the number, matching the
        lookup order of the two-map form.
        """
        env = cls()
        for name, text in (strings or {}).items():
            env.variables[name] = text_val(text)
        for name, number in (numbers or {}).items():
            env.variables[name] = number_val(number)
        return env

    def get(self, name: str) -> Optional[Value]:
        """Look up a variable, or None if it is unbound."""
        return self.variables.get(name)

    def set(self, name: str, value: Value) -> None:
        """Bind a variable, replacing any previous binding of either kind."""
        self.variables[name] = value

    @property
    def numbers(self) -> Dict[str, float]:
        """Fresh dict of the numeric namespace."""
        return {name: v.data for name, v in self.variables.items()
                if v.kind == ValueKind.NUMBER}

    @property
    def strings(self) -> Dict[str, str]:
        """Fresh dict of the textual namespace."""
        return {name: v.data for name, v in self.variables.items()
                if v.kind == ValueKind.TEXT}

    def write_maps(self, numbers: Dict[str, float], strings: Dict[str, str]) -> None:
        """Overwrite caller-owned dicts in place with this environment's contents."""
        numbers.clear()
        numbers.update(self.numbers)
        strings.clear()
        strings.update(self.strings)

    def __len__(self) -> int:
        return len(self.variables)

    def __iter__(self) -> Iterator[str]:
        return iter(self.variables)
