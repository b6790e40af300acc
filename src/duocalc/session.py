"""
Calculator session: applies one command line at a time to an environment
and keeps the bounded command history.

Recording policy:
- a blank line raises EmptyCommandError and is not recorded
- a line that fails to parse raises ParseError and is not recorded
- a line that parses is recorded, whether its evaluation succeeds or not
"""

import logging
from typing import Dict, Iterable, List, Mapping, Optional

from .lang import parse_expression, EvalError
from .lang.errors import error_empty_command
from .runtime import Environment, History, Value, evaluate

logger = logging.getLogger(__name__)


class Session:
    """
    Single-threaded calculator session.

    Usage:
        session = Session()
        session.execute("x = 5")
        session.execute("x + 1")     # Value(6.0, number)
        session.history              # ['x = 5', 'x + 1']
    """

    def __init__(self, environment: Optional[Environment] = None,
                 history: Optional[History] = None):
        self.environment = environment if environment is not None else Environment()
        self._history = history if history is not None else History()

    @classmethod
    def from_state(cls, numbers: Optional[Mapping[str, float]] = None,
                   strings: Optional[Mapping[str, str]] = None,
                   history: Iterable[str] = ()) -> "Session":
        """Restore a session from persisted maps and history entries."""
        return cls(Environment.from_maps(numbers, strings), History.from_entries(history))

    def execute(self, line: str) -> Value:
        """
        Parse and evaluate one command line.

        Raises:
            EmptyCommandError: If the line is blank
            ParseError: If the line is not a valid command (not recorded)
            EvalError: If evaluation fails (the line is still recorded)
        """
        if not line.strip():
            raise error_empty_command()

        node = parse_expression(line)

        try:
            result = evaluate(node, self.environment)
        except EvalError as e:
            logger.debug("evaluation failed for %r: %s", line, e)
            self._history.record(line)
            raise

        self._history.record(line)
        logger.debug("%r -> %r", line, result)
        return result

    @property
    def numbers(self) -> Dict[str, float]:
        return self.environment.numbers

    @property
    def strings(self) -> Dict[str, str]:
        return self.environment.strings

    @property
    def history(self) -> List[str]:
        """Recorded command lines, oldest first."""
        return self._history.snapshot()
