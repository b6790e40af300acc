"""
JSON persistence of calculator state between sessions.

File layout:
    {
      "variables": {"x": 5.0},
      "string_variables": {"greeting": "hello"},
      "history": ["x = 5"]
    }
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

from .lang.errors import error_storage

logger = logging.getLogger(__name__)

DEFAULT_STATE_FILENAME = "calculator_state.json"


@dataclass
class CalcState:
    """Everything a session persists."""
    numbers: Dict[str, float] = field(default_factory=dict)
    strings: Dict[str, str] = field(default_factory=dict)
    history: List[str] = field(default_factory=list)

    def to_json(self) -> dict:
        return {
            "variables": dict(self.numbers),
            "string_variables": dict(self.strings),
            "history": list(self.history),
        }


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class FileStorage:
    """Loads and saves CalcState as a JSON document."""

    def __init__(self, path: Path | str = DEFAULT_STATE_FILENAME):
        self.path = Path(path)

    def load(self) -> CalcState:
        """
        Read the state file. A missing file yields an empty state.

        Raises:
            StorageError: If the file cannot be read or has the wrong shape
        """
        if not self.path.exists():
            logger.debug("no state file at %s, starting empty", self.path)
            return CalcState()

        try:
            with self.path.open("r", encoding="utf-8") as fp:
                data = json.load(fp)
        except (OSError, ValueError) as e:
            raise error_storage(f"cannot read state file {self.path}: {e}", str(self.path)) from e

        state = self._from_json(data)
        logger.debug(
            "loaded %d number(s), %d string(s), %d history entr(ies) from %s",
            len(state.numbers), len(state.strings), len(state.history), self.path,
        )
        return state

    def _from_json(self, data: Any) -> CalcState:
        if not isinstance(data, dict):
            raise error_storage(f"state file {self.path} must contain a JSON object", str(self.path))

        # A missing key or null section is empty; any other type is malformed.
        numbers = data.get("variables")
        if numbers is None:
            numbers = {}
        strings = data.get("string_variables")
        if strings is None:
            strings = {}
        history = data.get("history")
        if history is None:
            history = []

        if not isinstance(numbers, dict) or not all(
                isinstance(k, str) and _is_number(v) for k, v in numbers.items()):
            raise error_storage(f"'variables' in {self.path} must map names to numbers", str(self.path))
        if not isinstance(strings, dict) or not all(
                isinstance(k, str) and isinstance(v, str) for k, v in strings.items()):
            raise error_storage(f"'string_variables' in {self.path} must map names to strings", str(self.path))
        if not isinstance(history, list) or not all(isinstance(h, str) for h in history):
            raise error_storage(f"'history' in {self.path} must be a list of strings", str(self.path))

        return CalcState(
            numbers={k: float(v) for k, v in numbers.items()},
            strings=dict(strings),
            history=list(history),
        )

    def save(self, state: CalcState) -> None:
        """
        Write the state file, creating parent directories as needed.

        The document goes to a temporary file beside the target which then
        replaces it, so an interrupted write leaves the previous state intact.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            mode="w", encoding="utf-8", dir=self.path.parent,
            prefix=f".{self.path.name}.", suffix=".tmp", delete=False,
        ) as fp:
            tmp_path = Path(fp.name)
            try:
                json.dump(state.to_json(), fp, indent=2)
                fp.write("\n")
            except BaseException:
                fp.close()
                tmp_path.unlink()
                raise
        try:
            os.replace(tmp_path, self.path)
        except OSError:
            tmp_path.unlink()
            raise
        logger.debug("saved state to %s", self.path)
