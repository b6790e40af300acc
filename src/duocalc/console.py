"""
Line-oriented console for an interactive calculator session.
"""

import logging
import math
import sys
from typing import Iterable, Optional, TextIO

from .config import CalcConfig
from .lang import CalcError, EvalError
from .runtime import Value
from .session import Session
from .storage import CalcState, FileStorage

logger = logging.getLogger(__name__)

EXIT_COMMAND = "exit"
HISTORY_COMMAND = "history"


def format_number(x: float) -> str:
    """Integral values print without a fractional part: 14, not 14.0."""
    if math.isfinite(x) and x.is_integer() and abs(x) < 1e21:
        return str(int(x))
    return repr(x)


def format_value(value: Value) -> str:
    if value.is_number:
        return format_number(value.data)
    return value.data


class ConsoleUI:
    """Reads commands from a text stream and renders results to another."""

    def __init__(self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None,
                 prompt: str = "> "):
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout
        self.prompt = prompt

    def read_command(self) -> Optional[str]:
        """Prompt and read one line, stripped. Returns None at end of input."""
        self.stdout.write(self.prompt)
        self.stdout.flush()
        line = self.stdin.readline()
        if line == "":
            return None
        return line.strip()

    def print_value(self, value: Value) -> None:
        print(format_value(value), file=self.stdout)

    def print_error(self, err: Exception) -> None:
        print(f"Error: {err}", file=self.stdout)

    def print_history(self, history: Iterable[str]) -> None:
        entries = list(history)
        if not entries:
            print("History is empty.", file=self.stdout)
            return
        print("Recent commands:", file=self.stdout)
        for i, cmd in enumerate(entries, 1):
            print(f"{i}. {cmd}", file=self.stdout)


def load_session(storage: FileStorage) -> Session:
    """Restore a session from storage, starting empty if the file is unusable."""
    try:
        state = storage.load()
    except CalcError as e:
        logger.warning("could not load state: %s", e)
        state = CalcState()
    return Session.from_state(state.numbers, state.strings, state.history)


def save_session(storage: FileStorage, session: Session) -> None:
    storage.save(CalcState(session.numbers, session.strings, session.history))


def run_repl(config: CalcConfig, ui: Optional[ConsoleUI] = None) -> int:
    """
    Run the interactive loop until 'exit' or end of input.

    State is saved after every command that reached evaluation, successful
    or not, since both change the recorded history.
    """
    ui = ui if ui is not None else ConsoleUI(prompt=config.prompt)
    storage = FileStorage(config.state_file)
    session = load_session(storage)

    if config.show_history_on_start and session.history:
        ui.print_history(session.history)

    while True:
        cmd = ui.read_command()
        if cmd is None or cmd == EXIT_COMMAND:
            break

        if cmd == HISTORY_COMMAND:
            ui.print_history(session.history)
            continue

        evaluated = False
        try:
            value = session.execute(cmd)
            evaluated = True
            ui.print_value(value)
        except EvalError as e:
            evaluated = True
            ui.print_error(e)
        except CalcError as e:
            ui.print_error(e)

        if evaluated and config.autosave:
            try:
                save_session(storage, session)
            except OSError as e:
                ui.print_error(e)

    return 0
