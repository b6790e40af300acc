"""
Tests for the console loop and the command line entry point.
"""

import io
import json

import pytest

from duocalc.__main__ import main
from duocalc.config import CalcConfig
from duocalc.console import ConsoleUI, format_number, format_value, run_repl
from duocalc.runtime import number_val, text_val


def repl(tmp_path, script, **config_fields):
    """Run the REPL over a script and return (output, state_path)."""
    state_path = tmp_path / "state.json"
    config = CalcConfig(state_file=state_path, **config_fields)
    stdout = io.StringIO()
    ui = ConsoleUI(io.StringIO(script), stdout, prompt=config.prompt)
    assert run_repl(config, ui) == 0
    return stdout.getvalue(), state_path


class TestFormatting:

    @pytest.mark.parametrize("value, text", [
        (14.0, "14"),
        (-3.0, "-3"),
        (0.5, "0.5"),
        (3.5, "3.5"),
        (1e21, "1e+21"),
        (float("inf"), "inf"),
    ])
    def test_format_number(self, value, text):
        assert format_number(value) == text

    def test_format_text(self):
        assert format_value(text_val("hello")) == "hello"
        assert format_value(number_val(2)) == "2"


class TestConsoleUI:

    def test_read_command_strips(self):
        stdout = io.StringIO()
        ui = ConsoleUI(io.StringIO("  1 + 1  \n"), stdout)
        assert ui.read_command() == "1 + 1"
        assert stdout.getvalue() == "> "

    def test_read_command_end_of_input(self):
        ui = ConsoleUI(io.StringIO(""), io.StringIO())
        assert ui.read_command() is None

    def test_print_history(self):
        stdout = io.StringIO()
        ConsoleUI(io.StringIO(), stdout).print_history(["a = 1", "a"])
        assert stdout.getvalue() == "Recent commands:\n1. a = 1\n2. a\n"

    def test_print_empty_history(self):
        stdout = io.StringIO()
        ConsoleUI(io.StringIO(), stdout).print_history([])
        assert stdout.getvalue() == "History is empty.\n"


class TestRepl:
    """Transcript-level REPL behaviour."""

    def test_arithmetic_and_assignment(self, tmp_path):
        out, _ = repl(tmp_path, "2+3*4\nx = 5\nx + 1\nexit\n", prompt="")
        assert out.splitlines() == ["14", "5", "6"]

    def test_errors_are_reported(self, tmp_path):
        out, _ = repl(tmp_path, "10/0\n1 + $\nnope\n\n", prompt="")
        assert out.splitlines() == [
            "Error: division by zero",
            "Error: unexpected token: '$' (expected a number, a variable or '(')",
            "Error: undefined variable: nope",
            "Error: empty command",
        ]

    def test_history_command(self, tmp_path):
        out, _ = repl(tmp_path, "1+1\nbad $\n2/0\nhistory\n", prompt="")
        assert out.splitlines()[-3:] == ["Recent commands:", "1. 1+1", "2. 2/0"]

    def test_state_saved_and_restored(self, tmp_path):
        _, state_path = repl(tmp_path, "x = 5\n", prompt="")
        data = json.loads(state_path.read_text())
        assert data["variables"] == {"x": 5.0}
        assert data["history"] == ["x = 5"]

        out, _ = repl(tmp_path, "x * 2\n", prompt="")
        assert out.splitlines() == ["Recent commands:", "1. x = 5", "10"]

    def test_history_not_shown_when_disabled(self, tmp_path):
        repl(tmp_path, "x = 5\n", prompt="")
        out, _ = repl(tmp_path, "x\n", prompt="", show_history_on_start=False)
        assert out.splitlines() == ["5"]

    def test_no_autosave(self, tmp_path):
        _, state_path = repl(tmp_path, "x = 5\n", prompt="", autosave=False)
        assert not state_path.exists()

    def test_parse_failure_does_not_save(self, tmp_path):
        _, state_path = repl(tmp_path, "1 +\n", prompt="")
        assert not state_path.exists()

    def test_loop_survives_deep_and_long_lines(self, tmp_path):
        deep = "(" * 2000 + "1" + ")" * 2000
        long_sum = "+".join(["1"] * 1500)
        out, state_path = repl(tmp_path, f"{deep}\n{long_sum}\n1+1\nexit\n", prompt="")
        assert out.splitlines() == [
            "Error: expression is nested too deeply",
            "1500",
            "2",
        ]
        assert json.loads(state_path.read_text())["history"] == [long_sum, "1+1"]

    def test_corrupt_state_starts_empty(self, tmp_path):
        (tmp_path / "state.json").write_text("{broken")
        out, _ = repl(tmp_path, "1 + 1\n", prompt="")
        assert out.splitlines() == ["2"]


class TestMain:
    """Test the command line entry point."""

    def test_eval(self, tmp_path, capsys):
        state = tmp_path / "state.json"
        assert main(["--state", str(state), "eval", "x = 4", "x * x"]) == 0
        assert capsys.readouterr().out.splitlines() == ["4", "16"]
        assert json.loads(state.read_text())["variables"] == {"x": 4.0}

    def test_eval_no_save(self, tmp_path, capsys):
        state = tmp_path / "state.json"
        assert main(["--state", str(state), "eval", "--no-save", "1 + 1"]) == 0
        assert capsys.readouterr().out == "2\n"
        assert not state.exists()

    def test_eval_error(self, tmp_path, capsys):
        state = tmp_path / "state.json"
        assert main(["--state", str(state), "eval", "1/0", "2"]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Error: division by zero" in captured.err
        assert json.loads(state.read_text())["history"] == ["1/0"]

    def test_history(self, tmp_path, capsys):
        state = tmp_path / "state.json"
        main(["--state", str(state), "eval", "a = 1", "a + 1"])
        capsys.readouterr()
        assert main(["--state", str(state), "history"]) == 0
        assert capsys.readouterr().out.splitlines() == ["Recent commands:", "1. a = 1", "2. a + 1"]

    def test_bad_config(self, tmp_path, capsys):
        assert main(["--config", str(tmp_path / "missing.yaml"), "history"]) == 1
        assert "config file not found" in capsys.readouterr().err
