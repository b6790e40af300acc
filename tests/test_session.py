"""
Tests for the calculator session and its history recording policy.
"""

import pytest

from duocalc import Session
from duocalc.lang import (
    CalcError, ParseError, EmptyCommandError, UndefinedVariableError,
    DivisionByZeroError, NestingTooDeepError,
)
from duocalc.runtime import number_val, text_val


class TestExecute:
    """Test command execution."""

    def test_expression(self):
        assert Session().execute("2+3*4") == number_val(14)

    def test_assignment_persists_in_session(self):
        session = Session()
        session.execute("x = 5")
        assert session.execute("x + 1") == number_val(6)
        assert session.numbers == {"x": 5.0}

    def test_empty_command(self):
        session = Session()
        for line in ("", "   ", "\t"):
            with pytest.raises(EmptyCommandError) as exc_info:
                session.execute(line)
            assert exc_info.value.code == "E301"
        assert session.history == []

    def test_from_state(self):
        session = Session.from_state({"x": 2.0}, {"name": "duo"}, ["x = 2"])
        assert session.execute("x * 10") == number_val(20)
        assert session.execute("name") == text_val("duo")
        assert session.history == ["x = 2", "x * 10", "name"]

    def test_from_state_resolves_double_binding(self):
        session = Session.from_state({"x": 1.0}, {"x": "stale"})
        assert session.numbers == {"x": 1.0}
        assert session.strings == {}


class TestRecordingPolicy:
    """Parse failures are not recorded; evaluation failures are."""

    def test_success_recorded(self):
        session = Session()
        session.execute("1 + 1")
        assert session.history == ["1 + 1"]

    def test_parse_failure_not_recorded(self):
        session = Session()
        with pytest.raises(ParseError):
            session.execute("1 + $")
        with pytest.raises(ParseError):
            session.execute("a = b = 3")
        assert session.history == []

    def test_evaluation_failure_recorded(self):
        session = Session()
        with pytest.raises(UndefinedVariableError):
            session.execute("missing + 1")
        with pytest.raises(DivisionByZeroError):
            session.execute("10/0")
        assert session.history == ["missing + 1", "10/0"]

    def test_history_bound(self):
        session = Session()
        for i in range(11):
            session.execute(f"v{i} = {i}")
        entries = session.history
        assert len(entries) == 10
        assert entries[0] == "v1 = 1"
        assert entries[-1] == "v10 = 10"

    def test_failed_evaluation_does_not_assign(self):
        session = Session()
        session.execute("x = 1")
        with pytest.raises(DivisionByZeroError):
            session.execute("x = 1/0")
        assert session.numbers == {"x": 1.0}

    def test_history_property_is_a_copy(self):
        session = Session()
        session.execute("1 + 1")
        entries = session.history
        entries.append("tampered")
        assert session.history == ["1 + 1"]


class TestDepth:
    """Very long or deeply nested lines end only the current command."""

    def test_long_chain_is_evaluated_and_recorded(self):
        session = Session()
        line = "n = " + "+".join(["1"] * 3000)
        assert session.execute(line) == number_val(3000)
        assert session.history == [line]

    def test_deep_nesting_is_a_parse_error(self):
        session = Session()
        session.execute("x = 1")
        with pytest.raises(CalcError) as exc_info:
            session.execute("(" * 2000 + "x" + ")" * 2000)
        assert isinstance(exc_info.value, NestingTooDeepError)
        assert session.history == ["x = 1"]
        assert session.execute("x + 1") == number_val(2)
