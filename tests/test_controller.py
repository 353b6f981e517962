"""Tests for the Calculator controller: events, history and error recovery."""

import pytest

from tapcalc_pkg.controller import Calculator
from tapcalc_pkg.history import History
from tapcalc_pkg.types import EvalResult, HistoryEntry


def _type(calc, text):
    for key in text:
        assert calc.handle_key(key), key


class TestEvaluation:
    def test_result_replaces_expression(self):
        calc = Calculator()
        _type(calc, "2+3×4")
        result = calc.evaluate()
        assert isinstance(result, EvalResult)
        assert result.ok is True
        assert result.result == "14"
        assert calc.display == "14"
        assert calc.history_entries() == [HistoryEntry("2+3×4", "14")]

    def test_result_can_be_extended(self):
        calc = Calculator()
        calc.digit("5")
        calc.toggle_sign()
        _type(calc, "+3")
        assert calc.display == "-5+3"
        calc.evaluate()
        assert calc.display == "-2"
        _type(calc, "+5=")
        assert calc.display == "3"

    def test_failure_shows_error(self):
        calc = Calculator()
        _type(calc, "5÷0")
        result = calc.evaluate()
        assert result.ok is False
        assert result.error_code == "DIVISION_BY_ZERO"
        assert calc.display == "Error"
        assert calc.is_error
        assert len(calc.history) == 0

    def test_next_digit_after_failure_starts_fresh(self):
        calc = Calculator()
        _type(calc, "5÷0=")
        calc.digit("7")
        assert calc.display == "7"
        assert not calc.is_error

    @pytest.mark.parametrize(
        "edit,expected",
        [
            (lambda c: c.dot(), "0."),
            (lambda c: c.operator("+"), "0+"),
            (lambda c: c.backspace(), "0"),
            (lambda c: c.percent(), "0"),
            (lambda c: c.toggle_sign(), "0"),
            (lambda c: c.clear(), "0"),
        ],
    )
    def test_any_edit_after_failure_resets(self, edit, expected):
        calc = Calculator()
        _type(calc, "1÷0=")
        edit(calc)
        assert calc.display == expected

    def test_evaluating_error_keeps_error(self):
        calc = Calculator()
        _type(calc, "1÷0=")
        result = calc.evaluate()
        assert result.ok is False
        assert calc.display == "Error"
        assert len(calc.history) == 0

    def test_non_finite_result_is_an_error(self):
        calc = Calculator()
        big = "1" + "0" * 200
        _type(calc, f"{big}×{big}")
        result = calc.evaluate()
        assert result.error_code == "NON_FINITE_RESULT"
        assert calc.display == "Error"


class TestHistory:
    def test_keeps_most_recent_eight(self):
        calc = Calculator()
        for i in range(1, 10):
            calc.clear()
            _type(calc, f"{i}+1=")
        entries = calc.history_entries()
        assert len(entries) == 8
        assert entries[0] == HistoryEntry("9+1", "10")
        assert entries[-1] == HistoryEntry("2+1", "3")

    def test_clear_history(self):
        calc = Calculator()
        _type(calc, "1+1=")
        calc.clear_history()
        assert calc.history_entries() == []
        assert calc.display == "2"

    def test_custom_capacity(self):
        calc = Calculator(history_size=2)
        for expression in ("1+1=", "C2+2=", "C3+3="):
            _type(calc, expression)
        assert [entry.result for entry in calc.history] == ["6", "4"]

    def test_capacity_from_config(self, monkeypatch):
        import tapcalc_pkg.config as config

        monkeypatch.setattr(config, "HISTORY_SIZE", 3)
        assert Calculator().history.capacity == 3

    def test_rejects_non_positive_capacity(self):
        with pytest.raises(ValueError):
            History(0)

    def test_entries_are_immutable(self):
        entry = History(2).add("1+1", "2")
        with pytest.raises(AttributeError):
            entry.result = "3"


class TestInput:
    def test_keyboard_aliases_match_buttons(self):
        by_keys = Calculator()
        _type(by_keys, "12*3/4")
        by_buttons = Calculator()
        for kind, value in [
            ("digit", "1"),
            ("digit", "2"),
            ("operator", "×"),
            ("digit", "3"),
            ("operator", "÷"),
            ("digit", "4"),
        ]:
            by_buttons.press(kind, value)
        assert by_keys.display == by_buttons.display == "12×3÷4"

    def test_named_keys(self):
        calc = Calculator()
        _type(calc, "12")
        calc.handle_key("Backspace")
        assert calc.display == "1"
        calc.handle_key("Escape")
        assert calc.display == "0"
        _type(calc, "6*7")
        calc.handle_key("Enter")
        assert calc.display == "42"

    def test_unmapped_key(self):
        calc = Calculator()
        assert calc.handle_key("a") is False
        assert calc.handle_key("F5") is False
        assert calc.display == "0"

    def test_unknown_event_kind_is_ignored(self):
        calc = Calculator()
        assert calc.press("sqrt") == "0"

    def test_percent_and_sign_buttons(self):
        calc = Calculator()
        _type(calc, "200+50")
        calc.press("percent")
        assert calc.display == "200+0.5"
        calc.press("toggle-sign")
        assert calc.display == "200+-0.5"
        calc.press("equals")
        assert calc.display == "199.5"


class TestBufferInvariants:
    @pytest.mark.parametrize("last_key,expected", [(".", "0."), ("+", "0+"), ("5", "5")])
    def test_removing_lone_sign_keeps_expression(self, last_key, expected):
        calc = Calculator()
        for key in ("5", "±", "Backspace"):
            calc.handle_key(key)
        assert calc.display == "-"
        calc.handle_key("±")
        assert calc.display == "0"
        calc.handle_key(last_key)
        assert calc.display == expected

    def test_long_buffer_expression_evaluates(self):
        calc = Calculator()
        for term in range(4):
            if term:
                calc.operator("+")
            calc.digit("1")
            for _ in range(160):
                calc.percent()
        assert len(calc.display) > 1000
        result = calc.evaluate()
        assert result.ok is True
        assert not calc.is_error
        assert result.value > 0
