"""Tests for the caller layer: memory, unary keys, clear-entry and history."""

import logging

import pytest

from calculator_engine import ERROR, CalculatorState, Operator
from calculator_session import HISTORY_LIMIT, CalculatorSession


@pytest.fixture
def session():
    return CalculatorSession()


# --- Engine keys ---

def test_basic_expression(session):
    session.press_many(["7", "×", "6", "="])
    assert session.display == "42"
    assert session.previous_line == "7 × 6 ="


def test_unknown_label_raises(session):
    with pytest.raises(ValueError):
        session.press("sin")
    assert session.display == "0"


def test_press_returns_new_state(session):
    state = session.press("9")
    assert state is session.state
    assert state.display == "9"


# --- History ---

def test_equals_pushes_history(session):
    session.press_many(["5", "+", "3", "=", "="])
    assert session.history == ["8 + 3 = 11", "5 + 3 = 8"]


def test_equals_without_result_does_not_push(session):
    session.press_many(["5", "="])
    assert session.history == []


def test_error_does_not_push_from_equals(session):
    session.press_many(["1", "÷", "0", "="])
    assert session.display == ERROR
    assert session.history == []


def test_history_is_capped():
    session = CalculatorSession(history_limit=3)
    session.press_many(["1", "+", "1"])
    for _ in range(5):
        session.press("=")
    assert len(session.history) == 3
    assert session.history[0] == "5 + 1 = 6"


def test_default_history_limit(session):
    session.press_many(["1", "+", "1"])
    for _ in range(HISTORY_LIMIT + 4):
        session.press("=")
    assert len(session.history) == HISTORY_LIMIT


def test_clear_history(session):
    session.press_many(["2", "+", "2", "="])
    session.clear_history()
    assert session.history == []


# --- Clear entry ---

def test_clear_entry_keeps_pending_operation(session):
    session.press_many(["8", "−", "5", "CE"])
    assert session.display == "0"
    assert session.state.operand_a == "8"
    assert session.state.operator is Operator.SUBTRACT
    session.press_many(["3", "="])
    assert session.display == "5"


def test_clear_entry_on_first_operand(session):
    session.press_many(["4", "2", "CE", "7"])
    assert session.display == "7"


# --- Memory ---

def test_memory_add_and_recall(session):
    session.press_many(["1", "2", "M+", "AC", "3", "M+", "AC"])
    assert session.memory == 15
    assert session.memory_label == "M: 15"
    session.press("MR")
    assert session.display == "15"


def test_memory_subtract(session):
    session.press_many(["1", "0", "M-", "AC", "4", "M-"])
    assert session.memory == -14
    assert session.memory_label == "M: -14"


def test_memory_clear(session):
    session.press_many(["9", "M+", "MC"])
    assert session.memory == 0
    assert session.memory_label == "M: 0"


def test_memory_recall_into_second_operand(session):
    session.press_many(["2", "M+", "AC", "5", "×", "MR", "="])
    assert session.display == "10"


def test_memory_keys_ignore_error(session):
    session.press_many(["5", "M+", "AC", "1", "÷", "0", "="])
    session.press("M+")
    session.press("MR")
    assert session.memory == 5
    assert session.display == ERROR


def test_memory_recall_after_overflow_is_error(session):
    session.memory = 2e308
    assert session.memory_label == "M: Error"
    session.press_many(["5", "+", "MR"])
    assert session.state == CalculatorState(display=ERROR)
    session.press("MC")
    assert session.memory_label == "M: 0"


def test_memory_label_is_canonical(session):
    session.press_many(["0", ".", "1", "M+", "AC", ".", "2", "M+"])
    assert session.memory_label == "M: 0.3"


# --- Unary keys ---

def test_square_root(session):
    session.press_many(["1", "6", "√"])
    assert session.display == "4"
    assert session.history == ["√(16) = 4"]


def test_square_root_of_negative_is_error(session):
    session.press_many(["4", "+/-", "√"])
    assert session.display == ERROR
    assert session.history == ["√(-4) = Error"]
    session.press("5")
    assert session.display == "5"


def test_square(session):
    session.press_many(["1", "2", "x²"])
    assert session.display == "144"


def test_square_overflow_is_error(session):
    session.state = CalculatorState(operand_a="1e200", display="1e200", is_typing=True)
    session.press("x²")
    assert session.display == ERROR


def test_square_of_large_value_stays_positional(session):
    session.press_many(list("100000000000") + ["x²"])
    assert session.display == "10000000000000000000000"
    session.press("5")
    assert session.display == "10000000000000000000000"


def test_reciprocal_of_large_value_keeps_digit_entry(session):
    session.press_many(list("10000000") + ["1/x"])
    assert session.display == "0.0000001"
    session.press("5")
    assert session.display == "0.00000015"


def test_reciprocal(session):
    session.press_many(["4", "1/x"])
    assert session.display == "0.25"
    assert session.history == ["1/(4) = 0.25"]


def test_reciprocal_of_zero_is_error(session):
    session.press("1/x")
    assert session.display == ERROR
    assert session.history == ["1/(0) = Error"]


def test_unary_on_second_operand(session):
    session.press_many(["1", "0", "+", "9", "√", "="])
    assert session.display == "13"
    assert session.previous_line == "10 + 3 ="


def test_unary_ignores_error(session):
    session.press_many(["1", "÷", "0", "="])
    session.press("√")
    assert session.display == ERROR
    assert session.history == []


# --- Logging ---

def test_failure_is_logged(session, caplog):
    with caplog.at_level(logging.INFO, logger="calculator_session"):
        session.press_many(["1", "÷", "0", "="])
    assert any("fallo aritmético" in record.getMessage() for record in caplog.records)
