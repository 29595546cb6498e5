"""Tests for key-label and keyboard translation."""

import pytest

from key_tokens import (
    BackspaceKey,
    ClearKey,
    DecimalPointKey,
    DigitKey,
    EqualsKey,
    OperatorKey,
    PercentKey,
    SignToggleKey,
    label_for_keyboard,
    parse_key,
)


@pytest.mark.parametrize("digit", list("0123456789"))
def test_digits(digit):
    assert parse_key(digit) == DigitKey(digit)


@pytest.mark.parametrize("label, expected", [
    (".", DecimalPointKey()),
    ("+", OperatorKey("+")),
    ("−", OperatorKey("−")),
    ("-", OperatorKey("−")),
    ("×", OperatorKey("×")),
    ("*", OperatorKey("×")),
    ("÷", OperatorKey("÷")),
    ("/", OperatorKey("÷")),
    ("AC", ClearKey()),
    ("⌫", BackspaceKey()),
    ("=", EqualsKey()),
    ("+/-", SignToggleKey()),
    ("%", PercentKey()),
])
def test_control_labels(label, expected):
    assert parse_key(label) == expected


@pytest.mark.parametrize("label", ["", "12", "MR", "√", "٣", "sin"])
def test_unknown_labels_raise(label):
    with pytest.raises(ValueError):
        parse_key(label)


@pytest.mark.parametrize("char, keysym, expected", [
    ("7", "7", "7"),
    (".", "period", "."),
    ("+", "plus", "+"),
    ("-", "minus", "−"),
    ("*", "asterisk", "×"),
    ("x", "x", "×"),
    ("/", "slash", "÷"),
    ("=", "equal", "="),
    ("\r", "Return", "="),
    ("\r", "KP_Enter", "="),
    ("\x08", "BackSpace", "⌫"),
    ("\x1b", "Escape", "AC"),
    ("%", "percent", "%"),
])
def test_keyboard_mapping(char, keysym, expected):
    assert label_for_keyboard(char, keysym) == expected


@pytest.mark.parametrize("char, keysym", [
    ("a", "a"),
    ("", "Shift_L"),
    ("", "F1"),
])
def test_keyboard_ignores_other_keys(char, keysym):
    assert label_for_keyboard(char, keysym) is None


def test_keyboard_labels_are_parseable():
    for char in "0123456789.+-*x/=%":
        label = label_for_keyboard(char)
        assert label is not None
        parse_key(label)
