"""Traducción de etiquetas de teclas y eventos de teclado a tokens del motor."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class DigitKey:
    digit: str


@dataclass(frozen=True)
class DecimalPointKey:
    pass


@dataclass(frozen=True)
class OperatorKey:
    operator: str


@dataclass(frozen=True)
class ClearKey:
    pass


@dataclass(frozen=True)
class BackspaceKey:
    pass


@dataclass(frozen=True)
class EqualsKey:
    pass


@dataclass(frozen=True)
class SignToggleKey:
    pass


@dataclass(frozen=True)
class PercentKey:
    pass


Key = Union[
    DigitKey,
    DecimalPointKey,
    OperatorKey,
    ClearKey,
    BackspaceKey,
    EqualsKey,
    SignToggleKey,
    PercentKey,
]


OPERATOR_LABELS = {
    "+": "+",
    "−": "−",
    "-": "−",
    "×": "×",
    "*": "×",
    "÷": "÷",
    "/": "÷",
}

CONTROL_LABELS = {
    "AC": ClearKey(),
    "⌫": BackspaceKey(),
    "=": EqualsKey(),
    "+/-": SignToggleKey(),
    "±": SignToggleKey(),
    "%": PercentKey(),
}

# keysym de tkinter → etiqueta del teclado en pantalla
KEYSYM_LABELS = {
    "Return": "=",
    "KP_Enter": "=",
    "BackSpace": "⌫",
    "Escape": "AC",
}

CHAR_LABELS = {
    "+": "+",
    "-": "−",
    "*": "×",
    "x": "×",
    "X": "×",
    "/": "÷",
    "=": "=",
    "%": "%",
    ".": ".",
}


def parse_key(label: str) -> Key:
    """Convierte la etiqueta de un botón en un token.

    Raises:
        ValueError: la etiqueta no corresponde a ninguna tecla del motor.
    """
    if len(label) == 1 and label.isdigit() and label.isascii():
        return DigitKey(label)
    if label == ".":
        return DecimalPointKey()
    if label in OPERATOR_LABELS:
        return OperatorKey(OPERATOR_LABELS[label])
    if label in CONTROL_LABELS:
        return CONTROL_LABELS[label]
    raise ValueError(f"Tecla desconocida: {label!r}")


def label_for_keyboard(char: str, keysym: str = "") -> str | None:
    if keysym in KEYSYM_LABELS:
        return KEYSYM_LABELS[keysym]
    if len(char) == 1 and char.isdigit() and char.isascii():
        return char
    return CHAR_LABELS.get(char)
