"""
Motor de cálculo de la calculadora de bolsillo.

Este módulo es una máquina de estados pura: cada transición recibe un
CalculatorState inmutable y devuelve uno nuevo. No hace E/S ni guarda
estado propio, así que la interfaz solo tiene que conservar el último
estado devuelto.

Contrato de interfaz:
    - clear_all() -> CalculatorState
    - input_digit / input_dot / choose_operator / equals
    - toggle_sign / percent / backspace
    - press(state, key) -> CalculatorState
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, replace
from decimal import ROUND_HALF_UP, Context, Decimal
from enum import Enum

from key_tokens import (
    BackspaceKey,
    ClearKey,
    DecimalPointKey,
    DigitKey,
    EqualsKey,
    Key,
    OperatorKey,
    PercentKey,
    SignToggleKey,
)


ERROR = "Error"
MAX_DIGITS = 16
SIGNIFICANT_DIGITS = 12

_DIGITS = frozenset("0123456789")
_NUMBER_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


class Operator(str, Enum):
    ADD = "+"
    SUBTRACT = "−"
    MULTIPLY = "×"
    DIVIDE = "÷"

    def __str__(self) -> str:
        return self.value


class Phase(Enum):
    """Qué operando recibe la entrada: depende de si hay operador pendiente."""

    FIRST_OPERAND = "first"
    SECOND_OPERAND = "second"


@dataclass(frozen=True)
class CalculatorState:
    operand_a: str | None = None
    operator: Operator | None = None
    operand_b: str | None = None
    display: str = "0"
    previous_line: str = ""
    is_typing: bool = False
    last_operator: Operator | None = None
    last_operand_b: str | None = None
    phase: Phase = Phase.FIRST_OPERAND

    @property
    def is_error(self) -> bool:
        return self.display == ERROR

    @property
    def active_operand(self) -> str | None:
        if self.phase is Phase.SECOND_OPERAND:
            return self.operand_b
        return self.operand_a


def _error_state() -> CalculatorState:
    return CalculatorState(display=ERROR)


# ── Canonicalización ─────────────────────────────────────────────

def sanitize_number(raw: str) -> str:
    """Convierte un texto numérico en texto canónico para la pantalla.

    Devuelve "0" para "" y "-", y el marcador ERROR si el texto no
    representa un número finito. Nunca lanza excepciones.
    """
    text = raw.strip()
    if text in ("", "-"):
        return "0"

    return format_number(_parse(text))


def format_number(value: float) -> str:
    """Redondea a SIGNIFICANT_DIGITS cifras y lo escribe en notación posicional.

    El texto resultante nunca lleva exponente, así que se puede seguir
    tecleando sobre él como sobre cualquier operando.
    """
    if not math.isfinite(value):
        return ERROR

    if value == 0:
        # También cubre -0.0
        return "0"

    return format(_round_significant(value).normalize(), "f")


def _round_significant(value: float) -> Decimal:
    exact = Decimal(value)
    quantum = Decimal(1).scaleb(exact.adjusted() - SIGNIFICANT_DIGITS + 1)
    context = Context(prec=SIGNIFICANT_DIGITS + 8, rounding=ROUND_HALF_UP)
    return exact.quantize(quantum, context=context)


# ── Aritmética binaria ───────────────────────────────────────────

def _parse(text: str) -> float:
    """Lee un decimal simple; cualquier otra sintaxis da NaN."""
    if not _NUMBER_RE.fullmatch(text):
        return math.nan
    return float(text)


def compute(a: str, operator: Operator, b: str) -> str:
    """Aplica el operador a dos textos numéricos y canonicaliza el resultado.

    Cualquier fallo (operando no finito, división entre cero, desbordamiento)
    se devuelve como ERROR.
    """
    try:
        operator = Operator(operator)
    except ValueError:
        return ERROR

    left = _parse(a)
    right = _parse(b)
    if not (math.isfinite(left) and math.isfinite(right)):
        return ERROR

    if operator is Operator.ADD:
        result = left + right
    elif operator is Operator.SUBTRACT:
        result = left - right
    elif operator is Operator.MULTIPLY:
        result = left * right
    elif operator is Operator.DIVIDE:
        if right == 0:
            return ERROR
        result = left / right
    else:
        return ERROR

    return format_number(result)


# ── Entrada de operandos ─────────────────────────────────────────

def _significant_length(text: str) -> int:
    return len(text.replace("-", "").replace(".", ""))


def _append_digit(current: str, digit: str) -> str:
    if current == "0":
        return digit
    if current == "-0":
        return current if digit == "0" else f"-{digit}"
    return current + digit


def write_operand(state: CalculatorState, text: str) -> CalculatorState:
    """Escribe un valor en el operando activo y lo refleja en pantalla."""
    if state.phase is Phase.SECOND_OPERAND:
        return replace(state, operand_b=text, display=text, is_typing=True)
    return replace(state, operand_a=text, display=text, is_typing=True)


def _entry_source(state: CalculatorState) -> str:
    # Un resultado que no se está tecleando se sustituye, no se amplía
    if state.phase is Phase.FIRST_OPERAND and not state.is_typing:
        return "0"
    return state.active_operand or "0"


def input_digit(state: CalculatorState, digit: str) -> CalculatorState:
    if len(digit) != 1 or digit not in _DIGITS:
        return state

    if state.is_error:
        return CalculatorState(operand_a=digit, display=digit, is_typing=True)

    source = _entry_source(state)
    if _significant_length(source) >= MAX_DIGITS:
        return state

    return write_operand(state, _append_digit(source, digit))


def input_dot(state: CalculatorState) -> CalculatorState:
    if state.is_error:
        return CalculatorState(operand_a="0.", display="0.", is_typing=True)

    source = _entry_source(state)
    if "." in source:
        return state

    return write_operand(state, f"{source}.")


# ── Operadores ───────────────────────────────────────────────────

def choose_operator(state: CalculatorState, operator: Operator) -> CalculatorState:
    if state.is_error:
        return state

    operator = Operator(operator)

    if not state.operand_a:
        return replace(
            state,
            operand_a=state.display,
            operator=operator,
            previous_line=f"{state.display} {operator}",
            is_typing=False,
            phase=Phase.SECOND_OPERAND,
        )

    if state.operator is not None and state.operand_b:
        result = compute(state.operand_a, state.operator, state.operand_b)
        if result == ERROR:
            return _error_state()

        return replace(
            state,
            operand_a=result,
            operand_b=None,
            operator=operator,
            display=result,
            previous_line=f"{result} {operator}",
            is_typing=False,
            last_operator=None,
            last_operand_b=None,
            phase=Phase.SECOND_OPERAND,
        )

    # Operador sobre operando A ya fijado (o sustitución del pendiente)
    return replace(
        state,
        operator=operator,
        display=state.operand_a,
        previous_line=f"{state.operand_a} {operator}",
        is_typing=False,
        phase=Phase.SECOND_OPERAND,
    )


def equals(state: CalculatorState) -> CalculatorState:
    if state.is_error:
        return state

    if state.operator is not None and state.operand_a and state.operand_b:
        result = compute(state.operand_a, state.operator, state.operand_b)
        if result == ERROR:
            return _error_state()

        return replace(
            state,
            operand_a=result,
            operand_b=None,
            operator=None,
            display=result,
            previous_line=(
                f"{state.operand_a} {state.operator} {state.operand_b} ="
            ),
            is_typing=False,
            last_operator=state.operator,
            last_operand_b=state.operand_b,
            phase=Phase.FIRST_OPERAND,
        )

    # "=" repetido: reaplica el último operador y operando B
    if (
        state.operator is None
        and state.operand_a
        and state.last_operator is not None
        and state.last_operand_b
    ):
        result = compute(state.operand_a, state.last_operator, state.last_operand_b)
        if result == ERROR:
            return _error_state()

        return replace(
            state,
            operand_a=result,
            display=result,
            previous_line=(
                f"{state.operand_a} {state.last_operator} {state.last_operand_b} ="
            ),
            is_typing=False,
        )

    return state


# ── Signo, porcentaje y borrado ──────────────────────────────────

def _flip(text: str) -> str:
    if text == "0":
        return text
    return text[1:] if text.startswith("-") else f"-{text}"


def toggle_sign(state: CalculatorState) -> CalculatorState:
    if state.is_error:
        return state

    if state.phase is Phase.SECOND_OPERAND:
        if state.operand_b is None:
            return state
        flipped = _flip(state.operand_b)
        return replace(state, operand_b=flipped, display=flipped)

    flipped = _flip(state.operand_a or state.display)
    return replace(state, operand_a=flipped, display=flipped)


def percent(state: CalculatorState) -> CalculatorState:
    if state.is_error:
        return state

    if state.phase is Phase.SECOND_OPERAND:
        if state.operand_b is None:
            return state
        converted = format_number(_parse(state.operand_b) / 100)
        return replace(state, operand_b=converted, display=converted)

    converted = format_number(_parse(state.operand_a or state.display) / 100)
    return replace(state, operand_a=converted, display=converted)


def backspace(state: CalculatorState) -> CalculatorState:
    if state.is_error:
        return clear_all()

    if state.phase is Phase.SECOND_OPERAND:
        if state.operand_b is None:
            return state
        trimmed = state.operand_b[:-1]
        shown = "0" if trimmed in ("", "-") else trimmed
        return replace(
            state,
            operand_b=shown if trimmed else None,
            display=shown,
            is_typing=trimmed != "",
        )

    trimmed = (state.operand_a or state.display)[:-1]
    shown = "0" if trimmed in ("", "-") else trimmed
    return replace(
        state,
        operand_a=shown,
        display=shown,
        is_typing=trimmed != "",
    )


def clear_all() -> CalculatorState:
    return CalculatorState()


# ── Despacho de teclas ───────────────────────────────────────────

def press(state: CalculatorState, key: Key) -> CalculatorState:
    """Aplica una tecla ya traducida a token."""
    if isinstance(key, DigitKey):
        return input_digit(state, key.digit)
    if isinstance(key, DecimalPointKey):
        return input_dot(state)
    if isinstance(key, OperatorKey):
        return choose_operator(state, Operator(key.operator))
    if isinstance(key, ClearKey):
        return clear_all()
    if isinstance(key, BackspaceKey):
        return backspace(state)
    if isinstance(key, EqualsKey):
        return equals(state)
    if isinstance(key, SignToggleKey):
        return toggle_sign(state)
    if isinstance(key, PercentKey):
        return percent(state)
    raise TypeError(f"Tecla no reconocida: {key!r}")
