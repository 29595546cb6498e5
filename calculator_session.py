"""
Sesión de la calculadora: capa entre la interfaz y el motor.

Guarda el estado actual del motor, la celda de memoria y el historial
reciente. Las teclas de memoria (MC, MR, M+, M-), las funciones unarias
(√, x², 1/x) y CE viven aquí; el resto se delega al motor.
"""

import logging
import math

from calculator_engine import (
    ERROR,
    CalculatorState,
    clear_all,
    format_number,
    press,
    write_operand,
)
from key_tokens import EqualsKey, parse_key


logger = logging.getLogger(__name__)

HISTORY_LIMIT = 8

MEMORY_KEYS = ("MC", "MR", "M+", "M-")
UNARY_KEYS = ("√", "x²", "1/x")

# Cómo se escribe cada función en el historial: 1/(4) = 0.25
UNARY_HISTORY_PREFIX = {"√": "√", "x²": "x²", "1/x": "1/"}


class CalculatorSession:
    """Mantiene el estado autoritativo y aplica una tecla por evento."""

    def __init__(self, history_limit: int = HISTORY_LIMIT):
        self.state: CalculatorState = clear_all()
        self.memory = 0.0
        self.history: list[str] = []
        self._history_limit = max(1, history_limit)

    # ── Lectura ──────────────────────────────────────────────────

    @property
    def display(self) -> str:
        return self.state.display

    @property
    def previous_line(self) -> str:
        return self.state.previous_line

    @property
    def memory_label(self) -> str:
        return f"M: {format_number(self.memory)}"

    # ── Entrada ──────────────────────────────────────────────────

    def press(self, label: str) -> CalculatorState:
        """Aplica la tecla indicada y devuelve el nuevo estado.

        Raises:
            ValueError: etiqueta desconocida.
        """
        logger.debug("tecla %r sobre %r", label, self.state.display)

        if label in UNARY_KEYS:
            self._apply_unary(label)
        elif label in MEMORY_KEYS:
            self._apply_memory(label)
        elif label == "CE":
            self.state = write_operand(self.state, "0")
        else:
            key = parse_key(label)
            self.state = press(self.state, key)
            if isinstance(key, EqualsKey) and "=" in self.state.previous_line:
                self._push_history(f"{self.state.previous_line} {self.state.display}")

        if self.state.is_error:
            logger.info("fallo aritmético tras %r", label)
        return self.state

    def press_many(self, labels) -> CalculatorState:
        for label in labels:
            self.press(label)
        return self.state

    # ── Historial ────────────────────────────────────────────────

    def _push_history(self, entry: str):
        self.history.insert(0, entry)
        del self.history[self._history_limit:]

    def clear_history(self):
        self.history.clear()

    # ── Memoria ──────────────────────────────────────────────────

    def _apply_memory(self, label: str):
        if label == "MC":
            self.memory = 0.0
            return

        if self.state.is_error:
            return

        if label == "MR":
            recalled = format_number(self.memory)
            if recalled == ERROR:
                # La memoria desbordó: se trata como fallo aritmético
                self.state = CalculatorState(display=ERROR)
            else:
                self.state = write_operand(self.state, recalled)
            return

        value = float(self.state.display)
        if label == "M+":
            self.memory += value
        else:
            self.memory -= value

    # ── Funciones unarias ────────────────────────────────────────

    def _apply_unary(self, label: str):
        if self.state.is_error:
            return

        shown = self.state.display
        base = float(shown)

        if label == "√":
            result = ERROR if base < 0 else format_number(math.sqrt(base))
        elif label == "x²":
            result = format_number(base * base)
        else:
            result = ERROR if base == 0 else format_number(1 / base)

        prefix = UNARY_HISTORY_PREFIX[label]
        self._push_history(f"{prefix}({shown}) = {result}")
        if result == ERROR:
            self.state = CalculatorState(display=ERROR)
        else:
            self.state = write_operand(self.state, result)
