"""Punto de entrada de la calculadora."""

import logging
import tkinter as tk

from calculator_session import CalculatorSession
from calculator_ui import CalculatorApp


WINDOW_GEOMETRY = "360x640"
WINDOW_MIN_SIZE = (340, 600)
SHOW_HISTORY = True
HISTORY_LIMIT = 8
LOG_LEVEL = logging.WARNING


def main():
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    root = tk.Tk()
    root.geometry(WINDOW_GEOMETRY)
    root.minsize(*WINDOW_MIN_SIZE)
    session = CalculatorSession(history_limit=HISTORY_LIMIT)
    CalculatorApp(root, session=session, show_history=SHOW_HISTORY)
    root.mainloop()


if __name__ == "__main__":
    main()
