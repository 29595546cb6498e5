"""
Interfaz gráfica de la calculadora de bolsillo.

Usa tkinter. Es una capa fina: cada botón o tecla se pasa a
CalculatorSession y la pantalla solo copia display y previous_line.
"""

import logging
import tkinter as tk
from tkinter import font as tkfont

from calculator_session import CalculatorSession
from key_tokens import label_for_keyboard


logger = logging.getLogger(__name__)


# ═════════════════════════════════════════════════════════════════
#  Aplicación principal
# ═════════════════════════════════════════════════════════════════

class CalculatorApp:
    """Ventana principal de la calculadora."""

    # ── Paleta de colores ────────────────────────────────────────
    C = {
        "bg":         "#1E1E2E",
        "display_bg": "#181825",
        "num":        "#313244",
        "num_fg":     "#CDD6F4",
        "op":         "#F38BA8",
        "op_fg":      "#1E1E2E",
        "func":       "#45475A",
        "func_fg":    "#CDD6F4",
        "special":    "#585B70",
        "special_fg": "#CDD6F4",
        "equals":     "#89B4FA",
        "equals_fg":  "#1E1E2E",
        "expr_fg":    "#BAC2DE",
        "result_fg":  "#A6E3A1",
        "error_fg":   "#F38BA8",
    }

    # ── Definiciones del teclado ─────────────────────────────────
    #  Cada fila es una lista de (texto, tipo_color)
    #  tipo_color: "num", "op", "func", "special", "equals"

    KEYPAD = [
        [("MC", "func"), ("MR", "func"), ("M+", "func"), ("M-", "func")],
        [("AC", "special"), ("CE", "special"), ("⌫", "special"),
         ("÷", "op")],
        [("√", "func"), ("x²", "func"), ("1/x", "func"),
         ("×", "op")],
        [("7", "num"), ("8", "num"), ("9", "num"), ("−", "op")],
        [("4", "num"), ("5", "num"), ("6", "num"), ("+", "op")],
        [("1", "num"), ("2", "num"), ("3", "num"), ("=", "equals")],
        [("+/-", "func"), ("%", "func"), ("0", "num"), (".", "num")],
    ]

    # ────────────────────────────────────────────────────────────

    def __init__(self, root: tk.Tk, session=None, show_history: bool = True):
        self.root = root
        self.root.title("Calculadora")
        self.root.configure(bg=self.C["bg"])
        self.root.resizable(False, False)

        self.session = session if session is not None else CalculatorSession()
        self._show_history = show_history

        self._init_fonts()
        self._create_display()
        self._create_keypad()
        if self._show_history:
            self._create_history_panel()
        self._bind_keyboard()
        self._refresh()

    # ── Fuentes ──────────────────────────────────────────────────

    def _init_fonts(self):
        self._f_expr   = tkfont.Font(family="Consolas", size=14)
        self._f_result = tkfont.Font(family="Consolas", size=26, weight="bold")
        self._f_btn    = tkfont.Font(family="Segoe UI", size=15)
        self._f_small  = tkfont.Font(family="Segoe UI", size=11)

    # ── Pantalla ─────────────────────────────────────────────────

    def _create_display(self):
        frame = tk.Frame(self.root, bg=self.C["display_bg"], padx=12, pady=8)
        frame.pack(fill="x", padx=6, pady=(6, 2))

        self.memory_var = tk.StringVar()
        tk.Label(
            frame, textvariable=self.memory_var, font=self._f_small,
            bg=self.C["display_bg"], fg=self.C["expr_fg"], anchor="w",
        ).pack(fill="x")

        # Línea anterior ("5 +", "5 + 3 =")
        self.previous_var = tk.StringVar()
        tk.Label(
            frame, textvariable=self.previous_var, font=self._f_expr,
            bg=self.C["display_bg"], fg=self.C["expr_fg"], anchor="e",
        ).pack(fill="x", pady=(4, 0))

        self.display_var = tk.StringVar(value="0")
        self.display_label = tk.Label(
            frame, textvariable=self.display_var, font=self._f_result,
            bg=self.C["display_bg"], fg=self.C["result_fg"], anchor="e",
        )
        self.display_label.pack(fill="x", pady=(2, 4))

    # ── Teclado ──────────────────────────────────────────────────

    def _create_keypad(self):
        frame = tk.Frame(self.root, bg=self.C["bg"])
        frame.pack(fill="both", expand=True, padx=6, pady=(2, 6))

        max_cols = max(len(row) for row in self.KEYPAD)
        for c in range(max_cols):
            frame.columnconfigure(c, weight=1, uniform="key")

        for r, row_def in enumerate(self.KEYPAD):
            spans = self._compute_spans(len(row_def), max_cols)
            col_pos = 0
            for idx, (text, kind) in enumerate(row_def):
                btn = tk.Button(
                    frame, text=text, font=self._f_btn,
                    bg=self.C[kind], fg=self.C[f"{kind}_fg"],
                    activebackground=self.C["special"], relief="flat",
                    command=lambda label=text: self._on_key(label),
                )
                btn.grid(row=r, column=col_pos, columnspan=spans[idx],
                         sticky="nsew", padx=2, pady=2, ipady=8)
                col_pos += spans[idx]

        for r in range(len(self.KEYPAD)):
            frame.rowconfigure(r, weight=1)

    @staticmethod
    def _compute_spans(cols_in_row: int, max_cols: int) -> list[int]:
        """Reparte max_cols entre cols_in_row botones."""
        base, extra = divmod(max_cols, cols_in_row)
        spans = [base] * cols_in_row
        spans[-1] += extra
        return spans

    # ── Historial ────────────────────────────────────────────────

    def _create_history_panel(self):
        frame = tk.Frame(self.root, bg=self.C["bg"])
        frame.pack(fill="x", padx=6, pady=(0, 6))

        self.history_list = tk.Listbox(
            frame, height=4, font=self._f_small,
            bg=self.C["display_bg"], fg=self.C["expr_fg"],
            relief="flat", highlightthickness=0, activestyle="none",
        )
        self.history_list.pack(fill="x")

        tk.Button(
            frame, text="Borrar historial", font=self._f_small,
            bg=self.C["special"], fg=self.C["special_fg"],
            activebackground=self.C["special"], relief="flat",
            command=self._clear_history,
        ).pack(anchor="e", pady=(4, 0))

    # ── Atajos de teclado ────────────────────────────────────────

    def _bind_keyboard(self):
        self.root.bind("<Key>", self._on_keyboard)

    def _on_keyboard(self, event):
        label = label_for_keyboard(event.char, event.keysym)
        if label is None:
            return None
        self._on_key(label)
        return "break"

    # ── Acciones ─────────────────────────────────────────────────

    def _on_key(self, label: str):
        try:
            self.session.press(label)
        except (ValueError, TypeError) as exc:
            logger.warning("tecla rechazada %r: %s", label, exc)
            return
        self._refresh()

    def _clear_history(self):
        self.session.clear_history()
        self._refresh()

    def _refresh(self):
        session = self.session
        self.display_var.set(session.display)
        self.previous_var.set(session.previous_line)
        self.memory_var.set(session.memory_label)

        fg = self.C["error_fg"] if session.state.is_error else self.C["result_fg"]
        self.display_label.config(fg=fg)

        if self._show_history:
            self.history_list.delete(0, tk.END)
            for entry in session.history:
                self.history_list.insert(tk.END, entry)
