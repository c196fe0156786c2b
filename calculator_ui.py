"""
Interfaz gráfica de la calculadora.

Usa tkinter. Toda la lógica vive en CalculatorSession / CalculatorEngine;
esta ventana solo traduce clics y teclas en eventos y vuelve a pintar
el estado después de cada uno.
"""

import tkinter as tk
from tkinter import font as tkfont

from session import CalculatorSession


class CalculatorApp:
    """Ventana principal de la calculadora."""

    # ── Paletas de colores ───────────────────────────────────────
    PALETTES = {
        "dark": {
            "bg":          "#1E1E2E",
            "display_bg":  "#181825",
            "num":         "#313244",
            "num_fg":      "#CDD6F4",
            "op":          "#F38BA8",
            "op_fg":       "#1E1E2E",
            "func":        "#45475A",
            "func_fg":     "#CDD6F4",
            "memory":      "#B4BEFE",
            "memory_fg":   "#1E1E2E",
            "special":     "#585B70",
            "special_fg":  "#CDD6F4",
            "equals":      "#89B4FA",
            "equals_fg":   "#1E1E2E",
            "toggle_on":   "#A6E3A1",
            "toggle_off":  "#585B70",
            "expr_fg":     "#BAC2DE",
            "result_fg":   "#A6E3A1",
        },
        "light": {
            "bg":          "#FFF8E7",
            "display_bg":  "#FFFFFF",
            "num":         "#FFFDF5",
            "num_fg":      "#1F2937",
            "op":          "#FB923C",
            "op_fg":       "#FFFFFF",
            "func":        "#2DD4BF",
            "func_fg":     "#FFFFFF",
            "memory":      "#818CF8",
            "memory_fg":   "#FFFFFF",
            "special":     "#F87171",
            "special_fg":  "#FFFFFF",
            "equals":      "#8B5CF6",
            "equals_fg":   "#FFFFFF",
            "toggle_on":   "#34D399",
            "toggle_off":  "#E5E7EB",
            "expr_fg":     "#6B7280",
            "result_fg":   "#111827",
        },
    }

    # ── Botones científicos ──────────────────────────────────────
    #  (texto, acción)

    SCIENCE_BUTTONS = [
        [("sin", "fn:sin"), ("cos", "fn:cos"), ("tan", "fn:tan"),
         ("log", "fn:log"), ("ln", "fn:ln")],

        [("√", "fn:sqrt"), ("x²", "fn:square"), ("xʸ", "op:^"),
         ("1/x", "fn:reciprocal"), ("n!", "fn:factorial")],

        [("π", "fn:pi"), ("e", "fn:e"), ("|x|", "fn:abs"),
         ("mod", "op:mod")],
    ]

    MEMORY_BUTTONS = ["MC", "MR", "M+", "M-", "MS"]

    # ── Teclado principal ────────────────────────────────────────
    #  Cada fila es una lista de (texto, acción, tipo_color)

    KEYPAD = [
        [("C",  "clear",     "special"), ("⌫", "backspace", "op"),
         ("÷", "op:÷", "op")],

        [("7",  "digit:7",   "num"), ("8", "digit:8", "num"),
         ("9",  "digit:9",   "num"), ("×", "op:×", "op")],

        [("4",  "digit:4",   "num"), ("5", "digit:5", "num"),
         ("6",  "digit:6",   "num"), ("-", "op:-", "op")],

        [("1",  "digit:1",   "num"), ("2", "digit:2", "num"),
         ("3",  "digit:3",   "num"), ("+", "op:+", "op")],

        [("0",  "digit:0",   "num"), (".", "decimal", "num"),
         ("=",  "equals",    "equals")],
    ]

    # ────────────────────────────────────────────────────────────

    def __init__(self, root: tk.Tk, session=None):
        self.root = root
        self.root.title("Calculadora")
        self.root.resizable(False, False)

        self.session = session if session is not None else CalculatorSession()
        self._themed: list[tuple[tk.Widget, str, str | None]] = []

        self._init_fonts()
        self._create_toggle_bar()
        self._create_history_panel()
        self._create_display()
        self._create_science_panel()
        self._create_memory_panel()
        self._create_keypad()
        self._bind_keyboard()

        self.refresh()

    @property
    def palette(self) -> dict:
        return self.PALETTES["dark" if self.session.dark_mode else "light"]

    # ── Fuentes ──────────────────────────────────────────────────

    def _init_fonts(self):
        self._f_prev   = tkfont.Font(family="Consolas", size=13)
        self._f_result = tkfont.Font(family="Consolas", size=26, weight="bold")
        self._f_btn    = tkfont.Font(family="Segoe UI", size=15)
        self._f_func   = tkfont.Font(family="Segoe UI", size=12)
        self._f_small  = tkfont.Font(family="Segoe UI", size=11)

    def _themed_widget(self, widget, bg: str, fg: str | None = None):
        self._themed.append((widget, bg, fg))
        return widget

    def _button(self, parent, text, command, kind, font=None):
        btn = tk.Button(parent, text=text, font=font or self._f_btn,
                        relief="flat", cursor="hand2", command=command)
        return self._themed_widget(btn, kind, f"{kind}_fg")

    # ── Barra superior (tema · sonido · historial · modo) ────────

    def _create_toggle_bar(self):
        frame = self._themed_widget(tk.Frame(self.root), "bg")
        frame.pack(fill="x", padx=6, pady=(6, 2))

        self.theme_btn = self._button(frame, "", self._toggle_theme,
                                      "special", self._f_small)
        self.theme_btn.pack(side="left", padx=(0, 4))

        self.sound_btn = self._button(frame, "", self._toggle_sound,
                                      "special", self._f_small)
        self.sound_btn.pack(side="left", padx=(0, 4))

        self.history_btn = self._button(frame, "Historial", self._toggle_history,
                                        "special", self._f_small)
        self.history_btn.pack(side="left")

        self.memory_label = self._themed_widget(
            tk.Label(frame, font=self._f_small), "bg", "expr_fg")

        self.angle_btn = self._button(frame, "RAD", self._toggle_angle,
                                      "equals", self._f_small)

        self.sci_btn = self._button(frame, "", self._toggle_scientific,
                                    "func", self._f_small)
        self.sci_btn.pack(side="right")

    # ── Panel de historial ───────────────────────────────────────

    def _create_history_panel(self):
        self.history_frame = self._themed_widget(
            tk.Frame(self.root, padx=8, pady=6), "display_bg")

        header = self._themed_widget(tk.Frame(self.history_frame), "display_bg")
        header.pack(fill="x")
        self._themed_widget(
            tk.Label(header, text="Historial", font=self._f_small),
            "display_bg", "expr_fg",
        ).pack(side="left")
        self._button(header, "Borrar", self._clear_history,
                     "special", self._f_small).pack(side="right")

        self.history_list = tk.Listbox(
            self.history_frame, height=6, font=self._f_small,
            activestyle="none", relief="flat", bd=0, highlightthickness=0,
        )
        self._themed_widget(self.history_list, "display_bg", "expr_fg")
        self.history_list.pack(fill="x", pady=(4, 0))

    # ── Pantalla ─────────────────────────────────────────────────

    def _create_display(self):
        self.display_frame = self._themed_widget(
            tk.Frame(self.root, padx=12, pady=8), "display_bg")
        self.display_frame.pack(fill="x", padx=6, pady=2)

        # Valor previo + operador pendiente
        self.prev_label = self._themed_widget(
            tk.Label(self.display_frame, font=self._f_prev, anchor="e"),
            "display_bg", "expr_fg",
        )
        self.prev_label.pack(fill="x")

        self.result_label = self._themed_widget(
            tk.Label(self.display_frame, font=self._f_result, anchor="e"),
            "display_bg", "result_fg",
        )
        self.result_label.pack(fill="x")

    # ── Funciones científicas y memoria ──────────────────────────

    def _create_science_panel(self):
        self.science_frame = self._themed_widget(tk.Frame(self.root), "bg")
        for col in range(5):
            self.science_frame.columnconfigure(col, weight=1, uniform="sci")

        for r, row_def in enumerate(self.SCIENCE_BUTTONS):
            for c, (text, action) in enumerate(row_def):
                btn = self._button(self.science_frame, text,
                                   lambda a=action: self._on_action(a),
                                   "func", self._f_func)
                btn.grid(row=r, column=c, sticky="nsew", padx=2, pady=2,
                         ipady=4)

    def _create_memory_panel(self):
        self.memory_frame = self._themed_widget(tk.Frame(self.root), "bg")
        for col, op in enumerate(self.MEMORY_BUTTONS):
            self.memory_frame.columnconfigure(col, weight=1, uniform="mem")
            btn = self._button(self.memory_frame, op,
                               lambda a=f"mem:{op}": self._on_action(a),
                               "memory", self._f_func)
            btn.grid(row=0, column=col, sticky="nsew", padx=2, pady=2,
                     ipady=4)

    # ── Teclado numérico / operadores ────────────────────────────

    def _create_keypad(self):
        self.keypad_frame = self._themed_widget(tk.Frame(self.root), "bg")
        self.keypad_frame.pack(fill="both", expand=True, padx=6, pady=(2, 6))

        max_cols = max(len(row) for row in self.KEYPAD)
        for c in range(max_cols):
            self.keypad_frame.columnconfigure(c, weight=1, uniform="key")

        for r, row_def in enumerate(self.KEYPAD):
            spans = self._compute_spans(len(row_def), max_cols)
            col_pos = 0
            for idx, (text, action, kind) in enumerate(row_def):
                btn = self._button(self.keypad_frame, text,
                                   lambda a=action: self._on_action(a), kind)
                btn.grid(row=r, column=col_pos, columnspan=spans[idx],
                         sticky="nsew", padx=2, pady=2, ipady=8)
                col_pos += spans[idx]

        for r in range(len(self.KEYPAD)):
            self.keypad_frame.rowconfigure(r, weight=1)

    @staticmethod
    def _compute_spans(cols_in_row: int, max_cols: int) -> list[int]:
        """Reparte max_cols entre cols_in_row botones."""
        base, extra = divmod(max_cols, cols_in_row)
        spans = [base] * cols_in_row
        # Columnas extra al primer botón ('C' y '0')
        spans[0] += extra
        return spans

    # ── Atajos de teclado ────────────────────────────────────────

    def _bind_keyboard(self):
        self.root.bind("<Key>", self._on_keypress)

    def _on_keypress(self, event):
        key = event.char if len(event.char) == 1 and event.char.isprintable() else event.keysym
        if self.session.handle_key(key):
            self.refresh()
            return "break"
        return None

    # ── Acciones ─────────────────────────────────────────────────

    def _on_action(self, action: str):
        kind, _, arg = action.partition(":")
        s = self.session
        if kind == "digit":
            s.press_digit(arg)
        elif kind == "decimal":
            s.press_decimal()
        elif kind == "op":
            s.press_operator(arg)
        elif kind == "fn":
            s.press_function(arg)
        elif kind == "mem":
            s.press_memory(arg)
        elif kind == "equals":
            s.press_equals()
        elif kind == "clear":
            s.press_clear()
        elif kind == "backspace":
            s.press_backspace()
        self.refresh()

    def _toggle_theme(self):
        self.session.toggle_theme()
        self.refresh()

    def _toggle_sound(self):
        self.session.toggle_sound()
        self.refresh()

    def _toggle_history(self):
        self.session.toggle_history()
        self.refresh()

    def _toggle_scientific(self):
        self.session.toggle_scientific()
        self.refresh()

    def _toggle_angle(self):
        self.session.toggle_angle_unit()
        self.refresh()

    def _clear_history(self):
        self.session.clear_history()
        self.refresh()

    # ── Pintado ──────────────────────────────────────────────────

    def refresh(self):
        s = self.session
        engine = s.engine

        self.result_label.config(text=engine.display)
        self.prev_label.config(text=engine.pending_text)

        self.theme_btn.config(text="Claro" if s.dark_mode else "Oscuro")
        self.sound_btn.config(text="Sonido: sí" if s.sound_enabled else "Sonido: no")
        self.sci_btn.config(text="Básico" if s.scientific_mode else "Científico")
        self.angle_btn.config(text="RAD" if engine.angle_mode == "rad" else "DEG")

        if engine.memory != 0:
            self.memory_label.config(text=f"M: {engine.memory_text}")
            self.memory_label.pack(side="right", padx=(4, 0))
        else:
            self.memory_label.pack_forget()

        self._set_visible(self.angle_btn, s.scientific_mode,
                          side="right", padx=(4, 0))
        self._set_visible(self.history_frame, s.show_history,
                          before=self.display_frame, fill="x", padx=6, pady=2)
        self._set_visible(self.science_frame, s.scientific_mode,
                          before=self.keypad_frame, fill="x", padx=6, pady=2)
        self._set_visible(self.memory_frame, s.scientific_mode,
                          before=self.keypad_frame, fill="x", padx=6, pady=2)

        self.history_list.delete(0, "end")
        entries = engine.history_newest_first()
        if not entries:
            self.history_list.insert("end", "Sin cálculos todavía")
        for entry in entries:
            self.history_list.insert("end", f"{entry.expression} = {entry.result}")

        self._apply_palette()

    @staticmethod
    def _set_visible(widget, visible: bool, **pack_options):
        if visible:
            widget.pack(**pack_options)
        else:
            widget.pack_forget()

    def _apply_palette(self):
        p = self.palette
        self.root.configure(bg=p["bg"])
        for widget, bg, fg in self._themed:
            options = {"bg": p[bg]}
            if fg is not None:
                options["fg"] = p[fg]
            if isinstance(widget, tk.Button):
                options["activebackground"] = p["special"]
            widget.config(**options)
