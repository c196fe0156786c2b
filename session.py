"""
Estado de presentación de la calculadora.

CalculatorSession envuelve un CalculatorEngine y guarda solo lo que
pertenece a la interfaz: tema, sonido, panel de historial y modo
científico. Los efectos externos (tonos, persistencia del tema,
preferencia del sistema) llegan inyectados y el motor no los ve.
"""

from __future__ import annotations

import logging

from calculator_engine import CalculatorEngine, OperatorKind
from platform_services import NullTonePlayer


log = logging.getLogger(__name__)


# Frecuencia (Hz) y duración (ms) del tono de cada evento.
TONES = {
    "digit":         (200, 100),
    "decimal":       (250, 100),
    "operator":      (300, 100),
    "scientific":    (350, 100),
    "memory":        (300, 100),
    "equals":        (400, 100),
    "clear":         (150, 100),
    "backspace":     (180, 100),
    "theme":         (350, 100),
    "sound_on":      (300, 100),
    "clear_history": (200, 100),
}

KEY_OPERATORS = {
    "+": OperatorKind.ADD,
    "-": OperatorKind.SUBTRACT,
    "*": OperatorKind.MULTIPLY,
    "/": OperatorKind.DIVIDE,
}

# keysym de tkinter → nombre de tecla
KEYSYM_ALIASES = {
    "Return": "Enter",
    "KP_Enter": "Enter",
    "Escape": "Escape",
    "BackSpace": "Backspace",
    "KP_Add": "+",
    "KP_Subtract": "-",
    "KP_Multiply": "*",
    "KP_Divide": "/",
    "KP_Decimal": ".",
}

SCIENTIFIC_OPERATORS = frozenset({OperatorKind.POWER, OperatorKind.MODULO})


class CalculatorSession:
    """Conecta los eventos de la interfaz con el motor y los servicios."""

    def __init__(self, engine=None, tone_player=None, theme_store=None,
                 prefers_dark=None, sound_enabled: bool = True):
        self.engine = engine if engine is not None else CalculatorEngine()
        self._tones = tone_player if tone_player is not None else NullTonePlayer()
        self._theme_store = theme_store

        self.sound_enabled = sound_enabled
        self.show_history = False
        self.scientific_mode = False
        self.dark_mode = self._initial_theme(prefers_dark)

    def _initial_theme(self, prefers_dark) -> bool:
        saved = self._theme_store.load() if self._theme_store is not None else None
        if saved is not None:
            return saved
        if prefers_dark is not None:
            return bool(prefers_dark())
        return False

    # ── Sonido ───────────────────────────────────────────────────

    def _play(self, event: str):
        if not self.sound_enabled:
            return
        frequency, duration = TONES[event]
        self._tones.play(frequency, duration)

    # ── Entrada ──────────────────────────────────────────────────

    def press_digit(self, digit) -> str:
        self._play("digit")
        return self.engine.digit_input(digit)

    def press_decimal(self) -> str:
        self._play("decimal")
        return self.engine.decimal_input()

    def press_operator(self, operator) -> bool:
        operator = OperatorKind(operator)
        if operator in SCIENTIFIC_OPERATORS and not self.scientific_mode:
            return False
        self._play("operator")
        self.engine.operator_input(operator)
        return True

    def press_function(self, function) -> bool:
        if not self.scientific_mode:
            return False
        self._play("scientific")
        self.engine.scientific_function(function)
        return True

    def press_memory(self, op) -> bool:
        if not self.scientific_mode:
            return False
        self._play("memory")
        self.engine.memory_function(op)
        return True

    def press_equals(self) -> str:
        self._play("equals")
        return self.engine.equals()

    def press_clear(self) -> str:
        self._play("clear")
        return self.engine.clear()

    def press_backspace(self) -> str:
        self._play("backspace")
        return self.engine.backspace()

    def clear_history(self):
        self._play("clear_history")
        self.engine.clear_history()

    # ── Teclado ──────────────────────────────────────────────────

    def handle_key(self, key: str) -> bool:
        """Traduce una tecla al evento del motor. False si no se reconoce."""
        key = KEYSYM_ALIASES.get(key, key)

        if len(key) == 1 and "0" <= key <= "9":
            self.press_digit(key)
        elif key == ".":
            self.press_decimal()
        elif key in KEY_OPERATORS:
            self.press_operator(KEY_OPERATORS[key])
        elif key in ("Enter", "="):
            self.press_equals()
        elif key in ("Escape", "c", "C"):
            self.press_clear()
        elif key == "Backspace":
            self.press_backspace()
        else:
            return False
        return True

    # ── Toggles ──────────────────────────────────────────────────

    def toggle_theme(self) -> bool:
        self._play("theme")
        self.dark_mode = not self.dark_mode
        if self._theme_store is not None:
            self._theme_store.save(self.dark_mode)
        log.debug("Tema %s", "oscuro" if self.dark_mode else "claro")
        return self.dark_mode

    def toggle_sound(self) -> bool:
        self.sound_enabled = not self.sound_enabled
        if self.sound_enabled:
            self._play("sound_on")
        return self.sound_enabled

    def toggle_history(self) -> bool:
        self.show_history = not self.show_history
        return self.show_history

    def set_scientific_mode(self, enabled: bool):
        self.scientific_mode = bool(enabled)

    def toggle_scientific(self) -> bool:
        self.set_scientific_mode(not self.scientific_mode)
        return self.scientific_mode

    def toggle_angle_unit(self) -> str:
        mode = "deg" if self.engine.angle_mode == "rad" else "rad"
        self.engine.set_angle_unit(mode)
        return mode
