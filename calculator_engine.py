"""
Motor de estado de la calculadora.

CalculatorEngine recibe eventos discretos (dígito, punto, operador,
función, memoria, igual, borrar, retroceso) y actualiza la pantalla,
la operación pendiente, la memoria y el historial. No toca la interfaz,
el sonido ni el disco: la capa de sesión decide qué hacer con el
resultado.

Contrato de interfaz:
    - cada método de entrada devuelve el nuevo texto de pantalla
    - display, pending, pending_text, memory, history: estado observable
    - angle_mode: propiedad 'rad' | 'deg'
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from enum import Enum

from math_provider import PythonMathProvider
from number_format import format_number, parse_number


class OperatorKind(str, Enum):
    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "×"
    DIVIDE = "÷"
    POWER = "^"
    MODULO = "mod"


class ScientificFunction(str, Enum):
    SIN = "sin"
    COS = "cos"
    TAN = "tan"
    LOG = "log"
    LN = "ln"
    SQRT = "sqrt"
    SQUARE = "square"
    RECIPROCAL = "reciprocal"
    PI = "pi"
    E = "e"
    FACTORIAL = "factorial"
    ABS = "abs"


class MemoryOp(str, Enum):
    CLEAR = "MC"
    RECALL = "MR"
    ADD = "M+"
    SUBTRACT = "M-"
    STORE = "MS"


class AngleUnit(str, Enum):
    RADIAN = "rad"
    DEGREE = "deg"


@dataclass(frozen=True)
class PendingOperation:
    left: float
    operator: OperatorKind


@dataclass(frozen=True)
class HistoryEntry:
    expression: str
    result: str


class CalculatorEngine:
    """Reduce eventos de entrada a un cálculo encadenado de izquierda a derecha."""

    HISTORY_LIMIT = 10
    _DIGITS = frozenset("0123456789")

    def __init__(self, history_limit: int = HISTORY_LIMIT):
        self._provider = PythonMathProvider()
        self._display = "0"
        self._pending: PendingOperation | None = None
        self._awaiting_new_operand = False
        self._memory = 0.0
        self._history: deque[HistoryEntry] = deque(maxlen=history_limit)

    # ── Estado observable ────────────────────────────────────────

    @property
    def display(self) -> str:
        return self._display

    @property
    def pending(self) -> PendingOperation | None:
        return self._pending

    @property
    def pending_text(self) -> str:
        """Texto "valor operador" para la línea secundaria de la pantalla."""
        if self._pending is None:
            return ""
        return f"{format_number(self._pending.left)} {self._pending.operator.value}"

    @property
    def awaiting_new_operand(self) -> bool:
        return self._awaiting_new_operand

    @property
    def memory(self) -> float:
        return self._memory

    @property
    def memory_text(self) -> str:
        return format_number(self._memory)

    @property
    def history(self) -> list[HistoryEntry]:
        return list(self._history)

    def history_newest_first(self) -> list[HistoryEntry]:
        return list(reversed(self._history))

    # ── Propiedad: modo angular ──────────────────────────────────

    @property
    def angle_mode(self) -> AngleUnit:
        return AngleUnit(self._provider.angle_mode)

    @angle_mode.setter
    def angle_mode(self, mode):
        try:
            unit = AngleUnit(mode)
        except ValueError:
            raise ValueError("El modo debe ser 'rad' o 'deg'") from None
        self._provider.angle_mode = unit.value

    def set_angle_unit(self, mode) -> None:
        self.angle_mode = mode

    # ── Entrada numérica ─────────────────────────────────────────

    def digit_input(self, digit) -> str:
        digit = str(digit)
        if digit not in self._DIGITS:
            raise ValueError(f"Dígito inválido: {digit!r}")

        if self._awaiting_new_operand:
            self._display = digit
            self._awaiting_new_operand = False
        elif self._display == "0":
            self._display = digit
        else:
            self._display += digit
        return self._display

    def decimal_input(self) -> str:
        if self._awaiting_new_operand:
            self._display = "0."
            self._awaiting_new_operand = False
        elif "." not in self._display:
            self._display += "."
        return self._display

    def backspace(self) -> str:
        if len(self._display) > 1:
            self._display = self._display[:-1]
        else:
            self._display = "0"
        return self._display

    def clear(self) -> str:
        self._display = "0"
        self._pending = None
        self._awaiting_new_operand = False
        return self._display

    # ── Operadores ───────────────────────────────────────────────

    def operator_input(self, operator) -> str:
        operator = OperatorKind(operator)
        value = parse_number(self._display)

        if self._pending is None:
            self._pending = PendingOperation(value, operator)
        else:
            result = self._apply(self._pending, value)
            self._display = format_number(result)
            self._pending = PendingOperation(result, operator)

        self._awaiting_new_operand = True
        return self._display

    def equals(self) -> str:
        if self._pending is None:
            return self._display

        pending = self._pending
        value = parse_number(self._display)
        result = self._apply(pending, value)
        expression = (
            f"{format_number(pending.left)} {pending.operator.value} "
            f"{format_number(value)}"
        )
        self._record(expression, result)

        self._display = format_number(result)
        self._pending = None
        self._awaiting_new_operand = True
        return self._display

    def _apply(self, pending: PendingOperation, right: float) -> float:
        return self._provider.apply(pending.left, right, pending.operator.value)

    # ── Funciones científicas ────────────────────────────────────

    def scientific_function(self, function) -> str:
        function = ScientificFunction(function)

        if function.value in PythonMathProvider.CONSTANTS:
            self._display = format_number(PythonMathProvider.CONSTANTS[function.value])
        else:
            value = parse_number(self._display)
            result = self._provider.call(function.value, value)
            self._record(f"{function.value}({format_number(value)})", result)
            self._display = format_number(result)

        self._awaiting_new_operand = True
        return self._display

    # ── Memoria ──────────────────────────────────────────────────

    def memory_function(self, op) -> str:
        op = MemoryOp(op)

        if op is MemoryOp.CLEAR:
            self._memory = 0.0
        elif op is MemoryOp.RECALL:
            self._display = format_number(self._memory)
            self._awaiting_new_operand = True
        elif op is MemoryOp.ADD:
            self._memory += parse_number(self._display)
        elif op is MemoryOp.SUBTRACT:
            self._memory -= parse_number(self._display)
        elif op is MemoryOp.STORE:
            self._memory = parse_number(self._display)
        return self._display

    # ── Historial ────────────────────────────────────────────────

    def clear_history(self) -> None:
        self._history.clear()

    def _record(self, expression: str, result: float):
        self._history.append(HistoryEntry(expression, format_number(result)))
