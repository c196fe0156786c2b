"""Operaciones aritméticas y funciones científicas de la calculadora.

Ninguna función de este módulo lanza excepciones por valores numéricos:
los casos mal definidos (x/0, ln(-1), 0^-1...) devuelven NaN o ±∞ con
las reglas de la aritmética IEEE (las mismas de Math.pow y % en JavaScript).
"""

import math


def divide(left: float, right: float) -> float:
    if right == 0:
        if left == 0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)
    return left / right


def power(base: float, exponent: float) -> float:
    if math.isnan(exponent):
        return math.nan
    if abs(base) == 1 and math.isinf(exponent):
        return math.nan
    if base == 0 and exponent < 0:
        if _is_odd_integer(exponent):
            return math.copysign(math.inf, base)
        return math.inf

    try:
        return math.pow(base, exponent)
    except OverflowError:
        if base < 0 and _is_odd_integer(exponent):
            return -math.inf
        return math.inf
    except ValueError:
        # base negativa con exponente fraccionario
        return math.nan


def modulo(left: float, right: float) -> float:
    """Resto truncado: conserva el signo del dividendo."""
    try:
        return math.fmod(left, right)
    except ValueError:
        return math.nan


def factorial(value: float) -> float:
    """Factorial iterativo en coma flotante; NaN fuera de los enteros >= 0."""
    if value < 0 or not float(value).is_integer():
        return math.nan

    result = 1.0
    for i in range(2, int(value) + 1):
        result *= i
        if math.isinf(result):
            break
    return result


def _is_odd_integer(x: float) -> bool:
    return math.isfinite(x) and x.is_integer() and int(x) % 2 == 1


def _sqrt(x: float) -> float:
    if x < 0:
        return math.nan
    return math.sqrt(x)


def _logarithm(fn):
    def wrapped(x):
        if x == 0:
            return -math.inf
        if x < 0:
            return math.nan
        return fn(x)

    return wrapped


class PythonMathProvider:
    """Provee los operadores binarios y las funciones unarias por nombre."""

    BINARY = {
        "+": lambda a, b: a + b,
        "-": lambda a, b: a - b,
        "×": lambda a, b: a * b,
        "÷": divide,
        "^": power,
        "mod": modulo,
    }

    CONSTANTS = {
        "pi": math.pi,
        "e": math.e,
    }

    def __init__(self):
        self._angle_mode = "rad"

    @property
    def angle_mode(self) -> str:
        return self._angle_mode

    @angle_mode.setter
    def angle_mode(self, mode: str):
        if mode not in ("rad", "deg"):
            raise ValueError("El modo debe ser 'rad' o 'deg'")
        self._angle_mode = mode

    def apply(self, left: float, right: float, operator: str) -> float:
        try:
            fn = self.BINARY[operator]
        except KeyError:
            raise ValueError(f"Operador desconocido: {operator}") from None
        return fn(left, right)

    def call(self, name: str, value: float) -> float:
        namespace = self.build_namespace()
        if name not in namespace:
            raise ValueError(f"Función desconocida: {name}")
        return namespace[name](value)

    def build_namespace(self) -> dict:
        mode = self._angle_mode

        def _trig(fn):
            def w(x):
                if mode == "deg":
                    x = x * math.pi / 180
                if not math.isfinite(x):
                    return math.nan
                return fn(x)

            return w

        return {
            "sin": _trig(math.sin),
            "cos": _trig(math.cos),
            "tan": _trig(math.tan),
            "log": _logarithm(math.log10),
            "ln": _logarithm(math.log),
            "sqrt": _sqrt,
            "square": lambda x: x * x,
            "reciprocal": lambda x: divide(1.0, x),
            "factorial": factorial,
            "abs": abs,
        }
