"""
Formato y lectura de los números que muestra la calculadora.

La pantalla siempre contiene texto: un literal en construcción ("12.",
"0.") o la representación de un resultado. Este módulo convierte en
ambas direcciones sin lanzar excepciones; los valores no finitos viajan
como "NaN", "∞" y "-∞".
"""

import math
import re


NAN_TEXT = "NaN"
INF_TEXT = "∞"
NEG_INF_TEXT = "-∞"

# Límites de la notación fija (mismo criterio que Number#toString).
FIXED_MAX_EXPONENT = 21
FIXED_MIN_EXPONENT = -6

_REPR_RE = re.compile(r"^(?P<int>\d+)(?:\.(?P<frac>\d*))?(?:e(?P<exp>[+-]?\d+))?$")
_PREFIX_RE = re.compile(
    r"^\s*(?P<sign>[+-]?)"
    r"(?:(?P<inf>∞|Infinity)|(?P<num>(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))"
)


def format_number(value: float) -> str:
    """Devuelve la cadena más corta que vuelve a leerse como ``value``."""
    value = float(value)
    if math.isnan(value):
        return NAN_TEXT
    if math.isinf(value):
        return INF_TEXT if value > 0 else NEG_INF_TEXT
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    digits, point = _shortest_digits(abs(value))
    return sign + _layout(digits, point)


def parse_number(text: str) -> float:
    """Lee el prefijo numérico más largo de ``text``; NaN si no hay ninguno."""
    match = _PREFIX_RE.match(text)
    if not match:
        return math.nan

    negative = match.group("sign") == "-"
    if match.group("inf"):
        return -math.inf if negative else math.inf

    value = float(match.group("num"))
    return -value if negative else value


# ── Internos ─────────────────────────────────────────────────────

def _shortest_digits(value: float) -> tuple[str, int]:
    """Dígitos significativos y posición del punto: value = 0.<digits> × 10^point."""
    match = _REPR_RE.fullmatch(repr(value))
    int_part = match.group("int")
    digits = int_part + (match.group("frac") or "")
    point = len(int_part) + int(match.group("exp") or 0)

    stripped = digits.lstrip("0")
    point -= len(digits) - len(stripped)
    return stripped.rstrip("0"), point


def _layout(digits: str, point: int) -> str:
    count = len(digits)

    if count <= point <= FIXED_MAX_EXPONENT:
        return digits + "0" * (point - count)
    if 0 < point <= FIXED_MAX_EXPONENT:
        return f"{digits[:point]}.{digits[point:]}"
    if FIXED_MIN_EXPONENT < point <= 0:
        return "0." + "0" * (-point) + digits

    exponent = point - 1
    exp_text = f"e{exponent:+d}"
    if count == 1:
        return digits + exp_text
    return f"{digits[0]}.{digits[1:]}{exp_text}"
